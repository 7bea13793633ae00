"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from fastapi import Depends, Request

from domain.services.auth_service import AuthService
from domain.services.user_admin_service import UserAdminService
from infrastructure.auth.password_hasher import BcryptPasswordHasher
from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_database(request: Request) -> Database:
    """The database handle opened in the application lifespan."""
    return request.app.state.database  # type: ignore[no-any-return]


def get_uow_factory(
    database: Database = Depends(get_database),
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(database.session_factory)

    return factory


@lru_cache
def get_password_hasher() -> BcryptPasswordHasher:
    """Get the process-wide password hasher."""
    return BcryptPasswordHasher()


def get_auth_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork] = Depends(get_uow_factory),
    password_hasher: BcryptPasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    """Get Auth service instance."""
    return AuthService(uow_factory, password_hasher)


def get_user_admin_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork] = Depends(get_uow_factory),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserAdminService:
    """Get User admin service instance."""
    return UserAdminService(uow_factory, auth_service)
