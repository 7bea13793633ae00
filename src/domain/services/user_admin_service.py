"""Maintenance operations over the whole user collection."""

from datetime import datetime
from typing import Callable, List
from uuid import UUID

import structlog

from core.exceptions import EmailTakenError, NicknameTakenError, UserNotFoundError
from domain.entities.user import ProfileCalculations, ProfileView, UserDetail
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.auth_service import AuthService, RegistrationData, parse_user_id

logger = structlog.get_logger()

SAMPLE_USERS: List[RegistrationData] = [
    RegistrationData(
        email="test@example.com",
        password="password123",
        nickname="테스트유저",
        birth_date="20030913",
        gender="F",
        bio="테스트용 사용자입니다",
    ),
    RegistrationData(
        email="user1@example.com",
        password="password123",
        nickname="사용자1",
        birth_date="19950825",
        gender="M",
    ),
    RegistrationData(
        email="user2@example.com",
        password="password123",
        nickname="사용자2",
        birth_date="20000101",
        gender="F",
    ),
    RegistrationData(
        email="user3@example.com",
        password="password123",
        nickname="사용자3",
        birth_date="19881224",
        gender="N",
    ),
]


class UserAdminService:
    """Seed, list and clear users. Only wired up outside production."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_service: AuthService,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth_service = auth_service
        self._clock = clock

    async def seed_sample_users(self) -> List[ProfileView]:
        """Register the sample accounts, skipping any that already exist."""
        created: List[ProfileView] = []
        for sample in SAMPLE_USERS:
            try:
                created.append(await self._auth_service.register(sample))
            except (EmailTakenError, NicknameTakenError) as exc:
                logger.info("sample_user_skipped", reason=exc.error_code.value)
        return created

    async def list_users(self) -> List[ProfileView]:
        """Get every user with computed attributes, newest first."""
        async with self._uow_factory() as uow:
            users = await uow.users.list_all()
        today = self._clock()
        return [ProfileView.from_user(user, today) for user in users]

    async def get_user_detail(self, user_id: UUID | str) -> UserDetail:
        """Get one user with the profile view and the extra calculations."""
        uid = parse_user_id(user_id)
        async with self._uow_factory() as uow:
            user = await uow.users.get(uid)
        if not user:
            raise UserNotFoundError(str(user_id))
        today = self._clock()
        return UserDetail(
            profile=ProfileView.from_user(user, today),
            calculations=ProfileCalculations.from_user(user, today),
        )

    async def delete_all(self) -> int:
        """Delete every user."""
        async with self._uow_factory() as uow:
            deleted = await uow.users.delete_all()
            await uow.commit()
        logger.warning("users_deleted", deleted_count=deleted)
        return deleted
