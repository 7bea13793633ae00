"""SQLAlchemy implementation of User repository."""

from typing import Any, Mapping
from uuid import UUID

from sqlalchemy import Select, delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer

from core.exceptions import (
    DuplicateEmailError,
    DuplicateNicknameError,
    DuplicateRecordError,
    UserNotFoundError,
    ValidationFailedError,
)
from domain.entities.user import Gender, User
from domain.validation import validate_profile_changes
from infrastructure.database.models import UserModel

MUTABLE_FIELDS = ("nickname", "bio", "gender")


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def is_email_taken(self, email: str) -> bool:
        """Check whether any user already has this email (case-insensitive)."""
        stmt = select(exists().where(UserModel.email == self._normalize_email(email)))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def is_nickname_taken(self, nickname: str, exclude_id: UUID | None = None) -> bool:
        """Check whether another user already has this nickname."""
        condition = UserModel.nickname == nickname.strip()
        if exclude_id is not None:
            condition = condition & (UserModel.id != exclude_id)
        result = await self._session.execute(select(exists().where(condition)))
        return bool(result.scalar())

    async def create(self, user: User) -> User:
        """Insert a new user; the unique constraints decide on conflicts."""
        if not user.password_hash:
            raise ValueError("Refusing to store a user without a password hash")

        model = self._to_model(user)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            duplicate = self._duplicate_from(exc, model)
            if duplicate is None:
                raise
            raise duplicate from exc
        return self._to_entity(model)

    async def get(self, id: UUID, include_password: bool = False) -> User | None:
        """Get a user by ID."""
        stmt = self._select(include_password).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model, include_password) if model else None

    async def get_by_email(self, email: str, include_password: bool = False) -> User | None:
        """Get a user by email."""
        stmt = self._select(include_password).where(
            UserModel.email == self._normalize_email(email)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model, include_password) if model else None

    async def get_by_nickname(self, nickname: str) -> User | None:
        """Get a user by nickname."""
        stmt = self._select().where(UserModel.nickname == nickname.strip())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update(self, id: UUID, changes: Mapping[str, Any]) -> User:
        """Apply changes to the mutable profile fields; other keys are ignored."""
        fields = {key: changes[key] for key in MUTABLE_FIELDS if key in changes}
        violations = validate_profile_changes(fields)
        if violations:
            raise ValidationFailedError(violations)

        stmt = self._select().where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise UserNotFoundError(str(id))

        if "nickname" in fields:
            model.nickname = fields["nickname"].strip()
        if "bio" in fields:
            model.bio = (fields["bio"] or "").strip()
        if fields.get("gender"):
            model.gender = Gender(fields["gender"]).value

        try:
            await self._session.flush()
        except IntegrityError as exc:
            duplicate = self._duplicate_from(exc, model)
            if duplicate is None:
                raise
            raise duplicate from exc
        return self._to_entity(model)

    async def list_all(self) -> list[User]:
        """Get every user, newest first."""
        stmt = self._select().order_by(UserModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def delete_all(self) -> int:
        """Delete every user and return how many were removed."""
        result = await self._session.execute(delete(UserModel))
        await self._session.flush()
        return result.rowcount or 0

    @staticmethod
    def _normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def _select(include_password: bool = False) -> Select[tuple[UserModel]]:
        stmt = select(UserModel)
        if not include_password:
            stmt = stmt.options(defer(UserModel.password_hash, raiseload=True))
        return stmt

    @staticmethod
    def _duplicate_from(exc: IntegrityError, model: UserModel) -> DuplicateRecordError | None:
        """Map a unique-constraint failure to the field that caused it.

        PostgreSQL reports the constraint name, SQLite the qualified column.
        """
        message = str(exc.orig).lower()
        if "uq_users_nickname" in message or "users.nickname" in message:
            return DuplicateNicknameError(model.nickname)
        if "uq_users_email" in message or "users.email" in message:
            return DuplicateEmailError(model.email)
        return None

    def _to_entity(self, model: UserModel, include_password: bool = False) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash if include_password else None,
            nickname=model.nickname,
            birth_date=model.birth_date,
            gender=Gender(model.gender),
            profile_image=model.profile_image,
            bio=model.bio or "",
            is_admin=model.is_admin,
            created_at=model.created_at,
        )

    def _to_model(self, entity: User) -> UserModel:
        """Convert domain entity to ORM model."""
        return UserModel(
            id=entity.id,
            email=self._normalize_email(entity.email),
            password_hash=entity.password_hash,
            nickname=entity.nickname.strip(),
            birth_date=entity.birth_date,
            gender=entity.gender.value,
            profile_image=entity.profile_image,
            bio=entity.bio,
            is_admin=entity.is_admin,
            created_at=entity.created_at,
        )
