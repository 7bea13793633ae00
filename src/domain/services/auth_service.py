"""Auth service layer: registration, login and profile management."""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional
from uuid import UUID

import structlog

from core.exceptions import (
    DuplicateEmailError,
    DuplicateNicknameError,
    EmailTakenError,
    InvalidCredentialsError,
    MissingFieldsError,
    NicknameTakenError,
    UserNotFoundError,
    ValidationFailedError,
)
from domain.entities.user import Gender, ProfileView, User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.validation import validate_profile_changes, validate_registration
from infrastructure.auth.provider import IPasswordHasher

logger = structlog.get_logger()


@dataclass
class RegistrationData:
    """Raw registration input as sent by the client."""

    email: Optional[str] = None
    password: Optional[str] = None
    nickname: Optional[str] = None
    birth_date: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None


# Passwords are taken verbatim, so only an empty one counts as missing.
_VERBATIM_FIELDS = frozenset({"password"})


def _is_missing(name: str, value: Optional[str]) -> bool:
    if not value:
        return True
    return name not in _VERBATIM_FIELDS and not value.strip()


def _require_fields(values: Mapping[str, Optional[str]]) -> None:
    missing = [name for name, value in values.items() if _is_missing(name, value)]
    if missing:
        raise MissingFieldsError(required=list(values), missing=missing)


def parse_user_id(user_id: UUID | str) -> UUID:
    """Parse a path id; anything that is not a UUID cannot name a user."""
    if isinstance(user_id, UUID):
        return user_id
    try:
        return UUID(user_id)
    except (ValueError, TypeError, AttributeError):
        raise UserNotFoundError(str(user_id)) from None


class AuthService:
    """Service layer for account registration, login and profiles."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        password_hasher: IPasswordHasher,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = password_hasher
        self._clock = clock

    async def register(self, data: RegistrationData) -> ProfileView:
        """Create an account and return its profile view.

        Email conflicts are reported before nickname conflicts. The storage
        unique constraints still decide when two registrations race past the
        pre-check.
        """
        _require_fields(
            {
                "email": data.email,
                "password": data.password,
                "nickname": data.nickname,
                "birthDate": data.birth_date,
            }
        )

        now = self._clock()
        violations = validate_registration(
            email=data.email,
            password=data.password,
            nickname=data.nickname,
            birth_date=data.birth_date,
            gender=data.gender,
            bio=data.bio,
            profile_image=data.profile_image,
            today=now.date(),
        )
        if violations:
            raise ValidationFailedError(violations)

        email = data.email.strip().lower()  # type: ignore[union-attr]
        nickname = data.nickname.strip()  # type: ignore[union-attr]

        async with self._uow_factory() as uow:
            if await uow.users.is_email_taken(email):
                raise EmailTakenError(email)
            if await uow.users.is_nickname_taken(nickname):
                raise NicknameTakenError(nickname)

        # Hash outside any transaction so no connection is held while bcrypt runs.
        password_hash = await asyncio.to_thread(self._hasher.hash, data.password)

        user = User(
            email=email,
            password_hash=password_hash,
            nickname=nickname,
            birth_date=data.birth_date.strip(),  # type: ignore[union-attr]
            gender=Gender(data.gender or Gender.NOT_SPECIFIED),
            profile_image=data.profile_image or None,
            bio=data.bio or "",
            created_at=now,
        )

        async with self._uow_factory() as uow:
            try:
                created = await uow.users.create(user)
                await uow.commit()
            except DuplicateEmailError:
                logger.warning("registration_race_detected", field="email")
                raise EmailTakenError(email) from None
            except DuplicateNicknameError:
                logger.warning("registration_race_detected", field="nickname")
                raise NicknameTakenError(nickname) from None

        logger.info("user_registered", user_id=str(created.id))
        return ProfileView.from_user(created, now)

    async def login(self, email: Optional[str], password: Optional[str]) -> ProfileView:
        """Check credentials and return the profile view.

        Unknown emails and wrong passwords fail identically.
        """
        _require_fields({"email": email, "password": password})

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email, include_password=True)  # type: ignore[arg-type]

        if user is None or not user.password_hash:
            await asyncio.to_thread(self._hasher.dummy_verify, password)
            logger.info("login_failed")
            raise InvalidCredentialsError()

        matched = await asyncio.to_thread(self._hasher.verify, password, user.password_hash)
        if not matched:
            logger.info("login_failed", user_id=str(user.id))
            raise InvalidCredentialsError()

        logger.info("login_succeeded", user_id=str(user.id))
        return ProfileView.from_user(user, self._clock())

    async def get_profile(self, user_id: UUID | str) -> ProfileView:
        """Get a profile by id."""
        uid = parse_user_id(user_id)
        async with self._uow_factory() as uow:
            user = await uow.users.get(uid)
        if not user:
            raise UserNotFoundError(str(user_id))
        return ProfileView.from_user(user, self._clock())

    async def update_profile(
        self, user_id: UUID | str, changes: Mapping[str, Any]
    ) -> ProfileView:
        """Update nickname, bio and/or gender.

        Any other key in ``changes`` is ignored. Empty nickname or gender
        values leave the field untouched; an empty bio clears it.
        """
        uid = parse_user_id(user_id)

        updates: dict[str, Any] = {}
        if changes.get("nickname"):
            updates["nickname"] = changes["nickname"].strip()
        if changes.get("bio") is not None:
            updates["bio"] = changes["bio"]
        if changes.get("gender"):
            updates["gender"] = changes["gender"]

        violations = validate_profile_changes(updates)
        if violations:
            raise ValidationFailedError(violations)

        async with self._uow_factory() as uow:
            user = await uow.users.get(uid)
            if not user:
                raise UserNotFoundError(str(user_id))

            if updates.get("nickname") == user.nickname:
                del updates["nickname"]
            if "nickname" in updates and await uow.users.is_nickname_taken(
                updates["nickname"], exclude_id=uid
            ):
                raise NicknameTakenError(updates["nickname"])

            if not updates:
                return ProfileView.from_user(user, self._clock())

            try:
                updated = await uow.users.update(uid, updates)
                await uow.commit()
            except DuplicateNicknameError:
                raise NicknameTakenError(updates["nickname"]) from None

        logger.info("profile_updated", user_id=str(uid), fields=sorted(updates))
        return ProfileView.from_user(updated, self._clock())

    async def is_email_available(self, email: Optional[str]) -> bool:
        """Check whether an email can still be registered."""
        _require_fields({"email": email})
        async with self._uow_factory() as uow:
            return not await uow.users.is_email_taken(email)  # type: ignore[arg-type]

    async def is_nickname_available(self, nickname: Optional[str]) -> bool:
        """Check whether a nickname can still be registered."""
        _require_fields({"nickname": nickname})
        async with self._uow_factory() as uow:
            return not await uow.users.is_nickname_taken(nickname)  # type: ignore[arg-type]
