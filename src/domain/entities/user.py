"""User domain entity and its public profile view."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Optional
from uuid import UUID, uuid4

from domain.computed_attributes import (
    compute_age,
    compute_age_group,
    compute_birth_year,
    compute_days_since_joined,
    compute_is_adult,
    compute_service_usage_period,
)


class Gender(StrEnum):
    """Self-declared gender. N means the user chose not to say."""

    FEMALE = "F"
    MALE = "M"
    NOT_SPECIFIED = "N"


@dataclass
class User:
    """Domain entity for a User.

    ``password_hash`` is only populated when a read explicitly asks for it;
    every other read leaves it as None.
    """

    email: str
    nickname: str
    birth_date: str
    password_hash: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    gender: Gender = Gender.NOT_SPECIFIED
    profile_image: Optional[str] = None
    bio: str = ""
    is_admin: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Normalize identity fields."""
        self.email = self.email.strip().lower()
        self.nickname = self.nickname.strip()
        self.bio = (self.bio or "").strip()
        if not isinstance(self.gender, Gender):
            self.gender = Gender(self.gender)


@dataclass(frozen=True, slots=True)
class ProfileView:
    """Read-only view of a User that is safe to hand to clients."""

    id: UUID
    email: str
    nickname: str
    birth_date: str
    birth_year: Optional[int]
    age: Optional[int]
    days_since_joined: int
    gender: Gender
    profile_image: Optional[str]
    bio: str
    is_admin: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User, today: date) -> "ProfileView":
        """Build the view, computing the derived attributes against ``today``."""
        return cls(
            id=user.id,
            email=user.email,
            nickname=user.nickname,
            birth_date=user.birth_date,
            birth_year=compute_birth_year(user.birth_date),
            age=compute_age(user.birth_date, today),
            days_since_joined=compute_days_since_joined(user.created_at, today),
            gender=user.gender,
            profile_image=user.profile_image,
            bio=user.bio,
            is_admin=user.is_admin,
            created_at=user.created_at,
        )


@dataclass(frozen=True, slots=True)
class ProfileCalculations:
    """Extra derived attributes shown on the maintenance user detail."""

    is_adult: Optional[bool]
    age_group: Optional[str]
    service_usage_period: str

    @classmethod
    def from_user(cls, user: User, today: date) -> "ProfileCalculations":
        return cls(
            is_adult=compute_is_adult(user.birth_date, today),
            age_group=compute_age_group(user.birth_date, today),
            service_usage_period=compute_service_usage_period(user.created_at, today),
        )


@dataclass(frozen=True, slots=True)
class UserDetail:
    """A profile view together with its extra calculations."""

    profile: ProfileView
    calculations: ProfileCalculations
