"""Field-level validation rules for user accounts.

Every validator is a pure function: it takes the raw value a client sent and
returns ``None`` when the value is acceptable, or a :class:`Violation`
describing what is wrong. Validators never normalize their input in place and
never look at storage. The ``validate_*`` aggregators collect every violation
on an input instead of stopping at the first one.
"""

import re
from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from domain.entities.user import Gender

EMAIL_MAX_LENGTH = 254
NICKNAME_MIN_LENGTH = 2
NICKNAME_MAX_LENGTH = 20
BIO_MAX_LENGTH = 100
PROFILE_IMAGE_MAX_LENGTH = 500
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt ignores everything past this

EMAIL_PATTERN = re.compile(
    r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$",
    re.ASCII,
)
NICKNAME_PATTERN = re.compile(r"^[가-힣a-zA-Z0-9_-]+$")
BIRTH_DATE_PATTERN = re.compile(
    r"^(?:19|20)\d{2}(?:0[1-9]|1[0-2])(?:0[1-9]|[12]\d|3[01])$",
    re.ASCII,
)
IMAGE_URL_PATTERN = re.compile(
    r"^https?://.+\.(?:jpg|jpeg|png|gif|webp)$",
    re.IGNORECASE,
)


class ViolationCode(StrEnum):
    """Identifier of the constraint a value broke."""

    REQUIRED = "REQUIRED"
    INVALID_FORMAT = "INVALID_FORMAT"
    TOO_SHORT = "TOO_SHORT"
    TOO_LONG = "TOO_LONG"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"
    FUTURE_YEAR = "FUTURE_YEAR"
    FUTURE_DATE = "FUTURE_DATE"
    IMPOSSIBLE_DATE = "IMPOSSIBLE_DATE"
    INVALID_IMAGE_URL = "INVALID_IMAGE_URL"
    INVALID_CHOICE = "INVALID_CHOICE"


@dataclass(frozen=True, slots=True)
class Violation:
    """A single failed constraint on a single field."""

    field: str
    code: ViolationCode
    message: str


def _required(field: str, raw: Optional[str]) -> Optional[Violation]:
    if raw is None or not str(raw).strip():
        return Violation(field, ViolationCode.REQUIRED, f"{field} is required")
    return None


def validate_email(raw: Optional[str]) -> Optional[Violation]:
    """Check the address shape. Lowercasing is left to the caller."""
    missing = _required("email", raw)
    if missing:
        return missing
    value = raw.strip()  # type: ignore[union-attr]
    if len(value) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.fullmatch(value):
        return Violation(
            "email",
            ViolationCode.INVALID_FORMAT,
            "Enter a valid email address",
        )
    return None


def validate_nickname(raw: Optional[str]) -> Optional[Violation]:
    """2-20 characters of Hangul syllables, ASCII letters, digits, _ or -."""
    if raw is None:
        return Violation("nickname", ViolationCode.REQUIRED, "nickname is required")
    value = raw.strip()
    if len(value) < NICKNAME_MIN_LENGTH:
        return Violation(
            "nickname",
            ViolationCode.TOO_SHORT,
            f"Nickname must be at least {NICKNAME_MIN_LENGTH} characters",
        )
    if len(value) > NICKNAME_MAX_LENGTH:
        return Violation(
            "nickname",
            ViolationCode.TOO_LONG,
            f"Nickname must be at most {NICKNAME_MAX_LENGTH} characters",
        )
    if not NICKNAME_PATTERN.fullmatch(value):
        return Violation(
            "nickname",
            ViolationCode.INVALID_CHARACTERS,
            "Nickname may only contain Hangul, letters, digits, '_' and '-'",
        )
    return None


def validate_birth_date(
    raw: Optional[str], today: Optional[date] = None
) -> Optional[Violation]:
    """Check a YYYYMMDD birth date.

    The pattern only bounds each part loosely (day 31 is allowed in every
    month), so the year/month/day triple is checked against the calendar as
    well. Dates after ``today`` are rejected.
    """
    missing = _required("birthDate", raw)
    if missing:
        return missing
    value = raw.strip()  # type: ignore[union-attr]
    if not BIRTH_DATE_PATTERN.fullmatch(value):
        return Violation(
            "birthDate",
            ViolationCode.INVALID_FORMAT,
            "Birth date must be 8 digits, e.g. 20030913",
        )

    year, month, day = int(value[:4]), int(value[4:6]), int(value[6:8])
    today = today or date.today()
    current_year = today.year
    if year > current_year:
        return Violation(
            "birthDate",
            ViolationCode.FUTURE_YEAR,
            f"Birth year cannot be later than {current_year}",
        )
    if day > monthrange(year, month)[1]:
        return Violation(
            "birthDate",
            ViolationCode.IMPOSSIBLE_DATE,
            "Birth date is not a real calendar date",
        )
    if date(year, month, day) > today:
        return Violation(
            "birthDate",
            ViolationCode.FUTURE_DATE,
            "Birth date cannot be in the future",
        )
    return None


def validate_gender(raw: Optional[str]) -> Optional[Violation]:
    if raw is None or raw == "":
        return None
    if raw not in {gender.value for gender in Gender}:
        return Violation(
            "gender",
            ViolationCode.INVALID_CHOICE,
            "Gender must be one of F, M or N",
        )
    return None


def validate_profile_image(raw: Optional[str]) -> Optional[Violation]:
    """Absent is fine; otherwise an absolute http(s) URL to an image file."""
    if not raw:
        return None
    if (
        len(raw) > PROFILE_IMAGE_MAX_LENGTH
        or not IMAGE_URL_PATTERN.fullmatch(raw)
        or not urlsplit(raw).netloc
    ):
        return Violation(
            "profileImage",
            ViolationCode.INVALID_IMAGE_URL,
            f"Profile image must be an http(s) URL of at most {PROFILE_IMAGE_MAX_LENGTH} "
            "characters ending in jpg, jpeg, png, gif or webp",
        )
    return None


def validate_bio(raw: Optional[str]) -> Optional[Violation]:
    if raw is None:
        return None
    if len(raw.strip()) > BIO_MAX_LENGTH:
        return Violation(
            "bio",
            ViolationCode.TOO_LONG,
            f"Bio must be at most {BIO_MAX_LENGTH} characters",
        )
    return None


def validate_password(raw: Optional[str]) -> Optional[Violation]:
    if not raw:
        return Violation("password", ViolationCode.REQUIRED, "password is required")
    if len(raw) < PASSWORD_MIN_LENGTH:
        return Violation(
            "password",
            ViolationCode.TOO_SHORT,
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
        )
    if len(raw.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return Violation(
            "password",
            ViolationCode.TOO_LONG,
            f"Password must be at most {PASSWORD_MAX_BYTES} bytes",
        )
    return None


def validate_registration(
    *,
    email: Optional[str],
    password: Optional[str],
    nickname: Optional[str],
    birth_date: Optional[str],
    gender: Optional[str] = None,
    bio: Optional[str] = None,
    profile_image: Optional[str] = None,
    today: Optional[date] = None,
) -> list[Violation]:
    """Run every registration rule and return all violations found."""
    checks = [
        validate_email(email),
        validate_password(password),
        validate_nickname(nickname),
        validate_birth_date(birth_date, today),
        validate_gender(gender),
        validate_profile_image(profile_image),
        validate_bio(bio),
    ]
    return [violation for violation in checks if violation is not None]


def validate_profile_changes(changes: Mapping[str, Any]) -> list[Violation]:
    """Validate the mutable profile fields present in ``changes``."""
    checks: list[Optional[Violation]] = []
    if "nickname" in changes:
        checks.append(validate_nickname(changes["nickname"]))
    if "bio" in changes:
        checks.append(validate_bio(changes["bio"]))
    if "gender" in changes:
        checks.append(validate_gender(changes["gender"]))
    return [violation for violation in checks if violation is not None]
