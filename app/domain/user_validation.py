"""Write-gating rules for user records.

Rules run in a fixed order (structural first, then uniqueness) and every
violation is collected; an empty result means the write may proceed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

FIRST_NAME_REQUIRED = "First name is required"
LAST_NAME_REQUIRED = "Last name is required"
EMAIL_REQUIRED = "Email is required"
BIRTH_DATE_REQUIRED = "Birth date is required"
GENDER_REQUIRED = "Gender is required"
PHONE_NUMBER_REQUIRED = "Phone number is required"
EMAIL_TAKEN = "Email is already associated with another account"
PHONE_NUMBER_TAKEN = "Phone number is already associated with another account"

# Unset gender as sent by clients that default a char field to NUL.
GENDER_SENTINEL = "\u0000"


@dataclass(frozen=True, slots=True)
class UserCandidate:
    """The user record a write would produce.

    For updates this is the stored record with the partial patch applied.
    ``id`` is None for records not persisted yet.
    """

    id: int | None
    first_name: str | None
    last_name: str | None
    email: str | None
    phone_number: str | None
    birth_date: date | None
    gender: str | None


def is_empty(value: str | None) -> bool:
    return value is None or not value.strip()


def is_gender_set(gender: str | None) -> bool:
    return not is_empty(gender) and gender != GENDER_SENTINEL


def validate_basic_fields(candidate: UserCandidate) -> list[str]:
    violations: list[str] = []
    if is_empty(candidate.first_name):
        violations.append(FIRST_NAME_REQUIRED)
    if is_empty(candidate.last_name):
        violations.append(LAST_NAME_REQUIRED)
    if is_empty(candidate.email):
        violations.append(EMAIL_REQUIRED)
    if candidate.birth_date is None:
        violations.append(BIRTH_DATE_REQUIRED)
    if not is_gender_set(candidate.gender):
        violations.append(GENDER_REQUIRED)
    if is_empty(candidate.phone_number):
        violations.append(PHONE_NUMBER_REQUIRED)
    return violations


def _taken_by_other(
    existing_users: Iterable[Any], candidate: UserCandidate, field: str
) -> bool:
    value = getattr(candidate, field)
    return any(
        getattr(user, field) == value
        and user.id != candidate.id
        and not getattr(user, "deleted", False)
        for user in existing_users
    )


def validate_unique_fields(
    candidate: UserCandidate, existing_users: Iterable[Any]
) -> list[str]:
    """Check email/phone against other non-deleted users.

    ``existing_users`` is any iterable of objects exposing ``id``, ``email``,
    ``phone_number`` and optionally ``deleted``; rows with the candidate's own
    id are ignored.
    """
    existing_users = list(existing_users)
    violations: list[str] = []
    if not is_empty(candidate.email) and _taken_by_other(
        existing_users, candidate, "email"
    ):
        violations.append(EMAIL_TAKEN)
    if not is_empty(candidate.phone_number) and _taken_by_other(
        existing_users, candidate, "phone_number"
    ):
        violations.append(PHONE_NUMBER_TAKEN)
    return violations


def validate_user(candidate: UserCandidate, existing_users: Iterable[Any]) -> list[str]:
    """Return every violation for ``candidate``, in rule order."""
    return validate_basic_fields(candidate) + validate_unique_fields(
        candidate, existing_users
    )
