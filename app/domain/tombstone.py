"""Tombstone values for soft deletion.

A tombstone is written over unique-constrained columns (email, phone, tax id)
when a row is soft-deleted, so the original value can be reused by a new row
while the deleted row stays in place for audit.
"""

import hashlib
import hmac

from app.core.config import settings

DELETED_EMAIL_DOMAIN = "deleted.invalid"
DELETED_PREFIX = "deleted-"
# Derived values land in String(32) columns (phone number, tax id)
MAX_TOMBSTONE_LENGTH = 32 - len(DELETED_PREFIX)


def generate_tombstone(
    entity_id: int,
    length: int | None = None,
    secret: str | None = None,
) -> str:
    """Derive a tombstone for ``entity_id``.

    HMAC-SHA256 keyed by the configured secret, hex digest truncated to
    ``length`` characters. The same id always yields the same value.
    """
    length = length if length is not None else settings.tombstone_length
    secret = secret if secret is not None else settings.tombstone_secret
    if length < 1 or length > MAX_TOMBSTONE_LENGTH:
        raise ValueError(
            f"Tombstone length must be between 1 and {MAX_TOMBSTONE_LENGTH}"
        )

    digest = hmac.new(
        secret.encode("utf-8"),
        str(entity_id).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return digest[:length]


def tombstone_email(tombstone: str) -> str:
    return f"{tombstone}@{DELETED_EMAIL_DOMAIN}"


def tombstone_value(tombstone: str) -> str:
    """Placeholder for non-email unique columns (phone number, tax id)."""
    return f"{DELETED_PREFIX}{tombstone}"
