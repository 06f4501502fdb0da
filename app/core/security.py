import re

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 8

# (pattern that must match, message when it doesn't), checked in order
PASSWORD_RULES = (
    (r"[A-Z]", "Password must contain at least one uppercase letter"),
    (r"[a-z]", "Password must contain at least one lowercase letter"),
    (r"\d", "Password must contain at least one number"),
    (
        r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?~`]",
        "Password must contain at least one symbol",
    ),
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def password_policy_violation(password: str) -> str | None:
    """
    Return the first password policy rule ``password`` breaks, or None.

    Policy: at least 8 characters, with an uppercase letter, a lowercase
    letter, a number and a symbol.
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    for pattern, message in PASSWORD_RULES:
        if not re.search(pattern, password):
            return message
    return None
