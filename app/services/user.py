import logging

from sqlalchemy.orm import Session

import app.repositories.role as role_repo
import app.repositories.team as team_repo
import app.repositories.user as user_repo
import app.services.team as team_service
from app.core.security import get_password_hash, password_policy_violation
from app.db.models.role import Role as RoleModel
from app.db.models.user import User as UserModel
from app.db.transaction import transaction
from app.domain.tombstone import generate_tombstone
from app.domain.user_validation import UserCandidate, validate_user
from app.errors import NotFoundError, ValidationFailedError
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _existing_contact_holders(db: Session, candidate: UserCandidate) -> list[UserModel]:
    """Other non-deleted users holding the candidate's email or phone number."""
    holders = []
    if candidate.email:
        holders.append(
            user_repo.get_user_by_email_and_id_not(db, candidate.email, candidate.id)
        )
    if candidate.phone_number:
        holders.append(
            user_repo.get_user_by_phone_number_and_id_not(
                db, candidate.phone_number, candidate.id
            )
        )
    return [user for user in holders if user is not None]


def _resolve_roles(db: Session, names: list[str]) -> list[RoleModel]:
    """Resolve role names to roles.

    Raises:
        NotFoundError: If any name is not a known role
    """
    wanted = list(dict.fromkeys(names))
    roles = role_repo.get_roles_by_names(db, wanted)
    found = {role.name for role in roles}
    missing = [name for name in wanted if name not in found]
    if missing:
        raise NotFoundError(f"Role {', '.join(missing)} not found")
    return roles


def create_user(db: Session, user_data: UserCreate) -> UserModel:
    """
    Create a new user as one all-or-nothing write.

    - Validates required fields and email/phone uniqueness (all violations collected)
    - Validates the password policy when a password is given
    - Resolves the role set
    - Creates the manager's team when the roles include MANAGER

    Raises:
        ValidationFailedError: With every violated rule
        NotFoundError: If a role name does not exist
        ConflictOnCreateError: If a team for this manager was created concurrently
    """
    logger.info("Saving user: %s", user_data.email)
    with transaction(db):
        candidate = UserCandidate(
            id=None,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            email=user_data.email,
            phone_number=user_data.phone_number,
            birth_date=user_data.birth_date,
            gender=user_data.gender,
        )
        violations = validate_user(candidate, _existing_contact_holders(db, candidate))
        if user_data.password is not None:
            password_violation = password_policy_violation(user_data.password)
            if password_violation:
                violations.append(password_violation)
        if violations:
            logger.info("User rejected: %s", violations)
            raise ValidationFailedError(violations)

        roles = _resolve_roles(db, user_data.roles)
        password_hash = (
            get_password_hash(user_data.password) if user_data.password else None
        )

        user = user_repo.create_user(
            db,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            email=user_data.email,
            phone_number=user_data.phone_number,
            birth_date=user_data.birth_date,
            gender=user_data.gender,
            password_hash=password_hash,
            roles=roles,
        )

        if user.is_manager:
            team_service.create_manager_team(db, user)

    return user


def update_user(db: Session, user_id: int, user_data: UserUpdate) -> UserModel:
    """
    Update a user with the same rules as creation, applied to the merged record.

    Fields not included are left unchanged. When the new role set adds
    MANAGER to a user that owns no team, the team is created in the same
    transaction.

    Raises:
        NotFoundError: If the user doesn't exist (or is deleted), or a role name is unknown
        ValidationFailedError: With every violated rule
    """
    logger.info("Updating user: %s", user_id)
    update_fields = user_data.model_dump(exclude_unset=True)
    with transaction(db):
        user = user_repo.get_user_by_id_for_update(db, user_id)
        if not user:
            raise NotFoundError("User not found")

        merged = {
            field: update_fields.get(field, getattr(user, field))
            for field in (
                "first_name",
                "last_name",
                "email",
                "phone_number",
                "birth_date",
                "gender",
            )
        }
        candidate = UserCandidate(id=user.id, **merged)
        violations = validate_user(candidate, _existing_contact_holders(db, candidate))
        if violations:
            logger.info("User %s update rejected: %s", user_id, violations)
            raise ValidationFailedError(violations)

        if update_fields.get("roles") is not None:
            merged["roles"] = _resolve_roles(db, update_fields["roles"])

        user = user_repo.update_user(db, user, **merged)

        if user.is_manager:
            team_service.ensure_manager_team(db, user)

    return user


def get_user(db: Session, user_id: int) -> UserModel:
    """
    Get a user by ID.

    Raises:
        NotFoundError: If user doesn't exist or is deleted
    """
    user = user_repo.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_all_users(
    db: Session, page: int = 1, page_size: int = 100, name: str | None = None
) -> tuple[list[UserModel], int]:
    """
    Get all non-deleted users with pagination.

    Args:
        page: Page number (1-indexed)
        page_size: Number of items per page
        name: Optional name filter (case-insensitive partial match)

    Returns:
        Tuple of (list of users, total count)
    """
    return user_repo.get_all_users_paginated(
        db, page=page, page_size=page_size, name=name
    )


def get_teammates(db: Session, user_id: int) -> list[UserModel]:
    """
    Get every member of the team the given user belongs to.

    Raises:
        NotFoundError: If the user doesn't exist or belongs to no team
    """
    user = get_user(db, user_id)
    if user.team_id is None:
        raise NotFoundError("User does not belong to a team")
    return user_repo.get_users_by_team_id(db, user.team_id)


def get_users_managed_by(db: Session, manager_id: int) -> list[UserModel]:
    """
    Get every member of the team owned by the given manager.

    Raises:
        NotFoundError: If the manager doesn't exist or owns no team
    """
    get_user(db, manager_id)
    team = team_repo.get_team_by_manager_id(db, manager_id)
    if not team:
        raise NotFoundError("Team not found")
    return user_repo.get_users_by_team_id(db, team.id)


def delete_user(db: Session, user_id: int) -> None:
    """
    Soft-delete a user, freeing its email and phone number for reuse.

    Already-deleted and unknown IDs report the same outcome.

    Raises:
        NotFoundError: If no non-deleted user with this ID exists
    """
    logger.info("Deleting user: %s", user_id)
    with transaction(db):
        if user_repo.is_user_deleted(db, user_id) > 0:
            raise NotFoundError("User not found")
        tombstone = generate_tombstone(user_id)
        if user_repo.soft_delete_user_by_id(db, user_id, tombstone) == 0:
            raise NotFoundError("User not found")


def reset_password(db: Session, user_id: int, new_password: str) -> None:
    """
    Replace a user's password.

    Raises:
        NotFoundError: If the user doesn't exist
        ValidationFailedError: If the password does not meet the policy
    """
    logger.info("Resetting password for user: %s", user_id)
    with transaction(db):
        password_violation = password_policy_violation(new_password)
        if password_violation:
            raise ValidationFailedError([password_violation])
        user_repo.update_user_password(db, user_id, get_password_hash(new_password))
