from datetime import date

from sqlalchemy.orm import Session

from app.db.models.role import Role as RoleModel
from app.db.models.user import User as UserModel
from app.domain.tombstone import tombstone_email, tombstone_value
from app.errors import NotFoundError


def _active_users(db: Session):
    return db.query(UserModel).filter(UserModel.deleted.is_(False))


def get_user_by_id(db: Session, user_id: int) -> UserModel | None:
    """Get a non-deleted user by ID."""
    return _active_users(db).filter(UserModel.id == user_id).first()


def get_user_by_id_for_update(db: Session, user_id: int) -> UserModel | None:
    """Get a non-deleted user by ID, locking the row until the transaction ends."""
    return (
        _active_users(db)
        .filter(UserModel.id == user_id)
        .with_for_update()
        .first()
    )


def get_user_by_email_and_id_not(
    db: Session, email: str, user_id: int | None
) -> UserModel | None:
    """Get another non-deleted user holding ``email``."""
    query = _active_users(db).filter(UserModel.email == email)
    if user_id is not None:
        query = query.filter(UserModel.id != user_id)
    return query.first()


def get_user_by_phone_number_and_id_not(
    db: Session, phone_number: str, user_id: int | None
) -> UserModel | None:
    """Get another non-deleted user holding ``phone_number``."""
    query = _active_users(db).filter(UserModel.phone_number == phone_number)
    if user_id is not None:
        query = query.filter(UserModel.id != user_id)
    return query.first()


def get_users_by_team_id(db: Session, team_id: int) -> list[UserModel]:
    """Get all non-deleted members of a team."""
    return (
        _active_users(db)
        .filter(UserModel.team_id == team_id)
        .order_by(UserModel.id)
        .all()
    )


def get_all_users_paginated(
    db: Session, page: int = 1, page_size: int = 100, name: str | None = None
) -> tuple[list[UserModel], int]:
    """
    Get all non-deleted users with pagination, sorted by name for stable pagination.

    Args:
        page: Page number (1-indexed)
        page_size: Number of items per page
        name: Optional filter on first or last name (case-insensitive partial match)

    Returns:
        Tuple of (list of users, total count)
    """
    query = _active_users(db)
    if name:
        pattern = f"%{name}%"
        query = query.filter(
            UserModel.first_name.ilike(pattern) | UserModel.last_name.ilike(pattern)
        )
    total = query.count()
    skip = (page - 1) * page_size
    users = (
        query.order_by(UserModel.first_name, UserModel.last_name, UserModel.id)
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return users, total


def create_user(
    db: Session,
    first_name: str,
    last_name: str,
    email: str,
    phone_number: str,
    birth_date: date,
    gender: str,
    password_hash: str | None,
    roles: list[RoleModel],
) -> UserModel:
    """Stage a new user and flush it to get its ID. Pure data access - no business logic."""
    db_user = UserModel(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone_number,
        birth_date=birth_date,
        gender=gender,
        password_hash=password_hash,
        deleted=False,
    )
    db_user.roles = list(roles)
    db.add(db_user)
    db.flush()
    return db_user


def save_user(db: Session, user: UserModel) -> UserModel:
    """Flush pending changes of an already-tracked user."""
    db.add(user)
    db.flush()
    return user


def update_user(db: Session, user: UserModel, **kwargs) -> UserModel:
    """Update user fields. Only the fields passed are updated."""
    for field in (
        "first_name",
        "last_name",
        "email",
        "phone_number",
        "birth_date",
        "gender",
    ):
        if field in kwargs:
            setattr(user, field, kwargs[field])
    if "roles" in kwargs:
        user.roles = list(kwargs["roles"])
    return save_user(db, user)


def update_user_password(db: Session, user_id: int, password_hash: str) -> UserModel:
    """Update a user's password."""
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    user.password_hash = password_hash
    return save_user(db, user)


def is_user_deleted(db: Session, user_id: int) -> int:
    """Count rows with this ID already marked deleted (0 or 1)."""
    return (
        db.query(UserModel)
        .filter(UserModel.id == user_id, UserModel.deleted.is_(True))
        .count()
    )


def soft_delete_user_by_id(db: Session, user_id: int, tombstone: str) -> int:
    """
    Mark a user deleted and overwrite its unique contact fields with tombstone values.

    Conditional on the row not being deleted yet, so concurrent deletes of the
    same ID affect at most one row. Returns the number of rows affected.
    """
    return (
        db.query(UserModel)
        .filter(UserModel.id == user_id, UserModel.deleted.is_(False))
        .update(
            {
                UserModel.deleted: True,
                UserModel.email: tombstone_email(tombstone),
                UserModel.phone_number: tombstone_value(tombstone),
            },
            synchronize_session=False,
        )
    )
