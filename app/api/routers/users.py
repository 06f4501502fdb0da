from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import PageParams, get_db, get_page_params
from app.services.user import (
    create_user,
    delete_user,
    get_all_users,
    get_teammates,
    get_user,
    get_users_managed_by,
    reset_password,
    update_user,
)
from app.schemas.user import PasswordReset, User, UserCreate, UserUpdate
from app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_new_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Create a new user.

    Every violated rule is reported at once. A user created with the MANAGER
    role gets a team named after them, managed by them.
    """
    user = create_user(db, user_data)
    return User.model_validate(user)


@router.get("", response_model=PaginatedResponse[User])
def get_all_users_paginated(
    paging: PageParams = Depends(get_page_params),
    name: str | None = Query(None, description="Filter users by name (partial match)"),
    db: Session = Depends(get_db),
):
    """Get all non-deleted users with pagination."""
    users, total = get_all_users(
        db, page=paging.page, page_size=paging.page_size, name=name
    )
    return PaginatedResponse(
        items=[User.model_validate(user) for user in users],
        total=total,
        page=paging.page,
        page_size=paging.page_size,
    )


@router.get("/{user_id}", response_model=User)
def get_user_by_id(user_id: int, db: Session = Depends(get_db)):
    user = get_user(db, user_id)
    return User.model_validate(user)


@router.get("/{user_id}/teammates", response_model=list[User])
def get_user_teammates(user_id: int, db: Session = Depends(get_db)):
    """Get every member of the team the user belongs to."""
    return [User.model_validate(user) for user in get_teammates(db, user_id)]


@router.get("/{user_id}/managed-users", response_model=list[User])
def get_managed_users(user_id: int, db: Session = Depends(get_db)):
    """Get every member of the team the user manages."""
    return [User.model_validate(user) for user in get_users_managed_by(db, user_id)]


@router.put("/{user_id}", response_model=User)
def update_user_by_id(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
):
    """
    Update a user by ID.

    Fields not included in the request are not updated.
    """
    user = update_user(db, user_id, user_data)
    return User.model_validate(user)


@router.post("/{user_id}/reset-password", status_code=status.HTTP_204_NO_CONTENT)
def reset_user_password(
    user_id: int,
    reset_data: PasswordReset,
    db: Session = Depends(get_db),
):
    reset_password(db, user_id, reset_data.new_password)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_by_id(user_id: int, db: Session = Depends(get_db)):
    """
    Soft-delete a user by ID.

    The user's email and phone number become available to new users.
    Deleting an already-deleted user reports 404.
    """
    delete_user(db, user_id)
