"""Team membership: every MANAGER user owns exactly one team."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import app.repositories.team as team_repo
import app.repositories.user as user_repo
from app.db.models.team import Team as TeamModel
from app.db.models.user import User as UserModel
from app.db.transaction import transaction
from app.errors import ConflictOnCreateError, DomainValidationError, NotFoundError

logger = logging.getLogger(__name__)


def create_manager_team(db: Session, manager: UserModel) -> TeamModel:
    """
    Create the team owned by ``manager`` and make it the manager's team.

    Runs inside the caller's transaction. Not idempotent by itself: a second
    call for the same manager hits the unique manager constraint.

    Raises:
        ConflictOnCreateError: If the manager already owns a team
    """
    try:
        team = team_repo.create_team(db, name=manager.full_name, manager_id=manager.id)
    except IntegrityError as exc:
        logger.warning("Team for manager %s already exists", manager.id)
        raise ConflictOnCreateError(
            f"A team for manager {manager.id} was already created"
        ) from exc

    manager.team = team
    user_repo.save_user(db, manager)
    logger.info("Created team %s for manager %s", team.id, manager.id)
    return team


def ensure_manager_team(db: Session, manager: UserModel) -> TeamModel:
    """Return the manager's team, creating it if the manager owns none yet.

    Callers should hold the manager's row lock so the check and the create
    are not interleaved with a concurrent promotion.
    """
    team = team_repo.get_team_by_manager_id(db, manager.id)
    if team is not None:
        return team
    return create_manager_team(db, manager)


def get_all_teams(db: Session) -> list[TeamModel]:
    return team_repo.get_all_teams(db)


def get_team(db: Session, team_id: int) -> TeamModel:
    """
    Get a team by ID.

    Raises:
        NotFoundError: If team doesn't exist
    """
    team = team_repo.get_team_by_id(db, team_id)
    if not team:
        raise NotFoundError("Team not found")
    return team


def assign_member(db: Session, team_id: int, user_id: int) -> TeamModel:
    """
    Move a user into a team.

    Raises:
        NotFoundError: If the team or the user doesn't exist
        DomainValidationError: If the user manages another team
    """
    logger.info("Assigning user %s to team %s", user_id, team_id)
    with transaction(db):
        team = get_team(db, team_id)
        user = user_repo.get_user_by_id_for_update(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        owned = team_repo.get_team_by_manager_id(db, user_id)
        if owned is not None and owned.id != team.id:
            raise DomainValidationError(
                "Cannot move a manager out of the team they manage"
            )
        user.team = team
        user_repo.save_user(db, user)
    db.refresh(team)
    return team


def remove_member(db: Session, team_id: int, user_id: int) -> TeamModel:
    """
    Remove a user from a team.

    Raises:
        NotFoundError: If the team doesn't exist or the user is not one of its members
        DomainValidationError: If the user is the team's manager
    """
    logger.info("Removing user %s from team %s", user_id, team_id)
    with transaction(db):
        team = get_team(db, team_id)
        user = user_repo.get_user_by_id_for_update(db, user_id)
        if not user or user.team_id != team.id:
            raise NotFoundError("User is not a member of this team")
        if team.manager_id == user.id:
            raise DomainValidationError("Cannot remove the manager from their own team")
        user.team = None
        user_repo.save_user(db, user)
    db.refresh(team)
    return team
