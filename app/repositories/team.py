from sqlalchemy.orm import Session

from app.db.models.team import Team as TeamModel


def get_team_by_id(db: Session, team_id: int) -> TeamModel | None:
    """Get a team by ID."""
    return db.query(TeamModel).filter(TeamModel.id == team_id).first()


def get_team_by_manager_id(db: Session, manager_id: int) -> TeamModel | None:
    """Get the team owned by a manager."""
    return db.query(TeamModel).filter(TeamModel.manager_id == manager_id).first()


def get_all_teams(db: Session) -> list[TeamModel]:
    """Get all teams."""
    return db.query(TeamModel).order_by(TeamModel.name, TeamModel.id).all()


def create_team(db: Session, name: str, manager_id: int) -> TeamModel:
    """Stage a new team and flush it. Pure data access - no business logic.

    Raises:
        IntegrityError: If the manager already owns a team
    """
    db_team = TeamModel(name=name, manager_id=manager_id)
    db.add(db_team)
    db.flush()
    return db_team
