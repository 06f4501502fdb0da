from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.services.team import assign_member, get_all_teams, get_team, remove_member
from app.schemas.team import Team

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=list[Team])
def get_teams(db: Session = Depends(get_db)):
    return [Team.model_validate(team) for team in get_all_teams(db)]


@router.get("/{team_id}", response_model=Team)
def get_team_by_id(team_id: int, db: Session = Depends(get_db)):
    return Team.model_validate(get_team(db, team_id))


@router.put("/{team_id}/members/{user_id}", response_model=Team)
def add_team_member(team_id: int, user_id: int, db: Session = Depends(get_db)):
    """Move a user into the team."""
    return Team.model_validate(assign_member(db, team_id, user_id))


@router.delete("/{team_id}/members/{user_id}", response_model=Team)
def remove_team_member(team_id: int, user_id: int, db: Session = Depends(get_db)):
    """Remove a user from the team. The team's manager cannot be removed."""
    return Team.model_validate(remove_member(db, team_id, user_id))
