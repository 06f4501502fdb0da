from pydantic import BaseModel, ConfigDict


class TeamMember(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str


class Team(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    manager_id: int
    members: list[TeamMember] = []
