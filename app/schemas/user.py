from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: str
    birth_date: date
    gender: str
    roles: list[str]
    team_id: int | None = None

    @field_validator("roles", mode="before")
    @classmethod
    def role_objects_to_names(cls, v):
        """Accept ORM Role objects as well as plain names; sorted for stable output."""
        return sorted(getattr(role, "name", role) for role in v)


class UserCreate(BaseModel):
    # Required fields are checked by the user validation rules so that every
    # missing one is reported at once.
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = Field(None, max_length=320)
    phone_number: str | None = Field(None, max_length=32)
    birth_date: date | None = None
    gender: str | None = Field(None, max_length=1)
    password: str | None = None
    roles: list[str] = Field(default_factory=list)


class UserUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = Field(None, max_length=320)
    phone_number: str | None = Field(None, max_length=32)
    birth_date: date | None = None
    gender: str | None = Field(None, max_length=1)
    roles: list[str] | None = None


class PasswordReset(BaseModel):
    new_password: str
