from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.db.models.role import user_roles

MANAGER_ROLE = "MANAGER"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    email = Column(String(320), unique=True, nullable=False, index=True)
    phone_number = Column(String(32), unique=True, nullable=False, index=True)
    birth_date = Column(Date, nullable=False)
    gender = Column(String(1), nullable=False)
    password_hash = Column(String, nullable=True)
    team_id = Column(
        Integer,
        ForeignKey("teams.id", use_alter=True, name="fk_users_team_id"),
        nullable=True,
        index=True,
    )
    deleted = Column(Boolean, nullable=False, default=False)

    # Relationships
    roles = relationship("Role", secondary=user_roles, backref="users", lazy="selectin")
    team = relationship(
        "Team",
        foreign_keys=[team_id],
        back_populates="users",
        post_update=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def role_names(self) -> set[str]:
        return {role.name for role in self.roles}

    @property
    def is_manager(self) -> bool:
        return MANAGER_ROLE in self.role_names
