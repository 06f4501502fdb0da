from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # One team per manager; concurrent promotions collide here.
    manager_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    # Relationships
    manager = relationship("User", foreign_keys=[manager_id])
    users = relationship(
        "User",
        foreign_keys="User.team_id",
        back_populates="team",
        order_by="User.id",
    )

    @property
    def members(self) -> list:
        """Non-deleted users assigned to the team, the manager excluded."""
        return [
            user for user in self.users if user.id != self.manager_id and not user.deleted
        ]
