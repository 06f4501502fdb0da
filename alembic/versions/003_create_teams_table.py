"""create teams table and link users to teams

Revision ID: 003
Revises: 002
Create Date: 2025-03-04 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # manager_id is unique: one team per manager, also under concurrent promotions
    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("manager_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["manager_id"], ["users.id"]),
        sa.UniqueConstraint("manager_id", name="uq_teams_manager_id"),
    )
    op.create_index("ix_teams_id", "teams", ["id"], unique=False)

    # Detect database type for constraint creation
    bind = op.get_bind()
    dialect_name = bind.dialect.name

    if dialect_name == "sqlite":
        # SQLite doesn't support ALTER TABLE ADD CONSTRAINT, use batch mode
        with op.batch_alter_table("users", schema=None) as batch_op:
            batch_op.create_foreign_key(
                "fk_users_team_id", "teams", ["team_id"], ["id"]
            )
    else:
        op.create_foreign_key(
            "fk_users_team_id", "users", "teams", ["team_id"], ["id"]
        )


def downgrade() -> None:
    bind = op.get_bind()
    dialect_name = bind.dialect.name

    if dialect_name == "sqlite":
        with op.batch_alter_table("users", schema=None) as batch_op:
            batch_op.drop_constraint("fk_users_team_id", type_="foreignkey")
    else:
        op.drop_constraint("fk_users_team_id", "users", type_="foreignkey")

    op.drop_index("ix_teams_id", table_name="teams")
    op.drop_table("teams")
