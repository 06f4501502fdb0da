"""create quotations and quotation_items tables

Revision ID: 006
Revises: 005
Create Date: 2025-03-06 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "quotations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("seller_id", sa.Integer(), nullable=False),
        sa.Column("date_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "budget_status", sa.String(20), nullable=False, server_default="OPEN"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"]),
        sa.ForeignKeyConstraint(["seller_id"], ["users.id"]),
    )
    op.create_index("ix_quotations_id", "quotations", ["id"], unique=False)
    op.create_index(
        "ix_quotations_customer_id", "quotations", ["customer_id"], unique=False
    )
    op.create_index("ix_quotations_seller_id", "quotations", ["seller_id"], unique=False)

    # Items have no life outside their quotation
    op.create_table(
        "quotation_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("quotation_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["quotation_id"], ["quotations.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
    )
    op.create_index("ix_quotation_items_id", "quotation_items", ["id"], unique=False)
    op.create_index(
        "ix_quotation_items_quotation_id",
        "quotation_items",
        ["quotation_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_quotation_items_quotation_id", table_name="quotation_items")
    op.drop_index("ix_quotation_items_id", table_name="quotation_items")
    op.drop_table("quotation_items")
    op.drop_index("ix_quotations_seller_id", table_name="quotations")
    op.drop_index("ix_quotations_customer_id", table_name="quotations")
    op.drop_index("ix_quotations_id", table_name="quotations")
    op.drop_table("quotations")
