"""Lookup definition and value tables for field mappings

Revision ID: 20261019_01
Revises: None
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "lookup_definition",
        sa.Column("lookup_name", sa.String(length=255), primary_key=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "lookup_value",
        sa.Column("lookup_value_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "lookup_name",
            sa.String(length=255),
            sa.ForeignKey("lookup_definition.lookup_name", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("code_key", sa.String(length=255), nullable=False),
        sa.Column("decode", sa.String(length=1024), nullable=False),
        sa.UniqueConstraint("lookup_name", "code_key", name="uq_lookup_value_name_code_key"),
    )
    op.create_index("ix_lookup_value_lookup_name", "lookup_value", ["lookup_name"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_lookup_value_lookup_name", table_name="lookup_value")
    op.drop_table("lookup_value")
    op.drop_table("lookup_definition")
