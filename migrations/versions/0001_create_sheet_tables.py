"""create sheet tables

Revision ID: 0001
Revises:
Create Date: 2025-11-02 10:12:44

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "sheets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("headers", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_sheets_id", "sheets", ["id"])

    op.create_table(
        "sheet_rows",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sheet_id", sa.Integer(), nullable=False),
        sa.Column("cells", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["sheet_id"], ["sheets.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sheet_rows_id", "sheet_rows", ["id"])
    op.create_index("ix_sheet_rows_sheet_id", "sheet_rows", ["sheet_id"])


def downgrade():
    op.drop_index("ix_sheet_rows_sheet_id", table_name="sheet_rows")
    op.drop_index("ix_sheet_rows_id", table_name="sheet_rows")
    op.drop_table("sheet_rows")
    op.drop_index("ix_sheets_id", table_name="sheets")
    op.drop_table("sheets")
