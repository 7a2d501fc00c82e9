"""create faculty, subjects and timetables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "faculty",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("short_name", sa.String(length=20), nullable=False),
        sa.Column("department", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_faculty_name", "faculty", ["name"], unique=True)

    op.create_table(
        "subjects",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("year", sa.String(length=20), nullable=False),
        sa.Column("branch", sa.String(length=50), nullable=False),
        sa.Column("is_lab", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("credit_hours", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("name", "year", "branch", name="uq_subjects_name_year_branch"),
    )
    op.create_index("ix_subjects_year", "subjects", ["year"])
    op.create_index("ix_subjects_branch", "subjects", ["branch"])

    op.create_table(
        "timetables",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("year", sa.String(length=20), nullable=False),
        sa.Column("branch", sa.String(length=50), nullable=False),
        sa.Column("semester", sa.String(length=5), nullable=False),
        sa.Column("form_data", sa.JSON(), nullable=False),
        sa.Column("entries", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_timetables_year", "timetables", ["year"])
    op.create_index("ix_timetables_branch", "timetables", ["branch"])
    op.create_index("ix_timetables_semester", "timetables", ["semester"])


def downgrade() -> None:
    op.drop_index("ix_timetables_semester", table_name="timetables")
    op.drop_index("ix_timetables_branch", table_name="timetables")
    op.drop_index("ix_timetables_year", table_name="timetables")
    op.drop_table("timetables")
    op.drop_index("ix_subjects_branch", table_name="subjects")
    op.drop_index("ix_subjects_year", table_name="subjects")
    op.drop_table("subjects")
    op.drop_index("ix_faculty_name", table_name="faculty")
    op.drop_table("faculty")
