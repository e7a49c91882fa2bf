"""Create users and vocabulary tables"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("progress", postgresql.JSONB(), nullable=True),
        sa.Column("progress_version", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "vocabulary_words",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("portuguese", sa.String(length=255), nullable=False),
        sa.Column("english", sa.String(length=255), nullable=False),
        sa.Column("part_of_speech", sa.String(length=50), nullable=True),
        sa.Column("gender", sa.String(length=10), nullable=True),
        sa.Column("difficulty", sa.String(length=20), server_default=sa.text("'beginner'"), nullable=True),
        sa.Column("group", sa.String(length=100), nullable=True),
        sa.Column("examples", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=False),
    )
    op.create_index("ix_vocabulary_words_portuguese", "vocabulary_words", ["portuguese"], unique=False)
    op.create_index("ix_vocabulary_words_group", "vocabulary_words", ["group"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_vocabulary_words_group", table_name="vocabulary_words")
    op.drop_index("ix_vocabulary_words_portuguese", table_name="vocabulary_words")
    op.drop_table("vocabulary_words")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
