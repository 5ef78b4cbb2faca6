"""create_documents_table

Revision ID: 7c2e9a41d5b3
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "7c2e9a41d5b3"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the documents table holding every portal collection."""
    op.create_table(
        "documents",
        sa.Column("collection", sa.String(length=100), nullable=False),
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column(
            "data",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("collection", "id"),
    )
    op.create_index("idx_documents_collection", "documents", ["collection"], unique=False)

    # Listing queries filter on these document fields.
    if op.get_bind().dialect.name == "postgresql":
        op.execute(
            "CREATE INDEX idx_documents_post_id ON documents "
            "((data->>'postId')) WHERE collection IN ('forumComments', 'postLikes')"
        )
        op.execute(
            "CREATE INDEX idx_documents_created_at ON documents "
            "(collection, (data->>'createdAt'))"
        )


def downgrade() -> None:
    """Drop the documents table."""
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP INDEX IF EXISTS idx_documents_created_at")
        op.execute("DROP INDEX IF EXISTS idx_documents_post_id")
    op.drop_index("idx_documents_collection", table_name="documents")
    op.drop_table("documents")
