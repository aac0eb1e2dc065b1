"""Create genres, books and book_genres tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Initial catalog schema. Genres are unique by lower(name); books
       reference genres through the book_genres association table.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "genres",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "name",
            sa.String(100),
            nullable=False,
            comment="Display name; unique ignoring case",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Case-insensitive uniqueness: "Fantasy" and "fantasy" cannot coexist
    op.create_index(
        "uq_genres_name_lower",
        "genres",
        [sa.text("lower(name)")],
        unique=True,
    )

    op.create_table(
        "books",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "book_genres",
        sa.Column("book_id", sa.Uuid(), nullable=False),
        sa.Column("genre_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="CASCADE"),
        # No cascade: a referenced genre cannot be deleted underneath a book
        sa.ForeignKeyConstraint(["genre_id"], ["genres.id"]),
        sa.PrimaryKeyConstraint("book_id", "genre_id"),
    )
    op.create_index("ix_book_genres_genre_id", "book_genres", ["genre_id"])


def downgrade() -> None:
    op.drop_index("ix_book_genres_genre_id", table_name="book_genres")
    op.drop_table("book_genres")
    op.drop_table("books")
    op.drop_index("uq_genres_name_lower", table_name="genres")
    op.drop_table("genres")
