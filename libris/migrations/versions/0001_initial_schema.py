"""Initial schema: authors, books, roles, role_entitlements, users, user_in_roles

Revision ID: 0001
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    # --- authors (no FK deps) ---
    op.create_table(
        "authors",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("nationality", sa.String(100)),
        sa.Column("birth_date", sa.Date()),
        sa.PrimaryKeyConstraint("id", name="pk_authors"),
    )
    op.create_index("ix_authors_name", "authors", ["name"])

    # --- books (FK -> authors) ---
    op.create_table(
        "books",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=True),
        sa.Column("isbn", sa.String(20)),
        sa.Column("price", sa.Numeric(10, 2)),
        sa.Column("published_on", sa.Date()),
        sa.Column("in_stock", sa.Boolean()),
        sa.PrimaryKeyConstraint("id", name="pk_books"),
        sa.ForeignKeyConstraint(["author_id"], ["authors.id"], name="fk_books_author_id_authors"),
    )
    op.create_index("ix_books_title", "books", ["title"])

    # --- roles (no FK deps) ---
    op.create_table(
        "roles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500)),
        sa.PrimaryKeyConstraint("id", name="pk_roles"),
        sa.UniqueConstraint("name", name="uq_roles_name"),
    )

    # --- role_entitlements (FK -> roles) ---
    op.create_table(
        "role_entitlements",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("role_id", sa.Uuid(), nullable=False),
        sa.Column("resource", sa.String(100), nullable=False),
        sa.Column("entitlement", sa.String(6), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_role_entitlements"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], name="fk_role_entitlements_role_id_roles"),
    )
    op.create_index("ix_role_entitlements_role_id", "role_entitlements", ["role_id"])

    # --- users (no FK deps) ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255)),
        sa.Column("is_active", sa.Boolean()),
        sa.Column("created_on", sa.DateTime()),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("user_name", name="uq_users_user_name"),
    )
    op.create_index("ix_users_user_name", "users", ["user_name"])

    # --- user_in_roles (FK -> users, roles) ---
    op.create_table(
        "user_in_roles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_user_in_roles"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_user_in_roles_user_id_users"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], name="fk_user_in_roles_role_id_roles"),
    )
    op.create_index("ix_user_in_roles_user_id", "user_in_roles", ["user_id"])
    op.create_index("ix_user_in_roles_role_id", "user_in_roles", ["role_id"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("user_in_roles")
    op.drop_table("users")
    op.drop_table("role_entitlements")
    op.drop_table("roles")
    op.drop_table("books")
    op.drop_table("authors")
