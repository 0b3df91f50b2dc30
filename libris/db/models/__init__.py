"""Database models for Libris, each with its record schema."""

from libris.db.models.author import Author, AUTHOR_SCHEMA
from libris.db.models.book import Book, BOOKS_SCHEMA
from libris.db.models.role import Role, ROLE_SCHEMA
from libris.db.models.role_entitlement import RoleEntitlement, ROLE_ENTITLEMENT_SCHEMA
from libris.db.models.user import User, USER_SCHEMA
from libris.db.models.user_in_role import UserInRole, USER_IN_ROLE_SCHEMA

__all__ = [
    "Author",
    "Book",
    "Role",
    "RoleEntitlement",
    "User",
    "UserInRole",
    "AUTHOR_SCHEMA",
    "BOOKS_SCHEMA",
    "ROLE_SCHEMA",
    "ROLE_ENTITLEMENT_SCHEMA",
    "USER_SCHEMA",
    "USER_IN_ROLE_SCHEMA",
]
