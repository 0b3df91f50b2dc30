"""Libris: entitlement-gated CRUD API for authors, books, users and roles."""

__version__ = "0.1.0"
