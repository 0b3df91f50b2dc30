"""Persistence layer for Libris."""
