"""Core engines and ambient services for Libris."""
