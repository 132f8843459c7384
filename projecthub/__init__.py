"""ProjectHub backend: users, projects and image storage."""

__version__ = "0.1.0"
