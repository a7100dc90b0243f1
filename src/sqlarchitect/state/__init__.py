"""In-memory project state."""

from .store import ProjectStore, EntityNotFoundError, initial_project, DEFAULT_DATABASE_ID

__all__ = ["ProjectStore", "EntityNotFoundError", "initial_project", "DEFAULT_DATABASE_ID"]
