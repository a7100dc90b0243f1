"""Utility functions for common operations."""

from .project_io import (
    ProjectImportError,
    dump_project,
    parse_project,
    load_project_from_json,
    save_project_to_json,
)

__all__ = [
    "ProjectImportError",
    "dump_project",
    "parse_project",
    "load_project_from_json",
    "save_project_to_json",
]
