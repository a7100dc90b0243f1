"""Utilities for loading and saving projects from/to JSON."""

import json
from pathlib import Path
from pydantic import ValidationError
from sqlarchitect.model.project import Project


class ProjectImportError(ValueError):
    """Raised when a document cannot be read as a project."""

    pass


def dump_project(project: Project) -> str:
    """Serialize a project to indented JSON with camelCase keys."""
    return project.model_dump_json(indent=2, by_alias=True)


def parse_project(text: str) -> Project:
    """
    Parse a project JSON document.

    Missing fields take their defaults and unknown fields are kept as-is.

    Raises:
        ProjectImportError: If the text is not JSON or not a project document
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectImportError(f"Invalid project file: not valid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ProjectImportError("Invalid project file: expected a JSON object")

    try:
        return Project.model_validate(data)
    except ValidationError as e:
        raise ProjectImportError(f"Invalid project file: {e.error_count()} field error(s)\n{e}") from e


def load_project_from_json(project_path: Path) -> Project:
    """
    Load a Project from a JSON file.

    Args:
        project_path: Path to the JSON file

    Returns:
        Loaded Project instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ProjectImportError: If the file is empty or not a project document
    """
    project_path = Path(project_path)
    if not project_path.exists():
        raise FileNotFoundError(f"Project file not found: {project_path}")

    content = project_path.read_text(encoding="utf-8").strip()
    if not content:
        raise ProjectImportError(f"Invalid project file: {project_path} is empty")

    return parse_project(content)


def save_project_to_json(project: Project, project_path: Path) -> None:
    """
    Save a Project to a JSON file.

    Note:
        Creates parent directories if they don't exist.
    """
    project_path = Path(project_path)
    project_path.parent.mkdir(parents=True, exist_ok=True)
    project_path.write_text(dump_project(project), encoding="utf-8")
