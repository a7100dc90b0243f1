"""Schema model: entities, the Project aggregate and editor vocabularies."""

from .entities import (
    SQLDialect,
    Position,
    Column,
    Table,
    Relationship,
    Index,
    View,
    Parameter,
    StoredProcedure,
    Trigger,
    Database,
    User,
    new_id,
)
from .project import Project
from .constants import DATA_TYPES, ENGINES, CHARSETS, COLLATIONS, PRIVILEGES, data_types_for
from .validators import SchemaIssue, validate_project, has_errors

__all__ = [
    "SQLDialect",
    "Position",
    "Column",
    "Table",
    "Relationship",
    "Index",
    "View",
    "Parameter",
    "StoredProcedure",
    "Trigger",
    "Database",
    "User",
    "Project",
    "new_id",
    "DATA_TYPES",
    "ENGINES",
    "CHARSETS",
    "COLLATIONS",
    "PRIVILEGES",
    "data_types_for",
    "SchemaIssue",
    "validate_project",
    "has_errors",
]
