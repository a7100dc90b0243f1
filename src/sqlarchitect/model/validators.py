"""Reference-integrity diagnostics for a project."""

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Literal
from .project import Project
from .constants import data_types_for
from sqlarchitect.config.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SchemaIssue:
    """Problem found while checking a project."""

    severity: Literal["error", "warning"]
    code: str  # e.g., "REL_TARGET_COLUMN_MISSING"
    location: str  # e.g., "orders" or "orders.customer_id"
    message: str
    details: dict = field(default_factory=dict)


def _validate_databases(project: Project) -> List[SchemaIssue]:
    issues: List[SchemaIssue] = []
    counts = Counter(d.name for d in project.databases)
    for name, count in counts.items():
        if count > 1:
            issues.append(
                SchemaIssue(
                    severity="error",
                    code="DUPLICATE_DATABASE_NAME",
                    location=name,
                    message=f"database name '{name}' is used {count} times",
                    details={"database": name, "count": count},
                )
            )
    if project.current_database and project.current_database_record() is None:
        issues.append(
            SchemaIssue(
                severity="error",
                code="CURRENT_DATABASE_MISSING",
                location=project.name,
                message=f"current database '{project.current_database}' does not exist",
                details={"database_id": project.current_database},
            )
        )
    return issues


def _validate_tables(project: Project) -> List[SchemaIssue]:
    issues: List[SchemaIssue] = []
    vocabulary = {t.upper() for t in data_types_for(project.dialect)}

    for table in project.tables:
        counts = Counter(c.id for c in table.columns)
        for column_id, count in counts.items():
            if count > 1:
                issues.append(
                    SchemaIssue(
                        severity="error",
                        code="DUPLICATE_COLUMN_ID",
                        location=table.name,
                        message=f"{table.name}: column id '{column_id}' is used {count} times",
                        details={"table": table.name, "column_id": column_id},
                    )
                )

        if table.columns and not table.primary_key_columns:
            issues.append(
                SchemaIssue(
                    severity="warning",
                    code="MISSING_PRIMARY_KEY",
                    location=table.name,
                    message=f"{table.name}: no primary key column",
                    details={"table": table.name},
                )
            )

        for column in table.columns:
            if vocabulary and column.data_type.strip().upper() not in vocabulary:
                issues.append(
                    SchemaIssue(
                        severity="warning",
                        code="UNKNOWN_DATA_TYPE",
                        location=f"{table.name}.{column.name}",
                        message=f"{table.name}.{column.name}: type '{column.data_type}' "
                        f"is not a {project.dialect.value} type",
                        details={"table": table.name, "column": column.name, "data_type": column.data_type},
                    )
                )
    return issues


def _validate_column_references(project: Project) -> List[SchemaIssue]:
    """Foreign-key markings whose referenced table or column is gone."""
    issues: List[SchemaIssue] = []
    for table in project.tables:
        for column in table.columns:
            if not column.is_foreign_key or not column.references_table:
                continue
            referenced = project.table_by_id(column.references_table)
            if referenced is not None and referenced.column_by_id(column.references_column or "") is not None:
                continue
            issues.append(
                SchemaIssue(
                    severity="warning",
                    code="COLUMN_REFERENCE_MISSING",
                    location=f"{table.name}.{column.name}",
                    message=f"{table.name}.{column.name}: marked as foreign key to "
                    f"'{column.references_table}.{column.references_column}', which does not exist",
                    details={
                        "table": table.name,
                        "column": column.name,
                        "references_table": column.references_table,
                        "references_column": column.references_column,
                    },
                )
            )
    return issues


def _validate_relationships(project: Project) -> List[SchemaIssue]:
    issues: List[SchemaIssue] = []

    for rel in project.relationships:
        ends = (
            ("SOURCE", rel.source_table, rel.source_column),
            ("TARGET", rel.target_table, rel.target_column),
        )
        for end, table_id, column_id in ends:
            table = project.table_by_id(table_id)
            if table is None:
                issues.append(
                    SchemaIssue(
                        severity="error",
                        code=f"REL_{end}_TABLE_MISSING",
                        location=rel.id,
                        message=f"relationship {rel.id}: {end.lower()} table '{table_id}' does not exist",
                        details={"relationship": rel.id, "table_id": table_id},
                    )
                )
                continue
            if table.column_by_id(column_id) is None:
                issues.append(
                    SchemaIssue(
                        severity="error",
                        code=f"REL_{end}_COLUMN_MISSING",
                        location=f"{table.name}.{column_id}",
                        message=f"relationship {rel.id}: {end.lower()} column '{column_id}' "
                        f"does not exist in '{table.name}'",
                        details={"relationship": rel.id, "table": table.name, "column_id": column_id},
                    )
                )
    return issues


def _validate_owned_objects(project: Project) -> List[SchemaIssue]:
    issues: List[SchemaIssue] = []

    for index in project.indexes:
        table = project.table_by_id(index.table_id)
        if table is None:
            issues.append(
                SchemaIssue(
                    severity="error",
                    code="INDEX_TABLE_MISSING",
                    location=index.name,
                    message=f"index '{index.name}' belongs to missing table '{index.table_id}'",
                    details={"index": index.name, "table_id": index.table_id},
                )
            )
            continue
        for column_name in index.columns:
            if table.column_by_name(column_name) is None:
                issues.append(
                    SchemaIssue(
                        severity="error",
                        code="INDEX_COLUMN_MISSING",
                        location=f"{table.name}.{column_name}",
                        message=f"index '{index.name}' lists unknown column '{column_name}'",
                        details={"index": index.name, "table": table.name, "column": column_name},
                    )
                )

    for trigger in project.triggers:
        if project.table_by_id(trigger.table_id) is None:
            issues.append(
                SchemaIssue(
                    severity="error",
                    code="TRIGGER_TABLE_MISSING",
                    location=trigger.name,
                    message=f"trigger '{trigger.name}' belongs to missing table '{trigger.table_id}'",
                    details={"trigger": trigger.name, "table_id": trigger.table_id},
                )
            )
    return issues


def validate_project(project: Project) -> List[SchemaIssue]:
    """
    Check a project for dangling references and suspicious definitions.

    Args:
        project: Project to check

    Returns:
        List of SchemaIssue objects (empty if nothing was found)
    """
    issues = (
        _validate_databases(project)
        + _validate_tables(project)
        + _validate_column_references(project)
        + _validate_relationships(project)
        + _validate_owned_objects(project)
    )
    if issues:
        errors = sum(1 for i in issues if i.severity == "error")
        logger.info(f"Project '{project.name}': {errors} error(s), {len(issues) - errors} warning(s)")
    return issues


def has_errors(issues: List[SchemaIssue]) -> bool:
    return any(i.severity == "error" for i in issues)
