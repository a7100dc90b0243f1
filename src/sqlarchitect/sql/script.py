"""Whole-project SQL script assembly."""

from typing import List, Optional, Union
from sqlarchitect.model.entities import SQLDialect
from sqlarchitect.model.project import Project
from sqlarchitect.config.logging import get_logger
from .generator import SQLGenerator

logger = get_logger(__name__)


def generate_schema_script(project: Project, dialect: Optional[Union[SQLDialect, str]] = None) -> str:
    """
    Render every entity of a project as one SQL script.

    Order: current database (MySQL family only), tables, indexes, views,
    procedures, triggers, users and grants. Indexes and triggers whose
    owning table no longer exists are skipped.

    Args:
        project: Project snapshot
        dialect: Override for the project's dialect

    Returns:
        SQL script with commented sections separated by blank lines
    """
    generator = SQLGenerator(dialect or project.dialect)
    sections: List[str] = []
    database = project.current_database_record()

    if database and generator.rules.mysql_family:
        sections.append(
            f"-- Database\n{generator.create_database(database)}\n{generator.use_database(database.name)}"
        )

    if project.tables:
        sections.append("-- Tables\n" + generator.generate_full_sql(project.tables, project.relationships))

    index_sql = []
    for index in project.indexes:
        table = project.table_by_id(index.table_id)
        if table is None:
            logger.warning(f"Skipping index '{index.name}': table {index.table_id} not found")
            continue
        index_sql.append(generator.create_index(index, table.name))
    if index_sql:
        sections.append("-- Indexes\n" + "\n".join(index_sql))

    if project.views:
        sections.append("-- Views\n" + "\n".join(generator.create_view(v) for v in project.views))

    if project.procedures:
        sections.append("-- Routines\n" + "\n\n".join(generator.create_procedure(p) for p in project.procedures))

    trigger_sql = []
    for trigger in project.triggers:
        table = project.table_by_id(trigger.table_id)
        if table is None:
            logger.warning(f"Skipping trigger '{trigger.name}': table {trigger.table_id} not found")
            continue
        trigger_sql.append(generator.create_trigger(trigger, table.name))
    if trigger_sql:
        sections.append("-- Triggers\n" + "\n\n".join(trigger_sql))

    user_sql = []
    for user in project.users:
        user_sql.append(generator.create_user(user))
        if user.privileges:
            user_sql.append(generator.grant_privileges(user, database.name if database else None))
    if user_sql:
        sections.append("-- Users\n" + "\n".join(user_sql))

    logger.debug(f"Generated schema script with {len(sections)} sections for '{project.name}'")
    return "\n\n".join(sections)
