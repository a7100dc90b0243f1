"""Project state container with explicit create/update/delete commands."""

from typing import Callable, List, Optional, TypeVar, Union
from sqlarchitect.model.entities import (
    SchemaModel,
    SQLDialect,
    Position,
    Table,
    Relationship,
    Index,
    View,
    StoredProcedure,
    Trigger,
    Database,
    User,
    new_id,
)
from sqlarchitect.model.project import Project
from sqlarchitect.config.settings import get_settings
from sqlarchitect.config.logging import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=SchemaModel)

DEFAULT_DATABASE_ID = "default_db_id"


class EntityNotFoundError(KeyError):
    """Raised when a command targets an identifier that is not in the project."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} '{entity_id}' not found")
        self.kind = kind
        self.entity_id = entity_id


def initial_project(name: Optional[str] = None, dialect: Optional[Union[SQLDialect, str]] = None) -> Project:
    """Fresh project with one default database selected."""
    settings = get_settings()
    return Project(
        name=name or settings.project_name,
        dialect=SQLDialect(dialect or settings.default_dialect),
        current_database=DEFAULT_DATABASE_ID,
        databases=[
            Database(
                id=DEFAULT_DATABASE_ID,
                name="default_db",
                charset="utf8mb4",
                collation="utf8mb4_general_ci",
            )
        ],
    )


def _replace(items: List[E], entity: E, kind: str) -> List[E]:
    if not any(item.id == entity.id for item in items):
        raise EntityNotFoundError(kind, entity.id)
    return [entity if item.id == entity.id else item for item in items]


def _without(items: List[E], entity_id: str) -> List[E]:
    return [item for item in items if item.id != entity_id]


def _with_fresh_id(entity: E) -> E:
    return entity.model_copy(update={"id": new_id()})


def _mark_target(tables: List[Table], relationship: Relationship, linked: bool) -> List[Table]:
    """Mark (or unmark) the target column of a relationship as a foreign key to its source column."""
    if linked:
        update = {
            "is_foreign_key": True,
            "references_table": relationship.source_table,
            "references_column": relationship.source_column,
        }
    else:
        update = {"is_foreign_key": False, "references_table": None, "references_column": None}

    def apply(table: Table) -> Table:
        columns = [
            c.model_copy(update=update) if c.id == relationship.target_column else c
            for c in table.columns
        ]
        return table.model_copy(update={"columns": columns})

    return [apply(t) if t.id == relationship.target_table else t for t in tables]


class ProjectStore:
    """
    Holds the current Project snapshot.

    Every command builds a new snapshot from the previous one, makes it
    current and returns it. Snapshots handed out are never modified.
    """

    def __init__(self, project: Optional[Project] = None):
        self._project = project or initial_project()

    @property
    def project(self) -> Project:
        return self._project

    def _commit(self, **changes) -> Project:
        self._project = self._project.model_copy(update=changes)
        return self._project

    def _map_table(self, table_id: str, fn: Callable[[Table], Table]) -> List[Table]:
        return [fn(t) if t.id == table_id else t for t in self._project.tables]

    # Project-level -------------------------------------------------------

    def set_project(self, project: Project) -> Project:
        self._project = project
        return project

    def set_project_name(self, name: str) -> Project:
        return self._commit(name=name)

    def set_dialect(self, dialect: Union[SQLDialect, str]) -> Project:
        return self._commit(dialect=SQLDialect(dialect))

    def set_current_database(self, database_id: str) -> Project:
        return self._commit(current_database=database_id)

    def clear_project(self) -> Project:
        self._project = initial_project()
        return self._project

    def export_project(self) -> Project:
        return self._project

    def import_project(self, project: Project) -> Project:
        logger.info(f"Importing project '{project.name}' ({len(project.tables)} tables)")
        return self.set_project(project)

    # Databases -----------------------------------------------------------

    def add_database(self, database: Database) -> Database:
        database = _with_fresh_id(database)
        self._commit(databases=[*self._project.databases, database])
        return database

    def update_database(self, database: Database) -> Project:
        return self._commit(databases=_replace(self._project.databases, database, "database"))

    def delete_database(self, database_id: str) -> Project:
        changes = {"databases": _without(self._project.databases, database_id)}
        if self._project.current_database == database_id:
            changes["current_database"] = None
        return self._commit(**changes)

    # Tables --------------------------------------------------------------

    def add_table(self, position: Optional[Position] = None, name: str = "new_table") -> Table:
        table = Table(
            id=new_id(),
            name=name,
            columns=[],
            position=position or Position(),
            engine="InnoDB",
            charset="utf8mb4",
            collation="utf8mb4_general_ci",
        )
        self._commit(tables=[*self._project.tables, table])
        return table

    def update_table(self, table: Table) -> Project:
        return self._commit(tables=_replace(self._project.tables, table, "table"))

    def update_table_position(self, table_id: str, position: Position) -> Project:
        if self._project.table_by_id(table_id) is None:
            raise EntityNotFoundError("table", table_id)
        tables = self._map_table(table_id, lambda t: t.model_copy(update={"position": position}))
        return self._commit(tables=tables)

    def delete_table(self, table_id: str) -> Project:
        """
        Remove a table with its relationships (either end), indexes and triggers.

        Target columns of the dropped relationships that live in other tables
        lose their foreign-key marking.
        """
        p = self._project
        dropped = [r for r in p.relationships if table_id in (r.source_table, r.target_table)]
        dropped_ids = {r.id for r in dropped}
        tables = _without(p.tables, table_id)
        for rel in dropped:
            tables = _mark_target(tables, rel, linked=False)
        return self._commit(
            tables=tables,
            relationships=[r for r in p.relationships if r.id not in dropped_ids],
            indexes=[i for i in p.indexes if i.table_id != table_id],
            triggers=[t for t in p.triggers if t.table_id != table_id],
        )

    # Relationships -------------------------------------------------------

    def add_relationship(self, relationship: Relationship) -> Relationship:
        """Add a relationship and mark its target column as a foreign key to the source column."""
        relationship = _with_fresh_id(relationship)
        self._commit(
            relationships=[*self._project.relationships, relationship],
            tables=_mark_target(self._project.tables, relationship, linked=True),
        )
        return relationship

    def update_relationship(self, relationship: Relationship) -> Project:
        """Replace a relationship, moving the foreign-key marking to its new target column."""
        relationships = _replace(self._project.relationships, relationship, "relationship")
        previous = next(r for r in self._project.relationships if r.id == relationship.id)
        tables = _mark_target(self._project.tables, previous, linked=False)
        tables = _mark_target(tables, relationship, linked=True)
        return self._commit(relationships=relationships, tables=tables)

    def delete_relationship(self, relationship_id: str) -> Project:
        """Remove a relationship and clear the foreign-key marking on its target column."""
        existing = next((r for r in self._project.relationships if r.id == relationship_id), None)
        if existing is None:
            return self._project
        return self._commit(
            relationships=_without(self._project.relationships, relationship_id),
            tables=_mark_target(self._project.tables, existing, linked=False),
        )

    # Indexes, views, routines, triggers, users ---------------------------

    def add_index(self, index: Index) -> Index:
        index = _with_fresh_id(index)
        self._commit(indexes=[*self._project.indexes, index])
        return index

    def update_index(self, index: Index) -> Project:
        return self._commit(indexes=_replace(self._project.indexes, index, "index"))

    def delete_index(self, index_id: str) -> Project:
        return self._commit(indexes=_without(self._project.indexes, index_id))

    def add_view(self, view: View) -> View:
        view = _with_fresh_id(view)
        self._commit(views=[*self._project.views, view])
        return view

    def update_view(self, view: View) -> Project:
        return self._commit(views=_replace(self._project.views, view, "view"))

    def delete_view(self, view_id: str) -> Project:
        return self._commit(views=_without(self._project.views, view_id))

    def add_procedure(self, procedure: StoredProcedure) -> StoredProcedure:
        procedure = _with_fresh_id(procedure)
        self._commit(procedures=[*self._project.procedures, procedure])
        return procedure

    def update_procedure(self, procedure: StoredProcedure) -> Project:
        return self._commit(procedures=_replace(self._project.procedures, procedure, "procedure"))

    def delete_procedure(self, procedure_id: str) -> Project:
        return self._commit(procedures=_without(self._project.procedures, procedure_id))

    def add_trigger(self, trigger: Trigger) -> Trigger:
        trigger = _with_fresh_id(trigger)
        self._commit(triggers=[*self._project.triggers, trigger])
        return trigger

    def update_trigger(self, trigger: Trigger) -> Project:
        return self._commit(triggers=_replace(self._project.triggers, trigger, "trigger"))

    def delete_trigger(self, trigger_id: str) -> Project:
        return self._commit(triggers=_without(self._project.triggers, trigger_id))

    def add_user(self, user: User) -> User:
        user = _with_fresh_id(user)
        self._commit(users=[*self._project.users, user])
        return user

    def update_user(self, user: User) -> Project:
        return self._commit(users=_replace(self._project.users, user, "user"))

    def delete_user(self, user_id: str) -> Project:
        return self._commit(users=_without(self._project.users, user_id))
