"""Project aggregate holding every entity collection."""

from typing import List, Optional
from pydantic import Field
from .entities import (
    SchemaModel,
    SQLDialect,
    Database,
    Table,
    Relationship,
    Index,
    View,
    StoredProcedure,
    Trigger,
    User,
)


class Project(SchemaModel):
    """Aggregate root of a designer session."""

    name: str = "SQL Architect Project"
    dialect: SQLDialect = SQLDialect.MYSQL
    current_database: Optional[str] = None  # database id
    databases: List[Database] = Field(default_factory=list)
    tables: List[Table] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)
    indexes: List[Index] = Field(default_factory=list)
    views: List[View] = Field(default_factory=list)
    procedures: List[StoredProcedure] = Field(default_factory=list)
    triggers: List[Trigger] = Field(default_factory=list)
    users: List[User] = Field(default_factory=list)

    def table_by_id(self, table_id: str) -> Optional[Table]:
        return next((t for t in self.tables if t.id == table_id), None)

    def database_by_id(self, database_id: str) -> Optional[Database]:
        return next((d for d in self.databases if d.id == database_id), None)

    def current_database_record(self) -> Optional[Database]:
        """Database the current-database pointer resolves to, if any."""
        if not self.current_database:
            return None
        return self.database_by_id(self.current_database)
