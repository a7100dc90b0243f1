"""Schema entity models edited by the designer."""

import uuid
from enum import Enum
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SQLDialect(str, Enum):
    """Target SQL flavours."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"
    MARIADB = "mariadb"
    ORACLE = "oracle"


ReferentialAction = Literal["RESTRICT", "CASCADE", "SET NULL", "NO ACTION", "SET DEFAULT"]
RelationshipType = Literal["one-to-one", "one-to-many", "many-to-many"]
IndexType = Literal["PRIMARY", "UNIQUE", "INDEX", "FULLTEXT", "SPATIAL"]
IndexMethod = Literal["BTREE", "HASH"]
ViewAlgorithm = Literal["UNDEFINED", "MERGE", "TEMPTABLE"]
SQLSecurity = Literal["DEFINER", "INVOKER"]
RoutineKind = Literal["PROCEDURE", "FUNCTION"]
ParameterDirection = Literal["IN", "OUT", "INOUT"]
TriggerTiming = Literal["BEFORE", "AFTER"]
TriggerEvent = Literal["INSERT", "UPDATE", "DELETE"]


def new_id() -> str:
    """Return a fresh opaque entity identifier."""
    return str(uuid.uuid4())


class SchemaModel(BaseModel):
    """
    Base for all designer records.

    Records are frozen: edits produce a new record that replaces the old
    one by id. Keys are camelCase on the wire, unknown keys are preserved.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class Position(SchemaModel):
    """Canvas coordinates of a table node (layout only)."""

    x: float = 0.0
    y: float = 0.0


class Column(SchemaModel):
    """A table attribute."""

    id: str = Field(default_factory=new_id)
    name: str = ""
    data_type: str = "VARCHAR"
    length: Optional[str] = None  # "255", "10,2" or "a,b,c" for ENUM/SET
    is_primary_key: bool = False
    is_not_null: bool = False
    is_auto_increment: bool = False
    is_unique: bool = False
    default_value: Optional[str] = None
    is_foreign_key: bool = False
    references_table: Optional[str] = None  # table id
    references_column: Optional[str] = None  # column id
    comment: Optional[str] = None
    collation: Optional[str] = None
    charset: Optional[str] = None

    @field_validator("length", "default_value", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> Any:
        """Accept numbers where the designer stores free text."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class Table(SchemaModel):
    """A named relation placed on the canvas."""

    id: str = Field(default_factory=new_id)
    name: str = "new_table"
    columns: List[Column] = Field(default_factory=list)
    position: Position = Field(default_factory=Position)
    engine: Optional[str] = None
    charset: Optional[str] = None
    collation: Optional[str] = None
    comment: Optional[str] = None
    auto_increment: Optional[int] = None

    def column_by_id(self, column_id: str) -> Optional[Column]:
        return next((c for c in self.columns if c.id == column_id), None)

    def column_by_name(self, name: str) -> Optional[Column]:
        return next((c for c in self.columns if c.name == name), None)

    @property
    def primary_key_columns(self) -> List[Column]:
        return [c for c in self.columns if c.is_primary_key]


class Relationship(SchemaModel):
    """Foreign-key link between a column of one table and a column of another."""

    id: str = Field(default_factory=new_id)
    source_table: str
    target_table: str
    source_column: str
    target_column: str
    type: RelationshipType = "one-to-many"
    on_update: ReferentialAction = "RESTRICT"
    on_delete: ReferentialAction = "RESTRICT"


class Index(SchemaModel):
    """Secondary index on a table; columns are listed by name."""

    id: str = Field(default_factory=new_id)
    name: str
    table_id: str
    columns: List[str] = Field(default_factory=list)
    type: IndexType = "INDEX"
    method: Optional[IndexMethod] = None


class View(SchemaModel):
    id: str = Field(default_factory=new_id)
    name: str
    definition: str = ""
    is_updatable: bool = False
    algorithm: ViewAlgorithm = "UNDEFINED"
    sql_security: SQLSecurity = "DEFINER"
    comment: Optional[str] = None


class Parameter(SchemaModel):
    name: str
    type: str
    direction: ParameterDirection = "IN"


class StoredProcedure(SchemaModel):
    """Stored procedure or function."""

    id: str = Field(default_factory=new_id)
    name: str
    parameters: List[Parameter] = Field(default_factory=list)
    body: str = ""
    type: RoutineKind = "PROCEDURE"
    return_type: Optional[str] = None
    comment: Optional[str] = None
    sql_security: SQLSecurity = "DEFINER"
    deterministic: bool = False


class Trigger(SchemaModel):
    id: str = Field(default_factory=new_id)
    name: str
    table_id: str
    timing: TriggerTiming = "BEFORE"
    event: TriggerEvent = "INSERT"
    body: str = ""
    comment: Optional[str] = None


class Database(SchemaModel):
    """A named schema/catalog."""

    id: str = Field(default_factory=new_id)
    name: str
    charset: str = "utf8mb4"
    collation: str = "utf8mb4_general_ci"
    comment: Optional[str] = None


class User(SchemaModel):
    id: str = Field(default_factory=new_id)
    username: str
    host: str = "%"
    password: Optional[str] = None
    privileges: List[str] = Field(default_factory=list)
    comment: Optional[str] = None
