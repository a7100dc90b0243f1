"""Dialect-aware SQL text generation from schema records."""

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Sequence, Union
from sqlarchitect.model.entities import (
    SQLDialect,
    Column,
    Table,
    Relationship,
    Index,
    View,
    StoredProcedure,
    Trigger,
    Database,
    User,
)
from sqlarchitect.config.logging import get_logger
from .dialects import get_dialect_rules
from .formatting import (
    escape_literal,
    format_data_type,
    format_default_value,
    format_value,
)

logger = get_logger(__name__)

ALTER_OPERATIONS = (
    "ADD_COLUMN",
    "DROP_COLUMN",
    "MODIFY_COLUMN",
    "RENAME_COLUMN",
    "ADD_INDEX",
    "DROP_INDEX",
)

_INDEX_KEYWORDS = {
    "INDEX": "INDEX",
    "UNIQUE": "UNIQUE INDEX",
    "FULLTEXT": "FULLTEXT INDEX",
    "SPATIAL": "SPATIAL INDEX",
}


class SQLGenerator:
    """
    Stateless translator from schema records to SQL statements.

    The only state is the dialect bound at construction. No method raises
    for incomplete input: a clause whose references cannot be resolved is
    left out and a warning is logged.
    """

    def __init__(self, dialect: Union[SQLDialect, str]):
        self.dialect = dialect
        self.rules = get_dialect_rules(dialect)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def quote_identifier(self, identifier: str) -> str:
        return self.rules.quote(identifier)

    def _quote_all(self, identifiers: Sequence[str]) -> str:
        return ", ".join(self.quote_identifier(i) for i in identifiers)

    def _account(self, user: User) -> str:
        return f"{self.quote_identifier(user.username)}@{self.quote_identifier(user.host)}"

    def format_column_type(self, column: Column) -> str:
        return format_data_type(column.data_type, column.length)

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    def create_database(self, database: Database) -> str:
        sql = f"CREATE DATABASE {self.quote_identifier(database.name)}"
        if self.rules.mysql_family:
            if database.charset:
                sql += f" CHARACTER SET {database.charset}"
            if database.collation:
                sql += f" COLLATE {database.collation}"
        if database.comment:
            sql += f" COMMENT '{escape_literal(database.comment)}'"
        return sql + ";"

    def drop_database(self, database_name: str) -> str:
        return f"DROP DATABASE {self.quote_identifier(database_name)};"

    def use_database(self, database_name: str) -> str:
        return f"USE {self.quote_identifier(database_name)};"

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def column_definition(self, column: Column) -> str:
        """Render one column line (without indentation)."""
        definition = f"{self.quote_identifier(column.name)} {self.format_column_type(column)}"
        if column.is_not_null:
            definition += " NOT NULL"
        if column.is_auto_increment:
            definition += self.rules.auto_increment
        if column.default_value and column.default_value.strip():
            definition += f" DEFAULT {format_default_value(column.default_value)}"
        if column.comment and self.rules.mysql_family:
            definition += f" COMMENT '{escape_literal(column.comment)}'"
        return definition

    def foreign_key_clause(
        self, table: Table, relationship: Relationship, all_tables: Sequence[Table]
    ) -> Optional[str]:
        """
        Build the FOREIGN KEY constraint for a relationship sourced at ``table``.

        Returns None when the source column, target table or target column
        cannot be resolved.
        """
        source_col = table.column_by_id(relationship.source_column)
        target_table = next((t for t in all_tables if t.id == relationship.target_table), None)
        target_col = target_table.column_by_id(relationship.target_column) if target_table else None

        if source_col is None or target_table is None or target_col is None:
            logger.warning(
                f"Skipping foreign key for relationship {relationship.id} on table "
                f"'{table.name}': unresolved reference "
                f"(source column {relationship.source_column}, "
                f"target {relationship.target_table}.{relationship.target_column})"
            )
            return None

        constraint_name = f"fk_{table.name}_{source_col.name}"
        return (
            f"CONSTRAINT {self.quote_identifier(constraint_name)} "
            f"FOREIGN KEY ({self.quote_identifier(source_col.name)}) "
            f"REFERENCES {self.quote_identifier(target_table.name)}"
            f"({self.quote_identifier(target_col.name)}) "
            f"ON UPDATE {relationship.on_update} ON DELETE {relationship.on_delete}"
        )

    def table_options(self, table: Table) -> str:
        """MySQL-family table options appended after the closing parenthesis."""
        if not self.rules.mysql_family:
            return ""
        options = ""
        if table.engine:
            options += f" ENGINE={table.engine}"
        if table.charset:
            options += f" DEFAULT CHARSET={table.charset}"
        if table.collation:
            options += f" COLLATE={table.collation}"
        if table.auto_increment:
            options += f" AUTO_INCREMENT={table.auto_increment}"
        if table.comment:
            options += f" COMMENT='{escape_literal(table.comment)}'"
        return options

    def create_table(
        self,
        table: Table,
        relationships: Sequence[Relationship] = (),
        all_tables: Sequence[Table] = (),
    ) -> str:
        """
        Generate CREATE TABLE for one table.

        Args:
            table: Table to render
            relationships: Relationships of the project; those whose source
                table is ``table`` become FOREIGN KEY constraints
            all_tables: Tables used to resolve relationship targets

        Returns:
            CREATE TABLE statement terminated with ';'
        """
        definitions = [f"  {self.column_definition(c)}" for c in table.columns]

        primary_keys = table.primary_key_columns
        if primary_keys:
            definitions.append(f"  PRIMARY KEY ({self._quote_all([c.name for c in primary_keys])})")

        for column in table.columns:
            if column.is_unique and not column.is_primary_key:
                definitions.append(
                    f"  UNIQUE KEY {self.quote_identifier(f'uk_{column.name}')} "
                    f"({self.quote_identifier(column.name)})"
                )

        for relationship in relationships:
            if relationship.source_table != table.id:
                continue
            clause = self.foreign_key_clause(table, relationship, all_tables)
            if clause:
                definitions.append(f"  {clause}")

        sql = f"CREATE TABLE {self.quote_identifier(table.name)} (\n"
        sql += ",\n".join(definitions)
        sql += "\n)"
        sql += self.table_options(table)
        return sql + ";"

    def alter_table(self, table: Table, operation: str, details: Optional[Mapping[str, Any]] = None) -> str:
        """
        Generate a single-operation ALTER TABLE.

        ``details`` keys per operation: ADD_COLUMN/MODIFY_COLUMN ``column``,
        DROP_COLUMN ``column_name``, RENAME_COLUMN ``old_name``/``new_name``,
        ADD_INDEX ``index_name``/``columns``, DROP_INDEX ``index_name``.
        Unknown operations or missing details yield a bare ALTER TABLE.
        """
        details = details or {}
        sql = f"ALTER TABLE {self.quote_identifier(table.name)}"
        try:
            sql += self._alter_clause(str(operation).upper(), details)
        except KeyError as e:
            logger.warning(f"ALTER TABLE {table.name}: {operation} is missing detail {e}")
        return sql + ";"

    def _alter_clause(self, operation: str, details: Mapping[str, Any]) -> str:
        if operation == "ADD_COLUMN":
            column: Column = details["column"]
            clause = f" ADD COLUMN {self.quote_identifier(column.name)} {self.format_column_type(column)}"
            if column.is_not_null:
                clause += " NOT NULL"
            if column.default_value:
                clause += f" DEFAULT {format_default_value(column.default_value)}"
            return clause
        if operation == "DROP_COLUMN":
            return f" DROP COLUMN {self.quote_identifier(details['column_name'])}"
        if operation == "MODIFY_COLUMN":
            column = details["column"]
            return f" MODIFY COLUMN {self.quote_identifier(column.name)} {self.format_column_type(column)}"
        if operation == "RENAME_COLUMN":
            return (
                f" RENAME COLUMN {self.quote_identifier(details['old_name'])}"
                f" TO {self.quote_identifier(details['new_name'])}"
            )
        if operation == "ADD_INDEX":
            return f" ADD INDEX {self.quote_identifier(details['index_name'])} ({self._quote_all(details['columns'])})"
        if operation == "DROP_INDEX":
            return f" DROP INDEX {self.quote_identifier(details['index_name'])}"
        return ""

    def drop_table(self, table_name: str) -> str:
        return f"DROP TABLE {self.quote_identifier(table_name)};"

    def truncate_table(self, table_name: str) -> str:
        return f"TRUNCATE TABLE {self.quote_identifier(table_name)};"

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------

    def create_index(self, index: Index, table_name: str) -> str:
        # PRIMARY has no CREATE form; it renders as a plain index
        keyword = _INDEX_KEYWORDS.get(index.type, "INDEX")
        sql = (
            f"CREATE {keyword} {self.quote_identifier(index.name)} "
            f"ON {self.quote_identifier(table_name)} ({self._quote_all(index.columns)})"
        )
        if index.method and self.rules.mysql_family:
            sql += f" USING {index.method}"
        return sql + ";"

    def drop_index(self, index_name: str, table_name: Optional[str] = None) -> str:
        if self.rules.mysql_family and table_name:
            return f"DROP INDEX {self.quote_identifier(index_name)} ON {self.quote_identifier(table_name)};"
        return f"DROP INDEX {self.quote_identifier(index_name)};"

    # ------------------------------------------------------------------
    # Views, routines, triggers
    # ------------------------------------------------------------------

    def create_view(self, view: View) -> str:
        sql = "CREATE"
        if view.algorithm and view.algorithm != "UNDEFINED":
            sql += f" ALGORITHM = {view.algorithm}"
        sql += f" SQL SECURITY {view.sql_security}"
        sql += f" VIEW {self.quote_identifier(view.name)} AS {view.definition}"
        if view.is_updatable:
            sql += " WITH CHECK OPTION"
        return sql + ";"

    def drop_view(self, view_name: str) -> str:
        return f"DROP VIEW {self.quote_identifier(view_name)};"

    def create_procedure(self, procedure: StoredProcedure) -> str:
        params = ", ".join(
            f"{p.direction} {self.quote_identifier(p.name)} {p.type}" for p in procedure.parameters
        )
        sql = f"CREATE {procedure.type} {self.quote_identifier(procedure.name)}({params})"
        if procedure.type == "FUNCTION" and procedure.return_type:
            sql += f" RETURNS {procedure.return_type}"
        if procedure.deterministic:
            sql += " DETERMINISTIC"
        sql += f" SQL SECURITY {procedure.sql_security}"
        if procedure.comment:
            sql += f" COMMENT '{escape_literal(procedure.comment)}'"
        sql += f"\nBEGIN\n{procedure.body}\nEND"
        return sql + ";"

    def drop_procedure(self, name: str, kind: str = "PROCEDURE") -> str:
        return f"DROP {kind} {self.quote_identifier(name)};"

    def create_trigger(self, trigger: Trigger, table_name: str) -> str:
        return (
            f"CREATE TRIGGER {self.quote_identifier(trigger.name)}"
            f" {trigger.timing} {trigger.event}"
            f" ON {self.quote_identifier(table_name)}"
            " FOR EACH ROW"
            f"\nBEGIN\n{trigger.body}\nEND;"
        )

    def drop_trigger(self, trigger_name: str) -> str:
        return f"DROP TRIGGER {self.quote_identifier(trigger_name)};"

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, user: User) -> str:
        sql = f"CREATE USER {self._account(user)}"
        if user.password:
            sql += f" IDENTIFIED BY '{escape_literal(user.password)}'"
        return sql + ";"

    def grant_privileges(self, user: User, database: Optional[str] = None, table: Optional[str] = None) -> str:
        """GRANT on ``*.*``, ``db.*`` or ``db.table`` depending on the scope given."""
        target = "*.*"
        if database and table:
            target = f"{self.quote_identifier(database)}.{self.quote_identifier(table)}"
        elif database:
            target = f"{self.quote_identifier(database)}.*"
        privileges = ", ".join(user.privileges)
        return f"GRANT {privileges} ON {target} TO {self._account(user)};"

    def drop_user(self, user: User) -> str:
        return f"DROP USER {self._account(user)};"

    # ------------------------------------------------------------------
    # Data manipulation; where/order_by are inserted verbatim
    # ------------------------------------------------------------------

    def select(
        self,
        table_name: str,
        columns: Sequence[str] = ("*",),
        where: Optional[str] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> str:
        cols = ", ".join(c if c == "*" else self.quote_identifier(c) for c in columns)
        sql = f"SELECT {cols} FROM {self.quote_identifier(table_name)}"
        if where:
            sql += f" WHERE {where}"
        if order_by:
            sql += f" ORDER BY {order_by}"
        if limit:
            sql += f" LIMIT {limit}"
        return sql + ";"

    def insert(self, table_name: str, data: Mapping[str, Any]) -> str:
        columns = self._quote_all(list(data.keys()))
        values = ", ".join(format_value(v) for v in data.values())
        return f"INSERT INTO {self.quote_identifier(table_name)} ({columns}) VALUES ({values});"

    def update(self, table_name: str, data: Mapping[str, Any], where: str) -> str:
        sets = ", ".join(f"{self.quote_identifier(col)} = {format_value(val)}" for col, val in data.items())
        return f"UPDATE {self.quote_identifier(table_name)} SET {sets} WHERE {where};"

    def delete(self, table_name: str, where: str) -> str:
        return f"DELETE FROM {self.quote_identifier(table_name)} WHERE {where};"

    # ------------------------------------------------------------------
    # Introspection statements
    # ------------------------------------------------------------------

    def show_tables(self, database: Optional[str] = None) -> str:
        if database:
            return f"SHOW TABLES FROM {self.quote_identifier(database)};"
        return "SHOW TABLES;"

    def describe_table(self, table_name: str) -> str:
        return f"DESCRIBE {self.quote_identifier(table_name)};"

    def show_indexes(self, table_name: str) -> str:
        return f"SHOW INDEXES FROM {self.quote_identifier(table_name)};"

    def show_create_table(self, table_name: str) -> str:
        return f"SHOW CREATE TABLE {self.quote_identifier(table_name)};"

    # ------------------------------------------------------------------
    # Whole-schema output
    # ------------------------------------------------------------------

    def generate_full_sql(self, tables: Sequence[Table], relationships: Sequence[Relationship]) -> str:
        """One CREATE TABLE per table, in input order, separated by a blank line."""
        return "\n\n".join(self.create_table(t, relationships, tables) for t in tables)

    def generate_export_sql(
        self,
        tables: Sequence[Table],
        include_data: bool = True,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Generate a drop-and-recreate export script.

        Foreign keys are not included so tables can be recreated in any order.

        Args:
            tables: Tables to export
            include_data: Whether to append the (placeholder) data section
            generated_at: Timestamp for the header; defaults to now (UTC)

        Returns:
            Multi-statement SQL script
        """
        generated_at = generated_at or datetime.now(timezone.utc)
        parts: List[str] = [f"-- SQL Architect Export\n-- Generated on {generated_at.isoformat()}\n\n"]

        for table in tables:
            parts.append(f"-- Table structure for {table.name}\n")
            parts.append(f"DROP TABLE IF EXISTS {self.quote_identifier(table.name)};\n")
            parts.append(self.create_table(table, [], tables) + "\n\n")

        if include_data:
            parts.append("-- Table data\n")
            for table in tables:
                parts.append(f"-- Data for table {table.name}\n")
                parts.append("-- INSERT statements would go here\n\n")

        return "".join(parts)
