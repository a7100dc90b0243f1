"""Tests for the schema entity models."""

import pytest
from pydantic import ValidationError
from sqlarchitect.model import (
    SQLDialect,
    Column,
    Table,
    Relationship,
    Database,
    Project,
    data_types_for,
)


def test_column_defaults():
    """A bare column is a nullable VARCHAR with a fresh id."""
    a = Column(name="a")
    b = Column(name="b")
    assert a.data_type == "VARCHAR"
    assert not a.is_primary_key and not a.is_not_null and not a.is_foreign_key
    assert a.id and b.id and a.id != b.id


def test_camel_case_aliases():
    """Wire keys are camelCase; Python names are accepted too."""
    column = Column.model_validate({"name": "id", "dataType": "INT", "isPrimaryKey": True})
    assert column.data_type == "INT"
    assert column.is_primary_key
    dumped = column.model_dump(by_alias=True)
    assert dumped["dataType"] == "INT"
    assert "isAutoIncrement" in dumped
    assert Column(name="x", data_type="TEXT").data_type == "TEXT"


def test_numeric_length_and_default_coerced():
    column = Column.model_validate({"name": "price", "dataType": "DECIMAL", "length": 10, "defaultValue": 0})
    assert column.length == "10"
    assert column.default_value == "0"


def test_records_are_frozen():
    table = Table(name="t")
    with pytest.raises(ValidationError):
        table.name = "other"
    renamed = table.model_copy(update={"name": "other"})
    assert table.name == "t"
    assert renamed.name == "other"
    assert renamed.id == table.id


def test_unknown_fields_are_kept():
    """Extra keys survive a load/dump cycle."""
    table = Table.model_validate({"name": "t", "color": "#ff0000"})
    assert table.model_dump(by_alias=True)["color"] == "#ff0000"


def test_relationship_rejects_unknown_action():
    with pytest.raises(ValidationError):
        Relationship(source_table="a", source_column="b", target_table="c", target_column="d", on_delete="EXPLODE")


def test_table_lookups():
    table = Table(
        name="t",
        columns=[
            Column(id="c1", name="id", is_primary_key=True),
            Column(id="c2", name="label"),
        ],
    )
    assert table.column_by_id("c2").name == "label"
    assert table.column_by_name("id").id == "c1"
    assert table.column_by_id("missing") is None
    assert [c.id for c in table.primary_key_columns] == ["c1"]


def test_project_lookups():
    project = Project(
        current_database="d1",
        databases=[Database(id="d1", name="shop")],
        tables=[Table(id="t1", name="users")],
    )
    assert project.current_database_record().name == "shop"
    assert project.table_by_id("t1").name == "users"
    assert project.table_by_id("nope") is None
    assert Project().current_database_record() is None


def test_dialect_accepts_plain_string():
    assert Project(dialect="postgresql").dialect is SQLDialect.POSTGRESQL
    with pytest.raises(ValidationError):
        Project(dialect="db2")


def test_data_types_per_dialect():
    assert "VARCHAR" in data_types_for("mysql")
    assert "jsonb" in data_types_for(SQLDialect.POSTGRESQL)
    assert "VARCHAR2" in data_types_for("oracle")
    assert data_types_for("db2") == []
