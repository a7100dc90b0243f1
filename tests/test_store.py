"""Tests for the project store commands."""

import pytest
from sqlarchitect.model import (
    Column,
    Database,
    Index,
    Position,
    Relationship,
    StoredProcedure,
    Trigger,
    User,
    View,
    SQLDialect,
)
from sqlarchitect.state import ProjectStore, EntityNotFoundError, DEFAULT_DATABASE_ID, initial_project


def _store_with_pair():
    """Store holding users(id) and orders(id, user_id)."""
    store = ProjectStore()
    users = store.add_table(name="users")
    orders = store.add_table(name="orders")
    users = users.model_copy(
        update={"columns": [Column(id="u_id", name="id", data_type="INT", is_primary_key=True)]}
    )
    orders = orders.model_copy(
        update={
            "columns": [
                Column(id="o_id", name="id", data_type="INT", is_primary_key=True),
                Column(id="o_user", name="user_id", data_type="INT"),
            ]
        }
    )
    store.update_table(users)
    store.update_table(orders)
    return store, users, orders


def test_initial_project():
    """A fresh store has one default database selected and nothing else."""
    project = ProjectStore().project
    assert project.name == "SQL Architect Project"
    assert project.dialect is SQLDialect.MYSQL
    assert project.current_database == DEFAULT_DATABASE_ID
    assert [d.name for d in project.databases] == ["default_db"]
    assert project.tables == [] and project.relationships == []


def test_initial_project_uses_settings(monkeypatch):
    from sqlarchitect.config import reset_settings

    monkeypatch.setenv("DEFAULT_DIALECT", "postgresql")
    monkeypatch.setenv("PROJECT_NAME", "Shop")
    reset_settings()
    project = initial_project()
    assert project.dialect is SQLDialect.POSTGRESQL
    assert project.name == "Shop"


def test_add_table_defaults():
    store = ProjectStore()
    table = store.add_table(Position(x=10, y=20))
    assert table.name == "new_table"
    assert table.columns == []
    assert table.engine == "InnoDB"
    assert table.charset == "utf8mb4"
    assert table.collation == "utf8mb4_general_ci"
    assert table.position.x == 10
    assert store.project.tables == [table]


def test_add_assigns_fresh_ids():
    """Ids on incoming entities are replaced."""
    store = ProjectStore()
    first = store.add_view(View(id="same", name="v1"))
    second = store.add_view(View(id="same", name="v2"))
    assert first.id != "same"
    assert first.id != second.id
    assert len(store.project.views) == 2


def test_add_relationship_marks_target_column():
    """The target column records the source end as its reference."""
    store, users, orders = _store_with_pair()
    rel = store.add_relationship(
        Relationship(source_table=orders.id, source_column="o_user", target_table=users.id, target_column="u_id")
    )
    project = store.project
    assert project.relationships == [rel]
    target = project.table_by_id(users.id).column_by_id("u_id")
    assert target.is_foreign_key
    assert target.references_table == orders.id
    assert target.references_column == "o_user"
    assert not project.table_by_id(orders.id).column_by_id("o_user").is_foreign_key


def test_delete_relationship_unmarks_target_column():
    store, users, orders = _store_with_pair()
    rel = store.add_relationship(
        Relationship(source_table=orders.id, source_column="o_user", target_table=users.id, target_column="u_id")
    )
    store.delete_relationship(rel.id)
    target = store.project.table_by_id(users.id).column_by_id("u_id")
    assert store.project.relationships == []
    assert not target.is_foreign_key
    assert target.references_table is None
    assert target.references_column is None


def test_delete_missing_relationship_is_noop():
    store = ProjectStore()
    before = store.project
    assert store.delete_relationship("nope") is before


def test_delete_table_cascades():
    """Removing a table drops relationships at either end plus its indexes and triggers."""
    store, users, orders = _store_with_pair()
    other = store.add_table(name="audit")
    store.add_relationship(
        Relationship(source_table=orders.id, source_column="o_user", target_table=users.id, target_column="u_id")
    )
    store.add_relationship(
        Relationship(source_table=users.id, source_column="u_id", target_table=orders.id, target_column="o_user")
    )
    store.add_index(Index(name="ix_u", table_id=users.id, columns=["id"]))
    kept_index = store.add_index(Index(name="ix_o", table_id=orders.id, columns=["id"]))
    store.add_trigger(Trigger(name="trg_u", table_id=users.id))
    kept_trigger = store.add_trigger(Trigger(name="trg_a", table_id=other.id))

    project = store.delete_table(users.id)
    assert [t.name for t in project.tables] == ["orders", "audit"]
    assert project.relationships == []
    assert project.indexes == [kept_index]
    assert project.triggers == [kept_trigger]
    # users -> orders marked orders.user_id; the cascade must clear it
    survivor = project.table_by_id(orders.id).column_by_id("o_user")
    assert not survivor.is_foreign_key
    assert survivor.references_table is None
    assert survivor.references_column is None


def test_scenario_delete_one_of_two_tables():
    """Two tables and one relationship: deleting the target leaves one table, no relationships."""
    store, users, orders = _store_with_pair()
    store.add_relationship(
        Relationship(source_table=orders.id, source_column="o_user", target_table=users.id, target_column="u_id")
    )
    project = store.delete_table(users.id)
    assert len(project.tables) == 1
    assert project.relationships == []


def test_update_unknown_entity_raises():
    store = ProjectStore()
    with pytest.raises(EntityNotFoundError) as exc:
        store.update_view(View(id="ghost", name="v"))
    assert exc.value.kind == "view"
    assert exc.value.entity_id == "ghost"
    with pytest.raises(KeyError):
        store.update_table_position("ghost", Position())


def test_update_replaces_by_id():
    store = ProjectStore()
    table = store.add_table()
    store.update_table(table.model_copy(update={"name": "customers"}))
    store.update_table_position(table.id, Position(x=5, y=6))
    stored = store.project.table_by_id(table.id)
    assert stored.name == "customers"
    assert (stored.position.x, stored.position.y) == (5, 6)


def test_snapshots_are_not_modified():
    """Commands produce new snapshots; earlier ones keep their contents."""
    store = ProjectStore()
    before = store.project
    store.add_table()
    store.set_project_name("Renamed")
    assert before.tables == []
    assert before.name == "SQL Architect Project"
    assert store.project.name == "Renamed"


def test_database_commands():
    store = ProjectStore()
    db = store.add_database(Database(name="analytics"))
    store.set_current_database(db.id)
    store.update_database(db.model_copy(update={"comment": "reports"}))
    assert store.project.current_database_record().comment == "reports"
    store.delete_database(db.id)
    assert store.project.current_database is None
    assert [d.id for d in store.project.databases] == [DEFAULT_DATABASE_ID]


def test_routine_and_user_commands():
    store = ProjectStore()
    proc = store.add_procedure(StoredProcedure(name="p"))
    user = store.add_user(User(username="app"))
    store.update_procedure(proc.model_copy(update={"body": "SELECT 1;"}))
    store.update_user(user.model_copy(update={"privileges": ["SELECT"]}))
    assert store.project.procedures[0].body == "SELECT 1;"
    assert store.project.users[0].privileges == ["SELECT"]
    store.delete_procedure(proc.id)
    store.delete_user(user.id)
    assert store.project.procedures == [] and store.project.users == []


def test_set_dialect_and_clear():
    store = ProjectStore()
    store.add_table()
    store.set_dialect("sqlite")
    assert store.project.dialect is SQLDialect.SQLITE
    cleared = store.clear_project()
    assert cleared.tables == []
    assert cleared.dialect is SQLDialect.MYSQL


def test_import_and_export_project():
    source = ProjectStore()
    source.add_table(name="users")
    target = ProjectStore()
    target.import_project(source.export_project())
    assert [t.name for t in target.project.tables] == ["users"]


def test_update_relationship_moves_marking():
    """Retargeting a relationship unmarks the old target column and marks the new one."""
    store, users, orders = _store_with_pair()
    store.update_table(
        store.project.table_by_id(users.id).model_copy(
            update={
                "columns": [
                    Column(id="u_id", name="id", data_type="INT", is_primary_key=True),
                    Column(id="u_alt", name="alt_id", data_type="INT"),
                ]
            }
        )
    )
    rel = store.add_relationship(
        Relationship(source_table=orders.id, source_column="o_user", target_table=users.id, target_column="u_id")
    )
    project = store.update_relationship(rel.model_copy(update={"target_column": "u_alt"}))

    table = project.table_by_id(users.id)
    assert not table.column_by_id("u_id").is_foreign_key
    assert table.column_by_id("u_id").references_table is None
    moved = table.column_by_id("u_alt")
    assert moved.is_foreign_key
    assert moved.references_table == orders.id
    assert moved.references_column == "o_user"
    assert project.relationships[0].target_column == "u_alt"


def test_update_relationship_to_other_table():
    """A relationship moved to another target table marks the column there."""
    store, users, orders = _store_with_pair()
    rel = store.add_relationship(
        Relationship(source_table=orders.id, source_column="o_user", target_table=users.id, target_column="u_id")
    )
    project = store.update_relationship(
        rel.model_copy(update={"source_table": users.id, "source_column": "u_id", "target_table": orders.id, "target_column": "o_id"})
    )
    assert not project.table_by_id(users.id).column_by_id("u_id").is_foreign_key
    marked = project.table_by_id(orders.id).column_by_id("o_id")
    assert marked.is_foreign_key
    assert marked.references_table == users.id


def test_update_unknown_relationship_raises():
    store = ProjectStore()
    with pytest.raises(EntityNotFoundError):
        store.update_relationship(Relationship(id="ghost", source_table="a", source_column="b", target_table="c", target_column="d"))
