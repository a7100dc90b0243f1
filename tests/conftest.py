"""Shared fixtures."""

import logging
import pytest
from sqlarchitect.config import reset_settings
from sqlarchitect.model import Column, Table, Relationship, Position


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temporary output directory and drop cached settings."""
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.setenv("DEFAULT_DIALECT", "mysql")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_REPO", raising=False)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    logger = logging.getLogger("sqlarchitect")
    handlers, level = list(logger.handlers), logger.level
    reset_settings()
    yield
    reset_settings()
    # CLI commands rebind handlers to the runner's temporary stdout
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def captured_logs(caplog):
    """Attach caplog to the package logger (it does not propagate to root)."""
    logger = logging.getLogger("sqlarchitect")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="sqlarchitect")
    yield caplog
    logger.removeHandler(caplog.handler)


@pytest.fixture
def users_table():
    return Table(
        id="t_users",
        name="users",
        columns=[
            Column(
                id="c_users_id",
                name="id",
                data_type="INT",
                is_primary_key=True,
                is_not_null=True,
                is_auto_increment=True,
            ),
            Column(id="c_users_email", name="email", data_type="VARCHAR", length="255", is_unique=True),
        ],
        position=Position(x=100, y=100),
    )


@pytest.fixture
def orders_table():
    return Table(
        id="t_orders",
        name="orders",
        columns=[
            Column(id="c_orders_id", name="id", data_type="INT", is_primary_key=True, is_not_null=True),
            Column(id="c_orders_user", name="user_id", data_type="INT", is_not_null=True),
        ],
        position=Position(x=400, y=100),
    )


@pytest.fixture
def orders_to_users():
    """orders.user_id -> users.id, sourced at orders so orders carries the FOREIGN KEY."""
    return Relationship(
        id="r_orders_users",
        source_table="t_orders",
        source_column="c_orders_user",
        target_table="t_users",
        target_column="c_users_id",
        type="one-to-many",
        on_update="CASCADE",
        on_delete="RESTRICT",
    )
