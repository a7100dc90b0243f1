"""Tests for the command line interface."""

import json
import pytest
from typer.testing import CliRunner
from sqlarchitect.cli import app as cli_module
from sqlarchitect.cli.app import app
from sqlarchitect.connectors import GitHubConnector, SupabaseConnector
from sqlarchitect.model import Project, Relationship, Table
from sqlarchitect.utils import load_project_from_json, save_project_to_json
from test_connectors import FakeResponse, FakeSession

runner = CliRunner()


@pytest.fixture
def project_file(tmp_path, users_table, orders_table, orders_to_users):
    path = tmp_path / "shop.json"
    save_project_to_json(
        Project(name="Shop", tables=[users_table, orders_table], relationships=[orders_to_users]), path
    )
    return path


def test_new_creates_project(tmp_path):
    out = tmp_path / "p.json"
    result = runner.invoke(app, ["new", str(out), "--name", "Blog", "--dialect", "sqlite"])
    assert result.exit_code == 0
    project = load_project_from_json(out)
    assert project.name == "Blog"
    assert project.dialect.value == "sqlite"
    assert len(project.databases) == 1


def test_generate_prints_sql(project_file):
    result = runner.invoke(app, ["generate", str(project_file)])
    assert result.exit_code == 0
    assert "CREATE TABLE `users` (" in result.output
    assert "FOREIGN KEY (`user_id`) REFERENCES `users`(`id`)" in result.output


def test_generate_dialect_override(project_file, tmp_path):
    out = tmp_path / "schema.sql"
    result = runner.invoke(app, ["generate", str(project_file), "--dialect", "postgresql", "--out", str(out)])
    assert result.exit_code == 0
    assert 'CREATE TABLE "orders" (' in out.read_text()


def test_unknown_dialect_rejected(project_file):
    result = runner.invoke(app, ["generate", str(project_file), "--dialect", "db2"])
    assert result.exit_code == 1


def test_missing_project_file(tmp_path):
    result = runner.invoke(app, ["generate", str(tmp_path / "nope.json")])
    assert result.exit_code == 1


def test_script_command(project_file):
    result = runner.invoke(app, ["script", str(project_file)])
    assert result.exit_code == 0
    assert "-- Tables" in result.output


def test_export_defaults_to_output_dir(project_file, tmp_path):
    result = runner.invoke(app, ["export", str(project_file), "--no-data"])
    assert result.exit_code == 0
    written = tmp_path / "output" / "Shop.sql"
    text = written.read_text()
    assert text.startswith("-- SQL Architect Export")
    assert "DROP TABLE IF EXISTS `orders`;" in text
    assert "-- Table data" not in text


def test_validate_clean_and_broken(project_file, tmp_path):
    assert runner.invoke(app, ["validate", str(project_file)]).exit_code == 0

    broken = tmp_path / "broken.json"
    save_project_to_json(
        Project(
            tables=[Table(id="t", name="t")],
            relationships=[Relationship(source_table="t", source_column="x", target_table="gone", target_column="y")],
        ),
        broken,
    )
    result = runner.invoke(app, ["validate", str(broken)])
    assert result.exit_code == 1
    assert "REL_TARGET_TABLE_MISSING" in result.output


def test_types_command():
    result = runner.invoke(app, ["types", "--dialect", "oracle"])
    assert result.exit_code == 0
    assert "VARCHAR2" in result.output.split()


def test_supabase_check(monkeypatch):
    session = FakeSession(FakeResponse(200, []))
    monkeypatch.setattr(
        cli_module, "SupabaseConnector", lambda url, key: SupabaseConnector(url, key, session=session)
    )
    result = runner.invoke(app, ["supabase-check", "--url", "https://x.supabase.co", "--key", "anon"])
    assert result.exit_code == 0
    assert "Successfully connected" in result.output


def test_supabase_check_without_credentials():
    result = runner.invoke(app, ["supabase-check"])
    assert result.exit_code == 1


def test_supabase_sql(project_file):
    result = runner.invoke(app, ["supabase-sql", str(project_file)])
    assert result.exit_code == 0
    assert 'CREATE TABLE "users"' in result.output


def test_github_save_requires_repo(project_file):
    result = runner.invoke(app, ["github-save", str(project_file), "--token", "tok"])
    assert result.exit_code == 1


def test_github_round_trip(monkeypatch, project_file, tmp_path):
    """Save pushes the project JSON; load writes it back out."""
    save_session = FakeSession(
        FakeResponse(200, {"login": "octo"}), FakeResponse(404, None), FakeResponse(201, {"content": {}})
    )
    monkeypatch.setattr(cli_module, "GitHubConnector", lambda token: GitHubConnector(token, session=save_session))
    result = runner.invoke(app, ["github-save", str(project_file), "--repo", "octo/repo", "--token", "tok"])
    assert result.exit_code == 0
    pushed = save_session.calls[2][2]["json"]["content"]

    load_session = FakeSession(FakeResponse(200, {"login": "octo"}), FakeResponse(200, {"content": pushed, "sha": "s"}))
    monkeypatch.setattr(cli_module, "GitHubConnector", lambda token: GitHubConnector(token, session=load_session))
    out = tmp_path / "loaded.json"
    result = runner.invoke(app, ["github-load", str(out), "--repo", "octo/repo", "--token", "tok"])
    assert result.exit_code == 0
    assert load_project_from_json(out) == load_project_from_json(project_file)
    assert json.loads(out.read_text())["name"] == "Shop"
