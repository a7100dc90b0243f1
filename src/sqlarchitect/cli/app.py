"""Typer CLI application."""

from pathlib import Path
from typing import Optional
import typer

from sqlarchitect.config import get_settings, setup_logging
from sqlarchitect.model import Project, SQLDialect, data_types_for, validate_project, has_errors
from sqlarchitect.sql import SQLGenerator, generate_schema_script
from sqlarchitect.state import initial_project
from sqlarchitect.utils.project_io import (
    ProjectImportError,
    load_project_from_json,
    save_project_to_json,
)
from sqlarchitect.connectors import ConnectorError, SupabaseConnector, GitHubConnector

app = typer.Typer(help="SQL Architect: schema designer projects to SQL")


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _load(project_json: Path) -> Project:
    try:
        return load_project_from_json(project_json)
    except (FileNotFoundError, ProjectImportError) as e:
        _fail(str(e))


def _dialect(value: Optional[str], project: Optional[Project] = None) -> SQLDialect:
    if value is None:
        return project.dialect if project else SQLDialect(get_settings().default_dialect)
    try:
        return SQLDialect(value.lower())
    except ValueError:
        _fail(f"Unknown dialect '{value}'. Choose from: {', '.join(d.value for d in SQLDialect)}")


def _emit(text: str, out: Optional[Path]) -> None:
    if out is None:
        typer.echo(text)
        return
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text + "\n", encoding="utf-8")
    typer.echo(f"✓ Wrote {out}")


@app.command()
def new(
    out: Path,
    name: Optional[str] = typer.Option(None, "--name", help="Project name"),
    dialect: Optional[str] = typer.Option(None, "--dialect", help="SQL dialect"),
):
    """
    Create an empty project JSON file.

    Args:
        out: Output path for the project JSON
    """
    setup_logging()
    project = initial_project(name=name, dialect=_dialect(dialect))
    save_project_to_json(project, out)
    typer.echo(f"✓ Created project '{project.name}' ({project.dialect.value}) at {out}")


@app.command()
def generate(
    project_json: Path,
    dialect: Optional[str] = typer.Option(None, "--dialect", help="Override the project dialect"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write SQL to this file"),
):
    """
    Generate CREATE TABLE statements for every table of a project.

    Args:
        project_json: Path to the project JSON file
    """
    setup_logging()
    project = _load(project_json)
    generator = SQLGenerator(_dialect(dialect, project))
    _emit(generator.generate_full_sql(project.tables, project.relationships), out)


@app.command()
def script(
    project_json: Path,
    dialect: Optional[str] = typer.Option(None, "--dialect", help="Override the project dialect"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write SQL to this file"),
):
    """Generate a script covering databases, tables, indexes, views, routines, triggers and users."""
    setup_logging()
    project = _load(project_json)
    _emit(generate_schema_script(project, _dialect(dialect, project)), out)


@app.command()
def export(
    project_json: Path,
    include_data: bool = typer.Option(True, "--data/--no-data", help="Append the data section"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write SQL to this file"),
):
    """Generate a drop-and-recreate export script."""
    setup_logging()
    project = _load(project_json)
    if out is None:
        out = get_settings().output_dir / f"{project.name.replace(' ', '_')}.sql"
    generator = SQLGenerator(project.dialect)
    _emit(generator.generate_export_sql(project.tables, include_data=include_data), out)


@app.command()
def validate(project_json: Path):
    """
    Report dangling references and suspicious definitions.

    Exits with status 1 when any error-level issue is found.
    """
    setup_logging()
    project = _load(project_json)
    issues = validate_project(project)
    if not issues:
        typer.echo("✓ No issues found")
        return
    for issue in issues:
        typer.echo(f"[{issue.severity.upper()}] {issue.code} at {issue.location}: {issue.message}")
    if has_errors(issues):
        raise typer.Exit(1)


@app.command()
def types(dialect: Optional[str] = typer.Option(None, "--dialect", help="SQL dialect")):
    """List the data types offered for a dialect."""
    for data_type in data_types_for(_dialect(dialect)):
        typer.echo(data_type)


@app.command()
def supabase_check(
    url: Optional[str] = typer.Option(None, "--url", help="Supabase project URL"),
    key: Optional[str] = typer.Option(None, "--key", help="Supabase anon key"),
):
    """Check Supabase credentials."""
    setup_logging()
    settings = get_settings()
    try:
        connector = SupabaseConnector(url or settings.supabase_url, key or settings.supabase_anon_key)
        connector.connect()
    except ConnectorError as e:
        _fail(str(e))
    typer.echo("✓ Successfully connected to Supabase!")


@app.command()
def supabase_sql(
    project_json: Path,
    out: Optional[Path] = typer.Option(None, "--out", help="Write SQL to this file"),
):
    """Generate the PostgreSQL schema to paste into the Supabase SQL editor."""
    setup_logging()
    project = _load(project_json)
    generator = SQLGenerator(SQLDialect.POSTGRESQL)
    _emit(generator.generate_full_sql(project.tables, project.relationships), out)


def _github(token: Optional[str]) -> GitHubConnector:
    connector = GitHubConnector(token or get_settings().github_token)
    connector.connect()
    return connector


@app.command()
def github_save(
    project_json: Path,
    repo: Optional[str] = typer.Option(None, "--repo", help="owner/repo"),
    path: Optional[str] = typer.Option(None, "--path", help="File path in the repository"),
    token: Optional[str] = typer.Option(None, "--token", help="GitHub personal access token"),
):
    """Save a project JSON file to a GitHub repository."""
    setup_logging()
    settings = get_settings()
    project = _load(project_json)
    repo = repo or settings.github_repo
    path = path or settings.github_path
    if not repo:
        _fail("Repository is required (--repo or GITHUB_REPO)")
    try:
        _github(token).save_project(repo, path, project)
    except ConnectorError as e:
        _fail(f"Failed to save: {e}")
    typer.echo(f"✓ Project saved to {repo}/{path}")


@app.command()
def github_load(
    out: Path,
    repo: Optional[str] = typer.Option(None, "--repo", help="owner/repo"),
    path: Optional[str] = typer.Option(None, "--path", help="File path in the repository"),
    token: Optional[str] = typer.Option(None, "--token", help="GitHub personal access token"),
):
    """Load a project JSON file from a GitHub repository."""
    setup_logging()
    settings = get_settings()
    repo = repo or settings.github_repo
    path = path or settings.github_path
    if not repo:
        _fail("Repository is required (--repo or GITHUB_REPO)")
    try:
        project = _github(token).load_project(repo, path)
    except (ConnectorError, ProjectImportError) as e:
        _fail(f"Failed to load: {e}")
    save_project_to_json(project, out)
    typer.echo(f"✓ Project '{project.name}' loaded into {out}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
