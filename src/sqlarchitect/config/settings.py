"""Application settings using Pydantic Settings."""

from pathlib import Path
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import find_dotenv, load_dotenv

SUPPORTED_DIALECTS = ("mysql", "postgresql", "sqlite", "mariadb", "oracle")


def load_env_file() -> Optional[str]:
    """
    Load the nearest .env file, searching from the working directory upwards.

    Variables already present in the environment win over the file.

    Returns:
        Path of the loaded file, or None when there is none
    """
    env_path = find_dotenv(usecwd=True)
    if not env_path:
        return None
    load_dotenv(env_path, override=False)
    return env_path


class Settings(BaseSettings):
    """
    SQL Architect configuration.

    Every field can be set through an environment variable of the same name
    (case-insensitive) or a .env file.
    """

    # Project defaults
    default_dialect: str = "mysql"
    project_name: str = "SQL Architect Project"
    output_dir: Path = Path("output")  # CLI output when no --out is given; created on first write

    # Remote connectors
    http_timeout: float = 30.0  # seconds, no retries
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    github_token: Optional[str] = None
    github_api_url: str = "https://api.github.com"
    github_repo: Optional[str] = None  # "owner/repo"
    github_path: str = "sql-architect.json"

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=None,  # loaded by load_env_file()
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("default_dialect")
    @classmethod
    def check_dialect(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SUPPORTED_DIALECTS:
            raise ValueError(f"default_dialect must be one of {', '.join(SUPPORTED_DIALECTS)}, got '{v}'")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.strip().upper()

    def __init__(self, **kwargs):
        """Read .env and validate; only the log file directory is created up front."""
        load_env_file()
        super().__init__(**kwargs)
        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
