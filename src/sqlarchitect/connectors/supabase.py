"""Supabase (PostgREST) connectivity probe and schema-sync SQL."""

from typing import Optional
import requests
from sqlarchitect.model.entities import SQLDialect
from sqlarchitect.model.project import Project
from sqlarchitect.sql.generator import SQLGenerator
from sqlarchitect.config.settings import get_settings
from sqlarchitect.config.logging import get_logger
from .base import ConnectorError, error_message

logger = get_logger(__name__)

# Any readable table works for the probe; a missing one still proves the key is valid.
PROBE_TABLE = "tables"


class SupabaseConnector:
    """
    Minimal Supabase REST client authenticated by project URL + anon key.

    Supabase is Postgres-backed, so schema sync always uses PostgreSQL output.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if not url or not anon_key:
            raise ConnectorError("Project URL and Anon Key are required.")
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout if timeout is not None else get_settings().http_timeout
        self.session = session or requests.Session()
        self.connected = False

    @property
    def is_connected(self) -> bool:
        return self.connected

    def _headers(self) -> dict:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.anon_key}",
            "Accept": "application/json",
        }

    def connect(self) -> None:
        """
        Probe the REST endpoint to check the credentials.

        Raises:
            ConnectorError: On rejected credentials or network failure
        """
        endpoint = f"{self.url}/rest/v1/{PROBE_TABLE}"
        try:
            resp = self.session.get(
                endpoint,
                params={"select": "id", "limit": 1},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.connected = False
            raise ConnectorError(f"Connection failed: failed to fetch ({e})") from e

        if resp.status_code in (401, 403):
            self.connected = False
            raise ConnectorError(f"Connection failed: {error_message(resp)}", resp.status_code)

        if resp.status_code >= 400:
            message = error_message(resp)
            if "Invalid API key" in message:
                self.connected = False
                raise ConnectorError(f"Connection failed: {message}", resp.status_code)
            logger.debug(f"Supabase probe returned {resp.status_code} ({message}); credentials accepted")

        self.connected = True
        logger.info(f"Connected to Supabase at {self.url}")

    def disconnect(self) -> None:
        self.connected = False
        logger.info("Disconnected from Supabase")

    def schema_sql(self, project: Project) -> str:
        """PostgreSQL CREATE TABLE script for the project's tables, to run in the SQL editor."""
        generator = SQLGenerator(SQLDialect.POSTGRESQL)
        return generator.generate_full_sql(project.tables, project.relationships)
