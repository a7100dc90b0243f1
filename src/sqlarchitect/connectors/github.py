"""GitHub contents-API client for storing project JSON in a repository."""

import base64
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import requests
from sqlarchitect.model.project import Project
from sqlarchitect.utils.project_io import dump_project, parse_project
from sqlarchitect.config.settings import get_settings
from sqlarchitect.config.logging import get_logger
from .base import ConnectorError, error_message

logger = get_logger(__name__)

PER_PAGE = 100


def _split_repo(repo_full_name: str) -> Tuple[str, str]:
    owner, _, repo = repo_full_name.partition("/")
    if not owner or not repo:
        raise ConnectorError(f"Repository must be given as 'owner/repo', got '{repo_full_name}'")
    return owner, repo


class GitHubConnector:
    """
    Read/write one JSON file in a repository using a personal access token.

    Reads return the file text and its blob sha; writes send the prior sha
    to update a file and omit it to create one.
    """

    def __init__(
        self,
        token: str,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if not token:
            raise ConnectorError("Personal Access Token is required.")
        settings = get_settings()
        self.api_url = (api_url or settings.github_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        self.user: Optional[Dict[str, Any]] = None

    @property
    def is_connected(self) -> bool:
        return self.user is not None

    def _require_connection(self) -> None:
        if self.user is None:
            raise ConnectorError("Not connected to GitHub")

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, f"{self.api_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ConnectorError(f"GitHub request failed: {e}") from e

    def _contents_path(self, repo_full_name: str, path: str) -> str:
        owner, repo = _split_repo(repo_full_name)
        return f"/repos/{owner}/{repo}/contents/{path.lstrip('/')}"

    def connect(self) -> Dict[str, Any]:
        """
        Authenticate and fetch the token owner's profile.

        Raises:
            ConnectorError: If the token is rejected or GitHub is unreachable
        """
        resp = self._request("GET", "/user")
        if resp.status_code != 200:
            self.user = None
            raise ConnectorError(
                f"Failed to connect to GitHub. Check your token. ({error_message(resp)})",
                resp.status_code,
            )
        self.user = resp.json()
        logger.info(f"Connected to GitHub as {self.user.get('login')}")
        return self.user

    def disconnect(self) -> None:
        self.user = None
        logger.info("Disconnected from GitHub")

    def list_repos(self) -> List[Dict[str, Any]]:
        """All repositories visible to the authenticated user."""
        self._require_connection()
        repos: List[Dict[str, Any]] = []
        page = 1
        while True:
            resp = self._request("GET", "/user/repos", params={"per_page": PER_PAGE, "page": page})
            if resp.status_code != 200:
                raise ConnectorError(f"Failed to fetch repositories: {error_message(resp)}", resp.status_code)
            batch = resp.json()
            repos.extend(batch)
            if len(batch) < PER_PAGE:
                return repos
            page += 1

    def read_file(self, repo_full_name: str, path: str) -> Tuple[str, str]:
        """
        Read a file from the default branch.

        Returns:
            Tuple of (decoded text, blob sha)

        Raises:
            ConnectorError: If the file is missing or not a regular file
        """
        self._require_connection()
        resp = self._request("GET", self._contents_path(repo_full_name, path))
        if resp.status_code != 200:
            raise ConnectorError(
                f"Failed to read {repo_full_name}/{path}: {error_message(resp)}", resp.status_code
            )
        data = resp.json()
        if not isinstance(data, dict) or "content" not in data:
            raise ConnectorError(f"{repo_full_name}/{path} is not a file")
        text = base64.b64decode(data["content"]).decode("utf-8")
        return text, data["sha"]

    def file_sha(self, repo_full_name: str, path: str) -> Optional[str]:
        """Current blob sha of a file, or None when it does not exist yet."""
        self._require_connection()
        resp = self._request("GET", self._contents_path(repo_full_name, path))
        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            raise ConnectorError(
                f"Failed to read {repo_full_name}/{path}: {error_message(resp)}", resp.status_code
            )
        data = resp.json()
        return data.get("sha") if isinstance(data, dict) else None

    def write_file(
        self, repo_full_name: str, path: str, text: str, message: str, sha: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create (no sha) or update (prior sha) a file with one commit."""
        self._require_connection()
        payload: Dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(text.encode("utf-8")).decode("ascii"),
        }
        if sha:
            payload["sha"] = sha
        resp = self._request("PUT", self._contents_path(repo_full_name, path), json=payload)
        if resp.status_code not in (200, 201):
            raise ConnectorError(
                f"Failed to save {repo_full_name}/{path}: {error_message(resp)}", resp.status_code
            )
        return resp.json()

    def save_project(self, repo_full_name: str, path: str, project: Project) -> Dict[str, Any]:
        sha = self.file_sha(repo_full_name, path)
        message = f"feat: Update SQL Architect project - {datetime.now(timezone.utc).isoformat()}"
        result = self.write_file(repo_full_name, path, dump_project(project), message, sha=sha)
        logger.info(f"{'Updated' if sha else 'Created'} {repo_full_name}/{path}")
        return result

    def load_project(self, repo_full_name: str, path: str) -> Project:
        text, _ = self.read_file(repo_full_name, path)
        return parse_project(text)
