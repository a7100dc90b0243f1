"""Remote connectors: Supabase probe/sync and GitHub project storage."""

from .base import ConnectorError
from .supabase import SupabaseConnector
from .github import GitHubConnector

__all__ = ["ConnectorError", "SupabaseConnector", "GitHubConnector"]
