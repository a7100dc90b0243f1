"""Per-dialect formatting rules.

Each supported dialect is one entry in ``DIALECT_RULES``; adding a dialect
means adding a ``SQLDialect`` member and a row here.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Union
from sqlarchitect.model.entities import SQLDialect
from sqlarchitect.config.logging import get_logger

logger = get_logger(__name__)


def _backtick(identifier: str) -> str:
    return f"`{identifier}`"


def _double_quote(identifier: str) -> str:
    return f'"{identifier}"'


def _double_quote_upper(identifier: str) -> str:
    return f'"{identifier.upper()}"'


def _bare(identifier: str) -> str:
    return identifier


@dataclass(frozen=True)
class DialectRules:
    """Formatting rules for one SQL flavour."""

    name: str
    quote: Callable[[str], str]
    auto_increment: str
    # Inline database charset/collation, table options, column comments,
    # index USING clause and DROP INDEX ... ON <table>.
    mysql_family: bool = False


DIALECT_RULES: Dict[SQLDialect, DialectRules] = {
    SQLDialect.MYSQL: DialectRules("mysql", _backtick, " AUTO_INCREMENT", mysql_family=True),
    SQLDialect.MARIADB: DialectRules("mariadb", _backtick, " AUTO_INCREMENT", mysql_family=True),
    SQLDialect.POSTGRESQL: DialectRules("postgresql", _double_quote, ""),  # serial types instead
    SQLDialect.SQLITE: DialectRules("sqlite", _double_quote, " AUTOINCREMENT"),
    SQLDialect.ORACLE: DialectRules("oracle", _double_quote_upper, " AUTO_INCREMENT"),
}

FALLBACK_RULES = DialectRules("generic", _bare, " AUTO_INCREMENT")


def resolve_dialect(tag: Union[SQLDialect, str]) -> Union[SQLDialect, None]:
    """Return the SQLDialect for a tag, or None when the tag is unknown."""
    if isinstance(tag, SQLDialect):
        return tag
    try:
        return SQLDialect(str(tag).lower())
    except ValueError:
        return None


def get_dialect_rules(tag: Union[SQLDialect, str]) -> DialectRules:
    """
    Look up the rules for a dialect tag.

    Unknown tags get unquoted identifiers and the default auto-increment
    token rather than an error.
    """
    dialect = resolve_dialect(tag)
    if dialect is None:
        logger.warning(f"Unknown SQL dialect '{tag}', falling back to unquoted identifiers")
        return FALLBACK_RULES
    return DIALECT_RULES[dialect]
