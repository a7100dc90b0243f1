"""SQL generation for the supported dialects."""

from .dialects import DialectRules, DIALECT_RULES, get_dialect_rules
from .generator import SQLGenerator, ALTER_OPERATIONS
from .script import generate_schema_script

__all__ = [
    "DialectRules",
    "DIALECT_RULES",
    "get_dialect_rules",
    "SQLGenerator",
    "ALTER_OPERATIONS",
    "generate_schema_script",
]
