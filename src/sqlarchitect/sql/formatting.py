"""Literal and type formatting shared by every dialect."""

import re
from typing import Any, Optional

# Default-value tokens emitted without quotes (compared upper-cased).
UNQUOTED_DEFAULTS = {"NOW()", "CURRENT_TIMESTAMP", "CURRENT_DATE", "CURRENT_TIME", "NULL"}

# Base types that take a "(N)" or "(N,M)" suffix.
LENGTH_TYPES = {
    "CHAR",
    "VARCHAR",
    "NCHAR",
    "NVARCHAR",
    "VARCHAR2",
    "NVARCHAR2",
    "BINARY",
    "VARBINARY",
    "RAW",
    "DECIMAL",
    "NUMERIC",
    "NUMBER",
}

VALUE_LIST_TYPES = {"ENUM", "SET"}

# Decimal and exponent forms, unsigned 0x/0o/0b integers and Infinity.
_NUMBER_RE = re.compile(
    r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+"
    r"|[+-]?Infinity"
)


def escape_literal(value: str) -> str:
    """Double embedded single quotes."""
    return value.replace("'", "''")


def quote_literal(value: Any) -> str:
    return f"'{escape_literal(str(value))}'"


def is_numeric(value: str) -> bool:
    return bool(_NUMBER_RE.fullmatch(value.strip()))


def format_default_value(value: str) -> str:
    """
    Render a column DEFAULT value.

    Time functions and NULL pass through, numbers pass through,
    anything else becomes a quoted string literal.
    """
    if value.strip().upper() in UNQUOTED_DEFAULTS:
        return value
    if is_numeric(value):
        return value
    return quote_literal(value)


def format_data_type(data_type: str, length: Optional[str]) -> str:
    """
    Append the length/precision or value list to a base type.

    Args:
        data_type: Dialect type token as typed in the editor
        length: "N", "N,M" or, for ENUM/SET, "a,b,c"

    Returns:
        Type text for a column definition
    """
    length = (length or "").strip()
    if not length:
        return data_type

    base = data_type.strip().upper()
    if base in LENGTH_TYPES:
        return f"{data_type}({length})"
    if base in VALUE_LIST_TYPES:
        values = ", ".join(quote_literal(v.strip()) for v in length.split(","))
        return f"{data_type}({values})"
    return data_type


def format_value(value: Any) -> str:
    """Render a Python value as a DML literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    return quote_literal(value)
