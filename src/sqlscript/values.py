"""Rendering of result-grid values as SQL literals."""

from __future__ import annotations

import json
from typing import Any


def quote_literal(text: str) -> str:
    """Wrap *text* in single quotes, doubling any embedded quote."""
    return "'" + text.replace("'", "''") + "'"


def _json_literal(value: Any) -> str:
    return quote_literal(json.dumps(value, separators=(",", ":"), ensure_ascii=False))


def format_predicate_value(value: Any) -> str:
    """Format *value* as the right-hand side of a WHERE comparison.

    The result includes the operator, so the caller only prefixes the column
    name: ``IS NULL``, ``= 'text'``, ``= true``, ``= 42``.
    """
    if value is None:
        return "IS NULL"
    if isinstance(value, str):
        return f"= {quote_literal(value)}"
    # bool before numbers: bool is an int subclass
    if isinstance(value, bool):
        return "= true" if value else "= false"
    if isinstance(value, (dict, list, tuple)):
        return f"= {_json_literal(value)}"
    return f"= {value}"


def format_assigned_value(value: Any) -> str:
    """Format *value* as a SET-clause or VALUES literal."""
    if value is None:
        return "NULL"
    if isinstance(value, str):
        return quote_literal(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return _json_literal(value)
    return str(value)
