"""Export of query results as JSON or INSERT statements."""

from __future__ import annotations

import json

from sqlscript.types import DatabaseType, QueryResult
from sqlscript.values import format_assigned_value


def export_as_json(result: QueryResult) -> str:
    """Render *result* as a JSON array of ``{column: value}`` objects."""
    rows = [dict(zip(result.columns, row)) for row in result.rows]
    return json.dumps(rows, indent=2, ensure_ascii=False)


def export_as_sql_insert(
    result: QueryResult,
    table_name: str,
    db_type: DatabaseType | str | None = None,
) -> str:
    """Render *result* as one multi-row INSERT.

    MySQL gets ``INSERT IGNORE`` and PostgreSQL ``ON CONFLICT DO NOTHING`` so
    re-running the export against a populated table skips existing rows.
    """
    if not result.rows:
        return "-- No data to export"

    if db_type is not None:
        db_type = DatabaseType(db_type)

    columns = ", ".join(result.columns)
    values = ",\n".join(
        "  (" + ", ".join(format_assigned_value(value) for value in row) + ")"
        for row in result.rows
    )

    if db_type is DatabaseType.MYSQL:
        return f"INSERT IGNORE INTO {table_name} ({columns}) VALUES\n{values};"
    if db_type is DatabaseType.POSTGRES:
        return f"INSERT INTO {table_name} ({columns}) VALUES\n{values}\nON CONFLICT DO NOTHING;"
    return f"INSERT INTO {table_name} ({columns}) VALUES\n{values};"
