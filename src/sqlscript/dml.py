"""DELETE and UPDATE generation from result-grid rows.

Rows are identified by their primary key when every key value is known.
If the table has no primary key, or any selected row has a NULL in a key
column, the whole row image is used instead. The choice is made once per
batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from sqlscript.parsing.delete_parser import DeleteParser, ParsedDelete
from sqlscript.values import format_assigned_value, format_predicate_value

logger = logging.getLogger(__name__)

Row = Sequence[Any]


@dataclass
class RowEdit:
    """Pending cell edits for one fetched row.

    ``original_row`` is the snapshot taken before editing and is what the
    WHERE clause matches on. ``changes`` maps column index to new value;
    its iteration order is the SET-clause order.
    """

    row_index: int
    original_row: Row
    changes: dict[int, Any] = field(default_factory=dict)


_parser = DeleteParser()


def _value_at(row: Row, index: int) -> Any:
    # Cells missing from a short row read as NULL
    return row[index] if index < len(row) else None


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def select_predicate_columns(
    pk_columns: Sequence[str],
    columns: Sequence[str],
    rows: Iterable[Row],
) -> list[str]:
    """Choose the columns that identify each row of a batch."""
    if not pk_columns:
        return list(columns)

    pk_indices = [columns.index(pk) for pk in pk_columns]
    for row in rows:
        if any(_value_at(row, i) is None for i in pk_indices):
            return list(columns)

    return list(pk_columns)


def build_predicate(predicate_columns: Sequence[str], columns: Sequence[str], row: Row) -> str:
    """Render ``col = value AND col IS NULL ...`` for one row."""
    parts = []
    for name in predicate_columns:
        value = _value_at(row, columns.index(name))
        parts.append(f"{name} {format_predicate_value(value)}")
    return " AND ".join(parts)


# ---------------------------------------------------------------------------
# DELETE
# ---------------------------------------------------------------------------


def build_delete_conditions(
    pk_columns: Sequence[str],
    columns: Sequence[str],
    rows: Sequence[Row],
) -> list[str]:
    """Return one parenthesized condition per row, ready to be OR-ed."""
    predicate_columns = select_predicate_columns(pk_columns, columns, rows)
    return [f"({build_predicate(predicate_columns, columns, row)})" for row in rows]


def render_delete(schema: str, table: str, conditions: Sequence[str]) -> str:
    """Lay out a DELETE with one OR-branch per line."""
    where = "\n   OR ".join(conditions)
    return f"DELETE FROM {schema}.{table}\nWHERE {where};"


def build_delete_query(
    table: str,
    schema: str,
    pk_columns: Sequence[str],
    columns: Sequence[str],
    rows: Sequence[Row],
) -> str:
    """Build a DELETE matching exactly the given rows.

    Raises:
        ValueError: If *rows* is empty.
    """
    if not rows:
        raise ValueError("Cannot build a DELETE without any rows")
    return render_delete(schema, table, build_delete_conditions(pk_columns, columns, rows))


def parse_delete_query(text: str) -> ParsedDelete | None:
    """Parse a DELETE in the layout produced by :func:`build_delete_query`.

    Returns None for anything else.
    """
    try:
        return _parser.parse(text.strip())
    except SyntaxError:
        return None


def merge_delete_query(existing_text: str, new_conditions: Iterable[str]) -> str | None:
    """Append the conditions not already present to an existing DELETE.

    Conditions are compared as exact text. Returns None when *existing_text*
    is not a recognized DELETE.
    """
    parsed = parse_delete_query(existing_text)
    if parsed is None:
        return None
    return _merge_parsed(parsed, new_conditions)


def _merge_parsed(parsed: ParsedDelete, new_conditions: Iterable[str]) -> str:
    conditions = list(parsed.conditions)
    seen = set(conditions)
    for cond in new_conditions:
        if cond not in seen:
            seen.add(cond)
            conditions.append(cond)

    return render_delete(parsed.schema, parsed.table, conditions)


def extend_or_build_delete(
    existing_text: str,
    table: str,
    schema: str,
    pk_columns: Sequence[str],
    columns: Sequence[str],
    rows: Sequence[Row],
) -> str:
    """Add *rows* to the DELETE in the editor, or start a new one.

    The existing text is only extended when it is a recognized DELETE on the
    same ``schema.table``.
    """
    parsed = parse_delete_query(existing_text)
    if parsed is None or (parsed.schema, parsed.table) != (schema, table):
        logger.debug("existing text is not a DELETE on %s.%s, building a new one", schema, table)
        return build_delete_query(table, schema, pk_columns, columns, rows)

    logger.debug("merging %d row(s) into existing DELETE on %s.%s", len(rows), schema, table)
    return _merge_parsed(parsed, build_delete_conditions(pk_columns, columns, rows))


# ---------------------------------------------------------------------------
# UPDATE
# ---------------------------------------------------------------------------


def build_update_query(
    table: str,
    schema: str,
    pk_columns: Sequence[str],
    columns: Sequence[str],
    edits: Sequence[RowEdit],
) -> str:
    """Build one UPDATE statement per edited row, newline-joined.

    Raises:
        ValueError: If an edit has no changed columns.
    """
    for edit in edits:
        if not edit.changes:
            raise ValueError(f"Row {edit.row_index} has no changed columns")

    predicate_columns = select_predicate_columns(
        pk_columns, columns, [edit.original_row for edit in edits]
    )

    statements = []
    for edit in edits:
        assignments = ", ".join(
            f"{columns[index]} = {format_assigned_value(value)}"
            for index, value in edit.changes.items()
        )
        where = build_predicate(predicate_columns, columns, edit.original_row)
        statements.append(f"UPDATE {schema}.{table} SET {assignments} WHERE {where};")

    return "\n".join(statements)
