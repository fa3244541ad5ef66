"""Command-line front end for the SQL script engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from sqlscript.dml import RowEdit, build_delete_query, build_update_query, extend_or_build_delete
from sqlscript.export import export_as_json, export_as_sql_insert
from sqlscript.statements import split_statements, statement_at_cursor
from sqlscript.types import DatabaseType, QueryResult

logger = logging.getLogger(__name__)


def read_source(path: Path | None) -> str:
    """Read a SQL buffer from *path*, or stdin when it is None or ``-``."""
    if path is None or str(path) == "-":
        return sys.stdin.read()
    return path.read_text()


def load_json(path: Path) -> Any:
    """Load a JSON document from *path*."""
    with open(path) as f:
        return json.load(f)


def parse_edits(data: list[dict[str, Any]]) -> list[RowEdit]:
    """Build RowEdits from their JSON form.

    JSON object keys are strings, so change keys are converted back to
    column indices; file order is kept as SET-clause order.
    """
    if not isinstance(data, list):
        raise ValueError("Edits file must contain a JSON array")
    edits = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Edit {i} is not an object")
        if not isinstance(item.get("changes", {}), dict):
            raise ValueError(f"Edit {i}: changes must be an object mapping column index to value")
        if not isinstance(item.get("original_row"), list):
            raise ValueError(f"Edit {i}: original_row must be an array")
        changes = {int(index): value for index, value in item.get("changes", {}).items()}
        edits.append(RowEdit(
            row_index=item.get("row_index", i),
            original_row=list(item["original_row"]),
            changes=changes,
        ))
    return edits


def load_rows(path: Path) -> list[list[Any]]:
    """Load a JSON array of row arrays from *path*."""
    rows = load_json(path)
    if not isinstance(rows, list):
        raise ValueError("Rows file must contain a JSON array of rows")
    for i, row in enumerate(rows):
        if not isinstance(row, list):
            raise ValueError(f"Row {i} is not an array")
    return rows


def _split_columns(values: list[str]) -> list[str]:
    # Accept both "--columns a,b" and "--columns a --columns b"
    columns: list[str] = []
    for value in values:
        columns.extend(part.strip() for part in value.split(",") if part.strip())
    return columns


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_split(args: argparse.Namespace) -> int:
    source = read_source(args.file)
    statements = split_statements(source)
    logger.debug("split %d statements", len(statements))

    if args.json:
        print(json.dumps(
            [{"text": s.text, "start": s.start, "end": s.end} for s in statements],
            indent=2,
        ))
        return 0

    for stmt in statements:
        print(f"-- [{stmt.start}:{stmt.end}]")
        print(stmt.text)
    return 0


def cmd_at(args: argparse.Namespace) -> int:
    source = read_source(args.file)
    if args.offset < 0 or args.offset > len(source):
        print(f"Error: Offset {args.offset} is outside the buffer (0-{len(source)})", file=sys.stderr)
        return 1
    text = statement_at_cursor(source, args.offset)
    if not text:
        print("Error: Buffer is empty", file=sys.stderr)
        return 1
    print(text)
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    columns = _split_columns(args.columns)
    pk_columns = _split_columns(args.pk)
    rows = load_rows(args.rows)

    if args.existing is not None:
        existing = read_source(args.existing)
        print(extend_or_build_delete(existing, args.table, args.schema, pk_columns, columns, rows))
    else:
        print(build_delete_query(args.table, args.schema, pk_columns, columns, rows))
    return 0


def cmd_update(args: argparse.Namespace) -> int:
    columns = _split_columns(args.columns)
    pk_columns = _split_columns(args.pk)
    edits = parse_edits(load_json(args.edits))
    query = build_update_query(args.table, args.schema, pk_columns, columns, edits)
    if query:
        print(query)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    result = QueryResult.from_dict(load_json(args.result))
    if args.format == "json":
        print(export_as_json(result))
        return 0

    if not args.table:
        print("Error: --table is required for insert export", file=sys.stderr)
        return 1
    db_type = DatabaseType(args.dialect) if args.dialect else None
    print(export_as_sql_insert(result, args.table, db_type))
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    arg_parser = argparse.ArgumentParser(
        prog="sqlscript",
        description="Split SQL scripts and generate DELETE/UPDATE statements from result rows",
    )
    arg_parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    sub = arg_parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("split", help="List the statements of a script")
    p.add_argument("file", type=Path, nargs="?", default=None, help="SQL file (default: stdin)")
    p.add_argument("--json", action="store_true", help="Print statements as JSON")
    p.set_defaults(func=cmd_split)

    p = sub.add_parser("at", help="Print the statement under a cursor offset")
    p.add_argument("offset", type=int, help="Cursor offset into the buffer")
    p.add_argument("file", type=Path, nargs="?", default=None, help="SQL file (default: stdin)")
    p.set_defaults(func=cmd_at)

    def add_table_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--table", required=True, help="Target table")
        p.add_argument("--schema", required=True, help="Target schema")
        p.add_argument("--pk", action="append", default=[], help="Primary key column(s)")
        p.add_argument("--columns", action="append", required=True, help="Result column names")

    p = sub.add_parser("delete", help="Generate a DELETE for result rows")
    add_table_args(p)
    p.add_argument("rows", type=Path, help="JSON file with a list of rows")
    p.add_argument("--existing", type=Path, help="File holding a DELETE to extend")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("update", help="Generate UPDATEs for edited rows")
    add_table_args(p)
    p.add_argument("edits", type=Path, help="JSON file with a list of row edits")
    p.set_defaults(func=cmd_update)

    p = sub.add_parser("export", help="Export a query result")
    p.add_argument("result", type=Path, help="JSON file with columns and rows")
    p.add_argument("--format", choices=["json", "insert"], default="json")
    p.add_argument("--table", help="Table name for insert export")
    p.add_argument("--dialect", choices=[t.value for t in DatabaseType], help="Target database type")
    p.set_defaults(func=cmd_export)

    return arg_parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except KeyError as e:
        print(f"Error: Missing field {e.args[0]!r}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
