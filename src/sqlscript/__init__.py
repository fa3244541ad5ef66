"""sqlscript - statement splitting and DML generation for a SQL editor."""

from sqlscript.ddl import generate_column_sql, generate_constraint_sql, generate_index_sql
from sqlscript.dml import (
    RowEdit,
    build_delete_conditions,
    build_delete_query,
    build_update_query,
    extend_or_build_delete,
    merge_delete_query,
    parse_delete_query,
    select_predicate_columns,
)
from sqlscript.export import export_as_json, export_as_sql_insert
from sqlscript.parsing import ParsedDelete
from sqlscript.statements import (
    Statement,
    active_statement,
    resolve_statement,
    split_statements,
    statement_at_cursor,
)
from sqlscript.types import (
    ColumnInfo,
    ConstraintInfo,
    DatabaseType,
    IndexInfo,
    QueryResult,
)
from sqlscript.values import format_assigned_value, format_predicate_value

__all__ = [
    # Statements
    "Statement",
    "split_statements",
    "resolve_statement",
    "active_statement",
    "statement_at_cursor",
    # Values
    "format_predicate_value",
    "format_assigned_value",
    # DML
    "RowEdit",
    "ParsedDelete",
    "select_predicate_columns",
    "build_delete_conditions",
    "build_delete_query",
    "parse_delete_query",
    "merge_delete_query",
    "extend_or_build_delete",
    "build_update_query",
    # Export and DDL
    "export_as_json",
    "export_as_sql_insert",
    "generate_column_sql",
    "generate_index_sql",
    "generate_constraint_sql",
    # Records
    "DatabaseType",
    "QueryResult",
    "ColumnInfo",
    "IndexInfo",
    "ConstraintInfo",
]

__version__ = "0.1.0"
