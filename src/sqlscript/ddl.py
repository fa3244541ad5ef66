"""DDL snippets for column, index and constraint metadata."""

from __future__ import annotations

from sqlscript.types import ColumnInfo, ConstraintInfo, IndexInfo


def generate_column_sql(column: ColumnInfo, table: str, schema: str) -> str:
    """Render a column definition, preceded by a comment line."""
    nullable = "" if column.is_nullable else " NOT NULL"
    default = f" DEFAULT {column.column_default}" if column.column_default else ""
    pk = " PRIMARY KEY" if column.is_primary_key else ""
    return (
        f"-- Column definition for {column.name}\n"
        f"{column.name} {column.data_type}{nullable}{default}{pk}"
    )


def generate_index_sql(index: IndexInfo, table: str, schema: str) -> str:
    """Render the statement that recreates *index* on ``schema.table``."""
    columns = ", ".join(index.columns)
    if index.is_primary:
        return (
            "-- Primary key index\n"
            f"ALTER TABLE {schema}.{table}\n"
            f"  ADD PRIMARY KEY ({columns});"
        )

    unique = "UNIQUE " if index.is_unique else ""
    return (
        f"-- Index: {index.name}\n"
        f"CREATE {unique}INDEX {index.name}\n"
        f"  ON {schema}.{table} ({columns});"
    )


def generate_constraint_sql(constraint: ConstraintInfo, table: str, schema: str) -> str:
    """Render an ``ALTER TABLE ... ADD CONSTRAINT`` for *constraint*.

    The kind is matched loosely on the upper-cased type name, so both
    ``FOREIGN KEY`` and ``foreign_key`` are recognized. Check expressions are
    not part of the metadata and are left as a placeholder.
    """
    kind = constraint.constraint_type.upper()
    columns = ", ".join(constraint.columns)
    head = (
        f"ALTER TABLE {schema}.{table}\n"
        f"  ADD CONSTRAINT {constraint.name}\n"
    )

    if "FOREIGN" in kind:
        if constraint.foreign_table:
            foreign_columns = ", ".join(constraint.foreign_columns or [])
            references = f"{constraint.foreign_table}({foreign_columns})"
        else:
            references = "unknown"
        return (
            f"-- Foreign key constraint: {constraint.name}\n"
            + head
            + f"  FOREIGN KEY ({columns})\n"
            f"  REFERENCES {references};"
        )

    if "UNIQUE" in kind:
        return f"-- Unique constraint: {constraint.name}\n" + head + f"  UNIQUE ({columns});"

    if "CHECK" in kind:
        return (
            f"-- Check constraint: {constraint.name}\n"
            + head
            + "  CHECK (...);  -- Check expression not available in metadata"
        )

    if "PRIMARY" in kind:
        return f"-- Primary key constraint: {constraint.name}\n" + head + f"  PRIMARY KEY ({columns});"

    return f"-- {kind} constraint: {constraint.name}\n" + head + f"  ({columns});"
