"""Records exchanged with the query executor and metadata browser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DatabaseType(Enum):
    """Backends the browser can connect to."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    REDIS = "redis"


@dataclass
class QueryResult:
    """Result of executing one statement."""

    columns: list[str]
    rows: list[list[Any]] = field(default_factory=list)
    row_count: int = 0
    message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QueryResult:
        """Build a result from its JSON form; ``row_count`` defaults to the row total."""
        rows = [list(row) for row in data.get("rows", [])]
        return cls(
            columns=list(data["columns"]),
            rows=rows,
            row_count=data.get("row_count", len(rows)),
            message=data.get("message"),
        )


@dataclass
class ColumnInfo:
    """Column metadata as reported by the backend."""

    name: str
    data_type: str
    is_nullable: bool = True
    column_default: str | None = None
    is_primary_key: bool = False


@dataclass
class IndexInfo:
    """Index metadata as reported by the backend."""

    name: str
    columns: list[str]
    is_unique: bool = False
    is_primary: bool = False


@dataclass
class ConstraintInfo:
    """Constraint metadata; the foreign fields are only set for foreign keys."""

    name: str
    constraint_type: str
    columns: list[str]
    foreign_table: str | None = None
    foreign_columns: list[str] | None = None
