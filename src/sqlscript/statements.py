"""Statement splitting and cursor resolution for SQL editor buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sqlscript.parsing.script_lexer import ScriptLexer


@dataclass(frozen=True)
class Statement:
    """One semicolon-delimited unit of a buffer.

    ``start`` is inclusive. ``end`` is the offset just past the terminating
    semicolon, or the buffer length for an unterminated final statement.
    """

    text: str
    start: int
    end: int


_lexer = ScriptLexer()
_lexer.build()


def split_statements(buffer: str) -> list[Statement]:
    """Split *buffer* on semicolons that are outside quoted literals.

    Single-quoted literals (with ``''`` escapes) and dollar-quoted literals
    (``$tag$ ... $tag$``) are opaque. An unterminated literal extends to the
    end of the buffer.
    """
    statements: list[Statement] = []
    start = 0

    lexer = _lexer.clone()
    lexer.input(buffer)
    while True:
        tok = lexer.token()
        if tok is None:
            break
        if tok.type != "SEMICOLON":
            continue
        end = tok.lexpos + 1
        statements.append(Statement(buffer[start:end].strip(), start, end))
        start = end

    rest = buffer[start:].strip()
    if rest:
        statements.append(Statement(rest, start, len(buffer)))

    return statements


def resolve_statement(statements: Sequence[Statement], cursor: int) -> Statement | None:
    """Return the first statement whose range contains *cursor*, inclusive on both ends."""
    for stmt in statements:
        if stmt.start <= cursor <= stmt.end:
            return stmt
    return None


def active_statement(buffer: str, cursor: int) -> Statement | None:
    """Return the statement of *buffer* under *cursor*, if any."""
    return resolve_statement(split_statements(buffer), cursor)


def statement_at_cursor(buffer: str, cursor: int) -> str:
    """Return the SQL to run for *cursor*, falling back to the whole trimmed buffer."""
    stmt = active_statement(buffer, cursor)
    if stmt is not None and stmt.text:
        return stmt.text
    return buffer.strip()
