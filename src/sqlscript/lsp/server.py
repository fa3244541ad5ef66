"""SQL script language server: statement symbols, highlight and hover via pygls."""

from __future__ import annotations

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from sqlscript.statements import Statement, resolve_statement, split_statements

logger = logging.getLogger(__name__)

# Longest statement preview used as a symbol name
LABEL_WIDTH = 60

# ---------------------------------------------------------------------------
# Helpers (module-level so they are easy to unit-test)
# ---------------------------------------------------------------------------


def offset_to_position(source: str, offset: int) -> types.Position:
    """Convert a character offset into an LSP ``Position(line, character)``."""
    line = source.count("\n", 0, offset)
    last_nl = source.rfind("\n", 0, offset)
    character = offset if last_nl == -1 else offset - last_nl - 1
    return types.Position(line=line, character=character)


def position_to_offset(source: str, position: types.Position) -> int:
    """Convert an LSP position into a character offset, clamped to *source*."""
    offset = 0
    for _ in range(position.line):
        nl = source.find("\n", offset)
        if nl == -1:
            return len(source)
        offset = nl + 1
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)
    return min(offset + position.character, line_end)


def statement_range(source: str, stmt: Statement) -> types.Range:
    """Return the range of *stmt*, skipping the whitespace before it."""
    raw = source[stmt.start:stmt.end]
    start = stmt.start + len(raw) - len(raw.lstrip())
    return types.Range(
        start=offset_to_position(source, start),
        end=offset_to_position(source, stmt.end),
    )


def statement_label(stmt: Statement, width: int = LABEL_WIDTH) -> str:
    """Return the first line of *stmt*, shortened to *width* characters."""
    first = stmt.text.split("\n", 1)[0].strip()
    if len(first) > width:
        return first[: width - 3] + "..."
    return first


def _statement_under_cursor(source: str, position: types.Position) -> Statement | None:
    return resolve_statement(split_statements(source), position_to_offset(source, position))


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

server = LanguageServer("sqlscript-language-server", "0.1.0")


@server.feature(types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(params: types.DocumentSymbolParams) -> list[types.DocumentSymbol]:
    doc = server.workspace.get_text_document(params.text_document.uri)
    source = doc.source
    symbols: list[types.DocumentSymbol] = []
    for stmt in split_statements(source):
        rng = statement_range(source, stmt)
        symbols.append(
            types.DocumentSymbol(
                name=statement_label(stmt),
                kind=types.SymbolKind.Event,
                range=rng,
                selection_range=types.Range(start=rng.start, end=rng.start),
            )
        )
    logger.debug("%s: %d statements", params.text_document.uri, len(symbols))
    return symbols


@server.feature(types.TEXT_DOCUMENT_DOCUMENT_HIGHLIGHT)
def document_highlight(params: types.DocumentHighlightParams) -> list[types.DocumentHighlight] | None:
    doc = server.workspace.get_text_document(params.text_document.uri)
    stmt = _statement_under_cursor(doc.source, params.position)
    if stmt is None:
        return None
    return [
        types.DocumentHighlight(
            range=statement_range(doc.source, stmt),
            kind=types.DocumentHighlightKind.Text,
        )
    ]


@server.feature(types.TEXT_DOCUMENT_HOVER)
def hover(params: types.HoverParams) -> types.Hover | None:
    doc = server.workspace.get_text_document(params.text_document.uri)
    statements = split_statements(doc.source)
    stmt = resolve_statement(statements, position_to_offset(doc.source, params.position))
    if stmt is None:
        return None
    number = statements.index(stmt) + 1
    return types.Hover(
        contents=types.MarkupContent(
            kind=types.MarkupKind.Markdown,
            value=f"**Statement {number} of {len(statements)}**\n\n```sql\n{stmt.text}\n```",
        ),
        range=statement_range(doc.source, stmt),
    )


def main() -> None:
    logging.basicConfig(level=logging.WARNING)
    server.start_io()


if __name__ == "__main__":
    main()
