"""Parsing module for SQL scripts and generated DELETE statements."""

from sqlscript.parsing.delete_parser import DeleteParser, ParsedDelete
from sqlscript.parsing.script_lexer import ScriptLexer

__all__ = [
    "DeleteParser",
    "ParsedDelete",
    "ScriptLexer",
]
