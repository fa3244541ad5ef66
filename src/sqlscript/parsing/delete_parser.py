"""Parser for generated DELETE statements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import ply.yacc as yacc

from sqlscript.parsing.delete_lexer import DeleteLexer


@dataclass
class ParsedDelete:
    """A DELETE statement broken back into its target and OR-branches.

    Each condition is the exact parenthesized source text, so it can be
    compared and re-emitted verbatim.
    """

    table: str
    schema: str
    conditions: list[str] = field(default_factory=list)


class DeleteParser:
    """Parser for the canonical ``DELETE FROM s.t WHERE (..) OR (..);`` shape.

    Conditions are captured as source slices. Nested parentheses inside a
    condition (function calls, sub-expressions) are matched by the grammar,
    and parentheses inside string literals never reach it.
    """

    tokens = DeleteLexer.tokens

    def __init__(self) -> None:
        self.lexer = DeleteLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : DELETE FROM table_ref WHERE condition_list SEMICOLON
                     | DELETE FROM table_ref WHERE condition_list"""
        schema, table = p[3]
        p[0] = ParsedDelete(table=table, schema=schema, conditions=p[5])

    def p_table_ref(self, p: yacc.YaccProduction) -> None:
        """table_ref : IDENTIFIER DOT IDENTIFIER"""
        p[0] = (p[1], p[3])

    def p_condition_list_single(self, p: yacc.YaccProduction) -> None:
        """condition_list : condition"""
        p[0] = [p[1]]

    def p_condition_list_multiple(self, p: yacc.YaccProduction) -> None:
        """condition_list : condition_list OR condition"""
        p[0] = p[1] + [p[3]]

    def p_condition(self, p: yacc.YaccProduction) -> None:
        """condition : LPAREN body RPAREN"""
        p[0] = p.lexer.lexdata[p.lexpos(1):p.lexpos(3) + 1]

    def p_group(self, p: yacc.YaccProduction) -> None:
        """group : LPAREN body RPAREN
                 | LPAREN RPAREN"""
        p[0] = None

    def p_body(self, p: yacc.YaccProduction) -> None:
        """body : body_item
                | body body_item"""
        p[0] = None

    def p_body_item(self, p: yacc.YaccProduction) -> None:
        """body_item : group
                     | IDENTIFIER
                     | STRING
                     | DOT
                     | SEMICOLON
                     | OTHER
                     | OR
                     | DELETE
                     | FROM
                     | WHERE"""
        p[0] = None

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> ParsedDelete:
        """Parse a DELETE statement.

        Raises:
            SyntaxError: If the text is not in the canonical generated shape.
        """
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        # Each parse gets its own lexer state so a shared parser stays reentrant
        return self.parser.parse(data, lexer=self.lexer.lexer.clone())
