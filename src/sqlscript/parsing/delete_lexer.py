"""Lexer for generated DELETE statements."""

import ply.lex as lex


class DeleteLexer:
    """Lexer for tokenizing DELETE statements produced by the delete builder."""

    # Reserved keywords (matched case-insensitively)
    reserved = {
        "delete": "DELETE",
        "from": "FROM",
        "where": "WHERE",
        "or": "OR",
    }

    # Token list
    tokens = [
        "IDENTIFIER",
        "STRING",
        "DOT",
        "LPAREN",
        "RPAREN",
        "SEMICOLON",
        "OTHER",
    ] + list(reserved.values())

    # Simple tokens
    t_DOT = r"\."
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_SEMICOLON = r";"

    # Ignored characters (newlines handled separately for line tracking)
    t_ignore = " \t\r\f\v"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r"'(?:[^']|'')*'"
        t.lexer.lineno += t.value.count("\n")
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[A-Za-z_][A-Za-z0-9_]*"
        t.type = self.reserved.get(t.value.lower(), "IDENTIFIER")
        return t

    def t_WHITESPACE(self, t: lex.LexToken) -> None:
        r"[^\S\n]+"
        # Non-ASCII spaces (e.g. U+00A0) separate tokens like t_ignore does

    def t_OTHER(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\s()';.A-Za-z_]+"
        # Numbers, operators and anything else that can appear inside a condition
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
