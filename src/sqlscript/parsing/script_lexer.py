"""Lexer for splitting SQL scripts into statements."""

import ply.lex as lex


class ScriptLexer:
    """Lexer that tokenizes a SQL buffer just enough to find statement boundaries.

    Only three things matter: semicolons, single-quoted literals and
    PostgreSQL dollar-quoted literals. Everything else is opaque text.
    Unterminated literals run to the end of the buffer instead of failing.
    """

    tokens = [
        "DOLLAR_STRING",
        "STRING",
        "SEMICOLON",
        "TEXT",
    ]

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_DOLLAR_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r"\$[A-Za-z0-9_]*\$"
        # The opening token is the tag; the literal ends at its next occurrence
        tag = t.value
        data = t.lexer.lexdata
        close = data.find(tag, t.lexer.lexpos)
        end = len(data) if close == -1 else close + len(tag)
        t.value = data[t.lexpos:end]
        t.lexer.lexpos = end
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r"'(?:[^']|'')*'?"
        return t

    def t_SEMICOLON(self, t: lex.LexToken) -> lex.LexToken:
        r";"
        return t

    def t_TEXT(self, t: lex.LexToken) -> lex.LexToken:
        r"[^;'$]+|\$"
        t.lexer.lineno += t.value.count("\n")
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def clone(self) -> "ScriptLexer":
        """Return a lexer sharing the compiled rules but with its own input state."""
        other = ScriptLexer()
        other.lexer = self.lexer.clone()
        return other

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
