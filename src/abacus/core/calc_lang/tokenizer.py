"""
Tokenizer for the abacus calculator language.

The ``Lexer`` scans one buffered line at a time and produces tokens on
demand, keeping a single token of lookahead. ``reset`` swaps in the next
line, so a token never spans two lines.
"""

from __future__ import annotations

from enum import StrEnum, auto

from abacus.core.errors import LexError, make_lex_error
from abacus.core.numbers import Complex, Natural, Number, Rational, Real


class TokenKind(StrEnum):
    """Token types for the calculator language."""

    # Literals
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()

    # Identifiers (fn, if and else included)
    IDENT = auto()

    # Blocks
    LBRACE = auto()
    RBRACE = auto()

    # Comparison
    LT = auto()
    GT = auto()
    EQ = auto()
    NE = auto()
    LE = auto()
    GE = auto()

    # Logic
    AND = auto()
    OR = auto()
    NOT = auto()
    XOR = auto()

    # Arithmetic
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    SEMI = auto()
    COLON = auto()
    COMMA = auto()
    ARROW = auto()  # ->

    # Lookahead not yet populated
    EMPTY = auto()
    # End of the buffered line
    EOF = auto()


class Token:
    """A single token from the lexer."""

    __slots__ = ("kind", "value", "pos", "number")

    def __init__(
        self, kind: TokenKind, value: str, pos: int, number: Number | None = None
    ) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos
        self.number = number

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


_KEYWORDS: dict[str, TokenKind] = {
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}

_SINGLE_CHAR: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "&": TokenKind.AND,
    "|": TokenKind.OR,
    "^": TokenKind.XOR,
    "+": TokenKind.PLUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ";": TokenKind.SEMI,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}

# First character -> (second character, two-char kind, one-char kind)
_TWO_CHAR: dict[str, tuple[str, TokenKind, TokenKind]] = {
    "<": ("=", TokenKind.LE, TokenKind.LT),
    ">": ("=", TokenKind.GE, TokenKind.GT),
    "=": ("=", TokenKind.EQ, TokenKind.EQ),
    "!": ("=", TokenKind.NE, TokenKind.NOT),
    "-": (">", TokenKind.ARROW, TokenKind.MINUS),
}

_UNICODE: dict[str, TokenKind] = {
    "≤": TokenKind.LE,
    "≥": TokenKind.GE,
    "≠": TokenKind.NE,
}


class Lexer:
    """
    Streaming lexer over a single buffered line.

    Attributes:
        text: The current buffer
        pos: Cursor into ``text``
        line: Number of buffers seen so far (used for error context)
    """

    def __init__(self, text: str | None = None, *, unicode_operators: bool = True) -> None:
        self.unicode_operators = unicode_operators
        self.line = 0
        self.text = ""
        self.pos = 0
        self._current = Token(TokenKind.EMPTY, "", 0)
        if text is not None:
            self.reset(text)

    def reset(self, text: str) -> None:
        """Replace the buffer, resetting the cursor and the lookahead."""
        self.text = text
        self.pos = 0
        self.line += 1
        self._current = Token(TokenKind.EMPTY, "", 0)

    @property
    def current(self) -> Token:
        """The lookahead token, lexed on first access."""
        if self._current.kind == TokenKind.EMPTY:
            self._current = self._next_token()
        return self._current

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current
        self._current = self._next_token()
        return token

    def peek_token(self) -> Token:
        """Return the token after ``current`` without moving the lexer."""
        current = self.current
        if current.kind == TokenKind.EOF:
            return current
        saved = self.pos
        try:
            return self._next_token()
        finally:
            self.pos = saved

    @property
    def at_eof(self) -> bool:
        return self.current.kind == TokenKind.EOF

    # -- scanning --

    def _char(self, offset: int = 0) -> str | None:
        idx = self.pos + offset
        if idx < len(self.text):
            return self.text[idx]
        return None

    def _error(self, message: str, pos: int | None = None) -> LexError:
        pos = self.pos if pos is None else pos
        offending = self.text[pos] if pos < len(self.text) else None
        return make_lex_error(message, self.line, pos, self.text, offending)

    def _next_token(self) -> Token:
        n = len(self.text)

        while self.pos < n:
            c = self.text[self.pos]
            start = self.pos

            # Skip whitespace
            if c.isspace():
                self.pos += 1
                continue

            # Identifiers and boolean keywords
            if c.isalpha():
                while self.pos < n and self.text[self.pos].isalnum():
                    self.pos += 1
                word = self.text[start : self.pos]
                return Token(_KEYWORDS.get(word, TokenKind.IDENT), word, start)

            # Numbers
            if c.isdecimal():
                number = self._number()
                return Token(TokenKind.NUMBER, self.text[start : self.pos], start, number)

            # Two-character operators
            if c in _TWO_CHAR:
                second, double, single = _TWO_CHAR[c]
                if self._char(1) == second:
                    self.pos += 2
                    return Token(double, c + second, start)
                self.pos += 1
                return Token(single, c, start)

            if c in _SINGLE_CHAR:
                self.pos += 1
                return Token(_SINGLE_CHAR[c], c, start)

            if self.unicode_operators and c in _UNICODE:
                self.pos += 1
                return Token(_UNICODE[c], c, start)

            raise self._error(f"Unexpected character: {c!r}")

        return Token(TokenKind.EOF, "", n)

    def _number(self) -> Number:
        """
        Scan a numeric literal.

        Digits accumulate into the integer part. ``//`` starts a rational
        denominator, ``.`` starts a fraction and a trailing ``i`` marks an
        imaginary literal; each marker excludes the others.
        """
        integer_part: list[str] = []
        denominator: list[str] = []
        rational = False
        real = False
        imaginary = False

        while (c := self._char()) is not None:
            if c.isdecimal():
                if imaginary:
                    raise self._error(f"expected operator found {c}")
                if rational:
                    denominator.append(c)
                else:
                    integer_part.append(c)
                self.pos += 1
                continue

            if c == "/" and self._char(1) == "/":
                if rational:
                    raise self._error("expected 0..9 found //")
                if real:
                    raise self._error("expected 0..9 or i found //")
                rational = True
                self.pos += 2
                continue

            if c == ".":
                if rational:
                    raise self._error("expected 0..9 found .")
                if real:
                    raise self._error("expected 0..9 or i found .")
                integer_part.append(c)
                real = True
                self.pos += 1
                continue

            if c == "i":
                if rational:
                    raise self._error("expected 0..9 found i")
                if imaginary:
                    raise self._error("expected operator found i")
                real = True
                imaginary = True
                self.pos += 1
                continue

            if c.isalpha():
                raise self._error(f"expected 0..9 found {c}")

            break

        text = "".join(integer_part)
        if imaginary:
            return Complex(0.0, float(text))
        if real:
            return Real(float(text))
        if rational:
            if not denominator:
                raise self._error("expected 0..9 after //")
            if int("".join(denominator)) == 0:
                raise self._error("rational literal with zero denominator")
            return Rational(int(text), int("".join(denominator)))
        return Natural(int(text))


def tokenize(source: str, *, unicode_operators: bool = True) -> list[Token]:
    """Tokenize a single line into a list of tokens ending with EOF."""
    lexer = Lexer(source, unicode_operators=unicode_operators)
    tokens: list[Token] = []
    while True:
        token = lexer.advance()
        tokens.append(token)
        if token.kind == TokenKind.EOF:
            return tokens
