"""
Hand-written lexer for the structural SystemVerilog subset.

Handles:
  - Keywords, with longest-match against plain words (``modules`` is a word)
  - Time literals ``<digits>ns`` / ``<digits>ps``, converted on the spot
  - Sized binary (4'b1010) and high-impedance (8'bz) literals
  - Unsigned 64-bit integers, with overflow reported as InvalidInteger
  - Whitespace and newlines as real tokens; the parser decides what they mean

Tokens are produced lazily. A malformed literal or an unknown character
raises from the generator at the point it is reached.
"""

import string
from typing import Iterator

from sv_sim.hdl_parser.tokens import Token, TokenType, KEYWORDS
from sv_sim.hdl_parser.errors import UnexpectedToken, integer_error


U64_MAX = 2**64 - 1
U64_DIGITS = len(str(U64_MAX))

DIGITS = string.digits
LETTERS = string.ascii_letters

# Scale applied to the numeric prefix of a time literal. These are the
# simulator's own units, not SI nanoseconds/picoseconds.
NS_SCALE = 0.000_001
PS_SCALE = 0.000_000_001

TWO_CHAR = {
    "//": TokenType.COMMENT,
    "==": TokenType.EQ,
    "<=": TokenType.LE,
    ">=": TokenType.GE,
}

ONE_CHAR = {
    "#": TokenType.POUND,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "=": TokenType.EQUALS,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "/": TokenType.DIVIDE,
    "?": TokenType.QUESTION,
    "!": TokenType.BANG,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "`": TokenType.BACKTICK,
    "_": TokenType.UNDERSCORE,
    "@": TokenType.AT,
    "\n": TokenType.NEWLINE,
    "\t": TokenType.WHITESPACE,
}


def nanosecond(text: str) -> float:
    """Convert a ``<digits>ns`` literal to the simulator time scale."""
    return float(text[:-2]) * NS_SCALE


def picosecond(text: str) -> float:
    """Convert a ``<digits>ps`` literal to the simulator time scale."""
    return float(text[:-2]) * PS_SCALE


TIME_SUFFIXES = {
    "ns": nanosecond,
    "ps": picosecond,
}


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def _peek(self, offset=0) -> str:
        p = self.pos + offset
        if p < len(self.source):
            return self.source[p]
        return "\0"

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _read_while(self, chars: str) -> str:
        text = ""
        while not self._at_end() and self._peek() in chars:
            text += self._advance()
        return text

    def _read_number(self) -> Token:
        """Read a literal that starts with a digit.

        Forms: 42, 1ns, 10ps, 4'b1010, 8'bz
        """
        start_line, start_col = self.line, self.col
        digits = self._read_while(DIGITS)

        # Sized binary / hi-Z: <size>'b<digits> or <size>'bz
        if self._peek() == "'" and self._peek(1) == "b":
            if self._peek(2) == "z":
                text = digits + self._advance() + self._advance() + self._advance()
                return Token(TokenType.HI_Z, text, start_line, start_col)
            if self._peek(2) in DIGITS:
                text = digits + self._advance() + self._advance()
                text += self._read_while(DIGITS)
                return Token(TokenType.BINARY, text, start_line, start_col)

        # Time literal: <digits>ns / <digits>ps
        suffix = self._peek() + self._peek(1)
        if suffix in TIME_SUFFIXES:
            text = digits + self._advance() + self._advance()
            return Token(TokenType.TIME, text, start_line, start_col,
                         data=TIME_SUFFIXES[suffix](text))

        # int() refuses very long digit strings, so rule those out by length first
        if len(digits.lstrip("0")) > U64_DIGITS:
            raise integer_error(digits, line=start_line, col=start_col)
        value = int(digits.lstrip("0") or "0")
        if value > U64_MAX:
            raise integer_error(digits, line=start_line, col=start_col)
        return Token(TokenType.INTEGER, digits, start_line, start_col, data=value)

    def _read_word_or_keyword(self) -> Token:
        start_line, start_col = self.line, self.col
        word = self._read_while(LETTERS)

        # always_comb is the only keyword that spans an underscore
        if word == "always" and self.source.startswith("_comb", self.pos):
            for _ in range(5):
                word += self._advance()

        tt = KEYWORDS.get(word, TokenType.WORD)
        return Token(tt, word, start_line, start_col)

    def tokens(self) -> Iterator[Token]:
        """Lazily tokenize the source, one token per iteration."""
        while not self._at_end():
            ch = self._peek()
            start_line, start_col = self.line, self.col

            # Carriage return and form feed are dropped outright
            if ch in "\r\f":
                self._advance()
                continue

            if ch == " ":
                text = self._read_while(" ")
                yield Token(TokenType.WHITESPACE, text, start_line, start_col)
                continue

            if ch in DIGITS:
                yield self._read_number()
                continue

            if ch in LETTERS:
                yield self._read_word_or_keyword()
                continue

            ch2 = ch + self._peek(1)
            if ch2 in TWO_CHAR:
                self._advance(); self._advance()
                yield Token(TWO_CHAR[ch2], ch2, start_line, start_col)
                continue

            if ch in ONE_CHAR:
                self._advance()
                yield Token(ONE_CHAR[ch], ch, start_line, start_col)
                continue

            raise UnexpectedToken(f"unexpected character {ch!r}",
                                  line=start_line, col=start_col)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source eagerly."""
        return list(self.tokens())


def lex(source: str) -> list[Token]:
    """Convenience function: lex source code into tokens."""
    return Lexer(source).tokenize()
