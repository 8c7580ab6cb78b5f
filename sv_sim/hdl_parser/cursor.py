"""
Forward-only token cursor shared by every parsing function.

The cursor is handed down the call chain; whoever holds it consumes tokens
from it and the caller resumes wherever the callee stopped. Consumed tokens
are never replayed. Soft anomalies (tokens that are out of place but do not
break structure) go to the cursor's diagnostics sink, never to the error
channel.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional

from sv_sim.hdl_parser.tokens import Token
from sv_sim.hdl_parser.lexer import Lexer

logger = logging.getLogger("sv_sim.hdl_parser")


@dataclass
class Diagnostic:
    """A recoverable anomaly noticed while parsing."""
    level: int
    message: str
    line: int = 0
    col: int = 0

    def __str__(self):
        if self.line:
            return f"L{self.line}:{self.col}: {self.message}"
        return self.message


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diag: Diagnostic) -> None:
    """Default sink: forward to the package logger."""
    logger.log(diag.level, "%s", diag)


class TokenCursor:
    """Single-pass cursor over a (possibly lazy) token stream."""

    def __init__(self, tokens: Iterable[Token], sink: Optional[DiagnosticSink] = None):
        self._tokens = iter(tokens)
        self._lookahead: Optional[Token] = None
        self.sink = sink if sink is not None else log_diagnostic
        self.last: Optional[Token] = None

    @classmethod
    def from_source(cls, source: str, sink: Optional[DiagnosticSink] = None) -> "TokenCursor":
        return cls(Lexer(source).tokens(), sink)

    # ---- Token navigation ----

    def next(self) -> Optional[Token]:
        """Consume and return the next token, or None at end of stream."""
        if self._lookahead is not None:
            tok, self._lookahead = self._lookahead, None
        else:
            tok = next(self._tokens, None)
        if tok is not None:
            self.last = tok
        return tok

    def peek(self) -> Optional[Token]:
        """Return the next token without consuming it."""
        if self._lookahead is None:
            self._lookahead = next(self._tokens, None)
        return self._lookahead

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        tok = self.next()
        if tok is None:
            raise StopIteration
        return tok

    # ---- Diagnostics ----

    def _emit(self, level: int, msg: str, token: Optional[Token]):
        if token is None:
            token = self.last
        if token is not None:
            self.sink(Diagnostic(level, msg, token.line, token.col))
        else:
            self.sink(Diagnostic(level, msg))

    def anomaly(self, msg: str, token: Optional[Token] = None):
        """Report an out-of-place token; parsing continues."""
        self._emit(logging.ERROR, msg, token)

    def warn(self, msg: str, token: Optional[Token] = None):
        """Report a construct that is recognized but not handled yet."""
        self._emit(logging.WARNING, msg, token)
