"""
Error taxonomy shared by the lexer and every parser layer.

Each failure kind is its own exception class so callers can catch a
specific kind, or ``LexingError`` for all of them. ``str(err)`` is the
diagnostic shown to the user.
"""

from __future__ import annotations
from typing import Optional

from sv_sim.hdl_parser.tokens import Token


class LexingError(Exception):
    """Base class for every hard failure raised while lexing or parsing."""

    message = "generic/unknown error encountered"

    def __init__(self, detail: Optional[str] = None, token: Optional[Token] = None,
                 line: int = 0, col: int = 0):
        self.detail = detail
        if token is not None:
            line, col = token.line, token.col
        self.token = token
        self.line = line
        self.col = col
        super().__init__(self._format())

    @property
    def kind(self) -> str:
        return type(self).__name__

    def _format(self) -> str:
        text = self.message
        if self.detail:
            text = f"{text}: {self.detail}"
        if self.line:
            text = f"L{self.line}:{self.col}: {text}"
        return text


class InvalidInteger(LexingError):
    message = "invalid integer encountered"

    def __init__(self, reason: str = "unknown error", token: Optional[Token] = None,
                 line: int = 0, col: int = 0):
        self.reason = reason
        super().__init__(reason, token=token, line=line, col=col)


class UnexpectedToken(LexingError):
    message = "unexpected token encountered"


class ExpectedSemi(LexingError):
    message = "unexpected token, expected semicolon"


class ImproperTimeFormatting(LexingError):
    message = "improper time format encountered"


class ImproperCommentFormatting(LexingError):
    message = "improper comment format encountered"


class NonAsciiCharacter(LexingError):
    # Reserved: the lexer reports unknown characters as UnexpectedToken
    message = "non-ASCII character encountered"


class IncompleteWidth(LexingError):
    message = "incomplete width encountered"


class NegativeBitWidth(LexingError):
    message = "negative bit width encountered"


class ModuleWireNotFound(LexingError):
    # Reserved: wire/reg declarations without a name raise UnexpectedToken
    message = "module wire not found"


ERROR_KINDS = (
    InvalidInteger,
    UnexpectedToken,
    ExpectedSemi,
    ImproperTimeFormatting,
    ImproperCommentFormatting,
    NonAsciiCharacter,
    IncompleteWidth,
    NegativeBitWidth,
    ModuleWireNotFound,
)


def integer_error(digits: str, token: Optional[Token] = None,
                  line: int = 0, col: int = 0) -> InvalidInteger:
    """Classify why ``digits`` could not become an unsigned 64-bit integer."""
    if digits.isdigit():
        return InvalidInteger("overflow error", token=token, line=line, col=col)
    return InvalidInteger("unknown error", token=token, line=line, col=col)
