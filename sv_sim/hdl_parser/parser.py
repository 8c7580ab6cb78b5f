"""
Recursive-descent parser for the structural SystemVerilog subset.

Supported constructs:
  - `timescale <n>ns|ps / <d>ns|ps directives
  - Module declarations with ANSI-style input/output/inout port lists
  - wire / reg declarations with an optional [hi:lo] range
  - // line comments

Every parsing function takes the shared TokenCursor as its first argument
and consumes tokens from it in place. Structural errors are raised as
LexingError subclasses and abort the whole parse; tokens that are merely
out of place are reported to the cursor's diagnostics sink and skipped.
Behavioural keywords (assign, always_comb, if/else, ...) are recognized
but not handled yet.
"""

from __future__ import annotations
import logging
from enum import Enum, auto
from typing import Optional, Type, TypeVar

from sv_sim.hdl_parser.tokens import Token, TokenType, FILLER
from sv_sim.hdl_parser.lexer import U64_MAX
from sv_sim.hdl_parser.cursor import TokenCursor, Diagnostic, DiagnosticSink
from sv_sim.hdl_parser.errors import (
    LexingError, InvalidInteger, UnexpectedToken, ExpectedSemi,
    ImproperTimeFormatting, ImproperCommentFormatting,
    IncompleteWidth, NegativeBitWidth,
)
from sv_sim.hdl_parser.sim_nodes import (
    SimObject, SimTime, Module, ModuleIO, Var, VarType, Input, Output, Inout,
)

logger = logging.getLogger(__name__)

TT = TokenType

# Recognized by the lexer, waiting on the execution engine
NOT_YET_HANDLED = (
    TT.PARAMETER, TT.ASSIGN, TT.ALWAYS_COMB, TT.IF, TT.ELSE,
    TT.BEGIN, TT.END, TT.POSEDGE, TT.NEGEDGE,
)


# ============================================================
# Primitives
# ============================================================

def parse_comment(cursor: TokenCursor):
    """Skip everything up to and including the next newline.

    A comment may run to the end of the file. Any lexical error inside it
    is reported as ImproperCommentFormatting.
    """
    logger.debug("parsing comment")
    try:
        for tok in cursor:
            if tok.type == TT.NEWLINE:
                return
    except LexingError as e:
        raise ImproperCommentFormatting(e.message, line=e.line, col=e.col) from e


def parse_name(cursor: TokenCursor, first: Token) -> str:
    """Accumulate an identifier that starts with the word ``first``.

    Words are joined as-is and ``_`` tokens become underscores; whitespace
    and newlines do not end the name. ``;`` or ``,`` ends it and is
    consumed. A ``)`` also ends it but is left for the caller, since it
    closes the enclosing port list.
    """
    name = first.value

    while True:
        tok = cursor.peek()
        if tok is None or tok.type == TT.RPAREN:
            return name
        cursor.next()

        if tok.type == TT.WORD:
            name += tok.value
        elif tok.type == TT.UNDERSCORE:
            name += "_"
        elif tok.type in (TT.SEMICOLON, TT.COMMA):
            return name
        elif tok.type in FILLER:
            continue
        elif tok.type == TT.COMMENT:
            parse_comment(cursor)
        else:
            cursor.anomaly(f"unexpected value in name parsing, got {tok.type.name}", tok)


def parse_width(cursor: TokenCursor) -> int:
    """Parse the rest of a ``[hi:lo]`` range, after the ``[``.

    Returns ``hi - lo + 1``. A lone ``[N]`` is read as ``[N:0]``.
    """
    end: Optional[int] = None
    start: Optional[int] = None

    for tok in cursor:
        if tok.type == TT.INTEGER:
            if end is None:
                end = tok.data
            elif start is None:
                start = tok.data
            else:
                raise UnexpectedToken("bit range takes at most two bounds", tok)
        elif tok.type == TT.COLON or tok.type in FILLER:
            continue
        elif tok.type == TT.RBRACKET:
            if end is None:
                raise IncompleteWidth("bit range has no bounds", tok)
            if start is None:
                start = 0
            if end < start:
                raise NegativeBitWidth(f"[{end}:{start}]", tok)
            width = end - start + 1
            if width > U64_MAX:
                raise InvalidInteger("overflow error", tok)
            return width
        else:
            raise UnexpectedToken(f"{tok.value!r} inside bit range", tok)

    raise IncompleteWidth("bit range opened but not closed", cursor.last)


def parse_sim_time(cursor: TokenCursor) -> SimTime:
    """Parse ``timescale <n>/<d>`` after the introducing backtick."""
    logger.debug("parsing sim time")
    intro = cursor.last
    n_time = 0.0
    timescale_started = False
    n_found = False
    n_search = True

    for tok in cursor:
        if tok.type == TT.TIMESCALE:
            if timescale_started:
                raise UnexpectedToken("timescale repeated within one directive", tok)
            timescale_started = True
        elif tok.type == TT.TIME:
            if not timescale_started:
                raise UnexpectedToken("time literal before timescale keyword", tok)
            if n_search:
                if n_found:
                    raise ImproperTimeFormatting("expected '/' between times", tok)
                n_time = tok.data
                n_found = True
            else:
                sim_time = SimTime(n_time=n_time, d_time=tok.data)
                if intro is not None:
                    sim_time.line, sim_time.col = intro.line, intro.col
                return sim_time
        elif tok.type == TT.DIVIDE:
            n_search = False
        elif tok.type in FILLER:
            continue
        else:
            cursor.anomaly(f"unexpected token in timescale {tok.type.name}", tok)

    # A directive cut off by end of file is an error, not a zero denominator
    raise ImproperTimeFormatting("timescale directive ended early", cursor.last)


# ============================================================
# Signals and ports
# ============================================================

def parse_var(cursor: TokenCursor, var_type: VarType = VarType.WIRE) -> tuple[VarType, str, int]:
    """Parse ``[wire|reg] [range] name`` and return (var_type, name, width).

    ``var_type`` is the type to assume when no wire/reg keyword appears;
    callers that already consumed the keyword pass it in.
    """
    width = 1

    for tok in cursor:
        if tok.type in (TT.WIRE, TT.REG):
            var_type = VarType.from_keyword(tok.value)
        elif tok.type == TT.LBRACKET:
            width = parse_width(cursor)
        elif tok.type == TT.WORD:
            return var_type, parse_name(cursor, tok), width
        elif tok.type == TT.COMMENT:
            parse_comment(cursor)
        elif tok.type in FILLER:
            continue
        else:
            cursor.anomaly(f"unexpected value in variable parsing, got {tok.type.name}", tok)

    raise UnexpectedToken("expected a signal name", cursor.last)


def _make_var(var_type: VarType, name: str, width: int, at: Optional[Token]) -> Var:
    var = Var(name=name, width=width, var_type=var_type)
    if at is not None:
        var.line, var.col = at.line, at.col
    return var


P = TypeVar("P", Input, Output, Inout)


def _parse_port(cursor: TokenCursor, port_cls: Type[P]) -> P:
    at = cursor.last
    var_type, name, width = parse_var(cursor)
    var = _make_var(var_type, name, width, at)
    return port_cls(name=name, var=var, line=var.line, col=var.col)


def parse_input(cursor: TokenCursor) -> Input:
    return _parse_port(cursor, Input)


def parse_output(cursor: TokenCursor) -> Output:
    return _parse_port(cursor, Output)


def parse_inout(cursor: TokenCursor) -> Inout:
    return _parse_port(cursor, Inout)


# ============================================================
# Module header
# ============================================================

class HeaderState(Enum):
    NAME = auto()
    PAREN = auto()
    IO = auto()
    SEMI = auto()
    DONE = auto()


class ModuleHeaderParser:
    """State machine for ``<name> ( <ports> ) ;`` after the module keyword.

    States only move forward: NAME -> PAREN -> IO -> SEMI -> DONE. A module
    without a port list (``module m;``) goes from PAREN straight to DONE.
    Out-of-place tokens are reported and the state is left unchanged.
    """

    def __init__(self, cursor: TokenCursor, at: Optional[Token] = None):
        self.cursor = cursor
        self.state = HeaderState.NAME
        self.io = ModuleIO()
        if at is not None:
            self.io.line, self.io.col = at.line, at.col

    @property
    def done(self) -> bool:
        return self.state == HeaderState.DONE

    def step(self, tok: Token) -> HeaderState:
        """Feed one token; returns the state after the transition."""
        if tok.type in FILLER:
            return self.state
        if tok.type == TT.COMMENT:
            parse_comment(self.cursor)
            return self.state

        if self.state == HeaderState.NAME:
            self._step_name(tok)
        elif self.state == HeaderState.PAREN:
            self._step_paren(tok)
        elif self.state == HeaderState.IO:
            self._step_io(tok)
        elif self.state == HeaderState.SEMI:
            self._step_semi(tok)
        return self.state

    def _step_name(self, tok: Token):
        if tok.type == TT.WORD:
            self.io.name = tok.value
            self.state = HeaderState.PAREN
        else:
            self.cursor.anomaly(f"expected module name, got {tok.type.name}", tok)

    def _step_paren(self, tok: Token):
        if tok.type == TT.LPAREN:
            self.state = HeaderState.IO
        elif tok.type == TT.SEMICOLON:
            self.state = HeaderState.DONE
        else:
            self.cursor.anomaly(f"expected '(', got {tok.type.name}", tok)

    def _step_io(self, tok: Token):
        if tok.type == TT.INPUT:
            self.io.inputs.append(parse_input(self.cursor))
        elif tok.type == TT.OUTPUT:
            self.io.outputs.append(parse_output(self.cursor))
        elif tok.type == TT.INOUT:
            self.io.inouts.append(parse_inout(self.cursor))
        elif tok.type == TT.RPAREN:
            self.state = HeaderState.SEMI
        else:
            self.cursor.anomaly(f"expected I/O declaration or ')', got {tok.type.name}", tok)

    def _step_semi(self, tok: Token):
        if tok.type == TT.SEMICOLON:
            self.state = HeaderState.DONE
        else:
            self.cursor.anomaly(f"expected ';', got {tok.type.name}", tok)


def parse_module_io(cursor: TokenCursor) -> ModuleIO:
    """Run the header state machine to completion."""
    logger.debug("parsing module I/O")
    header = ModuleHeaderParser(cursor, cursor.last)

    for tok in cursor:
        header.step(tok)
        if header.done:
            return header.io

    raise ExpectedSemi(f"module header ended in state {header.state.name}", cursor.last)


# ============================================================
# Module body
# ============================================================

def parse_module(cursor: TokenCursor) -> Module:
    """Parse a module after its ``module`` keyword, through ``endmodule``."""
    logger.debug("parsing module")
    io = parse_module_io(cursor)
    mod = Module(name=io.name, io=io, line=io.line, col=io.col)

    for tok in cursor:
        if tok.type in (TT.WIRE, TT.REG):
            var_type, name, width = parse_var(cursor, VarType.from_keyword(tok.value))
            mod.vars.append(_make_var(var_type, name, width, tok))
        elif tok.type == TT.COMMENT:
            parse_comment(cursor)
        elif tok.type in FILLER:
            continue
        elif tok.type == TT.ENDMODULE:
            return mod
        elif tok.type in NOT_YET_HANDLED:
            cursor.warn(f"{tok.type.name} not implemented", tok)

    cursor.warn(f"module {mod.name!r} not terminated by endmodule")
    return mod


# ============================================================
# Top-level
# ============================================================

def parse_sim_object(cursor: TokenCursor) -> SimObject:
    """Drive the whole token stream into a SimObject."""
    logger.debug("parsing sv file")
    obj = SimObject()

    for tok in cursor:
        if tok.type == TT.MODULE:
            obj.mods.append(parse_module(cursor))
        elif tok.type == TT.BACKTICK:
            obj.sim_time = parse_sim_time(cursor)
        elif tok.type == TT.COMMENT:
            parse_comment(cursor)
        elif tok.type in FILLER:
            continue
        else:
            cursor.warn(f"{tok.type.name} not implemented", tok)

    return obj


# ============================================================
# Public API
# ============================================================

def parse_sv(source: str, sink: Optional[DiagnosticSink] = None) -> SimObject:
    """Parse SystemVerilog source text into a SimObject.

    Raises the first LexingError encountered; nothing partial is returned.
    Soft anomalies go to ``sink`` (default: the ``sv_sim.hdl_parser`` logger).
    """
    cursor = TokenCursor.from_source(source, sink)
    return parse_sim_object(cursor)


def parse_sv_with_diagnostics(source: str) -> tuple[SimObject, list[Diagnostic]]:
    """Parse and also return the soft anomalies that were reported."""
    diagnostics: list[Diagnostic] = []
    obj = parse_sv(source, diagnostics.append)
    return obj, diagnostics
