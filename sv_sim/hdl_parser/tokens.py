"""
Token types for the structural SystemVerilog subset.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Union


class TokenType(Enum):
    # Keywords
    MODULE = auto()
    ENDMODULE = auto()
    PARAMETER = auto()
    INPUT = auto()
    OUTPUT = auto()
    INOUT = auto()
    REG = auto()
    WIRE = auto()
    ASSIGN = auto()
    ALWAYS_COMB = auto()
    IF = auto()
    ELSE = auto()
    BEGIN = auto()
    END = auto()
    POSEDGE = auto()
    NEGEDGE = auto()
    TIMESCALE = auto()

    # Literals
    TIME = auto()           # 1ns, 10ps (data = converted float)
    BINARY = auto()         # 4'b1010
    HI_Z = auto()           # 8'bz
    INTEGER = auto()        # 42 (data = int)
    WORD = auto()           # letters only: data, clk

    # Operators
    EQ = auto()             # ==
    LT = auto()             # <
    GT = auto()             # >
    LE = auto()             # <=
    GE = auto()             # >=
    EQUALS = auto()         # =
    MINUS = auto()          # -
    PLUS = auto()           # +
    STAR = auto()           # *
    DIVIDE = auto()         # /
    QUESTION = auto()       # ?
    BANG = auto()           # !

    # Delimiters
    POUND = auto()          # #
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACKET = auto()       # [
    RBRACKET = auto()       # ]
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    COLON = auto()          # :
    SEMICOLON = auto()      # ;
    COMMA = auto()          # ,
    BACKTICK = auto()       # `
    UNDERSCORE = auto()     # _
    AT = auto()             # @

    # Layout
    NEWLINE = auto()
    WHITESPACE = auto()     # run of spaces, or a single tab

    COMMENT = auto()        # //


@dataclass
class Token:
    type: TokenType
    value: str
    line: int
    col: int
    data: Optional[Union[int, float]] = None

    def __repr__(self):
        if self.data is not None:
            return f"Token({self.type.name}({self.data!r}), {self.value!r}, L{self.line}:{self.col})"
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.col})"


# Keyword lookup table
KEYWORDS: dict[str, TokenType] = {
    "module": TokenType.MODULE,
    "endmodule": TokenType.ENDMODULE,
    "parameter": TokenType.PARAMETER,
    "input": TokenType.INPUT,
    "output": TokenType.OUTPUT,
    "inout": TokenType.INOUT,
    "reg": TokenType.REG,
    "wire": TokenType.WIRE,
    "assign": TokenType.ASSIGN,
    "always_comb": TokenType.ALWAYS_COMB,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "begin": TokenType.BEGIN,
    "end": TokenType.END,
    "posedge": TokenType.POSEDGE,
    "negedge": TokenType.NEGEDGE,
    "timescale": TokenType.TIMESCALE,
}

# Tokens that never terminate anything, only separate
FILLER = (TokenType.WHITESPACE, TokenType.NEWLINE)
