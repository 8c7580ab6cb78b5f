"""
Object model produced by the parser and consumed by the simulator.

A SimObject holds the file's timescale and its modules; each module holds
its port list (ModuleIO) and the wire/reg signals declared in its body.
Simulation-time fields (``state``, ``hi_z``) start out cleared: the parser
never assigns values.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Union


class VarType(Enum):
    """Wire vs register storage."""
    WIRE = auto()
    REG = auto()

    @staticmethod
    def from_keyword(word: str) -> "VarType":
        """``"reg"`` -> REG; anything else falls back to WIRE."""
        if word == "reg":
            return VarType.REG
        return VarType.WIRE


# ============================================================
# Base
# ============================================================

@dataclass
class SimNode:
    """Base class for all parsed nodes."""
    line: int = 0
    col: int = 0


# ============================================================
# Timing
# ============================================================

# `timescale 1ns/1ps, already converted to the simulator's units
DEFAULT_N_TIME = 0.000_001
DEFAULT_D_TIME = 0.000_000_001


@dataclass
class SimTime(SimNode):
    """Numerator/denominator time scale from a `timescale directive."""
    n_time: float = DEFAULT_N_TIME
    d_time: float = DEFAULT_D_TIME


# ============================================================
# Signals
# ============================================================

@dataclass
class Var(SimNode):
    """A single signal: wire or reg, ``width`` bits wide."""
    name: str = ""
    width: int = 1
    var_type: VarType = VarType.WIRE
    state: bool = False
    hi_z: bool = False


@dataclass
class Input(SimNode):
    """Input port. ``name`` mirrors ``var.name`` for lookup."""
    name: str = ""
    var: Var = field(default_factory=Var)


@dataclass
class Output(SimNode):
    """Output port. ``name`` mirrors ``var.name`` for lookup."""
    name: str = ""
    var: Var = field(default_factory=Var)


@dataclass
class Inout(SimNode):
    """Bidirectional port. ``name`` mirrors ``var.name`` for lookup."""
    name: str = ""
    var: Var = field(default_factory=Var)


Port = Union[Input, Output, Inout]


# ============================================================
# Modules
# ============================================================

@dataclass
class ModuleIO(SimNode):
    """Module header: name plus ports in declaration order."""
    name: str = ""
    inputs: list[Input] = field(default_factory=list)
    outputs: list[Output] = field(default_factory=list)
    inouts: list[Inout] = field(default_factory=list)


@dataclass
class Module(SimNode):
    """A module definition.

    ``vars`` holds only signals declared in the body; ports live in ``io``.
    Duplicate names are kept as declared.
    """
    name: str = ""
    io: ModuleIO = field(default_factory=ModuleIO)
    vars: list[Var] = field(default_factory=list)

    def ports(self) -> list[Port]:
        """All ports: inputs, then outputs, then inouts."""
        return [*self.io.inputs, *self.io.outputs, *self.io.inouts]


# ============================================================
# Top-level
# ============================================================

@dataclass
class SimObject(SimNode):
    """Everything parsed from one source file."""
    sim_time: SimTime = field(default_factory=SimTime)
    mods: list[Module] = field(default_factory=list)
