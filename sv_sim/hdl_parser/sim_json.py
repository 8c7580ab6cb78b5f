"""
SimObject serialization to JSON format.

Provides functions to serialize a parsed SimObject to JSON and back, plus
a readable line-by-line dump of the tree. Useful for debugging and tool
integration; this is not a simulation file format.
"""

from __future__ import annotations
import json
from dataclasses import fields
from enum import Enum
from typing import Any, Iterator

from sv_sim.hdl_parser.sim_nodes import (
    SimNode, SimObject, SimTime, Module, ModuleIO, Var, VarType, Input, Output, Inout,
)

NODE_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (SimObject, SimTime, Module, ModuleIO, Var, Input, Output, Inout)
}

ENUM_FIELDS: dict[str, type] = {
    "var_type": VarType,
}


def sim_to_dict(node: SimNode) -> dict[str, Any]:
    """
    Convert a node to a dictionary representation.

    The dictionary includes:
    - _type: The node's class name
    - Every dataclass field, with nested nodes converted recursively
    - Enum fields stored by member name
    """
    if node is None:
        return None

    result = {"_type": node.__class__.__name__}

    for f in fields(node):
        value = getattr(node, f.name)

        if isinstance(value, SimNode):
            result[f.name] = sim_to_dict(value)
        elif isinstance(value, list):
            result[f.name] = [
                sim_to_dict(item) if isinstance(item, SimNode) else item
                for item in value
            ]
        elif isinstance(value, Enum):
            result[f.name] = value.name
        else:
            result[f.name] = value

    return result


def sim_to_json(node: SimNode, indent: int = 2) -> str:
    """Convert a node to a JSON string."""
    return json.dumps(sim_to_dict(node), indent=indent)


def dict_to_sim(data: dict[str, Any]) -> SimNode:
    """
    Convert a dictionary back to a node.

    Raises:
        ValueError: If the node type is missing or unknown
    """
    if data is None:
        return None

    node_type = data.get("_type")
    if not node_type:
        raise ValueError("Missing _type field in SimObject dictionary")

    try:
        node = NODE_TYPES[node_type]()
    except KeyError:
        raise ValueError(f"Unknown node type: {node_type}") from None

    for field_name, value in data.items():
        if field_name == "_type":
            continue

        if isinstance(value, dict) and "_type" in value:
            setattr(node, field_name, dict_to_sim(value))
        elif isinstance(value, list):
            setattr(node, field_name, [
                dict_to_sim(item) if isinstance(item, dict) and "_type" in item else item
                for item in value
            ])
        elif field_name in ENUM_FIELDS:
            setattr(node, field_name, ENUM_FIELDS[field_name][value])
        else:
            setattr(node, field_name, value)

    return node


def json_to_sim(json_str: str) -> SimNode:
    """Convert a JSON string back to a node."""
    return dict_to_sim(json.loads(json_str))


def sim_to_json_file(node: SimNode, filename: str, indent: int = 2):
    """Save a node to a JSON file."""
    with open(filename, 'w') as f:
        f.write(sim_to_json(node, indent=indent))


def sim_from_json_file(filename: str) -> SimNode:
    """Load a node from a JSON file."""
    with open(filename, 'r') as f:
        return json_to_sim(f.read())


# ============================================================
# Readable dump
# ============================================================

def _describe_var(var: Var) -> str:
    return f"{var.var_type.name.lower()} [{var.width}] {var.name}"


def describe_sim_object(obj: SimObject) -> Iterator[str]:
    """Yield one human-readable line per node of the tree."""
    st = obj.sim_time
    yield f"SimTime n_time={st.n_time!r} d_time={st.d_time!r}"
    for mod in obj.mods:
        yield f"Module {mod.name!r}"
        for port in mod.io.inputs:
            yield f"  input {_describe_var(port.var)}"
        for port in mod.io.outputs:
            yield f"  output {_describe_var(port.var)}"
        for port in mod.io.inouts:
            yield f"  inout {_describe_var(port.var)}"
        for var in mod.vars:
            yield f"  {_describe_var(var)}"
