"""
Tests for SimObject JSON serialization and the readable tree dump.
"""

import sys
import os
import json
import tempfile
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, project_root)

from sv_sim.hdl_parser.parser import parse_sv
from sv_sim.hdl_parser.sim_nodes import SimObject, VarType, Module
from sv_sim.hdl_parser.sim_json import (
    sim_to_dict, sim_to_json, dict_to_sim, json_to_sim,
    sim_to_json_file, sim_from_json_file, describe_sim_object,
)


VERILOG = """`timescale 10ns/1ps
module m(input [7:0] a, output reg b);
    reg [3:0] r;
endmodule
"""


def test_sim_object_to_json():
    data = json.loads(sim_to_json(parse_sv(VERILOG)))
    assert data["_type"] == "SimObject"
    assert data["sim_time"]["_type"] == "SimTime"
    mod = data["mods"][0]
    assert mod["_type"] == "Module"
    assert mod["name"] == "m"
    assert mod["io"]["inputs"][0]["var"]["width"] == 8
    assert mod["io"]["outputs"][0]["var"]["var_type"] == "REG"
    print("✓ test_sim_object_to_json")


def test_round_trip_preserves_tree():
    obj = parse_sv(VERILOG)
    back = json_to_sim(sim_to_json(obj))
    assert isinstance(back, SimObject)
    assert back == obj
    assert back.mods[0].vars[0].var_type is VarType.REG
    print("✓ test_round_trip_preserves_tree")


def test_dict_to_sim_rejects_unknown_type():
    try:
        dict_to_sim({"_type": "Netlist"})
        assert False, "Expected ValueError"
    except ValueError as e:
        assert "Netlist" in str(e)
    try:
        dict_to_sim({"name": "m"})
        assert False, "Expected ValueError"
    except ValueError:
        pass
    print("✓ test_dict_to_sim_rejects_unknown_type")


def test_single_node_round_trip():
    mod = parse_sv(VERILOG).mods[0]
    back = dict_to_sim(sim_to_dict(mod))
    assert isinstance(back, Module)
    assert back.io.inputs[0].name == "a"
    print("✓ test_single_node_round_trip")


def test_json_file_round_trip():
    obj = parse_sv(VERILOG)
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "design.json")
        sim_to_json_file(obj, path)
        assert sim_from_json_file(path) == obj
    print("✓ test_json_file_round_trip")


def test_describe_sim_object():
    lines = list(describe_sim_object(parse_sv(VERILOG)))
    assert lines[0].startswith("SimTime")
    assert lines[1:] == [
        "Module 'm'",
        "  input wire [8] a",
        "  output reg [1] b",
        "  reg [4] r",
    ]
    print("✓ test_describe_sim_object")
