"""
Tests for the sv-sim command-line front end.
"""

import sys
import os
import json
import tempfile
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sv_sim.main import main, read_sv_file, parse_sv_file, build_arg_parser


VERILOG = "`timescale 1ns/1ps\nmodule m(input a, output b);\n wire c;\nendmodule\n"


def write_source(tmp, text, name="design.sv"):
    path = os.path.join(tmp, name)
    with open(path, "w") as f:
        f.write(text)
    return path


def test_read_sv_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = write_source(tmp, VERILOG)
        assert read_sv_file(path) == VERILOG
    print("✓ test_read_sv_file")


def test_parse_sv_file():
    with tempfile.TemporaryDirectory() as tmp:
        obj = parse_sv_file(write_source(tmp, VERILOG))
        assert [m.name for m in obj.mods] == ["m"]
    print("✓ test_parse_sv_file")


def test_arg_defaults():
    args = build_arg_parser().parse_args(["design.sv"])
    assert str(args.input_path) == "design.sv"
    assert args.output_path is None
    assert args.log_level == "error"
    assert args.verbose is False
    print("✓ test_arg_defaults")


def test_main_writes_json_dump():
    with tempfile.TemporaryDirectory() as tmp:
        src = write_source(tmp, VERILOG)
        out = os.path.join(tmp, "design.json")
        assert main([src, out, "--log-level", "off"]) == 0
        with open(out) as f:
            data = json.load(f)
        assert data["mods"][0]["name"] == "m"
        assert data["mods"][0]["vars"][0]["name"] == "c"
    print("✓ test_main_writes_json_dump")


def test_main_verbose_prints(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        src = write_source(tmp, VERILOG)
        assert main([src, "-v", "-l", "off"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["_type"] == "SimObject"
    print("✓ test_main_verbose_prints")


def test_main_parse_failure():
    with tempfile.TemporaryDirectory() as tmp:
        src = write_source(tmp, "module m();\n wire [0:7] x;\nendmodule\n")
        out = os.path.join(tmp, "design.json")
        assert main([src, out, "-l", "off"]) == 1
        assert not os.path.exists(out)
    print("✓ test_main_parse_failure")


def test_main_missing_file():
    with tempfile.TemporaryDirectory() as tmp:
        assert main([os.path.join(tmp, "missing.sv"), "-l", "off"]) == 2
    print("✓ test_main_missing_file")


def test_main_invalid_utf8():
    """Test: a file that is not UTF-8 is a read error, not a crash"""
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "design.sv")
        with open(path, "wb") as f:
            f.write(b"module m(input a);\n\xff\nendmodule\n")
        assert main([path, "-l", "off"]) == 2
    print("✓ test_main_invalid_utf8")
