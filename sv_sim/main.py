"""
Command-line front end: read a SystemVerilog file, parse it, report.

    sv-sim design.sv [design.json] [--log-level debug] [--verbose]
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from sv_sim.hdl_parser.cursor import DiagnosticSink
from sv_sim.hdl_parser.errors import LexingError
from sv_sim.hdl_parser.parser import parse_sv
from sv_sim.hdl_parser.sim_json import sim_to_json, describe_sim_object
from sv_sim.hdl_parser.sim_nodes import SimObject

logger = logging.getLogger("sv_sim")

LOG_FORMAT = "%(asctime)s [%(levelname)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def read_sv_file(path) -> str:
    """Read a SystemVerilog file to a string for parsing."""
    logger.debug("reading sv file %s", path)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_sv_file(path, sink: Optional[DiagnosticSink] = None) -> SimObject:
    """Read and parse the file at *path*."""
    return parse_sv(read_sv_file(path), sink)


def setup_logging(level_name: str):
    logging.basicConfig(level=LOG_LEVELS[level_name], format=LOG_FORMAT,
                        datefmt=DATE_FORMAT)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sv-sim",
        description="SystemVerilog simulation tool. Parses a single file and "
                    "optionally writes the parsed object as JSON.")
    parser.add_argument("input_path", type=Path, help="File input path")
    parser.add_argument("output_path", type=Path, nargs="?", default=None,
                        help="File output path (JSON dump of the parsed object)")
    parser.add_argument("-l", "--log-level", choices=list(LOG_LEVELS), default="error",
                        help="Sets logging level (default: error)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print the parsed object to stdout")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        source = read_sv_file(args.input_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("encountered an error reading %s: '%s'", args.input_path, e)
        return 2

    try:
        obj = parse_sv(source)
    except LexingError as e:
        logger.error("failed to parse %s: %s", args.input_path, e)
        return 1

    logger.info("successfully parsed input file %s", args.input_path)
    for line in describe_sim_object(obj):
        logger.debug("%s", line)

    dump = sim_to_json(obj)
    if args.output_path is not None:
        args.output_path.write_text(dump + "\n")
        logger.info("wrote %s", args.output_path)
    if args.verbose:
        print(dump)

    return 0


if __name__ == "__main__":
    sys.exit(main())
