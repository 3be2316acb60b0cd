"""
Command-line interface for mipdd.

This module provides a simple CLI to inspect MIP problems as mipdd reads them.

Usage:
    mipdd <COMMAND>

Commands:
    version   Show the mipdd library version and the versions of its dependencies.
    stats     Read an MPS file and print the size of the problem.
"""

import os
import sys
import logging
import argparse

import numpy as np

from mipdd import __version__
from mipdd.exceptions import MipddException
from mipdd.tools.mps import read_mps


def command_version(args):
    print(f"mipdd version: {__version__}")
    print(f"numpy version: {np.__version__}")

def command_stats(args):
    number_type = "rational" if args.rational else "float"
    try:
        problem = read_mps(os.path.expanduser(args.model), number_type=number_type, max_lines=args.max_lines)
    except (MipddException, ValueError) as e:
        sys.stderr.write(f"Error reading model: {e}\n")
        sys.exit(1)

    print(problem)
    print("Rows by sense: " + ", ".join(f"{sense.name}={count}" for sense, count in _count_senses(problem)))
    if problem.objective.name is not None:
        print(f"Objective row: {problem.objective.name}")

def _count_senses(problem):
    counts = {}
    for row in problem.rows:
        counts[row.sense] = counts.get(row.sense, 0) + 1
    return sorted(counts.items(), key=lambda kv: kv[0].name)

def main(argv=None):
    parser = argparse.ArgumentParser(description="mipdd command line interface")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # mipdd version
    version_parser = subparsers.add_parser("version", help="Show version information on mipdd and its dependencies")
    version_parser.set_defaults(func=command_version)

    # mipdd stats
    stats_parser = subparsers.add_parser("stats", help="Read an MPS file and print the size of the problem")
    stats_parser.add_argument("model", help="Path to an MPS file (optionally compressed with .gz, .bz2 or .xz)")
    stats_parser.add_argument("--rational", action="store_true", help="Read all numbers as exact rationals")
    stats_parser.add_argument("--max-lines", type=int, default=None, help="Fail on files with more lines (default: no limit)")
    stats_parser.add_argument("-v", "--verbose", action="count", default=0, help="Log more (repeat for debug output)")
    stats_parser.set_defaults(func=command_stats)

    args = parser.parse_args(argv)

    level = logging.WARNING
    verbose = getattr(args, "verbose", 0)
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')
    logging.captureWarnings(True)

    args.func(args)
