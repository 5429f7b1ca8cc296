from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the traffic-generating demo driver and
translates the parsed namespace into raw configuration overrides understood
by the validator.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

DEFAULT_DEMO_COUNT = 1024
DEFAULT_DEMO_THREADS = 1


def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the bitlog demo driver.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="bitlog-demo",
        description="Generate concurrent log traffic through bitlog.",
    )

    # --- Logger Configuration ---
    p.add_argument(
        "-l", "--level",
        dest="level",
        default=None,
        help="Enabled severities, e.g. 'ALL', 'INFO|ERROR' or '20'.",
    )
    p.add_argument(
        "-f", "--file",
        dest="filepath",
        default=None,
        help="Destination log file. Omit to log to stdout.",
    )
    p.add_argument(
        "-s", "--max-size",
        dest="max_size",
        default=None,
        help="Truncation threshold in bytes, suffixes K/M/G accepted (default: 10M).",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with 'filepath', 'level' and 'max_size' keys.",
    )

    # --- Traffic Shape ---
    p.add_argument(
        "-n", "--count",
        type=int,
        default=DEFAULT_DEMO_COUNT,
        help="Iterations per thread.",
    )
    p.add_argument(
        "-t", "--threads",
        type=int,
        default=DEFAULT_DEMO_THREADS,
        help="Worker threads started alongside the main thread.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--dump",
        action="store_true",
        help="Print the logger configuration before generating traffic.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Show the library's own DEBUG diagnostics on stderr.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into raw configuration overrides.

    Only options given on the command line are included.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.level is not None:
        overrides["level"] = args.level
    if args.filepath is not None:
        overrides["filepath"] = args.filepath
    if args.max_size is not None:
        overrides["max_size"] = args.max_size

    return overrides
