from __future__ import annotations

"""
Command Line Interface (CLI) Demo Driver.

Orchestrates the demo lifecycle: argument parsing, resolution of the
configuration hierarchy (defaults, JSON file, environment, CLI overrides),
initialization of the process-wide logger, and generation of log traffic
from the main thread plus a configurable number of worker threads.
"""

import json
import sys
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from bitlog.api import init
from bitlog.core.emitter import Logger
from bitlog.core.validator import validate_config
from bitlog.domain.config import load_config
from bitlog.infra.logging import LoggingConfig, configure_logging, get_logger
from bitlog.interface.cli import args as cli_args

logger = get_logger(__name__)


@dataclass
class Sample:
    """Small payload logged with %r to exercise repr formatting."""
    a: int


# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the demo workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 2 invalid configuration, 130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Internal diagnostics bootstrap
    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "WARNING"), force=True)

    # 3. Resolve and validate the configuration hierarchy
    raw_conf = _merge_config(load_config(args.config_file), cli_args.args_to_overrides(args))
    try:
        config, _ = validate_config(raw_conf, strict=True)
    except (TypeError, ValueError) as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.count < 0 or args.threads < 0:
        print("ERROR: --count and --threads must be non-negative.", file=sys.stderr)
        return 2

    # Short-circuit if configuration dump is requested
    if args.dump_config:
        print(json.dumps(config.to_dict(), ensure_ascii=False, indent=2))
        return 0

    # 4. Logger initialization
    target = init(config)
    if args.dump:
        target.dump()

    # 5. Traffic generation
    logger.debug(f"Generating traffic: {args.count} iterations on {args.threads + 1} threads")
    try:
        run_traffic(target, args.count, args.threads)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

    return 0


# -----------------------------------------------------------------------------
# TRAFFIC GENERATION
# -----------------------------------------------------------------------------

def generate_traffic(target: Logger, count: int) -> None:
    """
    Emit one burst of every severity per iteration.

    Args:
        target: Logger receiving the records.
        count: Number of iterations.
    """
    sample = Sample(a=12)
    for i in range(count):
        target.trace()
        target.trace("%s", "trace")
        target.debug("%s", "debug")
        target.info("info%d", i)
        target.warn("%s", "warn")
        target.error("%s", "error")
        target.fatal("fatal-%d %s", i, "world")
        target.debug("%r", sample)


def run_traffic(target: Logger, count: int, threads: int) -> None:
    """
    Run ``generate_traffic`` on the calling thread and ``threads`` workers.

    Args:
        target: Logger shared by every thread.
        count: Iterations per thread.
        threads: Number of additional worker threads.
    """
    workers = [
        threading.Thread(
            target=generate_traffic,
            args=(target, count),
            name=f"bitlog-demo-{n}",
            daemon=True,
        )
        for n in range(threads)
    ]
    for w in workers:
        w.start()

    generate_traffic(target, count)

    for w in workers:
        w.join()


# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge CLI overrides into the loaded configuration.

    Args:
        base: Configuration resolved from defaults, file and environment.
        overrides: Values given on the command line.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in ("filepath", "level", "max_size"):
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out
