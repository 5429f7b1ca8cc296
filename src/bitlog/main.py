from __future__ import annotations

"""
Main Entry Point.

Runs the demo driver and reports any crash that escapes it on stderr.
"""

import logging
import sys
import traceback


def main() -> int:
    """
    Delegate to the CLI controller.

    Returns:
        int: Standard process exit code (0: Success, 1: Error).
    """
    try:
        from bitlog.interface.cli.app import main as cli_main
        return cli_main()
    except Exception as e:
        stack_trace = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        logging.getLogger("bitlog.supervisor").critical(f"FATAL EXCEPTION DETECTED: {e}")
        print(f"CRITICAL ERROR (BITLOG CLI)\n{stack_trace}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
