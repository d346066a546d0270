"""Entry point of the hardware debugger console."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from hyped.core.clock import WallClock
from hyped.core.logger import Logger, LogLevel
from hyped.debug.repl import Repl


def main(argv: Sequence[str] | None = None) -> int:
    """Start the console described by the configuration file given as the first argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    logger = Logger("Debugger", LogLevel.DEBUG, WallClock())
    if not args:
        program = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "debugger"
        logger.log(LogLevel.FATAL, "Usage: %s [config_file]", program)
        return 1
    repl = Repl(logger)
    try:
        configured = repl.from_file(args[0])
    except (OSError, ValueError):
        logger.log(LogLevel.FATAL, "Failed to create debugger from file %s", args[0])
        return 1
    configured.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())