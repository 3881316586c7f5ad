"""
Main entry point for the Git Playground simulator.

Runs a small line-based terminal: type ``git ...`` commands, ``reset`` to
restore the sample repository, or ``exit`` to quit.
"""

import asyncio
import sys
from typing import Optional

from .models.outcome import split_output
from .models.repository import RepositoryState
from .services.config_manager import ConfigurationManager
from .services.session_controller import SessionController
from .utils.logging import get_logger, setup_logging

PROMPT = "$ "


class TerminalPrinter:
    """Session listener that echoes progress and output to stdout."""

    def __init__(self, separator: str):
        self.separator = separator

    def on_progress(self, message: str) -> None:
        print(message)

    def on_publish(self, state: RepositoryState, output: str) -> None:
        for line in split_output(output, self.separator):
            print(line)


async def async_main(config_path: Optional[str] = None):
    """Async main application entry point."""
    config = ConfigurationManager(config_path).load_config()
    setup_logging(log_dir=config.log_dir or None, log_level=config.log_level)
    logger = get_logger("main")
    logger.info("Starting Git Playground", extra={"config_path": config_path})

    session = SessionController(config=config)
    session.add_listener(TerminalPrinter(config.line_separator))
    await session.reset()

    loop = asyncio.get_running_loop()
    while True:
        try:
            line = await loop.run_in_executor(None, input, PROMPT)
        except EOFError:
            break

        line = line.strip()
        if not line:
            continue
        if line in ("exit", "quit"):
            break
        if line == "reset":
            await session.reset()
            continue

        await session.execute(line)

    logger.info("Session ended", extra={"commands": len(session.history)})


def main():
    """Main application entry point."""
    config_path = None

    if len(sys.argv) > 1:
        config_path = sys.argv[1]

    try:
        asyncio.run(async_main(config_path))
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
    except (ValueError, FileNotFoundError) as e:
        print(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
