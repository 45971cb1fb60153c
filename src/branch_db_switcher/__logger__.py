# pyright: standard

"""branch-db-switcher: branch_db_switcher/__logger__.py
A common logger printing through a rich console.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Create a logger directly
logger = logging.Logger("branch-db-switcher", logging.INFO)


def create_logger(level: str | int = logging.INFO, console: Console | None = None) -> None:
    """Helper function to setup logging for a single invocation."""
    rich_handler = RichHandler(
        console=console or Console(), show_path=False, show_time=False
    )

    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(level)
    logger.addHandler(rich_handler)

    logging.basicConfig(
        format="%(message)s",
        datefmt="%H:%M:%S",
        level=level,
        handlers=[rich_handler],
        force=True,
    )
