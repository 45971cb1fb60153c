"""List command: Show snapshots stored inside the container."""

import argparse
import logging

from .. import __util__
from ..__logger__ import create_logger
from ..config import ConfigError
from ..core import list_snapshots
from .common import get_log_level, open_endpoint, report_error

logger = logging.getLogger(__name__)


def execute_list(args: argparse.Namespace) -> int:
    """Execute the list command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    log_level = get_log_level(args)
    create_logger(level=log_level)

    try:
        ep = open_endpoint(args)
        if ep is None:
            return 1
        names = list_snapshots(ep)
    except __util__.CommandError as e:
        logger.error("Failed to list backups inside the container: %s", e)
        return 1
    except (ConfigError, __util__.AbortError) as e:
        return report_error(e)

    print(f"{ep.backup_dir}:")
    if not names:
        print("No backups found")
        return 0

    for name in names:
        print(f"  {name}")

    print("")
    print(f"Total: {len(names)} entr{'y' if len(names) == 1 else 'ies'}")

    return 0
