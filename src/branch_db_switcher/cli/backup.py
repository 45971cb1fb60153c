"""Backup commands: Dump the databases inside the container or locally."""

import argparse
import logging
import time

from .. import __util__
from ..__logger__ import create_logger
from ..config import ConfigError
from ..core import backup_databases, backup_files, resolve_snapshot_name
from .common import (
    confirm_action,
    get_log_level,
    open_endpoint,
    report_error,
    run_locked,
)

logger = logging.getLogger(__name__)


def _backup(ep, name: str, local: bool) -> dict[str, int]:
    stats = backup_databases(ep, name)
    if not local:
        file_stats = backup_files(ep, name)
        stats["failed"] += file_stats["failed"]
    return stats


def execute_backup(args: argparse.Namespace, local: bool = False) -> int:
    """Execute the backup or backup-local command.

    Args:
        args: Parsed command line arguments
        local: Write the dumps to the working directory

    Returns:
        Exit code (0 for success, 1 if any database or file failed)
    """
    log_level = get_log_level(args)
    create_logger(level=log_level)
    action = "backup-local" if local else "backup"

    try:
        ep = open_endpoint(args, local=local)
        if ep is None:
            return 1
        name = resolve_snapshot_name(getattr(args, "name", None), cwd=ep.workdir)
    except (ConfigError, __util__.AbortError, __util__.CommandError) as e:
        return report_error(e)

    if not confirm_action(args, action, name):
        return 0

    logger.info(__util__.log_heading(f"{action} started at {time.ctime()}"))

    try:
        stats = run_locked(ep, _backup, ep, name, local)
    except __util__.AbortError as e:
        return report_error(e)

    logger.info(__util__.log_heading(f"{action} finished at {time.ctime()}"))

    if stats["failed"] > 0:
        return 1
    return 0
