"""Restore commands: Load the databases from a snapshot.

``restore`` drops and recreates each database from an artifact inside the
container and offers the stored files back. ``restore-local`` drops all tables
and loads an artifact from the working directory.
"""

import argparse
import logging
import time
from functools import partial

from .. import __util__
from ..__logger__ import create_logger
from ..config import ConfigError
from ..core import (
    RestoreError,
    resolve_snapshot_name,
    restore_databases,
    restore_files,
    verify_artifacts,
)
from .common import (
    confirm,
    confirm_action,
    get_log_level,
    open_endpoint,
    report_error,
    run_locked,
)

logger = logging.getLogger(__name__)


def _restore(ep, name: str, local: bool, assume_yes: bool) -> dict[str, int]:
    paths = verify_artifacts(ep, name)

    failed = 0
    if not local:
        file_stats = restore_files(
            ep,
            name,
            lambda file_name: confirm(
                f"Do you want to restore {file_name}?", assume_yes=assume_yes
            ),
        )
        failed += file_stats["failed"]

    stats = restore_databases(ep, name, recreate=not local, paths=paths)
    stats["failed"] += failed
    return stats


def execute_restore(args: argparse.Namespace, local: bool = False) -> int:
    """Execute the restore or restore-local command.

    Args:
        args: Parsed command line arguments
        local: Restore from artifacts in the working directory

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    log_level = get_log_level(args)
    create_logger(level=log_level)
    action = "restore-local" if local else "restore"

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

    restore = partial(_restore, ep, name, local, getattr(args, "yes", False))
    try:
        stats = run_locked(ep, restore)
    except (RestoreError, __util__.AbortError) as e:
        return report_error(e)

    logger.info(__util__.log_heading(f"{action} finished at {time.ctime()}"))

    if stats["failed"] > 0:
        return 1
    return 0
