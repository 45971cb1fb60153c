"""Delete commands: Remove snapshots inside the container."""

import argparse
import logging

from .. import __util__
from ..__logger__ import create_logger
from ..config import ConfigError
from ..core import delete_all_snapshots, delete_snapshot, resolve_snapshot_name
from .common import (
    confirm_action,
    get_log_level,
    open_endpoint,
    report_error,
    run_locked,
)

logger = logging.getLogger(__name__)


def execute_delete(args: argparse.Namespace) -> int:
    """Execute the delete command.

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
        name = resolve_snapshot_name(getattr(args, "name", None), cwd=ep.workdir)
    except (ConfigError, __util__.AbortError, __util__.CommandError) as e:
        return report_error(e)

    if not confirm_action(args, "delete", name):
        return 0

    try:
        stats = run_locked(ep, delete_snapshot, ep, name)
    except __util__.AbortError as e:
        return report_error(e)

    return 1 if stats["failed"] else 0


def execute_delete_all(args: argparse.Namespace) -> int:
    """Execute the delete-all command.

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
    except (ConfigError, __util__.AbortError, __util__.CommandError) as e:
        return report_error(e)

    if not confirm_action(args, "delete-all", None):
        return 0

    try:
        deleted = run_locked(ep, delete_all_snapshots, ep)
    except __util__.AbortError as e:
        return report_error(e)

    return 0 if deleted else 1
