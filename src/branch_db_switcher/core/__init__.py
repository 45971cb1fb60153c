"""Core backup and restore operations for branch-db-switcher.

Each action maps to a fixed, sequential series of external commands run
through an endpoint.
"""

from .naming import current_branch, is_git_repository, resolve_snapshot_name
from .operations import (
    backup_databases,
    backup_files,
    delete_all_snapshots,
    delete_snapshot,
    list_snapshots,
)
from .preflight import run_preflight
from .restore import RestoreError, restore_databases, restore_files, verify_artifacts

__all__ = [
    "current_branch",
    "is_git_repository",
    "resolve_snapshot_name",
    "backup_databases",
    "backup_files",
    "delete_snapshot",
    "delete_all_snapshots",
    "list_snapshots",
    "run_preflight",
    "RestoreError",
    "restore_databases",
    "restore_files",
    "verify_artifacts",
]
