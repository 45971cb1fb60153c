"""Core restore operations: load snapshot artifacts back into the databases.

Every artifact is checked before the first destructive statement runs, and
in safe restore mode each database is dumped to a '.safemode' artifact right
before it is dropped.
"""

import logging
from typing import Callable

from .. import __util__

logger = logging.getLogger(__name__)


class RestoreError(Exception):
    """Error ending a restore before any further database is touched."""

    pass


def verify_artifacts(endpoint, name: str) -> dict[str, str]:
    """Check that an artifact of ``name`` exists for every configured database.

    Args:
        endpoint: Endpoint holding the artifacts
        name: Snapshot name

    Returns:
        Mapping of database name to artifact path

    Raises:
        RestoreError: If any artifact is missing
    """
    paths = {}
    for db_name in endpoint.config.db_names:
        path = endpoint.artifact_path(db_name, name)
        if not endpoint.artifact_exists(path):
            raise RestoreError(f"Backup file '{path}' not found.")
        paths[db_name] = path
    return paths


def take_safety_backup(endpoint, db_name: str, name: str) -> str:
    """Dump ``db_name`` to its '.safemode' artifact.

    Raises:
        RestoreError: If the dump fails
    """
    path = endpoint.safety_path(db_name, name)
    try:
        endpoint.dump(db_name, path)
    except (OSError, __util__.CommandError) as e:
        raise RestoreError(f"Failed to create safemode backup file for '{db_name}': {e}")
    logger.info("Created a safemode backup for '%s' before restoring: '%s'.", db_name, path)
    return path


def _recreate_and_load(endpoint, db_name: str, path: str) -> None:
    logger.info("Dropping the database '%s' if it exists and creating a new one...", db_name)
    endpoint.drop_database(db_name)
    endpoint.create_database(db_name)
    logger.info("Restoring database '%s' from backup...", db_name)
    endpoint.load(db_name, path)


def _drop_tables_and_load(endpoint, db_name: str, path: str) -> None:
    # Constraint checks come back on even when the load fails
    endpoint.set_constraint_checks(db_name, enabled=False)
    try:
        logger.info("Dropping all tables of '%s'...", db_name)
        endpoint.drop_all_tables(db_name)
        logger.info("Restoring database '%s' from backup...", db_name)
        endpoint.load(db_name, path)
    finally:
        endpoint.set_constraint_checks(db_name, enabled=True)


def restore_databases(
    endpoint,
    name: str,
    recreate: bool = True,
    safe_mode: bool | None = None,
    paths: dict[str, str] | None = None,
) -> dict[str, int]:
    """Restore every configured database from the artifacts of ``name``.

    Args:
        endpoint: Endpoint holding the artifacts
        name: Snapshot name
        recreate: Drop and recreate each database; otherwise drop all of
            its tables with constraint checks disabled
        safe_mode: Take a safety dump first, defaults to the configured mode
        paths: Already verified artifact paths, from :func:`verify_artifacts`

    Returns:
        Statistics dict with "succeeded" and "failed" counts

    Raises:
        RestoreError: If an artifact is missing or a safety dump fails
    """
    if safe_mode is None:
        safe_mode = endpoint.config.safe_restore_mode
    if paths is None:
        paths = verify_artifacts(endpoint, name)

    if not safe_mode:
        logger.info(
            "Taking backup for safemode before restore operation is disabled "
            "(BDS_SAFE_RESTORE_MODE=false)"
        )

    stats = {"succeeded": 0, "failed": 0}
    load = _recreate_and_load if recreate else _drop_tables_and_load

    for db_name in endpoint.config.db_names:
        path = paths[db_name]
        if safe_mode:
            take_safety_backup(endpoint, db_name, name)

        try:
            load(endpoint, db_name, path)
        except (OSError, __util__.CommandError) as e:
            logger.error("Failed to restore backup file for '%s'. Error: %s", db_name, e)
            stats["failed"] += 1
            continue

        logger.info(
            "Restore process for '%s' completed successfully from '%s'.", db_name, path
        )
        stats["succeeded"] += 1

    return stats


def restore_files(
    endpoint, name: str, confirm: Callable[[str], bool]
) -> dict[str, int]:
    """Copy the auxiliary files stored with ``name`` into the working directory.

    Args:
        endpoint: In-container endpoint
        name: Snapshot name
        confirm: Called with each file name, the file is restored if it returns True

    Returns:
        Statistics dict with "succeeded", "skipped" and "failed" counts
    """
    stats = {"succeeded": 0, "skipped": 0, "failed": 0}
    files_dir = endpoint.files_dir(name)

    if not endpoint.remote_exists(files_dir, directory=True):
        logger.debug("No auxiliary files stored for '%s'", name)
        return stats

    try:
        entries = endpoint.list_backup_dir(name)
    except __util__.CommandError as e:
        logger.error("Failed to list files in '%s': %s", files_dir, e)
        return stats

    for file_name in entries:
        if file_name.endswith("/"):
            continue
        if not confirm(file_name):
            logger.info("Skipping restoration of %s.", file_name)
            stats["skipped"] += 1
            continue
        try:
            endpoint.copy_from_container(
                f"{files_dir}/{file_name}", endpoint.workdir / file_name
            )
        except __util__.CommandError as e:
            logger.error("Failed to restore %s: %s", file_name, e)
            stats["failed"] += 1
            continue
        logger.info("%s restored successfully.", file_name)
        stats["succeeded"] += 1

    return stats
