"""Core operations: list, backup and delete snapshot artifacts."""

import logging
from pathlib import Path

from .. import __util__

logger = logging.getLogger(__name__)


def list_snapshots(endpoint) -> list[str]:
    """Return the artifact names in the backup directory.

    Only reads from the container.
    """
    return endpoint.list_artifacts()


def backup_databases(endpoint, name: str) -> dict[str, int]:
    """Dump every configured database to its artifact for ``name``.

    A failing dump is reported and the remaining databases are still backed up.

    Args:
        endpoint: Endpoint deciding where the artifacts are stored
        name: Snapshot name

    Returns:
        Statistics dict with "succeeded" and "failed" counts
    """
    stats = {"succeeded": 0, "failed": 0}

    for db_name in endpoint.config.db_names:
        path = endpoint.artifact_path(db_name, name)
        try:
            endpoint.dump(db_name, path)
        except (OSError, __util__.CommandError) as e:
            logger.error("Failed to create backup file for '%s': %s", db_name, e)
            stats["failed"] += 1
            continue
        logger.info("Backup process for '%s' completed successfully at '%s'.", db_name, path)
        stats["succeeded"] += 1

    return stats


def backup_files(endpoint, name: str, files=None) -> dict[str, int]:
    """Copy the auxiliary files into the snapshot directory inside the container.

    Args:
        endpoint: In-container endpoint
        name: Snapshot name
        files: Paths to copy, defaults to the configured files

    Returns:
        Statistics dict with "succeeded" and "failed" counts
    """
    stats = {"succeeded": 0, "failed": 0}
    files = endpoint.config.files_to_backup if files is None else files
    if not files:
        return stats

    files_dir = endpoint.files_dir(name)
    try:
        endpoint.make_remote_dir(files_dir)
    except __util__.CommandError as e:
        logger.error("Failed to create '%s' inside the container: %s", files_dir, e)
        stats["failed"] = len(files)
        return stats

    for file_path in files:
        local_path = endpoint.workdir / file_path
        if not local_path.is_file():
            logger.warning("File '%s' not found.", file_path)
            stats["failed"] += 1
            continue
        file_name = Path(file_path).name
        try:
            endpoint.copy_to_container(local_path, f"{files_dir}/{file_name}")
        except __util__.CommandError as e:
            logger.error("Failed to save '%s': %s", file_name, e)
            stats["failed"] += 1
            continue
        logger.info("%s saved successfully.", file_name)
        stats["succeeded"] += 1

    return stats


def delete_snapshot(endpoint, name: str) -> dict[str, int]:
    """Remove the artifact of ``name`` for every configured database."""
    stats = {"succeeded": 0, "failed": 0}

    for db_name in endpoint.config.db_names:
        path = endpoint.artifact_path(db_name, name)
        try:
            endpoint.delete_artifact(path)
        except __util__.CommandError as e:
            logger.error("Failed to delete backup '%s': %s", path, e)
            stats["failed"] += 1
            continue
        logger.info("Deleted backup '%s'.", path)
        stats["succeeded"] += 1

    return stats


def delete_all_snapshots(endpoint) -> bool:
    """Remove the whole backup directory.

    Returns:
        True on success
    """
    try:
        endpoint.delete_all()
    except __util__.CommandError as e:
        logger.error("Failed to delete all backups: %s", e)
        return False
    logger.info("Deleted all backups in '%s'.", endpoint.backup_dir)
    return True

