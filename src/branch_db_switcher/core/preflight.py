"""Checks run before any action touches the container."""

import logging

from .. import __util__

logger = logging.getLogger(__name__)


def check_container(endpoint) -> None:
    """Abort unless the configured container is running."""
    if not endpoint.is_container_running():
        raise __util__.AbortError(
            f"Docker container '{endpoint.config.container_id}' is not running. "
            "Please start the container and try again."
        )


def check_databases(endpoint) -> None:
    """Abort on the first configured database that does not accept connections."""
    for db_name in endpoint.config.db_names:
        if not endpoint.can_connect(db_name):
            raise __util__.AbortError(
                f"Failed to connect to the database '{db_name}'. "
                "Please check the database name and user in the config file."
            )


def prepare_backup_dir(endpoint) -> None:
    """Make sure the in-container backup directory exists.

    A failure is reported and the run goes on; commands that need the
    directory report their own failure.
    """
    try:
        created = endpoint.ensure_backup_dir()
    except __util__.CommandError as e:
        logger.error("Failed to create backup directory '%s': %s", endpoint.backup_dir, e)
        return
    if created:
        logger.info("Backup directory '%s' created successfully.", endpoint.backup_dir)
    else:
        logger.info("Backup directory: '%s'", endpoint.backup_dir)


def run_preflight(endpoint) -> None:
    """Run all checks in order.

    Raises:
        AbortError: If the container or a database is unreachable
    """
    check_container(endpoint)
    check_databases(endpoint)
    prepare_backup_dir(endpoint)
