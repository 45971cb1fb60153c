"""Configuration schema definitions using dataclasses.

Defines the structure of the `.env` configuration with sensible defaults.
"""

from dataclasses import dataclass

# Fixed snapshot location inside the database container
BACKUP_DIR = "/bds_backups"


@dataclass(frozen=True)
class Config:
    """Configuration for one invocation.

    Attributes:
        container_id: Id or name of the docker container running PostgreSQL
        db_names: Databases to snapshot and restore, in order
        db_user: Database user used for psql, pg_dump and pg_restore
        db_password: Database password, passed as PGPASSWORD when set
        safe_restore_mode: Take a safety dump before every destructive restore
        files_to_backup: Auxiliary project files stored with in-container snapshots
    """

    container_id: str
    db_names: tuple[str, ...]
    db_user: str
    db_password: str = ""
    safe_restore_mode: bool = True
    files_to_backup: tuple[str, ...] = ()
    backup_dir: str = BACKUP_DIR

    def summary(self) -> list[tuple[str, str, str]]:
        """Rows of (label, key, value) for display, with the password masked."""
        return [
            ("Container ID", "BDS_DOCKER_CONTAINER_ID", self.container_id),
            ("Database names", "BDS_DB_NAMES", ", ".join(self.db_names)),
            ("Database username", "BDS_DB_USER", self.db_user),
            ("Database password", "BDS_DB_PASSWORD", "****" if self.db_password else ""),
            (
                "Safe restore mode",
                "BDS_SAFE_RESTORE_MODE",
                "true" if self.safe_restore_mode else "false",
            ),
            ("List of files to backup", "BDS_FILES_TO_BACKUP", ", ".join(self.files_to_backup)),
        ]
