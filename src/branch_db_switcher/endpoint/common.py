# pyright: standard

"""branch-db-switcher: branch_db_switcher/endpoint/common.py
Common functionality among endpoints.
"""

import posixpath
import re
import subprocess
import tempfile
from pathlib import Path

from filelock import FileLock

from .. import __util__
from ..__logger__ import logger
from ..config import Config

# Drops every table of the connection's current schema
DROP_ALL_TABLES_SQL = """DO $$
DECLARE
    r RECORD;
BEGIN
    FOR r IN (SELECT tablename FROM pg_tables WHERE schemaname = current_schema()) LOOP
        EXECUTE 'DROP TABLE IF EXISTS ' || quote_ident(r.tablename) || ' CASCADE';
    END LOOP;
END $$;"""

# Database used for DROP/CREATE DATABASE statements
MAINTENANCE_DB = "postgres"

RESTORE_FLAGS = ["--clean", "--if-exists", "--no-owner", "--no-privileges"]


class Endpoint:
    """Generic structure of a database endpoint running inside a docker container.

    Subclasses decide where snapshot artifacts are stored.
    """

    def __init__(self, config: Config, workdir=None) -> None:
        """
        Initialize the Endpoint.

        Args:
            config (Config): Configuration for the current invocation.
            workdir (Path): Directory local artifacts and auxiliary files live in,
                defaults to the current working directory.
        """
        self.config = config
        self.workdir = Path(workdir) if workdir is not None else Path.cwd()
        self.backup_dir = config.backup_dir

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config.container_id})"

    # Command composition

    def _docker_exec_cmd(self, args, interactive=False):
        cmd = ["docker", "exec"]
        if interactive:
            cmd += ["-i"]
        if self.config.db_password:
            cmd += ["-e", f"PGPASSWORD={self.config.db_password}"]
        cmd += [self.config.container_id, *args]
        return cmd

    def _build_psql_cmd(self, db_name, sql):
        return [
            "psql",
            "-v",
            "ON_ERROR_STOP=1",
            "-U",
            self.config.db_user,
            "-d",
            db_name,
            "-c",
            sql,
        ]

    def _build_dump_cmd(self, db_name, output=None):
        cmd = ["pg_dump", "-Fc", "-U", self.config.db_user, "-d", db_name]
        if output is not None:
            cmd += ["-f", str(output)]
        return cmd

    def _build_restore_cmd(self, db_name, source=None):
        cmd = ["pg_restore", *RESTORE_FLAGS, "-U", self.config.db_user, "-d", db_name]
        if source is not None:
            cmd += [str(source)]
        return cmd

    def _exec_command(self, command, **kwargs):
        kwargs.setdefault("text", "stdin" not in kwargs and "stdout" not in kwargs)
        return __util__.exec_subprocess(command, **kwargs)

    def _exec_in_container(self, args, interactive=False, **kwargs):
        return self._exec_command(
            self._docker_exec_cmd(args, interactive=interactive), **kwargs
        )

    # Checks

    def is_container_running(self) -> bool:
        """Return True if the configured container exists and is running."""
        cmd = [
            "docker",
            "inspect",
            "-f",
            "{{.State.Running}}",
            self.config.container_id,
        ]
        result = self._exec_command(cmd, check=False)
        return result.returncode == 0 and result.stdout.strip() == "true"

    def can_connect(self, db_name) -> bool:
        """Return True if ``db_name`` answers a trivial query."""
        result = self._exec_in_container(
            self._build_psql_cmd(db_name, "SELECT version();"), check=False
        )
        if result.returncode != 0:
            logger.debug("Connection check for %s failed: %s", db_name, result.stderr)
        return result.returncode == 0

    def remote_exists(self, path, directory=False) -> bool:
        """Test for a file (or directory) inside the container."""
        flag = "-d" if directory else "-f"
        result = self._exec_in_container(["test", flag, str(path)], check=False)
        return result.returncode == 0

    # Backup directory inside the container

    def ensure_backup_dir(self) -> bool:
        """Create the in-container backup directory if needed.

        Returns:
            True if the directory had to be created.
        """
        if self.remote_exists(self.backup_dir, directory=True):
            return False
        self._exec_in_container(["mkdir", "-p", self.backup_dir])
        return True

    def remote_path(self, *parts) -> str:
        return posixpath.join(self.backup_dir, *parts)

    def list_backup_dir(self, subdir=None) -> list[str]:
        """Names of the entries in the backup directory, directories with a trailing '/'."""
        path = self.remote_path(subdir) if subdir else self.backup_dir
        result = self._exec_in_container(["ls", "-1p", path])
        return sorted(line.strip() for line in result.stdout.splitlines() if line.strip())

    def make_remote_dir(self, path) -> None:
        self._exec_in_container(["mkdir", "-p", str(path)])

    def copy_to_container(self, local_path, remote_path) -> None:
        cmd = [
            "docker",
            "cp",
            str(local_path),
            f"{self.config.container_id}:{remote_path}",
        ]
        self._exec_command(cmd)

    def copy_from_container(self, remote_path, local_path) -> None:
        cmd = [
            "docker",
            "cp",
            f"{self.config.container_id}:{remote_path}",
            str(local_path),
        ]
        self._exec_command(cmd)

    def remove_remote(self, path, recursive=False) -> None:
        cmd = ["rm", "-R", str(path)] if recursive else ["rm", str(path)]
        self._exec_in_container(cmd)

    # Destructive database statements

    def psql(self, db_name, sql):
        return self._exec_in_container(self._build_psql_cmd(db_name, sql))

    def drop_database(self, db_name) -> None:
        self.psql(MAINTENANCE_DB, f"DROP DATABASE IF EXISTS {__util__.quote_ident(db_name)};")

    def create_database(self, db_name) -> None:
        self.psql(MAINTENANCE_DB, f"CREATE DATABASE {__util__.quote_ident(db_name)};")

    def drop_all_tables(self, db_name) -> None:
        self.psql(db_name, DROP_ALL_TABLES_SQL)

    def set_constraint_checks(self, db_name, enabled) -> None:
        """Toggle trigger based constraint checks for new sessions on ``db_name``."""
        ident = __util__.quote_ident(db_name)
        if enabled:
            sql = f"ALTER DATABASE {ident} RESET session_replication_role;"
        else:
            sql = f"ALTER DATABASE {ident} SET session_replication_role = 'replica';"
        self.psql(MAINTENANCE_DB, sql)

    # Run lock

    def lock(self, timeout=10) -> FileLock:
        """Inter-process lock serializing runs against the same container."""
        safe_id = re.sub(r"[^A-Za-z0-9_.-]", "_", self.config.container_id)
        lock_path = Path(tempfile.gettempdir()) / f".bds.{safe_id}.lock"
        return FileLock(lock_path, timeout=timeout)

    # The following methods are implemented by endpoints depending on
    # where artifacts are stored.

    def artifact_path(self, db_name, name) -> str:
        raise NotImplementedError

    def safety_path(self, db_name, name) -> str:
        return f"{self.artifact_path(db_name, name)}.safemode"

    def artifact_exists(self, path) -> bool:
        raise NotImplementedError

    def dump(self, db_name, path) -> None:
        raise NotImplementedError

    def load(self, db_name, path) -> subprocess.CompletedProcess:
        raise NotImplementedError
