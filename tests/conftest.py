"""Pytest configuration and shared fixtures."""

import contextlib
import posixpath
import subprocess
from pathlib import Path

import pytest

from branch_db_switcher.__util__ import CommandError
from branch_db_switcher.config import Config


class FakeEndpoint:
    """In-memory stand-in for an endpoint.

    Databases hold a single state value; artifacts map a path to the state
    dumped into it. Every call is recorded in ``calls``.
    """

    def __init__(self, config, workdir):
        self.config = config
        self.workdir = Path(workdir)
        self.backup_dir = config.backup_dir
        self.databases = {name: f"{name}-state" for name in config.db_names}
        self.artifacts = {}
        self.stored_files = {}
        self.constraint_checks = {name: True for name in config.db_names}
        self.fail_dump = set()
        self.fail_load = set()
        self.calls = []

    def artifact_path(self, db_name, name):
        return posixpath.join(self.backup_dir, f"{db_name}-{name}")

    def safety_path(self, db_name, name):
        return f"{self.artifact_path(db_name, name)}.safemode"

    def artifact_exists(self, path):
        self.calls.append(("artifact_exists", path))
        return path in self.artifacts

    def dump(self, db_name, path):
        self.calls.append(("dump", db_name, path))
        if db_name in self.fail_dump:
            raise CommandError(["pg_dump", db_name], 1, "dump failed")
        self.artifacts[path] = self.databases[db_name]

    def load(self, db_name, path):
        self.calls.append(("load", db_name, path))
        if db_name in self.fail_load:
            raise CommandError(["pg_restore", db_name], 1, "restore failed")
        self.databases[db_name] = self.artifacts[path]

    def drop_database(self, db_name):
        self.calls.append(("drop_database", db_name))
        self.databases.pop(db_name, None)

    def create_database(self, db_name):
        self.calls.append(("create_database", db_name))
        self.databases[db_name] = None

    def drop_all_tables(self, db_name):
        self.calls.append(("drop_all_tables", db_name))
        self.databases[db_name] = None

    def set_constraint_checks(self, db_name, enabled):
        self.calls.append(("set_constraint_checks", db_name, enabled))
        self.constraint_checks[db_name] = enabled

    def delete_artifact(self, path):
        self.calls.append(("delete_artifact", path))
        if path not in self.artifacts:
            raise CommandError(["rm", path], 1, "No such file or directory")
        del self.artifacts[path]

    def delete_all(self):
        self.calls.append(("delete_all",))
        self.artifacts.clear()
        self.stored_files.clear()

    def list_artifacts(self):
        self.calls.append(("list_artifacts",))
        names = {posixpath.basename(path) for path in self.artifacts}
        names.update(f"{name}/" for name in self.stored_files)
        return sorted(names)

    # Auxiliary files

    def files_dir(self, name):
        return posixpath.join(self.backup_dir, name)

    def remote_exists(self, path, directory=False):
        name = posixpath.basename(path)
        return directory and name in self.stored_files

    def make_remote_dir(self, path):
        self.calls.append(("make_remote_dir", path))
        self.stored_files.setdefault(posixpath.basename(path), {})

    def copy_to_container(self, local_path, remote_path):
        self.calls.append(("copy_to_container", str(local_path), remote_path))
        snapshot = posixpath.basename(posixpath.dirname(remote_path))
        self.stored_files[snapshot][posixpath.basename(remote_path)] = Path(
            local_path
        ).read_text()

    def list_backup_dir(self, subdir=None):
        return sorted(self.stored_files.get(subdir, {}))

    def copy_from_container(self, remote_path, local_path):
        self.calls.append(("copy_from_container", remote_path, str(local_path)))
        snapshot = posixpath.basename(posixpath.dirname(remote_path))
        Path(local_path).write_text(
            self.stored_files[snapshot][posixpath.basename(remote_path)]
        )

    def lock(self):
        return contextlib.nullcontext()

    def mutations(self):
        """Recorded calls that change databases or artifacts."""
        readonly = {"artifact_exists", "list_artifacts"}
        return [call for call in self.calls if call[0] not in readonly]


@pytest.fixture
def sample_env():
    """Return a sample valid `.env` configuration string."""
    return """
# project settings
DATABASE_URL=postgres://localhost/app
BDS_DOCKER_CONTAINER_ID=3f2a1c9e
BDS_DB_NAMES=app, app_test
BDS_DB_USER=postgres
BDS_DB_PASSWORD='s3cret'
BDS_SAFE_RESTORE_MODE=true
BDS_FILES_TO_BACKUP=.env.local,config/settings.json
"""


@pytest.fixture
def minimal_env():
    """Return a minimal valid `.env` configuration string."""
    return """
BDS_DOCKER_CONTAINER_ID=db
BDS_DB_NAMES=app
BDS_DB_USER=postgres
"""


@pytest.fixture
def env_file(tmp_path, sample_env):
    """Create a temporary config file with sample content."""
    path = tmp_path / ".env"
    path.write_text(sample_env)
    return path


@pytest.fixture
def config():
    """Configuration with two databases and safe restore mode on."""
    return Config(
        container_id="pg",
        db_names=("app", "app_test"),
        db_user="postgres",
        db_password="s3cret",
    )


@pytest.fixture
def fake_endpoint(config, tmp_path):
    """In-memory endpoint for the configuration fixture."""
    return FakeEndpoint(config, tmp_path)


@pytest.fixture
def completed():
    """Factory for CompletedProcess results."""

    def _completed(returncode=0, stdout="", stderr=""):
        return subprocess.CompletedProcess(
            args=[], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _completed
