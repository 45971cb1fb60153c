# pyright: standard

"""branch-db-switcher: branch_db_switcher/endpoint/docker.py
Endpoint keeping snapshot artifacts inside the database container.
"""

from .common import Endpoint


class DockerEndpoint(Endpoint):
    """Store artifacts in the backup directory of the container."""

    def artifact_path(self, db_name, name) -> str:
        return self.remote_path(f"{db_name}-{name}")

    def artifact_exists(self, path) -> bool:
        return self.remote_exists(path)

    def dump(self, db_name, path) -> None:
        """Run pg_dump in the container, writing straight to ``path``."""
        self._exec_in_container(self._build_dump_cmd(db_name, output=path))

    def load(self, db_name, path):
        return self._exec_in_container(self._build_restore_cmd(db_name, source=path))

    def delete_artifact(self, path) -> None:
        self.remove_remote(path)

    def delete_all(self) -> None:
        self.remove_remote(self.backup_dir, recursive=True)

    def list_artifacts(self) -> list[str]:
        if not self.remote_exists(self.backup_dir, directory=True):
            return []
        return self.list_backup_dir()

    def files_dir(self, name) -> str:
        """Directory holding the auxiliary files of snapshot ``name``."""
        return self.remote_path(name)
