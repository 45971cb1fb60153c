# pyright: standard

"""branch-db-switcher: branch_db_switcher/endpoint/local.py
Endpoint keeping snapshot artifacts in the local working directory.
"""

import contextlib
import os

from .. import __util__
from ..__logger__ import logger

from .common import Endpoint


class LocalEndpoint(Endpoint):
    """Stream dumps between the container and files in the working directory."""

    def artifact_path(self, db_name, name) -> str:
        return str(self.workdir / f"{db_name}-{name}")

    def artifact_exists(self, path) -> bool:
        return os.path.isfile(path)

    def dump(self, db_name, path) -> None:
        """Run pg_dump in the container and write its output to ``path``.

        The dump goes to a temporary file first, so an existing artifact is only
        replaced by a complete one.
        """
        partial = f"{path}.partial"
        try:
            with open(partial, "wb") as f:
                self._exec_in_container(self._build_dump_cmd(db_name), stdout=f)
            os.replace(partial, path)
        except (OSError, __util__.CommandError):
            logger.debug("Removing incomplete dump %s", partial)
            with contextlib.suppress(OSError):
                os.remove(partial)
            raise

    def load(self, db_name, path):
        """Feed the local artifact to pg_restore running in the container."""
        with open(path, "rb") as f:
            return self._exec_in_container(
                self._build_restore_cmd(db_name), interactive=True, stdin=f
            )
