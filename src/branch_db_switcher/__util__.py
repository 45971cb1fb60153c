# pyright: standard

"""branch-db-switcher: branch_db_switcher/__util__.py
Common utility code shared among modules.
"""

import subprocess

from .__logger__ import logger


class AbortError(Exception):
    """Exception where processing should stop for the current run."""


class CommandError(Exception):
    """An external command exited with a non-zero status."""

    def __init__(self, command, returncode, stderr="") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"Command {' '.join(self.command)!r} failed with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


def log_heading(caption: str) -> str:
    """Formatted heading for logging output sections."""
    return f"{'-' * 10} {caption} {'-' * 10}"


def redact(command):
    """Return a copy of ``command`` with the database password masked."""
    return [
        "PGPASSWORD=****" if part.startswith("PGPASSWORD=") else part
        for part in command
    ]


def quote_ident(name: str) -> str:
    """Quote a PostgreSQL identifier."""
    return '"' + name.replace('"', '""') + '"'


def exec_subprocess(command, check=True, **kwargs) -> subprocess.CompletedProcess:
    """Run ``command`` to completion.

    stdout and stderr are captured unless the caller redirects them. When
    ``check`` is true a non-zero exit raises :class:`CommandError`; the
    completed process is returned otherwise.
    """
    logger.debug("Executing: %s", " ".join(redact(command)))
    kwargs.setdefault("stdout", subprocess.PIPE)
    kwargs.setdefault("stderr", subprocess.PIPE)
    try:
        result = subprocess.run(command, check=False, **kwargs)
    except FileNotFoundError as e:
        raise CommandError(command[:1], 127, f"{command[0]}: command not found") from e
    if check and result.returncode != 0:
        stderr = result.stderr
        if isinstance(stderr, bytes):
            stderr = stderr.decode(errors="replace")
        raise CommandError(redact(command), result.returncode, stderr or "")
    return result
