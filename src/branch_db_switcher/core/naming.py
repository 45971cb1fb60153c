"""Snapshot naming: explicit names or names derived from the current git branch."""

import logging

from .. import __util__, encode_branch_name

logger = logging.getLogger(__name__)


def is_git_repository(cwd=None) -> bool:
    """Return True if ``cwd`` is inside a git work tree."""
    try:
        result = __util__.exec_subprocess(
            ["git", "rev-parse", "--is-inside-work-tree"], check=False, cwd=cwd, text=True
        )
    except __util__.CommandError:
        # git itself is not installed
        return False
    return result.returncode == 0 and result.stdout.strip() == "true"


def current_branch(cwd=None) -> str:
    """Name of the checked out branch.

    Raises:
        AbortError: If ``cwd`` is not a git repository
    """
    if not is_git_repository(cwd):
        raise __util__.AbortError(
            "Current directory is not a git repository. "
            "Please run the command inside a git repository."
        )
    result = __util__.exec_subprocess(
        ["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd, text=True
    )
    return result.stdout.strip()


def resolve_snapshot_name(explicit: str | None = None, cwd=None) -> str:
    """Return the snapshot name for an action.

    An explicit name is used as given, otherwise the current branch name
    with '/' replaced by '_'.

    Raises:
        AbortError: If an explicit name contains '/', or no name is given
            outside a git repository
    """
    if explicit:
        if "/" in explicit:
            raise __util__.AbortError(
                f"Snapshot name '{explicit}' must not contain '/'. "
                f"Use '{encode_branch_name(explicit)}' instead."
            )
        return explicit
    branch = current_branch(cwd)
    name = encode_branch_name(branch)
    logger.debug("Derived snapshot name %r from branch %r", name, branch)
    return name
