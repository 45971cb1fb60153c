"""branch-db-switcher: branch_db_switcher/__init__.py."""


__version__ = "1.5.0"


def encode_branch_name(branch: str) -> str:
    """Replace '/' with '_' so a branch name can be used in a file name"""
    return branch.strip().replace("/", "_")
