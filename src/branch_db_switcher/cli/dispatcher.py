"""CLI dispatcher routing actions to their command handlers."""

import argparse
import sys
from typing import Callable

from .common import (
    add_config_args,
    add_confirm_args,
    add_snapshot_args,
    add_verbosity_args,
    create_global_parser,
)

# Known actions, in the order shown in the help text
SUBCOMMANDS = (
    "version",
    "list",
    "backup",
    "backup-local",
    "restore",
    "restore-local",
    "delete",
    "delete-all",
)


def create_subcommand_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="bds",
        description="Snapshot and restore PostgreSQL databases running in docker, "
        "keyed to git branch names",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    add_verbosity_args(parser)
    add_config_args(parser)
    add_confirm_args(parser)

    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands (use 'command --help' for details)",
    )

    # Global options are accepted after the action as well
    global_parser = create_global_parser()

    subparsers.add_parser(
        "version",
        parents=[global_parser],
        help="Show version and exit",
    )

    subparsers.add_parser(
        "list",
        parents=[global_parser],
        help="Show snapshots stored inside the container",
        description="List the entries of the backup directory inside the container",
    )

    backup_parser = subparsers.add_parser(
        "backup",
        parents=[global_parser],
        help="Back up all databases inside the container",
        description="Dump every configured database into the container's backup "
        "directory and store the configured files with it",
    )
    add_snapshot_args(backup_parser)

    backup_local_parser = subparsers.add_parser(
        "backup-local",
        parents=[global_parser],
        help="Back up all databases into the working directory",
        description="Dump every configured database into the current working directory",
    )
    add_snapshot_args(backup_local_parser)

    restore_parser = subparsers.add_parser(
        "restore",
        parents=[global_parser],
        help="Restore all databases from a snapshot inside the container",
        description="Drop and recreate every configured database and load it from "
        "the snapshot, restoring the stored files as well",
    )
    add_snapshot_args(restore_parser)

    restore_local_parser = subparsers.add_parser(
        "restore-local",
        parents=[global_parser],
        help="Restore all databases from a snapshot in the working directory",
        description="Drop all tables of every configured database and load it "
        "from the snapshot in the current working directory",
    )
    add_snapshot_args(restore_local_parser)

    delete_parser = subparsers.add_parser(
        "delete",
        parents=[global_parser],
        help="Delete a snapshot inside the container",
    )
    add_snapshot_args(delete_parser)

    subparsers.add_parser(
        "delete-all",
        parents=[global_parser],
        help="Delete every snapshot inside the container",
    )

    return parser


def run_subcommand(args: argparse.Namespace) -> int:
    """Run the specified subcommand.

    Args:
        args: Parsed arguments

    Returns:
        Exit code
    """
    from .. import __version__

    if args.version or args.command == "version":
        print(f"branch-db-switcher {__version__}")
        return 0

    if not args.command:
        print("No command specified. Use --help for usage information.")
        return 1

    # Route to appropriate command handler
    handlers: dict[str, Callable] = {
        "list": cmd_list,
        "backup": cmd_backup,
        "backup-local": cmd_backup_local,
        "restore": cmd_restore,
        "restore-local": cmd_restore_local,
        "delete": cmd_delete,
        "delete-all": cmd_delete_all,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args)
    else:
        print(f"Unknown command: {args.command}")
        return 1


def cmd_list(args: argparse.Namespace) -> int:
    """Execute list command."""
    from .list_cmd import execute_list

    return execute_list(args)


def cmd_backup(args: argparse.Namespace) -> int:
    """Execute backup command."""
    from .backup import execute_backup

    return execute_backup(args, local=False)


def cmd_backup_local(args: argparse.Namespace) -> int:
    """Execute backup-local command."""
    from .backup import execute_backup

    return execute_backup(args, local=True)


def cmd_restore(args: argparse.Namespace) -> int:
    """Execute restore command."""
    from .restore import execute_restore

    return execute_restore(args, local=False)


def cmd_restore_local(args: argparse.Namespace) -> int:
    """Execute restore-local command."""
    from .restore import execute_restore

    return execute_restore(args, local=True)


def cmd_delete(args: argparse.Namespace) -> int:
    """Execute delete command."""
    from .delete import execute_delete

    return execute_delete(args)


def cmd_delete_all(args: argparse.Namespace) -> int:
    """Execute delete-all command."""
    from .delete import execute_delete_all

    return execute_delete_all(args)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the bds CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_subcommand_parser()
    args = parser.parse_args(argv)

    return run_subcommand(args)
