"""Shared CLI utilities and argument parsers."""

import argparse
import logging

from filelock import Timeout

from .. import __util__, __version__, endpoint
from ..config import ConfigError, find_config_file, load_config
from ..config.loader import DEFAULT_CONFIG_NAME, generate_example_config
from ..core import run_preflight

logger = logging.getLogger(__name__)


def create_global_parser() -> argparse.ArgumentParser:
    """Create a parser with global options that can be used as a parent.

    Defaults are suppressed, so an option given before the action is not
    reset when the action's subparser runs.
    """
    parser = argparse.ArgumentParser(add_help=False)
    add_verbosity_args(parser, default=argparse.SUPPRESS)
    add_config_args(parser, default=argparse.SUPPRESS)
    add_confirm_args(parser, default=argparse.SUPPRESS)
    return parser


def add_verbosity_args(parser: argparse.ArgumentParser, default=False) -> None:
    """Add verbosity-related arguments to a parser."""
    group = parser.add_argument_group("Output options")
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Enable verbose output",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Suppress non-essential output",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        default=default,
        help="Enable debug output",
    )


def add_config_args(parser: argparse.ArgumentParser, default=None) -> None:
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        default=default,
        help="Path to configuration file (default: ./.env)",
    )


def add_snapshot_args(parser: argparse.ArgumentParser) -> None:
    """Add the optional snapshot name argument."""
    parser.add_argument(
        "name",
        nargs="?",
        help="Snapshot name (default: current branch name with '/' replaced by '_')",
    )


def add_confirm_args(parser: argparse.ArgumentParser, default=False) -> None:
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        default=default,
        help="Do not ask for confirmation",
    )


def get_log_level(args: argparse.Namespace) -> str:
    """Determine log level from parsed arguments.

    Args:
        args: Parsed command line arguments

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR)
    """
    if getattr(args, "debug", False):
        return "DEBUG"
    elif getattr(args, "quiet", False):
        return "WARNING"
    elif getattr(args, "verbose", False):
        return "DEBUG"
    else:
        return "INFO"


def confirm(prompt: str, assume_yes: bool = False) -> bool:
    """Ask a y/n question on the terminal."""
    if assume_yes:
        return True
    try:
        answer = input(f"{prompt} (y/n): ").strip().lower()
    except (EOFError, KeyboardInterrupt):
        print("")
        return False
    return answer in ("y", "yes")


def report_missing_config() -> None:
    """Tell the user how to create the configuration file."""
    print(f"Config file '{DEFAULT_CONFIG_NAME}' not found.")
    print(f"Please create a '{DEFAULT_CONFIG_NAME}' file with the following variables:")
    print("")
    print(generate_example_config())


def print_configuration(config) -> None:
    print("")
    print("--------- Configurations ---------")
    for label, key, value in config.summary():
        print(f"{label}({key}): '{value}'")
    print("----------------------------------")
    print("")


def open_endpoint(args: argparse.Namespace, local: bool = False):
    """Load the configuration, run the preflight checks and return the endpoint.

    Returns:
        Prepared endpoint, or None if no configuration file was found

    Raises:
        ConfigError: If the configuration file is invalid
        AbortError: If a preflight check fails
    """
    config_path = find_config_file(getattr(args, "config", None))
    if config_path is None:
        report_missing_config()
        return None

    config, warnings = load_config(config_path)
    for warning in warnings:
        logger.warning(warning)

    print_configuration(config)

    ep = endpoint.choose_endpoint(config, local=local)
    run_preflight(ep)
    return ep


def confirm_action(args: argparse.Namespace, action: str, name: str | None) -> bool:
    """Ask the user to confirm an action unless --yes was given."""
    if name is not None:
        print(f"Snapshot name: '{name}'")
        prompt = f"Do you want to run '{action}' process for your DB with name '{name}'?"
    else:
        prompt = f"Do you want to run '{action}' process for your DB?"
    if not confirm(prompt, getattr(args, "yes", False)):
        print("Exiting...")
        return False
    return True


def run_locked(ep, func, *args, **kwargs):
    """Call ``func`` while holding the run lock of the endpoint's container.

    Raises:
        AbortError: If another run holds the lock
    """
    try:
        with ep.lock():
            return func(*args, **kwargs)
    except Timeout:
        raise __util__.AbortError(
            f"Another run is operating on container '{ep.config.container_id}'."
        )


def report_error(error: Exception) -> int:
    """Log an error ending the run and return the exit code."""
    if isinstance(error, ConfigError):
        logger.error("Configuration error: %s", error)
    else:
        logger.error("%s", error)
    logger.error("Exiting from 'Branch Database State Switcher v%s'", __version__)
    return 1
