"""`.env` configuration loading and validation.

Handles config file discovery, parsing, and validation with helpful error messages.
"""

from pathlib import Path

from dotenv import dotenv_values

from .schema import Config


class ConfigError(Exception):
    """Configuration loading or validation error."""

    pass


# Looked up in the working directory, next to the git checkout
DEFAULT_CONFIG_NAME = ".env"

REQUIRED_KEYS = ("BDS_DOCKER_CONTAINER_ID", "BDS_DB_NAMES", "BDS_DB_USER")

FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def find_config_file(explicit_path: str | None = None) -> Path | None:
    """Find configuration file.

    Args:
        explicit_path: Explicitly specified config path (highest priority)

    Returns:
        Path to config file, or None if not found
    """
    if explicit_path:
        path = Path(explicit_path)
        if path.is_file():
            return path
        raise ConfigError(f"Config file not found: {explicit_path}")

    path = Path.cwd() / DEFAULT_CONFIG_NAME
    if path.is_file():
        return path

    return None


def _split_list(value: str | None) -> tuple[str, ...]:
    """Split a comma separated value, dropping blanks."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in FALSE_VALUES


def _validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of warnings."""
    warnings = []

    if len(config.db_names) != len(set(config.db_names)):
        warnings.append("Duplicate database names in BDS_DB_NAMES")

    if not config.db_password:
        warnings.append("BDS_DB_PASSWORD is not set, relying on container authentication")

    for file_path in config.files_to_backup:
        if not Path(file_path).is_file():
            warnings.append(f"File to backup '{file_path}' not found")

    return warnings


def load_config(path: Path | str) -> tuple[Config, list[str]]:
    """Load and validate configuration from a `.env` file.

    Args:
        path: Path to configuration file

    Returns:
        Tuple of (Config object, list of warnings)

    Raises:
        ConfigError: If config is invalid or cannot be parsed
    """
    path = Path(path)

    try:
        with open(path, encoding="utf-8") as f:
            data = dotenv_values(stream=f, interpolate=False)
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}")

    missing = [key for key in REQUIRED_KEYS if not (data.get(key) or "").strip()]
    if missing:
        raise ConfigError(f"Missing required keys in {path}: {', '.join(missing)}")

    db_names = _split_list(data.get("BDS_DB_NAMES"))
    if not db_names:
        raise ConfigError("BDS_DB_NAMES must list at least one database")

    config = Config(
        container_id=data["BDS_DOCKER_CONTAINER_ID"].strip(),
        db_names=db_names,
        db_user=data["BDS_DB_USER"].strip(),
        db_password=data.get("BDS_DB_PASSWORD") or "",
        safe_restore_mode=_parse_bool(data.get("BDS_SAFE_RESTORE_MODE"), True),
        files_to_backup=_split_list(data.get("BDS_FILES_TO_BACKUP")),
    )

    # Validate and collect warnings
    warnings = _validate_config(config)

    return config, warnings


def generate_example_config() -> str:
    """Generate example configuration file content."""
    return """# branch-db-switcher configuration
# Don't forget to add '.env' to your .gitignore file.

# Docker container id (or name) that runs the database
BDS_DOCKER_CONTAINER_ID=your_container_id

# Comma separated list of your database names
BDS_DB_NAMES=app,app_test

# Database credentials
BDS_DB_USER=postgres
BDS_DB_PASSWORD=postgres

# Take a '.safemode' dump before every restore (default: true)
BDS_SAFE_RESTORE_MODE=true

# Comma separated list of files to include in the backup
BDS_FILES_TO_BACKUP=.env.local
"""
