"""Loading ``config.yaml`` with environment variable placeholders.

Placeholders:
    ${NAME}            required, fails when unset
    ${NAME:-fallback}  optional with a fallback value
    ${NAME:?message}   required, fails with ``message`` when unset
"""

import os
import re
from pathlib import Path

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic_core import ValidationError

from src.inventory.runtime.config.config_data import ConfigData

DEFAULT_CONFIG_FILE = "config.yaml"
CONFIG_FILE_ENV_VAR = "INVENTORY_CONFIG_FILE"

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve_placeholder(match: re.Match[str]) -> str:
    expression = match.group(1)

    if ":-" in expression:
        name, fallback = expression.split(":-", 1)
        return os.getenv(name, fallback)

    if ":?" in expression:
        name, message = expression.split(":?", 1)
        value = os.getenv(name)
        if value is None:
            raise ValueError(f"Required environment variable {name}: {message}")
        return value

    value = os.getenv(expression)
    if value is None:
        raise ValueError(f"Required environment variable {expression} not set")
    return value


def substitute_env_vars(text: str) -> str:
    """Replace every ``${...}`` placeholder in ``text``.

    Full-line ``#`` comments are left as they are.

    Args:
        text: Raw YAML document.

    Returns:
        The document with placeholders resolved.

    Raises:
        ValueError: a required variable is not set.
    """
    lines = text.splitlines(keepends=True)
    return "".join(
        line if line.lstrip().startswith("#") else _PLACEHOLDER.sub(_resolve_placeholder, line)
        for line in lines
    )


def apply_environment_overrides(env_mode: str) -> list[str]:
    """Copy ``<ENV>_NAME`` variables onto ``NAME`` for the active environment.

    Returns the names of the variables that were set.
    """
    prefix = f"{env_mode.upper()}_"
    applied = []
    for name, value in list(os.environ.items()):
        if name.startswith(prefix):
            target = name[len(prefix):]
            os.environ[target] = value
            applied.append(target)
            logger.debug("Set environment variable {} from {}", target, name)
    return applied


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Parse the ``config`` section of ``file_path`` into ``ConfigData``.

    Raises:
        ValueError: a placeholder cannot be resolved, or the file is not
            valid YAML or not a valid configuration.
        FileNotFoundError: ``file_path`` does not exist.
    """
    content = Path(file_path).read_text()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)
    applied = apply_environment_overrides(env_mode)
    if applied:
        logger.info("Applied environment-specific overrides: {}", applied)

    try:
        document = yaml.safe_load(substitute_env_vars(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not document:
        raise ValueError("Failed to parse YAML")

    try:
        return ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config(file_path: Path | None = None) -> ConfigData:
    """Load configuration from ``file_path`` or ``INVENTORY_CONFIG_FILE``.

    Falls back to ``config.yaml`` in the working directory, and to the
    built-in defaults when no file exists. Variables from a local ``.env``
    file are loaded first and never override the real environment.

    Args:
        file_path: Configuration file to read, None to look it up.

    Returns:
        ConfigData: The loaded configuration.
    """
    load_dotenv(override=False)

    if file_path is None:
        file_path = Path(os.getenv(CONFIG_FILE_ENV_VAR, DEFAULT_CONFIG_FILE))

    if not file_path.exists():
        logger.warning("Configuration file {} not found; using defaults", file_path)
        return ConfigData()

    return load_templated_yaml(file_path)
