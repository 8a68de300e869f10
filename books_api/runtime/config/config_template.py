"""Loading ``config.yaml`` with environment variable placeholders."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from books_api.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(
    r"\$\{(?P<name>[^}:]+)(?::(?P<mode>[-?])(?P<argument>[^}]*))?\}"
)


def _resolve_placeholder(match: re.Match) -> str:
    name, mode, argument = match.group("name", "mode", "argument")
    value = os.getenv(name)
    if value is not None:
        return value
    if mode == "-":
        return argument
    if mode == "?":
        raise ValueError(f"Required environment variable {name}: {argument}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Replace environment variable placeholders in ``text``.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message

    Full-line ``#`` comments are left as written.
    """
    lines = text.splitlines(keepends=True)
    return "".join(
        line if line.lstrip().startswith("#") else _PLACEHOLDER.sub(_resolve_placeholder, line)
        for line in lines
    )


def promote_environment_variables(env_mode: str) -> list[str]:
    """Copy ``<ENV>_NAME`` variables to ``NAME`` for the active environment.

    Returns the names of the promoted variables.
    """
    prefix = f"{env_mode.upper()}_"
    promoted = []
    for var_name, var_value in list(os.environ.items()):
        if var_name.startswith(prefix):
            os.environ[var_name.removeprefix(prefix)] = var_value
            promoted.append(var_name.removeprefix(prefix))
    return promoted


def load_templated_yaml(file_path: Path, env_mode: str = "development") -> ConfigData:
    """Read ``file_path``, substitute placeholders and validate the ``config`` section.

    Raises:
        ValueError: A required variable is missing, the YAML is malformed or
            the ``config`` section does not validate
        FileNotFoundError: ``file_path`` does not exist
    """
    content = Path(file_path).read_text()

    promoted = promote_environment_variables(env_mode)
    logger.info(
        "Loading {} for environment {} (overrides: {})",
        file_path,
        env_mode,
        promoted or "none",
    )

    try:
        document = yaml.safe_load(substitute_env_vars(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not isinstance(document, dict):
        raise ValueError(f"Error parsing YAML: {file_path} holds no mapping")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    # APP_ENVIRONMENT wins over whatever the file declares
    config.app.environment = env_mode
    return config
