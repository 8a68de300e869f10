"""The active configuration, held in a context variable so tests can scope overrides."""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from books_api.runtime.config.config_data import ConfigData
from books_api.runtime.config.config_template import load_templated_yaml
from books_api.runtime.config.settings import EnvironmentVariables


def load_default_config() -> ConfigData:
    """Load the configuration named by ``APP_CONFIG_FILE``, or model defaults."""
    env_vars = EnvironmentVariables()
    config_path = Path(env_vars.config_file)
    if not config_path.exists():
        logger.warning(f"{config_path} not found; using default configuration")
        config = ConfigData()
        config.app.environment = env_vars.environment
        return config
    return load_templated_yaml(config_path, env_vars.environment)


_active_config: ContextVar[ConfigData] = ContextVar(
    "active_config", default=load_default_config()
)


def get_config() -> ConfigData:
    """Return the configuration in effect for the current context."""
    return _active_config.get()


def _explicit_values(model: BaseModel) -> dict:
    """Values set on ``model`` by its caller, descending into nested sections."""
    values = {}
    for name in model.model_fields_set:
        value = getattr(model, name)
        values[name] = _explicit_values(value) if isinstance(value, BaseModel) else value
    return values


def _overlay(base: dict, overrides: dict) -> dict:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _overlay(merged[key], value)
        else:
            merged[key] = value
    return merged


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Run the block with ``config_override`` laid over the current configuration.

    Only values the override sets explicitly replace the current ones; every
    other setting is inherited.

    Example:
        override = ConfigData.model_validate({"database": {"url": "sqlite://"}})
        with with_context(override):
            assert get_config().database.url == "sqlite://"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged = _overlay(get_config().model_dump(), _explicit_values(config_override))
    token = _active_config.set(ConfigData.model_validate(merged))
    try:
        yield
    finally:
        _active_config.reset(token)
