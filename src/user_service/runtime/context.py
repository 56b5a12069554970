from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.config.config_template import load_templated_yaml
from src.user_service.runtime.config.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_config(config_path: Path | None = None) -> ConfigData:
    """Load configuration from the templated YAML file, or defaults if absent.

    Args:
        config_path: Path to the YAML file. Defaults to ``APP_CONFIG_FILE``
            (``config.yaml`` in the working directory).
    """
    env_vars = EnvironmentVariables()
    path = config_path or Path(env_vars.config_file)
    if not path.exists():
        logger.warning("Configuration file {} not found; using defaults", path)
        config = ConfigData()
        config.app.environment = env_vars.environment
        return config
    return load_templated_yaml(path, env_mode=env_vars.environment)


# Global configuration instance
_default_context = AppContext(config=load_config())


# Context variable for application context
_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context.

    Returns:
        AppContext: The current application context containing configuration.
    """
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _explicit_overrides(override_config: ConfigData) -> dict[str, dict]:
    """Collect, per config section, the fields explicitly set on the override.

    A section assigned as a whole counts in full even if none of its own
    fields were set.
    """
    overrides: dict[str, dict] = {}
    for section_name in ConfigData.model_fields:
        section: BaseModel = getattr(override_config, section_name)
        fields = {name: getattr(section, name) for name in section.model_fields_set}
        if fields:
            overrides[section_name] = fields
        elif section_name in override_config.model_fields_set:
            overrides[section_name] = section.model_dump()
    return overrides


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    merged = base_config.model_dump()
    for section_name, fields in _explicit_overrides(override_config).items():
        merged[section_name].update(fields)
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Context manager for temporarily overriding the application context.

    Only fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited from the enclosing context.

    Example:
        override = ConfigData()
        override.database.url = "sqlite:///:memory:"
        with with_context(override):
            assert get_config().database.url == "sqlite:///:memory:"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)

    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration with ``config``."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration.

    Returns:
        ConfigData: The current configuration from the app context.
    """
    return get_context().config
