"""Configuration loading with pydantic-settings.

Layers, later ones winning:
- built-in defaults
- global YAML (~/.config/appinspector/config.yaml)
- app YAML (<app root>/.appinspector/config.yaml)
- environment variables (APPINSPECTOR__SECTION__KEY)
- keyword arguments to load_config()
"""

from contextvars import ContextVar
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from appinspector.config.models import (
    AppInspectorConfig,
    LoggingConfig,
    ServerConfig,
    TargetConfig,
)
from appinspector.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/appinspector/config.yaml").expanduser()
APP_CONFIG_RELPATH = Path(".appinspector") / "config.yaml"

# Merged YAML layers for the settings instance being built
_yaml_layer: ContextVar[dict[str, Any] | None] = ContextVar("yaml_layer", default=None)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class _YamlLayerSource(PydanticBaseSettingsSource):
    """Serves the YAML layer bound by load_config()."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:  # noqa: ARG002
        value = (_yaml_layer.get() or {}).get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return dict(_yaml_layer.get() or {})


class AppInspectorSettings(BaseSettings):
    """Root settings. Env vars: APPINSPECTOR__LOGGING__LEVEL, APPINSPECTOR__TARGET__..."""

    model_config = SettingsConfigDict(
        env_prefix="APPINSPECTOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    target: TargetConfig = TargetConfig()
    server: ServerConfig = ServerConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, _YamlLayerSource(settings_cls))


def load_config(app_root: Path | None = None, **kwargs: Any) -> AppInspectorConfig:
    """Resolve the configuration for an application.

    Args:
        app_root: Directory holding ``.appinspector/config.yaml``.
            Defaults to the current working directory.
        **kwargs: Section overrides, e.g. ``target={"models_package": "shop.models"}``.

    Raises:
        ConfigError: A YAML file does not parse, or a value fails validation.
    """
    root = app_root or Path.cwd()
    layer = _deep_merge(_load_yaml(GLOBAL_CONFIG_PATH), _load_yaml(root / APP_CONFIG_RELPATH))

    token = _yaml_layer.set(layer)
    try:
        settings = AppInspectorSettings(**kwargs)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(field, first.get("input"), first["msg"]) from e
    finally:
        _yaml_layer.reset(token)
    return AppInspectorConfig.model_validate(settings.model_dump())
