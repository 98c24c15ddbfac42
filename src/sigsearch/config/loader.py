"""Layered configuration loading with pydantic-settings.

Sources, highest precedence first:

1. ``load_config(**kwargs)`` overrides
2. ``SIGSEARCH__<SECTION>__<KEY>`` environment variables
3. ``<repo>/.sigsearch/config.yaml``
4. ``~/.config/sigsearch/config.yaml``
5. Model defaults

YAML layers are deep-merged, so a repo file can override one key of a
section without restating the rest of it.
"""

from functools import reduce
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from sigsearch.config.models import LoggingConfig, MatchConfig, SearchConfig, SigSearchConfig
from sigsearch.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/sigsearch/config.yaml").expanduser()
REPO_CONFIG_RELPATH = Path(".sigsearch") / "config.yaml"

ENV_PREFIX = "SIGSEARCH__"


def config_layers(repo_root: Path | None = None) -> list[Path]:
    """YAML files consulted by :func:`load_config`, lowest precedence first."""
    return [GLOBAL_CONFIG_PATH, (repo_root or Path.cwd()) / REPO_CONFIG_RELPATH]


def _read_layer(path: Path) -> dict[str, Any]:
    """Parse one YAML layer. A missing file is an empty layer."""
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
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


class _LayeredYamlSource(PydanticBaseSettingsSource):
    """Feeds the merged YAML layers to pydantic-settings, below env vars."""

    def __init__(self, settings_cls: type[BaseSettings], merged: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._merged = merged

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._merged.get(field_name)
        return value, field_name, isinstance(value, dict)

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in self._merged.items() if k in self.settings_cls.model_fields}


def _settings_for(merged: dict[str, Any]) -> type[BaseSettings]:
    # A class per call keeps concurrent loads with different layers apart
    class Settings(BaseSettings):
        model_config = SettingsConfigDict(
            env_prefix=ENV_PREFIX,
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        match: MatchConfig = MatchConfig()
        search: SearchConfig = SearchConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _LayeredYamlSource(settings_cls, merged))

    return Settings


def load_config(repo_root: Path | None = None, **kwargs: Any) -> SigSearchConfig:
    """Resolve the effective configuration.

    Args:
        repo_root: Directory holding ``.sigsearch/config.yaml``. Defaults to
            the current working directory.
        **kwargs: Section overrides, e.g. ``search={"limit": 5}``.

    Raises:
        ConfigError: A YAML layer is unreadable, or a value fails validation.
    """
    merged = reduce(_deep_merge, (_read_layer(p) for p in config_layers(repo_root)), {})

    try:
        settings = _settings_for(merged)(**kwargs)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(field, first.get("input"), first["msg"]) from e
    return SigSearchConfig.model_validate(settings.model_dump())
