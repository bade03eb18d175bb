"""Configuration management.

Two layers:

- :class:`IdFactoryConfig`: the collaborator record an :class:`IdFactory`
  is built from (identifier type plus canonical and raw coders).
- :class:`Settings`: names of built-in collaborators, loaded from a TOML
  file and environment variables via pydantic-settings.
  :func:`build_factory` turns settings into a ready factory.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

if TYPE_CHECKING:
    from .factory import IdFactory


# ---------------------------------------------------------------------------
# Collaborator record
# ---------------------------------------------------------------------------

class IdFactoryConfig(BaseModel):
    """Collaborators of one factory.

    Capability sets are not checked here; a missing operation fails when
    the factory first calls it.
    """

    id: Any  # Identifier type: generate(), min_sentinel(), max_sentinel(), cls(bytes)
    canonical_coder: Any
    raw_coder: Any

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"


class TomlFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading the TOML file named by ``toml_file`` in the
    model config. A missing file contributes nothing.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}

        toml_file = self.config.get("toml_file")
        if toml_file:
            path = Path(toml_file)
            if path.exists():
                import tomli

                with open(path, "rb") as f:
                    self._data = tomli.load(f)

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class Settings(BaseSettings):
    """Top-level settings.

    Precedence, highest first: init kwargs, environment variables
    (``IDFACTORY_CANONICAL_CODER=hex``,
    ``IDFACTORY_OBSERVABILITY__LOG_LEVEL=DEBUG``), the TOML config file,
    field defaults.
    """

    id_type: str = "random"
    canonical_coder: str = "uuid"
    raw_coder: str = "hex"
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "IDFACTORY_", "env_nested_delimiter": "__"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlFileSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Environment variables win over the file; *overrides* win over both.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    settings_cls = Settings

    if config_path:
        toml_file = str(config_path)

        class FileSettings(Settings):
            model_config = {**Settings.model_config, "toml_file": toml_file}

        settings_cls = FileSettings

    return settings_cls(**(overrides or {}))


def build_factory(settings: Settings | None = None) -> IdFactory:
    """Build an :class:`IdFactory` from built-in collaborator names.

    Raises:
        ConfigError: If a name is not registered.
    """
    from .coders import CODERS
    from .errors import ConfigError
    from .factory import IdFactory
    from .ids import ID_TYPES

    settings = settings or Settings()

    if settings.id_type not in ID_TYPES:
        raise ConfigError(
            f"Unknown id_type {settings.id_type!r}; "
            f"expected one of {sorted(ID_TYPES)}"
        )
    for field in ("canonical_coder", "raw_coder"):
        name = getattr(settings, field)
        if name not in CODERS:
            raise ConfigError(
                f"Unknown {field} {name!r}; expected one of {sorted(CODERS)}"
            )

    return IdFactory(
        IdFactoryConfig(
            id=ID_TYPES[settings.id_type],
            canonical_coder=CODERS[settings.canonical_coder](),
            raw_coder=CODERS[settings.raw_coder](),
        )
    )
