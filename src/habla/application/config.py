from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from habla.domain.constants import (
    DEFAULT_MIN_SIMILARITY,
    DEFAULT_PROGRESS_FILENAME,
    INITIAL_EASE,
    MINIMUM_EASE,
)

from .matching.matcher import MatchOptions
from .scheduling.sm2 import ScheduleParameters

DEFAULT_PHRASES_FILE = Path(__file__).resolve().parent.parent / "data" / "phrases.yaml"


def _config_files() -> list[Path]:
    home = Path.home()
    return [home / ".config/habla/config.toml", home / ".habla.toml"]


class AppConfig(BaseSettings):
    """
    Configuration model for habla.
    Supports loading from:
    1. Config file (~/.config/habla/config.toml or ~/.habla.toml)
    2. Environment variables (HABLA_*)
    3. Manual overrides (CLI, HTTP)
    """

    model_config = SettingsConfigDict(
        env_prefix="HABLA_",
        extra="ignore",
    )

    # Data
    phrases_file: Path | None = None
    store_backend: Literal["json", "memory"] = "json"
    progress_file: Path = Field(
        default_factory=lambda: Path.home() / ".config/habla" / DEFAULT_PROGRESS_FILENAME
    )

    # Matching
    min_similarity: float = Field(default=DEFAULT_MIN_SIMILARITY, ge=0.0, le=1.0)
    max_distance: int | None = Field(default=None, ge=0)
    strict_accents: bool = False

    # Scheduling
    initial_ease: float = INITIAL_EASE
    minimum_ease: float = MINIMUM_EASE

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins; sources earlier in the tuple take priority
        toml_file = next((f for f in _config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("phrases_file", "progress_file", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path | None:
        if v is None:
            return None
        return Path(v).expanduser().resolve()

    def match_options(self) -> MatchOptions:
        return MatchOptions(
            max_distance=self.max_distance,
            min_similarity=self.min_similarity,
            strict_accents=self.strict_accents,
        )

    def schedule_parameters(self) -> ScheduleParameters:
        return ScheduleParameters(initial_ease=self.initial_ease, minimum_ease=self.minimum_ease)


def resolve_config(overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. TOML config file (if exists)
    3. Environment variables (HABLA_*)
    4. overrides (non-None values from Typer or a request body)
    """
    clean = {k: v for k, v in (overrides or {}).items() if v is not None}
    config = AppConfig(**clean)

    if config.phrases_file is None:
        config.phrases_file = DEFAULT_PHRASES_FILE

    return config
