"""Engine configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from config/settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load settings from YAML file."""
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested structure to match Settings field names
        flattened = {}
        if 'timeouts' in data:
            flattened['analysis_timeout_seconds'] = data['timeouts'].get('analysis_seconds')
            flattened['audio_timeout_seconds'] = data['timeouts'].get('audio_seconds')
        if 'audio' in data:
            audio = data['audio']
            flattened['silence_threshold'] = audio.get('silence_threshold')
            flattened['energy_threshold'] = audio.get('energy_threshold')
            flattened['energy_window_ms'] = audio.get('energy_window_ms')
            flattened['volume_windows'] = audio.get('volume_windows')
            flattened['fft_size'] = audio.get('fft_size')
            flattened['presence_band_low_hz'] = audio.get('presence_band_low_hz')
            flattened['presence_band_high_hz'] = audio.get('presence_band_high_hz')
        if 'logging' in data:
            flattened['log_format'] = data['logging'].get('format')
            flattened['log_level'] = data['logging'].get('level')

        # Remove None values
        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Engine settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_prefix="PLACEMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Timeouts
    analysis_timeout_seconds: float = Field(default=2.0, gt=0)
    audio_timeout_seconds: float = Field(default=5.0, gt=0)

    # Audio metric estimation
    silence_threshold: float = Field(default=0.01, ge=0)
    energy_threshold: float = Field(default=0.02, ge=0)
    energy_window_ms: int = Field(default=100, gt=0)
    volume_windows: int = Field(default=20, gt=0)
    fft_size: int = Field(default=2048, gt=0)
    presence_band_low_hz: float = Field(default=2000.0, ge=0)
    presence_band_high_hz: float = Field(default=8000.0, gt=0)

    # Logging
    log_format: str = Field(default="console")  # "console" or "json"
    log_level: str = Field(default="INFO")

    # Paths
    project_root: Path = Field(default_factory=_find_project_root)

    @property
    def json_logs(self) -> bool:
        return self.log_format.lower() == "json"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get engine settings singleton."""
    return Settings()
