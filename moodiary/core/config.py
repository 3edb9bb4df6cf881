from typing import Optional, Protocol

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from moodiary.domain.exceptions import ConfigurationError


class Config(BaseSettings):
    log_level: str = "INFO"

    # rule | llm | local
    analysis_method: str = "rule"

    llm_provider: Optional[str] = None
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None
    llm_timeout: float = 30.0

    # None keeps the tag caches unbounded
    tag_cache_maxsize: Optional[int] = Field(None, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="MOODIARY_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def is_llm_configured(self) -> bool:
        return bool(self.llm_provider and self.llm_provider.strip()
                    and self.llm_api_key and self.llm_api_key.strip())


def validate_config(cfg: Optional[Config] = None) -> None:
    """
    Check the settings the analysis pipeline depends on.
    Raises ConfigurationError on problems.
    """
    cfg = cfg or config

    if cfg.analysis_method == "llm":
        missing = [
            name for name in ("llm_provider", "llm_api_key")
            if not (getattr(cfg, name, None) or "").strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}",
                {"missing": missing},
            )

    if cfg.llm_timeout <= 0:
        raise ConfigurationError("llm_timeout must be positive", {"llm_timeout": cfg.llm_timeout})


class SettingsProvider(Protocol):
    """Read-only access to the user's current analysis settings."""

    @property
    def current_settings(self) -> Config:
        ...


class ConfigSettingsProvider:
    """SettingsProvider backed by a Config instance."""

    def __init__(self, cfg: Optional[Config] = None):
        self._config = cfg

    @property
    def current_settings(self) -> Config:
        if self._config is None:
            self._config = Config()
        return self._config

    def update(self, cfg: Config) -> None:
        """Swap in new settings (e.g. after the user edits them)."""
        self._config = cfg


config = Config()
