from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource

_TRUE_VALUES = {"1", "true", "yes", "on", "enabled"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}


class Settings(BaseSettings):
    PREDICATES: bool = True
    STATES_GETTER: bool = True
    STRICT_DEFAULT_STATE: bool = False
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="STEADY_STATE_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("PREDICATES", "STATES_GETTER", "STRICT_DEFAULT_STATE", mode="before")
    @classmethod
    def normalize_flag(cls, value: object) -> bool:
        if isinstance(value, bool):
            return value

        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in _TRUE_VALUES:
                return True
            if normalized in _FALSE_VALUES:
                return False

            accepted = sorted(_TRUE_VALUES | _FALSE_VALUES)
            raise ValueError(
                "Invalid flag value. Accepted values: "
                + ", ".join(accepted)
            )

        raise ValueError("Invalid flag value type. Expected bool or string.")

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        return str(value).strip().upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # init kwargs > .env file > OS environment > file secrets
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next lookup re-reads the environment."""
    get_settings.cache_clear()
