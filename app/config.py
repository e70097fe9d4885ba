"""Application settings loaded from the environment (and an optional ``.env`` file)."""

from functools import lru_cache

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder used when no API key is configured.  Good enough to boot the
# service locally; rejected when APP_ENV=production.
PLACEHOLDER_API_KEY = "default_key"


class Settings(BaseSettings):
    # OPENAI_API_KEY wins over the legacy OPENAI_API_KEY_ENV_VAR name.
    openai_api_key: str = Field(
        default=PLACEHOLDER_API_KEY,
        validation_alias=AliasChoices("OPENAI_API_KEY", "OPENAI_API_KEY_ENV_VAR"),
    )
    openai_model: str = "gpt-4o"
    openai_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    app_env: str = "development"
    log_level: str = "INFO"
    analyze_rate_limit: str = "10/minute"

    # Characters of body text sent to the model / kept on the stored record.
    scorer_content_max_chars: int = Field(default=3000, ge=1)
    stored_content_max_chars: int = Field(default=5000, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def uses_placeholder_key(self) -> bool:
        return self.openai_api_key == PLACEHOLDER_API_KEY

    @model_validator(mode="after")
    def reject_placeholder_in_production(self) -> "Settings":
        if self.app_env.lower() == "production" and self.uses_placeholder_key:
            raise ValueError(
                "OPENAI_API_KEY must be set when APP_ENV=production; "
                "the placeholder key is not accepted."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
