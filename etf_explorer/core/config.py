from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from etf_explorer.core.errors import MissingCredentialError
from etf_explorer.models.schemas import AnalysisMode

API_KEY_ENV_NAMES = (
    "GEMINI_API_KEY",
    "API_KEY",
    "GOOGLE_API_KEY",
    "VITE_API_KEY",
    "REACT_APP_API_KEY",
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Optional here: a missing key is reported per call, not at startup.
    api_key: Optional[str] = Field(None, validation_alias=AliasChoices(*API_KEY_ENV_NAMES))
    analysis_mode: AnalysisMode = Field(AnalysisMode.GROUNDED, validation_alias="ANALYSIS_MODE")
    analysis_model: str = Field("gemini-flash-lite-latest", validation_alias="ANALYSIS_MODEL")
    schema_model: str = Field("gemini-2.5-flash", validation_alias="SCHEMA_MODEL")
    image_model: str = Field("gemini-3-pro-image-preview", validation_alias="IMAGE_MODEL")
    chat_model: str = Field("gemini-flash-lite-latest", validation_alias="CHAT_MODEL")
    image_aspect_ratio: str = Field("16:9", validation_alias="IMAGE_ASPECT_RATIO")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def require_api_key(settings: Settings) -> str:
    """Return the configured API key or raise MissingCredentialError."""
    key = (settings.api_key or "").strip()
    if not key:
        raise MissingCredentialError()
    return key
