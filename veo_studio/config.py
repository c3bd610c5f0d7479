from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    veo_model_id: str = Field("veo-2.0-generate-001")
    veo_poll_interval_seconds: float = Field(10.0, gt=0)
    loading_message_interval_seconds: float = Field(4.0, gt=0)
    asset_fetch_timeout_seconds: float = Field(120.0, gt=0)

    max_image_bytes: int = Field(20 * 1024 * 1024, gt=0)
    download_filename: str = Field("veo-generated-video.mp4")

    app_host: str = Field("127.0.0.1")
    app_port: int = Field(8000)
    log_level: str = Field("INFO")

    @field_validator("veo_model_id", mode="before")
    @classmethod
    def normalize_model_id(cls, value: str) -> str:
        value = (value or "").strip()
        return value or "veo-2.0-generate-001"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return (value or "INFO").strip().upper()


@lru_cache()
def get_settings() -> Settings:
    try:
        return Settings()
    except Exception as exc:
        raise RuntimeError("Failed to load application settings. Check your environment or .env file.") from exc


settings = get_settings()
