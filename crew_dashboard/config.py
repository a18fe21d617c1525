from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    cerebras_api_key: str = Field(default="", alias="CEREBRAS_API_KEY")
    cerebras_base_url: str = Field(default="https://api.cerebras.ai/v1", alias="CEREBRAS_BASE_URL")
    default_model: str = Field(default="llama-3.3-70b", alias="DEFAULT_MODEL")

    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    metrics_buffer_size: int = Field(default=1000, ge=1, alias="METRICS_BUFFER_SIZE")
    slow_request_ms: float = Field(default=1000.0, alias="SLOW_REQUEST_MS")
    enable_metrics_endpoint: bool = Field(default=True, alias="ENABLE_METRICS_ENDPOINT")

    seed_sample_data: bool = Field(default=True, alias="SEED_SAMPLE_DATA")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
