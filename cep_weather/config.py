import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", frozen=True)

    resolver_url: str = Field(default="http://localhost:8081", alias="RESOLVER_URL")
    viacep_url: str = Field(default="https://viacep.com.br/ws", alias="VIACEP_URL")
    weather_api_url: str = Field(default="https://api.weatherapi.com/v1", alias="WEATHER_API_URL")
    weather_api_key: str = Field(default="", alias="WEATHER_API_KEY")
    request_timeout_seconds: float = Field(default=5.0, alias="REQUEST_TIMEOUT_SECONDS")

    host: str = Field(default="0.0.0.0", alias="HOST")
    gateway_port: int = Field(default=8080, alias="GATEWAY_PORT")
    resolver_port: int = Field(default=8081, alias="RESOLVER_PORT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    enable_metrics_endpoint: bool = Field(default=True, alias="ENABLE_METRICS_ENDPOINT")

    @property
    def log_level_number(self) -> int:
        level = getattr(logging, self.log_level.upper(), None)
        return level if isinstance(level, int) else logging.INFO


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
