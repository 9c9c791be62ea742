from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    markup_config_path: str = ""
    currency_symbol: str = "$"
    log_level: str = "INFO"
    allowed_origins: list[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_prefix = "PRICING_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
