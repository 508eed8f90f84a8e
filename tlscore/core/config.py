from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="TLSCORE_", extra="ignore")

    APP_NAME: str = "tlscore"

    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # "redact" never renders key material; "hex" prints it for local debugging only
    SECRET_PRINT_MODE: Literal["redact", "hex"] = "redact"


@lru_cache
def get_settings() -> Settings:
    return Settings()
