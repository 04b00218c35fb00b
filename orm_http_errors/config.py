from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    app_name: str = "ORM HTTP Errors"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Message for 422 responses built from ORM validation errors
    validation_message: str = "Validation Failed"

    model_config = {"env_prefix": "ORM_HTTP_ERRORS_", "env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
