from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for structured JSON, False for colored console

    # Reporting
    DEFAULT_LOCALE: str = "en"
    QUOTE_STRINGS: bool = False  # Wrap string operands in double quotes

    # Engine policies
    STRICT_ANY: bool = False  # ANY over an empty container fails during prevalidation
    ALL_EMPTY_STATUS: Literal["success", "fail", "ignore"] = "success"
    CHECK_MEMBER_EXISTS: bool = True  # Missing members are ignored instead of failed

    class Config:
        env_file = ".env"
        env_prefix = "VALENCE_"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
