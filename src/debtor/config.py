from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from debtor.services.mode import SolveMode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    exact_threshold: int = Field(20, alias="DEBTOR_EXACT_THRESHOLD", ge=1)
    mode: Optional[SolveMode] = Field(None, alias="DEBTOR_MODE")
    log_format: Literal["json", "console"] = Field("console", alias="DEBTOR_LOG_FORMAT")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
