# campusflow/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Credentials, checked in this order; blank counts as unset
    GEMINI_API_KEY: str = ""
    GOOGLE_API_KEY: str = ""

    GEMINI_MODEL: str = "gemini-1.5-flash"
    # Seconds; None leaves the SDK default in place
    LLM_REQUEST_TIMEOUT: Optional[float] = 120.0
    CAMPUSFLOW_DISABLE_LLM: str = "0"

    CAMPUS_NAME: str = "CMRIT"
    CAMPUSFLOW_PROMPTS_DIR: Optional[str] = None

    class Config:
        env_file = ".env"
        env_ignore_empty = True
        extra = "ignore"

    @property
    def api_key(self) -> str:
        for candidate in (self.GEMINI_API_KEY, self.GOOGLE_API_KEY):
            if candidate and candidate.strip():
                return candidate.strip()
        return ""

    @property
    def llm_disabled(self) -> bool:
        return self.CAMPUSFLOW_DISABLE_LLM.strip() == "1"


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    return Settings()
