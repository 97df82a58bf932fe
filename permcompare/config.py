from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Reference table of permission set descriptions; optional at runtime
    descriptions_path: str = Field(
        default_factory=lambda: os.getenv("PERMCOMPARE_DESCRIPTIONS_PATH", "Permission Sets.csv")
    )
    log_level: str = Field(default_factory=lambda: os.getenv("PERMCOMPARE_LOG_LEVEL", "INFO"))

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
