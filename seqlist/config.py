"""Runtime settings read from ``SEQLIST_*`` environment variables."""
import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "SEQLIST_"


class ListSettings(BaseModel):
    log_level: str = "INFO"
    shuffle_seed: Optional[int] = None
    max_lists: int = Field(default=100, ge=1)
    out_of_range_alert_threshold: int = Field(default=0, ge=0)
    transform_alert_threshold: int = Field(default=0, ge=0)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return level


def get_settings() -> ListSettings:
    """Build settings from the current environment.

    Unset variables fall back to the model defaults; malformed values raise
    ``pydantic.ValidationError``.
    """
    values = {}
    for name in ListSettings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw not in (None, ""):
            values[name] = raw
    return ListSettings(**values)
