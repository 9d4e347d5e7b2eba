"""Runtime settings. The rules themselves are fixed and live as constants next to the code that uses them."""

import logging
import os
from typing import Self

from pydantic import BaseModel, Field, field_validator

from src.rules.game import REPETITION_LIMIT

ENV_PREFIX = "CHESS_RULES_"


class EngineSettings(BaseModel):
    log_level: str = "WARNING"
    repetition_limit: int = Field(default=REPETITION_LIMIT, ge=2)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> Self:
        """Read overrides from CHESS_RULES_LOG_LEVEL / CHESS_RULES_REPETITION_LIMIT (unset -> defaults)"""
        overrides = {
            name: os.environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in os.environ
        }
        return cls.model_validate(overrides)


def configure_logging(settings: EngineSettings) -> None:
    """Root logger setup. Called once by GameService.from_env; a host that builds GameService itself calls it directly."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
