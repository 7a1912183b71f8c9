# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class VetoSettings(BaseSettings, frozen=True):
    """Library settings with environment variable support (``VETO_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="VETO_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ERRORS_ATTRIBUTE: str = Field(
        default="errors",
        description="Entity attribute that receives the Errors after a run",
    )
    POPULATE_ENTITY_ERRORS: bool = Field(
        default=True,
        description="Write the Errors back onto entities that accept them",
    )
    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Level for the 'veto' package logger",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


# Create a singleton instance
settings = VetoSettings()
# Store the instance in the class variable for singleton pattern
VetoSettings._instance = settings
