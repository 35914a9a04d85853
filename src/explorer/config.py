"""
Explorer configuration.

Defaults can be overridden with RDF_EXPLORER_* environment variables, which are
also read from a .env file when present.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .domain import LabelMode
from .loader import DEFAULT_BASE_IRI

ENV_PREFIX = "RDF_EXPLORER_"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class ExplorerConfig(BaseModel):
    """Configuration options for an explorer session."""

    label_mode: LabelMode = Field(default=LabelMode.NORMAL, description="Label rendering mode")
    base_iri: str = Field(default=DEFAULT_BASE_IRI, description="Base IRI for resolving relative references while parsing")
    log_level: str = Field(default="WARNING", description="Root logging level for the CLI")
    max_rows: int = Field(default=50, description="Maximum rows the CLI prints per listing")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level


def load_config(env_file: Optional[str] = None) -> ExplorerConfig:
    """Build the configuration from defaults and the environment."""
    load_dotenv(env_file)

    overrides = {}
    for name in ExplorerConfig.model_fields:
        value = os.getenv(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value

    # pydantic coerces the string values (e.g. "advanced", "25")
    return ExplorerConfig(**overrides)
