"""Interpreter settings and logging setup.

Settings come from the environment (optionally seeded from a ``.env`` file)
and are validated with pydantic:

- ``POSTFIX_SYMBOL_CAPACITY``: maximum number of symbols, unset for no limit
- ``POSTFIX_DIAGNOSTICS``: write ``Error: ...`` lines for failed expressions
- ``POSTFIX_LOG_LEVEL``: logging level name, ``WARNING`` by default
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field, field_validator

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENV_SYMBOL_CAPACITY = "POSTFIX_SYMBOL_CAPACITY"
ENV_DIAGNOSTICS = "POSTFIX_DIAGNOSTICS"
ENV_LOG_LEVEL = "POSTFIX_LOG_LEVEL"

_ENV_FIELDS = {
    ENV_SYMBOL_CAPACITY: "symbol_capacity",
    ENV_DIAGNOSTICS: "diagnostics",
    ENV_LOG_LEVEL: "log_level",
}

_LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class InterpreterSettings(BaseModel):
    """Runtime settings for an interpreter instance."""
    symbol_capacity: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of symbols, None for unbounded"
    )
    diagnostics: bool = Field(
        default=False, description="Report failed expressions on the diagnostic stream"
    )
    log_level: str = Field(default="WARNING", description="Logging level name")

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(f'Unknown log level: {v}')
        return level


def load_settings(env_file: Optional[str] = None) -> InterpreterSettings:
    """
    Build settings from the environment.

    Args:
        env_file: Optional path of a ``.env`` file; without one the nearest
            ``.env`` is searched for. Variables already set in the process
            environment take precedence over the file. The process
            environment itself is left untouched.

    Returns:
        InterpreterSettings

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    source: Dict[str, Optional[str]] = dict(dotenv_values(env_file))
    source.update(os.environ)

    values = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = (source.get(env_name) or "").strip()
        if raw:
            values[field_name] = raw

    return InterpreterSettings(**values)


def configure_logging(settings: InterpreterSettings) -> None:
    """Configure root logging with the interpreter's format and level."""
    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)
