"""Solver settings and the injected current-time source."""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from functools import lru_cache
from typing import Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

__all__ = [
    "ENV_PREFIX",
    "SettingsError",
    "SolverSettings",
    "TimeSource",
    "get_settings",
    "load_settings",
    "system_clock",
]

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "CALASTRO_"

TimeSource = Callable[[], datetime]


class SettingsError(RuntimeError):
    """Raised when solver settings taken from the environment are invalid."""


class SolverSettings(BaseModel):
    """Tuning for the iterative rise/set solver."""

    model_config = ConfigDict(frozen=True)

    max_iterations: int = Field(12, ge=1, le=100, description="Refinement steps per attempt")
    tolerance_hours: float = Field(
        1e-5, gt=0.0, le=0.5, description="Convergence threshold on the time step"
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> SolverSettings:
    """Build :class:`SolverSettings` from ``CALASTRO_*`` environment variables.

    Raises
    ------
    SettingsError
        If a variable is present but does not parse into a valid setting.
    """

    env = os.environ if environ is None else environ
    values: Dict[str, str] = {}
    for name in SolverSettings.model_fields:
        key = f"{ENV_PREFIX}{name.upper()}"
        if key in env:
            values[name] = env[key]
    try:
        settings = SolverSettings.model_validate(values)
    except ValidationError as exc:
        raise SettingsError(f"Invalid solver settings in environment: {exc}") from exc
    LOGGER.debug(json.dumps({"event": "settings_loaded", **settings.model_dump()}))
    return settings


@lru_cache(maxsize=1)
def get_settings() -> SolverSettings:
    return load_settings()


def system_clock() -> datetime:
    """Default time source: the current UTC instant."""

    return datetime.now(UTC)
