"""Runtime configuration for the transit solvers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_ITERATIONS = 10
DEFAULT_TOLERANCE_MINUTES = 0.001
DEFAULT_TIMEZONE = "UTC"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class SolverSettings:
    """Iteration limits and CLI defaults resolved from the environment."""

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tolerance_minutes: float = DEFAULT_TOLERANCE_MINUTES
    timezone: str = DEFAULT_TIMEZONE
    log_level: str = DEFAULT_LOG_LEVEL


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> SolverSettings:
    """Build :class:`SolverSettings` from ``RISESET_*`` environment variables.

    Parameters
    ----------
    environ:
        Mapping to read from. Defaults to :data:`os.environ`.

    Returns
    -------
    SolverSettings
        Settings with defaults applied for unset variables.

    Raises
    ------
    ValueError
        If a variable is set to a value that cannot be used.
    """

    if environ is None:
        environ = os.environ

    return SolverSettings(
        max_iterations=_read_int(environ, "RISESET_MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS),
        tolerance_minutes=_read_float(
            environ, "RISESET_TOLERANCE_MINUTES", DEFAULT_TOLERANCE_MINUTES
        ),
        timezone=environ.get("RISESET_TZ", "").strip() or DEFAULT_TIMEZONE,
        log_level=(environ.get("RISESET_LOG_LEVEL", "").strip() or DEFAULT_LOG_LEVEL).upper(),
    )
