"""Environment-driven configuration for the output runtime.

Purpose
-------
Resolve the printer settings hosts may override without code changes and
optionally pull them from a nearby ``.env`` file.

Contents
--------
* ``ENV_*`` names of the recognised environment variables.
* :func:`resolve_settings` - merge call arguments with environment overrides.
* :func:`should_use_dotenv` / :func:`enable_dotenv` - ``.env`` loading.

System Role
-----------
Consumed by :func:`lib_pmem_output.runtime.init` and the CLI. Environment
values take precedence over programmatic defaults; existing environment
variables take precedence over ``.env`` entries.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_VERBOSITY = "PMEM_OUTPUT_VERBOSITY"
ENV_COLUMN_WIDTH = "PMEM_OUTPUT_COLUMN_WIDTH"
ENV_PREFIX = "PMEM_OUTPUT_PREFIX"
DOTENV_ENV_VAR = "PMEM_OUTPUT_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

_DOTENV_LOADED: Path | None = None


@dataclass(frozen=True)
class ResolvedSettings:
    """Printer settings after environment overrides were applied."""

    verbosity: int
    column_width: int
    prefix: str | None


def _parse_int(name: str, raw: str, *, minimum: int | None = None) -> int:
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if minimum is not None and value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def resolve_settings(
    *,
    verbosity: int,
    column_width: int,
    prefix: str | None,
    environ: Mapping[str, str] | None = None,
) -> ResolvedSettings:
    """Return the effective settings, letting environment variables win.

    ``PMEM_OUTPUT_PREFIX`` set to an empty string clears the prefix.

    Examples
    --------
    >>> resolve_settings(verbosity=0, column_width=20, prefix=None, environ={"PMEM_OUTPUT_VERBOSITY": "2"})
    ResolvedSettings(verbosity=2, column_width=20, prefix=None)
    >>> resolve_settings(verbosity=0, column_width=20, prefix=None, environ={"PMEM_OUTPUT_COLUMN_WIDTH": "-1"})
    Traceback (most recent call last):
    ...
    ValueError: PMEM_OUTPUT_COLUMN_WIDTH must be >= 0, got -1
    """

    env = os.environ if environ is None else environ

    raw_verbosity = env.get(ENV_VERBOSITY)
    if raw_verbosity is not None:
        verbosity = _parse_int(ENV_VERBOSITY, raw_verbosity)

    raw_width = env.get(ENV_COLUMN_WIDTH)
    if raw_width is not None:
        column_width = _parse_int(ENV_COLUMN_WIDTH, raw_width, minimum=0)

    raw_prefix = env.get(ENV_PREFIX)
    if raw_prefix is not None:
        prefix = raw_prefix or None

    return ResolvedSettings(verbosity=verbosity, column_width=column_width, prefix=prefix)


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` should be loaded; an explicit CLI flag wins.

    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    normalized = env_value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    logger.debug("ignoring unrecognised %s value %r", DOTENV_ENV_VAR, env_value)
    return False


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking upward from ``search_from``.

    Existing environment variables are never overridden. Returns the loaded
    file, or ``None`` when no ``.env`` was found. Repeated calls reuse the
    first successful load.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED

    start = (search_from or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            load_dotenv(candidate, override=False)
            _DOTENV_LOADED = candidate
            logger.debug("loaded environment from %s", candidate)
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_COLUMN_WIDTH",
    "ENV_PREFIX",
    "ENV_VERBOSITY",
    "ResolvedSettings",
    "enable_dotenv",
    "resolve_settings",
    "should_use_dotenv",
]
