"""Configuration helpers: environment-driven writer settings and ``.env`` loading.

Purpose
-------
Translate ``ASYNC_WRITER_*`` environment variables into a validated
:class:`WriterSettings` value and optionally hydrate the environment from the
nearest ``.env`` file before doing so.

Contents
--------
* :class:`WriterSettings` - immutable constructor arguments for the writer.
* :func:`should_use_dotenv` / :func:`enable_dotenv` - opt-in ``.env`` support.
* Environment variable names as module constants.

System Role
-----------
Edge-of-system configuration consumed by the CLI and by hosts that prefer
:meth:`lib_async_writer.AsyncStringWriter.from_settings` over keyword
arguments.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "ASYNC_WRITER_USE_DOTENV"
CAPACITY_ENV_VAR = "ASYNC_WRITER_CAPACITY"
NEWLINE_ENV_VAR = "ASYNC_WRITER_NEWLINE"
FINAL_DRAIN_ENV_VAR = "ASYNC_WRITER_FINAL_DRAIN"
THREAD_NAME_ENV_VAR = "ASYNC_WRITER_THREAD_NAME"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

NEWLINE_ALIASES: Mapping[str, str] = {
    "os": os.linesep,
    "lf": "\n",
    "crlf": "\r\n",
    "cr": "\r",
}

_DOTENV_STATE: dict[str, Any] = {"loaded": False, "path": None}


@dataclass(frozen=True)
class WriterSettings:
    """Constructor arguments for :class:`lib_async_writer.AsyncStringWriter`.

    Examples
    --------
    >>> settings = WriterSettings.from_env({"ASYNC_WRITER_CAPACITY": "64", "ASYNC_WRITER_NEWLINE": "lf"})
    >>> settings.capacity, settings.newline, settings.final_drain
    (64, '\\n', True)
    """

    capacity: int | None = None
    newline: str = os.linesep
    final_drain: bool = True
    thread_name: str | None = None

    def __post_init__(self) -> None:
        if self.capacity is not None and self.capacity <= 0:
            raise ValueError("capacity must be positive")
        if not self.newline:
            raise ValueError("newline must be a non-empty string")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "WriterSettings":
        """Build settings from ``environ`` (defaults to :data:`os.environ`)."""

        env = os.environ if environ is None else environ
        return cls(
            capacity=_parse_capacity(env.get(CAPACITY_ENV_VAR)),
            newline=_parse_newline(env.get(NEWLINE_ENV_VAR)),
            final_drain=_parse_bool(env.get(FINAL_DRAIN_ENV_VAR), name=FINAL_DRAIN_ENV_VAR, default=True),
            thread_name=(env.get(THREAD_NAME_ENV_VAR) or "").strip() or None,
        )

    def with_overrides(self, **overrides: Any) -> "WriterSettings":
        """Return a copy where every non-``None`` keyword replaces the stored value."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def _parse_capacity(raw: str | None) -> int | None:
    if raw is None:
        return None
    candidate = raw.strip()
    if not candidate or candidate.lower() == "none":
        return None
    try:
        value = int(candidate)
    except ValueError as exc:
        raise ValueError(f"{CAPACITY_ENV_VAR} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{CAPACITY_ENV_VAR} must be positive, got {value}")
    return value


def _parse_newline(raw: str | None) -> str:
    if raw is None or not raw.strip():
        return os.linesep
    key = raw.strip().lower()
    try:
        return NEWLINE_ALIASES[key]
    except KeyError as exc:
        choices = ", ".join(sorted(NEWLINE_ALIASES))
        raise ValueError(f"{NEWLINE_ENV_VAR} must be one of {choices}, got {raw!r}") from exc


def _parse_bool(raw: str | None, *, name: str, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit CLI choice wins over the environment toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding variables that already exist.

    The search starts at ``search_from`` (default: the working directory) and
    walks up to the filesystem root. The file is loaded once per process; later
    calls return the cached path.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, ``None`` when no file was found.
    """

    if _DOTENV_STATE["loaded"]:
        return _DOTENV_STATE["path"]

    if search_from is None:
        found = find_dotenv(usecwd=True)
        path = Path(found).resolve() if found else None
    else:
        path = _find_upwards(search_from.resolve())

    if path is not None:
        load_dotenv(path, override=False)
    _DOTENV_STATE["loaded"] = True
    _DOTENV_STATE["path"] = path
    return path


def _find_upwards(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    """Forget any previously loaded ``.env`` file."""

    _DOTENV_STATE["loaded"] = False
    _DOTENV_STATE["path"] = None


__all__ = [
    "CAPACITY_ENV_VAR",
    "DOTENV_ENV_VAR",
    "FINAL_DRAIN_ENV_VAR",
    "NEWLINE_ALIASES",
    "NEWLINE_ENV_VAR",
    "THREAD_NAME_ENV_VAR",
    "WriterSettings",
    "enable_dotenv",
    "should_use_dotenv",
]
