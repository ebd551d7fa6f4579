# src/flag_color_extractor/extraction/general/utils/load_config.py

"""Load JSON object configs from a <data/> directory, validate them, and cache results.

Resolves the run settings of the flag color batch (`flag_colors.json`).
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import Any

# ── Public surface ────────────────────────────────────────────────────────────
__all__ = [
    "Settings",
    "SETTINGS_FILE",
    "DEFAULT_SAMPLE_FLAGS",
    "load_config",
    "load_settings",
    "resolve_data_dir",
    "clear_config_cache",
    "temp_data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
]

SETTINGS_FILE = "flag_colors.json"
DEFAULT_SAMPLE_FLAGS: tuple[str, ...] = ("US", "GB", "JP", "BR", "IN", "ZA", "UA", "JM")
_ENV_DATA_DIRS = ("DATA_DIR", "FLAG_COLORS_DATA_DIR")


# ── Exceptions ───────────────────────────────────────────────────────────────
class DataDirNotFound(FileNotFoundError):
    """Raise when no 'data' directory is found while walking upwards."""


class ConfigFileNotFound(FileNotFoundError):
    """Raise when the requested config file cannot be read or resolved."""


class ConfigParseError(ValueError):
    """Raise when JSON parsing/validation fails for a config file."""


class ConfigTypeError(TypeError):
    """Raise when the parsed JSON doesn't match the expected structure."""


# ── Logging & cache ──────────────────────────────────────────────────────────
log = logging.getLogger(__name__)
_CACHE_LOCK = threading.RLock()
# cache key includes: path, mtime, encoding, validator
_CONFIG_CACHE: dict[tuple[Path, float, str, Any], dict[str, Any]] = {}


def clear_config_cache() -> None:
    """Empty the in-memory config cache (useful for pytest/hot-reload)."""
    with _CACHE_LOCK:
        _CONFIG_CACHE.clear()
        log.debug("Config cache cleared.")


def _candidate_data_dirs(start: Path | None = None) -> list[Path]:
    """Compute candidate 'data' directories walking up from cwd, then from start."""
    roots = [Path.cwd().resolve(), (start or Path(__file__)).resolve()]
    cands: list[Path] = []
    for root in roots:
        for p in [root, *root.parents]:
            cand = (p / "data").resolve()
            if cand not in cands:
                cands.append(cand)
    return cands


def _default_data_dir(start: Path | None = None) -> Path:
    """Return the first existing candidate directory or raise."""
    for cand in _candidate_data_dirs(start):
        if cand.is_dir():
            return cand
    raise DataDirNotFound(
        "No 'data' directory found.\n"
        "Tried:\n  " + "\n  ".join(str(p) for p in _candidate_data_dirs(start))
    )


def _env_data_dir() -> Path | None:
    """Resolve data dir from env if set."""
    for var in _ENV_DATA_DIRS:
        v = os.environ.get(var)
        if v:
            return Path(os.path.expanduser(v)).resolve()
    return None


def resolve_data_dir(base_dir: Path | None = None) -> Path:
    """Resolve the data directory: explicit > env override > discovery."""
    if base_dir is not None:
        return Path(base_dir).resolve()
    return _env_data_dir() or _default_data_dir()


def load_config(
    file: str | os.PathLike[str],
    *,
    base_dir: Path | None = None,
    encoding: str = "utf-8",
    validator: Callable[[dict[str, Any]], dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Load <data>/<file>.json, require a JSON object, apply `validator`, and cache the result."""
    data_dir = resolve_data_dir(base_dir)

    # Normalize file path and enforce staying under data_dir
    file_str = os.fspath(file)
    file_name = file_str if file_str.endswith(".json") else f"{file_str}.json"
    path = (data_dir / file_name).resolve()
    try:
        path.relative_to(data_dir)
    except ValueError as e:
        raise ConfigFileNotFound(
            f"Refusing to access file outside data dir: {path} (base={data_dir})"
        ) from e

    if not path.is_file():
        raise ConfigFileNotFound(f"Config file not found: {path}")

    # mtime-based cache key for auto-invalidation when file changes
    try:
        mtime = path.stat().st_mtime
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot stat {path}: {e}") from e

    # validators are keyed by identity; pass module-level functions to benefit
    cache_key = (path, mtime, encoding, validator)

    with _CACHE_LOCK:
        if cache_key in _CONFIG_CACHE:
            log.debug("Config cache HIT: %s", path.name)
            return _CONFIG_CACHE[cache_key]

    try:
        with path.open("r", encoding=encoding, errors="strict", newline="") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileNotFound(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigTypeError(f"{path.name}: expected a JSON object, got {type(data).__name__}")
    if validator is not None:
        try:
            data = validator(data)
        except Exception as e:
            raise ConfigParseError(f"{path.name}: validator failed: {e}") from e

    with _CACHE_LOCK:
        _CONFIG_CACHE[cache_key] = data
        log.debug("Config cache MISS → STORED: %s", path.name)

    return data


# ── Run settings ─────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Settings:
    """Resolved settings of one batch run (paths are absolute)."""

    flags_dir: Path
    output: Path
    samples: tuple[str, ...] = DEFAULT_SAMPLE_FLAGS
    workers: int = 1
    data_dir: Path | None = field(default=None, compare=False)


def _validate_settings(data: dict[str, Any]) -> dict[str, Any]:
    """Check keys/types of flag_colors.json; raises ValueError on the first problem."""
    allowed = {"flags_dir", "output", "samples", "workers"}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"unknown keys: {', '.join(unknown)}")
    for key in ("flags_dir", "output"):
        if key in data and not isinstance(data[key], str):
            raise ValueError(f"'{key}' must be a string path")
    if "samples" in data:
        samples = data["samples"]
        if not isinstance(samples, list) or not all(isinstance(s, str) for s in samples):
            raise ValueError("'samples' must be a list of flag ids")
        data = {**data, "samples": tuple(s.strip().upper() for s in samples)}
    if "workers" in data:
        workers = data["workers"]
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ValueError("'workers' must be a positive integer")
    return data


def load_settings(base_dir: Path | None = None) -> Settings:
    """Build Settings from <data>/flag_colors.json, falling back to defaults when absent.

    Relative paths in the file are resolved against the data directory.
    """
    try:
        data_dir = resolve_data_dir(base_dir)
    except DataDirNotFound:
        data_dir = (Path.cwd() / "data").resolve()
        log.info("No data directory found; defaulting to %s", data_dir)

    try:
        raw = load_config(
            SETTINGS_FILE, base_dir=data_dir, validator=_validate_settings
        )
    except ConfigFileNotFound:
        log.debug("No %s in %s; using defaults", SETTINGS_FILE, data_dir)
        raw = {}

    flags_dir = (data_dir / raw.get("flags_dir", "flags")).resolve()
    output = (data_dir / raw["output"]).resolve() if "output" in raw else flags_dir / "_colors.json"
    return Settings(
        flags_dir=flags_dir,
        output=output,
        samples=raw.get("samples", DEFAULT_SAMPLE_FLAGS),
        workers=raw.get("workers", 1),
        data_dir=data_dir,
    )


# ── Context manager to temporarily override the data directory ───────────────
class temp_data_dir:
    """Temporarily set the data directory via env for the block."""

    def __init__(self, path: os.PathLike[str] | str):
        self._new = str(path)
        self._old: str | None = None

    def __enter__(self) -> temp_data_dir:
        self._old = os.environ.get("DATA_DIR")
        os.environ["DATA_DIR"] = self._new
        clear_config_cache()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._old is None:
            os.environ.pop("DATA_DIR", None)
        else:
            os.environ["DATA_DIR"] = self._old
        clear_config_cache()
