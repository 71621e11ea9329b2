# src/token_view/utils/key_config.py

"""Load key vocabularies (JSON5 lists of names) from a <data/> directory.

The data directory is an explicit `base_dir`, else TOKEN_VIEW_DATA_DIR / DATA_DIR,
else the first `data/` found walking up from this file. Parsed sets are cached
per (path, mtime, encoding), so an edited file is picked up on its next load.

Used by params (default key vocabulary).
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

import json5

__all__ = [
    "load_key_set",
    "clear_key_cache",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
]

_ENV_VARS = ("TOKEN_VIEW_DATA_DIR", "DATA_DIR")


# ── Exceptions ───────────────────────────────────────────────────────────────
class DataDirNotFound(FileNotFoundError):
    """Raise when no 'data' directory is found while walking upwards."""


class ConfigFileNotFound(FileNotFoundError):
    """Raise when the requested key file cannot be read or resolved."""


class ConfigParseError(ValueError):
    """Raise when a key file is not valid JSON5."""


class ConfigTypeError(TypeError):
    """Raise when a key file is not a flat list of scalars."""


# ── Logging & cache ──────────────────────────────────────────────────────────
log = logging.getLogger(__name__)
_CACHE_LOCK = threading.RLock()
_KEY_CACHE: dict[tuple[Path, float, str], frozenset[str]] = {}


def clear_key_cache() -> None:
    with _CACHE_LOCK:
        _KEY_CACHE.clear()
    log.debug("Key cache cleared.")


def _candidate_data_dirs(start: Path | None = None) -> list[Path]:
    start = (start or Path(__file__)).resolve()
    return [(p / "data").resolve() for p in [start, *start.parents]]


def _data_dir(base_dir: os.PathLike[str] | str | None) -> Path:
    if base_dir is not None:
        return Path(base_dir).resolve()
    for var in _ENV_VARS:
        v = os.environ.get(var)
        if v:
            return Path(os.path.expanduser(v)).resolve()
    candidates = _candidate_data_dirs()
    for cand in candidates:
        if cand.is_dir():
            return cand
    raise DataDirNotFound(
        "No 'data' directory found.\nTried:\n  " + "\n  ".join(map(str, candidates))
    )


def _resolve(name: str, data_dir: Path) -> Path:
    file_name = name if name.endswith(".json") else f"{name}.json"
    path = (data_dir / file_name).resolve()
    try:
        path.relative_to(data_dir)
    except ValueError as e:
        raise ConfigFileNotFound(
            f"Refusing to access file outside data dir: {path} (base={data_dir})"
        ) from e
    if not path.is_file():
        raise ConfigFileNotFound(f"Key file not found: {path}")
    return path


def _parse(path: Path, encoding: str) -> frozenset[str]:
    try:
        with path.open("r", encoding=encoding, errors="strict", newline="") as f:
            data = json5.load(f)
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot read {path}: {e}") from e
    except ValueError as e:
        # json5 and UnicodeDecodeError both land here
        raise ConfigParseError(f"Invalid JSON5 in {path}: {e}") from e

    if not isinstance(data, list):
        raise ConfigTypeError(f"{path.name}: expected list, got {type(data).__name__}")
    bad = [x for x in data if not isinstance(x, (str, int, float, bool)) and x is not None]
    if bad:
        preview = ", ".join(type(x).__name__ for x in bad[:3])
        raise ConfigTypeError(f"{path.name}: list must contain only scalars (first bad types: {preview})")
    return frozenset(map(str, data))


def load_key_set(
    name: str | os.PathLike[str],
    *,
    base_dir: os.PathLike[str] | str | None = None,
    encoding: str = "utf-8",
) -> frozenset[str]:
    """Load <data>/<name>.json (JSON5, comments and trailing commas allowed) as a frozenset of str."""
    path = _resolve(os.fspath(name), _data_dir(base_dir))
    try:
        mtime = path.stat().st_mtime
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot stat {path}: {e}") from e

    cache_key = (path, mtime, encoding)
    with _CACHE_LOCK:
        if cache_key in _KEY_CACHE:
            log.debug("Key cache HIT: %s", path.name)
            return _KEY_CACHE[cache_key]

    keys = _parse(path, encoding)
    with _CACHE_LOCK:
        _KEY_CACHE[cache_key] = keys
    log.debug("Key cache MISS → STORED: %s (%d keys)", path.name, len(keys))
    return keys
