#!/usr/bin/env python3
# rlconsole/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with RLCONSOLE_ (e.g. RLCONSOLE_PROMPT)

Validation:
  - PROMPT: str (empty string allowed)
  - ENGINE: one of auto / prompt_toolkit / readline / plain
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or normalized path
  - ENABLE_COMPLETION: bool
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import configparser
import json
import os
import re
import tomllib

from rlconsole.interface.engine import ENGINE_NAMES

ENV_PREFIX = "RLCONSOLE_"

DEFAULTS: dict[str, Any] = {
    "PROMPT": "> ",
    "ENGINE": "auto",
    "LOG_LEVEL": None,
    "LOG_FILE_PATH": None,
    "ENABLE_COMPLETION": True,
}


@dataclass(frozen=True)
class ConsoleConfig:
    prompt: str
    engine: str
    log_level: str | None
    log_file_path: Path | None
    enable_completion: bool

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser()
    # Keep prompt strings such as "> " intact
    cfg.optionxform = str  # type: ignore[assignment]
    try:
        cfg.read(path, encoding="utf-8")
    except configparser.Error:
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(base: Path) -> list[Path]:
    return [
        base / ".env",
        base / "config.ini",
        base / "config.json",
        base / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"{key}: expected boolean, got {val!r}")


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_engine(val: Any) -> str:
    name = (_as_opt_str(val) or "auto").lower()
    if name not in ENGINE_NAMES:
        raise ValueError(f"ENGINE must be one of {list(ENGINE_NAMES)}, got {val!r}")
    return name


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _merge_sources(base: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base):
        if file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(_flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(_flatten_mapping(_load_toml_file(file))))

    # Environment variables override all
    merged.update({k[len(ENV_PREFIX):]: v for k, v in environ.items()
                   if k.startswith(ENV_PREFIX)})
    return merged


def _validate_and_build(config: dict[str, Any]) -> ConsoleConfig:
    prompt = config.get("PROMPT", DEFAULTS["PROMPT"])
    recognized = set(DEFAULTS.keys())

    return ConsoleConfig(
        prompt="" if prompt is None else str(prompt),
        engine=_as_engine(config.get("ENGINE", DEFAULTS["ENGINE"])),
        log_level=_as_log_level(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"])),
        log_file_path=_as_opt_path(config.get("LOG_FILE_PATH", DEFAULTS["LOG_FILE_PATH"])),
        enable_completion=_as_bool(
            "ENABLE_COMPLETION", config.get("ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"])),
        extra={k: v for k, v in config.items() if k not in recognized},
    )


# ---------- public API ----------

def load_config(base: Path | None = None, environ: Mapping[str, str] | None = None) -> ConsoleConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects. Raises ValueError on invalid values.
    """
    raw = _merge_sources(base or Path.cwd(), os.environ if environ is None else environ)
    return _validate_and_build(raw)
