"""
typeex configuration (YAML layers validated against a JSON Schema).

Configuration sources (lowest to highest priority):
1. Bundled defaults: ``typeex/data/config/defaults.yaml``
2. The YAML file named by the ``TYPEEX_CONFIG`` environment variable
3. Environment variables: ``TYPEEX_*`` (``__`` separates nested keys)
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from typeex.data import clear_caches as _clear_data_caches
from typeex.data import read_yaml as read_data_yaml
from typeex.exceptions import ConfigError
from typeex.schemas import load_schema, validate_payload
from typeex.utils.merge import deep_merge
from typeex.utils.yaml_io import read_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "TYPEEX_"
CONFIG_FILE_ENV = "TYPEEX_CONFIG"
SCHEMA_NAME = "config"


def _as_bool(v: str) -> Optional[bool]:
    low = v.strip().lower()
    if low in {"true", "false"}:
        return low == "true"
    return None


def _as_int(v: str) -> Optional[int]:
    if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
        return int(v)
    return None


def _as_float(v: str) -> Optional[float]:
    s = v.strip()
    if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
        return float(s)
    return None


def _as_json(v: str) -> Optional[Any]:
    s = v.strip()
    if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
        try:
            return json.loads(s)
        except json.JSONDecodeError:
            return None
    return None


def coerce_env_value(value: str) -> Any:
    """Coerce an environment string to bool/int/float/JSON when it looks like one."""
    for caster in (_as_bool, _as_int, _as_float, _as_json):
        result = caster(value)
        if result is not None:
            return result
    # Separators and markers are often whitespace-sensitive; keep them verbatim.
    return value


def _declared_type(path: List[str]) -> Optional[str]:
    """JSON Schema type declared for ``path``, or None when undeclared."""
    node: Any = load_schema(SCHEMA_NAME)
    for part in path:
        props = node.get("properties") if isinstance(node, dict) else None
        if not isinstance(props, dict) or part not in props:
            return None
        node = props[part]
    declared = node.get("type") if isinstance(node, dict) else None
    return declared if isinstance(declared, str) else None


def _iter_env_overrides() -> Iterator[Tuple[List[str], Any]]:
    for key in sorted(os.environ.keys()):
        if not key.startswith(ENV_PREFIX) or key == CONFIG_FILE_ENV:
            continue
        raw = key[len(ENV_PREFIX):]
        segs = [s.lower() for s in raw.split("__")]
        if not raw or any(s == "" for s in segs):
            raise ConfigError(f"Malformed {ENV_PREFIX}* key: {key!r}", context={"key": key})
        value = os.environ[key]
        # String-typed settings (separators, markers) are taken verbatim.
        if _declared_type(segs) == "string":
            yield segs, value
        else:
            yield segs, coerce_env_value(value)


def _set_nested(root: Dict[str, Any], path: List[str], value: Any) -> None:
    cur = root
    for part in path[:-1]:
        nxt = cur.get(part)
        if not isinstance(nxt, dict):
            nxt = {}
            cur[part] = nxt
        cur = nxt
    cur[path[-1]] = value


def apply_env_overrides(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``cfg`` with ``TYPEEX_*`` environment overrides applied."""
    result = copy.deepcopy(cfg)
    for path, value in _iter_env_overrides():
        logger.debug("Config override from environment: %s", ".".join(path))
        _set_nested(result, path, value)
    return result


def _load_file_layer(cfg: Dict[str, Any]) -> Dict[str, Any]:
    override = os.environ.get(CONFIG_FILE_ENV)
    if not override:
        return cfg
    path = Path(override).expanduser()
    try:
        data = read_yaml(path, default={}, raise_on_error=True)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(
            f"Failed to load configuration file {path}: {exc}",
            context={"path": str(path)},
        ) from exc
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file must contain a YAML mapping: {path}",
            context={"path": str(path)},
        )
    logger.debug("Loaded configuration layer %s", path)
    return deep_merge(cfg, data)


@lru_cache(maxsize=1)
def load_config(validate: bool = True) -> Dict[str, Any]:
    """Load, merge and validate configuration (cached).

    Raises:
        ConfigError: If a configuration layer cannot be read.
        SchemaValidationError: If the merged configuration is invalid.
    """
    cfg = copy.deepcopy(read_data_yaml("config", "defaults.yaml"))
    cfg = _load_file_layer(cfg)
    cfg = apply_env_overrides(cfg)
    if validate:
        validate_payload(cfg, SCHEMA_NAME)
    return cfg


def get_setting(dotted: str) -> Any:
    """Return a value from the loaded configuration by dotted path.

    Raises:
        KeyError: If any segment of the path is missing.
    """
    node: Any = load_config()
    for part in dotted.split("."):
        if not isinstance(node, dict) or part not in node:
            raise KeyError(dotted)
        node = node[part]
    return node


def clear_caches() -> None:
    """Forget loaded configuration so the next read picks up changes."""
    load_config.cache_clear()
    _clear_data_caches()


__all__ = [
    "ENV_PREFIX",
    "CONFIG_FILE_ENV",
    "coerce_env_value",
    "apply_env_overrides",
    "load_config",
    "get_setting",
    "clear_caches",
]
