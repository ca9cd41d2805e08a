# config/env.py
from __future__ import annotations

import os
from typing import Any


def env_key(key: str) -> str:
    """
    Dotted config key -> environment variable name.
      db.pg.write.host -> DB_PG_WRITE_HOST
    """
    return key.replace(".", "_").replace("-", "_").upper()


def get(key: str, default: Any = None) -> Any:
    value = os.getenv(env_key(key))
    if value is None or value == "":
        return default
    return value


def get_str(key: str, default: str = "") -> str:
    return str(get(key, default))


def get_int(key: str, default: int) -> int:
    value = get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{env_key(key)} must be an integer, got {value!r}")


def get_bool(key: str, default: bool) -> bool:
    value = get(key)
    if value is None:
        return default
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def get_list(key: str, default: list[str] | None = None) -> list[str]:
    value = get(key)
    if value is None:
        return list(default or [])
    return [item.strip() for item in str(value).split(",") if item.strip()]
