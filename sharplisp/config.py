from __future__ import annotations
import logging
import os
from typing import Optional

# Each SharpLisp call level costs roughly twenty Python frames
DEFAULT_RECURSION_LIMIT = 20000


def int_from_env(var: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}")


def get_recursion_limit() -> int:
    return int_from_env('SHARPLISP_RECURSION_LIMIT', DEFAULT_RECURSION_LIMIT)


def get_log_level() -> int:
    name = os.environ.get('SHARPLISP_LOG_LEVEL', 'WARNING').strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
