from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List, Optional


# The product of two signed 64-bit integers has at most 38 digits.
MIN_PRECISION = 40
DEFAULT_PRECISION = 50
DEFAULT_LOG_LEVEL = 'WARNING'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def int_from_env(var: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(var, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{var} must be an integer, got {raw!r}') from None


def get_precision() -> int:
    """Decimal working precision (significant digits) for the Real tier."""
    return max(MIN_PRECISION, int_from_env('QUILL_PRECISION', DEFAULT_PRECISION))


def get_prelude_paths() -> List[Path]:
    # Program files loaded ahead of anything named on the command line
    return paths_from_env('QUILL_PRELUDE_PATH', [])


def get_log_level() -> str:
    return os.environ.get('QUILL_LOG_LEVEL', DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL


def get_recursion_limit() -> Optional[int]:
    return int_from_env('QUILL_RECURSION_LIMIT', None)
