from __future__ import annotations
import os
from pathlib import Path
from typing import Optional


# Resolve installation dir (schemer package directory)
_SCHEMER_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE = _SCHEMER_DIR / 'prelude' / 'prelude.scm'
_DEFAULT_LOG_LEVEL = 'WARNING'


def get_prelude_path() -> Path:
    raw = os.environ.get('SCHEMER_PRELUDE_PATH')
    if not raw:
        return _DEFAULT_PRELUDE
    p = Path(raw.strip())
    # a directory holds prelude.scm
    return p / 'prelude.scm' if p.is_dir() else p


def get_log_level() -> str:
    return os.environ.get('SCHEMER_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()


def get_recursion_limit() -> Optional[int]:
    raw = os.environ.get('SCHEMER_RECURSION_LIMIT')
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None
