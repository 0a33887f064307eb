from __future__ import annotations
import logging
import os


# Defaults
_DEFAULT_MAX_EVAL_DEPTH = 200
_DEFAULT_LOG_LEVEL = 'WARNING'


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_max_eval_depth() -> int:
    """Evaluation depth past which the evaluator gives up with RecursionTooDeep."""
    return int_from_env('KEIKAKU_MAX_EVAL_DEPTH', _DEFAULT_MAX_EVAL_DEPTH)


def get_log_level() -> int:
    raw = os.environ.get('KEIKAKU_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName maps unknown names to "Level <name>" strings
    return level if isinstance(level, int) else logging.WARNING
