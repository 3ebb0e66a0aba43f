from __future__ import annotations
import os
import json
import logging
from typing import Any, Dict
from pathlib import Path
import copy

logger = logging.getLogger(__name__)

ENV_PREFIX = "POPDASH__"

_DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "api": {
        "base_url": "https://datausa.io/api/data",
        "timeout": 30,
        "retries": 5,
    },
    "table": {
        "page_size": 10,
        "empty_state_message": "No data available",
        "search_placeholder": "Search...",
    },
    "filters": {
        "default_state": "Nation",
        "default_year": "latest",
    },
    "export": {"directory": "data/export"},
}


def validate_table_config(cfg: Dict[str, Any]) -> int:
    """Validate the table section and return the configured page size.

    Args:
        cfg: Configuration dictionary

    Returns:
        int: Page size

    Raises:
        ValueError: If page_size is missing, not an integer, or not positive
    """
    table = cfg.get('table', {})
    page_size = table.get('page_size')
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise ValueError(
            f"table.page_size must be an integer, got {page_size!r}. "
            "Set POPDASH__TABLE__PAGE_SIZE to a positive number."
        )
    if page_size <= 0:
        raise ValueError(f"table.page_size must be positive, got {page_size}")
    logger.debug(f"Using table page size: {page_size}")
    return page_size


def deep_merge(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` with ``extra`` merged in; nested dicts merge, other values replace."""
    merged = dict(base)
    for key, value in extra.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _strip_inline_comment(value: str) -> str:
    quote = None
    for pos, ch in enumerate(value):
        if ch in ('"', "'"):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
        elif ch == '#' and quote is None:
            return value[:pos].rstrip()
    return value


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _load_dotenv(path: Path) -> Dict[str, str]:
    """Read KEY=VALUE pairs from a .env file (missing file -> empty dict)."""
    if not path.exists():
        return {}
    values: Dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            values[key] = _unquote(_strip_inline_comment(value.strip()))
    return values


def _apply_env(cfg: Dict[str, Any], env: Dict[str, str]) -> None:
    """Write POPDASH__SECTION__KEY=value entries into ``cfg`` in place."""
    for name, value in env.items():
        if not name.startswith(ENV_PREFIX):
            continue
        *sections, leaf = name[len(ENV_PREFIX):].lower().split('__')
        target = cfg
        for section in sections:
            target = target.setdefault(section, {})
        target[leaf] = coerce_scalar(value)


def load_config(overrides: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Load configuration: defaults, then .env, then environment, then overrides.

    Under pytest (PYTEST_CURRENT_TEST set) the .env file is ignored unless
    POPDASH_ENABLE_DOTENV is set, so tests see deterministic defaults.

    Args:
        overrides: Values deep-merged last (mainly for tests)

    Returns:
        dict: Configuration dictionary (see load_typed_config() for typed access)
    """
    cfg: Dict[str, Any] = copy.deepcopy(_DEFAULTS)
    if os.environ.get('POPDASH_ENABLE_DOTENV') or not os.environ.get('PYTEST_CURRENT_TEST'):
        _apply_env(cfg, _load_dotenv(Path('.env')))
    _apply_env(cfg, dict(os.environ))
    if overrides:
        cfg = deep_merge(cfg, overrides)

    _configure_logging(cfg.get('log_level', 'INFO'))
    return cfg


def load_typed_config(overrides: Dict[str, Any] | None = None):
    """Load configuration as an AppConfig (use ``.to_dict()`` for code taking dicts)."""
    from .config_types import AppConfig
    return AppConfig.from_dict(load_config(overrides))


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format='%(message)s', force=True)


def coerce_scalar(value: str) -> Any:
    """Turn an environment string into bool, int, float, JSON list/dict or str."""
    text = value.strip()
    if text[:1] in ('[', '{') and text[-1:] in (']', '}'):
        try:
            return json.loads(text)
        except ValueError:
            pass
    lowered = text.lower()
    if lowered in ("true", "yes"):
        return True
    if lowered in ("false", "no"):
        return False
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


__all__ = ["load_config", "deep_merge", "load_typed_config", "validate_table_config", "coerce_scalar"]
