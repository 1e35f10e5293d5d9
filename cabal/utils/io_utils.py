"""IO utilities: settings loading and typed tabular file access."""

import copy
import functools
import importlib.util
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, cast

import pandas as pd
import yaml

from cabal.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULTS: dict[str, Any] = {
    "analysis": {
        "max_similarity_percent": 6,
        "step_percent": 1,
    },
    "report": {
        "handin_name": "handin.rkt",
        "id_pattern": None,
        "encoding": "utf-8",
    },
    "persistence": {
        "format": "parquet",
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "file": None,
    },
}


def deep_merge(base: dict[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``update`` into ``base`` in place and return it."""
    for key, value in update.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


@functools.lru_cache(maxsize=1)
def load_settings(path: str) -> dict[str, Any]:
    """Load settings from YAML file with defaults.

    This function is cached to prevent repeated file I/O and parsing.
    Use reload_settings() to force a fresh load.

    Args:
        path: Path to settings YAML file

    Returns:
        Dictionary with settings (user config merged over defaults)

    """
    logger.debug(f"Loading settings from {path}")

    defaults = copy.deepcopy(DEFAULTS)
    try:
        with open(path, encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Settings file not found: {path}. Using defaults.")
        return defaults

    if not isinstance(user_config, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(user_config).__name__}")

    return deep_merge(defaults, user_config)


def reload_settings(path: str) -> dict[str, Any]:
    """Force reload settings from file (clears cache).

    Args:
        path: Path to settings YAML file

    Returns:
        Freshly loaded settings

    """
    load_settings.cache_clear()
    return load_settings(path)


def read_csv_typed(
    path: Path,
    *,
    dtype: Optional[Mapping[str, str]] = None,
    na_values: Sequence[str] = (),
    keep_default_na: bool = False,
) -> pd.DataFrame:
    """Narrow, keyword-only wrapper around pandas.read_csv.

    Defaults keep every cell literal: names such as ``NA`` or ``001`` must
    survive a round trip unchanged.
    """
    return cast(
        "pd.DataFrame",
        pd.read_csv(  # type: ignore[call-overload]
            path,
            dtype=dtype,
            engine="c",
            low_memory=False,
            na_values=list(na_values),
            keep_default_na=keep_default_na,
        ),
    )


def write_csv_safely(df: pd.DataFrame, path: str) -> None:
    """Write DataFrame to CSV, creating parent directories."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)


def _require_pyarrow() -> None:
    """Require pyarrow to be available for parquet operations."""
    if importlib.util.find_spec("pyarrow") is None:
        raise ImportError("pyarrow required for parquet IO (pip install cabal[parquet])")


def write_parquet_safely(df: pd.DataFrame, path: str) -> None:
    """Write DataFrame to parquet file with safety checks.

    Args:
        df: DataFrame to write
        path: Output file path

    Raises:
        ImportError: If pyarrow is not available

    """
    _require_pyarrow()
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(path, index=False)


def read_parquet_safely(path: str) -> pd.DataFrame:
    """Read parquet file with safety checks.

    Raises:
        ImportError: If pyarrow is not available

    """
    _require_pyarrow()
    return pd.read_parquet(path)
