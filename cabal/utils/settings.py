"""
Typed access to the analysis settings.

This module resolves the threshold sweep and report options from the
loaded settings dict and validates them.
"""

import logging
from typing import Any, Dict, List, Optional

__all__ = ["get_analysis_settings", "validate_settings"]

KNOWN_FORMATS = ("parquet", "csv")
KNOWN_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_analysis_settings(
    settings: Dict[str, Any],
    max_similarity_percent: Optional[int] = None,
    step_percent: Optional[int] = None,
) -> Dict[str, int]:
    """Resolve the sweep limits in whole percent.

    Precedence order: explicit argument > config > default

    Args:
        settings: Loaded settings dict
        max_similarity_percent: Optional override of the sweep ceiling
        step_percent: Optional override of the sweep step

    Returns:
        Dict with ``max_similarity_percent`` and ``step_percent``

    """
    analysis = settings.get("analysis", {})
    if max_similarity_percent is None:
        max_similarity_percent = analysis.get("max_similarity_percent", 6)
    if step_percent is None:
        step_percent = analysis.get("step_percent", 1)

    return {
        "max_similarity_percent": int(max_similarity_percent),
        "step_percent": int(step_percent),
    }


def validate_settings(settings: Dict[str, Any]) -> List[str]:
    """Returns list of validation warnings.

    Args:
        settings: Settings dict to validate

    Returns:
        List of validation warning messages

    """
    warnings = []
    analysis = settings.get("analysis", {})

    max_percent = analysis.get("max_similarity_percent", 6)
    if not isinstance(max_percent, int) or isinstance(max_percent, bool) or not 0 <= max_percent <= 100:
        warnings.append(f"analysis.max_similarity_percent must be int 0-100, got {max_percent}")

    step_percent = analysis.get("step_percent", 1)
    if not isinstance(step_percent, int) or isinstance(step_percent, bool) or not 1 <= step_percent <= 100:
        warnings.append(f"analysis.step_percent must be int 1-100, got {step_percent}")

    fmt = settings.get("persistence", {}).get("format", "parquet")
    if fmt not in KNOWN_FORMATS:
        warnings.append(f"persistence.format must be one of {KNOWN_FORMATS}, got {fmt}")

    level = settings.get("logging", {}).get("level", "INFO")
    if not isinstance(level, str) or level.upper() not in KNOWN_LEVELS:
        warnings.append(f"logging.level must be one of {KNOWN_LEVELS}, got {level}")

    if warnings:
        logging.getLogger(__name__).debug(f"Settings produced {len(warnings)} warning(s)")

    return warnings
