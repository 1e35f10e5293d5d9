"""Utility modules for the cabal analysis.
"""

from .io_utils import (
    load_settings,
    read_csv_typed,
    read_parquet_safely,
    reload_settings,
    write_csv_safely,
    write_parquet_safely,
)
from .logging_utils import get_logger, setup_logging
from .path_utils import get_config_path, get_project_root
from .settings import get_analysis_settings, validate_settings

__all__ = [
    # Logging utilities
    "setup_logging",
    "get_logger",
    # Path utilities
    "get_project_root",
    "get_config_path",
    # I/O utilities
    "load_settings",
    "reload_settings",
    "read_csv_typed",
    "write_csv_safely",
    "read_parquet_safely",
    "write_parquet_safely",
    # Settings
    "get_analysis_settings",
    "validate_settings",
]
