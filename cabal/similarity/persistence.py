"""Save and load SimilarityTables between runs.

Tables are stored as their edge set (left, right, score), which is all
that table equality depends on. Loading goes back through the builder so
a file that does not describe a complete graph is rejected.
"""

import logging
from pathlib import Path
from typing import Union

from cabal.similarity.table import SimilarityTable
from cabal.utils.io_utils import (
    read_csv_typed,
    read_parquet_safely,
    write_csv_safely,
    write_parquet_safely,
)

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".parquet": "parquet", ".csv": "csv"}

_CSV_DTYPES = {"left": "string", "right": "string", "score": "int64"}


def table_format(path: Union[str, Path]) -> str:
    """Return the storage format implied by a file suffix.

    Raises:
        ValueError: If the suffix is not supported

    """
    suffix = Path(path).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported table file suffix {suffix!r}; expected one of {sorted(SUPPORTED_SUFFIXES)}"
        )
    return SUPPORTED_SUFFIXES[suffix]


def save_table(table: SimilarityTable, path: Union[str, Path]) -> None:
    """Write a table's edges to ``path`` (.parquet or .csv)."""
    fmt = table_format(path)
    df = table.to_frame()

    if fmt == "parquet":
        write_parquet_safely(df, str(path))
    else:
        write_csv_safely(df, str(path))

    logger.info(f"Saved similarity table ({len(table)} names, {table.edge_count} edges) to {path}")


def load_table(path: Union[str, Path]) -> SimilarityTable:
    """Read a table written by save_table.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the suffix is unsupported or columns are missing
        IncompleteGraphError: If the stored edges are not a complete graph

    """
    fmt = table_format(path)
    table_path = Path(path)
    if not table_path.exists():
        raise FileNotFoundError(f"Table file not found: {table_path}")

    if fmt == "parquet":
        df = read_parquet_safely(str(table_path))
    else:
        df = read_csv_typed(table_path, dtype=_CSV_DTYPES)

    table = SimilarityTable.from_frame(df)
    logger.info(f"Loaded similarity table ({len(table)} names, {table.edge_count} edges) from {path}")
    return table
