"""Similarity module for cabal.

This module provides the compact similarity table, its builder, and the
report parsing and persistence around it.
"""

from .persistence import load_table, save_table
from .report import (
    IdPatternGroupError,
    IdPatternMismatchError,
    InvalidIdPatternError,
    InvalidLineError,
    ReportParseError,
    ScoreParseError,
    handin_id_pattern,
    load_report,
    load_report_file,
    parse_report,
)
from .table import (
    BuildResult,
    IncompleteGraphError,
    SimilarityTable,
    SimilarityTableBuilder,
    TableInvariantError,
)
from .types import Edge, format_percent, percent_to_score

__all__ = [
    "BuildResult",
    "Edge",
    "IdPatternGroupError",
    "IdPatternMismatchError",
    "IncompleteGraphError",
    "InvalidIdPatternError",
    "InvalidLineError",
    "ReportParseError",
    "ScoreParseError",
    "SimilarityTable",
    "SimilarityTableBuilder",
    "TableInvariantError",
    "format_percent",
    "handin_id_pattern",
    "load_report",
    "load_report_file",
    "load_table",
    "parse_report",
    "percent_to_score",
    "save_table",
]
