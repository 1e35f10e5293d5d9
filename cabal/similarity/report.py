"""Parser for allpairs similarity reports.

Each report line carries a score, an edit distance, the lengths of both
files and the two file paths, separated by runs of spaces:

      2191     23   5260   5236 a2-anonymous/001/a2.py a2-anonymous/002/a2.py

Paths are turned into names either verbatim or through an id pattern whose
first capture group extracts the identifier (e.g. the student id).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Optional, Union

from cabal.similarity.table import SimilarityTable, SimilarityTableBuilder
from cabal.similarity.types import MAX_STORABLE_SCORE

logger = logging.getLogger(__name__)

REPORT_LINE_REGEX = re.compile(
    r"^ *(?P<score>\d+) +(?P<edit_distance>\d+) +(?P<l_len>\d+) +(?P<r_len>\d+)"
    r" +(?P<l_path>.+) +(?P<r_path>.+)$",
    re.ASCII,
)

IdPattern = Union[str, re.Pattern, None]


class ReportParseError(ValueError):
    """Base class for malformed allpairs reports."""


class InvalidLineError(ReportParseError):
    """A line does not have the allpairs format."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Not a valid allpairs entry: {line!r}")


class ScoreParseError(ReportParseError):
    """A score is missing or does not fit an unsigned 32-bit integer."""

    def __init__(self, score_text: str) -> None:
        self.score_text = score_text
        super().__init__(f"Invalid score in allpairs entry: {score_text!r}")


class IdPatternMismatchError(ReportParseError):
    """The id pattern did not match a path."""

    def __init__(self, path: str, pattern: str) -> None:
        self.path = path
        self.pattern = pattern
        super().__init__(f"Id pattern {pattern!r} did not match path {path!r}")


class IdPatternGroupError(ReportParseError):
    """The id pattern matched a path but captured no identifier."""

    def __init__(self, path: str, pattern: str) -> None:
        self.path = path
        self.pattern = pattern
        super().__init__(f"Id pattern {pattern!r} captured no id from path {path!r}")


class InvalidIdPatternError(ReportParseError):
    """The id pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid id pattern {pattern!r}: {reason}")


def handin_id_pattern(handin_name: str) -> re.Pattern[str]:
    """Pattern extracting ``<id>`` from ``<assignment>/<id>/<handin_name>``."""
    return re.compile(rf"^[^/]+/(.+)/{re.escape(handin_name)}")


def _compile(id_pattern: IdPattern) -> Optional[re.Pattern[str]]:
    if id_pattern is None or isinstance(id_pattern, re.Pattern):
        return id_pattern
    try:
        return re.compile(id_pattern)
    except re.error as e:
        raise InvalidIdPatternError(id_pattern, str(e)) from e


def _parse_score(score_text: str) -> int:
    score = int(score_text)
    if score > MAX_STORABLE_SCORE:
        raise ScoreParseError(score_text)
    return score


def _parse_id(path: str, id_pattern: Optional[re.Pattern[str]]) -> str:
    if id_pattern is None:
        return path
    match = id_pattern.search(path)
    if match is None:
        raise IdPatternMismatchError(path, id_pattern.pattern)
    if id_pattern.groups < 1 or match.group(1) is None:
        raise IdPatternGroupError(path, id_pattern.pattern)
    return match.group(1)


def parse_line(line: str, id_pattern: IdPattern = None) -> tuple[int, str, str]:
    """Parse one report line into a ``(score, left, right)`` triple.

    Raises:
        InvalidLineError: If the line is not an allpairs entry
        ScoreParseError: If the score does not fit in 32 bits
        IdPatternMismatchError: If the id pattern does not match a path
        IdPatternGroupError: If the id pattern has no first capture group
        InvalidIdPatternError: If a string id pattern does not compile

    """
    match = REPORT_LINE_REGEX.match(line)
    if match is None:
        raise InvalidLineError(line)
    pattern = _compile(id_pattern)
    score = _parse_score(match.group("score"))
    left = _parse_id(match.group("l_path"), pattern)
    right = _parse_id(match.group("r_path"), pattern)
    return score, left, right


def parse_report(text: str, id_pattern: IdPattern = None) -> Iterator[tuple[int, str, str]]:
    """Yield ``(score, left, right)`` triples for every line of a report.

    Parsing stops at the first malformed line; nothing is skipped silently.
    """
    pattern = _compile(id_pattern)
    for line in text.splitlines():
        yield parse_line(line, pattern)


def load_report(text: str, id_pattern: IdPattern = None) -> SimilarityTable:
    """Parse a report and freeze it into a SimilarityTable.

    Raises:
        ReportParseError: If any line is malformed
        IncompleteGraphError: If the report does not cover every pair

    """
    builder = SimilarityTableBuilder()
    line_count = 0
    for score, left, right in parse_report(text, id_pattern):
        builder.add(left, right, score)
        line_count += 1

    logger.info(f"Parsed {line_count} report lines covering {len(builder)} names")
    return builder.build().unwrap()


def load_report_file(
    path: Union[str, Path],
    id_pattern: IdPattern = None,
    encoding: str = "utf-8",
) -> SimilarityTable:
    """Read a report file and build its SimilarityTable."""
    report_path = Path(path)
    if not report_path.exists():
        raise FileNotFoundError(f"Report file not found: {report_path}")

    logger.info(f"Loading allpairs report from {report_path}")
    return load_report(report_path.read_text(encoding=encoding), id_pattern)
