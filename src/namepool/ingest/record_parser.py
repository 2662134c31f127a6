"""
Tolerant parser for participation record lines.

A line looks like ``field0,field1,field2,...,participation`` where the
participation field is ``seg1/seg2/...`` and every segment is
``matchId:schoolId:score:rank:regionId[:extra]``. Column positions vary
between exports, so names and scores are looked up over several fields.
"""

import logging
import math
import re
from functools import partial
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Field lookup orders; the first field that yields a value wins
NAME_FIELD_ORDER = (2, 1)
SCORE_FIELD_ORDER = (5, 4, 6, 3)

_INT_PREFIX = re.compile(r"^\s*([+-]?[0-9]+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


class ParticipationFact(BaseModel):
    """One decoded (match, region) pair from a participation segment."""
    match_id: int = Field(description="Contest/match identifier")
    region_id: Optional[int] = Field(default=None, description="Region index, if present and numeric")


class CandidateRow(BaseModel):
    """A parsed line: raw fields plus everything extracted from them."""
    parts: List[str] = Field(description="Trimmed comma-separated fields")
    facts: List[ParticipationFact] = Field(default_factory=list)
    name: Optional[str] = Field(default=None, description="Preferred non-empty name field")
    score: Optional[float] = Field(default=None, description="First parseable score field")


def parse_int_prefix(text: Optional[str]) -> Optional[int]:
    """Parse leading integer digits, ignoring trailing characters ("12abc" -> 12)."""
    if not text:
        return None
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None


def parse_float_prefix(text: Optional[str]) -> Optional[float]:
    """Parse a leading decimal number, ignoring trailing characters ("88.5pts" -> 88.5)."""
    if not text:
        return None
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def split_lines(raw: str) -> List[str]:
    """Split text on LF/CRLF, trim every line and drop blank ones."""
    lines = (line.strip() for line in re.split(r"\r?\n", str(raw)))
    return [line for line in lines if line]


def _parse_segment(segment: str) -> Optional[ParticipationFact]:
    tokens = segment.split(":")
    match_id = parse_int_prefix(tokens[0])
    if match_id is None:
        return None
    region_id = parse_int_prefix(tokens[4]) if len(tokens) > 4 else None
    return ParticipationFact(match_id=match_id, region_id=region_id)


def parse_participation_field(text: Optional[str]) -> List[ParticipationFact]:
    """
    Decode a slash-delimited participation field.

    Segments whose match id does not parse are dropped; the region id may
    stay None for an otherwise valid segment.
    """
    if not text or not isinstance(text, str):
        return []
    facts = (_parse_segment(segment) for segment in text.split("/"))
    return [fact for fact in facts if fact is not None]


def _name_at(index: int, parts: Sequence[str]) -> Optional[str]:
    if index < len(parts) and parts[index]:
        return parts[index]
    return None


def _score_at(index: int, parts: Sequence[str]) -> Optional[float]:
    if index < len(parts):
        return parse_float_prefix(parts[index])
    return None


def _first_success(extractors, parts):
    for extract in extractors:
        value = extract(parts)
        if value is not None:
            return value
    return None


class RecordParser:
    """
    Turns one raw line into a CandidateRow.

    Name and score are found by running an ordered list of field
    extractors and keeping the first non-None result. The default lookup
    orders are NAME_FIELD_ORDER and SCORE_FIELD_ORDER.
    """

    def __init__(self, name_fields: Sequence[int] = NAME_FIELD_ORDER,
                 score_fields: Sequence[int] = SCORE_FIELD_ORDER):
        self.name_extractors: List[Callable[[Sequence[str]], Optional[str]]] = [
            partial(_name_at, index) for index in name_fields
        ]
        self.score_extractors: List[Callable[[Sequence[str]], Optional[float]]] = [
            partial(_score_at, index) for index in score_fields
        ]

    def parse_line(self, line: str) -> Optional[CandidateRow]:
        """
        Parse a trimmed, non-empty line.

        Returns:
            CandidateRow, or None when the line carries no participation facts
        """
        parts = [part.strip() for part in line.split(",")]
        facts = parse_participation_field(parts[-1])
        if not facts:
            return None
        return CandidateRow(
            parts=parts,
            facts=facts,
            name=_first_success(self.name_extractors, parts),
            score=_first_success(self.score_extractors, parts),
        )

    def parse_lines(self, lines: Sequence[str]) -> List[CandidateRow]:
        rows = []
        for line in lines:
            row = self.parse_line(line)
            if row is not None:
                rows.append(row)
        logger.debug(f"Parsed {len(rows)} rows with participation facts from {len(lines)} lines")
        return rows
