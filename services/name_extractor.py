"""Regex-based comedian name candidate extraction from transcripts."""

import re
from dataclasses import dataclass

from core.utils import seconds_to_timestamp
from services.transcripts import TranscriptEntry

# Two or more consecutive capitalized words
NAME_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")


@dataclass
class NameCandidate:
    """Possible performer name with the first time it was heard"""

    name: str
    start_time: str


def extract_name_candidates(full_text: str) -> list[str]:
    """Unique capitalized multi-word runs, in order of first occurrence."""
    return list(dict.fromkeys(match.group(0) for match in NAME_PATTERN.finditer(full_text)))


def match_candidate_timestamps(
    candidates: list[str], transcript: list[TranscriptEntry]
) -> list[NameCandidate]:
    """
    Pair each candidate with the start of the first segment containing it.

    Names that span two segments never match a single segment and are dropped.
    """
    matched = []
    for name in candidates:
        segment = next((entry for entry in transcript if name in entry.text), None)
        if segment is None:
            continue
        matched.append(NameCandidate(name=name, start_time=seconds_to_timestamp(segment.start)))
    return matched
