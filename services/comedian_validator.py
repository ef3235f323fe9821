"""LLM validation of name candidates down to on-stage comedians."""

import json
import logging
import math
from dataclasses import dataclass, field

from core.exceptions import UpstreamServiceError
from core.utils import timestamp_to_seconds, validate_and_normalize_timestamp
from services.gemini import GeminiClient
from services.name_extractor import NameCandidate

logger = logging.getLogger(__name__)

VALIDATION_PROMPT = """From this list of potential comedian names and timestamps from a Kill Tony transcript, return ONLY actual comedians that went on stage. Exclude locations, brands, shoutouts, or random words. Famous guests are okay if they performed.

Important: Timestamps may be MM:SS or HH:MM:SS.

Return JSON like:
{{
  "comedians": [
    {{"name": "Comedian Name", "timestamp": "HH:MM:SS"}}
  ]
}}

Names with timestamps:
{candidates}"""


@dataclass
class ComicInfo:
    """Confirmed comedian with start time; tags are curated later by an admin"""

    name: str
    start_time: str
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "start_time": self.start_time, "tags": list(self.tags)}


def _sort_key(comic: ComicInfo) -> float:
    try:
        return float(timestamp_to_seconds(comic.start_time))
    except ValueError:
        return math.inf


class ComedianValidator:
    """Filters candidates in fixed-size batches, one completion per batch."""

    def __init__(
        self,
        gemini_client: GeminiClient,
        batch_size: int = 10,
        temperature: float = 0.3,
        max_output_tokens: int = 500,
    ):
        self.client = gemini_client
        self.batch_size = batch_size
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    def _build_prompt(self, batch: list[NameCandidate]) -> str:
        lines = "\n".join(f"{candidate.name} — {candidate.start_time}" for candidate in batch)
        return VALIDATION_PROMPT.format(candidates=lines)

    def _parse_batch(self, payload: dict) -> list[ComicInfo]:
        comedians = payload.get("comedians") if isinstance(payload, dict) else None
        if not isinstance(comedians, list):
            raise ValueError("response has no 'comedians' array")

        comics = []
        for entry in comedians:
            if not isinstance(entry, dict):
                continue
            name = str(entry.get("name") or "").strip()
            timestamp = str(entry.get("timestamp") or "").strip()
            if not name:
                continue
            result = validate_and_normalize_timestamp(timestamp)
            comics.append(ComicInfo(name=name, start_time=result.normalized or timestamp))
        return comics

    async def validate(self, candidates: list[NameCandidate]) -> list[ComicInfo]:
        """
        Confirm comedians from candidates, sorted by start time.

        Batches run sequentially. A batch whose response is not JSON or lacks
        the comedians array is logged and skipped; completion API failures
        propagate.
        """
        confirmed: list[ComicInfo] = []
        for start in range(0, len(candidates), self.batch_size):
            batch = candidates[start : start + self.batch_size]
            batch_number = start // self.batch_size + 1
            try:
                payload = await self.client.complete_json(
                    self._build_prompt(batch),
                    max_output_tokens=self.max_output_tokens,
                    temperature=self.temperature,
                    stage="comedian_validation",
                )
                comics = self._parse_batch(payload)
            except UpstreamServiceError:
                raise
            except (json.JSONDecodeError, ValueError) as e:
                logger.warning(f"Validation batch {batch_number} dropped: {e}")
                continue

            logger.info(f"Validation batch {batch_number}: {len(comics)}/{len(batch)} confirmed")
            confirmed.extend(comics)

        return sorted(confirmed, key=_sort_key)
