"""Episode summarization: per-chunk summaries, recap and highlight list."""

import asyncio
import logging
import re
from dataclasses import dataclass, field

from services.gemini import GeminiClient
from services.text_chunker import chunk_text

logger = logging.getLogger(__name__)

CHUNK_SUMMARY_PROMPT = "Summarize this transcript section focusing on comedy highlights."
RECAP_PROMPT = "Write a 2-3 sentence Kill Tony episode recap in Tony and Redban's voice."
HIGHLIGHTS_PROMPT = "List 5 standout comedic moments as bullet points, excluding ads."

_BULLET_PREFIX = re.compile(r"^[\-\*\d\.]+")


@dataclass
class SummaryResult:
    """Output of the summarization stage"""

    combined_summary: str
    episode_summary: str
    highlights: list[str] = field(default_factory=list)


def parse_highlights(text: str) -> list[str]:
    """Strip bullet or number markers from each line and drop blank lines."""
    highlights = []
    for line in text.splitlines():
        cleaned = _BULLET_PREFIX.sub("", line.strip()).strip()
        if cleaned:
            highlights.append(cleaned)
    return highlights


class EpisodeSummarizer:
    """Summarizes a transcript with a fork-join over chunk completions."""

    def __init__(
        self,
        gemini_client: GeminiClient,
        chunk_count: int = 4,
        chunk_max_tokens: int = 300,
        recap_max_tokens: int = 150,
        highlights_max_tokens: int = 200,
    ):
        self.client = gemini_client
        self.chunk_count = chunk_count
        self.chunk_max_tokens = chunk_max_tokens
        self.recap_max_tokens = recap_max_tokens
        self.highlights_max_tokens = highlights_max_tokens

    async def summarize_chunks(self, full_text: str) -> str:
        """Summarize every chunk concurrently and join results in chunk order."""
        chunks = chunk_text(full_text, self.chunk_count)
        logger.info(f"Summarizing {len(chunks)} transcript chunks")

        # gather preserves input order and fails the whole join on any error
        results = await asyncio.gather(
            *(
                self.client.complete(
                    chunk,
                    system_prompt=CHUNK_SUMMARY_PROMPT,
                    max_output_tokens=self.chunk_max_tokens,
                    stage="chunk_summary",
                )
                for chunk in chunks
            )
        )
        return " ".join(result.strip() for result in results)

    async def write_recap(self, combined_summary: str) -> str:
        return await self.client.complete(
            combined_summary,
            system_prompt=RECAP_PROMPT,
            max_output_tokens=self.recap_max_tokens,
            stage="episode_recap",
        )

    async def extract_highlights(self, combined_summary: str) -> list[str]:
        text = await self.client.complete(
            combined_summary,
            system_prompt=HIGHLIGHTS_PROMPT,
            max_output_tokens=self.highlights_max_tokens,
            stage="highlights",
        )
        return parse_highlights(text)

    async def summarize(self, full_text: str) -> SummaryResult:
        combined = await self.summarize_chunks(full_text)
        episode_summary = await self.write_recap(combined)
        highlights = await self.extract_highlights(combined)
        return SummaryResult(
            combined_summary=combined,
            episode_summary=episode_summary,
            highlights=highlights,
        )
