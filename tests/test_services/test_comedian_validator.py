"""Tests for LLM comedian validation."""

import json

import pytest

from core.exceptions import UpstreamServiceError
from services.comedian_validator import ComedianValidator, ComicInfo
from services.name_extractor import NameCandidate


class DummyGemini:
    """Stub JSON completion client returning queued responses per batch."""

    def __init__(self, responses: list) -> None:
        self.responses = list(responses)
        self.prompts: list[str] = []
        self.kwargs: list[dict] = []

    async def complete_json(self, user_prompt, **kwargs):  # type: ignore[no-untyped-def]
        self.prompts.append(user_prompt)
        self.kwargs.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _candidates(count: int) -> list[NameCandidate]:
    return [NameCandidate(name=f"Name{i} Person", start_time=f"{i:02d}:00") for i in range(count)]


class TestComedianValidator:
    """Batching, normalization and ordering."""

    async def test_batches_of_ten(self):
        """25 candidates make three sequential calls of 10, 10 and 5."""
        client = DummyGemini([{"comedians": []}] * 3)
        validator = ComedianValidator(client)

        await validator.validate(_candidates(25))

        assert len(client.prompts) == 3
        assert client.prompts[0].count(" — ") == 10
        assert client.prompts[1].count(" — ") == 10
        assert client.prompts[2].count(" — ") == 5
        assert client.kwargs[0]["temperature"] == 0.3
        assert client.kwargs[0]["max_output_tokens"] == 500
        assert client.kwargs[0]["stage"] == "comedian_validation"

    async def test_prompt_lists_name_and_time(self):
        client = DummyGemini([{"comedians": []}])
        validator = ComedianValidator(client)

        await validator.validate([NameCandidate(name="Hans Kim", start_time="12:30")])

        assert "Hans Kim — 12:30" in client.prompts[0]

    async def test_timestamps_normalized_and_sorted(self):
        client = DummyGemini(
            [
                {
                    "comedians": [
                        {"name": "Late Comic", "timestamp": "1:05:00"},
                        {"name": "Early Comic", "timestamp": "9:5"},
                    ]
                }
            ]
        )
        validator = ComedianValidator(client)

        comics = await validator.validate(_candidates(2))

        assert comics == [
            ComicInfo(name="Early Comic", start_time="09:05"),
            ComicInfo(name="Late Comic", start_time="01:05:00"),
        ]

    async def test_invalid_timestamp_kept_raw_and_sorted_last(self):
        client = DummyGemini(
            [
                {
                    "comedians": [
                        {"name": "Odd Comic", "timestamp": "99:99"},
                        {"name": "Fine Comic", "timestamp": "45:00"},
                    ]
                }
            ]
        )
        validator = ComedianValidator(client)

        comics = await validator.validate(_candidates(2))

        assert [comic.name for comic in comics] == ["Fine Comic", "Odd Comic"]
        assert comics[1].start_time == "99:99"

    async def test_malformed_batch_dropped_others_kept(self):
        """A bad JSON batch is skipped without failing the rest."""
        client = DummyGemini(
            [
                json.JSONDecodeError("Expecting value", "not json", 0),
                {"comedians": [{"name": "Kept Comic", "timestamp": "30:00"}]},
            ]
        )
        validator = ComedianValidator(client)

        comics = await validator.validate(_candidates(15))

        assert comics == [ComicInfo(name="Kept Comic", start_time="30:00")]

    async def test_missing_comedians_key_drops_batch(self):
        client = DummyGemini([{"names": ["Hans Kim"]}])
        validator = ComedianValidator(client)

        assert await validator.validate(_candidates(3)) == []

    async def test_entries_without_name_skipped(self):
        client = DummyGemini(
            [{"comedians": [{"name": "", "timestamp": "01:00"}, "junk", {"name": "Real Comic", "timestamp": "02:00"}]}]
        )
        validator = ComedianValidator(client)

        comics = await validator.validate(_candidates(3))

        assert [comic.name for comic in comics] == ["Real Comic"]

    async def test_api_failure_propagates(self):
        client = DummyGemini([UpstreamServiceError("completion", "unavailable")])
        validator = ComedianValidator(client)

        with pytest.raises(UpstreamServiceError):
            await validator.validate(_candidates(1))

    async def test_no_candidates_no_calls(self):
        client = DummyGemini([])
        validator = ComedianValidator(client)

        assert await validator.validate([]) == []
        assert client.prompts == []
