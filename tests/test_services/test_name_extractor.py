"""Tests for regex name candidate extraction."""

from services.name_extractor import (
    NameCandidate,
    extract_name_candidates,
    match_candidate_timestamps,
)
from services.transcripts import TranscriptEntry


class TestExtractNameCandidates:
    """Capitalized multi-word runs."""

    def test_extracts_multiword_capitalized_names(self):
        text = "Please welcome Hans Kim to the stage. Next up is David Lucas."

        assert extract_name_candidates(text) == ["Hans Kim", "David Lucas"]

    def test_name_at_start_of_sentence(self):
        assert extract_name_candidates("Tony Hinchcliffe said hello") == ["Tony Hinchcliffe"]

    def test_deduplicates_in_first_seen_order(self):
        text = "Kam Patterson killed it, then Hans Kim. Kam Patterson again."

        assert extract_name_candidates(text) == ["Kam Patterson", "Hans Kim"]

    def test_single_capitalized_words_ignored(self):
        """One capitalized word is not a candidate."""
        assert extract_name_candidates("Tony laughed and Redban hit the sound.") == []

    def test_non_name_phrases_are_candidates(self):
        """Locations and brands match too; the validator filters them later."""
        assert "Comedy Mothership" in extract_name_candidates("Live at the Comedy Mothership tonight")


class TestMatchCandidateTimestamps:
    """Pairing candidates with their first transcript segment."""

    def test_uses_first_segment_containing_name(self):
        transcript = [
            TranscriptEntry(text="Welcome everybody", start=0.0),
            TranscriptEntry(text="give it up for Hans Kim", start=65.4),
            TranscriptEntry(text="Hans Kim everybody", start=400.0),
        ]

        matched = match_candidate_timestamps(["Hans Kim"], transcript)

        assert matched == [NameCandidate(name="Hans Kim", start_time="01:05")]

    def test_hour_offsets_include_hours(self):
        transcript = [TranscriptEntry(text="here comes William Montgomery", start=3725.0)]

        matched = match_candidate_timestamps(["William Montgomery"], transcript)

        assert matched[0].start_time == "01:02:05"

    def test_name_split_across_segments_is_dropped(self):
        """A name spanning two segments matches neither."""
        transcript = [
            TranscriptEntry(text="please welcome Hans", start=10.0),
            TranscriptEntry(text="Kim to the stage", start=12.0),
        ]

        assert match_candidate_timestamps(["Hans Kim"], transcript) == []
