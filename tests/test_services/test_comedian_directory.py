"""Tests for comedian directory filtering and ordering."""

import pytest

from models.comedian import ComedianProfile
from services.comedian_directory import filter_comedians, matches_search, sort_comedians


def _profile(key: str, name: str, appearances: int = 1, **flags) -> ComedianProfile:
    return ComedianProfile(
        key=key,
        name=name,
        bio=flags.pop("bio", None),
        total_appearances=appearances,
        golden_ticket=flags.get("golden_ticket", False),
        regular_guest=flags.get("regular_guest", False),
        hall_of_fame=flags.get("hall_of_fame", False),
    )


PROFILES = [
    _profile("hans-kim", "Hans Kim", 40, regular_guest=True),
    _profile("david-lucas", "David Lucas", 55, regular_guest=True, golden_ticket=True),
    _profile("william-montgomery", "William Montgomery", 90, hall_of_fame=True, bio="Former regular"),
]


class TestMatchesSearch:
    def test_substring_match(self):
        assert matches_search(PROFILES[0], "kim", threshold=70)

    def test_bio_match(self):
        assert matches_search(PROFILES[2], "former", threshold=70)

    def test_fuzzy_match_tolerates_typos(self):
        assert matches_search(PROFILES[2], "wiliam montgomry", threshold=70)

    def test_unrelated_query(self):
        assert not matches_search(PROFILES[0], "zzzz", threshold=70)


class TestFilterComedians:
    @pytest.mark.parametrize(
        ("category", "keys"),
        [
            ("all", ["hans-kim", "david-lucas", "william-montgomery"]),
            ("regulars", ["hans-kim", "david-lucas"]),
            ("golden-ticket", ["david-lucas"]),
            ("hall-of-fame", ["william-montgomery"]),
        ],
    )
    def test_categories(self, category, keys):
        assert [p.key for p in filter_comedians(PROFILES, category)] == keys

    def test_category_and_search_combine(self):
        selected = filter_comedians(PROFILES, "regulars", query="david")

        assert [p.key for p in selected] == ["david-lucas"]

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            filter_comedians(PROFILES, "headliners")


class TestSortComedians:
    def test_by_appearances(self):
        ordered = sort_comedians(PROFILES, "appearances", {})

        assert [p.key for p in ordered] == ["william-montgomery", "david-lucas", "hans-kim"]

    def test_by_rating_and_reviews(self):
        ratings = {"hans-kim": (4.5, 2), "david-lucas": (3.0, 10)}

        assert sort_comedians(PROFILES, "rating", ratings)[0].key == "hans-kim"
        assert sort_comedians(PROFILES, "reviews", ratings)[0].key == "david-lucas"

    def test_unknown_sort(self):
        with pytest.raises(ValueError):
            sort_comedians(PROFILES, "name", {})
