"""Filtering, fuzzy search and ordering for the comedian directory."""

from thefuzz import fuzz

from models.comedian import ComedianProfile

SORT_OPTIONS = ("appearances", "rating", "reviews")
FILTER_OPTIONS = ("all", "golden-ticket", "regulars", "hall-of-fame")


def matches_search(profile: ComedianProfile, query: str, threshold: int) -> bool:
    """Substring match on name or bio, or a fuzzy name match for misspellings."""
    needle = query.strip().lower()
    if not needle:
        return True
    if needle in profile.name.lower() or needle in (profile.bio or "").lower():
        return True
    return fuzz.token_set_ratio(needle, profile.name.lower()) >= threshold


def filter_comedians(
    profiles: list[ComedianProfile],
    category: str = "all",
    query: str | None = None,
    threshold: int = 70,
) -> list[ComedianProfile]:
    if category not in FILTER_OPTIONS:
        raise ValueError(f"Invalid filter: {category}")

    selected = []
    for profile in profiles:
        if category == "golden-ticket" and not profile.golden_ticket:
            continue
        if category == "regulars" and not profile.regular_guest:
            continue
        if category == "hall-of-fame" and not profile.hall_of_fame:
            continue
        if query and not matches_search(profile, query, threshold):
            continue
        selected.append(profile)
    return selected


def sort_comedians(
    profiles: list[ComedianProfile],
    sort_by: str,
    ratings: dict[str, tuple[float | None, int]],
) -> list[ComedianProfile]:
    """Order descending by appearances, average rating or review count."""
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"Invalid sort: {sort_by}")

    if sort_by == "rating":
        return sorted(profiles, key=lambda p: ratings.get(p.key, (None, 0))[0] or 0.0, reverse=True)
    if sort_by == "reviews":
        return sorted(profiles, key=lambda p: ratings.get(p.key, (None, 0))[1], reverse=True)
    return sorted(profiles, key=lambda p: p.total_appearances or 0, reverse=True)
