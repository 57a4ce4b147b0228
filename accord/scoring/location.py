"""Location sub-score: distance bands, global search and preferred cities."""

from __future__ import annotations

import math

from accord.schema.profile import Preferences, Profile

EARTH_RADIUS_MILES = 3959
UNKNOWN_DISTANCE_MILES = 999_999

# (exclusive upper bound in miles, points)
DISTANCE_BANDS: tuple[tuple[int, int], ...] = (
    (10, 100),
    (25, 95),
    (50, 85),
    (100, 70),
    (200, 55),
    (500, 40),
)


def haversine_miles(
    lat1: float | None, lon1: float | None, lat2: float | None, lon2: float | None
) -> int:
    """Great-circle distance rounded to whole miles; unknown coordinates are very far."""
    if lat1 is None or lon1 is None or lat2 is None or lon2 is None:
        return UNKNOWN_DISTANCE_MILES
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_MILES * c)


def profile_distance(profile_a: Profile, profile_b: Profile) -> int:
    return haversine_miles(profile_a.latitude, profile_a.longitude, profile_b.latitude, profile_b.longitude)


def _city_matches(profile: Profile, preferred_cities: list[str]) -> bool:
    """Case-insensitive substring match against the city or "City, State".

    "Austin" ~ "Austin, TX" in either direction, and "TX" or "austin, tx"
    match a profile in Austin with state TX.
    """
    if not profile.location_city:
        return False
    city = profile.location_city.casefold()
    city_state = f"{city}, {(profile.location_state or '').casefold()}"
    for preferred in preferred_cities:
        candidate = preferred.casefold()
        if city in candidate or candidate in city_state:
            return True
    return False


def location_score(profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences) -> float:
    distance = profile_distance(profile_a, profile_b)
    relocators = int(prefs_a.willing_to_relocate) + int(prefs_b.willing_to_relocate)

    if prefs_a.search_globally and prefs_b.search_globally:
        if distance < 50:
            return 95
        if distance < 500:
            return 85
        if relocators == 2:
            return 80
        if relocators == 1:
            return 70
        return 60

    if prefs_a.search_globally or prefs_b.search_globally:
        return 75 if relocators else 65

    a_wants_b = _city_matches(profile_b, prefs_a.preferred_cities)
    b_wants_a = _city_matches(profile_a, prefs_b.preferred_cities)
    if a_wants_b and b_wants_a:
        return 100
    if a_wants_b or b_wants_a:
        return 90

    if distance > prefs_a.max_distance_miles and distance > prefs_b.max_distance_miles and not relocators:
        return 0

    for upper_bound, points in DISTANCE_BANDS:
        if distance < upper_bound:
            return points

    if relocators == 2:
        return 35
    if relocators == 1:
        return 25
    return 15
