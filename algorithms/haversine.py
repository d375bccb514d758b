"""
Haversine Algorithm - Calculate distance between two geographical points
Used to rank donors nearest to a person requesting blood
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

# Radius of earth in kilometers
EARTH_RADIUS_KM = 6371

NEARBY_DONOR_LIMIT = 20


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Candidate:
    id: object
    blood_group: str
    location: Optional[GeoPoint]
    name: str = ''
    distance_km: Optional[float] = None


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate straight-line distance between two points.
    Note: This is "as the crow flies" distance, not road distance.

    Args:
        lat1, lon1: Latitude and longitude of point 1 (reference)
        lat2, lon2: Latitude and longitude of point 2 (donor)

    Returns:
        Distance in kilometers
    """
    # Convert decimal degrees to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push a just outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def _is_coordinate(value):
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def has_valid_location(candidate) -> bool:
    location = candidate.location
    if location is None:
        return False
    return _is_coordinate(location.latitude) and _is_coordinate(location.longitude)


def rank_nearby(reference, candidates, limit=NEARBY_DONOR_LIMIT, max_distance_km=None):
    """
    Rank candidates by distance from a reference point

    Candidates without a usable location are dropped before ranking, so they
    never take up a slot in the limit. Equal distances keep input order.

    Args:
        reference: GeoPoint to measure from
        candidates: Iterable of Candidate
        limit: Maximum number of results (None for all)
        max_distance_km: Optional radius; farther candidates are dropped

    Returns:
        List of Candidate copies with distance_km set, closest first
    """
    if limit is not None and limit <= 0:
        return []

    ranked = []
    for candidate in candidates:
        if not has_valid_location(candidate):
            continue
        distance = haversine_distance(
            reference.latitude,
            reference.longitude,
            candidate.location.latitude,
            candidate.location.longitude,
        )
        if max_distance_km is not None and distance > max_distance_km:
            continue
        ranked.append(replace(candidate, distance_km=distance))

    # Sort by distance (closest first); sorted() is stable
    ranked = sorted(ranked, key=lambda c: c.distance_km)

    if limit is None:
        return ranked
    return ranked[:limit]
