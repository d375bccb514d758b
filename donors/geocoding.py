"""
Postal code geocoding for donors without coordinates.

Lookups go through Nominatim one at a time with a fixed delay between calls,
and every answer (found or not) is cached for the life of the resolver.
"""
import logging

from django.conf import settings
from geopy.exc import GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from algorithms.haversine import GeoPoint

logger = logging.getLogger(__name__)


class PostalCodeResolver:
    """
    Resolve postal codes to GeoPoints.

    `geocoder` is anything with a geopy style `geocode(query, **kwargs)`
    method; by default a Nominatim client built from settings.
    """

    def __init__(self, geocoder=None, country=None, min_delay_seconds=None, timeout=None):
        if geocoder is None:
            geocoder = Nominatim(
                user_agent=settings.GEOCODER_USER_AGENT,
                timeout=timeout if timeout is not None else settings.GEOCODER_TIMEOUT,
            )
        if min_delay_seconds is None:
            min_delay_seconds = settings.GEOCODER_MIN_DELAY_SECONDS

        self.country = country if country is not None else settings.GEOCODER_COUNTRY
        self._geocode = RateLimiter(
            geocoder.geocode,
            min_delay_seconds=min_delay_seconds,
            max_retries=0,
            swallow_exceptions=False,
        )
        self._cache = {}

    def is_cached(self, postal_code) -> bool:
        return postal_code in self._cache

    def resolve(self, postal_code):
        """
        Look up one postal code.

        Returns:
            GeoPoint, or None when the code is unknown or the lookup failed
        """
        postal_code = (postal_code or '').strip()
        if not postal_code:
            return None
        if postal_code in self._cache:
            return self._cache[postal_code]

        query = {'postalcode': postal_code, 'country': self.country}
        try:
            location = self._geocode(query, exactly_one=True)
        except GeopyError as e:
            # Not cached, so a later call may retry
            logger.warning(f"Failed to geocode postal code {postal_code}: {e}")
            return None

        point = None
        if location is not None:
            point = GeoPoint(latitude=float(location.latitude), longitude=float(location.longitude))
        else:
            logger.info(f"No location found for postal code {postal_code}")

        self._cache[postal_code] = point
        return point

    def resolve_many(self, postal_codes, limit=None):
        """
        Resolve several postal codes in sequence.

        Codes are deduplicated in first-seen order. `limit` caps how many
        uncached codes are sent to the geocoder in this call. A failed code
        is skipped and does not stop the others.

        Returns:
            Dict postal code -> GeoPoint for the codes that resolved
        """
        resolved = {}
        looked_up = 0
        seen = set()
        for code in postal_codes:
            code = (code or '').strip()
            if not code or code in seen:
                continue
            seen.add(code)

            if code not in self._cache:
                if limit is not None and looked_up >= limit:
                    continue
                looked_up += 1

            point = self.resolve(code)
            if point is not None:
                resolved[code] = point

        logger.info(f"Resolved {len(resolved)} of {len(seen)} postal codes ({looked_up} lookups)")
        return resolved


_default_resolver = None


def get_resolver():
    """Process-wide resolver so the cache survives between requests"""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = PostalCodeResolver()
    return _default_resolver
