"""
Nominatim geocoding client.

Used by registration, moderator creation and product create/update to turn
a free-text address into coordinates. Callers treat ``GeocodingError`` as
non-fatal and keep the raw address.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

import httpx

from safetrade.config import settings

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 5
LOW_CONFIDENCE_IMPORTANCE = 0.3


class GeocodingError(Exception):
    pass


@dataclass(frozen=True)
class GeocodeResult:
    address: str
    latitude: float
    longitude: float
    type: Optional[str]
    importance: float

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "GeocodeResult":
        return cls(
            address=item["display_name"],
            latitude=float(item["lat"]),
            longitude=float(item["lon"]),
            type=item.get("type"),
            importance=float(item.get("importance") or 0.0),
        )


class Geocoder:
    def __init__(
        self,
        *,
        base_url: str,
        country_codes: str,
        user_agent: str,
        timeout: float,
        cache_ttl: int,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.country_codes = country_codes
        self.cache_ttl = cache_ttl
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"User-Agent": user_agent},
            timeout=timeout,
            transport=transport,
        )
        self._cache: Dict[str, Tuple[float, List[GeocodeResult]]] = {}

    @classmethod
    def from_settings(cls, transport: Optional[httpx.BaseTransport] = None) -> "Geocoder":
        return cls(
            base_url=settings.NOMINATIM_BASE_URL,
            country_codes=settings.NOMINATIM_COUNTRY_CODES,
            user_agent=settings.NOMINATIM_USER_AGENT,
            timeout=settings.NOMINATIM_TIMEOUT_SECONDS,
            cache_ttl=settings.GEOCODE_CACHE_TTL_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def clear_cache(self) -> None:
        self._cache.clear()

    def _validate(self, query: str) -> str:
        query = (query or "").strip()
        if not query:
            raise GeocodingError("Address cannot be empty")
        if len(query) < MIN_QUERY_LENGTH:
            raise GeocodingError("Address is too short. Provide more details.")
        return query

    def _lookup(self, query: str, limit: int) -> List[GeocodeResult]:
        cache_key = f"{query}:{limit}"
        cached = self._cache.get(cache_key)
        if cached and time.monotonic() - cached[0] < self.cache_ttl:
            logger.debug("Geocode cache hit for %r", query)
            return cached[1]

        params = {"format": "json", "q": query, "limit": limit}
        if self.country_codes:
            params["countrycodes"] = self.country_codes

        try:
            response = self._client.get("/search", params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Geocoding request failed for %r: %s", query, exc)
            raise GeocodingError("Failed to geocode address. Try again later.") from exc

        results = [GeocodeResult.from_payload(item) for item in payload or []]
        self._cache[cache_key] = (time.monotonic(), results)
        return results

    def geocode(self, address: str) -> GeocodeResult:
        query = self._validate(address)
        results = self._lookup(query, 1)
        if not results:
            logger.warning("No geocoding results for %r", query)
            raise GeocodingError(
                "Address not found. Please check the spelling or try a different location."
            )
        best = results[0]
        if best.importance < LOW_CONFIDENCE_IMPORTANCE:
            logger.warning("Low confidence match for %r (importance=%s)", query, best.importance)
        return best

    def search(self, query: str, limit: int = 5) -> List[GeocodeResult]:
        return self._lookup(self._validate(query), limit)


def resolve_location(
    geocoder: Optional[Geocoder],
    *,
    address: Optional[str],
    latitude: Optional[float],
    longitude: Optional[float],
    address_type: Optional[str] = None,
) -> Tuple[Optional[str], Optional[float], Optional[float], Optional[str]]:
    """
    Coordinates supplied by the client win; otherwise geocode the address.

    A geocoding failure keeps the raw address without coordinates.
    """
    if latitude is not None and longitude is not None:
        return address, latitude, longitude, address_type
    if not address or geocoder is None:
        return address, None, None, address_type
    try:
        match = geocoder.geocode(address)
    except GeocodingError as exc:
        logger.warning("Failed to geocode address %r: %s", address, exc)
        return address, None, None, address_type
    return match.address, match.latitude, match.longitude, match.type


@lru_cache
def get_geocoder() -> Geocoder:
    """FastAPI dependency returning the shared Nominatim client."""
    return Geocoder.from_settings()
