from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from safetrade.services.geocoding import (
    MIN_QUERY_LENGTH,
    GeocodeResult,
    Geocoder,
    GeocodingError,
    get_geocoder,
)

router = APIRouter(prefix="/nominatim", tags=["Geocoding"])


@router.get("/search")
def search_addresses(
    q: str = Query(..., description="Free-text address"),
    geocoder: Geocoder = Depends(get_geocoder),
) -> List[dict]:
    """Address suggestions for the address autocomplete."""
    if len(q.strip()) < MIN_QUERY_LENGTH:
        raise HTTPException(status_code=400, detail="Query must be at least 5 characters")
    try:
        results: List[GeocodeResult] = geocoder.search(q, limit=5)
    except GeocodingError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return [
        {
            "address": r.address,
            "latitude": r.latitude,
            "longitude": r.longitude,
            "type": r.type,
            "importance": r.importance,
        }
        for r in results
    ]
