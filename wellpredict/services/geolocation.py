"""Resolve a caller-supplied position, falling back to a default site."""

import logging

from pydantic import BaseModel

from wellpredict.config import FALLBACK_LATITUDE, FALLBACK_LONGITUDE, FALLBACK_ACCURACY_M

logger = logging.getLogger(__name__)


class GeoLocation(BaseModel):
    latitude: float
    longitude: float
    accuracy_m: float
    is_fallback: bool = False


def fallback_location() -> GeoLocation:
    return GeoLocation(
        latitude=FALLBACK_LATITUDE,
        longitude=FALLBACK_LONGITUDE,
        accuracy_m=FALLBACK_ACCURACY_M,
        is_fallback=True,
    )


def resolve_location(latitude: float | None,
                     longitude: float | None,
                     accuracy_m: float | None = None) -> GeoLocation:
    """Return the given position, or the fallback when it is missing or invalid."""
    if latitude is None or longitude is None:
        return fallback_location()
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        logger.warning("Ignoring out-of-range position (%s, %s)", latitude, longitude)
        return fallback_location()
    return GeoLocation(
        latitude=latitude,
        longitude=longitude,
        accuracy_m=accuracy_m if accuracy_m is not None else 0.0,
    )
