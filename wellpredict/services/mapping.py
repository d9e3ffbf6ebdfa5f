"""Map marker bookkeeping for candidate drilling sites."""

import itertools
import logging

import numpy as np
from pydantic import BaseModel

from wellpredict.config import EARTH_RADIUS_KM
from wellpredict.services.geolocation import GeoLocation

logger = logging.getLogger(__name__)


class Marker(BaseModel):
    id: int
    latitude: float
    longitude: float
    type: str = "potential_site"
    title: str
    description: str = "Potential drilling location"


def haversine_km(lat1, lon1, lat2, lon2):
    """Great-circle distance in km. Works on scalars or numpy arrays."""
    lat1, lon1, lat2, lon2 = map(np.radians, (lat1, lon1, lat2, lon2))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


class MarkerBoard:

    def __init__(self):
        self._markers: list[Marker] = []
        self._ids = itertools.count(1)

    @property
    def markers(self) -> list[Marker]:
        return list(self._markers)

    def add(self, latitude: float, longitude: float) -> Marker:
        marker = Marker(
            id=next(self._ids),
            latitude=latitude,
            longitude=longitude,
            title=f"Site {len(self._markers) + 1}",
        )
        self._markers.append(marker)
        logger.info("Added marker %s at (%.5f, %.5f)", marker.title, latitude, longitude)
        return marker

    def remove(self, marker_id: int) -> bool:
        before = len(self._markers)
        self._markers = [m for m in self._markers if m.id != marker_id]
        return len(self._markers) < before

    def clear(self) -> None:
        self._markers.clear()

    def distances_from(self, origin: GeoLocation) -> dict[int, float]:
        """Distance in km (2 dp) from ``origin`` to every marker, keyed by marker id."""
        if not self._markers:
            return {}
        lats = np.array([m.latitude for m in self._markers])
        lons = np.array([m.longitude for m in self._markers])
        dists = haversine_km(origin.latitude, origin.longitude, lats, lons)
        return {m.id: round(float(d), 2) for m, d in zip(self._markers, dists)}
