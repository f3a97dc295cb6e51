# app/utils/geo.py
from dataclasses import dataclass
from typing import Sequence

import numpy as np

UNRESOLVED_CITY = "לא זוהה"

@dataclass(frozen=True)
class CityAnchor:
    name: str
    lat: float
    lng: float
    radius: float  # degrees

# Order is priority: overlapping radii resolve to the earlier entry.
CITY_ANCHORS: tuple[CityAnchor, ...] = (
    CityAnchor("תל אביב", 32.0853, 34.7818, 0.1),
    CityAnchor("חיפה", 32.7940, 34.9896, 0.15),
    CityAnchor("ירושלים", 31.7683, 35.2137, 0.2),
    CityAnchor("ראשון לציון", 31.9730, 34.8066, 0.08),
    CityAnchor("פתח תקווה", 32.0878, 34.8878, 0.08),
    CityAnchor("נתניה", 32.3215, 34.8532, 0.1),
    CityAnchor("באר שבע", 31.2518, 34.7915, 0.15),
    CityAnchor("חולון", 32.0117, 34.7750, 0.06),
    CityAnchor("בני ברק", 32.0809, 34.8338, 0.05),
)

class AnchorTable:
    """Immutable lat/lng/radius arrays over a CityAnchor sequence."""

    def __init__(self, anchors: Sequence[CityAnchor] = CITY_ANCHORS):
        self.anchors = tuple(anchors)
        self._coords = np.array([(a.lat, a.lng) for a in self.anchors], dtype=float).reshape(-1, 2)
        self._radii = np.array([a.radius for a in self.anchors], dtype=float)
        self._coords.setflags(write=False)
        self._radii.setflags(write=False)

    def first_match(self, lat: float, lng: float) -> CityAnchor | None:
        """
        First anchor (table order) whose radius contains the point.
        Not a nearest-neighbour search.
        """
        if not self.anchors:
            return None
        dist = np.hypot(self._coords[:, 0] - lat, self._coords[:, 1] - lng)
        hits = np.flatnonzero(dist <= self._radii)
        return self.anchors[int(hits[0])] if hits.size else None

    def city_for(self, lat: float, lng: float) -> str:
        anchor = self.first_match(lat, lng)
        return anchor.name if anchor else UNRESOLVED_CITY

DEFAULT_ANCHORS = AnchorTable()
