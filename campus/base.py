# campus/base.py
from dataclasses import dataclass, field
from typing import List, NewType, Optional

Meters = NewType("Meters", float)
Degrees = NewType("Degrees", float)


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair (degrees)."""
    latitude: Degrees
    longitude: Degrees


@dataclass(frozen=True)
class Bounds:
    north_east: GeoPoint
    south_west: GeoPoint

    def contains(self, point: GeoPoint) -> bool:
        return (self.south_west.latitude <= point.latitude <= self.north_east.latitude
                and self.south_west.longitude <= point.longitude <= self.north_east.longitude)


@dataclass
class BuildingFootprint:
    """Map-ready footprint, recomputed from the stored record on every render."""
    id: Optional[str]
    name: str
    code: str
    category: Optional[str]
    center: GeoPoint
    width_meters: Meters
    height_meters: Meters
    rotation_degrees: Degrees
    polygon: List[List[float]] = field(default_factory=list)


@dataclass
class PathPolyline:
    id: Optional[str]
    name: str
    path_type: Optional[str]
    positions: List[List[float]] = field(default_factory=list)
