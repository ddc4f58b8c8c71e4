# campus/paths.py
import math

from campus.base import PathPolyline
from geom.polygons import parse_number


def _sequence(wp):
    seq = wp.get("sequence_order")
    if seq is None or seq == "":
        seq = wp.get("sequence")
    seq = parse_number(seq)
    return 0 if math.isnan(seq) else seq


def path_polylines(paths):
    """
    Ordered [lat, lng] polylines for paths that have waypoints.
    Waypoints with unparseable coordinates are dropped, and so are paths
    left with nothing to draw.
    """
    out = []
    for path in paths:
        waypoints = path.get("waypoints")
        if not isinstance(waypoints, list) or not waypoints:
            continue
        positions = []
        for wp in sorted(waypoints, key=_sequence):
            lat = parse_number(wp.get("latitude"))
            lng = parse_number(wp.get("longitude"))
            if math.isnan(lat) or math.isnan(lng):
                continue
            positions.append([lat, lng])
        if positions:
            out.append(PathPolyline(
                id=path.get("id", path.get("path_id")),
                name=path.get("path_name") or "",
                path_type=path.get("path_type"),
                positions=positions,
            ))
    return out
