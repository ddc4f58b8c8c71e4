# geom/polygons.py
"""
Building footprint geometry.

Local flat-earth (equirectangular) approximation, good at building scale:
1 degree of latitude ~ 111320 m, longitude shrinks with cos(latitude).
Polygons are lists of [lat, lng] pairs, closed implicitly.
"""
import math
import numbers
import re
import numpy as np

METERS_PER_DEGREE = 111320.0
DEFAULT_DIMENSION_METERS = 20.0
DEFAULT_ROTATION_DEGREES = 0.0

# leading decimal number, the part parseFloat would read
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)")


def parse_number(value):
    """
    Lenient number parsing: "25m" -> 25.0, "abc" / None -> NaN.
    Never raises.
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, numbers.Real):
        return float(value)
    if not isinstance(value, str):
        return math.nan
    m = _LEADING_NUMBER.match(value)
    if m is None:
        return math.nan
    text = m.group(1)
    if text.endswith("Infinity"):
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


def _or_default(value, default):
    """Logical-OR defaulting after parsing: None, 0, "", NaN and junk all fall back."""
    x = parse_number(value)
    if not x or math.isnan(x):
        return default
    return x


def _cos_sin(degrees):
    """cos and sin of an angle in degrees; NaN for non-finite angles."""
    if not math.isfinite(degrees):
        return math.nan, math.nan
    th = math.radians(degrees)
    return math.cos(th), math.sin(th)


def meters_to_degrees(meters, at_latitude):
    """
    Convert a (signed) distance in meters to (lat_delta, lng_delta) degrees.
    Undefined at the poles, where cos(latitude) is zero.
    """
    lat_delta = meters / METERS_PER_DEGREE
    lng_delta = meters / (METERS_PER_DEGREE * _cos_sin(at_latitude)[0])
    return lat_delta, lng_delta


def footprint_polygon(center_lat, center_lng, width_meters=None, height_meters=None,
                      rotation_degrees=None):
    """
    Return the 4 [lat, lng] corners of a width x height rectangle centered at
    (center_lat, center_lng), rotated by rotation_degrees.

    Width runs along longitude (x), height along latitude (y). Corner order is
    NE, NW, SW, SE before rotation. NaN input propagates, nothing is raised.
    """
    center_lat, center_lng = parse_number(center_lat), parse_number(center_lng)
    width_meters = _or_default(width_meters, DEFAULT_DIMENSION_METERS)
    height_meters = _or_default(height_meters, DEFAULT_DIMENSION_METERS)
    rotation_degrees = _or_default(rotation_degrees, DEFAULT_ROTATION_DEGREES)

    half_lat = meters_to_degrees(height_meters, center_lat)[0] / 2.0
    half_lng = meters_to_degrees(width_meters, center_lat)[1] / 2.0

    # unrotated offsets, x = lng, y = lat
    offsets = [(half_lng, half_lat), (-half_lng, half_lat),
               (-half_lng, -half_lat), (half_lng, -half_lat)]

    c, s = _cos_sin(rotation_degrees)
    corners = []
    for dx, dy in offsets:
        x = dx*c - dy*s
        y = dx*s + dy*c
        corners.append([center_lat + y, center_lng + x])
    return corners


def axis_aligned_bounds(center_lat, center_lng, width_meters=None, height_meters=None):
    """Unrotated [[sw_lat, sw_lng], [ne_lat, ne_lng]] box (form preview)."""
    center_lat, center_lng = parse_number(center_lat), parse_number(center_lng)
    width_meters = _or_default(width_meters, DEFAULT_DIMENSION_METERS)
    height_meters = _or_default(height_meters, DEFAULT_DIMENSION_METERS)
    half_lat = meters_to_degrees(height_meters, center_lat)[0] / 2.0
    half_lng = meters_to_degrees(width_meters, center_lat)[1] / 2.0
    return [[center_lat - half_lat, center_lng - half_lng],
            [center_lat + half_lat, center_lng + half_lng]]


def polygon_centroid(polygon):
    """Arithmetic mean of the corners as (lat, lng)."""
    pts = np.asarray(polygon, dtype=float)
    lat, lng = pts.mean(axis=0)
    return float(lat), float(lng)


def polygon_extent(polygon):
    """(max lat - min lat, max lng - min lng)."""
    pts = np.asarray(polygon, dtype=float)
    span = pts.max(axis=0) - pts.min(axis=0)
    return float(span[0]), float(span[1])
