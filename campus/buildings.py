"""
buildings.py
Building records -> footprints, plus the building form rules.

Records come from the store as dicts with string or numeric columns
(latitude, longitude, width_meters, height_meters, rotation_degrees, ...).
"""
import logging
import math
import re

from campus.base import BuildingFootprint, GeoPoint
from geom.polygons import (DEFAULT_DIMENSION_METERS, DEFAULT_ROTATION_DEGREES,
                           footprint_polygon, parse_number)

log = logging.getLogger(__name__)

CATEGORIES = ("academic", "administrative", "facility", "sports", "residential", "other")
DEFAULT_CATEGORY = "academic"
CODE_PATTERN = re.compile(r"^[A-Z0-9]+$")

MIN_DIMENSION_METERS = 1.0
MAX_DIMENSION_METERS = 1000.0


def _form_number(value):
    """Whole-field number for form checks: "25m" is not a number here."""
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _dimension(value, default):
    x = parse_number(value)
    return x if (x and not math.isnan(x)) else default


def footprint_for(record):
    """Footprint of one record; width/height default to 20 m, rotation to 0."""
    lat = parse_number(record.get("latitude"))
    lng = parse_number(record.get("longitude"))
    width = _dimension(record.get("width_meters"), DEFAULT_DIMENSION_METERS)
    height = _dimension(record.get("height_meters"), DEFAULT_DIMENSION_METERS)
    rotation = _dimension(record.get("rotation_degrees"), DEFAULT_ROTATION_DEGREES)
    return BuildingFootprint(
        id=record.get("id"),
        name=record.get("name") or "",
        code=record.get("code") or "",
        category=record.get("category"),
        center=GeoPoint(lat, lng),
        width_meters=width,
        height_meters=height,
        rotation_degrees=rotation,
        polygon=footprint_polygon(lat, lng, width, height, rotation),
    )


def has_valid_center(record):
    lat = parse_number(record.get("latitude"))
    lng = parse_number(record.get("longitude"))
    return math.isfinite(lat) and math.isfinite(lng)


def building_footprints(records):
    """Footprints for every record with usable coordinates."""
    footprints = []
    for record in records:
        if not has_valid_center(record):
            log.debug("Skipping building %s: invalid coordinates", record.get("id"))
            continue
        footprints.append(footprint_for(record))
    return footprints


def map_center(records, config):
    """
    Average building position, or the campus center when there are no records.
    Missing coordinates count as 0.
    """
    if not records:
        return config.center.latitude, config.center.longitude
    lat = sum(parse_number(r.get("latitude") or 0) for r in records) / len(records)
    lng = sum(parse_number(r.get("longitude") or 0) for r in records) / len(records)
    return lat, lng


# ========================
# Form rules
# ========================

def _check_range(errors, field, value, lo, hi, label, unit=""):
    if value < lo:
        errors[field] = f"{label} must be at least {lo}{unit}"
    elif value > hi:
        errors[field] = f"{label} must be at most {hi}{unit}"


def validate_building(form, config):
    """
    Validate a building form (dict of raw field values).
    Returns {field: message}; empty dict means the form is valid.
    """
    errors = {}

    name = (form.get("building_name") or "").strip()
    if not name:
        errors["building_name"] = "Building name is required"
    elif len(name) > 100:
        errors["building_name"] = "Building name must be at most 100 characters"

    code = form.get("building_code") or ""
    if not code:
        errors["building_code"] = "Building code is required"
    elif len(code) > 10:
        errors["building_code"] = "Building code must be at most 10 characters"
    elif not CODE_PATTERN.match(code):
        errors["building_code"] = "Code must be uppercase letters and numbers only"

    bounds = config.bounds
    for field, label, lo, hi in (
        ("latitude", "Latitude", bounds.south_west.latitude, bounds.north_east.latitude),
        ("longitude", "Longitude", bounds.south_west.longitude, bounds.north_east.longitude),
    ):
        raw = form.get(field)
        if raw is None or raw == "":
            errors[field] = f"{label} is required"
            continue
        value = _form_number(raw)
        if math.isnan(value):
            errors[field] = f"{label} must be a valid number"
            continue
        _check_range(errors, field, value, lo, hi, label)

    for field, label in (("width_meters", "Width"), ("height_meters", "Height")):
        raw = form.get(field)
        if raw is None or raw == "":
            errors[field] = f"{label} is required"
            continue
        value = _form_number(raw)
        if math.isnan(value):
            errors[field] = f"{label} must be a valid number"
            continue
        _check_range(errors, field, value, MIN_DIMENSION_METERS, MAX_DIMENSION_METERS,
                     label, " meters")

    raw = form.get("rotation_degrees")
    if raw is not None and raw != "":
        value = _form_number(raw)
        if math.isnan(value):
            errors["rotation_degrees"] = "Rotation must be a valid number"
        else:
            _check_range(errors, "rotation_degrees", value, 0, 360, "Rotation", " degrees")

    category = form.get("category")
    if not category:
        errors["category"] = "Category is required"
    elif category not in CATEGORIES:
        errors["category"] = "Invalid category"

    if len(form.get("description") or "") > 500:
        errors["description"] = "Description must be less than 500 characters"

    return errors


def to_record(form):
    """Form fields -> store columns for a new building."""
    return {
        "name": form.get("building_name"),
        "code": form.get("building_code"),
        "description": form.get("description") or None,
        "latitude": parse_number(form.get("latitude")),
        "longitude": parse_number(form.get("longitude")),
        "width_meters": parse_number(form["width_meters"]) if form.get("width_meters") else DEFAULT_DIMENSION_METERS,
        "height_meters": parse_number(form["height_meters"]) if form.get("height_meters") else DEFAULT_DIMENSION_METERS,
        "rotation_degrees": parse_number(form["rotation_degrees"]) if form.get("rotation_degrees") else DEFAULT_ROTATION_DEGREES,
        "category": form.get("category") or DEFAULT_CATEGORY,
        "image_url": form.get("image_url") or None,
    }


def to_update(form):
    """Form fields -> store columns for an update; absent dimensions are left alone."""
    changes = {
        "name": form.get("building_name"),
        "code": form.get("building_code"),
        "description": form.get("description") or None,
        "latitude": parse_number(form.get("latitude")),
        "longitude": parse_number(form.get("longitude")),
        "category": form.get("category") or DEFAULT_CATEGORY,
        "image_url": form.get("image_url") or None,
    }
    if form.get("width_meters"):
        changes["width_meters"] = parse_number(form["width_meters"])
    if form.get("height_meters"):
        changes["height_meters"] = parse_number(form["height_meters"])
    if "rotation_degrees" in form:
        changes["rotation_degrees"] = parse_number(form["rotation_degrees"])
    return {k: v for k, v in changes.items() if v is not None or k in ("description", "image_url")}
