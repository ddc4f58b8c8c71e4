import math

import pytest

from campus.buildings import (building_footprints, footprint_for, map_center, parse_number,
                              to_record, to_update, validate_building)
from campus.config import default_config
from geom.polygons import footprint_polygon


def _form(**overrides):
    form = {
        "building_name": "Engineering Hall",
        "building_code": "ENG1",
        "latitude": "11.2443",
        "longitude": "125.0023",
        "width_meters": "30",
        "height_meters": "15",
        "rotation_degrees": "45",
        "category": "academic",
        "description": "",
    }
    form.update(overrides)
    return form


def test_parse_number():
    assert parse_number("12.5") == 12.5
    assert parse_number(3) == 3.0
    assert math.isnan(parse_number(None))
    assert math.isnan(parse_number("abc"))
    assert math.isnan(parse_number(""))


def test_footprint_for_string_record():
    record = {"id": "1", "name": "Library", "code": "LIB", "latitude": "11.2443",
              "longitude": "125.0023", "width_meters": "40", "height_meters": "25",
              "rotation_degrees": "30"}
    fp = footprint_for(record)
    assert fp.center.latitude == 11.2443
    assert fp.polygon == footprint_polygon(11.2443, 125.0023, 40, 25, 30)


@pytest.mark.parametrize("bad", [None, "", "0", "wide"])
def test_footprint_for_defaults_dimensions(bad):
    record = {"latitude": 11.2443, "longitude": 125.0023,
              "width_meters": bad, "height_meters": bad, "rotation_degrees": bad}
    fp = footprint_for(record)
    assert (fp.width_meters, fp.height_meters, fp.rotation_degrees) == (20, 20, 0)
    assert fp.polygon == footprint_polygon(11.2443, 125.0023, 20, 20, 0)


def test_building_footprints_skips_bad_coordinates():
    records = [
        {"id": "1", "latitude": "11.2443", "longitude": "125.0023"},
        {"id": "2", "latitude": None, "longitude": "125.0023"},
        {"id": "3", "latitude": "north", "longitude": "125.0023"},
    ]
    fps = building_footprints(records)
    assert [fp.id for fp in fps] == ["1"]


def test_map_center_averages_records():
    records = [{"latitude": "11.0", "longitude": "125.0"}, {"latitude": "11.5", "longitude": "125.5"}]
    assert map_center(records, default_config()) == pytest.approx((11.25, 125.25))


def test_map_center_falls_back_to_campus():
    cfg = default_config()
    assert map_center([], cfg) == (cfg.center.latitude, cfg.center.longitude)


def test_valid_form_has_no_errors():
    assert validate_building(_form(), default_config()) == {}


def test_rotation_is_optional():
    assert validate_building(_form(rotation_degrees=""), default_config()) == {}


@pytest.mark.parametrize("field, value, message", [
    ("building_name", "", "Building name is required"),
    ("building_code", "eng1", "Code must be uppercase letters and numbers only"),
    ("building_code", "ABCDEFGHIJK", "Building code must be at most 10 characters"),
    ("latitude", "12.0", "Latitude must be at most 11.25"),
    ("longitude", "124.0", "Longitude must be at least 124.996"),
    ("latitude", "abc", "Latitude must be a valid number"),
    ("width_meters", "0.5", "Width must be at least 1.0 meters"),
    ("height_meters", "1001", "Height must be at most 1000.0 meters"),
    ("height_meters", "", "Height is required"),
    ("rotation_degrees", "361", "Rotation must be at most 360 degrees"),
    ("category", "parking", "Invalid category"),
    ("description", "x" * 501, "Description must be less than 500 characters"),
])
def test_form_errors(field, value, message):
    errors = validate_building(_form(**{field: value}), default_config())
    assert errors == {field: message}


def test_to_record_defaults():
    record = to_record(_form(width_meters="", height_meters=None, rotation_degrees="",
                             category=""))
    assert record["width_meters"] == 20
    assert record["height_meters"] == 20
    assert record["rotation_degrees"] == 0
    assert record["category"] == "academic"
    assert record["description"] is None
    assert record["latitude"] == 11.2443


def test_to_update_drops_absent_dimensions():
    form = _form()
    del form["rotation_degrees"]
    form["width_meters"] = ""
    changes = to_update(form)
    assert "width_meters" not in changes
    assert "rotation_degrees" not in changes
    assert changes["height_meters"] == 15


def test_footprint_for_reads_leading_numbers():
    record = {"latitude": "11.2443", "longitude": "125.0023",
              "width_meters": "25m", "height_meters": "12.5 deg", "rotation_degrees": "30°"}
    fp = footprint_for(record)
    assert (fp.width_meters, fp.height_meters, fp.rotation_degrees) == (25.0, 12.5, 30.0)
    assert fp.polygon == footprint_polygon(11.2443, 125.0023, 25, 12.5, 30)


def test_form_rejects_trailing_units():
    errors = validate_building(_form(width_meters="25m"), default_config())
    assert errors == {"width_meters": "Width must be a valid number"}
