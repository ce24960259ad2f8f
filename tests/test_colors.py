import math

import pytest

from atlasit.core.catalog import ramps
from atlasit.core.logic.colors import (
    ColorRamp,
    interpolate_color,
    label_colors,
    marker_color,
    province_library_ramp,
    series_color,
    state_library_ramp,
)


@pytest.fixture
def abc_ramp():
    return ColorRamp([(0, "A"), (100, "B"), (500, "C")])


@pytest.mark.parametrize(
    "value,expected",
    [(-5, "A"), (0, "A"), (99, "A"), (100, "B"), (499.9, "B"), (500, "C"), (99999, "C")],
)
def test_inclusive_ramp(abc_ramp, value, expected):
    assert abc_ramp(value) == expected
    assert abc_ramp.lookup(value) == expected


def test_nan_gets_lowest_bucket(abc_ramp):
    assert abc_ramp(math.nan) == "A"


def test_strict_ramp_matches_library_ladder():
    ramp = state_library_ramp()
    assert ramp(0) == "#FFEDA0"
    assert ramp(1000) == "#FFEDA0"
    assert ramp(1001) == "#FED976"
    assert ramp(100000) == "#BD0026"
    assert ramp(100001) == "#800026"


def test_province_ramp_has_no_1000_step():
    ramp = province_library_ramp()
    assert ramp(1500) == "#FFEDA0"
    assert ramp(2500) == "#FEB24C"
    assert len(ramp.colors) == 7


@pytest.mark.parametrize("stops", [[], [(10, "a"), (5, "b")], [(1, "a"), (1, "b")]])
def test_invalid_stops_raise(stops):
    with pytest.raises(ValueError):
        ColorRamp(stops)


def test_interpolate_color_endpoints_and_clamp():
    assert interpolate_color("#000000", "#ffffff", 0) == "#000000"
    assert interpolate_color("#000000", "#ffffff", 1) == "#ffffff"
    assert interpolate_color("#000000", "#ffffff", 2) == "#ffffff"
    assert interpolate_color("#000000", "#ffffff", -1) == "#000000"


def test_marker_color_is_palette_midpoint():
    assert marker_color() == "#6786ad"


def test_label_colors_fall_back_to_default():
    labels = ["Fino a 2.000 volumi", "Sconosciuto"]
    assert label_colors(labels) == ["#9ecae1", ramps.DEFAULT_LABEL_COLOR]


def test_series_color_cycles():
    assert series_color(0) == series_color(6)
    assert series_color(1, border=True) == "rgba(54, 162, 235, 1)"
