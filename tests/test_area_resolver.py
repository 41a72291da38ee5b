import math
import pytest
from talispod.data.areas import area_catalog, NEUTRAL_AREA
from talispod.environment.resolver import resolve_area, resolve_land_area, resolve_sea_area, is_sea_area, is_neutral_point

# values the device dials can produce
UI_TEMPS = [-273, -45, -40, -35, -30, -25, -20, -15, -10, -5, 0, 5, 10, 15, 20, 25, 30, 35, 40, 45, 999]
UI_HUMS = [0, 5, 10, 15, 20, 25, 30, 35, 40, 45, 50, 55, 60, 65, 70, 75, 80, 85, 90, 95, 99]
SEA_IDS = {"SN_SHALLOW","SN_MID","SN_DEEP","SS_SHALLOW","SS_MID","SS_DEEP"}

@pytest.mark.parametrize("t,h,expected", [
    (999, 0, "V1"),
    (45, 5, "V2"),
    (25, 50, "V4"),
    (35, 99, "E3"),
    (999, 99, "E1"),
    (0, 0, "T3"),
    (-45, 5, "T2"),
    (-273, 0, "T1"),
    (-20, 50, "S4"),
    (-273, 99, "S1"),
])
def test_land_grid_cells(t, h, expected):
    assert resolve_area(t, h, 50) == expected

def test_neutral_point_ignores_third_value():
    for third in (0, 50, 100, 12345):
        assert resolve_area(0, 50, third) == NEUTRAL_AREA
    assert is_neutral_point(0, 50)
    assert not is_neutral_point(0, 55)

def test_every_dial_position_resolves_to_a_land_area():
    catalog = area_catalog()
    for t in UI_TEMPS:
        for h in UI_HUMS:
            area = resolve_area(t, h, 50)
            assert area in catalog
            assert area not in SEA_IDS
            if (t, h) != (0, 50):
                assert area != NEUTRAL_AREA, (t, h)

def test_temperature_gaps_snap_to_central_rows():
    # 2 and 33 fall between rows: non-negative -> row "0", negative -> row "-5--30"
    assert resolve_land_area(2, 0) == "T3"
    assert resolve_land_area(33, 60) == "E4"
    assert resolve_land_area(-3, 99) == "S3"
    assert resolve_land_area(-100, 99) == "S3"

def test_out_of_range_temperatures_use_edge_rows():
    assert resolve_land_area(5000, 99) == "E1"
    assert resolve_land_area(-1000, 0) == "T1"

def test_unmatched_humidity_is_neutral():
    assert resolve_land_area(25, 47) == NEUTRAL_AREA
    assert resolve_land_area(25, -5) == NEUTRAL_AREA
    assert resolve_area(25, 150, 50) == NEUTRAL_AREA

def test_sea_hemisphere_and_depth():
    assert resolve_area(-1, 100, 0) == "SN_SHALLOW"
    assert resolve_area(-273, 100, 100) == "SN_DEEP"
    assert resolve_area(0, 100, 100) == "SS_DEEP"
    assert resolve_area(30, 100, 50) == "SS_MID"
    assert resolve_sea_area(10, 0.0) == "SS_SHALLOW"
    assert is_sea_area("SN_MID")
    assert not is_sea_area("E1")
    assert not is_sea_area(None)

def test_unknown_depth_behaves_as_mid():
    for depth in (-10, 1, 37, 99.5, 150):
        assert resolve_area(10, 100, depth) == "SS_MID"
        assert resolve_area(-10, 100, depth) == "SN_MID"

def test_every_sea_sample_is_one_of_six_ids():
    for t in UI_TEMPS:
        for depth in (0, 25, 50, 75, 100):
            assert resolve_area(t, 100, depth) in SEA_IDS

def test_humidity_99_is_land():
    assert not is_sea_area(resolve_area(-10, 99, 100))

@pytest.mark.parametrize("args", [
    (math.nan, 50, 50),
    (25, math.inf, 50),
    (25, 50, -math.inf),
    (None, 50, 50),
    ("hot", 50, 50),
    (25, 100, math.nan),
])
def test_unusable_input_is_neutral(args):
    assert resolve_area(*args) == NEUTRAL_AREA

def test_resolution_is_pure():
    first = [resolve_area(t, h, 50) for t in UI_TEMPS for h in UI_HUMS]
    second = [resolve_area(t, h, 50) for t in UI_TEMPS for h in UI_HUMS]
    assert first == second
