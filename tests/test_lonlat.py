import pytest

from geokit.lonlat import (
    bd09_to_gcj02,
    bd09_to_wgs84,
    gcj02_to_bd09,
    gcj02_to_wgs84,
    is_out_of_china,
    wgs84_to_bd09,
    wgs84_to_gcj02,
)

BEIJING = (116.397128, 39.916527)


def test_is_out_of_china_bounds():
    assert not is_out_of_china(*BEIJING)
    assert is_out_of_china(73.66, 30.0)
    assert is_out_of_china(135.05, 30.0)
    assert is_out_of_china(100.0, 3.86)
    assert is_out_of_china(100.0, 53.55)
    assert is_out_of_china(0.0, 0.0)


def test_outside_china_is_unchanged():
    assert wgs84_to_gcj02(2.35, 48.85) == (2.35, 48.85)
    assert gcj02_to_wgs84(2.35, 48.85) == (2.35, 48.85)


def test_wgs84_gcj02_shift_is_small_but_nonzero():
    lon, lat = wgs84_to_gcj02(*BEIJING)
    assert 0 < abs(lon - BEIJING[0]) < 0.01
    assert 0 < abs(lat - BEIJING[1]) < 0.01


def test_wgs84_gcj02_round_trip():
    lon, lat = gcj02_to_wgs84(*wgs84_to_gcj02(*BEIJING))
    assert lon == pytest.approx(BEIJING[0], abs=1e-4)
    assert lat == pytest.approx(BEIJING[1], abs=1e-4)


def test_gcj02_bd09_round_trip():
    lon, lat = bd09_to_gcj02(*gcj02_to_bd09(*BEIJING))
    assert lon == pytest.approx(BEIJING[0], abs=1e-5)
    assert lat == pytest.approx(BEIJING[1], abs=1e-5)


def test_wgs84_bd09_round_trip():
    lon, lat = bd09_to_wgs84(*wgs84_to_bd09(*BEIJING))
    assert lon == pytest.approx(BEIJING[0], abs=1e-4)
    assert lat == pytest.approx(BEIJING[1], abs=1e-4)


def test_bd09_composes_gcj02_steps():
    assert wgs84_to_bd09(*BEIJING) == gcj02_to_bd09(*wgs84_to_gcj02(*BEIJING))
    assert bd09_to_wgs84(*BEIJING) == gcj02_to_wgs84(*bd09_to_gcj02(*BEIJING))