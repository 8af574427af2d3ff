import math

import pytest

from balloon_tracker.geo import (
    EARTH_R_KM,
    apply_delta,
    bearing_deg,
    geodesic_delta,
    haversine_distance,
    lon_wrap,
    unwrap_path,
    wrap_pi,
)

ONE_DEG_KM = EARTH_R_KM * math.pi / 180.0


def test_delta_north_and_east_are_signed():
    dlat, dlon = geodesic_delta(10.0, 20.0, 9.0, 19.0)
    assert dlat == pytest.approx(-ONE_DEG_KM)
    assert dlon < 0


def test_delta_crossing_antimeridian_eastward():
    dlat, dlon = geodesic_delta(0.0, 179.5, 0.0, -179.5)
    assert dlat == 0.0
    assert dlon == pytest.approx(ONE_DEG_KM, rel=1e-9)
    assert dlon == pytest.approx(111.19, abs=0.01)


def test_delta_crossing_antimeridian_westward():
    _, dlon = geodesic_delta(0.0, -179.5, 0.0, 179.5)
    assert dlon == pytest.approx(-ONE_DEG_KM, rel=1e-9)


def test_delta_uses_mean_latitude():
    _, dlon = geodesic_delta(40.0, 0.0, 50.0, 1.0)
    assert dlon == pytest.approx(ONE_DEG_KM * math.cos(math.radians(45.0)))


def test_wrap_pi_half_open():
    assert wrap_pi(math.pi) == math.pi
    assert wrap_pi(-math.pi) == pytest.approx(math.pi)
    assert wrap_pi(1.5 * math.pi) == pytest.approx(-0.5 * math.pi)
    assert wrap_pi(0.25) == 0.25


@pytest.mark.parametrize("lat", [-60.0, 0.0, 45.0, 80.0])
@pytest.mark.parametrize("dlon_km", [-500.0, 3.2, 250.0])
def test_inverse_projection_recovers_anchor_at_single_latitude(lat, dlon_km):
    lon = 20.0
    new_lat, new_lon = apply_delta(lat, lon, 0.0, dlon_km)
    assert new_lat == lat

    back_lat, back_lon = apply_delta(new_lat, new_lon, 0.0, -dlon_km)
    assert back_lat == pytest.approx(lat, abs=1e-6)
    assert back_lon == pytest.approx(lon, abs=1e-6)

    fwd_lat, fwd_lon = geodesic_delta(lat, lon, new_lat, new_lon)
    assert fwd_lat == pytest.approx(0.0, abs=1e-9)
    assert fwd_lon == pytest.approx(dlon_km, abs=1e-6)


def test_apply_delta_uses_anchor_latitude():
    new_lat, new_lon = apply_delta(60.0, 0.0, 0.0, ONE_DEG_KM)
    assert new_lat == 60.0
    assert new_lon == pytest.approx(2.0)


def test_haversine_one_degree_at_equator():
    assert haversine_distance(0.0, 0.0, 0.0, 1.0) == pytest.approx(ONE_DEG_KM)
    assert haversine_distance(5.0, 5.0, 5.0, 5.0) == 0.0


def test_bearing_is_planar_angle():
    assert bearing_deg(0.0, 0.0, 0.0, 1.0) == pytest.approx(0.0)
    assert bearing_deg(0.0, 0.0, 1.0, 0.0) == pytest.approx(90.0)
    assert bearing_deg(0.0, 0.0, 0.0, -1.0) == pytest.approx(180.0)


def test_lon_wrap():
    assert lon_wrap(190.0) == pytest.approx(-170.0)
    assert lon_wrap(-180.0) == -180.0
    assert lon_wrap(45.0) == 45.0


def test_unwrap_path_keeps_line_continuous():
    assert unwrap_path([(179.0, 0.0), (-179.0, 1.0), (-178.0, 2.0)]) == [
        [179.0, 0.0], [181.0, 1.0], [182.0, 2.0]]
    assert unwrap_path([(-179.0, 0.0), (179.0, 0.0)]) == [[-179.0, 0.0], [-181.0, 0.0]]
    assert unwrap_path([]) == []
