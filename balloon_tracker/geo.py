import math
from typing import List, Sequence, Tuple

EARTH_R_KM = 6371.0  # kilometers


def lon_wrap(lon: float) -> float:
    """Longitude folded into [-180, 180)."""
    return math.fmod(math.fmod(lon + 180.0, 360.0) + 360.0, 360.0) - 180.0


def wrap_pi(rad: float) -> float:
    """Shift an angle difference once into (-pi, pi]."""
    if rad > math.pi:
        rad -= 2.0 * math.pi
    elif rad <= -math.pi:
        rad += 2.0 * math.pi
    return rad


def geodesic_delta(lat1: float, lon1: float, lat2: float, lon2: float,
                   radius_km: float = EARTH_R_KM) -> Tuple[float, float]:
    """
    North/east displacement in km from point 1 to point 2.

    Equirectangular approximation scaled by the cosine of the pair's mean
    latitude. Signed, and the longitude difference is wrapped before scaling
    so a step across the antimeridian stays short.
    Returns (dlat_km, dlon_km).
    """
    lat1r = math.radians(lat1)
    lat2r = math.radians(lat2)
    dlon = wrap_pi(math.radians(lon2 - lon1))
    dlat = math.radians(lat2 - lat1)
    dlat_km = radius_km * dlat
    dlon_km = radius_km * dlon * math.cos((lat1r + lat2r) / 2)
    return dlat_km, dlon_km


def apply_delta(lat: float, lon: float, dlat_km: float, dlon_km: float,
                radius_km: float = EARTH_R_KM) -> Tuple[float, float]:
    """
    Inverse of geodesic_delta anchored at (lat, lon).

    Scales longitude by the anchor latitude only, not the mean latitude of
    the step. Trained coefficients depend on this, keep it as is.
    """
    new_lat = lat + (dlat_km / radius_km) * (180.0 / math.pi)
    new_lon = lon + (dlon_km / radius_km) * (180.0 / math.pi) / math.cos(lat * math.pi / 180.0)
    return new_lat, new_lon


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float,
                       radius_km: float = EARTH_R_KM) -> float:
    """Great-circle distance in km."""
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (math.sin(dlat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2) ** 2)
    return radius_km * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Planar direction of travel in degrees from raw lat/lon differences:
    0 = east, 90 = north. This is what the dashboard plots as "direction".
    """
    return math.degrees(math.atan2(lat2 - lat1, lon2 - lon1))


def unwrap_path(coords: Sequence[Tuple[float, float]]) -> List[List[float]]:
    """
    coords = [(lon, lat), ...]
    Shift longitudes by 360 wherever consecutive points jump more than 180
    degrees, so a line across the antimeridian is drawn without a wrap.
    """
    out: List[List[float]] = []
    for lon, lat in coords:
        if out:
            prev = out[-1][0]
            while lon - prev > 180.0:
                lon -= 360.0
            while lon - prev < -180.0:
                lon += 360.0
        out.append([float(lon), float(lat)])
    return out
