from typing import Optional, Sequence

from .geo import lon_wrap, unwrap_path
from .models import Sample


def _point(s: Sample, props: dict) -> dict:
    return {
        "type": "Feature",
        "properties": props,
        "geometry": {"type": "Point", "coordinates": [lon_wrap(float(s.longitude)), float(s.latitude)]},
    }

def _line(coords) -> dict:
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {"type": "LineString", "coordinates": coords},
    }


def balloons_to_geojson(snapshot: Sequence[Sample], selected: Optional[int] = None,
                        show_all: bool = True) -> dict:
    """
    Points for one hourly snapshot. With show_all off only the selected
    balloon is emitted.
    """
    feats = []
    for idx, s in enumerate(snapshot):
        if not show_all and idx != selected:
            continue
        feats.append(_point(s, {"alt": float(s.altitude), "idx": idx, "selected": idx == selected}))
    return {"type": "FeatureCollection", "features": feats}


def path_to_geojson(history: Sequence[Sample]) -> dict:
    coords = unwrap_path([(lon_wrap(s.longitude), s.latitude) for s in history])
    return {"type": "FeatureCollection", "features": [_line(coords)]}


def prediction_to_geojson(current: Sample, predicted: Sample) -> dict:
    """
    Line from the current to the predicted position. The start is folded
    into [-180, 180) and the end kept on the same side of the antimeridian.
    """
    coords = unwrap_path([
        (lon_wrap(current.longitude), current.latitude),
        (lon_wrap(predicted.longitude), predicted.latitude),
    ])
    return {"type": "FeatureCollection", "features": [_line(coords)]}
