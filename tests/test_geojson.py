from balloon_tracker.geojson import balloons_to_geojson, path_to_geojson, prediction_to_geojson
from balloon_tracker.models import Sample


def test_balloon_points():
    snap = [Sample(1.0, 2.0, 10.0), Sample(3.0, 4.0, 12.0)]
    geo = balloons_to_geojson(snap, selected=1)
    assert geo["type"] == "FeatureCollection"
    feats = geo["features"]
    assert [f["geometry"]["coordinates"] for f in feats] == [[2.0, 1.0], [4.0, 3.0]]
    assert [f["properties"] for f in feats] == [
        {"alt": 10.0, "idx": 0, "selected": False},
        {"alt": 12.0, "idx": 1, "selected": True},
    ]


def test_balloon_points_selected_only():
    snap = [Sample(1.0, 2.0, 10.0), Sample(3.0, 4.0, 12.0)]
    feats = balloons_to_geojson(snap, selected=1, show_all=False)["features"]
    assert len(feats) == 1
    assert feats[0]["properties"]["idx"] == 1


def test_path_is_unwrapped():
    history = [Sample(0.0, 179.0, 10.0), Sample(1.0, -179.0, 10.0)]
    line = path_to_geojson(history)["features"][0]["geometry"]
    assert line["type"] == "LineString"
    assert line["coordinates"] == [[179.0, 0.0], [181.0, 1.0]]


def test_prediction_line():
    line = prediction_to_geojson(Sample(1.0, 2.0, 3.0), Sample(1.5, 2.5, 3.1))
    assert line["features"][0]["geometry"]["coordinates"] == [[2.0, 1.0], [2.5, 1.5]]


def test_points_fold_longitude():
    feats = balloons_to_geojson([Sample(1.0, 190.0, 10.0), Sample(1.0, -540.0, 10.0)])["features"]
    assert [f["geometry"]["coordinates"][0] for f in feats] == [-170.0, -180.0]


def test_prediction_line_across_antimeridian():
    # predicted longitudes are not normalized, the line still stays short
    line = prediction_to_geojson(Sample(0.0, 539.5, 10.0), Sample(0.0, 540.5, 10.0))
    assert line["features"][0]["geometry"]["coordinates"] == [[179.5, 0.0], [180.5, 0.0]]
