# run_prediction.py

import os
import json
from pathlib import Path

from .history import balloon_history, balloon_hours, attach_wind, attach_motion
from .models import load_model
from .open_meteo import fetch_hourly_wind
from .predictor import predict_next, ShapeMismatch, Unavailable
from .treasure import load_snapshot_cache, fetch_snapshots
from .geojson import path_to_geojson, prediction_to_geojson, balloons_to_geojson

# ================= CONFIG =================
SNAPSHOTS_PATH = "data/treasure_latest.json.gz"
MODEL_PATH = "model/balloon_model.json"
OUTPUT_FOLDER = "prediction_output"
DEFAULT_BALLOON = 0
# ========================================


def run_prediction(
    balloon: int = DEFAULT_BALLOON,
    snapshots_path: str = SNAPSHOTS_PATH,
    model_path: str = MODEL_PATH,
    output_folder: str = OUTPUT_FOLDER,
):
    """
    Predict the next hourly position of one balloon and write the map layers.
    Returns the written paths; the prediction layer is skipped when no
    prediction is available.
    """
    if os.path.exists(snapshots_path):
        print("Loading snapshots from", snapshots_path)
        snapshots, fetched = load_snapshot_cache(snapshots_path)
    else:
        print("No cached snapshots, fetching feed...")
        snapshots, fetched = fetch_snapshots(), None

    history = balloon_history(snapshots, balloon)
    if not history:
        raise RuntimeError(f"Balloon {balloon} not present in any snapshot")

    print("Fetching wind...")
    latest = history[0]
    # wind index 0 is the hour snapshot 00 was taken
    wind = fetch_hourly_wind(latest.latitude, latest.longitude, now=fetched)
    hours = balloon_hours(snapshots, balloon)
    history = attach_motion(attach_wind(history, wind, hours))

    print("Loading model...")
    model = load_model(model_path)

    result = predict_next(history, model)
    if isinstance(result, ShapeMismatch):
        result.raise_for_shape()

    out = Path(output_folder)
    out.mkdir(exist_ok=True)

    layers = {
        f"balloons_{balloon}.geojson": balloons_to_geojson(snapshots[0], selected=balloon),
        f"path_{balloon}.geojson": path_to_geojson(history),
    }

    if isinstance(result, Unavailable):
        print("No prediction:", result.reason)
    else:
        print(f"Predicted: lat={result.latitude:.3f} lon={result.longitude:.3f} alt={result.altitude:.2f} km")
        layers[f"predicted_{balloon}.geojson"] = prediction_to_geojson(latest, result)

    written = []
    for name, geo in layers.items():
        path = out / name
        with open(path, "w") as f:
            json.dump(geo, f)
        written.append(path)

    print("Saved outputs:")
    for path in written:
        print(path)

    return written


# ========== CLI Runner ==========
if __name__ == "__main__":
    run_prediction(
        balloon=int(os.environ.get("BALLOON", DEFAULT_BALLOON)),
        snapshots_path=os.environ.get("SNAPSHOTS_PATH", SNAPSHOTS_PATH),
        model_path=os.environ.get("MODEL_PATH", MODEL_PATH),
        output_folder=os.environ.get("OUTPUT_FOLDER", OUTPUT_FOLDER),
    )
