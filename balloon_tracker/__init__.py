"""
balloon_tracker
===============

Hourly balloon positions, wind readings and next-hour position prediction.

Modules
-------------------
geo             Geodesic delta, inverse projection, haversine, path unwrap
models          Sample / Model records and loaders
predictor       Feature extraction and linear next-position prediction
treasure        Hourly snapshot feed client
open_meteo      Hourly surface wind client
history         Per-balloon history and statistics
geojson         GeoJSON writers for the map layer
"""

from .models import Sample, Model, load_model
from .predictor import (
    Unavailable,
    ShapeMismatch,
    ModelShapeError,
    extract_features,
    predict_next,
)
