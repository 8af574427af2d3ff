"""
Next-hour position prediction from the last 21 hourly samples.

History in, most-recent-first. The 21-sample window is reordered oldest
first, each of the 20 consecutive pairs contributes 7 features, and a linear
model maps the 140-vector to a (north km, east km, altitude km) step that is
projected back onto the newest sample.
"""
from dataclasses import dataclass
from itertools import islice
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import PredictorConfig
from .geo import geodesic_delta, apply_delta
from .models import Model, Sample

DEFAULT_CONFIG = PredictorConfig()


class ModelShapeError(ValueError):
    pass


@dataclass(frozen=True)
class Unavailable:
    """No prediction yet: short history or no model loaded."""
    reason: str


@dataclass(frozen=True)
class ShapeMismatch:
    """The model does not fit the feature layout."""
    expected: Tuple[int, int]
    row_lengths: Tuple[int, ...]
    intercept_length: int

    def __str__(self):
        return (f"Model shape mismatch: expected coef {self.expected[0]}x{self.expected[1]} "
                f"and {self.expected[0]} intercepts, got coef rows {list(self.row_lengths)} "
                f"and {self.intercept_length} intercepts")

    def raise_for_shape(self):
        raise ModelShapeError(str(self))


PredictResult = Union[Sample, Unavailable, ShapeMismatch]


def _window(history: Sequence[Optional[Sample]], size: int) -> Optional[List[Sample]]:
    recent = list(islice(history, size))
    if len(recent) < size or any(s is None for s in recent):
        return None
    recent.reverse()  # oldest first
    return recent


def _pair_features(a: Sample, b: Sample, radius_km: float) -> Tuple[float, ...]:
    dlat_km, dlon_km = geodesic_delta(a.latitude, a.longitude, b.latitude, b.longitude, radius_km)
    # own-motion and wind readings come from the earlier sample of the pair
    return (
        dlat_km,
        dlon_km,
        b.altitude - a.altitude,
        a.ground_speed,
        a.heading,
        a.wind_speed,
        a.wind_direction,
    )


def extract_features(history: Sequence[Optional[Sample]],
                     cfg: PredictorConfig = DEFAULT_CONFIG) -> Optional[np.ndarray]:
    """
    Feature vector for the newest cfg.window samples of a most-recent-first
    history, or None if there are not enough of them.
    """
    w = _window(history, cfg.window)
    if w is None:
        return None
    return _features(w, cfg)


def _features(w: List[Sample], cfg: PredictorConfig) -> np.ndarray:
    feats: List[float] = []
    for a, b in zip(w[:-1], w[1:]):
        feats.extend(_pair_features(a, b, cfg.earth_radius_km))
    return np.asarray(feats, dtype=float)


def check_model_shape(model: Model, cfg: PredictorConfig = DEFAULT_CONFIG) -> Optional[ShapeMismatch]:
    rows = model.row_lengths
    ok = (
        len(rows) == cfg.n_outputs
        and all(n == cfg.n_features for n in rows)
        and model.intercept_length == cfg.n_outputs
    )
    if ok:
        return None
    return ShapeMismatch(
        expected=(cfg.n_outputs, cfg.n_features),
        row_lengths=rows,
        intercept_length=model.intercept_length,
    )


def predict_delta(features: np.ndarray, model: Model) -> np.ndarray:
    """intercept + coef . x  ->  [dlat_km, dlon_km, dalt_km]"""
    return model.intercepts + model.matrix() @ features


def predict_next(history: Sequence[Optional[Sample]], model: Optional[Model],
                 cfg: PredictorConfig = DEFAULT_CONFIG) -> PredictResult:
    """
    Predict the next hourly Sample for one balloon.

    history is most-recent-first. Returns the predicted Sample (speed, heading
    and wind readings left at 0), Unavailable when the history is shorter than
    cfg.window or there is no model, or ShapeMismatch when the model does not
    match the feature layout. Outputs are not clamped.
    """
    if model is None:
        return Unavailable("no model loaded")

    w = _window(history, cfg.window)
    if w is None:
        return Unavailable(f"need {cfg.window} consecutive samples")

    mismatch = check_model_shape(model, cfg)
    if mismatch is not None:
        return mismatch

    delta = predict_delta(_features(w, cfg), model)

    last = w[-1]
    new_lat, new_lon = apply_delta(last.latitude, last.longitude,
                                   float(delta[0]), float(delta[1]), cfg.earth_radius_km)
    return Sample(latitude=new_lat, longitude=new_lon, altitude=last.altitude + float(delta[2]))
