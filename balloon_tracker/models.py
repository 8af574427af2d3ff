import json
import gzip
from dataclasses import dataclass
from collections.abc import Iterable
from typing import Dict, Optional, Sequence, Tuple

import numpy as np


def _opt(record: dict, key: str) -> float:
    # absent and null readings both count as 0
    v = record.get(key)
    return 0.0 if v is None else float(v)


# ---------------------------
# Data model
# ---------------------------

@dataclass(frozen=True)
class Sample:
    latitude: float    # deg
    longitude: float   # deg, not necessarily normalized
    altitude: float    # km
    ground_speed: float = 0.0
    heading: float = 0.0
    wind_speed: float = 0.0
    wind_direction: float = 0.0

    @classmethod
    def from_record(cls, record: dict) -> "Sample":
        """
        Build from an ingestion record:
          {"lat":..., "lon":..., "alt":...,
           "balloon_speed":..., "balloon_dir":..., "windspeed":..., "winddir":...}
        Only lat/lon/alt are required.
        """
        return cls(
            latitude=float(record["lat"]),
            longitude=float(record["lon"]),
            altitude=float(record["alt"]),
            ground_speed=_opt(record, "balloon_speed"),
            heading=_opt(record, "balloon_dir"),
            wind_speed=_opt(record, "windspeed"),
            wind_direction=_opt(record, "winddir"),
        )

    @classmethod
    def from_row(cls, row: Sequence[float]) -> "Sample":
        """Feed rows look like [lat, lon, alt]."""
        return cls(latitude=float(row[0]), longitude=float(row[1]), altitude=float(row[2]))

    def to_record(self) -> Dict[str, float]:
        return {
            "lat": self.latitude,
            "lon": self.longitude,
            "alt": self.altitude,
            "balloon_speed": self.ground_speed,
            "balloon_dir": self.heading,
            "windspeed": self.wind_speed,
            "winddir": self.wind_direction,
        }


@dataclass(frozen=True, eq=False)
class Model:
    """
    Pre-trained affine map from the 140-feature vector to
    (dlat_km, dlon_km, dalt_km). Rows are kept as supplied; the predictor
    checks their lengths, so a ragged or short matrix is reported rather
    than padded.
    """
    coefficients: Tuple[Optional[np.ndarray], ...]
    intercepts: Optional[np.ndarray]
    source: Optional[str] = None

    def __post_init__(self):
        coef = self.coefficients
        if _is_sequence(coef):
            rows = tuple(_as_vector(r, f"coef[{i}]") for i, r in enumerate(coef))
        else:
            rows = (None,)
        object.__setattr__(self, "coefficients", rows)
        object.__setattr__(self, "intercepts", _as_vector(self.intercepts, "intercept"))

    @classmethod
    def from_dict(cls, obj: dict, source: Optional[str] = None) -> "Model":
        return cls(coefficients=obj["coef"], intercepts=obj["intercept"], source=source)

    @property
    def row_lengths(self) -> Tuple[int, ...]:
        # -1 marks a row that is not a flat list of numbers
        return tuple(-1 if r is None else len(r) for r in self.coefficients)

    @property
    def intercept_length(self) -> int:
        return -1 if self.intercepts is None else len(self.intercepts)

    def matrix(self) -> np.ndarray:
        return np.vstack(self.coefficients)


def _is_sequence(v) -> bool:
    if isinstance(v, np.ndarray):
        return v.ndim > 0
    return isinstance(v, Iterable) and not isinstance(v, (str, bytes, dict))


def _as_vector(values, name: str) -> Optional[np.ndarray]:
    """
    Read-only float vector, or None when values is not a flat sequence
    (a scalar, or a list with nested lists). Non-numeric entries raise.
    """
    if not _is_sequence(values):
        return None
    values = list(values)
    if any(_is_sequence(v) for v in values):
        return None
    try:
        a = np.array([float(v) for v in values], dtype=float)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Non-numeric entry in {name}: {e}") from e
    a.setflags(write=False)
    return a


def load_model(path: str) -> Model:
    """
    Load {"coef": [[...], [...], [...]], "intercept": [a, b, c]} from JSON
    (gzip if the name ends in .gz).
    """
    opener = gzip.open if path.endswith(".gz") else open
    with opener(path, "rt", encoding="utf-8") as f:
        obj = json.load(f)
    return Model.from_dict(obj, source=path)
