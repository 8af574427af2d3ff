import numpy as np
import pytest
import requests

from balloon_tracker.models import Model, Sample


class FakeResponse:
    def __init__(self, text="", status_code=200, payload=None):
        self.text = text
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def zero_model():
    def _make(intercept=(0.0, 0.0, 0.0), rows=3, cols=140):
        return Model(coefficients=np.zeros((rows, cols)), intercepts=list(intercept))
    return _make


@pytest.fixture
def drifting_history():
    """
    21 samples, most recent first, drifting north 0.1 deg and climbing
    0.01 km per hour. wind_speed equals the history index.
    """
    return [
        Sample(latitude=20.0 - i * 0.1, longitude=-120.0, altitude=15.0 - i * 0.01,
               wind_speed=float(i))
        for i in range(21)
    ]
