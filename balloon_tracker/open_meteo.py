import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Sequence

import requests

from .config import WindConfig


@dataclass(frozen=True)
class WindReading:
    speed: float      # 10 m wind speed as served (km/h by default)
    direction: float  # deg, meteorological
    time: Optional[dt.datetime] = None  # UTC hour the reading is valid for


CALM = WindReading(0.0, 0.0)


def _num(v) -> float:
    return 0.0 if v is None else float(v)


def _utc_hour(t: dt.datetime) -> dt.datetime:
    if t.tzinfo is None:
        t = t.replace(tzinfo=dt.timezone.utc)
    else:
        t = t.astimezone(dt.timezone.utc)
    return t.replace(minute=0, second=0, microsecond=0)


def parse_hourly_wind(obj: dict) -> List[WindReading]:
    """
    Open-Meteo hourly block, requested with timezone=GMT:
      {"hourly": {"time": ["2025-01-01T00:00", ...],
                  "windspeed_10m": [...], "winddirection_10m": [...]}}
    Directions missing past the end of the list count as 0. Without a
    time list the readings carry time=None.
    """
    hourly = obj["hourly"]
    speeds = hourly["windspeed_10m"]
    dirs = hourly.get("winddirection_10m") or []
    times = hourly.get("time") or []
    out = []
    for i, spd in enumerate(speeds):
        d = dirs[i] if i < len(dirs) else None
        t = _utc_hour(dt.datetime.fromisoformat(times[i])) if i < len(times) else None
        out.append(WindReading(speed=_num(spd), direction=_num(d), time=t))
    return out


def align_hours_ago(readings: Sequence[WindReading], now: dt.datetime, hours: int) -> List[WindReading]:
    """
    Re-index timed readings so entry t is the reading valid t hours before
    the hour containing 'now', matching the snapshot numbering (00 = latest).
    Hours with no reading are calm.
    """
    by_time = {r.time: r for r in readings if r.time is not None}
    h0 = _utc_hour(now)
    return [by_time.get(h0 - dt.timedelta(hours=t), CALM) for t in range(hours)]


def fetch_hourly_wind(lat: float, lon: float, cfg: Optional[WindConfig] = None,
                      session: Optional[requests.Session] = None,
                      now: Optional[dt.datetime] = None) -> List[WindReading]:
    """
    Hourly 10 m wind at (lat, lon) for the last cfg.hours hours, index 0 =
    current hour. Falls back to calm readings if the API cannot be read.
    """
    cfg = cfg or WindConfig()
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)
    params = {
        "latitude": lat,
        "longitude": lon,
        "hourly": "windspeed_10m,winddirection_10m",
        "past_days": cfg.past_days,
        "timezone": cfg.timezone,
    }
    get = session.get if session is not None else requests.get
    try:
        resp = get(cfg.base_url, params=params, timeout=cfg.timeout_s)
        resp.raise_for_status()
        readings = parse_hourly_wind(resp.json())
    except (requests.RequestException, ValueError, KeyError, TypeError):
        return [CALM] * cfg.hours
    return align_hours_ago(readings, now, cfg.hours)
