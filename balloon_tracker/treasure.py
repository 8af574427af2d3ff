import gzip
import json
import math
import datetime as dt
from concurrent.futures import ThreadPoolExecutor
from numbers import Real
from typing import List, Optional, Tuple

import requests

from .config import FeedConfig
from .models import Sample

Snapshot = List[Sample]  # all balloons at one hour, indexed by balloon number


def _is_position_row(row) -> bool:
    if not isinstance(row, list) or len(row) < 3:
        return False
    return all(
        isinstance(v, Real) and not isinstance(v, bool) and math.isfinite(v)
        for v in row[:3]
    )


def _reject_constant(name):
    # NaN / Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_snapshot(text: str) -> Snapshot:
    """
    Parse one hourly file: a JSON list of [lat, lon, alt] rows.
    The feed occasionally serves truncated or garbled files; those parse
    to an empty snapshot, as do files using NaN or Infinity. Rows that are
    not finite numeric triples are dropped.
    """
    try:
        obj = json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return []
    if not isinstance(obj, list):
        return []
    return [Sample.from_row(row) for row in obj if _is_position_row(row)]


def fetch_snapshot(hour: int, cfg: Optional[FeedConfig] = None,
                   session: Optional[requests.Session] = None) -> Snapshot:
    """
    Download and parse the snapshot for 'hour' hours ago (0 = latest).
    Any network or HTTP failure gives an empty snapshot for that hour.
    """
    cfg = cfg or FeedConfig()
    get = session.get if session is not None else requests.get
    try:
        resp = get(cfg.url_for(hour), timeout=cfg.timeout_s)
        resp.raise_for_status()
    except requests.RequestException:
        return []
    return parse_snapshot(resp.text)


def fetch_snapshots(cfg: Optional[FeedConfig] = None,
                    session: Optional[requests.Session] = None) -> List[Snapshot]:
    """
    All cfg.hours snapshots, index 0 = latest. The requests are independent
    and run on a small thread pool; order is preserved.
    """
    cfg = cfg or FeedConfig()
    with ThreadPoolExecutor(max_workers=cfg.max_workers) as pool:
        return list(pool.map(lambda h: fetch_snapshot(h, cfg, session), range(cfg.hours)))


# ---------------------------
# Local cache
# ---------------------------

def _open(path: str, mode: str):
    if path.endswith(".gz"):
        return gzip.open(path, mode + "t", encoding="utf-8")
    return open(path, mode, encoding="utf-8")


def save_snapshots(snapshots: List[Snapshot], path: str,
                   fetched: Optional[dt.datetime] = None) -> None:
    if fetched is None:
        fetched = dt.datetime.now(dt.timezone.utc)
    payload = {
        "meta": {"fetched": fetched.isoformat(), "hours": len(snapshots)},
        "snapshots": [
            [[s.latitude, s.longitude, s.altitude] for s in snap]
            for snap in snapshots
        ],
    }
    with _open(path, "w") as f:
        json.dump(payload, f)


def load_snapshot_cache(path: str) -> Tuple[List[Snapshot], Optional[dt.datetime]]:
    """
    Snapshots plus the time they were fetched, which is the hour that
    snapshot 0 refers to. fetched is None for caches without it.
    """
    with _open(path, "r") as f:
        obj = json.load(f)
    snapshots = [
        [Sample.from_row(row) for row in snap if _is_position_row(row)]
        for snap in obj["snapshots"]
    ]
    fetched = obj.get("meta", {}).get("fetched")
    return snapshots, (dt.datetime.fromisoformat(fetched) if fetched else None)


def load_snapshots(path: str) -> List[Snapshot]:
    return load_snapshot_cache(path)[0]
