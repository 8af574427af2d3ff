from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .geo import haversine_distance, bearing_deg
from .models import Sample
from .open_meteo import WindReading


@dataclass
class BalloonStats:
    altitudes: List[float]
    speeds: List[float]          # km per hourly step
    directions: List[float]      # deg, see geo.bearing_deg
    wind_speeds: List[float]
    wind_directions: List[float]


def balloon_history(snapshots: Sequence[Sequence[Sample]], index: int) -> List[Sample]:
    """
    Positions of balloon 'index' across the hourly snapshots, most recent
    first. Hours where the snapshot is too short to contain it are skipped.
    """
    return [s for _, s in balloon_track(snapshots, index)]


def balloon_hours(snapshots: Sequence[Sequence[Sample]], index: int) -> List[int]:
    """Hours ago (snapshot numbers) of each balloon_history entry."""
    return [h for h, _ in balloon_track(snapshots, index)]


def balloon_track(snapshots, index):
    return [(h, snap[index]) for h, snap in enumerate(snapshots) if 0 <= index < len(snap)]


def attach_wind(history: Sequence[Sample], wind: Sequence[WindReading],
                hours: Optional[Sequence[int]] = None) -> List[Sample]:
    """
    Copy wind readings onto the samples. wind is indexed by hours ago; pass
    the hours of each sample (see balloon_hours) when the history has gaps.
    Without them sample t takes wind[t], cycling if wind is shorter.
    """
    if not wind:
        return list(history)
    if hours is None:
        hours = range(len(history))
    out = []
    for h, s in zip(hours, history):
        w = wind[h % len(wind)]
        out.append(replace(s, wind_speed=w.speed, wind_direction=w.direction))
    return out


def attach_motion(history: Sequence[Sample]) -> List[Sample]:
    """
    Fill ground_speed (km per step) and heading for each sample from the
    step that arrived at it, i.e. from the next-older sample. The oldest
    sample has no incoming step and keeps 0.
    """
    out = []
    n = len(history)
    for t, s in enumerate(history):
        if t + 1 >= n:
            out.append(replace(s, ground_speed=0.0, heading=0.0))
            continue
        older = history[t + 1]
        out.append(replace(
            s,
            ground_speed=haversine_distance(older.latitude, older.longitude, s.latitude, s.longitude),
            heading=bearing_deg(older.latitude, older.longitude, s.latitude, s.longitude),
        ))
    return out


def balloon_stats(history: Sequence[Sample], wind: Sequence[WindReading]) -> BalloonStats:
    """
    Per-hour series for plotting. Step t compares position t with t-1 (one
    hour more recent); the first entry has no previous step and reads 0.
    """
    stats = BalloonStats([], [], [], [], [])
    calm = WindReading(0.0, 0.0)

    for t, b in enumerate(history):
        stats.altitudes.append(b.altitude)

        if t > 0:
            prev = history[t - 1]
            stats.speeds.append(haversine_distance(prev.latitude, prev.longitude, b.latitude, b.longitude))
            stats.directions.append(bearing_deg(prev.latitude, prev.longitude, b.latitude, b.longitude))
        else:
            stats.speeds.append(0.0)
            stats.directions.append(0.0)

        w = wind[t % len(wind)] if wind else calm
        stats.wind_speeds.append(w.speed)
        stats.wind_directions.append(w.direction)

    return stats
