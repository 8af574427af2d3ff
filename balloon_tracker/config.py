from dataclasses import dataclass

@dataclass
class PredictorConfig:
    window: int = 21               # hourly samples fed to the model
    features_per_pair: int = 7     # dlat, dlon, dalt, speed, dir, wind, wind dir
    n_outputs: int = 3             # dlat_km, dlon_km, dalt_km
    earth_radius_km: float = 6371.0

    @property
    def n_pairs(self) -> int:
        return self.window - 1

    @property
    def n_features(self) -> int:
        return self.n_pairs * self.features_per_pair

@dataclass
class FeedConfig:
    base_url: str = "https://a.windbornesystems.com/treasure"
    hours: int = 24                # 00.json (now) .. 23.json (23h ago)
    timeout_s: float = 15.0
    max_workers: int = 8

    def url_for(self, hour: int) -> str:
        return f"{self.base_url}/{hour:02d}.json"

@dataclass
class WindConfig:
    base_url: str = "https://api.open-meteo.com/v1/forecast"
    past_days: int = 1
    timezone: str = "GMT"          # hourly.time comes back in UTC
    timeout_s: float = 15.0
    hours: int = 24                # readings kept, index 0 = current hour
