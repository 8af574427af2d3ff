# balloon_pull.py

import os

from balloon_tracker.config import FeedConfig
from balloon_tracker.treasure import fetch_snapshots, save_snapshots

# ================= CONFIG =================
OUTDIR = "data"
OUTFILE = "treasure_latest.json.gz"
# ========================================


def main():
    cfg = FeedConfig()
    print(f"Downloading {cfg.hours} hourly snapshots from {cfg.base_url}")

    snapshots = fetch_snapshots(cfg)

    for hour, snap in enumerate(snapshots):
        if not snap:
            print(f"  {hour:02d}.json: unavailable or corrupt")

    if not any(snapshots):
        raise RuntimeError("No usable snapshots in feed")

    os.makedirs(OUTDIR, exist_ok=True)
    fname = os.path.join(OUTDIR, OUTFILE)
    save_snapshots(snapshots, fname)

    print("Balloons in latest hour:", len(snapshots[0]))
    print("Saved:", fname)

if __name__ == "__main__":
    main()
