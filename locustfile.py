"""
Load scenario for GET /{owner}/{repo}/delta.

Run: locust -f locustfile.py --host http://localhost:8080
Version ranges are read from delta_ranges.csv (columns: owner, repo, initial, final)
when present, otherwise a few Apache Airflow ranges are used.
"""

import csv
import random
from pathlib import Path

from locust import HttpUser, between, task

RANGES_CSV = Path("delta_ranges.csv")

ranges = [
    {"owner": "apache", "repo": "airflow", "initial": "2.8.0", "final": "2.9.0"},
    {"owner": "apache", "repo": "airflow", "initial": "2.9.0", "final": "2.9.3"},
    {"owner": "apache", "repo": "airflow", "initial": "2.7.3", "final": "2.10.0"},
]
if RANGES_CSV.is_file():
    with RANGES_CSV.open() as f:
        ranges = list(csv.DictReader(f))


class ReleaseDeltaUser(HttpUser):
    wait_time = between(1, 2)

    @task
    def delta(self):
        r = random.choice(ranges)
        self.client.get(
            f"/{r['owner']}/{r['repo']}/delta",
            params={"initial": r["initial"], "final": r["final"]},
            name="/{owner}/{repo}/delta",
        )

    @task
    def health(self):
        self.client.get("/health")
