"""Tests for the competition timeline and projections."""
import math
from datetime import timedelta
from types import SimpleNamespace

import pytest

from zoneboard.projection import (
    CompetitionStatus,
    build_timeline,
    competition_progress,
    competition_status,
)

from factories import make_activity, make_athlete, utc

START = utc(2026, 1, 1)
END = utc(2026, 5, 3)


def config(start=START, end=END):
    return SimpleNamespace(name="Main Competition", start_date=start, end_date=end)


class TestTimeline:
    def test_active(self):
        t = build_timeline(utc(2026, 2, 1), START, END)
        assert t["has_started"] and not t["has_ended"]
        assert t["total_days"] == 122
        assert t["days_elapsed"] == 31
        assert t["days_remaining"] == 91
        assert t["days_until_start"] == 0
        assert t["progress_percent"] == round(31 / 122 * 100, 1)
        assert competition_status(t) is CompetitionStatus.ACTIVE

    def test_upcoming(self):
        t = build_timeline(utc(2025, 12, 20, 12), START, END)
        assert not t["has_started"]
        assert t["days_elapsed"] == 0
        assert t["days_remaining"] == 122
        assert t["days_until_start"] == 12
        assert t["progress_percent"] == 0
        assert competition_status(t) is CompetitionStatus.UPCOMING

    def test_completed(self):
        t = build_timeline(utc(2026, 6, 1), START, END)
        assert t["has_ended"]
        assert t["days_remaining"] == 0
        assert t["progress_percent"] == 100
        assert competition_status(t) is CompetitionStatus.COMPLETED

    def test_start_instant_counts_as_started(self):
        t = build_timeline(START, START, END)
        assert t["has_started"]
        assert t["days_elapsed"] == 0

    def test_partial_days_round(self):
        t = build_timeline(utc(2026, 1, 2, 12), START, utc(2026, 1, 10, 6))
        assert t["total_days"] == 10
        assert t["days_elapsed"] == 1
        assert t["days_remaining"] == 8

    def test_progress_rounds_half_up(self):
        # one day of a 400 day competition is exactly 0.25%
        t = build_timeline(utc(2026, 1, 2), START, START + timedelta(days=400))
        assert t["progress_percent"] == 0.3


class TestProjections:
    def test_run_rate_projection(self):
        roster = [(make_athlete(id=1), [make_activity(zone_points=60), make_activity(zone_points="40")])]
        out = competition_progress(config(), roster, utc(2026, 2, 1))
        p = out["projections"][0]
        days_remaining = math.ceil((END - utc(2026, 2, 1)).total_seconds() / 86400)
        assert p["current_points"] == 100
        assert p["points_per_day"] == pytest.approx(3.226, abs=1e-3)
        assert p["projected_final_points"] == pytest.approx(100 + 100 / 31 * days_remaining)
        assert p["activity_count"] == 2

    def test_uses_full_history(self):
        acts = [make_activity(zone_points=10, hidden=True), make_activity(zone_points=5, in_competition_window=False)]
        out = competition_progress(config(), [(make_athlete(), acts)], utc(2026, 2, 1))
        assert out["projections"][0]["current_points"] == 15

    def test_no_rate_before_start(self):
        out = competition_progress(config(), [(make_athlete(), [make_activity(zone_points=50)])], utc(2025, 12, 1))
        p = out["projections"][0]
        assert p["points_per_day"] == 0
        assert p["projected_final_points"] == 50
        assert out["competition"]["status"] == "upcoming"

    def test_ended_projection_is_current(self):
        out = competition_progress(config(), [(make_athlete(), [make_activity(zone_points=80)])], utc(2026, 7, 1))
        p = out["projections"][0]
        assert p["projected_final_points"] == 80
        assert p["points_per_day"] == pytest.approx(80 / 181)

    def test_rankings(self):
        now = utc(2026, 2, 1)
        roster = [
            (make_athlete(id=1, firstname=None), [make_activity(zone_points=50)]),
            (make_athlete(id=2), [make_activity(zone_points=90)]),
            (make_athlete(id=3), [make_activity(zone_points=50)]),
            (make_athlete(id=4), []),
        ]
        out = competition_progress(config(), roster, now)
        assert [p["athlete_id"] for p in out["projections"]] == [2, 1, 3, 4]
        assert [p["athlete_id"] for p in out["current_standings"]] == [2, 1, 3, 4]
        assert out["projections"][1]["firstname"] == ""
        assert out["projections"][3]["projected_final_points"] == 0
