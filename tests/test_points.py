"""Tests for point totals and leaderboards."""
import random

from zoneboard.points import leaderboard, summarize_points, weekly_leaderboard

from factories import make_activity, make_athlete, utc


class TestSummarizePoints:
    def test_sums_parsed_points(self):
        acts = [make_activity(zone_points=10), make_activity(zone_points="5.5"), make_activity(zone_points="bad")]
        assert summarize_points(acts) == {"total_points": 15.5, "activity_count": 3}

    def test_empty(self):
        assert summarize_points([]) == {"total_points": 0, "activity_count": 0}

    def test_order_independent(self):
        acts = [make_activity(zone_points=p) for p in (1.25, 2.5, 40, "3.75", None)]
        shuffled = list(acts)
        random.Random(7).shuffle(shuffled)
        assert summarize_points(shuffled)["total_points"] == summarize_points(acts)["total_points"] == 47.5


class TestLeaderboard:
    def test_ranks_by_points_and_filters(self):
        athletes = [make_athlete(id=1, firstname="Ana"), make_athlete(id=2, firstname="Ben"), make_athlete(id=3)]
        acts = [
            make_activity(athlete_id=1, zone_points=20),
            make_activity(athlete_id=2, zone_points=15),
            make_activity(athlete_id=2, zone_points=15),
            make_activity(athlete_id=1, zone_points=100, hidden=True),
            make_activity(athlete_id=3, zone_points=500, in_competition_window=False),
        ]
        rows = leaderboard(athletes, acts)
        assert [r["athlete_id"] for r in rows] == [2, 1]
        assert rows[0] == {
            "athlete_id": 2, "firstname": "Ben", "lastname": "Rivera",
            "total_points": 30, "activity_count": 2,
        }


class TestWeeklyLeaderboard:
    def test_only_this_week_counts(self):
        now = utc(2026, 2, 4, 12)  # Wednesday; week starts Sunday Feb 1
        athletes = [make_athlete(id=1), make_athlete(id=2, firstname="Kim")]
        acts = [
            make_activity(athlete_id=1, start_date=utc(2026, 2, 1, 0, 5), zone_points=10, distance_m=1000),
            make_activity(athlete_id=2, start_date=utc(2026, 2, 3), zone_points=25),
            make_activity(athlete_id=2, start_date=utc(2026, 1, 31, 23, 59), zone_points=99),
            make_activity(athlete_id=1, start_date=utc(2026, 2, 8), zone_points=99),
            make_activity(athlete_id=1, start_date=utc(2026, 2, 2), zone_points=99, hidden=True),
        ]
        out = weekly_leaderboard(athletes, acts, now)
        assert out["week_start"] == "2026-02-01T00:00:00+00:00"
        assert [r["athlete_id"] for r in out["leaderboard"]] == [2, 1]
        assert out["leaderboard"][0]["firstname"] == "Kim"
        assert out["stats"]["total_activities"] == 2
        assert out["stats"]["total_points"] == 35
        assert out["stats"]["total_distance_m"] == 6000
