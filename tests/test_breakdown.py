"""Tests for per-athlete breakdowns and derived stats."""
import pytest

from zoneboard.breakdown import (
    athlete_summary,
    consistency,
    derive_stats,
    high_zone_ratio,
    sport_breakdown,
    weekly_points,
    zone_distribution,
)

from factories import make_activity, make_athlete, utc


def zones(*seconds):
    keys = [f"zone_{i}_time_s" for i in range(1, 6)]
    return dict(zip(keys, seconds))


class TestSportBreakdown:
    def test_groups_by_sport_with_unknown_bucket(self):
        acts = [
            make_activity(sport_type="Run", zone_points=10),
            make_activity(sport_type="Run", zone_points=5),
            make_activity(sport_type=None, zone_points=3),
        ]
        out = sport_breakdown(acts)
        assert out["Run"]["count"] == 2
        assert out["Run"]["points"] == 15
        assert out["Unknown"]["count"] == 1
        assert out["Unknown"]["points"] == 3

    def test_accumulates_distance_and_time(self):
        acts = [
            make_activity(sport_type="Ride", distance_m=20000, moving_time_s=3600),
            make_activity(sport_type="Ride", distance_m="5000", moving_time_s=None),
        ]
        ride = sport_breakdown(acts)["Ride"]
        assert ride["distance_m"] == 25000
        assert ride["time_s"] == 3600


class TestWeeklyPoints:
    def test_same_week_shares_key(self):
        acts = [
            make_activity(start_date=utc(2026, 1, 11, 8), zone_points=4),   # Sunday
            make_activity(start_date=utc(2026, 1, 17, 20), zone_points=6),  # Saturday
            make_activity(start_date=utc(2026, 1, 18, 8), zone_points=1),   # next Sunday
        ]
        assert weekly_points(acts) == {"2026-01-11": 10, "2026-01-18": 1}

    def test_missing_start_date_skipped(self):
        assert weekly_points([make_activity(start_date=None)]) == {}


class TestZoneDistribution:
    def test_sums_only_activities_with_zones(self):
        acts = [
            make_activity(heart_rate_zones=zones(60, 60, 60, 60, 60)),
            make_activity(heart_rate_zones=[zones(10, 20, 30, 40, 50)]),
            make_activity(heart_rate_zones=None),
            make_activity(heart_rate_zones=[]),
        ]
        assert zone_distribution(acts) == {
            "zone_1": 70, "zone_2": 80, "zone_3": 90, "zone_4": 100, "zone_5": 110,
        }


class TestRatios:
    def test_high_zone_ratio_zero_when_no_zone_time(self):
        assert high_zone_ratio({"zone_1": 0, "zone_2": 0, "zone_3": 0, "zone_4": 0, "zone_5": 0}) == 0.0

    @pytest.mark.parametrize("z", [(100, 0, 0, 50, 50), (0, 0, 0, 0, 10), (1, 2, 3, 4, 5)])
    def test_high_zone_ratio_formula(self, z):
        dist = {f"zone_{i + 1}": v for i, v in enumerate(z)}
        assert high_zone_ratio(dist) == pytest.approx((z[3] + z[4]) / sum(z) * 100)

    def test_consistency_zero_weeks(self):
        assert consistency(5, 0) == 0.0

    def test_consistency_not_clamped(self):
        assert consistency(8, 1) > 100


class TestDeriveStats:
    def test_empty(self):
        stats = derive_stats([])
        assert stats["totalPoints"] == 0
        assert stats["avgPointsPerWeek"] == 0
        assert stats["avgPointsPerActivity"] == 0
        assert stats["consistency"] == 0
        assert stats["highZoneRatio"] == 0

    def test_values(self):
        acts = [
            make_activity(start_date=utc(2026, 1, 12, 7), zone_points=30, distance_m=1000, moving_time_s=600,
                          heart_rate_zones=zones(0, 0, 0, 60, 0)),
            make_activity(start_date=utc(2026, 1, 12, 18), zone_points=10, distance_m=1000, moving_time_s=600,
                          heart_rate_zones=zones(60, 0, 0, 0, 0)),
            make_activity(start_date=utc(2026, 1, 20, 7), zone_points=20, distance_m=1000, moving_time_s=600),
        ]
        stats = derive_stats(acts)
        assert stats["totalPoints"] == 60
        assert stats["activityCount"] == 3
        assert stats["totalDistance"] == 3000
        assert stats["totalTime"] == 1800
        assert stats["avgPointsPerWeek"] == 30
        assert stats["avgPointsPerActivity"] == 20
        assert stats["activeDays"] == 2
        assert stats["consistency"] == pytest.approx(2 / 14 * 100)
        assert stats["highZoneRatio"] == 50


class TestAthleteSummary:
    def test_payload_shape(self):
        acts = [make_activity(id=i, zone_points=1) for i in range(12)]
        out = athlete_summary(make_athlete(), acts)
        assert set(out) == {
            "athlete", "summary", "sport_breakdown", "weekly_stats", "zone_distribution", "recent_activities",
        }
        assert out["summary"] == {"total_points": 12, "activity_count": 12}
        assert len(out["recent_activities"]) == 10
        assert out["recent_activities"][0]["id"] == 0
        assert out["athlete"]["hr_zones"] is None
