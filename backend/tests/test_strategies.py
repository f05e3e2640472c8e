import pytest

from rungroups.models import Quantity
from rungroups.services.grouping.strategies import (
    AltitudeStrategy,
    DistanceStrategy,
    PaceStrategy,
)
from rungroups.services.grouping.strategies.base import format_bucket_key, pick_extreme


# ========================================
# Distance
# ========================================

@pytest.mark.parametrize("distance, expected", [
    (4.9, "5"),
    (5.1, "5"),
    (5.25, "5"),
    (4.75, "5"),
    (8.0, "8"),
    (3.2, "3"),
])
def test_distance_buckets_within_tolerance(make_workout, distance, expected):
    strategy = DistanceStrategy()
    assert strategy.bucket(make_workout(distance=distance), 0.25, 1.0) == expected


@pytest.mark.parametrize("distance", [3.26, 3.5, 4.7])
def test_distance_outside_tolerance_is_excluded(make_workout, distance):
    assert DistanceStrategy().bucket(make_workout(distance=distance), 0.25, 1.0) is None


def test_distance_custom_tolerance_includes_boundary(make_workout):
    assert DistanceStrategy().bucket(make_workout(distance=3.35), 0.35, 1.0) == "3"


def test_distance_half_mile_groups(make_workout):
    strategy = DistanceStrategy()
    assert strategy.bucket(make_workout(distance=5.4), 0.25, 0.5) == "5.5"
    assert strategy.bucket(make_workout(distance=6.1), 0.25, 0.5) == "6"


def test_distance_missing_quantity_is_excluded(make_workout):
    assert DistanceStrategy().bucket(make_workout(distance=None), 0.25, 1.0) is None


def test_bucket_is_pure(make_workout):
    strategy = DistanceStrategy()
    sample = make_workout(distance=4.9)
    assert [strategy.bucket(sample, 0.25, 1.0) for _ in range(3)] == ["5", "5", "5"]


def test_distance_title_uses_sample_unit(make_workout):
    strategy = DistanceStrategy()
    assert strategy.title("3", make_workout(distance=3.0)) == "3 mi"
    assert strategy.title("5", make_workout(distance=5.1, unit="km")) == "5 km"


def test_distance_highlight_is_fastest(make_workout):
    slow = make_workout(distance=5.0, pace=9.0)
    fast = make_workout(distance=5.0, pace=7.0)
    mid = make_workout(distance=5.0, pace=8.0)

    strategy = DistanceStrategy()
    assert strategy.select_highlight([slow, fast, mid]) is fast
    assert strategy.select_worst([slow, fast, mid]) is slow


# ========================================
# Pace
# ========================================

def test_pace_buckets_to_whole_minutes(make_workout):
    strategy = PaceStrategy()
    assert strategy.bucket(make_workout(pace=7.3), 0.5, 1.0) == "7"
    assert strategy.bucket(make_workout(pace=7.5), 0.5, 1.0) == "8"
    assert strategy.bucket(make_workout(pace=8.49), 0.5, 1.0) == "8"


def test_pace_missing_pace_is_excluded(make_workout):
    sample = make_workout(with_pace=False)
    assert PaceStrategy().bucket(sample, 0.5, 1.0) is None


def test_pace_zero_distance_is_excluded(make_workout):
    sample = make_workout(distance=0.0, duration_min=30)
    sample.average_pace = Quantity(8.0, "min/mi")
    assert PaceStrategy().bucket(sample, 0.5, 1.0) is None


def test_pace_title(make_workout):
    assert PaceStrategy().title("8", make_workout(pace=8.0)) == "8 min/mi"


def test_pace_highlight_is_longest(make_workout):
    short = make_workout(distance=3.0)
    long = make_workout(distance=10.0)

    strategy = PaceStrategy()
    assert strategy.select_highlight([short, long]) is long
    assert strategy.select_worst([short, long]) is short


# ========================================
# Altitude
# ========================================

@pytest.mark.parametrize("elevation, expected", [
    (95, "100"),
    (105, "100"),
    (195, "200"),
    (205, "200"),
    (25, "0"),
    (40, "0"),
    (160, "200"),
])
def test_altitude_buckets(make_workout, elevation, expected):
    assert AltitudeStrategy().bucket(make_workout(elevation=elevation), 50, 100) == expected


def test_altitude_outside_tolerance(make_workout):
    assert AltitudeStrategy().bucket(make_workout(elevation=160), 25, 100) is None


@pytest.mark.parametrize("elevation", [None, 0])
def test_altitude_without_gain_is_excluded(make_workout, elevation):
    assert AltitudeStrategy().bucket(make_workout(elevation=elevation), 50, 100) is None


def test_altitude_title(make_workout):
    assert AltitudeStrategy().title("100", make_workout(elevation=100)) == "100m elevation"


def test_altitude_highlight_is_highest(make_workout):
    low = make_workout(elevation=95)
    high = make_workout(elevation=105)

    strategy = AltitudeStrategy()
    assert strategy.select_highlight([low, high]) is high
    assert strategy.select_worst([low, high]) is low


# ========================================
# Helpers
# ========================================

def test_strategy_defaults_come_from_settings():
    assert (DistanceStrategy().default_tolerance, DistanceStrategy().default_group_size) == (0.25, 1.0)
    assert (PaceStrategy().default_tolerance, PaceStrategy().default_group_size) == (0.5, 1.0)
    assert (AltitudeStrategy().default_tolerance, AltitudeStrategy().default_group_size) == (50, 100)


def test_strategy_defaults_can_be_overridden():
    strategy = DistanceStrategy(default_tolerance=0.1, default_group_size=0.5)
    assert strategy.default_tolerance == 0.1
    assert strategy.default_group_size == 0.5


@pytest.mark.parametrize("center, expected", [
    (5.0, "5"),
    (5.5, "5.5"),
    (0.0, "0"),
    (100.0, "100"),
    (2.25, "2.25"),
])
def test_format_bucket_key(center, expected):
    assert format_bucket_key(center) == expected


def test_pick_extreme_tie_goes_to_earliest(make_workout):
    later = make_workout(distance=5.0, pace=8.0, days=3)
    earlier = make_workout(distance=5.0, pace=8.0, days=1)

    assert pick_extreme([later, earlier], lambda run: run.average_pace.value, highest=False) is earlier


def test_pick_extreme_without_metric_returns_first(make_workout):
    a = make_workout(with_pace=False)
    b = make_workout(with_pace=False)

    assert pick_extreme([a, b], lambda run: None, highest=True) is a
