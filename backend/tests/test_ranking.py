import pytest

from rungroups.models import Group, GroupType
from rungroups.services.grouping.ranking import (
    assign_rank_to_groups,
    sort_groups_by_key_in_ascending,
)


@pytest.fixture
def make_groups(make_workout):
    """Build groups from (key, run count) pairs, in the order given."""
    def _make(*pairs):
        groups = {}
        for key, count in pairs:
            runs = [make_workout(distance=float(key)) for _ in range(count)]
            groups[key] = Group(
                key=key,
                title=f"{key} mi",
                unit="mi",
                suffix="mi",
                group_type=GroupType.DISTANCE,
                seed=runs[0],
                runs=runs,
            )
        return groups
    return _make


def test_rank_density(make_groups):
    groups = make_groups(("3", 1), ("5", 4), ("8", 2), ("10", 3))

    assign_rank_to_groups(groups)

    assert sorted(g.rank for g in groups.values()) == [1, 2, 3, 4]
    assert groups["5"].rank == 1
    assert groups["10"].rank == 2
    assert groups["8"].rank == 3
    assert groups["3"].rank == 4


def test_rank_labels(make_groups):
    groups = make_groups(("3", 1), ("5", 4), ("8", 2), ("10", 3))

    assign_rank_to_groups(groups)

    assert groups["5"].rank_label == "Most Common"
    assert groups["10"].rank_label == "2th Most Common"
    assert groups["8"].rank_label == "3th Most Common"
    assert groups["3"].rank_label == "Least Common"


def test_two_groups_most_and_least(make_groups):
    groups = make_groups(("8", 1), ("5", 2))

    assign_rank_to_groups(groups)

    assert (groups["5"].rank, groups["5"].rank_label) == (1, "Most Common")
    assert (groups["8"].rank, groups["8"].rank_label) == (2, "Least Common")


def test_single_group_is_most_common(make_groups):
    groups = make_groups(("5", 5))

    assign_rank_to_groups(groups)

    assert groups["5"].rank == 1
    assert groups["5"].rank_label == "Most Common"


def test_ties_keep_mapping_order(make_groups):
    groups = make_groups(("8", 2), ("3", 2), ("5", 1))

    assign_rank_to_groups(groups)

    assert groups["8"].rank == 1
    assert groups["3"].rank == 2
    assert groups["5"].rank == 3


def test_assign_rank_mutates_and_returns_same_mapping(make_groups):
    groups = make_groups(("5", 2), ("8", 1))

    result = assign_rank_to_groups(groups)

    assert result is groups


def test_assign_rank_empty_mapping():
    assert assign_rank_to_groups({}) == {}


def test_sort_ascending_numeric_order(make_groups):
    groups = make_groups(("10", 1), ("2", 3), ("5.5", 2), ("0", 1))

    ordered = sort_groups_by_key_in_ascending(groups)

    assert list(ordered) == ["0", "2", "5.5", "10"]


def test_sort_returns_new_mapping_and_keeps_input(make_groups):
    groups = make_groups(("10", 1), ("2", 3))

    ordered = sort_groups_by_key_in_ascending(groups)

    assert ordered is not groups
    assert list(groups) == ["10", "2"]
    assert ordered["10"] is groups["10"]


def test_sort_is_idempotent(make_groups):
    groups = make_groups(("7", 1), ("3", 1), ("12", 1), ("4.5", 1))

    once = sort_groups_by_key_in_ascending(groups)
    twice = sort_groups_by_key_in_ascending(once)

    assert list(once) == list(twice)


def test_sort_keeps_rank_fields(make_groups):
    groups = make_groups(("8", 1), ("5", 2))
    assign_rank_to_groups(groups)

    ordered = sort_groups_by_key_in_ascending(groups)

    assert [(k, g.rank, g.rank_label) for k, g in ordered.items()] == [
        ("5", 1, "Most Common"),
        ("8", 2, "Least Common"),
    ]
