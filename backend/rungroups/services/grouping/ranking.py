"""
Ranking & Ordering - Post-processing of a finished Groups mapping.

The two passes are independent:
- assign_rank_to_groups mutates the groups it is given and returns
  the same mapping.
- sort_groups_by_key_in_ascending leaves its input alone and returns
  a new mapping.
"""
from rungroups.core.logging import get_logger
from rungroups.models.group import Groups

logger = get_logger(__name__)

MOST_COMMON = "Most Common"
LEAST_COMMON = "Least Common"


def assign_rank_to_groups(groups: Groups) -> Groups:
    """
    Rank groups by how many runs they hold, most first.

    Groups with equal run counts keep the order the mapping lists them
    in. With a single group it is labelled "Most Common"; "Least Common"
    only goes to the last of two or more groups. Middle ranks read
    "{rank}th Most Common" for every rank.

    Returns:
        The same mapping, with rank and rank_label set on each group
    """
    ordered = sorted(groups.values(), key=lambda group: len(group.runs), reverse=True)
    last_index = len(ordered) - 1

    for index, group in enumerate(ordered):
        group.rank = index + 1

        if index == 0:
            group.rank_label = MOST_COMMON
        elif index == last_index:
            group.rank_label = LEAST_COMMON
        else:
            group.rank_label = f"{index + 1}th Most Common"

    return groups


def sort_groups_by_key_in_ascending(groups: Groups) -> Groups:
    """Return a new mapping with keys in ascending numeric order."""
    ordered = {key: groups[key] for key in sorted(groups, key=float)}

    logger.debug("Sorted groups by key", keys=list(ordered))

    return ordered
