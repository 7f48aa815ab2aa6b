"""
Grouping stage.
Sorts the intermediate collection by key and splits it into runs of equal key.
"""

import logging
from operator import attrgetter
from typing import Iterable, List

from mrsequential.types import Group, KeyValue

logger = logging.getLogger(__name__)


def sort_by_key(records: Iterable[KeyValue]) -> List[KeyValue]:
    """Stable sort on key only; values keep their emission order within a key."""
    return sorted(records, key=attrgetter('key'))


def group_by_key(records: Iterable[KeyValue]) -> List[Group]:
    """
    Group intermediate records by key

    Args:
        records: Intermediate collection in any order

    Returns:
        One Group per distinct key, in ascending key order
    """
    ordered = sort_by_key(records)
    groups: List[Group] = []

    i = 0
    while i < len(ordered):
        j = i + 1
        while j < len(ordered) and ordered[j].key == ordered[i].key:
            j += 1
        groups.append(Group(ordered[i].key, tuple(kv.value for kv in ordered[i:j])))
        i = j

    logger.info(f"Grouping: {len(ordered)} records into {len(groups)} unique keys")
    return groups
