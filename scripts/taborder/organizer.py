from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Sequence

from .host import OpenFile
from .strategies import SortStrategy


@dataclass
class GroupOrder:
    group: Hashable
    files: List[OpenFile]
    changed: bool


def group_open_files(files: Sequence[OpenFile]) -> Dict[Hashable, List[OpenFile]]:
    groups: Dict[Hashable, List[OpenFile]] = {}
    for item in files:
        groups.setdefault(item.group, []).append(item)
    return groups


def organize(files: Sequence[OpenFile], strategy: SortStrategy) -> List[GroupOrder]:
    """Order every tab group independently with ``strategy``."""
    results: List[GroupOrder] = []
    for group, members in group_open_files(files).items():
        ordered = strategy.order(members)
        results.append(GroupOrder(group=group, files=ordered, changed=ordered != members))
    return results
