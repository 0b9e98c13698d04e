from __future__ import annotations

from typing import Iterable, Optional, Union

from ..visitors.model import Visitor
from .model import VisitorPartition


def partition_by_group(visitors: Iterable[Visitor]) -> list[VisitorPartition]:
    """Split one week's visitors into travel parties and individual travellers.

    - Each visitor without a group id is its own singleton partition.
    - Partitions appear in order of the first occurrence of their key.
    - Inside a group the leader comes first; otherwise input order is kept
      (stable sort, so several or no leaders keep their relative order).
    - ``is_group`` needs a group id and more than one member.
    """

    partitions: dict[Union[str, int], tuple[Optional[str], list[Visitor]]] = {}

    for index, visitor in enumerate(visitors):
        group_id = visitor.group_id or None
        key: Union[str, int] = group_id if group_id is not None else index
        partitions.setdefault(key, (group_id, []))[1].append(visitor)

    out: list[VisitorPartition] = []
    for group_id, members in partitions.values():
        if group_id is not None:
            members = sorted(members, key=lambda v: not v.is_group_leader)
        out.append(
            VisitorPartition(
                group_id=group_id,
                members=tuple(members),
                is_group=group_id is not None and len(members) > 1,
            )
        )
    return out
