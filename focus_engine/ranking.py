"""Top-N group selection with an "Other" overflow stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from focus_engine.config import DEFAULT_PALETTE, OTHER_COLOR
from focus_engine.dimensions import GroupInfo, OtherGroup
from focus_engine.schema import Stack


@dataclass
class Ranking:
    """Outcome of ranking groups by total minutes.

    ``stacks`` lists the selected groups in rank order followed by the "Other"
    stack when one exists.
    """

    stacks: list[Stack]
    selected_keys: list[str]
    overflow_keys: list[str] = field(default_factory=list)
    other: Optional[Stack] = None
    totals: list[tuple[str, int]] = field(default_factory=list)

    @property
    def has_other(self) -> bool:
        return self.other is not None


def select_top_groups(
    group_totals: Mapping[str, int],
    top_n: int,
    dimension: str,
    group_meta: Optional[Mapping[str, GroupInfo]] = None,
    palette: Sequence[str] = DEFAULT_PALETTE,
    other_color: str = OTHER_COLOR,
) -> Ranking:
    """Keep the ``top_n`` largest groups and fold the rest into "Other".

    Ties keep the mapping's insertion order, i.e. the order groups were first
    seen while scanning entries.
    """

    group_meta = group_meta or {}
    ranked = sorted(group_totals.items(), key=lambda item: item[1], reverse=True)

    limit = max(0, int(top_n))
    selected = ranked[:limit]
    overflow = ranked[limit:]

    stacks: list[Stack] = []
    for index, (key, total) in enumerate(selected):
        meta = group_meta.get(key)
        label = meta.label if meta is not None and meta.label else key
        color = (meta.color if meta is not None else None) or palette[index % len(palette)]
        stacks.append(Stack(key=key, label=label, color=color, total_minutes=total))

    other = None
    if overflow:
        group = OtherGroup(dimension=dimension, color=other_color)
        other = Stack(
            key=group.key,
            label=group.label,
            color=group.color,
            total_minutes=sum(total for _, total in overflow),
        )
        stacks.append(other)

    return Ranking(
        stacks=stacks,
        selected_keys=[key for key, _ in selected],
        overflow_keys=[key for key, _ in overflow],
        other=other,
        totals=ranked,
    )
