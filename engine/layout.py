from typing import List, Sequence

from domain.models import RecognizedFragment, Rect

from .geometry import are_adjacent, bounding_rect
from .log import get_logger

logger = get_logger("layout")


def _group_adjacent(rects: List[Rect]) -> List[List[int]]:
    """Greedy grouping over rects already sorted top-then-left.

    Each seed keeps absorbing later candidates adjacent to its running union
    until a full pass adds nothing; earlier seeds win ambiguous candidates.
    """
    used = [False] * len(rects)
    groups: List[List[int]] = []
    for i in range(len(rects)):
        if used[i]:
            continue
        used[i] = True
        group = [i]
        union = rects[i]
        absorbed = True
        while absorbed:
            absorbed = False
            for j in range(i + 1, len(rects)):
                if used[j] or not are_adjacent(union, rects[j]):
                    continue
                used[j] = True
                group.append(j)
                union = union.union(rects[j])
                absorbed = True
        groups.append(group)
    return groups


def _merge_groups(rects: List[Rect]) -> List[List[int]]:
    """Group until no two group unions are adjacent any more.

    A later seed can grow into a union touching an earlier, already closed
    group; those groups are joined in seed order so merging is idempotent.
    """
    groups = _group_adjacent(rects)
    while True:
        unions = [_union_of(rects, group) for group in groups]
        regrouped = _group_adjacent(unions)
        if len(regrouped) == len(groups):
            return groups
        groups = [[idx for member in outer for idx in groups[member]] for outer in regrouped]


def _union_of(rects: List[Rect], group: List[int]) -> Rect:
    union = rects[group[0]]
    for idx in group[1:]:
        union = union.union(rects[idx])
    return union


def merge(fragments: Sequence[RecognizedFragment]) -> List[RecognizedFragment]:
    """Merge fragments sitting side by side on one text line.

    Blank fragments are dropped. If any remaining fragment has no box
    points the input is returned unchanged.
    """
    candidates = [f for f in fragments if f.text and f.text.strip()]
    if any(not f.has_geometry for f in candidates):
        logger.debug("Fragment without box points; skipping layout merge")
        return list(fragments)
    if not candidates:
        return []

    ordered = sorted(
        ((bounding_rect(f.box_points), f) for f in candidates),
        key=lambda item: (item[0].top, item[0].left),
    )
    rects = [rect for rect, _ in ordered]

    merged: List[RecognizedFragment] = []
    for group in _merge_groups(rects):
        if len(group) == 1:
            merged.append(ordered[group[0]][1])
            continue
        merged.append(RecognizedFragment(
            text=" ".join(ordered[idx][1].text for idx in group),
            box_points=_union_of(rects, group).corners(),
        ))

    logger.debug(f"Merged {len(candidates)} fragment(s) into {len(merged)} line(s)")
    return merged
