"""
Maximum-cardinality assignment of token positions to turrets.

Positions are the (shuffled) characters of a strategy token; each position may
be served by any turret listed in its feasibility edges. The search is a
randomized backtracking over positions. Every frame receives its own
`used` set and partial assignment, so no state is shared between branches.
"""

from __future__ import annotations

import random
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

Assignment = Tuple[Tuple[int, int], ...]


def max_assignment(
    position_count: int,
    edges: Dict[int, Sequence[int]],
    rng: Optional[random.Random] = None,
) -> List[Tuple[int, int]]:
    """
    Find a largest set of (position, turret) pairs with no turret reused.

    A position that still has a free candidate is always assigned; only
    positions without one are skipped. For bipartite graphs this never loses
    the optimum, since any maximum matching can be rewired to cover a
    non-isolated vertex.

    Args:
        position_count: Number of token positions
        edges: position -> turret indices able to serve it
        rng: Random source used to shuffle candidates

    Returns:
        (position, turret) pairs ordered by position
    """
    rng = rng or random.Random()
    turrets = {t for candidates in edges.values() for t in candidates}
    limit = min(position_count, len(turrets))

    def search(position: int, used: FrozenSet[int], current: Assignment) -> Assignment:
        if position >= position_count or len(current) >= limit:
            return current

        candidates = [t for t in edges.get(position, ()) if t not in used]
        if not candidates:
            return search(position + 1, used, current)

        rng.shuffle(candidates)
        best: Assignment = current
        for turret in candidates:
            found = search(position + 1, used | {turret}, current + ((position, turret),))
            if len(found) > len(best):
                best = found
            if len(best) >= limit:
                break
        return best

    if limit == 0:
        return []
    return list(search(0, frozenset(), ()))
