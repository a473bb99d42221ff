"""Draw-without-replacement helpers for small integer ranges."""

from __future__ import annotations

import random


def draw_unique(count: int, low: int, high: int, rng: random.Random | None = None) -> list[int]:
    """Draw ``count`` distinct integers uniformly from ``[low, high]``.

    Each slot is drawn with rejection until an unused value comes up.
    Already-picked values are tracked in a presence index sized to the
    range, so the check does not rescan the picked values.

    Returns the numbers in draw order.
    """

    span = high - low + 1
    if count < 0 or count > span:
        raise ValueError(f"Cannot draw {count} distinct values from {low}..{high}")

    rand = rng or random
    taken = bytearray(span)
    picked: list[int] = []
    while len(picked) < count:
        n = rand.randint(low, high)
        if taken[n - low]:
            continue
        taken[n - low] = 1
        picked.append(n)
    return picked
