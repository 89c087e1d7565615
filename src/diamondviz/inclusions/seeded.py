from __future__ import annotations

import math

from diamondviz.errors import require_finite

SEED_WEIGHT = 12.9898
INDEX_WEIGHT = 78.233
SPREAD = 43758.5453


def seeded_random(seed: float, index: float) -> float:
    """Stateless sine hash in ``[0, 1)`` keyed by ``(seed, index)``."""
    seed = require_finite("seed", seed)
    index = require_finite("index", index)
    x = math.sin((seed * SEED_WEIGHT) + (index * INDEX_WEIGHT)) * SPREAD
    value = x - math.floor(x)
    # x - floor(x) rounds to 1.0 for tiny negative x
    if value >= 1.0:
        return 0.0
    return value


__all__ = ["seeded_random"]
