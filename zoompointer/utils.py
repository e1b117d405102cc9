from __future__ import annotations
import random
from typing import Optional


def random_uniform(a: float, b: float, rng: Optional[random.Random] = None) -> float:
    """Return a random float between a and b, agnostic to order."""
    lo, hi = (a, b) if a <= b else (b, a)
    source = rng if rng is not None else random
    return source.uniform(lo, hi)
