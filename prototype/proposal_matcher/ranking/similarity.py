from __future__ import annotations
from typing import Mapping
import numpy as np


def cosine_similarity(a: Mapping[str, float], b: Mapping[str, float]) -> float:
    """Cosine of the angle between two term-weight mappings.

    Terms missing from one side count as zero. Returns 0.0 when either vector
    has no weight, otherwise a value clamped to [0, 1].
    """
    terms = sorted(set(a) | set(b))
    if not terms:
        return 0.0

    vec_a = np.array([a.get(t, 0.0) for t in terms], dtype=float)
    vec_b = np.array([b.get(t, 0.0) for t in terms], dtype=float)

    mag_a = float(np.linalg.norm(vec_a))
    mag_b = float(np.linalg.norm(vec_b))
    if mag_a == 0.0 or mag_b == 0.0:
        return 0.0

    score = float(np.dot(vec_a, vec_b)) / (mag_a * mag_b)
    return min(1.0, max(0.0, score))
