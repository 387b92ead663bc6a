"""Similarity measures between binary encodings."""

import numpy as np


def overlap(a, b) -> int:
    """Number of bits active in both encodings."""
    a = np.asarray(a, dtype=bool)
    b = np.asarray(b, dtype=bool)
    if a.shape != b.shape:
        raise ValueError(f"encodings differ in shape: {a.shape} vs {b.shape}")
    return int(np.sum(a & b))


def overlap_score(a, b) -> float:
    """Overlap as a fraction of the active bits of ``a``."""
    active = int(np.count_nonzero(a))
    return overlap(a, b) / (active or 1)


def jaccard(a, b) -> float:
    """Jaccard index of the active bit sets of two encodings."""
    a = np.asarray(a, dtype=bool)
    b = np.asarray(b, dtype=bool)
    union = int(np.sum(a | b))
    return overlap(a, b) / (union or 1)
