"""
Endpoint blending for baselines.
"""

import numpy as np


def transition_length(n):
    return min(10, n // 10)


def preserve_endpoints(original, baseline):
    """
    Blend the first and last baseline points toward the raw values.

    Over ``min(10, n // 10)`` points at each end the weight ``i / length``
    ramps from 0 (raw value) at the edge to 1 (baseline) moving inward.

    Parameters
    ----------
    original : array_like
        Raw values
    baseline : array_like
        Baseline to blend

    Returns
    -------
    ndarray
        Blended copy of ``baseline``
    """
    original = np.asarray(original, dtype=float)
    preserved = np.array(baseline, dtype=float)
    n = len(original)
    length = transition_length(n)

    if length == 0:
        return preserved

    weight = np.arange(length) / length
    head = np.arange(length)
    tail = n - 1 - head

    preserved[head] = original[head] * (1 - weight) + preserved[head] * weight
    preserved[tail] = original[tail] * (1 - weight) + preserved[tail] * weight

    return preserved
