"""
Window smoothing kernels shared by the baseline methods and the optimizer.
"""

import numpy as np


NEIGHBOR_WEIGHTS = (0.25, 0.5, 0.25)


def moving_average(values, half_window):
    """
    Symmetric moving average with a boundary-clipped window.

    Near the ends the window shrinks instead of wrapping or padding, so
    point ``i`` averages ``values[max(0, i-h) : min(n, i+h+1)]``.

    Parameters
    ----------
    values : array_like
    half_window : int
        Points on each side of the centre

    Returns
    -------
    ndarray
    """
    values = np.asarray(values, dtype=float)
    n = len(values)
    half_window = max(0, int(half_window))
    if n == 0:
        return values.copy()

    cumsum = np.concatenate([[0.0], np.cumsum(values)])
    idx = np.arange(n)
    lo = np.maximum(0, idx - half_window)
    hi = np.minimum(n, idx + half_window + 1)
    return (cumsum[hi] - cumsum[lo]) / (hi - lo)


def binomial_smooth(values, passes=1):
    """
    Repeated 3-point binomial smoothing ``(prev + 2*mid + next) / 4``.

    The first and last points are left untouched; each pass reads only the
    previous pass's values.
    """
    smoothed = np.array(values, dtype=float)
    for _ in range(passes):
        if len(smoothed) < 3:
            break
        smoothed[1:-1] = (smoothed[:-2] + 2 * smoothed[1:-1] + smoothed[2:]) / 4
    return smoothed


def three_point_smooth(current, neighbors):
    """
    Weighted 3-point average of ``current`` against ``neighbors``.

    Interior point ``i`` becomes
    ``0.25*neighbors[i-1] + 0.5*current[i] + 0.25*neighbors[i+1]``; the first
    and last points keep their ``current`` value.
    """
    current = np.asarray(current, dtype=float)
    neighbors = np.asarray(neighbors, dtype=float)
    smoothed = current.copy()
    if len(current) >= 3:
        w_prev, w_mid, w_next = NEIGHBOR_WEIGHTS
        smoothed[1:-1] = w_prev * neighbors[:-2] + w_mid * current[1:-1] + w_next * neighbors[2:]
    return smoothed
