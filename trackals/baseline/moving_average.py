"""
Moving-average baseline.
"""

import numpy as np

from ..kernels import moving_average, binomial_smooth


def window_size(baseline_length, data_interval):
    """Number of samples spanned by ``baseline_length`` metres."""
    return int(round(baseline_length / data_interval))


def moving_average_baseline(x, y, baseline_length=100.0, data_interval=0.25, passes=3):
    """
    Moving-average baseline with binomial post-smoothing.

    Parameters
    ----------
    x : array_like
        Positions (m); not used, kept for API consistency
    y : array_like
        Measured values (mm)
    baseline_length : float, optional
        Averaging length in metres, default 100
    data_interval : float, optional
        Sample spacing in metres, default 0.25
    passes : int, optional
        Number of 3-point binomial smoothing passes, default 3

    Returns
    -------
    baseline : ndarray
    corrected : ndarray
        y - baseline
    """
    y = np.asarray(y, dtype=float)
    half_window = window_size(baseline_length, data_interval) // 2

    baseline = binomial_smooth(moving_average(y, half_window), passes)
    corrected = y - baseline

    return baseline, corrected
