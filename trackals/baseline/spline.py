"""
Cubic-spline knot baseline.
"""

import numpy as np

from ..kernels import natural_cubic_spline, evaluate_spline


def select_knots(x, y, stride):
    """Every ``stride``-th sample, with the final sample always included."""
    stride = max(1, int(stride))
    idx = np.arange(0, len(x), stride)
    if idx[-1] != len(x) - 1:
        idx = np.append(idx, len(x) - 1)
    return np.asarray(x)[idx], np.asarray(y)[idx]


def spline_baseline(x, y, knot_spacing=25.0, data_interval=0.25):
    """
    Natural cubic spline through regularly spaced knot samples.

    Parameters
    ----------
    x : array_like
        Positions (m)
    y : array_like
        Measured values (mm)
    knot_spacing : float, optional
        Distance between knots in metres, default 25
    data_interval : float, optional
        Sample spacing in metres, used to turn ``knot_spacing`` into a sample
        stride, default 0.25

    Returns
    -------
    baseline : ndarray
    corrected : ndarray
        y - baseline
    knots : ndarray
        Knot positions actually used
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    stride = int(round(knot_spacing / data_interval))
    knot_x, knot_y = select_knots(x, y, stride)

    spline = natural_cubic_spline(knot_x, knot_y)
    baseline = evaluate_spline(spline, x)
    corrected = y - baseline

    return baseline, corrected, knot_x
