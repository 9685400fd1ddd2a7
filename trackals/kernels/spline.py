"""
Natural cubic spline interpolation.
"""

from collections import namedtuple

import numpy as np

from ..errors import ValidationError


SplineCoefficients = namedtuple('SplineCoefficients', ['x', 'y', 'b', 'c', 'd'])
SplineCoefficients.__doc__ = """
Piecewise cubic coefficients.

On interval ``i`` the spline is
``y[i] + b[i]*dx + c[i]*dx**2 + d[i]*dx**3`` with ``dx = pos - x[i]``.
``c`` has one entry per knot, ``b`` and ``d`` one per interval.
"""


def natural_cubic_spline(x, y):
    """
    Compute natural cubic spline coefficients through the given knots.

    Solves the tridiagonal system for the second-derivative terms with
    zero curvature at both ends.

    Parameters
    ----------
    x : array_like
        Knot positions, strictly increasing, at least 2
    y : array_like
        Knot values

    Returns
    -------
    SplineCoefficients
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = len(x)

    if n != len(y):
        raise ValidationError(f"Knot positions and values differ in length: {n} vs {len(y)}")
    if n < 2:
        raise ValidationError(f"Cubic spline needs at least 2 knots, got {n}")

    h = np.diff(x)
    if np.any(h <= 0):
        raise ValidationError("Knot positions must be strictly increasing")

    alpha = np.zeros(n)
    alpha[1:-1] = 3 / h[1:] * (y[2:] - y[1:-1]) - 3 / h[:-1] * (y[1:-1] - y[:-2])

    # Forward sweep of the tridiagonal solve
    l = np.ones(n)
    mu = np.zeros(n)
    z = np.zeros(n)
    for i in range(1, n - 1):
        l[i] = 2 * (x[i + 1] - x[i - 1]) - h[i - 1] * mu[i - 1]
        mu[i] = h[i] / l[i]
        z[i] = (alpha[i] - h[i - 1] * z[i - 1]) / l[i]

    c = np.zeros(n)
    b = np.zeros(n - 1)
    d = np.zeros(n - 1)
    for i in range(n - 2, -1, -1):
        c[i] = z[i] - mu[i] * c[i + 1]
        b[i] = (y[i + 1] - y[i]) / h[i] - h[i] * (c[i + 1] + 2 * c[i]) / 3
        d[i] = (c[i + 1] - c[i]) / (3 * h[i])

    return SplineCoefficients(x, y, b, c, d)


def _find_intervals(knots, positions):
    # First interval [x[j], x[j+1]] containing each position; positions
    # outside the knot range use the nearest boundary interval
    idx = np.searchsorted(knots, positions, side='left') - 1
    return np.clip(idx, 0, len(knots) - 2)


def evaluate_spline(spline, positions):
    """
    Evaluate a spline at one or more positions.

    Outside the knot range the nearest boundary interval's cubic is used.

    Parameters
    ----------
    spline : SplineCoefficients
    positions : float or array_like

    Returns
    -------
    float or ndarray
        Same shape as ``positions``.
    """
    scalar = np.ndim(positions) == 0
    pos = np.atleast_1d(np.asarray(positions, dtype=float))

    i = _find_intervals(spline.x, pos)
    dx = pos - spline.x[i]
    out = spline.y[i] + spline.b[i] * dx + spline.c[i] * dx ** 2 + spline.d[i] * dx ** 3

    return float(out[0]) if scalar else out
