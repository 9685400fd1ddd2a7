"""
Polynomial baseline.
"""

import numpy as np

from ..kernels import polynomial_fit, polynomial_eval


def polynomial_baseline(x, y, degree=6):
    """
    Global least-squares polynomial baseline.

    Positions are mapped onto [-1, 1] before building the normal equations.
    The fitted polynomial is the same; only the conditioning improves.

    Parameters
    ----------
    x : array_like
        Positions (m)
    y : array_like
        Measured values (mm)
    degree : int, optional
        Polynomial degree, default 6

    Returns
    -------
    baseline : ndarray
    corrected : ndarray
        y - baseline
    coeffs : ndarray
        Ascending coefficients in the scaled coordinate ``(x - centre) / half_span``

    Raises
    ------
    NumericalError
        If the normal equations are singular.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    centre = (x[0] + x[-1]) / 2
    half_span = (x[-1] - x[0]) / 2
    if half_span <= 0:
        half_span = 1.0
    t = (x - centre) / half_span

    coeffs = polynomial_fit(t, y, degree)
    baseline = polynomial_eval(coeffs, t)
    corrected = y - baseline

    return baseline, corrected, coeffs
