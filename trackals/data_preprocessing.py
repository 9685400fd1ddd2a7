"""
Data preprocessing utilities.
"""

import numpy as np
from scipy.interpolate import interp1d

from .errors import ValidationError


def crop_range(positions, values, start=None, end=None):
    """
    Crop a series to a position range.

    Parameters
    ----------
    positions : array_like
        Positions (m)
    values : array_like
        Values (mm)
    start : float or None, optional
        Minimum position (inclusive)
    end : float or None, optional
        Maximum position (inclusive)

    Returns
    -------
    positions_roi : ndarray
    values_roi : ndarray
    """
    positions = np.asarray(positions, dtype=float)
    values = np.asarray(values, dtype=float)

    mask = np.ones(len(positions), dtype=bool)
    if start is not None:
        mask &= (positions >= start)
    if end is not None:
        mask &= (positions <= end)

    return positions[mask], values[mask]


def resample_uniform(positions, values, data_interval=0.25):
    """
    Resample an irregularly spaced series onto a uniform grid.

    Parameters
    ----------
    positions : array_like
        Positions (m), strictly increasing
    values : array_like
        Values (mm)
    data_interval : float, optional
        Output spacing in metres, default 0.25

    Returns
    -------
    positions_uniform : ndarray
        ``start, start + data_interval, ...`` up to the last position
    values_uniform : ndarray
        Linearly interpolated values

    Examples
    --------
    >>> x_new, y_new = resample_uniform(x, y, data_interval=0.25)
    """
    positions = np.asarray(positions, dtype=float)
    values = np.asarray(values, dtype=float)

    if len(positions) < 2:
        raise ValidationError("Need at least 2 points to resample")
    if data_interval <= 0:
        raise ValidationError(f"data_interval must be positive, got {data_interval}")

    grid = np.arange(positions[0], positions[-1] + data_interval / 2, data_interval)
    grid = grid[grid <= positions[-1]]

    interp_func = interp1d(positions, values, kind='linear')
    return grid, interp_func(grid)
