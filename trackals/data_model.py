"""
Conversion of sample sequences into position/value arrays.

Samples may be mappings with ``position``/``value`` (or ``x``/``y``) keys,
``(position, value)`` pairs, rows of a 2-column array or bare numbers.
Every numeric field is parsed and checked here, before it reaches the
kernels.
"""

import math
from collections.abc import Mapping

import numpy as np

from .errors import ValidationError


def _to_float(raw, field, index):
    if isinstance(raw, bool):
        raise ValidationError(f"Sample {index}: {field} must be numeric, got {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Sample {index}: {field} must be numeric, got {raw!r}") from None
    if not math.isfinite(value):
        raise ValidationError(f"Sample {index}: {field} is not finite ({raw!r})")
    return value


def _first_present(sample, keys):
    for key in keys:
        if sample.get(key) is not None:
            return sample[key]
    return None


def sample_fields(sample, index):
    """
    Split one sample into ``(position or None, value or None)`` without parsing.
    """
    if sample is None:
        return None, None
    if isinstance(sample, Mapping):
        return _first_present(sample, ('position', 'x')), _first_present(sample, ('value', 'y'))
    if isinstance(sample, (tuple, list, np.ndarray)):
        if len(sample) != 2:
            raise ValidationError(f"Sample {index}: expected (position, value), got {sample!r}")
        return sample[0], sample[1]
    return None, sample


def as_series(data, data_interval=0.25):
    """
    Convert samples to position and value arrays.

    Parameters
    ----------
    data : sequence or ndarray
        Samples in any of the supported forms
    data_interval : float, optional
        Spacing used for samples without a position (``index * data_interval``)

    Returns
    -------
    positions : ndarray
    values : ndarray

    Raises
    ------
    ValidationError
        If a value is missing or non-numeric, or positions are not strictly
        increasing.
    """
    if data is None:
        raise ValidationError("No data supplied")

    if isinstance(data, np.ndarray) and data.dtype != object:
        if not (data.ndim == 1 or (data.ndim == 2 and data.shape[1] == 2)):
            raise ValidationError(f"Expected a 1-D or (n, 2) array, got shape {data.shape}")
        try:
            table = data.astype(float)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Array samples must be numeric: {e}") from None
        if table.ndim == 2:
            positions, values = table[:, 0], table[:, 1]
        else:
            values = table
            positions = np.arange(len(values)) * data_interval
        validate_data(positions, values)
    else:
        positions = np.empty(len(data))
        values = np.empty(len(data))
        for i, sample in enumerate(data):
            raw_position, raw_value = sample_fields(sample, i)
            if raw_value is None:
                raise ValidationError(f"Sample {i}: missing value")
            values[i] = _to_float(raw_value, 'value', i)
            positions[i] = (i * data_interval if raw_position is None
                            else _to_float(raw_position, 'position', i))

    if len(positions) > 1 and np.any(np.diff(positions) <= 0):
        raise ValidationError("Positions must be strictly increasing")

    return positions, values


def line_values(line, length=None):
    """
    Values of a plan line or restored waveform as a float array.

    Missing samples (``None``, no value field, or beyond the end of ``line``
    when ``length`` is larger) are taken as 0. Present values must still be
    numeric.
    """
    if length is None:
        length = len(line)
    values = np.zeros(length)
    for i in range(min(length, len(line))):
        _, raw_value = sample_fields(line[i], i)
        if raw_value is not None:
            values[i] = _to_float(raw_value, 'value', i)
    return values


def line_positions(line, fallback=None, data_interval=0.25):
    """
    Positions of ``line``; falls back to ``fallback``'s position, then to
    ``index * data_interval``.
    """
    positions = np.arange(len(line)) * float(data_interval)
    for i in range(len(line)):
        raw_position, _ = sample_fields(line[i], i)
        if raw_position is None and fallback is not None and i < len(fallback):
            raw_position, _ = sample_fields(fallback[i], i)
        if raw_position is not None:
            positions[i] = _to_float(raw_position, 'position', i)
    return positions


def to_points(positions, values):
    """Build a list of ``{'position', 'value'}`` dicts."""
    return [{'position': float(p), 'value': float(v)} for p, v in zip(positions, values)]


def validate_data(x, y):
    """
    Validate position/value arrays.

    Parameters
    ----------
    x : array_like
        Positions
    y : array_like
        Values

    Returns
    -------
    bool
        True if data is valid

    Raises
    ------
    ValidationError
        If data validation fails
    """
    x = np.asarray(x)
    y = np.asarray(y)

    if len(x) != len(y):
        raise ValidationError(f"Positions and values must have same length: {len(x)} vs {len(y)}")

    if not np.all(np.isfinite(x)):
        raise ValidationError("Positions contain NaN or Inf")

    if not np.all(np.isfinite(y)):
        raise ValidationError("Values contain NaN or Inf")

    return True
