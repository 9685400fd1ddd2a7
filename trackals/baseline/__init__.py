"""
Baseline extraction methods for Average Line Subtraction.

This module provides the long-wavelength baseline algorithms:
- Moving average with binomial post-smoothing
- Global polynomial fit
- Natural cubic spline through knot samples
- Butterworth low-pass filter (FFT based)
"""

from types import MappingProxyType

from ..errors import UnsupportedMethodError
from .moving_average import moving_average_baseline, window_size
from .polynomial import polynomial_baseline
from .spline import spline_baseline, select_knots
from .butterworth import butterworth_baseline, butterworth_gain, BUTTERWORTH_ORDER
from .endpoints import preserve_endpoints, transition_length


# Baseline method registry
BASELINE_METHODS = MappingProxyType({
    'moving_average': moving_average_baseline,
    'polynomial': polynomial_baseline,
    'spline': spline_baseline,
    'butterworth': butterworth_baseline,
})

# Engine option name -> method keyword argument
METHOD_PARAMETERS = MappingProxyType({
    'moving_average': {'baseline_length': 'baseline_length', 'data_interval': 'data_interval'},
    'polynomial': {'polynomial_degree': 'degree'},
    'spline': {'knot_spacing': 'knot_spacing', 'data_interval': 'data_interval'},
    'butterworth': {'cutoff_wavelength': 'cutoff_wavelength', 'data_interval': 'data_interval'},
})


def apply_baseline(method, x, y, **params):
    """
    Compute a baseline using the specified method.

    Parameters
    ----------
    method : str
        Baseline method name: 'moving_average', 'polynomial', 'spline',
        'butterworth'
    x : array_like
        Positions (m)
    y : array_like
        Measured values (mm)
    **params
        Method-specific parameters

    Returns
    -------
    tuple
        ``(baseline, corrected, ...)``; some methods append extra outputs

    Examples
    --------
    >>> baseline, corrected = apply_baseline('moving_average', x, y, baseline_length=40)
    >>> baseline, corrected, coeffs = apply_baseline('polynomial', x, y, degree=4)
    >>> baseline, corrected, knots = apply_baseline('spline', x, y, knot_spacing=10)
    """
    if method not in BASELINE_METHODS:
        raise UnsupportedMethodError(method, BASELINE_METHODS)

    func = BASELINE_METHODS[method]
    return func(x, y, **params)


def method_parameters(method, options):
    """Pick the keyword arguments for ``method`` out of resolved engine options."""
    return {kwarg: options[name] for name, kwarg in METHOD_PARAMETERS[method].items()}


def list_baseline_methods():
    """
    List all available baseline methods.

    Returns
    -------
    list
        List of method names
    """
    return list(BASELINE_METHODS.keys())


__all__ = [
    'moving_average_baseline',
    'window_size',
    'polynomial_baseline',
    'spline_baseline',
    'select_knots',
    'butterworth_baseline',
    'butterworth_gain',
    'BUTTERWORTH_ORDER',
    'preserve_endpoints',
    'transition_length',
    'apply_baseline',
    'method_parameters',
    'list_baseline_methods',
    'BASELINE_METHODS',
    'METHOD_PARAMETERS',
]
