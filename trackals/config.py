"""
Default option tables and option resolution.

Defaults are exposed as read-only mappings; every call resolves its own
copy so nothing is shared between invocations.
"""

import numbers
from types import MappingProxyType

from .baseline import BASELINE_METHODS
from .errors import ConfigurationError, UnsupportedMethodError


ALS_DEFAULTS = MappingProxyType({
    'method': 'moving_average',
    'baseline_length': 100.0,     # m
    'data_interval': 0.25,        # m
    'preserve_endpoints': True,
    'polynomial_degree': 6,
    'knot_spacing': None,         # m, defaults to baseline_length / 4
    'cutoff_wavelength': None,    # m, defaults to baseline_length
})

OPTIMIZER_DEFAULTS = MappingProxyType({
    'max_upward': 50.0,           # mm
    'max_downward': 10.0,         # mm
    'target_upward_ratio': 0.7,
    'iteration_limit': 100,
    'convergence_threshold': 0.01,
    'lift_margin': 1.0,           # mm
    'enable_lift': True,
    'data_interval': 0.25,        # m
})

SUPPORTED_METHODS = tuple(BASELINE_METHODS)

# Upstream JSON payloads use camelCase keys
_KEY_ALIASES = MappingProxyType({
    'baselineLength': 'baseline_length',
    'dataInterval': 'data_interval',
    'preserveEndpoints': 'preserve_endpoints',
    'polynomialDegree': 'polynomial_degree',
    'knotSpacing': 'knot_spacing',
    'cutoffWavelength': 'cutoff_wavelength',
    'maxUpward': 'max_upward',
    'maxDownward': 'max_downward',
    'targetUpwardRatio': 'target_upward_ratio',
    'iterationLimit': 'iteration_limit',
    'convergenceThreshold': 'convergence_threshold',
    'liftMargin': 'lift_margin',
    'enableLift': 'enable_lift',
})


def _normalize_keys(options, overrides, defaults):
    merged = {}
    for source in (options or {}), overrides:
        for key, value in source.items():
            key = _KEY_ALIASES.get(key, key)
            if key not in defaults:
                raise ConfigurationError(
                    f"Unknown option: {key!r}. Known options: {sorted(defaults)}")
            merged[key] = value
    return merged


def _positive(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not value > 0:
        raise ConfigurationError(f"{name} must be a positive number, got {value!r}")
    return float(value)


def _non_negative(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not value >= 0:
        raise ConfigurationError(f"{name} must be a non-negative number, got {value!r}")
    return float(value)


def _non_negative_int(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
        raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
    return int(value)


def resolve_als_options(options=None, **overrides):
    """
    Merge user options with ALS_DEFAULTS and validate them.

    Parameters
    ----------
    options : mapping, optional
        Option mapping; snake_case or camelCase keys.
    **overrides
        Options given as keyword arguments, applied after ``options``.

    Returns
    -------
    dict
        Fully resolved options with derived defaults filled in.

    Raises
    ------
    UnsupportedMethodError
        If ``method`` is not a registered baseline method.
    ConfigurationError
        If any other option is unknown or out of range.
    """
    resolved = dict(ALS_DEFAULTS)
    for key, value in _normalize_keys(options, overrides, ALS_DEFAULTS).items():
        if value is not None:
            resolved[key] = value

    if resolved['method'] not in BASELINE_METHODS:
        raise UnsupportedMethodError(resolved['method'], SUPPORTED_METHODS)

    resolved['baseline_length'] = _positive('baseline_length', resolved['baseline_length'])
    resolved['data_interval'] = _positive('data_interval', resolved['data_interval'])
    resolved['polynomial_degree'] = _non_negative_int(
        'polynomial_degree', resolved['polynomial_degree'])
    resolved['preserve_endpoints'] = bool(resolved['preserve_endpoints'])

    if resolved['knot_spacing'] is None:
        resolved['knot_spacing'] = resolved['baseline_length'] / 4
    resolved['knot_spacing'] = _positive('knot_spacing', resolved['knot_spacing'])

    if resolved['cutoff_wavelength'] is None:
        resolved['cutoff_wavelength'] = resolved['baseline_length']
    resolved['cutoff_wavelength'] = _positive('cutoff_wavelength', resolved['cutoff_wavelength'])

    return resolved


def resolve_optimizer_options(options=None, **overrides):
    """Merge optimizer options with OPTIMIZER_DEFAULTS and validate them."""
    resolved = dict(OPTIMIZER_DEFAULTS)
    for key, value in _normalize_keys(options, overrides, OPTIMIZER_DEFAULTS).items():
        if value is not None:
            resolved[key] = value

    resolved['max_upward'] = _positive('max_upward', resolved['max_upward'])
    resolved['max_downward'] = _non_negative('max_downward', resolved['max_downward'])
    resolved['iteration_limit'] = _non_negative_int('iteration_limit', resolved['iteration_limit'])
    resolved['convergence_threshold'] = _non_negative(
        'convergence_threshold', resolved['convergence_threshold'])
    resolved['lift_margin'] = _non_negative('lift_margin', resolved['lift_margin'])
    resolved['data_interval'] = _positive('data_interval', resolved['data_interval'])
    resolved['enable_lift'] = bool(resolved['enable_lift'])

    ratio = resolved['target_upward_ratio']
    if isinstance(ratio, bool) or not isinstance(ratio, numbers.Real) or not 0 < ratio <= 1:
        raise ConfigurationError(f"target_upward_ratio must be in (0, 1], got {ratio!r}")
    resolved['target_upward_ratio'] = float(ratio)

    return resolved
