"""
Average Line Subtraction (ALS) correction engine.

Splits a measured track-geometry waveform into a long-wavelength baseline
and the short-wavelength irregularity left after subtracting it.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..baseline import apply_baseline, method_parameters, preserve_endpoints
from ..config import resolve_als_options
from ..data_model import as_series
from ..errors import TrackALSError, ValidationError
from ..utils.logger import log_info, log_warning
from .statistics import calculate_statistics


MIN_POINTS = 10


def apply_correction(data, options=None, **overrides):
    """
    Apply ALS correction to one series.

    Parameters
    ----------
    data : sequence
        Samples (``{'position', 'value'}`` mappings, pairs, 2-column array...)
    options : mapping, optional
        Engine options, see :data:`trackals.config.ALS_DEFAULTS`
    **overrides
        Options as keyword arguments

    Returns
    -------
    result : dict
        - 'data': per-point rows with ``position``, ``original_value``,
          ``baseline_value``, ``corrected_value`` and ``correction``
        - 'positions', 'baseline', 'corrected': ndarrays
        - 'statistics': see :func:`calculate_statistics`
        - 'parameters': resolved options

    Raises
    ------
    UnsupportedMethodError, ConfigurationError
        Before any computation, for bad options
    ValidationError
        If the series is shorter than 10 points or malformed
    NumericalError
        If the polynomial fit is singular

    Examples
    --------
    >>> result = apply_correction(samples, method='spline', baseline_length=40)
    >>> result['statistics']['improvement']
    """
    params = resolve_als_options(options, **overrides)
    return _correct(data, params)


def _correct(data, params):
    method = params['method']

    if data is None:
        raise ValidationError("No data supplied")
    try:
        count = len(data)
    except TypeError:
        raise ValidationError(f"Expected a sequence of samples, got {type(data).__name__}") from None
    if count < MIN_POINTS:
        raise ValidationError(f"Not enough data points: {count} (at least {MIN_POINTS} required)")

    positions, values = as_series(data, params['data_interval'])

    log_info(f"ALS correction: method={method}, baseline_length={params['baseline_length']}m, "
             f"points={len(values)}")

    baseline = apply_baseline(method, positions, values, **method_parameters(method, params))[0]

    if params['preserve_endpoints']:
        baseline = preserve_endpoints(values, baseline)

    corrected = values - baseline
    statistics = calculate_statistics(values, baseline, corrected)

    rows = [
        {
            'position': float(positions[i]),
            'original_value': float(values[i]),
            'baseline_value': float(baseline[i]),
            'corrected_value': float(corrected[i]),
            'correction': float(baseline[i]),
        }
        for i in range(len(values))
    ]

    log_info(f"RMS before: {statistics['original']['rms']:.3f}mm, "
             f"after: {statistics['corrected']['rms']:.3f}mm, "
             f"improvement: {statistics['improvement']:.1f}%")

    return {
        'data': rows,
        'positions': positions,
        'baseline': baseline,
        'corrected': corrected,
        'statistics': statistics,
        'parameters': params,
    }


def _dataset_entry(dataset, index):
    if isinstance(dataset, dict) and 'data' in dataset:
        return dataset.get('id') or f"dataset_{index}", dataset['data']
    return f"dataset_{index}", dataset


def _run_item(item_id, data, params):
    try:
        result = _correct(data, params)
    except TrackALSError as e:
        log_warning(f"ALS correction failed for {item_id}: {e}")
        return {'id': item_id, 'success': False, 'error': str(e)}
    return {'id': item_id, 'success': True, 'result': result}


def batch_correction(datasets, options=None, max_workers=None, **overrides):
    """
    Apply ALS correction to several independent series.

    Options are resolved once, so configuration errors abort the whole
    batch. Validation and numerical errors of a single series are recorded
    on that item and the remaining items are still processed.

    Parameters
    ----------
    datasets : sequence
        Each item is either ``{'id': ..., 'data': samples}`` or bare samples
    options : mapping, optional
        Engine options shared by every item
    max_workers : int, optional
        Process items on a thread pool of this size; sequential if None
    **overrides
        Options as keyword arguments

    Returns
    -------
    dict
        ``results``: per-item dicts in input order, ``{'id', 'success',
        'result'}`` or ``{'id', 'success', 'error'}``;
        ``summary``: ``total``, ``successful``, ``failed`` and
        ``average_improvement`` (successful items only)
    """
    params = resolve_als_options(options, **overrides)
    entries = [_dataset_entry(dataset, i) for i, dataset in enumerate(datasets)]

    if max_workers:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(lambda entry: _run_item(entry[0], entry[1], params), entries))
    else:
        results = [_run_item(item_id, data, params) for item_id, data in entries]

    successful = [r for r in results if r['success']]
    improvements = [r['result']['statistics']['improvement'] for r in successful]

    summary = {
        'total': len(results),
        'successful': len(successful),
        'failed': len(results) - len(successful),
        'average_improvement': float(np.mean(improvements)) if improvements else 0.0,
    }
    log_info(f"Batch correction: {summary['successful']}/{summary['total']} succeeded")

    return {'results': results, 'summary': summary}
