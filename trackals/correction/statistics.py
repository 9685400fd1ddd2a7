"""
Before/after statistics for a baseline correction.
"""

import numpy as np

from ..kernels import power_spectrum


def describe(values):
    """
    Descriptive statistics of one series.

    Returns
    -------
    dict
        ``mean``, ``std_dev`` (population), ``rms``, ``min``, ``max``, ``range``
    """
    values = np.asarray(values, dtype=float)
    mean = float(np.mean(values))
    v_min = float(np.min(values))
    v_max = float(np.max(values))
    return {
        'mean': mean,
        'std_dev': float(np.sqrt(np.mean((values - mean) ** 2))),
        'rms': float(np.sqrt(np.mean(values ** 2))),
        'min': v_min,
        'max': v_max,
        'range': v_max - v_min,
    }


def _percent(numerator, denominator):
    return float(numerator / denominator * 100) if denominator > 0 else 0.0


def _ratio(part, whole):
    return float(part / whole) if whole > 0 else 0.0


def analyze_frequency_components(original, corrected):
    """
    Compare low- and high-frequency power before and after correction.

    Both series are zero-padded to the same power-of-two length ``N``; bins
    ``[0, N/10)`` count as low frequency, ``[N/10, N/2)`` as high frequency.

    Returns
    -------
    dict
        ``original_low_freq_ratio``, ``corrected_low_freq_ratio`` (share of
        power below the split), ``low_freq_reduction`` (% of low-frequency
        power removed) and ``high_freq_preservation`` (% of high-frequency
        power kept). Percentages with a zero denominator are reported as 0.
    """
    original_power = power_spectrum(original)
    corrected_power = power_spectrum(corrected)

    n = len(original_power)
    cutoff = n // 10
    half = n // 2

    original_low = original_power[:cutoff].sum()
    original_high = original_power[cutoff:half].sum()
    corrected_low = corrected_power[:cutoff].sum()
    corrected_high = corrected_power[cutoff:half].sum()

    return {
        'original_low_freq_ratio': _ratio(original_low, original_low + original_high),
        'corrected_low_freq_ratio': _ratio(corrected_low, corrected_low + corrected_high),
        'low_freq_reduction': _percent(original_low - corrected_low, original_low),
        'high_freq_preservation': _percent(corrected_high, original_high),
    }


def calculate_statistics(original, baseline, corrected):
    """
    Calculate correction statistics.

    Parameters
    ----------
    original : array_like
        Raw values
    baseline : array_like
        Extracted baseline
    corrected : array_like
        original - baseline

    Returns
    -------
    stats : dict
        - 'original', 'baseline', 'corrected': :func:`describe` of each series
        - 'improvement': RMS reduction in percent
        - 'subtracted_power': original RMS minus corrected RMS
        - 'frequency_analysis': see :func:`analyze_frequency_components`
    """
    original_stats = describe(original)
    baseline_stats = describe(baseline)
    corrected_stats = describe(corrected)

    if original_stats['rms'] > 0:
        improvement = (1 - corrected_stats['rms'] / original_stats['rms']) * 100
    else:
        improvement = 0.0

    return {
        'original': original_stats,
        'baseline': baseline_stats,
        'corrected': corrected_stats,
        'improvement': float(improvement),
        'subtracted_power': original_stats['rms'] - corrected_stats['rms'],
        'frequency_analysis': analyze_frequency_components(original, corrected),
    }


def format_statistics(stats):
    """
    Format correction statistics for display.

    Parameters
    ----------
    stats : dict
        Statistics dictionary from :func:`calculate_statistics`

    Returns
    -------
    str
        Formatted statistics string
    """
    lines = []
    lines.append("=== ALS Correction Statistics ===")
    for name in ('original', 'baseline', 'corrected'):
        s = stats[name]
        lines.append(f"{name.capitalize():<10} mean={s['mean']:.3f} std={s['std_dev']:.3f} "
                     f"rms={s['rms']:.3f} min={s['min']:.3f} max={s['max']:.3f} mm")
    lines.append(f"Improvement = {stats['improvement']:.1f}%")
    freq = stats['frequency_analysis']
    lines.append(f"Low-frequency reduction = {freq['low_freq_reduction']:.1f}%")
    lines.append(f"High-frequency preservation = {freq['high_freq_preservation']:.1f}%")

    return '\n'.join(lines)
