"""
Butterworth low-pass baseline in the frequency domain.
"""

import numpy as np

from ..kernels import fft, ifft, zero_pad


BUTTERWORTH_ORDER = 4


def butterworth_gain(length, cutoff_frequency, order=BUTTERWORTH_ORDER):
    """
    Low-pass gain per FFT bin.

    ``1 / sqrt(1 + (f/fc)**(2*order))`` with ``f = min(k, N-k) / N`` in
    cycles per sample, i.e. bins above Nyquist mirror the ones below.
    """
    k = np.arange(length)
    freq = np.minimum(k, length - k) / length
    return 1.0 / np.sqrt(1.0 + (freq / cutoff_frequency) ** (2 * order))


def butterworth_baseline(x, y, cutoff_wavelength=100.0, data_interval=0.25):
    """
    Butterworth (order 4) low-pass filtered baseline.

    The series mean is removed before zero-padding to the next power of two
    and added back afterwards, so the padding does not pull the ends
    toward zero.

    Parameters
    ----------
    x : array_like
        Positions (m); not used, kept for API consistency
    y : array_like
        Measured values (mm)
    cutoff_wavelength : float, optional
        Shortest wavelength kept in the baseline, metres, default 100
    data_interval : float, optional
        Sample spacing in metres, default 0.25

    Returns
    -------
    baseline : ndarray
    corrected : ndarray
        y - baseline
    """
    y = np.asarray(y, dtype=float)
    n = len(y)
    mean = y.mean()

    padded = zero_pad(y - mean)
    cutoff_frequency = data_interval / cutoff_wavelength

    spectrum = fft(padded) * butterworth_gain(len(padded), cutoff_frequency)
    baseline = ifft(spectrum).real[:n] + mean
    corrected = y - baseline

    return baseline, corrected
