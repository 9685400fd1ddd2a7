"""
Radix-2 Cooley-Tukey discrete Fourier transform.

Inputs must have a power-of-two length; use :func:`zero_pad` first.
Values are handled as numpy complex128 (explicit real/imaginary parts).
"""

import numpy as np


def is_power_of_two(n):
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n):
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


def zero_pad(values, length=None):
    """
    Zero-pad ``values`` to ``length`` (default: the next power of two).

    Returns
    -------
    padded : ndarray
    """
    values = np.asarray(values)
    if length is None:
        length = next_power_of_two(len(values))
    if length < len(values):
        raise ValueError(f"Pad length {length} is shorter than the data ({len(values)})")
    padded = np.zeros(length, dtype=np.result_type(values.dtype, float))
    padded[:len(values)] = values
    return padded


def fft(values):
    """
    Forward DFT by recursive even/odd decomposition.

    Parameters
    ----------
    values : array_like
        Real or complex samples, length a power of two

    Returns
    -------
    spectrum : ndarray of complex
    """
    data = np.asarray(values, dtype=complex)
    n = len(data)
    if not is_power_of_two(n):
        raise ValueError(f"FFT length must be a power of two, got {n}")
    return _fft(data)


def _fft(data):
    n = len(data)
    if n == 1:
        return data.copy()

    even = _fft(data[0::2])
    odd = _fft(data[1::2])

    twiddle = np.exp(-2j * np.pi * np.arange(n // 2) / n) * odd
    return np.concatenate([even + twiddle, even - twiddle])


def ifft(spectrum):
    """Inverse DFT: conjugate, forward transform, conjugate, divide by length."""
    data = np.asarray(spectrum, dtype=complex)
    n = len(data)
    return np.conj(fft(np.conj(data))) / n


def power_spectrum(values):
    """|X|^2 of the zero-padded forward transform."""
    spectrum = fft(zero_pad(values))
    return spectrum.real ** 2 + spectrum.imag ** 2
