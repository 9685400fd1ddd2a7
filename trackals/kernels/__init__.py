"""
Numerical kernels: polynomial least squares, natural cubic splines,
radix-2 FFT and window smoothing.
"""

from .linalg import gaussian_elimination, polynomial_fit, polynomial_eval
from .spline import SplineCoefficients, natural_cubic_spline, evaluate_spline
from .fft import fft, ifft, zero_pad, next_power_of_two, is_power_of_two, power_spectrum
from .smoothing import moving_average, binomial_smooth, three_point_smooth

__all__ = [
    'gaussian_elimination',
    'polynomial_fit',
    'polynomial_eval',
    'SplineCoefficients',
    'natural_cubic_spline',
    'evaluate_spline',
    'fft',
    'ifft',
    'zero_pad',
    'next_power_of_two',
    'is_power_of_two',
    'power_spectrum',
    'moving_average',
    'binomial_smooth',
    'three_point_smooth',
]
