from __future__ import annotations

import unittest

import numpy as np
from numpy.testing import assert_allclose
from scipy.interpolate import CubicSpline

from trackals.errors import NumericalError, ValidationError
from trackals.kernels import (
    binomial_smooth,
    evaluate_spline,
    fft,
    gaussian_elimination,
    ifft,
    moving_average,
    natural_cubic_spline,
    next_power_of_two,
    polynomial_eval,
    polynomial_fit,
    three_point_smooth,
    zero_pad,
)


class TestGaussianElimination(unittest.TestCase):
    def test_matches_numpy_solve(self) -> None:
        a = np.array([[4.0, -2.0, 1.0], [-2.0, 4.0, -2.0], [1.0, -2.0, 4.0]])
        b = np.array([11.0, -16.0, 17.0])
        assert_allclose(gaussian_elimination(a, b), np.linalg.solve(a, b))

    def test_zero_leading_entry_needs_pivoting(self) -> None:
        a = [[0.0, 1.0], [1.0, 0.0]]
        assert_allclose(gaussian_elimination(a, [3.0, 5.0]), [5.0, 3.0])

    def test_singular_matrix_raises(self) -> None:
        with self.assertRaises(NumericalError):
            gaussian_elimination([[1.0, 2.0], [2.0, 4.0]], [1.0, 2.0])


class TestPolynomialFit(unittest.TestCase):
    def test_interpolates_when_degree_is_n_minus_one(self) -> None:
        x = np.array([0.0, 1.0, 2.0, 3.0])
        y = 1 + 2 * x - x ** 2 + 0.5 * x ** 3
        coeffs = polynomial_fit(x, y, 3)
        assert_allclose(coeffs, [1.0, 2.0, -1.0, 0.5], atol=1e-9)
        assert_allclose(polynomial_eval(coeffs, x), y, atol=1e-9)

    def test_least_squares_line(self) -> None:
        x = np.linspace(-1, 1, 21)
        y = 3 * x - 2
        assert_allclose(polynomial_fit(x, y, 1), [-2.0, 3.0], atol=1e-12)

    def test_degenerate_positions_raise(self) -> None:
        with self.assertRaises(NumericalError):
            polynomial_fit(np.zeros(12), np.arange(12.0), 2)

    def test_polynomial_eval_horner(self) -> None:
        assert_allclose(polynomial_eval([1.0, 0.0, 2.0], [0.0, 1.0, 2.0]), [1.0, 3.0, 9.0])


class TestNaturalCubicSpline(unittest.TestCase):
    def setUp(self) -> None:
        self.x = np.array([0.0, 1.0, 2.5, 4.0, 6.0, 7.0])
        self.y = np.array([0.0, 2.0, -1.0, 3.0, 1.0, 0.5])

    def test_reproduces_knot_values(self) -> None:
        spline = natural_cubic_spline(self.x, self.y)
        assert_allclose(evaluate_spline(spline, self.x), self.y, atol=1e-12)
        self.assertAlmostEqual(evaluate_spline(spline, 2.5), -1.0)

    def test_matches_scipy_natural_spline(self) -> None:
        spline = natural_cubic_spline(self.x, self.y)
        reference = CubicSpline(self.x, self.y, bc_type='natural')
        pos = np.linspace(-1.0, 8.0, 91)
        assert_allclose(evaluate_spline(spline, pos), reference(pos), atol=1e-9)

    def test_two_knots_is_linear(self) -> None:
        spline = natural_cubic_spline([0.0, 2.0], [1.0, 5.0])
        assert_allclose(evaluate_spline(spline, [0.5, 1.0, 3.0]), [2.0, 3.0, 7.0])

    def test_invalid_knots(self) -> None:
        with self.assertRaises(ValidationError):
            natural_cubic_spline([0.0], [1.0])
        with self.assertRaises(ValidationError):
            natural_cubic_spline([0.0, 1.0, 1.0], [1.0, 2.0, 3.0])


class TestFFT(unittest.TestCase):
    def test_matches_numpy(self) -> None:
        rng = np.random.default_rng(0)
        values = rng.normal(size=64) + 1j * rng.normal(size=64)
        assert_allclose(fft(values), np.fft.fft(values), atol=1e-10)

    def test_round_trip(self) -> None:
        rng = np.random.default_rng(1)
        for n in (1, 2, 8, 256):
            values = rng.normal(size=n)
            restored = ifft(fft(values))
            assert_allclose(restored.real, values, atol=1e-10)
            assert_allclose(restored.imag, 0.0, atol=1e-10)

    def test_rejects_non_power_of_two(self) -> None:
        with self.assertRaises(ValueError):
            fft(np.ones(12))

    def test_padding_helpers(self) -> None:
        self.assertEqual(next_power_of_two(1), 1)
        self.assertEqual(next_power_of_two(5), 8)
        self.assertEqual(next_power_of_two(8), 8)
        padded = zero_pad([1.0, 2.0, 3.0])
        assert_allclose(padded, [1.0, 2.0, 3.0, 0.0])


class TestSmoothing(unittest.TestCase):
    def test_moving_average_clips_window(self) -> None:
        assert_allclose(moving_average([1.0, 2.0, 3.0, 4.0, 5.0], 1), [1.5, 2.0, 3.0, 4.0, 4.5])

    def test_moving_average_wide_window_is_global_mean(self) -> None:
        values = np.array([1.0, 5.0, 2.0, 8.0])
        assert_allclose(moving_average(values, 10), np.full(4, values.mean()))

    def test_binomial_smooth_keeps_ends(self) -> None:
        assert_allclose(binomial_smooth([0.0, 0.0, 4.0, 0.0, 0.0], 1), [0.0, 1.0, 2.0, 1.0, 0.0])
        smoothed = binomial_smooth([3.0, 0.0, 4.0, 0.0, 7.0], 3)
        self.assertEqual(smoothed[0], 3.0)
        self.assertEqual(smoothed[-1], 7.0)

    def test_three_point_smooth_uses_neighbors(self) -> None:
        current = [1.0, 2.0, 3.0]
        neighbors = [10.0, 20.0, 30.0]
        assert_allclose(three_point_smooth(current, neighbors), [1.0, 11.0, 3.0])


if __name__ == "__main__":
    unittest.main()
