"""
Least-squares polynomial fitting via the normal equations.
"""

import numpy as np

from ..errors import NumericalError, ValidationError


def gaussian_elimination(matrix, vector):
    """
    Solve ``matrix @ solution = vector`` by Gaussian elimination.

    Partial pivoting: before eliminating column ``i`` the row with the
    largest absolute entry in that column is swapped onto the diagonal.

    Parameters
    ----------
    matrix : array_like, shape (n, n)
        Coefficient matrix
    vector : array_like, shape (n,)
        Right-hand side

    Returns
    -------
    solution : ndarray, shape (n,)

    Raises
    ------
    NumericalError
        If a pivot is zero after the swap (singular system) or the solution
        is not finite.
    """
    a = np.array(matrix, dtype=float)
    b = np.array(vector, dtype=float)
    n = len(b)
    if a.shape != (n, n):
        raise ValidationError(f"Matrix shape {a.shape} does not match vector length {n}")

    augmented = np.column_stack([a, b])
    # Pivots this small relative to the matrix scale are rounding noise
    tolerance = np.finfo(float).eps * max(1.0, np.abs(a).max(initial=0.0)) * max(n, 1)

    # Forward elimination
    for i in range(n):
        max_row = i + int(np.argmax(np.abs(augmented[i:, i])))
        if max_row != i:
            augmented[[i, max_row]] = augmented[[max_row, i]]

        pivot = augmented[i, i]
        if abs(pivot) <= tolerance:
            raise NumericalError(f"Singular matrix: zero pivot in column {i}")

        factors = augmented[i + 1:, i] / pivot
        augmented[i + 1:, i:] -= np.outer(factors, augmented[i, i:])

    # Back substitution
    solution = np.zeros(n)
    for i in range(n - 1, -1, -1):
        solution[i] = (augmented[i, n] - augmented[i, i + 1:n] @ solution[i + 1:]) / augmented[i, i]

    if not np.all(np.isfinite(solution)):
        raise NumericalError("Linear solve produced non-finite values")

    return solution


def polynomial_fit(x, y, degree):
    """
    Least-squares polynomial fit.

    Builds the normal equations ``M[i][j] = sum(x**(i+j))`` and
    ``v[i] = sum(y * x**i)`` and solves them with
    :func:`gaussian_elimination`.

    Parameters
    ----------
    x : array_like
        Sample positions
    y : array_like
        Sample values
    degree : int
        Polynomial degree

    Returns
    -------
    coefficients : ndarray
        Coefficients in ascending order (``c0 + c1*x + c2*x**2 + ...``)

    Raises
    ------
    NumericalError
        If the normal equations are singular (e.g. fewer distinct positions
        than coefficients).
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if len(x) != len(y):
        raise ValidationError(f"x and y must have same length: {len(x)} vs {len(y)}")
    if degree < 0:
        raise ValidationError(f"Polynomial degree must be non-negative, got {degree}")

    powers = np.vstack([x ** k for k in range(2 * degree + 1)])
    sums = powers.sum(axis=1)

    matrix = np.array([[sums[i + j] for j in range(degree + 1)] for i in range(degree + 1)])
    vector = powers[:degree + 1] @ y

    return gaussian_elimination(matrix, vector)


def polynomial_eval(coefficients, x):
    """Evaluate ascending-order polynomial coefficients at ``x`` (Horner's scheme)."""
    x = np.asarray(x, dtype=float)
    result = np.zeros_like(x)
    for c in reversed(coefficients):
        result = result * x + c
    return result
