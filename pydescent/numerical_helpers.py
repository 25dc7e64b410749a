"""Finite-difference helpers for checking closed-form gradients."""

from typing import Callable

import numpy as np
import numpy.typing as npt
from scipy import optimize

from .line_search import GradientFunction, ObjectiveFunction
from .matrix import Matrix

_DEFAULT_STEP = float(np.sqrt(np.finfo(float).eps))


def _flat_objective(
    f: ObjectiveFunction, x: Matrix
) -> Callable[[npt.NDArray[np.float64]], float]:
    """Wrap f so it accepts the entries of a matrix shaped like x as a flat array."""
    shape = x.shape
    return lambda v: f(Matrix(v.reshape(shape)))


def approximate_gradient(
    f: ObjectiveFunction, x: Matrix, step: float = _DEFAULT_STEP
) -> Matrix:
    """Approximate the gradient of f at x by forward differences.

    Parameters
    ----------
     f : Callable[[Matrix], float]
        Objective function.
     x : Matrix
        Point at which to evaluate the gradient.
     step : float, optional
        Finite-difference step. Defaults to the square root of machine epsilon.

    Returns
    -------
     g : Matrix
        The approximate gradient, shaped like x.

    """
    grad = optimize.approx_fprime(x.to_numpy().ravel(), _flat_objective(f, x), step)
    return Matrix(grad.reshape(x.shape))


def check_gradient(
    f: ObjectiveFunction,
    gradf: GradientFunction,
    x: Matrix,
    step: float = _DEFAULT_STEP,
) -> float:
    """Compare gradf against a finite-difference approximation of the gradient of f.

    Returns
    -------
     err : float
        Euclidean norm of the difference between gradf(x) and the forward-difference
        gradient. For a correct gradient this is on the order of step times the
        curvature of f.

    """
    shape = x.shape
    return float(
        optimize.check_grad(
            _flat_objective(f, x),
            lambda v: gradf(Matrix(v.reshape(shape))).to_numpy().ravel(),
            x.to_numpy().ravel(),
            epsilon=step,
        )
    )
