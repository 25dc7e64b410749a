"""Gradient descent with an Armijo line search, on a small dense matrix type."""

from .exceptions import (
    BacktrackingLineSearchError,
    DimensionMismatchError,
    GradientDescentError,
    LineSearchError,
    MatrixError,
    MatrixIndexError,
    OptimizationError,
    ShapePreconditionError,
)
from .line_search import armijo_line_search
from .matrix import Matrix, eye, identity
from .numerical_helpers import approximate_gradient, check_gradient
from .objectives import ExponentialValley, Objective, Quadratic, Rosenbrock
from .optimization import (
    GradientDescent,
    GradientDescentResult,
    OptimizationResult,
    OptimizationSettings,
    Optimizer,
    gradient_descent,
)

__all__ = [
    "Matrix",
    "eye",
    "identity",
    "armijo_line_search",
    "gradient_descent",
    "GradientDescent",
    "GradientDescentResult",
    "OptimizationResult",
    "OptimizationSettings",
    "Optimizer",
    "Objective",
    "ExponentialValley",
    "Quadratic",
    "Rosenbrock",
    "approximate_gradient",
    "check_gradient",
    "BacktrackingLineSearchError",
    "DimensionMismatchError",
    "GradientDescentError",
    "LineSearchError",
    "MatrixError",
    "MatrixIndexError",
    "OptimizationError",
    "ShapePreconditionError",
]
