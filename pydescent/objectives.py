"""Objective functions with closed-form gradients."""

from abc import ABC, abstractmethod

import numpy as np

from .matrix import Matrix


class Objective(ABC):
    r"""Abstract base class for objective functions.

    An objective is a differentiable function f: R^n -> R. Gradient descent only needs
    f and its gradient, passed as two callables, so an instance is typically used as
       gradient_descent(obj.evaluate, obj.gradient, x0, epsilon).

    """

    @abstractmethod
    def evaluate(self, x: Matrix) -> float:
        """Evaluate objective."""

    @abstractmethod
    def gradient(self, x: Matrix) -> Matrix:
        """Calculate gradient, as a column vector shaped like x."""


class ExponentialValley(Objective):
    r"""Objective f(x) = x1^2 + (e^{x1} - x2)^2.

    The gradient is
       [ 2 * x1 + 2 * (e^{x1} - x2) * e^{x1} ]
       [        -2 * (e^{x1} - x2)          ],
    and the unique minimum is f(0, 1) = 0. Only defined for 2x1 column vectors.

    """

    def evaluate(self, x: Matrix) -> float:
        """Evaluate objective."""
        return x.x1() * x.x1() + (np.exp(x.x1()) - x.x2()) ** 2

    def gradient(self, x: Matrix) -> Matrix:
        """Calculate gradient."""
        e = np.exp(x.x1())
        return Matrix([2.0 * x.x1() + 2.0 * (e - x.x2()) * e, -2.0 * (e - x.x2())])


class Quadratic(Objective):
    r"""Objective f(x) = 0.5 * x^T A x - b^T x.

    The gradient is 0.5 * (A + A^T) x - b. When A is symmetric positive definite, the
    minimum is at the solution of A x = b.

    Parameters
    ----------
     A : Matrix
        n-by-n matrix.
     b : Matrix
        n-by-1 column vector.

    """

    def __init__(self, A: Matrix, b: Matrix) -> None:
        self.A = A
        self.b = b

    def evaluate(self, x: Matrix) -> float:
        """Evaluate objective."""
        return (0.5 * (x.t() * self.A * x) - self.b.t() * x).x()

    def gradient(self, x: Matrix) -> Matrix:
        """Calculate gradient."""
        return 0.5 * ((self.A + self.A.t()) * x) - self.b


class Rosenbrock(Objective):
    r"""Rosenbrock function f(x) = (a - x1)^2 + b * (x2 - x1^2)^2.

    The minimum is f(a, a^2) = 0, at the bottom of a long, flat, curved valley, which
    makes this a notoriously slow problem for gradient descent. Only defined for 2x1
    column vectors.

    """

    def __init__(self, a: float = 1.0, b: float = 100.0) -> None:
        self.a = a
        self.b = b

    def evaluate(self, x: Matrix) -> float:
        """Evaluate objective."""
        x1, x2 = x.x1(), x.x2()
        return (self.a - x1) ** 2 + self.b * (x2 - x1 * x1) ** 2

    def gradient(self, x: Matrix) -> Matrix:
        """Calculate gradient."""
        x1, x2 = x.x1(), x.x2()
        return Matrix(
            [
                -2.0 * (self.a - x1) - 4.0 * self.b * x1 * (x2 - x1 * x1),
                2.0 * self.b * (x2 - x1 * x1),
            ]
        )
