"""Custom exceptions."""

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .matrix import Matrix


class MatrixError(Exception):
    """Base class for matrix errors."""

    def __init__(self, message: str) -> None:
        self.message = message

    def __str__(self) -> str:
        """Pretty-print error."""
        return self.message


class DimensionMismatchError(MatrixError, ValueError):
    """Raised when operand shapes are incompatible."""

    def __init__(
        self, message: str, left_shape: Tuple[int, int], right_shape: Tuple[int, int]
    ) -> None:
        self.message = message
        self.left_shape = left_shape
        self.right_shape = right_shape

    def __str__(self) -> str:
        """Pretty-print error."""
        msg = (
            f"{self.message} ({self.left_shape[0]}x{self.left_shape[1]} and "
            f"{self.right_shape[0]}x{self.right_shape[1]})"
        )
        return msg


class MatrixIndexError(MatrixError, IndexError):
    """Raised when a 1-based index falls outside the matrix."""

    def __init__(
        self, message: str, index: Tuple[int, ...], shape: Tuple[int, int]
    ) -> None:
        self.message = message
        self.index = index
        self.shape = shape

    def __str__(self) -> str:
        """Pretty-print error."""
        index = ", ".join(str(i) for i in self.index)
        msg = (
            f"{self.message} (index ({index}) in a "
            f"{self.shape[0]}x{self.shape[1]} matrix)"
        )
        return msg


class ShapePreconditionError(MatrixError, ValueError):
    """Raised when an operation requires a particular shape, e.g. x1() on a 2x1."""


class BacktrackingLineSearchError(Exception):
    """Raised when BTLS fails."""

    def __init__(self, message: str) -> None:
        self.message = message

    def __str__(self) -> str:
        """Pretty-print error."""
        return self.message


class LineSearchError(BacktrackingLineSearchError):
    """Raised when the Armijo condition was not met within the allowed trials.

    Usually this happens because the search direction is not a descent direction, or
    because the objective is unbounded below along it.

    """

    def __init__(
        self,
        message: str,
        required_improvement: float,
        actual_improvement: float,
    ) -> None:
        self.message = message
        self.required_improvement = required_improvement
        self.actual_improvement = actual_improvement

    def __str__(self) -> str:
        """Pretty-print error."""
        msg = (
            f"{self.message} (required improvement >= {self.required_improvement:.03g}"
            f"; actual improvement = {self.actual_improvement:.03g})"
        )
        return msg


class OptimizationError(Exception):
    """Base class for optimization errors."""

    def __init__(
        self,
        message: str,
        gradient_norm: float,
        last_iterate: "Matrix",
    ) -> None:
        self.message = message
        self.gradient_norm = gradient_norm
        self.last_iterate = last_iterate

    def __str__(self) -> str:
        """Pretty-print error."""
        msg = f"{self.message} (gradient norm = {self.gradient_norm:.03g})"
        return msg


class GradientDescentError(OptimizationError):
    """Raised when gradient descent fails."""

    def __init__(
        self,
        message: str,
        nits: int,
        gradient_norm: float,
        last_iterate: "Matrix",
    ) -> None:
        super().__init__(message, gradient_norm, last_iterate)
        self.nits = nits

    def __str__(self) -> str:
        """Pretty-print error."""
        msg = (
            f"{self.message} ({self.nits} iteration(s); "
            f"gradient norm = {self.gradient_norm:.03g})"
        )
        return msg
