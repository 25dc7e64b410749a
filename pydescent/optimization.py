"""Gradient descent."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Literal, Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from .exceptions import BacktrackingLineSearchError, GradientDescentError
from .line_search import GradientFunction, ObjectiveFunction, armijo_line_search
from .matrix import Matrix


@dataclass
class OptimizationSettings:
    """Optimization settings.

    Parameters
    ----------
    armijo_s : float, default=0.8
        Initial step size tried by the Armijo line search. Each iteration starts from
        this step and shrinks it until the sufficient decrease condition holds.
    armijo_beta : float, default=0.8
        The factor by which the step size is reduced after each failed trial. Must be
        strictly between 0 and 1.
    armijo_sigma : float, default=0.8
        The fraction of the decrease predicted by the linear approximation that a step
        must actually achieve. Must be strictly between 0 and 1.
    max_iterations : int, optional
        Maximum number of descent steps. If None (default), iterate until the gradient
        is small enough, however long that takes.
    max_line_search_iterations : int, optional
        Maximum number of trial steps within a single line search. If None (default),
        the line search backtracks until the Armijo condition holds, which is not
        guaranteed to happen. Otherwise it must be at least 1.
    verbose : bool, default=False
        If True, print status along with how long it took to execute each step.

    """

    armijo_s: float = 0.8
    armijo_beta: float = 0.8
    armijo_sigma: float = 0.8
    max_iterations: Optional[int] = None
    max_line_search_iterations: Optional[int] = None
    verbose: bool = False


@dataclass
class OptimizationResult:
    """Wrapper for generic optimization result."""

    solution: Matrix


@dataclass
class GradientDescentResult(OptimizationResult):
    """Wrapper for the results of gradient descent.

    Parameters
    ----------
     solution : Matrix
        The solution.
     objective_value : float
        Objective value at the solution.
     gradient_norm : float
        Norm of the gradient at the solution; less than epsilon.
     objective_values : List[float]
        Objective value at each iterate, starting with x0.
     step_sizes : List[float]
        Step size chosen by the line search at each iteration.
     nits : int
        Number of descent steps taken.
     line_search_calls : int
        Number of times the line search was invoked.
     status : [0]
        Solution status:
          0 : method completed successfully
     message : str
          Summary of result.

    """

    objective_value: float
    gradient_norm: float
    objective_values: List[float]
    step_sizes: List[float]
    nits: int
    line_search_calls: int
    status: Literal[0]
    message: str

    def plot_convergence(self, ax: Optional[Axes] = None) -> Axes:
        """Plot convergence."""
        if ax is None:
            _, ax = plt.subplots()

        ax.plot(
            [ii for ii in range(len(self.objective_values))],
            self.objective_values,
            marker="o",
        )
        ax.set_xlabel("Iteration")
        ax.set_ylabel("Objective Value")
        return ax


class Optimizer(ABC):
    """Base class for an optimizer."""

    def __init__(self, settings: Optional[OptimizationSettings] = None) -> None:
        """Initialize optimizer."""
        if settings is None:
            self.settings: OptimizationSettings = OptimizationSettings()
        else:
            self.settings = settings

    @abstractmethod
    def solve(self, x0: Matrix, **kwargs) -> OptimizationResult:
        """Solve optimization problem.

        Parameters
        ----------
         x0 : Matrix
            Initial guess.

        Returns
        -------
         res : OptimizationResult
            The solution.

        """


def _format_point(x: Matrix) -> str:
    return "(" + ", ".join(f"{v:g}" for v in x) + ")"


class GradientDescent(Optimizer):
    """Minimize an unconstrained function by gradient descent.

    Each iteration moves along the negative gradient,
       x_{k+1} = x_k - a_k * grad_f(x_k),
    with the step a_k chosen by an Armijo backtracking line search, and the method stops
    as soon as || grad_f(x_k) || < epsilon.

    Parameters
    ----------
     f : Callable[[Matrix], float]
        Objective function.
     gradf : Callable[[Matrix], Matrix]
        Gradient of f.
     settings : OptimizationSettings, optional
        Line search parameters, iteration caps and verbosity.

    """

    def __init__(
        self,
        f: ObjectiveFunction,
        gradf: GradientFunction,
        settings: Optional[OptimizationSettings] = None,
    ) -> None:
        super().__init__(settings=settings)
        self.f = f
        self.gradf = gradf

    def solve(
        self, x0: Matrix, epsilon: float = 1e-4, **kwargs
    ) -> GradientDescentResult:
        """Minimize f starting from x0.

        Parameters
        ----------
         x0 : Matrix
            Initial point (column vector).
         epsilon : float, default=1e-4
            Stop once the norm of the gradient is less than this. Must be positive.

        Returns
        -------
         res : GradientDescentResult
            The results are wrapped in a GradientDescentResult class, which includes the
            solution and other helpful info.

        Raises
        ------
         GradientDescentError: if settings.max_iterations descent steps were taken
            without converging, or if a line search capped by
            settings.max_line_search_iterations failed.

        """
        if epsilon <= 0:
            raise ValueError("epsilon must be positive.")

        settings = self.settings
        xk = Matrix(x0)
        if settings.verbose:
            overall_start_time = time.time()
            print("  Starting gradient descent")
            print(f"  Initial point: {_format_point(xk)}")
            print(f"  Epsilon: {epsilon}")

        objective_values = [self.f(xk)]
        step_sizes: List[float] = []
        nit = 0
        line_search_calls = 0
        while True:
            grad = self.gradf(xk)
            gradient_norm = grad.mod()
            if gradient_norm < epsilon:
                break

            if settings.max_iterations is not None and nit >= settings.max_iterations:
                raise GradientDescentError(
                    message="Gradient descent did not converge.",
                    nits=nit,
                    gradient_norm=gradient_norm,
                    last_iterate=xk,
                )

            nit += 1
            if settings.verbose:
                start_time = time.time()

            dk = -grad
            try:
                ak = armijo_line_search(
                    settings.armijo_s,
                    settings.armijo_beta,
                    settings.armijo_sigma,
                    self.f,
                    self.gradf,
                    xk,
                    dk,
                    max_iterations=settings.max_line_search_iterations,
                    verbose=settings.verbose,
                )
            except BacktrackingLineSearchError as e:
                raise GradientDescentError(
                    message="Backtracking line search failed",
                    nits=nit,
                    gradient_norm=gradient_norm,
                    last_iterate=xk,
                ) from e
            line_search_calls += 1

            xk = xk + ak * dk
            step_sizes.append(ak)
            objective_values.append(self.f(xk))

            if settings.verbose:
                end_time = time.time()
                print(
                    f"  {nit:02d} step={ak:.06g}, f={objective_values[-1]:.06g}, "
                    f"|grad f|={gradient_norm:.03g} "
                    f"({1000 * (end_time - start_time):.03f} ms)"
                )

        if settings.verbose:
            overall_end_time = time.time()
            # Gradient evaluations, counting the final convergence check.
            print(f"  n_iterations: {nit + 1}")
            print(f"  n_call_armijo: {line_search_calls}")
            print(f"  optimal point: {_format_point(xk)}")
            print(f"  optimal value: {objective_values[-1]}")
            print(
                f"  Gradient descent completed in "
                f"{1000 * (overall_end_time - overall_start_time):.03f} ms"
            )

        return GradientDescentResult(
            solution=xk,
            objective_value=objective_values[-1],
            gradient_norm=gradient_norm,
            objective_values=objective_values,
            step_sizes=step_sizes,
            nits=nit,
            line_search_calls=line_search_calls,
            status=0,
            message="Gradient descent completed successfully to the desired tolerance",
        )


def gradient_descent(
    f: ObjectiveFunction,
    gradf: GradientFunction,
    x0: Matrix,
    epsilon: float,
    settings: Optional[OptimizationSettings] = None,
) -> Matrix:
    """Minimize f from x0 until || gradf(x) || < epsilon; return the final point."""
    res = GradientDescent(f, gradf, settings=settings).solve(x0, epsilon=epsilon)
    return res.solution
