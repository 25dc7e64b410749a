r"""Armijo backtracking line search.

Given a point x and a direction d, the Armijo rule picks the step
    t = s * beta^m,
for the smallest integer m >= 0 satisfying the sufficient decrease condition
    f(x) - f(x + t * d) >= -sigma * t * grad_f(x)^T d.
When d is a descent direction, grad_f(x)^T d < 0, so the right hand side is a positive
fraction (sigma) of the decrease predicted by the linear approximation of f.

The parameters should satisfy s > 0, 0 < beta < 1 and 0 < sigma < 1. They are not
validated here.

"""

import time
from typing import Callable, Optional

from .exceptions import LineSearchError
from .matrix import Matrix

ObjectiveFunction = Callable[[Matrix], float]
GradientFunction = Callable[[Matrix], Matrix]


def armijo_line_search(
    s: float,
    beta: float,
    sigma: float,
    f: ObjectiveFunction,
    gradf: GradientFunction,
    x: Matrix,
    d: Matrix,
    max_iterations: Optional[int] = None,
    verbose: bool = False,
) -> float:
    """Find a step size satisfying the Armijo condition.

    Parameters
    ----------
     s : float
        Initial step size.
     beta : float
        Contraction factor, 0 < beta < 1.
     sigma : float
        Sufficient decrease factor, 0 < sigma < 1.
     f : Callable[[Matrix], float]
        Objective function.
     gradf : Callable[[Matrix], Matrix]
        Gradient of f, returning a column vector shaped like x.
     x : Matrix
        Current point (column vector).
     d : Matrix
        Search direction (column vector).
     max_iterations : int, optional
        Maximum number of trial steps. If None (default), keep backtracking until the
        condition holds. Otherwise it must be at least 1. See Notes.
     verbose : bool, default=False
        If True, print the number of trial steps and the resulting step size.

    Returns
    -------
     t : float
        The step size, s * beta^m.

    Raises
    ------
     LineSearchError: if max_iterations trial steps all failed the condition.
     ValueError: if max_iterations is less than 1.

    Notes
    -----
    Without a cap there is no guarantee this returns: if d is not a descent direction,
    or f is unbounded below along d, the condition may never hold. In floating point
    the step eventually becomes so small that x + t * d == x, at which point the
    condition holds trivially and the (useless) tiny step is returned, but that can
    take a few hundred trials.

    """
    if max_iterations is not None and max_iterations < 1:
        raise ValueError("max_iterations must be at least 1.")

    if verbose:
        start_time = time.time()

    fx = f(x)
    slope = (gradf(x).t() * d).x()

    m = 0
    while True:
        t = s * beta**m
        actual_improvement = fx - f(x + t * d)
        required_improvement = -sigma * t * slope
        if actual_improvement >= required_improvement:
            break

        m += 1
        if max_iterations is not None and m >= max_iterations:
            raise LineSearchError(
                message=f"Armijo condition not met after {m} trial step(s).",
                required_improvement=required_improvement,
                actual_improvement=actual_improvement,
            )

    if verbose:
        end_time = time.time()
        print(
            f"    Armijo line search: #iter={m + 1}, t={t:.06g} "
            f"({1000 * (end_time - start_time):.03f} ms)"
        )

    return t
