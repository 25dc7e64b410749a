"""Test Armijo line search."""

import numpy as np
import pytest

from pydescent.exceptions import BacktrackingLineSearchError, LineSearchError
from pydescent.line_search import armijo_line_search
from pydescent.matrix import Matrix, eye
from pydescent.objectives import Quadratic


def squared_norm(x: Matrix) -> float:
    return (x.t() * x).x()


def grad_squared_norm(x: Matrix) -> Matrix:
    return 2.0 * x


def armijo_condition_holds(f, gradf, x, d, t, sigma) -> bool:
    return f(x) - f(x + t * d) >= -sigma * t * (gradf(x).t() * d).x()


def test_armijo_squared_norm() -> None:
    """Test against the closed-form answer.

    For f(x) = || x ||^2 and d = -2 x, the condition reduces to 1 - t >= sigma, so with
    sigma = 0.8 the first acceptable step is the first s * beta^m <= 0.2.

    """
    x = Matrix([1.0, 1.0])
    d = -grad_squared_norm(x)
    t = armijo_line_search(0.8, 0.8, 0.8, squared_norm, grad_squared_norm, x, d)
    np.testing.assert_allclose(t, 0.8**8)


def test_armijo_accepts_initial_step() -> None:
    """Test that m = 0 is tried first."""
    x = Matrix([1.0, -2.0])
    d = -grad_squared_norm(x)
    t = armijo_line_search(0.1, 0.5, 0.8, squared_norm, grad_squared_norm, x, d)
    assert t == 0.1


@pytest.mark.parametrize(
    "seed,M,s,beta,sigma",
    [
        (101, 2, 0.8, 0.8, 0.8),
        (201, 3, 1.0, 0.5, 0.01),
        (301, 5, 0.8, 0.8, 0.8),
        (401, 10, 2.0, 0.3, 0.5),
        (501, 4, 1.0, 0.9, 0.1),
    ],
)
def test_armijo_first_acceptable_step(
    seed: int, M: int, s: float, beta: float, sigma: float
) -> None:
    """Returned step satisfies the condition, and the previous trial did not."""
    np.random.seed(seed)
    A = np.random.randn(M, M)
    obj = Quadratic(A=Matrix(A @ A.T + np.eye(M)), b=Matrix(np.random.randn(M)))
    x = Matrix(np.random.randn(M))
    d = -obj.gradient(x)

    t = armijo_line_search(s, beta, sigma, obj.evaluate, obj.gradient, x, d)

    assert 0 < t <= s
    assert armijo_condition_holds(obj.evaluate, obj.gradient, x, d, t, sigma)
    if t < s:
        assert not armijo_condition_holds(
            obj.evaluate, obj.gradient, x, d, t / beta, sigma
        )

    # Step is an integer power of beta
    m = np.log(t / s) / np.log(beta)
    np.testing.assert_allclose(m, np.round(m), atol=1e-8)


def test_armijo_decreases_objective() -> None:
    """Steps along a descent direction decrease the objective."""
    obj = Quadratic(A=Matrix([[4.0, 1.0], [1.0, 3.0]]), b=Matrix([1.0, 2.0]))
    x = Matrix([2.0, -3.0])
    d = -obj.gradient(x)
    t = armijo_line_search(1.0, 0.5, 0.3, obj.evaluate, obj.gradient, x, d)
    assert obj.evaluate(x + t * d) < obj.evaluate(x)


def test_armijo_non_descent_direction_with_cap() -> None:
    """Test that a capped search gives up on an ascent direction."""
    x = Matrix([1.0, 1.0])
    d = grad_squared_norm(x)
    with pytest.raises(LineSearchError) as excinfo:
        armijo_line_search(
            0.8,
            0.8,
            0.8,
            squared_norm,
            grad_squared_norm,
            x,
            d,
            max_iterations=50,
        )

    e = excinfo.value
    assert isinstance(e, BacktrackingLineSearchError)
    assert e.actual_improvement < e.required_improvement
    assert "50 trial step(s)" in str(e)


def test_armijo_non_descent_direction_without_cap() -> None:
    """Uncapped, the search backtracks until the step is numerically negligible."""
    x = Matrix([1.0, 1.0])
    d = grad_squared_norm(x)
    t = armijo_line_search(0.8, 0.8, 0.8, squared_norm, grad_squared_norm, x, d)
    assert 0 < t < 1e-14


def test_armijo_cap_not_reached() -> None:
    """A cap larger than the number of trials needed changes nothing."""
    x = Matrix([1.0, 1.0])
    d = -grad_squared_norm(x)
    t = armijo_line_search(
        0.8,
        0.8,
        0.8,
        squared_norm,
        grad_squared_norm,
        x,
        d,
        max_iterations=9,
    )
    np.testing.assert_allclose(t, 0.8**8)

    with pytest.raises(LineSearchError):
        armijo_line_search(
            0.8,
            0.8,
            0.8,
            squared_norm,
            grad_squared_norm,
            x,
            d,
            max_iterations=7,
        )


@pytest.mark.parametrize("max_iterations", [0, -1])
def test_armijo_invalid_cap(max_iterations: int) -> None:
    """A cap that allows no trial steps is rejected, even if the first step would do."""
    x = Matrix([1.0, 1.0])
    d = -grad_squared_norm(x)
    with pytest.raises(ValueError):
        armijo_line_search(
            0.1,
            0.8,
            0.8,
            squared_norm,
            grad_squared_norm,
            x,
            d,
            max_iterations=max_iterations,
        )


def test_armijo_does_not_modify_inputs() -> None:
    """Test that x and d are left alone."""
    x = Matrix([1.0, 1.0])
    d = -grad_squared_norm(x)
    armijo_line_search(0.8, 0.8, 0.8, squared_norm, grad_squared_norm, x, d)
    assert x == Matrix([1.0, 1.0])
    assert d == Matrix([-2.0, -2.0])


def test_armijo_verbose(capsys) -> None:
    """Test progress output."""
    x = Matrix([1.0, 1.0])
    d = -grad_squared_norm(x)
    armijo_line_search(
        0.8, 0.8, 0.8, squared_norm, grad_squared_norm, x, d, verbose=True
    )
    out = capsys.readouterr().out
    assert "#iter=8" in out


def test_armijo_quiet_by_default(capsys) -> None:
    """Nothing is printed unless verbose."""
    x = Matrix([1.0, 1.0])
    armijo_line_search(
        0.8, 0.8, 0.8, squared_norm, grad_squared_norm, x, -1.0 * x * 2.0
    )
    assert capsys.readouterr().out == ""


def test_armijo_identity_direction() -> None:
    """Scaling the direction by a matrix first is fine as long as shapes agree."""
    x = Matrix([3.0, 4.0])
    d = -(eye(2) * grad_squared_norm(x))
    t = armijo_line_search(0.8, 0.8, 0.8, squared_norm, grad_squared_norm, x, d)
    np.testing.assert_allclose(t, 0.8**8)
