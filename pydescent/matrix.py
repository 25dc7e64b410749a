r"""Dense matrices.

Conventions
-----------
A Matrix is an m-by-n array of float64 values with value semantics: arithmetic always
returns a new Matrix, and the only way to change an existing one is through the
single-element setters.

Indexing is 1-based throughout. A matrix can be addressed either by (row, column),
A.get(i, j), or by a single linear index, A.get(i), which runs down the columns
(column-major order):
    i  ->  row ((i - 1) mod m) + 1, column ((i - 1) div m) + 1.
So for a column vector, A.get(i) is simply the ith entry. The subscript operator
follows the same rules: A[i] is A.get(i) and A[i, j] is A.get(i, j).

Quirks
------
- Dividing a matrix by a scalar divides the *scalar* by each element:
     (A / s)[i, j] = s / A[i, j].
  This is not the conventional element-wise division; callers depending on it should
  be aware. To scale a matrix down, multiply by the reciprocal instead.
- det2() only refuses matrices with neither dimension equal to 2. A 2-by-k or k-by-2
  matrix passes that check, and then either reads its leading 2-by-2 block or fails
  with an index error if it doesn't have one.

"""

import operator
from numbers import Real
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

from .exceptions import DimensionMismatchError, MatrixIndexError, ShapePreconditionError

MatrixLike = Union["Matrix", Sequence[float], Sequence[Sequence[float]], npt.ArrayLike]


class Matrix:
    """Dense m-by-n matrix.

    Parameters
    ----------
     data : int, Matrix, sequence, or sequence of sequences, optional
        What to build the matrix from:
          - nothing: an empty 0x0 matrix
          - an int: the number of rows; `cols` is then required
          - a Matrix: a copy of it
          - a flat sequence (or 1-D array) of m values: an m-by-1 column vector
          - a sequence of m rows, each with n values (or a 2-D array): an m-by-n
            matrix
     cols : int, optional
        Number of columns, when `data` is the number of rows.
     value : float, default=0.0
        Fill value, when `data` is the number of rows.

    """

    # Let numpy scalars defer to our reflected operators, e.g. np.float64 * Matrix.
    __array_ufunc__ = None

    def __init__(
        self,
        data: Optional[Union[int, MatrixLike]] = None,
        cols: Optional[int] = None,
        value: float = 0.0,
    ) -> None:
        if data is None:
            if cols is not None:
                raise ValueError("Number of rows must be specified with cols.")
            self._v: npt.NDArray[np.float64] = np.zeros((0, 0))
        elif isinstance(data, (int, np.integer)) and not isinstance(data, bool):
            if cols is None:
                raise ValueError("Number of columns must be specified.")
            if data < 0 or cols < 0:
                raise ValueError("Matrix dimensions must be non-negative.")
            self._v = np.full((int(data), int(cols)), float(value))
        elif cols is not None:
            raise ValueError("cols can only be given with a number of rows.")
        elif isinstance(data, Matrix):
            self._v = data._v.copy()
        else:
            # Ragged rows are rejected by numpy itself.
            v = np.array(data, dtype=np.float64)
            if v.ndim == 1:
                v = v.reshape(-1, 1)
            elif v.ndim != 2:
                raise ValueError(
                    "Matrix data must be a flat sequence or a sequence of rows."
                )
            self._v = v

    @classmethod
    def _wrap(cls, v: npt.NDArray[np.float64]) -> "Matrix":
        """Wrap an array we own without copying it."""
        w = cls.__new__(cls)
        w._v = v
        return w

    # Dimensions

    @property
    def shape(self) -> Tuple[int, int]:
        """Return (rows, cols)."""
        return (self._v.shape[0], self._v.shape[1])

    def get_rows(self) -> int:
        """Return the number of rows."""
        return self._v.shape[0]

    def get_cols(self) -> int:
        """Return the number of columns."""
        return self._v.shape[1]

    def length(self) -> int:
        """Return the number of elements."""
        return self._v.size

    def __len__(self) -> int:
        return self.length()

    def is_vector(self) -> bool:
        """Return True for row vectors and column vectors."""
        m, n = self.shape
        return m == 1 or n == 1

    # Element access

    def _position(self, i: int, j: Optional[int] = None) -> Tuple[int, int]:
        """Convert a 1-based linear or (row, column) index into 0-based (row, col)."""
        m, n = self.shape
        i = operator.index(i)
        if j is None:
            if not 1 <= i <= m * n:
                raise MatrixIndexError("Linear index out of range", (i,), self.shape)
            return (i - 1) % m, (i - 1) // m

        j = operator.index(j)
        if not (1 <= i <= m and 1 <= j <= n):
            raise MatrixIndexError("Index out of range", (i, j), self.shape)
        return i - 1, j - 1

    def get(self, i: int, j: Optional[int] = None) -> float:
        """Get element i (column-major), or element (i, j). Indices are 1-based."""
        return float(self._v[self._position(i, j)])

    def set(self, i: int, j: Union[int, float], value: Optional[float] = None) -> None:
        """Set an element.

        Called as set(i, value) to assign the ith element in column-major order, or as
        set(i, j, value) to assign element (i, j). Indices are 1-based.

        """
        if value is None:
            self._v[self._position(i)] = float(j)
        else:
            self._v[self._position(i, operator.index(j))] = float(value)

    def __getitem__(self, key: Union[int, Tuple[int, int]]) -> float:
        if isinstance(key, tuple):
            return self.get(*key)
        return self.get(key)

    def __setitem__(self, key: Union[int, Tuple[int, int]], value: float) -> None:
        if isinstance(key, tuple):
            i, j = key
            self.set(i, j, value)
        else:
            self.set(key, value)

    def __iter__(self) -> Iterator[float]:
        """Iterate over elements in column-major order."""
        return iter(self._v.ravel(order="F").tolist())

    # Arithmetic

    def _check_same_shape(self, other: "Matrix", message: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(message, self.shape, other.shape)

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "Cannot add matrices of different shapes")
        return Matrix._wrap(self._v + other._v)

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "Cannot subtract matrices of different shapes")
        return Matrix._wrap(self._v - other._v)

    def __neg__(self) -> "Matrix":
        return self * -1.0

    def __mul__(self, other: Union["Matrix", float]) -> "Matrix":
        if isinstance(other, Matrix):
            return self.matmul(other)
        if isinstance(other, Real):
            return Matrix._wrap(float(other) * self._v)
        return NotImplemented

    def __rmul__(self, other: float) -> "Matrix":
        if isinstance(other, Real):
            return Matrix._wrap(float(other) * self._v)
        return NotImplemented

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def __truediv__(self, other: float) -> "Matrix":
        """Divide `other` by each element (see module Quirks)."""
        if not isinstance(other, Real):
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Matrix._wrap(float(other) / self._v)

    def matmul(self, other: "Matrix") -> "Matrix":
        """Calculate the matrix product self * other."""
        if self.get_cols() != other.get_rows():
            raise DimensionMismatchError(
                "Invalid matrix multiplication", self.shape, other.shape
            )
        return Matrix._wrap(self._v @ other._v)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._v, other._v))

    __hash__ = None  # type: ignore[assignment]

    # Linear algebra

    def transpose(self) -> "Matrix":
        """Return the n-by-m transpose."""
        return Matrix._wrap(self._v.T.copy())

    def t(self) -> "Matrix":
        """Transpose alias."""
        return self.transpose()

    def det2(self) -> float:
        """Calculate the determinant of a 2x2 matrix, a11 * a22 - a12 * a21."""
        m, n = self.shape
        if m != 2 and n != 2:
            raise ShapePreconditionError("Can't apply det2 to a non 2x2 matrix")
        return self.get(1, 1) * self.get(2, 2) - self.get(1, 2) * self.get(2, 1)

    def mod(self) -> float:
        """Calculate the Euclidean norm of all elements, sqrt(sum v_i^2)."""
        return float(np.sqrt(np.sum(self._v * self._v)))

    def x(self) -> float:
        """Return the only element of a 1x1 matrix."""
        if self.shape == (1, 1):
            return self.get(1, 1)
        raise ShapePreconditionError("Not a 1x1 Matrix")

    def x1(self) -> float:
        """Return the first element of a 2x1 column vector."""
        if self.shape == (2, 1):
            return self.get(1, 1)
        raise ShapePreconditionError("Not a 2x1 column vector")

    def x2(self) -> float:
        """Return the second element of a 2x1 column vector."""
        if self.shape == (2, 1):
            return self.get(2, 1)
        raise ShapePreconditionError("Not a 2x1 column vector")

    # Conversion and display

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the underlying m-by-n array."""
        return self._v.copy()

    def tolist(self) -> List[List[float]]:
        """Return the rows as nested lists."""
        return self._v.tolist()

    def __array__(self, dtype=None, copy=None) -> npt.NDArray:
        v = self._v.copy()
        if dtype is not None:
            v = v.astype(dtype)
        return v

    def __repr__(self) -> str:
        return f"Matrix({self.tolist()!r})"

    def __str__(self) -> str:
        return "\n".join(" ".join(f"{v:g}" for v in row) for row in self.tolist())

    def debug(self) -> None:
        """Print the dimensions and the values, one row per line."""
        m, n = self.shape
        print("INFO: Matrix debug")
        print(f"\t#rows={m}, #cols={n}")
        for row in self.tolist():
            print("\t" + " ".join(f"{v:g}" for v in row) + " ")


def eye(n: int) -> Matrix:
    """Build the n-by-n identity matrix."""
    w = Matrix(n, n, 0.0)
    for i in range(1, n + 1):
        w.set(i, i, 1.0)
    return w


identity = eye
