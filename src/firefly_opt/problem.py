"""
Problem Abstraction
===================

The optimizer never touches an objective function directly. It talks to a
*problem*: an object exposing the search space (dimensions and bounds), the
optimization sense (through a fitness comparator) and the evaluation itself.

Capability Interface
--------------------
``ProblemLike`` is a ``typing.Protocol``; any object with these members can
be handed to the Firefly algorithm, no inheritance required:

    dimension     total number of decision variables D
    i_dimension   number of integer variables (the trailing block)
    c_dimension   number of explicit constraints
    f_dimension   number of objectives
    lb, ub        bound vectors, shape (D,)
    compare_fitness(f1, f2) -> bool    True if f1 is strictly better
    objfun(x) -> np.ndarray            fitness vector, shape (f_dimension,)

The continuous block is the first ``dimension - i_dimension`` coordinates.

Default Implementation
----------------------
``BoxProblem`` wraps a plain Python callable ``f(x) -> float`` (or a
sequence of floats for multi-objective problems) together with box bounds:

    >>> prob = BoxProblem(lambda x: float(np.sum(x ** 2)), [-5, -5], [5, 5])
    >>> prob.objfun(np.array([1.0, 2.0]))
    array([5.])
    >>> prob.compare_fitness([1.0], [2.0])
    True
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np


ArrayLike = Union[Sequence[float], np.ndarray]


@runtime_checkable
class ProblemLike(Protocol):
    """Capabilities the Firefly algorithm needs from a problem."""

    @property
    def dimension(self) -> int: ...

    @property
    def i_dimension(self) -> int: ...

    @property
    def c_dimension(self) -> int: ...

    @property
    def f_dimension(self) -> int: ...

    @property
    def lb(self) -> np.ndarray: ...

    @property
    def ub(self) -> np.ndarray: ...

    def compare_fitness(self, f1: ArrayLike, f2: ArrayLike) -> bool: ...

    def objfun(self, x: ArrayLike) -> np.ndarray: ...


def _as_bounds(lb: ArrayLike, ub: ArrayLike) -> tuple:
    lower = np.atleast_1d(np.asarray(lb, dtype=np.float64)).copy()
    upper = np.atleast_1d(np.asarray(ub, dtype=np.float64)).copy()

    if lower.ndim != 1 or upper.ndim != 1:
        raise ValueError("bounds must be 1D vectors")
    if lower.shape != upper.shape:
        raise ValueError(
            f"lower and upper bounds must have the same length, "
            f"got {lower.shape[0]} and {upper.shape[0]}"
        )
    if lower.shape[0] == 0:
        raise ValueError("problem dimension must be positive")
    if np.any(~np.isfinite(lower)) or np.any(~np.isfinite(upper)):
        raise ValueError("all bounds must be finite")
    if np.any(lower > upper):
        raise ValueError("each lower bound must not exceed its upper bound")

    lower.setflags(write=False)
    upper.setflags(write=False)
    return lower, upper


class BoxProblem:
    """
    Box-constrained problem built from a Python objective function.

    Parameters
    ----------
    objective : callable
        ``f(x) -> float`` (or sequence of floats) for a 1D decision vector x.

    lb, ub : array-like
        Lower and upper bounds, shape (D,). Must be finite with lb <= ub.

    f_dimension : int, default=1
        Number of objectives returned by ``objective``.

    c_dimension : int, default=0
        Number of constraints declared by the problem. Box-constrained
        problems have none; a non-zero value is only meaningful to
        algorithms that handle constraints.

    i_dimension : int, default=0
        Number of trailing integer variables.

    sense : {"min", "max"}, default="min"
        Optimization sense used by ``compare_fitness``.

    name : str, optional
        Display name.

    Attributes
    ----------
    fevals : int
        Number of objective evaluations performed so far.
    """

    def __init__(
        self,
        objective: Callable[[np.ndarray], Union[float, ArrayLike]],
        lb: ArrayLike,
        ub: ArrayLike,
        *,
        f_dimension: int = 1,
        c_dimension: int = 0,
        i_dimension: int = 0,
        sense: str = "min",
        name: Optional[str] = None,
    ) -> None:
        self._lb, self._ub = _as_bounds(lb, ub)
        D = int(self._lb.shape[0])

        if int(f_dimension) < 1:
            raise ValueError("f_dimension must be at least 1")
        if int(c_dimension) < 0:
            raise ValueError("c_dimension must be non-negative")
        if not 0 <= int(i_dimension) <= D:
            raise ValueError(f"i_dimension must be in [0, {D}]")
        if sense not in ("min", "max"):
            raise ValueError(f"sense must be 'min' or 'max', got {sense!r}")

        self._objective = objective
        self._f_dimension = int(f_dimension)
        self._c_dimension = int(c_dimension)
        self._i_dimension = int(i_dimension)
        self.sense = sense
        self.name = name or getattr(objective, "__name__", "objective")
        self.fevals = 0

    # ========================================================================
    # Metadata
    # ========================================================================

    @property
    def dimension(self) -> int:
        return int(self._lb.shape[0])

    @property
    def i_dimension(self) -> int:
        return self._i_dimension

    @property
    def c_dimension(self) -> int:
        return self._c_dimension

    @property
    def f_dimension(self) -> int:
        return self._f_dimension

    @property
    def lb(self) -> np.ndarray:
        return self._lb

    @property
    def ub(self) -> np.ndarray:
        return self._ub

    # ========================================================================
    # Evaluation
    # ========================================================================

    def verify_x(self, x: ArrayLike) -> np.ndarray:
        """Return x as a float vector, checking its length against D."""
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.dimension:
            raise ValueError(
                f"decision vector must have shape ({self.dimension},), "
                f"got {x.shape}"
            )
        return x

    def objfun(self, x: ArrayLike) -> np.ndarray:
        """
        Evaluate the objective at x.

        Returns
        -------
        np.ndarray
            Fitness vector of shape (f_dimension,).
        """
        x = self.verify_x(x)
        f = np.atleast_1d(np.asarray(self._objective(x.copy()), dtype=np.float64))
        if f.shape != (self._f_dimension,):
            raise ValueError(
                f"objective returned shape {f.shape}, "
                f"expected ({self._f_dimension},)"
            )
        self.fevals += 1
        return f

    def compare_fitness(self, f1: ArrayLike, f2: ArrayLike) -> bool:
        """
        Return True if fitness f1 is strictly better than f2.

        Single objective: strict comparison in the declared sense.
        Multiple objectives: Pareto dominance (no worse in every objective,
        strictly better in at least one).
        """
        a = np.atleast_1d(np.asarray(f1, dtype=np.float64))
        b = np.atleast_1d(np.asarray(f2, dtype=np.float64))
        if self.sense == "max":
            a, b = -a, -b

        if a.shape[0] == 1:
            return bool(a[0] < b[0])
        return bool(np.all(a <= b) and np.any(a < b))

    def __repr__(self) -> str:
        return (
            f"BoxProblem(name={self.name!r}, dimension={self.dimension}, "
            f"f_dimension={self.f_dimension}, sense={self.sense!r})"
        )


__all__ = ["ArrayLike", "BoxProblem", "ProblemLike"]
