"""
Population Container
====================

A population is an ordered set of individuals bound to one problem. The
optimizer reads individuals by index and writes new positions through
``set_x``; it never owns or reshapes the storage.

Each individual carries its current position/fitness and the best
position/fitness it has visited (its personal best). The population champion
is the best personal best, first index winning ties.

Capability Interface
--------------------
``PopulationLike`` lists what the Firefly algorithm relies on:

    problem            the bound ProblemLike
    __len__()          number of individuals NP
    get_individual(i)  object with ``cur_x`` and ``cur_f``
    set_x(i, x)        store x, re-evaluate, return the new fitness
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Protocol, runtime_checkable

import numpy as np

from .problem import ArrayLike, ProblemLike


@dataclass
class Individual:
    """Position and fitness of one candidate solution."""
    cur_x: np.ndarray     # Current decision vector (D,)
    cur_f: np.ndarray     # Current fitness vector (f_dimension,)
    best_x: np.ndarray    # Best decision vector visited so far
    best_f: np.ndarray    # Fitness of best_x


@dataclass
class Champion:
    """Best solution recorded by a population."""
    x: np.ndarray
    f: np.ndarray


@runtime_checkable
class PopulationLike(Protocol):
    """Capabilities the Firefly algorithm needs from a population."""

    @property
    def problem(self) -> ProblemLike: ...

    def __len__(self) -> int: ...

    def get_individual(self, idx: int) -> Individual: ...

    def set_x(self, idx: int, x: ArrayLike) -> np.ndarray: ...


class Population:
    """
    Ordered, indexable set of individuals bound to a problem.

    Parameters
    ----------
    problem : ProblemLike
        Problem used to evaluate every position stored in the population.

    size : int, default=0
        Number of individuals created uniformly at random in [lb, ub].

    seed : int, optional
        Seed of the generator used for the random initialization.

    Example
    -------
    >>> prob = BoxProblem(lambda x: float(np.sum(x ** 2)), [-1, -1], [1, 1])
    >>> pop = Population(prob, size=10, seed=42)
    >>> len(pop)
    10
    """

    def __init__(
        self,
        problem: ProblemLike,
        size: int = 0,
        seed: Optional[int] = None,
    ) -> None:
        if int(size) < 0:
            raise ValueError("population size must be non-negative")

        self._problem = problem
        self._individuals: List[Individual] = []

        rng = np.random.default_rng(seed)
        lb = np.asarray(problem.lb, dtype=np.float64)
        ub = np.asarray(problem.ub, dtype=np.float64)
        for _ in range(int(size)):
            self.push_back(lb + rng.random(lb.shape[0]) * (ub - lb))

    # ========================================================================
    # Read Access
    # ========================================================================

    @property
    def problem(self) -> ProblemLike:
        return self._problem

    def __len__(self) -> int:
        return len(self._individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self._individuals)

    def _check_index(self, idx: int) -> int:
        idx = int(idx)
        if not 0 <= idx < len(self._individuals):
            raise IndexError(
                f"individual index {idx} out of range for population of "
                f"size {len(self._individuals)}"
            )
        return idx

    def get_individual(self, idx: int) -> Individual:
        """Return the stored individual at idx (treat as read-only)."""
        return self._individuals[self._check_index(idx)]

    def positions(self) -> np.ndarray:
        """Current positions as an (NP, D) array copy."""
        if not self._individuals:
            return np.empty((0, self._problem.dimension), dtype=np.float64)
        return np.vstack([ind.cur_x for ind in self._individuals])

    def fitnesses(self) -> np.ndarray:
        """Current fitness vectors as an (NP, f_dimension) array copy."""
        if not self._individuals:
            return np.empty((0, self._problem.f_dimension), dtype=np.float64)
        return np.vstack([ind.cur_f for ind in self._individuals])

    # ========================================================================
    # Write Access
    # ========================================================================

    def _evaluate(self, x: ArrayLike) -> tuple:
        x = np.array(x, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self._problem.dimension:
            raise ValueError(
                f"decision vector must have shape ({self._problem.dimension},), "
                f"got {x.shape}"
            )
        f = np.array(self._problem.objfun(x), dtype=np.float64)
        return x, f

    def push_back(self, x: ArrayLike) -> None:
        """Evaluate x and append it as a new individual."""
        x, f = self._evaluate(x)
        self._individuals.append(
            Individual(cur_x=x, cur_f=f, best_x=x.copy(), best_f=f.copy())
        )

    def set_x(self, idx: int, x: ArrayLike) -> np.ndarray:
        """
        Replace the position of individual idx and re-evaluate it.

        The personal best is updated when the new fitness is strictly better.

        Returns
        -------
        np.ndarray
            The new fitness vector (a copy).
        """
        idx = self._check_index(idx)
        x, f = self._evaluate(x)

        ind = self._individuals[idx]
        ind.cur_x = x
        ind.cur_f = f
        if self._problem.compare_fitness(f, ind.best_f):
            ind.best_x = x.copy()
            ind.best_f = f.copy()
        return f.copy()

    # ========================================================================
    # Best Individuals
    # ========================================================================

    def best_index(self) -> int:
        """Index of the best current fitness, first index winning ties."""
        if not self._individuals:
            raise ValueError("empty population has no best individual")
        best = 0
        for i in range(1, len(self._individuals)):
            if self._problem.compare_fitness(
                self._individuals[i].cur_f, self._individuals[best].cur_f
            ):
                best = i
        return best

    def champion(self) -> Champion:
        """Best personal best across the population."""
        if not self._individuals:
            raise ValueError("empty population has no champion")
        best = self._individuals[0]
        for ind in self._individuals[1:]:
            if self._problem.compare_fitness(ind.best_f, best.best_f):
                best = ind
        return Champion(x=best.best_x.copy(), f=best.best_f.copy())

    def __repr__(self) -> str:
        return f"Population(size={len(self)}, problem={self._problem!r})"


__all__ = ["Champion", "Individual", "Population", "PopulationLike"]
