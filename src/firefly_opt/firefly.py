"""
Firefly Algorithm
=================

This module implements the Firefly algorithm as described in:

    Yang, X.-S. (2009).
    "Firefly Algorithms for Multimodal Optimization."
    Stochastic Algorithms: Foundations and Applications (SAGA 2009),
    LNCS 5792, 169-178.

Algorithm Overview
------------------
Every individual is a firefly whose brightness is its fitness. In each
generation, every firefly is attracted by every brighter one:

    for ii in 0..NP-1:
        for jj in 0..NP-1:
            if fit[jj] is strictly better than fit[ii]:
                r2 = ||X[ii] - X[jj]||^2           (continuous block)
                b  = beta * exp(-newgamma * r2)
                X[ii] = (1 - b) X[ii] + b X[jj] + U(alpha * lb, alpha * ub)
                X[ii] = clip(X[ii], lb, ub)
                write X[ii] back, re-evaluate fit[ii]

Key Parameters
--------------
- alpha: Width of the random perturbation, in [0, 1]
- beta:  Maximum attractiveness, in [0, 1]
- gamma: Absorption coefficient, in [0, 1]

The absorption coefficient is normalized once per ``evolve`` call by the
largest pairwise distance in the population:

    newgamma = gamma / r_max

Implementation Notes
--------------------
- Moves are eager: a pair visited later in a generation sees positions
  already updated earlier in the same generation. The (ii, jj) visiting
  order is fixed and must not be batched or reordered.
- The perturbation interval [alpha * lb[k], alpha * ub[k]] is not centred
  at zero unless the box is symmetric. Draws are taken as
  ``lo + (hi - lo) * u`` with u ~ U[0, 1), one draw per moved coordinate,
  in coordinate order.
- The random generator belongs to the instance and keeps advancing across
  calls. A generator can also be passed to ``evolve`` explicitly.
- If every firefly occupies the same point, r_max = 0 and newgamma is set
  to 0 (undamped attraction). Since all positions coincide, the first moves
  reduce to the random perturbation.
"""

from __future__ import annotations

import copy
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional

import numpy as np

from .config import FireflyConfig
from .constants import (
    ALG_DISPLAY_NAME,
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    DEFAULT_GAMMA,
    DEFAULT_GENERATIONS,
    DEFAULT_POP_SIZE,
)
from .distance import attractiveness, diversity, max_pairwise_distance, squared_distance
from .logger import print_warning
from .population import Population, PopulationLike
from .problem import ProblemLike

if TYPE_CHECKING:
    from .logger import OptimizationLogger


# ============================================================================
# Applicability Checks
# ============================================================================

class ApplicabilityErrorKind(Enum):
    """Reason a problem/population pair cannot be evolved by Firefly."""

    NO_CONTINUOUS_PART = (
        "There is no continuous part in the problem decision vector "
        "for Firefly to optimise"
    )
    NOT_SINGLE_OBJECTIVE = (
        "The problem is not single objective and Firefly is not suitable to solve it"
    )
    NOT_BOX_CONSTRAINED = (
        "The problem is not box constrained and Firefly is not suitable to solve it"
    )
    POPULATION_TOO_SMALL = (
        "for Firefly at least 2 individuals in the population are needed"
    )


class NotApplicableError(ValueError):
    """
    Raised by ``Firefly.evolve`` when the run cannot start.

    The population is guaranteed unchanged. The failed check is available
    as ``kind``.
    """

    def __init__(self, kind: ApplicabilityErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def check_applicability(pop: PopulationLike) -> Optional[ApplicabilityErrorKind]:
    """
    Check whether Firefly can evolve ``pop`` without raising.

    Checks, in order: a continuous block exists, the problem is single
    objective, the problem has no constraints, and NP >= 2.

    Returns
    -------
    ApplicabilityErrorKind or None
        The first failed check, or None if the run can proceed.
    """
    prob = pop.problem
    Dc = int(prob.dimension) - int(prob.i_dimension)

    if Dc == 0:
        return ApplicabilityErrorKind.NO_CONTINUOUS_PART
    if int(prob.f_dimension) != 1:
        return ApplicabilityErrorKind.NOT_SINGLE_OBJECTIVE
    if int(prob.c_dimension) != 0:
        return ApplicabilityErrorKind.NOT_BOX_CONSTRAINED
    if len(pop) < 2:
        return ApplicabilityErrorKind.POPULATION_TOO_SMALL
    return None


# ============================================================================
# Output Structures
# ============================================================================

@dataclass
class FireflyGenerationLog:
    """Per-generation diagnostics for analysis and debugging."""
    gen: int              # Generation number (1-based, within one evolve call)
    evals_used: int       # Cumulative evaluations in this evolve call
    leader: int           # Best individual at the start of the generation
    best_index: int       # Best individual at the end of the generation
    best_fitness: float   # Fitness of best_index
    mean_fitness: float   # Mean population fitness
    diversity: float      # Mean std across continuous coordinates
    moves: int            # Attraction moves performed this generation
    degenerate: bool      # True if r_max was 0 at the start of the run


@dataclass
class FireflyResult:
    """Final result of a ``firefly_optimize`` run."""
    best_x: np.ndarray    # Champion decision vector
    best_f: float         # Champion fitness
    nfes_used: int        # Objective evaluations, initialization included
    generations: int      # Generations performed
    history: np.ndarray   # Best current fitness after each generation
    runtime: float        # Wall-clock seconds
    stop_reason: str
    logs: List[FireflyGenerationLog] = field(default_factory=list)


# ============================================================================
# Main Algorithm
# ============================================================================

class Firefly:
    """
    Firefly optimizer for single-objective, box-constrained problems.

    Parameters
    ----------
    generations : int, default=10
        Number of generations per ``evolve`` call. Must be >= 0.
    alpha : float, default=0.01
        Width of the random perturbation, in [0, 1].
    beta : float, default=1.0
        Maximum attractiveness, in [0, 1].
    gamma : float, default=0.01
        Absorption coefficient, in [0, 1].
    seed : int, optional
        Seed of the instance-owned random generator.

    Raises
    ------
    ConfigurationError
        If any parameter is out of range.

    Usage
    -----
    >>> prob = BoxProblem(sphere, [-5.0] * 3, [5.0] * 3)
    >>> pop = Population(prob, size=15, seed=1)
    >>> algo = Firefly(generations=50, alpha=0.01, beta=1.0, gamma=0.01, seed=1)
    >>> algo.evolve(pop)
    >>> pop.champion().f
    """

    def __init__(
        self,
        generations: int = DEFAULT_GENERATIONS,
        alpha: float = DEFAULT_ALPHA,
        beta: float = DEFAULT_BETA,
        gamma: float = DEFAULT_GAMMA,
        seed: Optional[int] = None,
    ) -> None:
        self.config = FireflyConfig(
            generations=generations,
            alpha=alpha,
            beta=beta,
            gamma=gamma,
        )
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    @classmethod
    def from_config(cls, config: FireflyConfig, seed: Optional[int] = None) -> "Firefly":
        """Create an algorithm from an existing FireflyConfig."""
        return cls(
            generations=config.generations,
            alpha=config.alpha,
            beta=config.beta,
            gamma=config.gamma,
            seed=seed,
        )

    @property
    def generations(self) -> int:
        return self.config.generations

    @property
    def alpha(self) -> float:
        return self.config.alpha

    @property
    def beta(self) -> float:
        return self.config.beta

    @property
    def gamma(self) -> float:
        return self.config.gamma

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def clone(self) -> "Firefly":
        """
        Return an independent algorithm with the same configuration.

        The random generator state is copied, so the clone and the original
        produce the same draws from this point on without sharing state.
        """
        other = Firefly.from_config(self.config, seed=self.seed)
        other.rng = copy.deepcopy(self.rng)
        return other

    def reset_rng(self, seed: Optional[int] = None) -> None:
        """Re-seed the instance-owned generator."""
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    # ========================================================================
    # Reporting
    # ========================================================================

    def name(self) -> str:
        return ALG_DISPLAY_NAME

    def describe(self) -> str:
        """Parameter dump, e.g. ``"iter:10 alpha:0.01 beta:1 gamma:0.01 "``."""
        return (
            f"iter:{self.generations} "
            f"alpha:{self.alpha:g} "
            f"beta:{self.beta:g} "
            f"gamma:{self.gamma:g} "
        )

    def __str__(self) -> str:
        return f"Algorithm name: {self.name()}\n\tParameters: {self.describe()}\n"

    def __repr__(self) -> str:
        return (
            f"Firefly(generations={self.generations}, alpha={self.alpha!r}, "
            f"beta={self.beta!r}, gamma={self.gamma!r}, seed={self.seed!r})"
        )

    # ========================================================================
    # Evolution
    # ========================================================================

    def evolve(
        self,
        pop: PopulationLike,
        rng: Optional[np.random.Generator] = None,
        *,
        logger: Optional["OptimizationLogger"] = None,
        generation_callback: Optional[Callable[[FireflyGenerationLog], None]] = None,
        verbose: bool = False,
    ) -> None:
        """
        Evolve ``pop`` in place for ``generations`` generations.

        Parameters
        ----------
        pop : PopulationLike
            Population bound to a problem with a continuous block, one
            objective and no constraints. Must hold at least 2 individuals.

        rng : np.random.Generator, optional
            Generator for the perturbations. Defaults to the instance-owned
            generator, which then advances across calls.

        logger : OptimizationLogger, optional
            Receives one ``log_generation`` call per generation.

        generation_callback : callable, optional
            Called after each generation with a FireflyGenerationLog.

        verbose : bool, default=False
            Print warnings (degenerate population) to the console.

        Raises
        ------
        NotApplicableError
            Before any mutation, if the problem or population is unsuitable.
        """

        # ====================================================================
        # Setup
        # ====================================================================

        kind = check_applicability(pop)
        if kind is not None:
            raise NotApplicableError(kind)

        if self.generations == 0:
            return

        prob = pop.problem
        D = int(prob.dimension)
        Dc = D - int(prob.i_dimension)
        NP = len(pop)
        lb = np.asarray(prob.lb, dtype=np.float64)
        ub = np.asarray(prob.ub, dtype=np.float64)
        rng = self.rng if rng is None else rng

        alpha, beta = self.alpha, self.beta

        # Perturbation interval per continuous coordinate: [lo, lo + span]
        pert_lo = alpha * lb[:Dc]
        pert_span = alpha * ub[:Dc] - pert_lo
        lb_c = lb[:Dc]
        ub_c = ub[:Dc]

        # ====================================================================
        # Snapshot
        # ====================================================================

        X = np.empty((NP, D), dtype=np.float64)
        fit: List[np.ndarray] = []
        for i in range(NP):
            ind = pop.get_individual(i)
            X[i, :] = ind.cur_x
            fit.append(np.array(ind.cur_f, dtype=np.float64))

        # ====================================================================
        # Absorption Coefficient Normalization
        # ====================================================================

        r_max = max_pairwise_distance(X, Dc)
        degenerate = r_max == 0.0
        if degenerate:
            newgamma = 0.0
            if verbose:
                print_warning(
                    "all fireflies coincide (r_max = 0); attraction is undamped"
                )
        else:
            newgamma = self.gamma / r_max

        # ====================================================================
        # Main Loop
        # ====================================================================

        evals_used = 0

        for g in range(1, self.generations + 1):

            # Best firefly at the start of the generation (first index wins)
            leader = 0
            for i in range(1, NP):
                if prob.compare_fitness(fit[i], fit[leader]):
                    leader = i

            moves = 0
            for ii in range(NP):
                for jj in range(NP):
                    if not prob.compare_fitness(fit[jj], fit[ii]):
                        continue

                    r_sqrd = squared_distance(X[ii], X[jj], Dc)
                    b = attractiveness(r_sqrd, newgamma, beta)

                    # Move ii towards jj, then clamp into the box
                    u = rng.random(Dc)
                    moved = (1.0 - b) * X[ii, :Dc] + b * X[jj, :Dc] + (pert_lo + pert_span * u)
                    X[ii, :Dc] = np.clip(moved, lb_c, ub_c)

                    fit[ii] = np.array(pop.set_x(ii, X[ii].copy()), dtype=np.float64)
                    moves += 1

            evals_used += moves

            if logger is None and generation_callback is None:
                continue

            best_index = 0
            for i in range(1, NP):
                if prob.compare_fitness(fit[i], fit[best_index]):
                    best_index = i
            f0 = np.array([f[0] for f in fit])

            entry = FireflyGenerationLog(
                gen=g,
                evals_used=evals_used,
                leader=leader,
                best_index=best_index,
                best_fitness=float(fit[best_index][0]),
                mean_fitness=float(np.mean(f0)),
                diversity=diversity(X, Dc),
                moves=moves,
                degenerate=degenerate,
            )

            if logger is not None:
                logger.log_generation(
                    generation=g,
                    nfes=evals_used,
                    fitness=f0,
                    best_f=entry.best_fitness,
                    moves=moves,
                    diversity=entry.diversity,
                )
            if generation_callback is not None:
                generation_callback(entry)


# ============================================================================
# Convenience Driver
# ============================================================================

def firefly_optimize(
    problem: ProblemLike,
    config: Optional[FireflyConfig] = None,
    *,
    pop_size: int = DEFAULT_POP_SIZE,
    seed: Optional[int] = None,
    logger: Optional["OptimizationLogger"] = None,
    verbose: bool = False,
) -> FireflyResult:
    """
    Initialize a random population and evolve it once.

    Parameters
    ----------
    problem : ProblemLike
        Problem to optimize.
    config : FireflyConfig, optional
        Algorithm parameters. Defaults to ``FireflyConfig()``.
    pop_size : int, default=20
        Number of fireflies.
    seed : int, optional
        Seeds both the population initialization and the algorithm.
    logger : OptimizationLogger, optional
        Prints a header, generation lines and a summary.

    Returns
    -------
    FireflyResult
    """
    config = config if config is not None else FireflyConfig()
    start_time = time.time()
    fevals_at_start = getattr(problem, 'fevals', None)

    pop = Population(problem, size=pop_size, seed=seed)
    algo = Firefly.from_config(config, seed=seed)

    if logger is not None:
        logger.print_header({
            'problem': getattr(problem, 'name', type(problem).__name__),
            'dim': problem.dimension,
            'dc': problem.dimension - problem.i_dimension,
            'sense': getattr(problem, 'sense', 'min'),
            'pop_size': pop_size,
            'seed': seed,
            **config.to_dict(),
        })

    logs: List[FireflyGenerationLog] = []
    algo.evolve(pop, logger=logger, generation_callback=logs.append, verbose=verbose)

    champion = pop.champion()
    # Evaluations spent by this run only
    if fevals_at_start is not None:
        nfes_used = int(problem.fevals) - int(fevals_at_start)
    else:
        nfes_used = pop_size + sum(e.moves for e in logs)

    result = FireflyResult(
        best_x=champion.x,
        best_f=float(champion.f[0]),
        nfes_used=nfes_used,
        generations=len(logs),
        history=np.array([e.best_fitness for e in logs], dtype=np.float64),
        runtime=time.time() - start_time,
        stop_reason="completed",
        logs=logs,
    )

    if logger is not None:
        logger.print_summary(result)

    return result


__all__ = [
    "ApplicabilityErrorKind",
    "Firefly",
    "FireflyGenerationLog",
    "FireflyResult",
    "NotApplicableError",
    "check_applicability",
    "firefly_optimize",
]
