"""
Configuration for the Firefly Algorithm
=======================================

Two configuration objects live here:

1. ``FireflyConfig`` - the immutable tuple {generations, alpha, beta, gamma}
   that defines one Firefly algorithm instance.

2. ``ExperimentConfig`` - the settings of a benchmark experiment (which
   functions, dimensions, runs, seeds and output locations).

Validation
----------
The parameter ranges are checked by ``check_config``, which returns an
explicit ``ConfigErrorKind`` (or ``None`` when the values are valid) instead
of raising. Constructors that must refuse invalid values turn that kind into
a ``ConfigurationError``:

    >>> check_config(generations=10, alpha=0.5, beta=1.0, gamma=0.1) is None
    True
    >>> check_config(generations=10, alpha=-0.1, beta=1.0, gamma=0.1)
    <ConfigErrorKind.ALPHA_OUT_OF_RANGE: 'alpha should be in [0,1]'>

Checks run in a fixed order (generations, alpha, beta, gamma) and the first
violated range is the one reported.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from numbers import Integral
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .constants import (
    ALG_NAME,
    DEFAULT_ALPHA,
    DEFAULT_BASE_SEED,
    DEFAULT_BETA,
    DEFAULT_DIMS,
    DEFAULT_FUNCS,
    DEFAULT_GAMMA,
    DEFAULT_GENERATIONS,
    DEFAULT_POP_SIZE,
    DEFAULT_RUNS,
    DEFAULT_STRIDE_RUN,
    PARAM_MAX,
    PARAM_MIN,
    REPORT_ZERO_TOL,
    VAL_TO_REACH,
)


# ============================================================================
# Error Kinds
# ============================================================================

class ConfigErrorKind(Enum):
    """Reason a Firefly configuration was rejected."""

    GENERATIONS_NOT_INTEGER = "number of iterations must be an integer"
    NEGATIVE_GENERATIONS = "number of iterations must be nonnegative"
    ALPHA_OUT_OF_RANGE = "alpha should be in [0,1]"
    BETA_OUT_OF_RANGE = "beta should be in [0,1]"
    GAMMA_OUT_OF_RANGE = "gamma should be in [0,1] interval"


class ConfigurationError(ValueError):
    """
    Raised when an algorithm is constructed with out-of-range parameters.

    The object being constructed is never created. The violated range is
    available as ``kind``.
    """

    def __init__(self, kind: ConfigErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def _in_unit_interval(x: float) -> bool:
    return PARAM_MIN <= x <= PARAM_MAX


def check_config(
    *,
    generations: int,
    alpha: float,
    beta: float,
    gamma: float,
) -> Optional[ConfigErrorKind]:
    """
    Check Firefly parameter ranges without raising.

    Parameters
    ----------
    generations : int
        Number of generations, must be an integer >= 0. Booleans are
        rejected.
    alpha, beta, gamma : float
        Coefficients, each must lie in [0, 1]. NaN is rejected.

    Returns
    -------
    ConfigErrorKind or None
        The first violated range, or None if every value is valid.
    """
    if isinstance(generations, bool) or not isinstance(generations, Integral):
        return ConfigErrorKind.GENERATIONS_NOT_INTEGER
    if generations < 0:
        return ConfigErrorKind.NEGATIVE_GENERATIONS
    if not _in_unit_interval(alpha):
        return ConfigErrorKind.ALPHA_OUT_OF_RANGE
    if not _in_unit_interval(beta):
        return ConfigErrorKind.BETA_OUT_OF_RANGE
    if not _in_unit_interval(gamma):
        return ConfigErrorKind.GAMMA_OUT_OF_RANGE
    return None


# ============================================================================
# Algorithm Configuration
# ============================================================================

@dataclass(frozen=True)
class FireflyConfig:
    """
    Configuration of a Firefly algorithm instance.

    Attributes
    ----------
    generations : int, default=10
        Number of generations performed per ``evolve`` call.

    alpha : float, default=0.01
        Width of the random perturbation. Range: [0, 1].

    beta : float, default=1.0
        Maximum attractiveness. Range: [0, 1].

    gamma : float, default=0.01
        Absorption coefficient, normalized by the population's maximum
        pairwise distance at run time. Range: [0, 1].

    Raises
    ------
    ConfigurationError
        On construction, if any value is out of range.
    """
    generations: int = DEFAULT_GENERATIONS
    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA
    gamma: float = DEFAULT_GAMMA

    def __post_init__(self) -> None:
        kind = check_config(
            generations=self.generations,
            alpha=self.alpha,
            beta=self.beta,
            gamma=self.gamma,
        )
        if kind is not None:
            raise ConfigurationError(kind)

    def to_dict(self) -> Dict[str, Any]:
        """Return the four parameters as a plain dictionary."""
        return asdict(self)


# ============================================================================
# Experiment Configuration
# ============================================================================

@dataclass
class ExperimentConfig:
    """
    Settings for running the Firefly algorithm over a benchmark suite.

    Attributes
    ----------

    **Identity & Paths**

    alg_name : str, default="firefly"
        Algorithm identifier for output files.

    output_root : Path or None
        Results are written to output_root/<alg_name>/. Defaults to
        ./results when None.

    **Experiment Design**

    runs : int, default=25
        Number of independent runs per function and dimension.

    dims : tuple of int, default=(2, 10)
        Problem dimensions to test.

    funcs : tuple of str
        Benchmark function names (see ``benchmarks.BENCHMARKS``).

    **Algorithm Parameters**

    pop_size : int, default=20
        Number of fireflies.

    generations, alpha, beta, gamma
        Firefly parameters, see ``FireflyConfig``.

    **Numerical Conventions**

    val_to_reach : float, default=1e-8
        Per-run success threshold. Errors below this are set to 0.0.

    report_zero_tol : float, default=1e-7
        Display tolerance. Values <= this are shown as "0.00E+00".

    **Reproducibility**

    base_seed : int, default=123456
    stride_run : int, default=9973
        Seeding scheme, see ``utils.seed_for_run``.

    **Output Control**

    verbose : bool, default=True
        Print progress to console.

    Examples
    --------
    Quick smoke test:

    >>> cfg = ExperimentConfig(runs=3, dims=(2,), funcs=("sphere",))
    """

    # ========================================================================
    # Identity & Paths
    # ========================================================================

    alg_name: str = ALG_NAME
    output_root: Optional[Path] = None

    # ========================================================================
    # Experiment Design
    # ========================================================================

    runs: int = DEFAULT_RUNS
    dims: Tuple[int, ...] = DEFAULT_DIMS
    funcs: Tuple[str, ...] = DEFAULT_FUNCS

    # ========================================================================
    # Algorithm Parameters
    # ========================================================================

    pop_size: int = DEFAULT_POP_SIZE
    generations: int = 50
    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA
    gamma: float = DEFAULT_GAMMA

    # ========================================================================
    # Numerical Conventions
    # ========================================================================

    report_zero_tol: float = REPORT_ZERO_TOL
    val_to_reach: float = VAL_TO_REACH

    # ========================================================================
    # Reproducibility
    # ========================================================================

    base_seed: int = DEFAULT_BASE_SEED
    stride_run: int = DEFAULT_STRIDE_RUN

    # ========================================================================
    # Output Control
    # ========================================================================

    verbose: bool = True

    def algorithm_config(self) -> FireflyConfig:
        """Build (and validate) the FireflyConfig for this experiment."""
        return FireflyConfig(
            generations=self.generations,
            alpha=self.alpha,
            beta=self.beta,
            gamma=self.gamma,
        )

    def to_dict(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Convert configuration to a dictionary for JSON serialization.

        Parameters
        ----------
        extra : dict, optional
            Additional key-value pairs to include.
        """
        d = asdict(self)

        for k, v in list(d.items()):
            if isinstance(v, Path):
                d[k] = str(v)

        if extra:
            d.update(extra)
        return d


__all__ = [
    "ConfigErrorKind",
    "ConfigurationError",
    "ExperimentConfig",
    "FireflyConfig",
    "check_config",
]
