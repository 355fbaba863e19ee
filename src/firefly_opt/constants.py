"""
Firefly Algorithm Constants and Configuration Defaults
======================================================

This module centralizes the constants used across the package: algorithm
identification, default Firefly hyperparameters, benchmark experiment
settings, and the tolerances used when reporting results.

Constant Categories
-------------------

1. **Algorithm Parameters**: Default Firefly hyperparameters (alpha, beta, gamma)
2. **Experiment Design**: Benchmark settings (runs, dimensions, functions)
3. **Tolerance Thresholds**: Numerical precision for success/reporting
4. **Reproducibility**: Seeding scheme for deterministic experiments

Parameter Ranges
----------------
All three Firefly coefficients live in the closed interval [0, 1] and the
generation count is a non-negative integer. These ranges are enforced when
an algorithm is constructed (see ``config.check_config``).
"""

from __future__ import annotations

from typing import Tuple


# ============================================================================
# Algorithm Identification
# ============================================================================

ALG_NAME: str = "firefly"
"""Algorithm identifier used in output file names."""

ALG_DISPLAY_NAME: str = "Firefly optimization"
"""Human-readable algorithm name returned by ``Firefly.name()``."""


# ============================================================================
# Default Firefly Hyperparameters
# ============================================================================

DEFAULT_GENERATIONS: int = 10
"""Number of generations performed by one ``evolve`` call."""

DEFAULT_ALPHA: float = 0.01
"""
Width of the random perturbation.

Each moved coordinate k receives a uniform draw from
[alpha * lb[k], alpha * ub[k]]. With alpha = 0 the move is fully
deterministic.
"""

DEFAULT_BETA: float = 1.0
"""
Maximum attractiveness (attractiveness at zero distance).

- beta = 0: No attraction, only perturbation
- beta = 1: A coincident brighter firefly pulls all the way to itself
"""

DEFAULT_GAMMA: float = 0.01
"""
Absorption coefficient.

The effective coefficient used in ``beta * exp(-gamma_eff * r^2)`` is
gamma / r_max, where r_max is the largest pairwise distance in the
population at the start of the run.
"""

PARAM_MIN: float = 0.0
PARAM_MAX: float = 1.0


# ============================================================================
# Benchmark Experiment Design
# ============================================================================

DEFAULT_POP_SIZE: int = 20
"""
Population size used by the driver and the experiment harness.

Each generation costs up to NP * (NP - 1) / 2 evaluations, so the Firefly
population is kept much smaller than typical DE/GSK populations.
"""

DEFAULT_RUNS: int = 25
"""Number of independent runs per benchmark function."""

DEFAULT_DIMS: Tuple[int, ...] = (2, 10)
"""Problem dimensions used by the benchmark harness."""

DEFAULT_FUNCS: Tuple[str, ...] = (
    "sphere",
    "rastrigin",
    "rosenbrock",
    "ackley",
    "griewank",
)
"""Benchmark functions evaluated by default."""


# ============================================================================
# Tolerance Thresholds
# ============================================================================

VAL_TO_REACH: float = 1e-8
"""
Per-run success threshold.

Final errors below 1e-8 are recorded as exactly 0.0 for that run.
"""

REPORT_ZERO_TOL: float = 1e-7
"""
Display tolerance for tables and reports.

Values with |x| <= 1e-7 are written as "0.00E+00". Only affects formatting.
"""


# ============================================================================
# Reproducibility: Seeding Scheme
# ============================================================================

DEFAULT_BASE_SEED: int = 123456
"""Base random seed; every run derives its seed from this value."""

DEFAULT_STRIDE_RUN: int = 9973
"""Seed stride between functions (prime, larger than any run count)."""
