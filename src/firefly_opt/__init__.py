"""
firefly_opt: Firefly Algorithm for Box-Constrained Optimization
===============================================================

Population-based metaheuristic for single-objective, box-constrained
continuous problems. Each firefly moves towards every brighter one with an
attractiveness that decays with squared distance, plus a bounded random
perturbation.

Usage:
    from firefly_opt import BoxProblem, Population, Firefly

    prob = BoxProblem(lambda x: float((x ** 2).sum()), [-5.0] * 3, [5.0] * 3)
    pop = Population(prob, size=20, seed=1)
    algo = Firefly(generations=50, alpha=0.01, beta=1.0, gamma=0.01, seed=1)
    algo.evolve(pop)
    print(pop.champion().f)

Usage (driver with console logging):
    from firefly_opt import FireflyConfig, OptimizationLogger, firefly_optimize, make_benchmark

    result = firefly_optimize(
        make_benchmark("rastrigin", 10),
        FireflyConfig(generations=100),
        pop_size=20,
        seed=42,
        logger=OptimizationLogger(verbosity=2),
    )
"""

__version__ = '1.0.0'

from .config import (
    ConfigErrorKind,
    ConfigurationError,
    ExperimentConfig,
    FireflyConfig,
    check_config,
)

from .problem import BoxProblem, ProblemLike

from .population import Champion, Individual, Population, PopulationLike

from .firefly import (
    ApplicabilityErrorKind,
    Firefly,
    FireflyGenerationLog,
    FireflyResult,
    NotApplicableError,
    check_applicability,
    firefly_optimize,
)

from .benchmarks import BENCHMARKS, get_benchmark, make_benchmark

from .logger import (
    Colors,
    OptimizationLogger,
    print_error,
    print_info,
    print_success,
    print_warning,
)

from .experiment import DualLogger, compare_configs, run_benchmark_experiments

__all__ = [
    # Configuration
    'ConfigErrorKind',
    'ConfigurationError',
    'ExperimentConfig',
    'FireflyConfig',
    'check_config',
    # Problem / population
    'BoxProblem',
    'ProblemLike',
    'Champion',
    'Individual',
    'Population',
    'PopulationLike',
    # Algorithm
    'ApplicabilityErrorKind',
    'Firefly',
    'FireflyGenerationLog',
    'FireflyResult',
    'NotApplicableError',
    'check_applicability',
    'firefly_optimize',
    # Benchmarks
    'BENCHMARKS',
    'get_benchmark',
    'make_benchmark',
    # Logging
    'Colors',
    'OptimizationLogger',
    'print_error',
    'print_info',
    'print_success',
    'print_warning',
    # Experiments
    'DualLogger',
    'compare_configs',
    'run_benchmark_experiments',
]
