"""
Benchmark Test Functions
========================

Classic box-constrained test functions for exercising the Firefly
optimizer. Every base function is vectorized over rows: it takes an
(N, D) array and returns N values.

``make_benchmark`` wraps a base function into a ``BoxProblem`` with its
customary search box:

    >>> prob = make_benchmark("rastrigin", 10)
    >>> prob.lb[0], prob.ub[0]
    (-5.12, 5.12)
    >>> BENCHMARKS["rastrigin"].f_opt
    0.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .problem import BoxProblem


# Base Functions
def sphere(x): return np.sum(x**2, axis=1)
def zakharov(x):
    d = x.shape[1]
    idx = np.arange(1, d+1)
    t = np.sum(0.5*idx*x, axis=1)
    return np.sum(x**2, axis=1) + t**2 + t**4
def rosenbrock(x): return np.sum(100*(x[:,1:]-x[:,:-1]**2)**2 + (x[:,:-1]-1)**2, axis=1)
def rastrigin(x): return 10*x.shape[1] + np.sum(x**2 - 10*np.cos(2*np.pi*x), axis=1)
def schwefel(x): return 418.9828872724339*x.shape[1] - np.sum(x*np.sin(np.sqrt(np.abs(x))), axis=1)
def griewank(x):
    d = x.shape[1]
    idx = np.arange(1, d+1)
    return 1 + np.sum(x**2, axis=1)/4000 - np.prod(np.cos(x/np.sqrt(idx)), axis=1)
def ackley(x):
    d = x.shape[1]
    return -20*np.exp(-0.2*np.sqrt(np.sum(x**2, axis=1)/d)) - np.exp(np.sum(np.cos(2*np.pi*x), axis=1)/d) + 20 + np.e
def levy(x):
    w = 1 + (x-1)/4
    return np.sin(np.pi*w[:,0])**2 + np.sum((w[:,:-1]-1)**2*(1+10*np.sin(np.pi*w[:,:-1]+1)**2), axis=1) + (w[:,-1]-1)**2*(1+np.sin(2*np.pi*w[:,-1])**2)


@dataclass(frozen=True)
class Benchmark:
    """Registry entry: base function, default box and known optimum."""
    name: str
    func: Callable[[np.ndarray], np.ndarray]
    bounds: Tuple[float, float]
    f_opt: float = 0.0


BENCHMARKS: Dict[str, Benchmark] = {
    "sphere": Benchmark("sphere", sphere, (-5.12, 5.12)),
    "rastrigin": Benchmark("rastrigin", rastrigin, (-5.12, 5.12)),
    "rosenbrock": Benchmark("rosenbrock", rosenbrock, (-5.0, 10.0)),
    "ackley": Benchmark("ackley", ackley, (-32.768, 32.768)),
    "griewank": Benchmark("griewank", griewank, (-600.0, 600.0)),
    "schwefel": Benchmark("schwefel", schwefel, (-500.0, 500.0)),
    "levy": Benchmark("levy", levy, (-10.0, 10.0)),
    "zakharov": Benchmark("zakharov", zakharov, (-5.0, 10.0)),
}


def get_benchmark(name: str) -> Benchmark:
    """Look up a benchmark by (case-insensitive) name."""
    key = name.strip().lower()
    if key not in BENCHMARKS:
        raise ValueError(
            f"Unknown benchmark {name!r}. Available: {', '.join(sorted(BENCHMARKS))}"
        )
    return BENCHMARKS[key]


def make_benchmark(
    name: str,
    dim: int,
    bounds: Optional[Tuple[float, float]] = None,
    sense: str = "min",
) -> BoxProblem:
    """
    Build a BoxProblem for a named benchmark function.

    Parameters
    ----------
    name : str
        Key of ``BENCHMARKS``.
    dim : int
        Problem dimension, must be >= 1 (>= 2 for rosenbrock).
    bounds : (float, float), optional
        Same (low, high) for every coordinate. Defaults to the benchmark's
        customary box.
    sense : {"min", "max"}, default="min"
        With "max" the objective is negated so the optimum is still the
        benchmark's minimizer. The reported fitness is then -f, so errors
        measured as ``best_f - f_opt`` (as the experiment harness and the
        CLI do) are only meaningful for "min".

    Returns
    -------
    BoxProblem
    """
    bench = get_benchmark(name)
    dim = int(dim)
    if dim < 1:
        raise ValueError("dim must be >= 1")
    if bench.name == "rosenbrock" and dim < 2:
        raise ValueError("rosenbrock needs dim >= 2")

    lo, hi = bounds if bounds is not None else bench.bounds
    sign = -1.0 if sense == "max" else 1.0
    base = bench.func

    def objective(x: np.ndarray) -> float:
        return sign * float(base(np.atleast_2d(x))[0])

    objective.__name__ = bench.name

    return BoxProblem(
        objective,
        np.full(dim, lo, dtype=np.float64),
        np.full(dim, hi, dtype=np.float64),
        sense=sense,
        name=f"{bench.name}-{dim}D",
    )


__all__ = [
    "BENCHMARKS",
    "Benchmark",
    "ackley",
    "get_benchmark",
    "griewank",
    "levy",
    "make_benchmark",
    "rastrigin",
    "rosenbrock",
    "schwefel",
    "sphere",
    "zakharov",
]
