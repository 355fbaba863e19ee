"""
Firefly Command Line Interface
==============================

Commands:
    demo        Single logged run on one benchmark function
    benchmark   Seeded runs over several functions and dimensions
    compare     Wilcoxon test between two (alpha, beta, gamma) settings

Examples:
    python run.py demo --func rastrigin --dim 10 --generations 50
    python run.py benchmark --dims 2 10 --funcs sphere ackley --runs 25
    python run.py compare --func sphere --config-a 0.01 1 0.01 --config-b 0.1 1 0.01
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from .benchmarks import BENCHMARKS, get_benchmark, make_benchmark
from .config import ConfigurationError, ExperimentConfig, FireflyConfig
from .constants import (
    DEFAULT_ALPHA,
    DEFAULT_BASE_SEED,
    DEFAULT_BETA,
    DEFAULT_DIMS,
    DEFAULT_FUNCS,
    DEFAULT_GAMMA,
    DEFAULT_POP_SIZE,
    DEFAULT_RUNS,
)
from .experiment import compare_configs, run_benchmark_experiments
from .firefly import NotApplicableError, firefly_optimize
from .logger import (
    OptimizationLogger,
    print_error,
    print_info,
    print_run_header,
    print_run_result,
    print_success,
)
from .utils import seed_for_run


# ============================================================================
# Commands
# ============================================================================

def run_demo(args: argparse.Namespace) -> None:
    """Run one Firefly optimization with full console logging."""
    problem = make_benchmark(args.func, args.dim)
    config = FireflyConfig(
        generations=args.generations,
        alpha=args.alpha,
        beta=args.beta,
        gamma=args.gamma,
    )
    logger = OptimizationLogger(
        verbosity=args.verbosity,
        log_interval=args.log_interval,
        use_colors=not args.no_color,
    )

    result = firefly_optimize(
        problem,
        config,
        pop_size=args.pop_size,
        seed=args.seed,
        logger=logger,
        verbose=True,
    )

    error = result.best_f - get_benchmark(args.func).f_opt
    print_success(f"{problem.name}: error={error:.6e} after {result.nfes_used:,} evaluations")


def run_benchmark(args: argparse.Namespace) -> None:
    """Run the benchmark harness and report where results were written."""
    cfg = ExperimentConfig(
        output_root=Path(args.output),
        runs=args.runs,
        dims=tuple(args.dims),
        funcs=tuple(args.funcs),
        pop_size=args.pop_size,
        generations=args.generations,
        alpha=args.alpha,
        beta=args.beta,
        gamma=args.gamma,
        base_seed=args.seed,
        verbose=not args.quiet,
    )
    df = run_benchmark_experiments(cfg)
    print_info(f"{len(df)} runs written to {Path(args.output) / cfg.alg_name}")


def run_compare(args: argparse.Namespace) -> None:
    """Run two settings on the same seeds and test the error difference."""
    f_opt = get_benchmark(args.func).f_opt
    configs = [
        FireflyConfig(args.generations, *args.config_a),
        FireflyConfig(args.generations, *args.config_b),
    ]

    errors: List[List[float]] = [[], []]
    for run_id in range(1, args.runs + 1):
        seed = seed_for_run(
            base_seed=args.seed,
            stride_run=1,
            func_idx=0,
            run_id=run_id,
        )
        if args.verbose:
            print_run_header(run_id, args.runs, seed)
        for k, cfg in enumerate(configs):
            res = firefly_optimize(
                make_benchmark(args.func, args.dim),
                cfg,
                pop_size=args.pop_size,
                seed=seed,
            )
            err = max(0.0, res.best_f - f_opt)
            errors[k].append(err)
            if args.verbose:
                print_run_result(run_id, err, res.nfes_used, res.runtime, label="AB"[k])

    comparison = compare_configs(errors[0], errors[1])

    print(f"\n{args.func} (D={args.dim}), {args.runs} paired runs")
    for label, cfg, errs in zip("AB", configs, errors):
        print(f"  {label}: alpha={cfg.alpha:g} beta={cfg.beta:g} gamma={cfg.gamma:g}  "
              f"mean error={np.mean(errs):.4e}")
    print("\nWilcoxon signed-rank test:")
    print(f"  Statistic: {comparison['statistic']:.4f}")
    print(f"  P-value: {comparison['pvalue']:.6f}")
    print(f"  Significant: {comparison['significant']}")
    print(f"  Better: {comparison['better']}")


# ============================================================================
# Argument Parsing
# ============================================================================

def _add_firefly_args(p: argparse.ArgumentParser, generations: int) -> None:
    p.add_argument('--generations', type=int, default=generations)
    p.add_argument('--alpha', type=float, default=DEFAULT_ALPHA)
    p.add_argument('--beta', type=float, default=DEFAULT_BETA)
    p.add_argument('--gamma', type=float, default=DEFAULT_GAMMA)
    p.add_argument('--pop-size', type=int, default=DEFAULT_POP_SIZE)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='firefly-opt',
        description='Firefly algorithm for box-constrained optimization',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    funcs = sorted(BENCHMARKS)

    # Demo command
    demo_parser = subparsers.add_parser('demo', help='Single logged run')
    demo_parser.add_argument('--func', type=str, default='rastrigin', choices=funcs)
    demo_parser.add_argument('--dim', type=int, default=10)
    demo_parser.add_argument('--seed', type=int, default=42)
    demo_parser.add_argument('--verbosity', type=int, default=2, choices=[0, 1, 2, 3])
    demo_parser.add_argument('--log-interval', type=int, default=5)
    demo_parser.add_argument('--no-color', action='store_true',
                             help='Disable ANSI colors')
    _add_firefly_args(demo_parser, generations=50)

    # Benchmark command
    bench_parser = subparsers.add_parser('benchmark', help='Run benchmark experiments')
    bench_parser.add_argument('--dims', type=int, nargs='+', default=list(DEFAULT_DIMS))
    bench_parser.add_argument('--funcs', type=str, nargs='+', default=list(DEFAULT_FUNCS),
                              choices=funcs)
    bench_parser.add_argument('--runs', type=int, default=DEFAULT_RUNS)
    bench_parser.add_argument('--seed', type=int, default=DEFAULT_BASE_SEED,
                              help='Base seed of the seeding scheme')
    bench_parser.add_argument('--output', type=str, default='results')
    bench_parser.add_argument('--quiet', action='store_true',
                              help='Write logs to file only')
    _add_firefly_args(bench_parser, generations=50)

    # Compare command
    compare_parser = subparsers.add_parser('compare', help='Compare two parameter settings')
    compare_parser.add_argument('--func', type=str, default='sphere', choices=funcs)
    compare_parser.add_argument('--dim', type=int, default=10)
    compare_parser.add_argument('--runs', type=int, default=DEFAULT_RUNS)
    compare_parser.add_argument('--seed', type=int, default=DEFAULT_BASE_SEED)
    compare_parser.add_argument('--generations', type=int, default=50)
    compare_parser.add_argument('--pop-size', type=int, default=DEFAULT_POP_SIZE)
    compare_parser.add_argument('--config-a', type=float, nargs=3, required=True,
                                metavar=('ALPHA', 'BETA', 'GAMMA'))
    compare_parser.add_argument('--config-b', type=float, nargs=3, required=True,
                                metavar=('ALPHA', 'BETA', 'GAMMA'))
    compare_parser.add_argument('--verbose', '-v', action='store_true',
                                help='Print every run')

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        'demo': run_demo,
        'benchmark': run_benchmark,
        'compare': run_compare,
    }
    try:
        commands[args.command](args)
    except (ConfigurationError, NotApplicableError) as e:
        print_error(f"{type(e).__name__} [{e.kind.name}]: {e}")
        return 2
    except ValueError as e:
        print_error(str(e))
        return 2
    return 0


__all__ = ["build_parser", "main"]
