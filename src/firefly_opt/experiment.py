"""
Benchmark Experiment Harness for the Firefly Algorithm
======================================================

Runs the Firefly algorithm over a set of benchmark functions and
dimensions, several seeded runs each, and records the final errors.

Experiment Workflow
-------------------

    1. SETUP
       ├── Resolve output directories
       └── Save environment metadata and run configuration

    2. FOR EACH DIMENSION D
       ├── Open a console + file log
       ├── FOR EACH FUNCTION
       │   ├── FOR EACH RUN
       │   │   ├── Compute deterministic seed
       │   │   ├── Run firefly_optimize
       │   │   └── Record final error (best_f - f_opt)
       │   ├── Compute statistics (Best, Median, Mean, Worst, SD)
       │   └── Save per-run errors
       └── Write dimension summary CSV

    3. OUTPUTS
       └── <output_root>/<alg_name>/
           ├── summary/
           │   ├── Summary_All_Results_D2.csv
           │   ├── All_Runs.csv
           │   ├── environment.json
           │   ├── run_config.json
           │   └── firefly_D02_log_<stamp>.txt
           └── runs/
               └── RunErrors_firefly_sphere_D2.csv

Error Thresholding
------------------
1. Per run: errors below ``val_to_reach`` (1e-8) are set to exactly 0.0.
2. Reporting: statistics with |x| <= ``report_zero_tol`` (1e-7) are
   written as "0.00E+00".
"""

from __future__ import annotations

import time
import warnings
from pathlib import Path
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from .benchmarks import get_benchmark, make_benchmark
from .config import ExperimentConfig
from .firefly import firefly_optimize
from .utils import (
    collect_environment_metadata,
    ensure_dir,
    env_metadata_as_dict,
    format_environment_metadata,
    format_sci,
    seed_for_run,
    timestamp_now,
    write_json,
    zero_small,
)


# ============================================================================
# Logging Utility
# ============================================================================

class DualLogger:
    """
    Logger that writes to both console and file.

    - INFO level: console + file
    - DEBUG level: file only

    Parameters
    ----------
    path : Path
        Log file path.
    verbose_console : bool, default=True
        If False, INFO messages go to the file only.
    """

    def __init__(self, path: Path, *, verbose_console: bool = True) -> None:
        self.path = Path(path)
        ensure_dir(self.path.parent)
        self._fh = self.path.open("w", encoding="utf-8")
        self._verbose_console = bool(verbose_console)

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()

    def __enter__(self) -> "DualLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _write(self, msg: str) -> None:
        self._fh.write(msg)
        if not msg.endswith("\n"):
            self._fh.write("\n")
        self._fh.flush()

    def info(self, msg: str = "") -> None:
        """Log INFO message (console + file)."""
        self._write(msg)
        if self._verbose_console:
            print(msg)

    def debug(self, msg: str = "") -> None:
        """Log DEBUG message (file only)."""
        self._write(msg)


# ============================================================================
# CSV Writers
# ============================================================================

SUMMARY_COLUMNS = ["Function", "Best", "Median", "Mean", "Worst", "SD"]


def _summarize_errors(runs: pd.DataFrame, *, report_zero_tol: float) -> pd.DataFrame:
    """
    Best/Median/Mean/Worst/SD of the final error per function.

    SD is the sample standard deviation (0.0 for a single run). Values are
    passed through ``zero_small``; function order is preserved.
    """
    grouped = runs.groupby("func", sort=False)["error"]
    summary = grouped.agg(
        Best="min",
        Median="median",
        Mean="mean",
        Worst="max",
        SD="std",
    ).reset_index().rename(columns={"func": "Function"})
    summary["SD"] = summary["SD"].fillna(0.0)

    for col in SUMMARY_COLUMNS[1:]:
        summary[col] = summary[col].map(lambda v: zero_small(v, tol=report_zero_tol))
    return summary[SUMMARY_COLUMNS]


def _write_summary_csv(path: Path, summary: pd.DataFrame, *, report_zero_tol: float) -> None:
    """Write the summary table with 2-decimal scientific notation."""
    ensure_dir(path.parent)
    out = summary.copy()
    for col in SUMMARY_COLUMNS[1:]:
        out[col] = out[col].map(lambda v: format_sci(v, tol=report_zero_tol))
    out.to_csv(path, index=False)


def _write_run_errors_csv(path: Path, errors: Sequence[float]) -> None:
    """Write per-run errors at full precision."""
    ensure_dir(path.parent)
    df = pd.DataFrame({
        "Run": np.arange(1, len(errors) + 1),
        "Error": [f"{float(e):.16e}" for e in errors],
    })
    df.to_csv(path, index=False)


# ============================================================================
# Main Experiment Runner
# ============================================================================

def run_benchmark_experiments(cfg: ExperimentConfig) -> pd.DataFrame:
    """
    Run Firefly on every (dimension, function, run) of ``cfg``.

    Parameters
    ----------
    cfg : ExperimentConfig
        Functions, dimensions, runs, Firefly parameters and output location.

    Returns
    -------
    pd.DataFrame
        One row per run with columns dim, func, run, seed, best_f, error,
        nfes, runtime.

    Raises
    ------
    ConfigurationError
        If the Firefly parameters are out of range.
    ValueError
        If runs < 1, pop_size < 2 or a function name is unknown.

    Example
    -------
    >>> cfg = ExperimentConfig(runs=3, dims=(2,), funcs=("sphere",), verbose=False)
    >>> df = run_benchmark_experiments(cfg)
    """

    # ========================================================================
    # Setup: Validate
    # ========================================================================

    algo_cfg = cfg.algorithm_config()
    if int(cfg.runs) < 1:
        raise ValueError("runs must be >= 1")
    if int(cfg.pop_size) < 2:
        raise ValueError("pop_size must be >= 2")
    funcs = tuple(get_benchmark(f).name for f in cfg.funcs)
    dims = tuple(int(d) for d in cfg.dims)

    # ========================================================================
    # Setup: Output Directories & Metadata
    # ========================================================================

    output_root = Path(cfg.output_root) if cfg.output_root is not None else Path.cwd() / "results"
    results_root = ensure_dir(output_root / cfg.alg_name)
    summary_dir = ensure_dir(results_root / "summary")
    runs_dir = ensure_dir(results_root / "runs")

    run_stamp = timestamp_now()
    env_meta = collect_environment_metadata()
    write_json(summary_dir / "environment.json", env_metadata_as_dict(env_meta))
    write_json(
        summary_dir / "run_config.json",
        cfg.to_dict(extra={"run_stamp": run_stamp}),
    )

    all_rows: List[Dict[str, Any]] = []

    # ========================================================================
    # Main Loop: Each Dimension
    # ========================================================================

    for D in dims:
        log_path = summary_dir / f"{cfg.alg_name}_D{D:02d}_log_{run_stamp}.txt"

        with DualLogger(log_path, verbose_console=cfg.verbose) as log:

            log.info("")
            log.info("╔" + "═" * 58 + "╗")
            log.info(f"║{'Firefly · Benchmarks · D=' + str(D):^58}║")
            log.info("╠" + "═" * 58 + "╣")
            log.info(f"║  {len(funcs)} functions × {cfg.runs} runs │ {algo_cfg.generations} generations".ljust(58) + "║")
            log.info(f"║  alpha={algo_cfg.alpha:g}  beta={algo_cfg.beta:g}  gamma={algo_cfg.gamma:g}  Pop={cfg.pop_size}".ljust(58) + "║")
            log.info("╚" + "═" * 58 + "╝")
            log.info("")

            log.debug("=" * 72)
            log.debug("DETAILED CONFIGURATION")
            log.debug("=" * 72)
            log.debug(f"output_root     : {output_root}")
            log.debug(f"funcs           : {funcs}")
            log.debug(f"zero_threshold  : {cfg.val_to_reach:g}")
            log.debug(f"base_seed       : {cfg.base_seed}")
            log.debug(f"stride_run      : {cfg.stride_run}")
            log.debug("")
            log.debug("ENVIRONMENT")
            log.debug("-" * 72)
            log.debug(format_environment_metadata(env_meta))

            log.info("┌" + "─" * 12 + "┬" + "─" * 12 + "┬" + "─" * 12 + "┬" + "─" * 12 + "┬" + "─" * 12 + "┬" + "─" * 12 + "┐")
            log.info(f"│{'Func':^12}│{'Best':^12}│{'Median':^12}│{'Mean':^12}│{'Worst':^12}│{'SD':^12}│")
            log.info("├" + "─" * 12 + "┼" + "─" * 12 + "┼" + "─" * 12 + "┼" + "─" * 12 + "┼" + "─" * 12 + "┼" + "─" * 12 + "┤")

            dim_rows: List[Dict[str, Any]] = []

            # ================================================================
            # Inner Loop: Each Function
            # ================================================================

            for func_idx, func in enumerate(funcs, 1):
                log.debug(f"[{func_idx}/{len(funcs)}] {func} (D={D}): running {cfg.runs} trials ...")
                f_opt = get_benchmark(func).f_opt
                run_errors: List[float] = []

                for run_id in range(1, int(cfg.runs) + 1):
                    seed = seed_for_run(
                        base_seed=cfg.base_seed,
                        stride_run=cfg.stride_run,
                        func_idx=func_idx,
                        run_id=run_id,
                    )

                    t0 = time.time()
                    res = firefly_optimize(
                        make_benchmark(func, D),
                        algo_cfg,
                        pop_size=cfg.pop_size,
                        seed=seed,
                    )
                    runtime = time.time() - t0

                    err = max(0.0, float(res.best_f) - float(f_opt))
                    if err < cfg.val_to_reach:
                        err = 0.0
                    run_errors.append(err)

                    dim_rows.append({
                        "dim": D,
                        "func": func,
                        "run": run_id,
                        "seed": seed,
                        "best_f": float(res.best_f),
                        "error": err,
                        "nfes": int(res.nfes_used),
                        "runtime": runtime,
                    })

                    log.debug(
                        f"  Run {run_id:02d}/{cfg.runs}: seed={seed} nfes={res.nfes_used} "
                        f"best_f={res.best_f:.6e} err={err:.6e}"
                    )

                _write_run_errors_csv(
                    runs_dir / f"RunErrors_{cfg.alg_name}_{func}_D{D}.csv",
                    run_errors,
                )

            # ================================================================
            # Per-Dimension Summary
            # ================================================================

            dim_df = pd.DataFrame(dim_rows)
            summary = _summarize_errors(dim_df, report_zero_tol=cfg.report_zero_tol)

            for row in summary.itertuples(index=False):
                cells = [
                    format_sci(getattr(row, c), tol=cfg.report_zero_tol)
                    for c in SUMMARY_COLUMNS[1:]
                ]
                log.info(f"│{row.Function:^12}│" + "│".join(f"{c:^12}" for c in cells) + "│")

            log.info("└" + "─" * 12 + "┴" + "─" * 12 + "┴" + "─" * 12 + "┴" + "─" * 12 + "┴" + "─" * 12 + "┴" + "─" * 12 + "┘")
            log.info("")
            log.info(f"✓ Completed {len(funcs)} functions × {cfg.runs} runs = {len(funcs) * cfg.runs} total runs")
            log.info("")

            _write_summary_csv(
                summary_dir / f"Summary_All_Results_D{D}.csv",
                summary,
                report_zero_tol=cfg.report_zero_tol,
            )
            all_rows.extend(dim_rows)

    df = pd.DataFrame(all_rows, columns=["dim", "func", "run", "seed", "best_f", "error", "nfes", "runtime"])
    df.to_csv(summary_dir / "All_Runs.csv", index=False)
    return df


# ============================================================================
# Statistical Comparison
# ============================================================================

def compare_configs(
    errors_a: Sequence[float],
    errors_b: Sequence[float],
    alpha: float = 0.05,
) -> Dict[str, Any]:
    """
    Wilcoxon signed-rank test between two paired error samples.

    Typically the per-run errors of two Firefly configurations on the same
    function, dimension and seeds.

    Returns
    -------
    dict
        statistic, pvalue, significant (pvalue < alpha) and better
        ('first', 'second' or 'tie' by mean error).
    """
    a = np.asarray(errors_a, dtype=np.float64)
    b = np.asarray(errors_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError("paired samples must have the same length")

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            stat, pvalue = stats.wilcoxon(a, b)
        except ValueError:
            # All differences are zero
            stat, pvalue = 0.0, 1.0
    if np.isnan(pvalue):
        stat, pvalue = 0.0, 1.0

    mean_a, mean_b = float(np.mean(a)), float(np.mean(b))
    if mean_a < mean_b:
        better = 'first'
    elif mean_b < mean_a:
        better = 'second'
    else:
        better = 'tie'

    return {
        'statistic': float(stat),
        'pvalue': float(pvalue),
        'significant': bool(pvalue < alpha),
        'better': better,
    }


__all__ = [
    "DualLogger",
    "compare_configs",
    "run_benchmark_experiments",
]
