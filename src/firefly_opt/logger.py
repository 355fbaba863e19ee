"""
Console Output for Firefly Runs
===============================

Colored, width-aware console reporting:

    ═══════════════════ FIREFLY OPTIMIZATION ═══════════════════
    ─── PROBLEM ─────────────────────────────────────────────────
      Problem            rastrigin-10D
      ...
      Gen │     Evals │          Best │        Mean │         Std │   Moves │
    ──────┼───────────┼───────────────┼─────────────┼─────────────┼─────────┼
        1 │       142 │    8.1234e+01 │ ...

Verbosity levels:
- 0: Silent (records are still kept in ``logger.log``)
- 1: Header and summary
- 2: Header, one row every ``log_interval`` generations, summary
- 3: As 2, with a population diversity column
"""

from __future__ import annotations

import platform
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np


# =============================================================================
# Console Colors
# =============================================================================

class Colors:
    """ANSI escape codes, blanked out when colors are disabled."""

    _CODES = {
        'RESET': '\033[0m',
        'BOLD': '\033[1m',
        'DIM': '\033[2m',
        'RED': '\033[91m',
        'GREEN': '\033[92m',
        'YELLOW': '\033[93m',
        'BLUE': '\033[94m',
        'CYAN': '\033[96m',
    }

    ENABLED = True
    RESET = _CODES['RESET']
    BOLD = _CODES['BOLD']
    DIM = _CODES['DIM']
    RED = _CODES['RED']
    GREEN = _CODES['GREEN']
    YELLOW = _CODES['YELLOW']
    BLUE = _CODES['BLUE']
    CYAN = _CODES['CYAN']

    @classmethod
    def set_enabled(cls, enabled: bool) -> None:
        cls.ENABLED = bool(enabled)
        for name, code in cls._CODES.items():
            setattr(cls, name, code if enabled else '')

    @classmethod
    def enable(cls):
        cls.set_enabled(True)

    @classmethod
    def disable(cls):
        cls.set_enabled(False)


# =============================================================================
# Formatting Helpers
# =============================================================================

def fmt_sci(value: float, digits: int = 4) -> str:
    """Scientific notation; magnitudes below 1e-12 print as zero."""
    value = float(value)
    if abs(value) < 1e-12:
        value = 0.0
    return f"{value:.{digits}e}"


def fmt_duration(seconds: float) -> str:
    """'0.42s', '3m 07.5s' or '2h 05m'."""
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{int(minutes)}m {secs:04.1f}s"
    hours, minutes = divmod(int(minutes), 60)
    return f"{hours}h {minutes:02d}m"


def rule(char: str = '─', width: int = 80) -> str:
    return char * width


def banner(title: str, width: int = 80, char: str = '═') -> str:
    """Title centred in a line of ``char``, exactly ``width`` long."""
    return f" {title} ".center(width, char)


def section(title: str, width: int = 80) -> str:
    C = Colors
    head = f"─── {title} "
    return f"{C.CYAN}{C.BOLD}{head}{'─' * max(0, width - len(head))}{C.RESET}"


# =============================================================================
# Run Records
# =============================================================================

@dataclass
class GenerationRecord:
    """One logged Firefly generation."""
    generation: int
    nfes: int
    best_f: float
    mean_f: float
    std_f: float
    moves: int
    diversity: float
    improved: bool      # best_f strictly better than at the previous record
    stall: int          # consecutive records without improvement


@dataclass
class RunLog:
    """Everything an OptimizationLogger saw during one run."""
    config: Dict[str, Any] = field(default_factory=dict)
    generations: List[GenerationRecord] = field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0

    @property
    def runtime(self) -> float:
        return max(0.0, self.end_time - self.start_time)

    @property
    def history(self) -> np.ndarray:
        return np.array([r.best_f for r in self.generations], dtype=np.float64)

    @property
    def last(self) -> Optional[GenerationRecord]:
        return self.generations[-1] if self.generations else None


# =============================================================================
# Logger
# =============================================================================

class OptimizationLogger:
    """
    Console reporter driven by ``Firefly.evolve`` and ``firefly_optimize``.

    Parameters
    ----------
    verbosity : int, default=2
        0=silent, 1=header and summary, 2=generation rows, 3=with diversity.
    log_interval : int, default=10
        Print a row every N generations (the first one is always printed).
    width : int, default=80
        Console width used for rules and banners.
    use_colors : bool, default=True
        Emit ANSI color codes.
    """

    def __init__(
        self,
        verbosity: int = 2,
        log_interval: int = 10,
        width: int = 80,
        use_colors: bool = True,
    ):
        self.verbosity = int(verbosity)
        self.log_interval = max(1, int(log_interval))
        self.width = int(width)
        Colors.set_enabled(use_colors)

        self.log = RunLog()
        self._minimize = True

    # -------------------------------------------------------------------------
    # Header
    # -------------------------------------------------------------------------

    def _kv(self, label: str, value: Any, note: str = "") -> None:
        C = Colors
        tail = f"  {C.DIM}{note}{C.RESET}" if note else ""
        print(f"  {C.BOLD}{label:<18}{C.RESET} {value}{tail}")

    def print_header(self, config: Dict[str, Any]):
        """
        Start a run and print its settings.

        Recognised keys: problem, dim, dc, sense, pop_size, seed,
        generations, alpha, beta, gamma.
        """
        self.log = RunLog(config=dict(config), start_time=time.time())
        self._minimize = config.get('sense', 'min') != 'max'

        if self.verbosity < 1:
            return

        C = Colors
        W = self.width

        print()
        print(f"{C.CYAN}{C.BOLD}{banner('FIREFLY OPTIMIZATION', W)}{C.RESET}")
        print()
        print(section("PROBLEM", W))
        self._kv("Problem", config.get('problem', '?'))
        self._kv("Dimension", f"{config.get('dim', '?')} ({config.get('dc', '?')} continuous)")
        self._kv("Sense", "minimize" if self._minimize else "maximize")
        self._kv("Fireflies", config.get('pop_size', '?'))
        self._kv("Seed", config.get('seed'))
        print()
        print(section("PARAMETERS", W))
        self._kv("generations", config.get('generations', '?'))
        for name, role in (('alpha', 'random step'), ('beta', 'attraction'), ('gamma', 'absorption')):
            self._kv(name, f"{float(config.get(name, 0.0)):.4g}", role)
        print()
        print(f"  {C.DIM}b = beta * exp(-(gamma / r_max) * r^2)   "
              f"python {platform.python_version()} / numpy {np.__version__}{C.RESET}")
        print()

        if self.verbosity >= 2:
            self._print_columns()

    # -------------------------------------------------------------------------
    # Generations
    # -------------------------------------------------------------------------

    def _columns(self) -> List[Tuple[str, int]]:
        cols = [('Gen', 5), ('Evals', 9), ('Best', 13), ('Mean', 11), ('Std', 11), ('Moves', 7)]
        if self.verbosity >= 3:
            cols.append(('Diversity', 10))
        cols.append(('', 10))
        return cols

    def _print_columns(self):
        C = Colors
        cols = self._columns()
        print(f"{C.BOLD}{' │ '.join(f'{n:>{w}}' for n, w in cols)}{C.RESET}")
        print(f"{C.DIM}{'─┼─'.join('─' * w for _, w in cols)}{C.RESET}")

    def _better(self, a: float, b: float) -> bool:
        return a < b if self._minimize else a > b

    def log_generation(
        self,
        generation: int,
        nfes: int,
        fitness: Sequence[float],
        best_f: float,
        moves: int,
        diversity: float = 0.0,
    ):
        """Record one generation; print it when due."""
        f = np.asarray(fitness, dtype=np.float64).ravel()
        prev = self.log.last

        improved = prev is not None and self._better(best_f, prev.best_f)
        if prev is None or improved:
            stall = 0
        else:
            stall = prev.stall + 1

        record = GenerationRecord(
            generation=int(generation),
            nfes=int(nfes),
            best_f=float(best_f),
            mean_f=float(np.mean(f)),
            std_f=float(np.std(f)),
            moves=int(moves),
            diversity=float(diversity),
            improved=improved,
            stall=stall,
        )
        self.log.generations.append(record)

        if self.verbosity >= 2 and (generation == 1 or generation % self.log_interval == 0):
            self._print_record(record)

    def _print_record(self, r: GenerationRecord):
        C = Colors

        if r.improved:
            best = f"{C.GREEN}{fmt_sci(r.best_f):>13}{C.RESET}"
            status = f"{C.GREEN}improved{C.RESET}"
        elif r.stall >= 20:
            best = f"{C.YELLOW}{fmt_sci(r.best_f):>13}{C.RESET}"
            status = f"{C.YELLOW}stall {r.stall}{C.RESET}"
        else:
            best = f"{fmt_sci(r.best_f):>13}"
            status = ""

        cells = [
            f"{r.generation:>5}",
            f"{r.nfes:>9,}",
            best,
            f"{fmt_sci(r.mean_f, 3):>11}",
            f"{fmt_sci(r.std_f, 3):>11}",
            f"{r.moves:>7,}",
        ]
        if self.verbosity >= 3:
            cells.append(f"{fmt_sci(r.diversity, 2):>10}")
        cells.append(status)
        print(' │ '.join(cells))

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def print_summary(self, result=None):
        """
        Finish the run and print results.

        ``result`` may be any object with ``best_f``, ``nfes_used`` and
        ``best_x`` (a FireflyResult); otherwise the last record is used.
        """
        self.log.end_time = time.time()

        if self.verbosity < 1:
            return

        C = Colors
        W = self.width
        last = self.log.last

        if result is not None:
            best_f, nfes, best_x = float(result.best_f), int(result.nfes_used), result.best_x
        else:
            best_f = last.best_f if last else float('nan')
            nfes = last.nfes if last else 0
            best_x = None

        print()
        print(f"{C.CYAN}{C.BOLD}{banner('OPTIMIZATION COMPLETE', W)}{C.RESET}")
        print()
        print(section("RESULT", W))
        self._kv("Best fitness", f"{C.GREEN}{fmt_sci(best_f)}{C.RESET}")
        self._kv("Evaluations", f"{nfes:,}")
        self._kv("Generations", len(self.log.generations))
        self._kv("Runtime", fmt_duration(self.log.runtime))
        if best_x is not None:
            x = np.asarray(best_x, dtype=np.float64)
            shown = x if x.size <= 5 else np.concatenate([x[:2], x[-1:]])
            parts = [f"{v:.4f}" for v in shown]
            if x.size > 5:
                parts.insert(2, "...")
            self._kv("Best position", f"[{', '.join(parts)}]")
        print()

        records = self.log.generations
        if len(records) > 1:
            history = self.log.history
            gain = (history[0] - history[-1]) if self._minimize else (history[-1] - history[0])
            improved_at = [r.generation for r in records if r.improved]

            print(section("CONVERGENCE", W))
            self._kv("First / last best", f"{fmt_sci(history[0])} → {fmt_sci(history[-1])}")
            if abs(history[0]) > 1e-12:
                self._kv("Relative gain", f"{100.0 * gain / abs(history[0]):.2f}%")
            self._kv("Improving gens", len(improved_at))
            self._kv("Last improvement", improved_at[-1] if improved_at else "-")
            self._kv("Moves / gen", f"{np.mean([r.moves for r in records]):,.1f}")
            print()

        print(f"{C.DIM}{rule('═', W)}{C.RESET}")
        print()


# =============================================================================
# One-line Messages
# =============================================================================

def _emit(color: str, symbol: str, message: str) -> None:
    print(f"{color}{symbol} {message}{Colors.RESET}")


def print_error(message: str):
    _emit(Colors.RED, "✗", f"Error: {message}")


def print_warning(message: str):
    _emit(Colors.YELLOW, "⚠", f"Warning: {message}")


def print_info(message: str):
    _emit(Colors.CYAN, "ℹ", message)


def print_success(message: str):
    _emit(Colors.GREEN, "✓", message)


def print_run_header(run: int, total: int, seed: int):
    print(f"{Colors.BOLD}[{run}/{total}]{Colors.RESET} seed={seed}")


def print_run_result(run: int, error: float, nfes: int, runtime: float, label: str = ""):
    tag = f"{label} " if label else ""
    _emit(Colors.GREEN, "  ✓", f"{tag}run {run}: error={fmt_sci(error)} evals={nfes:,} ({fmt_duration(runtime)})")


__all__ = [
    "Colors",
    "GenerationRecord",
    "OptimizationLogger",
    "RunLog",
    "banner",
    "fmt_duration",
    "fmt_sci",
    "print_error",
    "print_info",
    "print_run_header",
    "print_run_result",
    "print_success",
    "print_warning",
    "rule",
    "section",
]
