"""
Utility Functions
=================

Helpers shared by the experiment harness and the CLI:

1. **Numerical Formatting**: Scientific notation with zero-handling
2. **File Operations**: Directory creation, JSON writing
3. **Input Parsing**: Integer and name lists from the command line
4. **Reproducibility**: Seeding scheme, environment metadata

Reporting Zero
--------------
A run that ends at 3.1e-12 has, for reporting purposes, solved the problem.
Values with |x| <= REPORT_ZERO_TOL are shown as "0.00E+00"; stored values
are never altered.

Seeding
-------
Each (function, run) pair gets its own deterministic seed:

    seed = base_seed + func_idx * stride_run + (run_id - 1)

where func_idx is the 1-based position of the function in the experiment.
"""

from __future__ import annotations

import json
import os
import platform
import sys
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Set, Tuple

import numpy as np
import pandas as pd
import scipy

from .constants import REPORT_ZERO_TOL


ZERO_TOL_DEFAULT: float = float(REPORT_ZERO_TOL)


# ============================================================================
# Time & File System
# ============================================================================

def timestamp_now() -> str:
    """Filesystem-friendly timestamp, e.g. '2024-01-15_14.30.45'."""
    return datetime.now().strftime("%Y-%m-%d_%H.%M.%S")


def ensure_dir(path: Path) -> Path:
    """Create a directory (and parents) if missing; return it for chaining."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_json(path: Path, data: Any, *, indent: int = 2) -> None:
    """
    Write data to a JSON file with sorted keys.

    Parent directories are created. Objects JSON cannot encode (Path, numpy
    scalars) are written through ``str``.
    """
    path = Path(path)
    ensure_dir(path.parent)
    path.write_text(
        json.dumps(data, indent=indent, sort_keys=True, default=str),
        encoding="utf-8",
    )


# ============================================================================
# Input Parsing
# ============================================================================

def parse_int_set(spec: str) -> Set[int]:
    """
    Parse an integer set such as "2,10" or "1-5,7".

    Ranges are inclusive and may be given in either order.

    Examples
    --------
    >>> sorted(parse_int_set("2,10"))
    [2, 10]
    >>> sorted(parse_int_set("5-3,8"))
    [3, 4, 5, 8]
    """
    s = (spec or "").strip()
    if not s:
        raise ValueError("Empty integer-set specification")

    out: Set[int] = set()
    for part in s.replace(" ", "").split(","):
        if not part:
            continue
        if "-" in part:
            a, b = part.split("-", 1)
            lo, hi = int(a), int(b)
            if hi < lo:
                lo, hi = hi, lo
            out.update(range(lo, hi + 1))
        else:
            out.add(int(part))
    return out


def parse_name_list(spec: str) -> Tuple[str, ...]:
    """Parse "sphere, Rastrigin" into ('sphere', 'rastrigin'), keeping order."""
    names = [p.strip().lower() for p in (spec or "").split(",")]
    names = [n for n in names if n]
    if not names:
        raise ValueError("Empty name-list specification")
    return tuple(dict.fromkeys(names))


# ============================================================================
# Numerical Formatting
# ============================================================================

def zero_small(x: float, *, tol: float = ZERO_TOL_DEFAULT) -> float:
    """Return 0.0 if |x| <= tol, else float(x)."""
    return 0.0 if abs(float(x)) <= float(tol) else float(x)


def format_sci(x: float, *, tol: float = ZERO_TOL_DEFAULT) -> str:
    """
    Format in 2-decimal scientific notation, small values as "0.00E+00".

    Examples
    --------
    >>> format_sci(30.6)
    '3.06E+01'
    >>> format_sci(1e-9)
    '0.00E+00'
    """
    return f"{zero_small(x, tol=tol):.2E}"


# ============================================================================
# Reproducibility
# ============================================================================

def seed_for_run(
    *,
    base_seed: int,
    stride_run: int,
    func_idx: int,
    run_id: int,
) -> int:
    """
    Deterministic seed for a (function, run) pair.

    Examples
    --------
    >>> seed_for_run(base_seed=123456, stride_run=9973, func_idx=1, run_id=1)
    133429
    >>> seed_for_run(base_seed=123456, stride_run=9973, func_idx=1, run_id=2)
    133430
    """
    return int(base_seed) + int(func_idx) * int(stride_run) + (int(run_id) - 1)


@dataclass(frozen=True)
class EnvironmentMetadata:
    """Interpreter, platform and library versions recorded with each experiment."""
    python_version: str
    platform: str
    machine: str
    cpu_count: int
    numpy_version: str
    scipy_version: str
    pandas_version: str
    thread_env: Dict[str, str]


# Thread environment variables that affect BLAS parallelism
_THREAD_ENV_KEYS: List[str] = [
    "OMP_NUM_THREADS",
    "MKL_NUM_THREADS",
    "OPENBLAS_NUM_THREADS",
    "VECLIB_MAXIMUM_THREADS",
]


def collect_environment_metadata() -> EnvironmentMetadata:
    """Snapshot the current interpreter and library versions."""
    thread_env = {k: os.environ[k] for k in _THREAD_ENV_KEYS if k in os.environ}

    return EnvironmentMetadata(
        python_version=sys.version.replace("\n", " "),
        platform=f"{platform.system()}-{platform.release()}",
        machine=platform.machine(),
        cpu_count=os.cpu_count() or 0,
        numpy_version=np.__version__,
        scipy_version=scipy.__version__,
        pandas_version=pd.__version__,
        thread_env=thread_env,
    )


def format_environment_metadata(meta: EnvironmentMetadata) -> str:
    """Render metadata as aligned 'key : value' lines."""
    d = asdict(meta)
    width = max(len(k) for k in d)
    lines = []
    for k, v in d.items():
        if isinstance(v, dict):
            v = ", ".join(f"{a}={b}" for a, b in v.items()) or "(not set)"
        lines.append(f"{k:<{width}} : {v}")
    return "\n".join(lines) + "\n"


def env_metadata_as_dict(meta: EnvironmentMetadata) -> Dict[str, Any]:
    return asdict(meta)


__all__ = [
    "EnvironmentMetadata",
    "collect_environment_metadata",
    "ensure_dir",
    "env_metadata_as_dict",
    "format_environment_metadata",
    "format_sci",
    "parse_int_set",
    "parse_name_list",
    "seed_for_run",
    "timestamp_now",
    "write_json",
    "zero_small",
]
