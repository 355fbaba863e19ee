"""
Distance and Attractiveness
===========================

Pure functions used by the Firefly move:

    r^2 = sum_k (a[k] - b[k])^2            over the continuous block
    b   = beta * exp(-gamma_eff * r^2)     attractiveness, in [0, beta]

``gamma_eff`` is the absorption coefficient normalized by the largest
pairwise distance in the population (see ``max_pairwise_distance``), so the
decay is scale-free with respect to the size of the search box.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from scipy.spatial.distance import pdist


def squared_distance(a: np.ndarray, b: np.ndarray, n: Optional[int] = None) -> float:
    """
    Squared Euclidean distance over the first n coordinates.

    Parameters
    ----------
    a, b : np.ndarray
        Positions, shape (D,).
    n : int, optional
        Size of the continuous block. Defaults to the full length.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if n is None:
        n = a.shape[0]
    d = a[:n] - b[:n]
    return float(np.dot(d, d))


def attractiveness(r_sqrd: float, gamma_eff: float, beta: float) -> float:
    """Attractiveness ``beta * exp(-gamma_eff * r_sqrd)``."""
    return float(beta * np.exp(-gamma_eff * r_sqrd))


def max_pairwise_distance(X: np.ndarray, n: Optional[int] = None) -> float:
    """
    Largest Euclidean distance between any two rows of X.

    Parameters
    ----------
    X : np.ndarray
        Positions, shape (NP, D).
    n : int, optional
        Only the first n columns are used. Defaults to all columns.

    Returns
    -------
    float
        0.0 when X has fewer than two rows or all rows coincide.
    """
    X = np.asarray(X, dtype=np.float64)
    if X.shape[0] < 2:
        return 0.0
    if n is None:
        n = X.shape[1]
    return float(np.max(pdist(X[:, :n])))


def diversity(X: np.ndarray, n: Optional[int] = None) -> float:
    """Population diversity as the mean per-coordinate standard deviation."""
    X = np.asarray(X, dtype=np.float64)
    if X.shape[0] < 2:
        return 0.0
    if n is None:
        n = X.shape[1]
    return float(np.mean(np.std(X[:, :n], axis=0)))


__all__ = [
    "attractiveness",
    "diversity",
    "max_pairwise_distance",
    "squared_distance",
]
