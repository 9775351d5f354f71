"""Range x mean frequency matrix of rainflow cycles.

Each axis spans the observed min..max of the cycle values, split into evenly
spaced bins. Edge ``i`` is ``lo + (hi - lo) * (i / bins)``; this exact rounding
order is part of the output, since a cycle sitting on an edge moves bins if it
changes.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from rainflow_analyzer.models.options import check_bin_count
from rainflow_analyzer.models.points import Cycle, Matrix


def _domain(values: np.ndarray) -> Tuple[float, float]:
    """Min/max of ``values``; ``[0, 1]`` if empty, widened to ``[lo, lo + 1]`` if degenerate."""
    if values.size == 0:
        lo, hi = 0.0, 1.0
    else:
        lo, hi = float(np.min(values)), float(np.max(values))
    if hi == lo:
        hi = lo + 1.0
    return lo, hi


def bin_edges(lo: float, hi: float, bins: int) -> np.ndarray:
    """``bins + 1`` evenly spaced edges from ``lo`` to ``hi`` (both included)."""
    n = int(bins)
    return lo + (hi - lo) * (np.arange(n + 1, dtype=float) / n)


def find_bins(edges: np.ndarray, values: np.ndarray) -> np.ndarray:
    """Bin index of each value.

    Values at or below the first edge go to bin 0, values at or above the last edge
    go to the last bin; otherwise the bin is the half-open ``[edge[i], edge[i+1])``.
    """
    n_bins = int(edges.size) - 1
    idx = np.searchsorted(edges, values, side="right") - 1
    return np.clip(idx, 0, n_bins - 1).astype(int)


def build_matrix(cycles: Sequence[Cycle], bins_range: int, bins_mean: int) -> Matrix:
    """Bin cycles into a ``(bins_range, bins_mean)`` range x mean frequency matrix.

    Parameters
    ----------
    cycles:
        Closed and residual cycles; each contributes its ``count``.
    bins_range, bins_mean:
        Number of bins per axis, both >= 1.

    Returns
    -------
    Matrix
        Edges span the observed min..max of each axis. The result does not depend on
        the order of ``cycles``.
    """
    check_bin_count("bins_range", bins_range)
    check_bin_count("bins_mean", bins_mean)

    ranges = np.asarray([c.range for c in cycles], dtype=float)
    means = np.asarray([c.mean for c in cycles], dtype=float)
    weights = np.asarray([c.count for c in cycles], dtype=float)

    range_edges = bin_edges(*_domain(ranges), bins_range)
    mean_edges = bin_edges(*_domain(means), bins_mean)

    counts = np.zeros((int(bins_range), int(bins_mean)), dtype=float)
    if weights.size:
        ri = find_bins(range_edges, ranges)
        mi = find_bins(mean_edges, means)
        # Unbuffered accumulation: several cycles may land in the same cell.
        np.add.at(counts, (ri, mi), weights)

    return Matrix(range_edges=range_edges, mean_edges=mean_edges, counts=counts)
