"""Turning-point extraction.

Consecutive equal samples are collapsed, then a sample is a reversal when the
sign of the step into it differs from the sign of the step out of it. The first
and last compressed samples can be injected as reversals.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from rainflow_analyzer.models.points import TurningPoint


def _sign(v: float) -> int:
    """Three-valued sign. Zero stays distinct from +1/-1."""
    if v > 0:
        return 1
    if v < 0:
        return -1
    return 0


def compress_duplicates(values: Sequence[float]) -> List[TurningPoint]:
    """Drop samples equal to the preceding kept sample (exact equality).

    Each kept sample retains its index in ``values``.
    """
    out: List[TurningPoint] = []
    for i, v in enumerate(values):
        if not out or v != out[-1].value:
            out.append(TurningPoint(index=i, value=v))
    return out


def interior_reversals(compressed: Sequence[TurningPoint]) -> List[TurningPoint]:
    """Interior points of a compressed sequence where the sign of the slope changes."""
    out: List[TurningPoint] = []
    for k in range(1, len(compressed) - 1):
        prev = compressed[k - 1]
        cur = compressed[k]
        nxt = compressed[k + 1]
        if _sign(cur.value - prev.value) != _sign(nxt.value - cur.value):
            out.append(cur)
    return out


def extract_turning_points(raw: Sequence[float], use_endpoints: bool) -> List[TurningPoint]:
    """Locate the direction reversals of ``raw``.

    Parameters
    ----------
    raw:
        Sample sequence (list, tuple or 1D array). Non-finite values are not filtered.
    use_endpoints:
        If True, the first and last compressed samples are injected as reversals.
        If False and the signal has no interior reversal, the middle sample of the
        compressed sequence is returned so the result is never empty.

    Returns
    -------
    list[TurningPoint]
        Strictly increasing by original index; at least one point for non-empty input.
    """
    x = np.asarray(raw, dtype=float).ravel().tolist()

    if len(x) < 2:
        return [TurningPoint(index=i, value=v) for i, v in enumerate(x)]

    compressed = compress_duplicates(x)
    if len(compressed) == 1:
        return [compressed[0]]

    first = compressed[0]
    last = compressed[-1]

    tp: List[TurningPoint] = []
    if use_endpoints:
        tp.append(first)

    tp.extend(interior_reversals(compressed))

    if use_endpoints:
        if not tp or tp[-1].index != last.index:
            tp.append(last)
    elif not tp:
        tp.append(compressed[len(compressed) // 2])

    return tp
