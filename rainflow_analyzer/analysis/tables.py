"""Tabular views of a rainflow pass, for inspection and export.

All functions return fresh pandas DataFrames; the result objects are never modified.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from rainflow_analyzer.models.points import Cycle, Matrix, StepEvent, TurningPoint

from .pipeline import RainflowResult


def turning_points_frame(points: Sequence[TurningPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "index": np.asarray([p.index for p in points], dtype=int),
            "value": np.asarray([p.value for p in points], dtype=float),
        }
    )


def _cycle_row(i: int, c: Cycle, kind: str) -> Dict[str, Any]:
    return {
        "cycle": i,
        "kind": kind,
        "range": c.range,
        "mean": c.mean,
        "count": c.count,
        "b_index": c.b.index,
        "b_value": c.b.value,
        "c_index": c.c.index,
        "c_value": c.c.value,
    }


_CYCLE_COLS = ["cycle", "kind", "range", "mean", "count", "b_index", "b_value", "c_index", "c_value"]


def cycles_frame(result: RainflowResult) -> pd.DataFrame:
    """One row per cycle of ``result.cycles``, in order.

    ``kind`` is "closed" for cycles closed by the stack engine and "residual" for
    cycles produced by the residual policy.
    """
    n_closed = len(result.closed_cycles)
    rows = [
        _cycle_row(i, c, "closed" if i < n_closed else "residual")
        for i, c in enumerate(result.cycles)
    ]
    return pd.DataFrame(rows, columns=_CYCLE_COLS)


def _indices(points: Sequence[TurningPoint]) -> str:
    return " ".join(str(p.index) for p in points)


def events_frame(events: Sequence[StepEvent]) -> pd.DataFrame:
    """Per-step summary of the stack engine audit trail.

    Stacks and windows are rendered as space-separated original indices.
    """
    rows: List[Dict[str, Any]] = []
    for ev in events:
        rows.append(
            {
                "k": ev.k,
                "appended_index": ev.appended.index,
                "appended_value": ev.appended.value,
                "n_before": len(ev.stack_before),
                "n_after": len(ev.stack_after),
                "n_closed": len(ev.closed),
                "stack_after": _indices(ev.stack_after),
                "window": _indices(ev.window_abcd) if ev.window_abcd is not None else "",
            }
        )
    return pd.DataFrame(
        rows,
        columns=[
            "k", "appended_index", "appended_value", "n_before", "n_after",
            "n_closed", "stack_after", "window",
        ],
    )


def stack_frame(event: StepEvent) -> pd.DataFrame:
    """Before/after stack of one step, bottom first, with the window roles (A-D) marked."""
    roles: Dict[int, str] = {}
    if event.window_abcd is not None:
        for role, p in zip("ABCD", event.window_abcd):
            roles[p.index] = role

    rows: List[Dict[str, Any]] = []
    for which, stack in (("before", event.stack_before), ("after", event.stack_after)):
        for pos, p in enumerate(stack):
            rows.append(
                {
                    "stack": which,
                    "position": pos,
                    "index": p.index,
                    "value": p.value,
                    "role": roles.get(p.index, "") if which == "after" else "",
                }
            )
    return pd.DataFrame(rows, columns=["stack", "position", "index", "value", "role"])


def matrix_frame(matrix: Matrix) -> pd.DataFrame:
    """Long-format view of the frequency matrix: one row per (range bin, mean bin) cell."""
    n_r, n_m = matrix.shape
    ri, mi = np.meshgrid(np.arange(n_r), np.arange(n_m), indexing="ij")
    ri = ri.ravel()
    mi = mi.ravel()
    return pd.DataFrame(
        {
            "range_bin": ri,
            "mean_bin": mi,
            "range_lo": matrix.range_edges[ri],
            "range_hi": matrix.range_edges[ri + 1],
            "mean_lo": matrix.mean_edges[mi],
            "mean_hi": matrix.mean_edges[mi + 1],
            "count": matrix.counts.ravel(),
        }
    )
