from __future__ import annotations

import numpy as np

from rainflow_analyzer import RainflowOptions, run_analysis
from rainflow_analyzer.analysis.tables import (
    cycles_frame,
    events_frame,
    matrix_frame,
    stack_frame,
    turning_points_frame,
)


DEMO = [-2, 1, -3, 5, -1, 3, -4, 4, -2]
OPTS = RainflowOptions(use_endpoints_as_reversals=True, residue="half", bins_range=4, bins_mean=3)


def test_turning_points_frame() -> None:
    res = run_analysis(DEMO, OPTS).result
    df = turning_points_frame(res.turning_points)
    assert list(df.columns) == ["index", "value"]
    assert df["index"].tolist() == list(range(9))
    assert df["value"].tolist() == [float(v) for v in DEMO]


def test_cycles_frame_marks_closed_and_residual() -> None:
    res = run_analysis(DEMO, OPTS).result
    df = cycles_frame(res)
    assert len(df) == 7
    assert df["kind"].tolist() == ["closed"] + ["residual"] * 6
    assert df["count"].sum() == 4.0
    first = df.iloc[0]
    assert (first["b_index"], first["c_index"]) == (4, 5)


def test_cycles_frame_empty() -> None:
    res = run_analysis([], OPTS).result
    df = cycles_frame(res)
    assert df.empty
    assert "range" in df.columns


def test_events_frame() -> None:
    res = run_analysis(DEMO, OPTS).result
    df = events_frame(res.events)
    assert df["k"].tolist() == list(range(9))
    assert df["n_closed"].sum() == 1
    row = df.iloc[6]
    assert (row["n_before"], row["n_after"]) == (6, 5)
    assert row["stack_after"] == "0 1 2 3 6"
    assert row["window"] == "1 2 3 6"
    assert df.iloc[0]["window"] == ""


def test_stack_frame_marks_window_roles() -> None:
    res = run_analysis(DEMO, OPTS).result
    df = stack_frame(res.events[6])
    after = df[df["stack"] == "after"]
    assert after["index"].tolist() == [0, 1, 2, 3, 6]
    assert after["role"].tolist() == ["", "A", "B", "C", "D"]
    assert (df[df["stack"] == "before"]["role"] == "").all()


def test_matrix_frame_long_format() -> None:
    m = run_analysis(DEMO, OPTS).matrix
    df = matrix_frame(m)
    assert len(df) == 4 * 3
    assert df["count"].sum() == 4.0
    assert np.array_equal(
        df.pivot(index="range_bin", columns="mean_bin", values="count").to_numpy(),
        m.counts,
    )
    assert (df["range_hi"] > df["range_lo"]).all()
