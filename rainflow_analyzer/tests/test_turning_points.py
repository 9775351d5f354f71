from __future__ import annotations

import numpy as np
import pytest

from rainflow_analyzer.analysis.turning_points import (
    compress_duplicates,
    extract_turning_points,
    interior_reversals,
)
from rainflow_analyzer.models.points import TurningPoint


def _idx(tps):
    return [p.index for p in tps]


def _val(tps):
    return [p.value for p in tps]


# -----------------------------------------------------------------------
# Alternating signals
# -----------------------------------------------------------------------


def test_alternating_signal_every_sample_is_a_reversal() -> None:
    tps = extract_turning_points([-1, 2, -3, 5, -2], use_endpoints=True)
    assert _idx(tps) == [0, 1, 2, 3, 4]
    assert _val(tps) == [-1.0, 2.0, -3.0, 5.0, -2.0]


def test_alternating_signal_without_endpoints_keeps_interior_only() -> None:
    tps = extract_turning_points([-1, 2, -3, 5, -2], use_endpoints=False)
    assert _idx(tps) == [1, 2, 3]


def test_accepts_numpy_arrays() -> None:
    x = np.array([-1.0, 2.0, -3.0, 5.0, -2.0])
    assert extract_turning_points(x, True) == extract_turning_points(x.tolist(), True)


# -----------------------------------------------------------------------
# Compression
# -----------------------------------------------------------------------


def test_compression_keeps_original_indices() -> None:
    tps = extract_turning_points([0, 0, 3, 3, 1, 1, 4], use_endpoints=True)
    assert _idx(tps) == [0, 2, 4, 6]
    assert _val(tps) == [0.0, 3.0, 1.0, 4.0]


def test_compress_duplicates_exact_equality() -> None:
    out = compress_duplicates([1.0, 1.0, 1.0 + 1e-12, 1.0 + 1e-12, 2.0])
    assert [p.index for p in out] == [0, 2, 4]


def test_plateau_at_extremum_reports_first_sample_of_plateau() -> None:
    tps = extract_turning_points([0, 2, 2, 0], use_endpoints=True)
    assert _idx(tps) == [0, 1, 3]


# -----------------------------------------------------------------------
# Degenerate inputs
# -----------------------------------------------------------------------


@pytest.mark.parametrize("use_endpoints", [True, False])
def test_empty_and_singleton(use_endpoints: bool) -> None:
    assert extract_turning_points([], use_endpoints) == []
    assert extract_turning_points([7.5], use_endpoints) == [TurningPoint(index=0, value=7.5)]


@pytest.mark.parametrize("use_endpoints", [True, False])
def test_constant_signal_gives_single_point(use_endpoints: bool) -> None:
    assert extract_turning_points([2, 2, 2], use_endpoints) == [TurningPoint(index=0, value=2.0)]


def test_monotonic_with_endpoints_gives_first_and_last() -> None:
    tps = extract_turning_points([1, 2, 3], use_endpoints=True)
    assert _idx(tps) == [0, 2]


def test_monotonic_without_endpoints_uses_compressed_midpoint() -> None:
    tps = extract_turning_points([1, 2, 3, 4, 5], use_endpoints=False)
    assert tps == [TurningPoint(index=2, value=3.0)]

    # Midpoint is taken in the compressed sequence, not the raw one:
    # compressed = [(0,1), (2,2), (3,3), (6,4)] -> compressed[4 // 2] = (3,3)
    tps = extract_turning_points([1, 1, 2, 3, 3, 3, 4], use_endpoints=False)
    assert tps == [TurningPoint(index=3, value=3.0)]


def test_two_samples() -> None:
    assert _idx(extract_turning_points([1, 5], True)) == [0, 1]
    assert extract_turning_points([1, 5], False) == [TurningPoint(index=1, value=5.0)]


def test_interior_reversals_empty_for_monotonic() -> None:
    assert interior_reversals(compress_duplicates([0.0, 1.0, 2.0, 3.0])) == []


# -----------------------------------------------------------------------
# Ordering
# -----------------------------------------------------------------------


@pytest.mark.parametrize("use_endpoints", [True, False])
def test_indices_strictly_increasing(use_endpoints: bool) -> None:
    rng = np.random.default_rng(0)
    x = np.round(rng.normal(size=500), 1)  # rounding produces repeated samples
    tps = extract_turning_points(x, use_endpoints)
    idx = np.array(_idx(tps))
    assert idx.size >= 1
    assert np.all(np.diff(idx) > 0)
    assert all(x[p.index] == p.value for p in tps)
