from __future__ import annotations

import random

import numpy as np
import pytest

from rainflow_analyzer.analysis.histogram import bin_edges, build_matrix, find_bins
from rainflow_analyzer.models.points import Cycle, TurningPoint


def _cyc(range_: float, mean: float, count: float = 1.0) -> Cycle:
    b = TurningPoint(index=0, value=mean - range_ / 2)
    c = TurningPoint(index=1, value=mean + range_ / 2)
    return Cycle(range=range_, mean=mean, count=count, b=b, c=c)


# -----------------------------------------------------------------------
# Domain
# -----------------------------------------------------------------------


def test_empty_cycles_gives_zero_matrix_on_unit_domain() -> None:
    m = build_matrix([], 4, 4)
    assert m.shape == (4, 4)
    assert np.array_equal(m.counts, np.zeros((4, 4)))
    assert np.allclose(m.range_edges, [0.0, 0.25, 0.5, 0.75, 1.0])
    assert np.allclose(m.mean_edges, [0.0, 0.25, 0.5, 0.75, 1.0])


def test_degenerate_domain_is_widened_by_one() -> None:
    m = build_matrix([_cyc(2.0, 3.0), _cyc(2.0, 3.0, 0.5)], 2, 2)
    assert np.allclose(m.range_edges, [2.0, 2.5, 3.0])
    assert np.allclose(m.mean_edges, [3.0, 3.5, 4.0])
    assert m.counts[0, 0] == 1.5
    assert m.total == 1.5


# -----------------------------------------------------------------------
# Bin lookup
# -----------------------------------------------------------------------


def test_find_bins_edges_are_half_open_and_clamped() -> None:
    edges = bin_edges(0.0, 4.0, 4)
    assert np.array_equal(edges, [0.0, 1.0, 2.0, 3.0, 4.0])
    got = find_bins(edges, np.array([-1.0, 0.0, 0.5, 1.0, 2.99, 3.0, 4.0, 9.0]))
    assert got.tolist() == [0, 0, 0, 1, 2, 3, 3, 3]


def test_counts_accumulate_per_cell() -> None:
    cycles = [_cyc(0.0, 0.0), _cyc(4.0, 4.0, 0.5), _cyc(1.0, 2.0), _cyc(1.0, 2.0, 0.5)]
    m = build_matrix(cycles, 4, 4)

    expected = np.zeros((4, 4))
    expected[0, 0] = 1.0
    expected[3, 3] = 0.5
    expected[1, 2] = 1.5
    assert np.array_equal(m.counts, expected)
    assert m.total == 3.0


def test_independent_of_cycle_order() -> None:
    rng = np.random.default_rng(3)
    cycles = [_cyc(float(r), float(mu), float(c)) for r, mu, c in zip(
        rng.uniform(0, 10, 200), rng.normal(size=200), rng.choice([0.5, 1.0], 200)
    )]
    shuffled = list(cycles)
    random.Random(7).shuffle(shuffled)

    a = build_matrix(cycles, 8, 5)
    b = build_matrix(shuffled, 8, 5)
    assert np.array_equal(a.range_edges, b.range_edges)
    assert np.array_equal(a.mean_edges, b.mean_edges)
    assert np.array_equal(a.counts, b.counts)
    assert a.total == pytest.approx(sum(c.count for c in cycles))


def test_non_square_shape() -> None:
    m = build_matrix([_cyc(1.0, 0.0), _cyc(3.0, 2.0)], 3, 7)
    assert m.shape == (3, 7)
    assert m.range_edges.shape == (4,)
    assert m.mean_edges.shape == (8,)


@pytest.mark.parametrize("bins", [(0, 4), (4, 0), (-1, 1)])
def test_bins_below_one_raise(bins) -> None:
    with pytest.raises(ValueError):
        build_matrix([], *bins)


def test_edges_use_fraction_of_span() -> None:
    # edge i is lo + span * (i / bins); a cycle of range 0.7 sits exactly on edge 1
    edges = bin_edges(0.0, 2.1, 3)
    assert edges.tolist() == [0.0, 2.1 * (1 / 3), 2.1 * (2 / 3), 2.1]
    assert edges[1] == 0.7

    m = build_matrix([_cyc(0.0, 0.0), _cyc(0.7, 0.0), _cyc(2.1, 0.0)], 3, 1)
    assert m.counts[:, 0].tolist() == [1.0, 1.0, 1.0]


@pytest.mark.parametrize("bins", [(2.5, 2), (2, 2.0), (True, 2)])
def test_non_integer_bins_raise(bins) -> None:
    with pytest.raises(ValueError):
        build_matrix([_cyc(1.0, 0.0)], *bins)
