from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class TurningPoint:
    """One reversal of the signal.

    Notes
    - ``index`` is the position in the *original* sample sequence, before
      consecutive duplicates were compressed away.
    - Turning points are shared by reference between cycles and step events;
      they are never copied and modified.
    """
    index: int
    value: float


@dataclass(frozen=True)
class Cycle:
    """A counted cycle between two turning points.

    Attributes
    ----------
    range:
        ``|b.value - c.value|``, always >= 0.
    mean:
        ``(b.value + c.value) / 2``.
    count:
        ``1.0`` for a cycle closed by the stack engine, ``0.5`` for a residual half-cycle.
    b, c:
        The two turning points defining the cycle, kept for traceability.
    """

    range: float
    mean: float
    count: float
    b: TurningPoint
    c: TurningPoint

    @classmethod
    def from_points(cls, b: TurningPoint, c: TurningPoint, count: float) -> Cycle:
        return cls(
            range=abs(b.value - c.value),
            mean=0.5 * (b.value + c.value),
            count=float(count),
            b=b,
            c=c,
        )

    @property
    def is_half(self) -> bool:
        return self.count == 0.5


Window = Tuple[TurningPoint, TurningPoint, TurningPoint, TurningPoint]


@dataclass(frozen=True)
class StepEvent:
    """Audit record for one turning point pushed onto the stack.

    Attributes
    ----------
    k:
        Step number (0-based), equal to the position of ``appended`` in the
        turning-point sequence.
    appended:
        The turning point pushed during this step.
    stack_before, stack_after:
        Stack snapshots (bottom first) before the push and after all closures.
    window_abcd:
        The last quadruple ``(A, B, C, D)`` examined that did *not* close a cycle,
        or None when the closing loop ended because fewer than four points remained.
    closed:
        Cycles closed during this step, in closing order.
    """

    k: int
    appended: TurningPoint
    stack_before: Tuple[TurningPoint, ...]
    stack_after: Tuple[TurningPoint, ...]
    window_abcd: Optional[Window] = None
    closed: Tuple[Cycle, ...] = ()


@dataclass(frozen=True)
class Matrix:
    """Range x mean frequency matrix.

    ``range_edges`` has shape ``(bins_range + 1,)``, ``mean_edges`` has shape
    ``(bins_mean + 1,)`` and ``counts`` has shape ``(bins_range, bins_mean)``.
    """

    range_edges: np.ndarray
    mean_edges: np.ndarray
    counts: np.ndarray

    @property
    def shape(self) -> Tuple[int, int]:
        return (int(self.counts.shape[0]), int(self.counts.shape[1]))

    @property
    def total(self) -> float:
        return float(np.sum(self.counts))
