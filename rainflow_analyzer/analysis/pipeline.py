"""End-to-end rainflow pass.

raw samples -> turning points -> stack engine (step events, closed cycles)
-> residual policy -> full cycle list -> frequency matrix

:func:`rainflow_count` is the pure counting pass. :func:`run_analysis` also builds
the matrix and records which degenerate-input fallbacks were taken, in the
``warnings`` tuple, without changing any number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from rainflow_analyzer.models.options import RainflowOptions
from rainflow_analyzer.models.points import Cycle, Matrix, StepEvent, TurningPoint

from .histogram import build_matrix
from .residual import residual_cycles
from .stack import run_stack
from .turning_points import compress_duplicates, extract_turning_points, interior_reversals


@dataclass(frozen=True)
class RainflowResult:
    """Result of one counting pass.

    Attributes
    ----------
    turning_points:
        Extracted reversals, in push order.
    events:
        One StepEvent per turning point.
    cycles:
        All ``events[*].closed`` in step order, followed by the residual cycles.
    residual_stack:
        Stack left after the last push.
    """

    turning_points: Tuple[TurningPoint, ...]
    events: Tuple[StepEvent, ...]
    cycles: Tuple[Cycle, ...]
    residual_stack: Tuple[TurningPoint, ...]

    @property
    def n_steps(self) -> int:
        return len(self.events)

    @property
    def closed_cycles(self) -> Tuple[Cycle, ...]:
        return tuple(c for ev in self.events for c in ev.closed)

    @property
    def residual(self) -> Tuple[Cycle, ...]:
        return self.cycles[len(self.closed_cycles):]

    def total_count(self) -> float:
        return float(sum(c.count for c in self.cycles))

    def cycles_up_to(self, step: int) -> Tuple[Cycle, ...]:
        """Cycles known after replaying steps ``0..step``.

        Residual cycles only exist once the last step has been replayed.
        """
        if not self.events:
            return ()
        step = int(step)
        if step < 0 or step >= len(self.events):
            raise IndexError(f"step {step} out of range [0, {len(self.events)})")

        out: List[Cycle] = []
        for ev in self.events[: step + 1]:
            out.extend(ev.closed)
        if step == len(self.events) - 1:
            out.extend(self.cycles[len(out):])
        return tuple(out)


def rainflow_count(raw: Sequence[float], options: RainflowOptions) -> RainflowResult:
    """Count cycles of ``raw`` with the given options (no matrix)."""
    tps = extract_turning_points(raw, options.use_endpoints_as_reversals)
    run = run_stack(tps)
    residual = residual_cycles(run.final_stack, options.residue)

    return RainflowResult(
        turning_points=tuple(tps),
        events=run.events,
        cycles=run.closed_cycles + tuple(residual),
        residual_stack=run.final_stack,
    )


@dataclass(frozen=True)
class RainflowAnalysis:
    """Counting result plus its frequency matrix and provenance."""

    options: RainflowOptions
    n_samples: int
    result: RainflowResult
    matrix: Matrix
    warnings: Tuple[str, ...] = ()


def _input_warnings(x: np.ndarray, options: RainflowOptions, result: RainflowResult) -> List[str]:
    warnings: List[str] = []

    n_bad = int(np.count_nonzero(~np.isfinite(x)))
    if n_bad:
        warnings.append(f"Signal contains {n_bad} non-finite samples; they propagate into ranges and means.")

    if x.size == 0:
        warnings.append("Signal is empty; no turning points.")
    elif x.size < 2:
        warnings.append("Signal has fewer than 2 samples; the sample is its own turning point.")
    else:
        compressed = compress_duplicates(x.tolist())
        if len(compressed) == 1:
            warnings.append("Signal is constant; a single turning point is used.")
        elif not options.use_endpoints_as_reversals and not interior_reversals(compressed):
            warnings.append(
                "No interior reversal and endpoints disabled; "
                "the middle compressed sample is used as the only turning point."
            )

    if result.turning_points and not result.closed_cycles:
        warnings.append("No cycle closed; all cycles come from the residual policy.")

    return warnings


def run_analysis(raw: Sequence[float], options: RainflowOptions) -> RainflowAnalysis:
    """Count cycles, build the frequency matrix and collect input warnings."""
    x = np.asarray(raw, dtype=float).ravel()
    result = rainflow_count(x, options)
    matrix = build_matrix(result.cycles, options.bins_range, options.bins_mean)

    return RainflowAnalysis(
        options=options,
        n_samples=int(x.size),
        result=result,
        matrix=matrix,
        warnings=tuple(_input_warnings(x, options, result)),
    )
