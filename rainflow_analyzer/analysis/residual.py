"""Cycles from the residual stack left after the last push."""

from __future__ import annotations

from typing import List, Sequence

from rainflow_analyzer.models.options import RESIDUE_MODES
from rainflow_analyzer.models.points import Cycle, TurningPoint


def residual_cycles(stack: Sequence[TurningPoint], mode: str) -> List[Cycle]:
    """Turn the points left on the stack into half-cycles.

    Modes
    -----
    - "discard": no residual cycles.
    - "half": one half-cycle (count 0.5) per adjacent pair, bottom to top.
    - "close": as "half", plus one half-cycle pairing the last point with the first
      (only when at least two points remain).

    Must be applied once, after every turning point has been pushed.
    """
    if mode not in RESIDUE_MODES:
        raise ValueError(f"Unknown residue mode {mode!r}; expected one of {RESIDUE_MODES}")

    s = list(stack)
    out: List[Cycle] = []
    if mode == "discard":
        return out

    for b, c in zip(s[:-1], s[1:]):
        out.append(Cycle.from_points(b, c, 0.5))

    if mode == "close" and len(s) >= 2:
        out.append(Cycle.from_points(s[-1], s[0], 0.5))

    return out
