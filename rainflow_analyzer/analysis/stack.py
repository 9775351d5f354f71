"""Four-point stack engine.

Turning points are pushed one at a time. After each push the top four points
``A, B, C, D`` (``D`` on top) are inspected repeatedly::

    rAB = |A - B|,  rBC = |B - C|,  rCD = |C - D|

    rBC <= rAB and rBC <= rCD  ->  close cycle B-C, splice B and C out, re-check
    otherwise                  ->  stop, (A, B, C, D) is recorded as the window

Ties close the cycle (``<=``). Every push produces one :class:`StepEvent`, so the
full run can be replayed step by step and the concatenation of the per-step
``closed`` lists equals the batch result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from rainflow_analyzer.models.points import Cycle, StepEvent, TurningPoint, Window


@dataclass(frozen=True)
class StackRun:
    """Output of :func:`run_stack`."""

    events: Tuple[StepEvent, ...]
    closed_cycles: Tuple[Cycle, ...]
    final_stack: Tuple[TurningPoint, ...]


class CycleStackEngine:
    """Incremental four-point engine.

    One engine instance covers one analysis pass; create a new instance (or use
    :func:`run_stack`) for a new input.
    """

    def __init__(self) -> None:
        self._stack: List[TurningPoint] = []
        self._events: List[StepEvent] = []

    @property
    def stack(self) -> Tuple[TurningPoint, ...]:
        return tuple(self._stack)

    @property
    def events(self) -> Tuple[StepEvent, ...]:
        return tuple(self._events)

    def push(self, point: TurningPoint) -> StepEvent:
        """Push one turning point, close every cycle it allows and return the step record."""
        before = tuple(self._stack)
        self._stack.append(point)

        closed, window = self._close_cycles()

        ev = StepEvent(
            k=len(self._events),
            appended=point,
            stack_before=before,
            stack_after=tuple(self._stack),
            window_abcd=window,
            closed=tuple(closed),
        )
        self._events.append(ev)
        return ev

    def _close_cycles(self) -> Tuple[List[Cycle], Optional[Window]]:
        s = self._stack
        closed: List[Cycle] = []

        while len(s) >= 4:
            a, b, c, d = s[-4], s[-3], s[-2], s[-1]

            r_ab = abs(a.value - b.value)
            r_bc = abs(b.value - c.value)
            r_cd = abs(c.value - d.value)

            if r_bc <= r_ab and r_bc <= r_cd:
                closed.append(Cycle(range=r_bc, mean=0.5 * (b.value + c.value), count=1.0, b=b, c=c))
                del s[-3:-1]
                continue

            return closed, (a, b, c, d)

        return closed, None


def run_stack(points: Iterable[TurningPoint]) -> StackRun:
    """Feed every turning point through a fresh :class:`CycleStackEngine`."""
    engine = CycleStackEngine()
    closed: List[Cycle] = []
    for p in points:
        ev = engine.push(p)
        closed.extend(ev.closed)
    return StackRun(events=engine.events, closed_cycles=tuple(closed), final_stack=engine.stack)
