"""Rainflow analysis package.

Design principle:
  - Every stage is a pure function over immutable inputs.
  - Data flows strictly forward: turning points -> stack engine -> residual
    policy -> frequency matrix. No stage reads back from a later one.

Step events are kept as an append-only history so any intermediate state of the
stack can be replayed after the fact.
"""

from .turning_points import extract_turning_points
from .stack import CycleStackEngine, StackRun, run_stack
from .residual import residual_cycles
from .histogram import build_matrix
from .pipeline import RainflowAnalysis, RainflowResult, rainflow_count, run_analysis

__all__ = [
    "extract_turning_points",
    "CycleStackEngine",
    "StackRun",
    "run_stack",
    "residual_cycles",
    "build_matrix",
    "RainflowAnalysis",
    "RainflowResult",
    "rainflow_count",
    "run_analysis",
]
