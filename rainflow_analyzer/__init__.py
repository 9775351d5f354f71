"""Rainflow Analyzer -- step-by-step rainflow cycle counting of load histories.

This package provides tools for:
- Extracting turning points (direction reversals) from a raw sample sequence
- Counting cycles with a four-point stack method, with a full per-step audit trail
- Converting the residual stack into half-cycles (discard / half / close)
- Binning cycles into a range x mean frequency matrix
- Reading signals from TXT/CSV files and exporting result tables

Key principles:
- Pure computation: the counting core performs no I/O and never mutates its inputs
- Reproducible: identical input and options give bit-identical output
- Full traceability: every push onto the stack is recorded as a StepEvent

Main subpackages:
- analysis: Turning points, stack engine, residual policy, matrix, tables
- ingest: Signal readers and result export
- models: Data models (TurningPoint, Cycle, StepEvent, Matrix, RainflowOptions)
- scripts: Command-line entry point and console log
"""

from rainflow_analyzer.analysis.pipeline import RainflowAnalysis, RainflowResult, rainflow_count, run_analysis
from rainflow_analyzer.analysis.histogram import build_matrix
from rainflow_analyzer.models.options import RainflowOptions
from rainflow_analyzer.models.points import Cycle, Matrix, StepEvent, TurningPoint

__version__ = "0.1.0"

__all__ = [
    "RainflowAnalysis",
    "RainflowResult",
    "rainflow_count",
    "run_analysis",
    "build_matrix",
    "RainflowOptions",
    "Cycle",
    "Matrix",
    "StepEvent",
    "TurningPoint",
]
