"""Ingest package - signal readers and result export.

This package handles:
- Reading one numeric signal column from TXT/CSV files
- Dropping non-finite samples before counting (the counting core does not)
- Writing result tables and a JSON provenance sidecar

Design principle:
- The counting core never touches the filesystem; all I/O lives here
- Every dropped or suspicious sample is reported in ``warnings``
"""

from .readers import SignalData, SignalLoadConfig, read_signal
from .export import export_analysis, export_dataframe

__all__ = [
    "SignalData",
    "SignalLoadConfig",
    "read_signal",
    "export_analysis",
    "export_dataframe",
]
