"""Export of rainflow results.

Design goals
------------
- Full traceability: every export carries a JSON sidecar with the options, the
  input description, summary counts, warnings and a UTC timestamp.
- Tables are written with pandas, as CSV or Parquet.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import pandas as pd

from rainflow_analyzer.analysis.pipeline import RainflowAnalysis
from rainflow_analyzer.analysis.tables import (
    cycles_frame,
    events_frame,
    matrix_frame,
    turning_points_frame,
)


ExportFormat = Literal["csv", "parquet"]

EXPORT_FORMATS = ("csv", "parquet")
META_NAME = "rainflow_meta.json"


def now_iso() -> str:
    """Return current UTC time as ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def export_dataframe(df: pd.DataFrame, path: Union[str, Path], fmt: ExportFormat) -> Path:
    """Write one table as ``fmt`` and return the path written (parent dirs are created)."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt}")

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "csv":
        df.to_csv(out, index=False)
    else:
        # pandas raises ImportError when no parquet engine is installed
        try:
            df.to_parquet(out, index=False)
        except ImportError as e:
            raise RuntimeError(
                f"Cannot write {out.name}: parquet export needs the 'parquet' extra (pyarrow). {e}"
            ) from e
    return out


def analysis_metadata(analysis: RainflowAnalysis, *, source: Optional[str] = None) -> Dict[str, Any]:
    """Provenance of one analysis as a JSON-friendly dict."""
    res = analysis.result
    return {
        "timestamp": now_iso(),
        "source": source,
        "n_samples": analysis.n_samples,
        "options": analysis.options.to_dict(),
        "n_turning_points": len(res.turning_points),
        "n_steps": res.n_steps,
        "n_closed_cycles": len(res.closed_cycles),
        "n_residual_cycles": len(res.residual),
        "total_count": res.total_count(),
        "residual_stack": [{"index": p.index, "value": p.value} for p in res.residual_stack],
        "matrix_shape": list(analysis.matrix.shape),
        "warnings": list(analysis.warnings),
    }


def export_analysis(
    analysis: RainflowAnalysis,
    out_dir: Union[str, Path],
    *,
    fmt: ExportFormat = "csv",
    source: Optional[str] = None,
) -> List[Path]:
    """
    Export one analysis:
    - turning_points, cycles, events and matrix tables
    - the JSON provenance sidecar

    Returns
    -------
    list[Path]
        Written files, sidecar last.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt}")

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    res = analysis.result
    tables = {
        "turning_points": turning_points_frame(res.turning_points),
        "cycles": cycles_frame(res),
        "events": events_frame(res.events),
        "matrix": matrix_frame(analysis.matrix),
    }

    written: List[Path] = []
    for name, df in tables.items():
        written.append(export_dataframe(df, out / f"{name}.{fmt}", fmt))

    meta_path = out / META_NAME
    with open(meta_path, "w") as f:
        json.dump(analysis_metadata(analysis, source=source), f, indent=2)
    written.append(meta_path)

    return written
