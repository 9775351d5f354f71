"""
Signal readers.

This module ingests one numeric column from a text file and returns it as a
float64 array ready for counting.

Supported inputs
----------------
1) TXT:
   - whitespace-delimited numeric columns
   - no header
   - lines starting with '#' are comments

2) CSV:
   - headered (default) or headerless numeric CSV

Non-finite samples are not accepted by the counting core; by default they are
dropped here and the number of dropped samples is recorded in ``warnings``.

Examples
--------
>>> from rainflow_analyzer.ingest.readers import read_signal, SignalLoadConfig
>>> # sig = read_signal("load_history.csv", SignalLoadConfig(column="force"))
>>> # sig.values.dtype -> float64
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Tuple, Union

import numpy as np
import pandas as pd


FileKind = Literal["txt", "csv"]

_EXT_KIND = {".txt": "txt", ".dat": "txt", ".csv": "csv"}


@dataclass(frozen=True)
class SignalLoadConfig:
    """
    Configuration controlling reading and cleaning.

    Attributes
    ----------
    column:
        Column to read: a header name (CSV with header) or a 0-based position.
        If None, the first column is used.
    csv_has_header:
        If True, treat CSV as headered; otherwise as headerless numeric.
    drop_nonfinite:
        If True, drop NaN/Inf samples.
    """
    column: Optional[Union[str, int]] = None
    csv_has_header: bool = True
    drop_nonfinite: bool = True


@dataclass(frozen=True)
class SignalData:
    """
    One loaded signal.

    Attributes
    ----------
    values:
        1D float64 array of samples, in file order.
    source_path:
        Path of the file the samples were read from.
    file_kind:
        "txt" or "csv".
    column:
        Name of the column that was read (position as string for headerless files).
    dropped_nonfinite:
        Number of NaN/Inf samples removed.
    warnings:
        Non-fatal issues found while reading.
    """
    values: np.ndarray
    source_path: str
    file_kind: FileKind
    column: str
    dropped_nonfinite: int = 0
    warnings: Tuple[str, ...] = ()

    @property
    def n_samples(self) -> int:
        return int(self.values.size)


def file_kind_for(path: Union[str, Path]) -> FileKind:
    ext = Path(path).suffix.lower()
    if ext not in _EXT_KIND:
        raise ValueError(f"Unsupported input extension {ext!r}; expected one of {sorted(_EXT_KIND)}")
    return _EXT_KIND[ext]  # type: ignore[return-value]


def _select_column(df: pd.DataFrame, column: Optional[Union[str, int]], name: str) -> Tuple[pd.Series, str]:
    if df.shape[1] == 0:
        raise ValueError(f"{name}: no columns found.")

    if column is None:
        return df.iloc[:, 0], str(df.columns[0])

    if isinstance(column, (int, np.integer)) and not isinstance(column, bool):
        pos = int(column)
        if pos < 0 or pos >= df.shape[1]:
            raise ValueError(f"{name}: column position {pos} out of range (file has {df.shape[1]} columns).")
        return df.iloc[:, pos], str(df.columns[pos])

    if column not in df.columns:
        raise ValueError(f"{name}: column {column!r} not found. Present={list(map(str, df.columns))}")
    return df[column], str(column)


def drop_nonfinite(values: np.ndarray) -> Tuple[np.ndarray, int]:
    """
    Drop NaN/Inf samples.

    Returns
    -------
    (clean_values, dropped_count)

    Examples
    --------
    >>> import numpy as np
    >>> clean, n = drop_nonfinite(np.array([1.0, np.nan, 2.0, np.inf]))
    >>> (clean.tolist(), n)
    ([1.0, 2.0], 2)
    """
    mask = np.isfinite(values)
    dropped = int((~mask).sum())
    return values[mask], dropped


def read_signal(path: Union[str, Path], cfg: Optional[SignalLoadConfig] = None) -> SignalData:
    """
    Read one numeric column from a TXT or CSV file.

    Parameters
    ----------
    path:
        Input file (.txt/.dat whitespace-delimited, or .csv).
    cfg:
        SignalLoadConfig; defaults are used when None.

    Returns
    -------
    SignalData

    Raises
    ------
    ValueError
        Unsupported extension, unknown column, or non-numeric content.
    """
    cfg = cfg or SignalLoadConfig()
    p = Path(path)
    kind = file_kind_for(p)

    if kind == "txt":
        df = pd.read_csv(p, sep=r"\s+", header=None, comment="#", engine="python")
    elif cfg.csv_has_header:
        df = pd.read_csv(p, comment="#")
    else:
        df = pd.read_csv(p, header=None, comment="#")

    series, col_name = _select_column(df, cfg.column, p.name)
    try:
        values = series.to_numpy(dtype=float)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{p.name}: column {col_name!r} is not numeric ({e})") from e

    warnings = []
    dropped = 0
    if cfg.drop_nonfinite:
        values, dropped = drop_nonfinite(values)
        if dropped:
            warnings.append(f"Dropped {dropped} non-finite samples from column {col_name!r}.")
    elif not np.all(np.isfinite(values)):
        n_bad = int(np.count_nonzero(~np.isfinite(values)))
        warnings.append(f"Column {col_name!r} has {n_bad} non-finite samples (kept).")

    if values.size < 2:
        warnings.append(f"Only {values.size} samples read from {p.name}.")

    return SignalData(
        values=values,
        source_path=str(p),
        file_kind=kind,
        column=col_name,
        dropped_nonfinite=dropped,
        warnings=tuple(warnings),
    )
