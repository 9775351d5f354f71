"""Command-line rainflow counting of one signal file."""

from __future__ import annotations

import dataclasses
import sys
from typing import List, Optional, Sequence

from rainflow_analyzer.analysis.pipeline import RainflowAnalysis, run_analysis
from rainflow_analyzer.analysis.tables import cycles_frame
from rainflow_analyzer.ingest.export import EXPORT_FORMATS, export_analysis
from rainflow_analyzer.ingest.readers import SignalLoadConfig, read_signal
from rainflow_analyzer.models.options import RESIDUE_MODES, RainflowOptions
from rainflow_analyzer.models.points import StepEvent, TurningPoint

from .log_view import TextLog


DEMO_SIGNAL = (-2.0, 1.0, -3.0, 5.0, -1.0, 3.0, -4.0, 4.0, -2.0)

DEFAULT_OPTIONS = RainflowOptions(
    use_endpoints_as_reversals=True,
    residue="half",
    bins_range=12,
    bins_mean=12,
)


def _fmt_point(p: TurningPoint) -> str:
    return f"({p.index},{p.value:g})"


def _fmt_stack(stack: Sequence[TurningPoint]) -> str:
    return "[" + " ".join(_fmt_point(p) for p in stack) + "]"


def format_step(ev: StepEvent) -> str:
    """One-line rendering of a step event."""
    parts = [f"k={ev.k:<3d} push {_fmt_point(ev.appended)}", f"stack={_fmt_stack(ev.stack_after)}"]
    if ev.window_abcd is not None:
        parts.append(f"window={_fmt_stack(ev.window_abcd)}")
    for c in ev.closed:
        parts.append(f"closed {_fmt_point(c.b)}-{_fmt_point(c.c)} range={c.range:g} mean={c.mean:g}")
    return "  ".join(parts)


def _resolve_options(ns) -> RainflowOptions:
    base = RainflowOptions.from_json_file(ns.config) if ns.config else DEFAULT_OPTIONS
    overrides = {}
    if ns.no_endpoints:
        overrides["use_endpoints_as_reversals"] = False
    if ns.residue is not None:
        overrides["residue"] = ns.residue
    if ns.bins_range is not None:
        overrides["bins_range"] = ns.bins_range
    if ns.bins_mean is not None:
        overrides["bins_mean"] = ns.bins_mean
    return dataclasses.replace(base, **overrides)


def format_report(analysis: RainflowAnalysis, *, steps: bool = False) -> str:
    """Multi-line text summary of one analysis.

    Warnings are prefixed with ``WARNING: `` so a :class:`TextLog` classifies them.
    """
    res = analysis.result
    opts = analysis.options

    lines = [
        f"Options: endpoints={opts.use_endpoints_as_reversals} residue={opts.residue} "
        f"bins={opts.bins_range}x{opts.bins_mean}",
        f"{analysis.n_samples} samples, {len(res.turning_points)} turning points",
    ]
    lines += [f"WARNING: {w}" for w in analysis.warnings]

    if steps:
        lines += [format_step(ev) for ev in res.events]

    lines.append(
        f"{len(res.closed_cycles)} closed cycles, {len(res.residual)} residual cycles, "
        f"total count {res.total_count():g}"
    )
    lines.append(f"Residual stack: {_fmt_stack(res.residual_stack)}")

    if res.cycles:
        lines.append(cycles_frame(res).to_string(index=False))

    m = analysis.matrix
    n_cells = int((m.counts != 0).sum())
    lines.append(
        f"Matrix {m.shape[0]}x{m.shape[1]}: range [{m.range_edges[0]:g}, {m.range_edges[-1]:g}], "
        f"mean [{m.mean_edges[0]:g}, {m.mean_edges[-1]:g}], {n_cells} non-empty cells"
    )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m rainflow_analyzer.scripts.rainflow_cli",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Count rainflow cycles of one signal with the four-point stack method.

            The signal is one numeric column of a TXT (whitespace-delimited, no header)
            or CSV file. Use --demo to run on a built-in example signal.
            """
        ),
    )

    p.add_argument("input", nargs="?", default=None, help="Signal file (.txt/.dat/.csv)")
    p.add_argument("--demo", action="store_true", help="Use the built-in demo signal instead of a file")
    p.add_argument("--column", default=None, help="Column name or 0-based position (default: first column)")
    p.add_argument("--no-header", action="store_true", help="CSV input has no header row")
    p.add_argument("--keep-nonfinite", action="store_true", help="Do not drop NaN/Inf samples")
    p.add_argument("--config", default=None, help="JSON options file (overridden by the flags below)")
    p.add_argument("--no-endpoints", action="store_true", help="Do not use the first/last samples as reversals")
    p.add_argument("--residue", choices=RESIDUE_MODES, default=None, help="Residual stack handling (default: half)")
    p.add_argument("--bins-range", type=int, default=None, help="Number of range bins (default: 12)")
    p.add_argument("--bins-mean", type=int, default=None, help="Number of mean bins (default: 12)")
    p.add_argument("--steps", action="store_true", help="Print the per-step stack audit trail")
    p.add_argument("--out-dir", default=None, help="Export tables and metadata to this directory")
    p.add_argument("--format", choices=EXPORT_FORMATS, default="csv", help="Export table format")

    ns = p.parse_args(list(argv) if argv is not None else None)

    if ns.demo == (ns.input is not None):
        p.error("provide exactly one of: an input file, or --demo")

    log = TextLog(stream=sys.stdout)

    try:
        options = _resolve_options(ns)
    except (OSError, ValueError) as e:
        log.error(f"Invalid options: {e}")
        return 2

    if ns.demo:
        values: List[float] = list(DEMO_SIGNAL)
        source = "demo"
    else:
        column = ns.column
        if column is not None and column.isdigit():
            column = int(column)
        cfg = SignalLoadConfig(
            column=column,
            csv_has_header=not ns.no_header,
            drop_nonfinite=not ns.keep_nonfinite,
        )
        try:
            sig = read_signal(ns.input, cfg)
        except (OSError, ValueError) as e:
            log.error(f"Could not read {ns.input}: {e}")
            return 2
        for w in sig.warnings:
            log.warning(w)
        values = sig.values.tolist()
        source = f"{sig.source_path}:{sig.column}"

    log.info(f"Input: {source}")
    analysis = run_analysis(values, options)
    log.write(format_report(analysis, steps=ns.steps))

    if ns.out_dir:
        try:
            written = export_analysis(analysis, ns.out_dir, fmt=ns.format, source=source)
        except (OSError, RuntimeError) as e:
            log.error(f"Export failed: {e}")
            return 2
        for path in written:
            log.info(f"wrote: {path}")

    n_warn = log.count("warning")
    if n_warn:
        log.info(f"Finished with {n_warn} warning(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
