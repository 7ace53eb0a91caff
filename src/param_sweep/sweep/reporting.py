"""Reporting utilities for sweep runs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from .classifier import Classification
from .executor import SweepResult
from .parameter_space import SamplingMethod
from .results_store import TrialOutcome


@dataclass
class SweepReporter:
    """Produce tabular and aggregated views of a finished sweep."""

    result: SweepResult

    def summary(self) -> Dict[str, Any]:
        """Return run identity, counters and ratios as a flat dictionary."""
        results = self.result.results
        return {
            "seed": self.result.seed,
            "status": self.result.status.value,
            "interval": self.result.interval.to_config(),
            "total": results.total,
            "ok_hits": results.ok_hits,
            "ng_hits": results.ng_hits,
            "ok_ratio": results.ok_ratio,
            "ng_ratio": results.ng_ratio,
            "ok_retained": len(results.ok_outcomes),
            "ng_retained": len(results.ng_outcomes),
            "duration_seconds": self.result.duration_seconds,
        }

    def distributions(self, kind: Classification | str) -> Dict[str, Dict[str, float]]:
        """Per-parameter min/max/mean of retained outcomes in native units.

        Log-sampled parameters also report the geometric mean, which is the
        natural centre of a log-uniform domain.
        """
        outcomes = self.result.results.outcomes(kind)
        if not outcomes:
            return {}
        stats: Dict[str, Dict[str, float]] = {}
        for spec in self.result.parameter_space:
            values = np.array([outcome.assignment[spec.key] for outcome in outcomes], dtype=float)
            entry = {"min": float(values.min()), "max": float(values.max()), "mean": float(values.mean())}
            if spec.method is SamplingMethod.LOG:
                entry["geomean"] = float(np.exp(np.log(values).mean()))
            stats[spec.key] = entry
        return stats

    def to_frame(self, kind: Classification | str, *, display: bool = False) -> pd.DataFrame:
        """
        Return retained outcomes of one class as a DataFrame.

        Args:
            kind: ``"OK"`` or ``"NG"``.
            display: When True, columns are parameter labels and values are
                multiplied by each parameter's ``display_scale``. Otherwise
                columns are parameter keys in native units.
        """
        specs = list(self.result.parameter_space)
        columns = ["No"] + [spec.label if display else spec.key for spec in specs] + ["y"]
        rows: List[list[Any]] = []
        for number, outcome in enumerate(self.result.results.outcomes(kind), start=1):
            values = [
                spec.display_value(outcome.assignment[spec.key]) if display else outcome.assignment[spec.key]
                for spec in specs
            ]
            rows.append([number, *values, outcome.output])
        return pd.DataFrame(rows, columns=columns)

    def render_summary(self) -> str:
        summary = self.summary()
        interval = self.result.interval
        lines = [
            f"seed={summary['seed']}",
            f"yRange=[{format_value(interval.lower)}, {format_value(interval.upper)}]",
            f"iters={summary['total']}  OK_hits={summary['ok_hits']}  NG_hits={summary['ng_hits']}",
            f"OK_ratio={format_value(summary['ok_ratio'])}  NG_ratio={format_value(summary['ng_ratio'])}",
        ]
        if self.result.cancelled:
            lines.append(f"(run cancelled after {summary['total']} trials)")
        return "\n".join(lines)

    def render_table(self, title: str, kind: Classification | str, *, max_print: int = 0) -> str:
        """Render retained outcomes as a console table in display units."""
        outcomes = self.result.results.outcomes(kind)
        lines = [title]
        if not outcomes:
            lines.append("(none)")
            return "\n".join(lines)

        shown: Sequence[TrialOutcome] = outcomes
        if max_print > 0 and len(outcomes) > max_print:
            shown = outcomes[:max_print]

        specs = list(self.result.parameter_space)
        headers = ["No"] + [spec.label for spec in specs] + ["y"]
        rows = []
        for number, outcome in enumerate(shown, start=1):
            row = [str(number)]
            row.extend(format_cell(spec.display_value(outcome.assignment[spec.key])) for spec in specs)
            row.append(format_cell(outcome.output))
            rows.append(row)

        widths = [len(header) for header in headers]
        for row in rows:
            for index, cell in enumerate(row):
                widths[index] = max(widths[index], len(cell))

        # "No" keeps a trailing space, value columns are packed against the rule
        def pad(index: int) -> int:
            return 2 if index == 0 else 1

        rule = "+" + "+".join("-" * (width + pad(index)) for index, width in enumerate(widths)) + "+"

        def render_row(cells: Sequence[str], *, header: bool) -> str:
            parts = []
            for index, cell in enumerate(cells):
                aligned = cell.ljust(widths[index]) if header else cell.rjust(widths[index])
                parts.append(f" {aligned} " if index == 0 else f" {aligned}")
            return "|" + "|".join(parts) + "|"

        lines.extend([rule, render_row(headers, header=True), rule])
        lines.extend(render_row(row, header=False) for row in rows)
        lines.append(rule)
        if len(shown) < len(outcomes):
            lines.append(f"(printed {len(shown)} of {len(outcomes)}; truncated for console)")
        return "\n".join(lines)


def format_value(value: float) -> str:
    return f"{value:10.4g}"


def format_cell(value: float) -> str:
    """Fixed-width cell text with NaN and infinities spelled out."""
    if math.isnan(value):
        return f"{'NaN':>10}"
    if math.isinf(value):
        return f"{'+Inf' if value > 0 else '-Inf':>10}"
    return format_value(value)
