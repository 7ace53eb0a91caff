"""Workbook, TSV and JSON export of a finished sweep."""

from __future__ import annotations

import json
import math
from pathlib import Path

import pandas as pd

from .classifier import Classification
from .executor import SweepResult
from .reporting import SweepReporter


def _tsv_value(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return "%.10g" % value


def export_xlsx(result: SweepResult, destination: str | Path) -> Path:
    """
    Write a workbook with ``Summary``, ``OK`` and ``NG`` sheets.

    Sample sheets keep native units with parameter keys as headers, so values
    can be pasted back into a configuration without conversion.
    """
    destination_path = Path(destination)
    destination_path.parent.mkdir(parents=True, exist_ok=True)

    results = result.results
    reporter = SweepReporter(result)
    summary = pd.DataFrame(
        [
            {"Type": "OK", "Count": results.ok_hits, "Ratio": results.ok_ratio},
            {"Type": "NG", "Count": results.ng_hits, "Ratio": results.ng_ratio},
            {"Type": "ALL", "Count": results.total, "Ratio": 1.0 if results.total else 0.0},
        ]
    )
    run_info = pd.DataFrame(
        [
            {"Key": "seed", "Value": str(result.seed)},
            {"Key": "status", "Value": result.status.value},
            {"Key": "interval_lower", "Value": result.interval.lower},
            {"Key": "interval_upper", "Value": result.interval.upper},
        ]
    )

    with pd.ExcelWriter(destination_path, engine="openpyxl") as writer:
        summary.to_excel(writer, sheet_name="Summary", index=False)
        run_info.to_excel(writer, sheet_name="Summary", index=False, startrow=len(summary) + 2)
        reporter.to_frame(Classification.OK).to_excel(writer, sheet_name="OK", index=False)
        reporter.to_frame(Classification.NG).to_excel(writer, sheet_name="NG", index=False)
    return destination_path


def export_tsv(result: SweepResult, destination: str | Path, kind: Classification | str) -> Path:
    """Write retained outcomes of one class as TSV in display units with label headers."""
    destination_path = Path(destination)
    destination_path.parent.mkdir(parents=True, exist_ok=True)

    table = SweepReporter(result).to_frame(kind, display=True).drop(columns="No")
    for column in table.columns:
        table[column] = table[column].map(_tsv_value)
    table.to_csv(destination_path, sep="\t", index=False, encoding="utf-8")
    return destination_path


def export_summary_json(result: SweepResult, destination: str | Path) -> Path:
    """Write the run summary together with everything needed to reproduce it."""
    destination_path = Path(destination)
    destination_path.parent.mkdir(parents=True, exist_ok=True)

    reporter = SweepReporter(result)
    payload = reporter.summary()
    payload["parameters"] = result.parameter_space.to_config()
    payload["distributions"] = {kind.value: reporter.distributions(kind) for kind in Classification}
    destination_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return destination_path

