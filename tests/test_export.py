import json
import math

import pandas as pd
import pytest

from param_sweep.sweep import Interval, SweepExecutor
from param_sweep.sweep.export import export_summary_json, export_tsv, export_xlsx


@pytest.fixture()
def finished(mixed_space):
    def evaluator(a):
        y = a["k"] * 50
        return math.nan if y > 0.95 else y

    return SweepExecutor(
        parameter_space=mixed_space,
        evaluator=evaluator,
        interval=Interval(0.5, 0.75),
        max_iterations=300,
        seed=21,
        ok_capacity=5,
        ng_capacity=6,
    ).run()


def test_xlsx_has_summary_and_sample_sheets(finished, tmp_path):
    path = export_xlsx(finished, tmp_path / "nested" / "result.xlsx")
    assert path.exists()

    sheets = pd.read_excel(path, sheet_name=None)
    assert set(sheets) == {"Summary", "OK", "NG"}

    summary = sheets["Summary"].head(3)
    assert summary["Type"].tolist() == ["OK", "NG", "ALL"]
    assert summary["Count"].tolist() == [finished.results.ok_hits, finished.results.ng_hits, 300]

    ok = sheets["OK"]
    assert list(ok.columns) == ["No", "k", "f", "R1", "y"]
    assert len(ok) == 5
    first = finished.results.ok_outcomes[0]
    assert ok.loc[0, "f"] == pytest.approx(first.assignment["f"])
    assert len(sheets["NG"]) == 6


def test_tsv_uses_display_units_and_labels(finished, tmp_path):
    path = export_tsv(finished, tmp_path / "ok.tsv", "OK")
    table = pd.read_csv(path, sep="\t")
    assert list(table.columns) == ["k", "f [kHz]", "R1 [ohm]", "y"]
    expected = [o.assignment["f"] * 1e-3 for o in finished.results.ok_outcomes]
    assert table["f [kHz]"].tolist() == pytest.approx(expected, rel=1e-9)


def test_tsv_writes_nan_outputs(finished, tmp_path):
    path = export_tsv(finished, tmp_path / "ng.tsv", "NG")
    raw = path.read_text(encoding="utf-8")
    has_nan = any(math.isnan(o.output) for o in finished.results.ng_outcomes)
    assert ("NaN" in raw) == has_nan
    assert raw.splitlines()[0].split("\t") == ["k", "f [kHz]", "R1 [ohm]", "y"]


def test_summary_json_is_reproducible_description(finished, tmp_path):
    path = export_summary_json(finished, tmp_path / "summary.json")
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["seed"] == 21
    assert payload["total"] == 300
    assert [p["key"] for p in payload["parameters"]] == ["k", "f", "R1"]
    assert payload["parameters"][1]["method"] == "log"
    assert set(payload["distributions"]) == {"OK", "NG"}


def test_tsv_spells_infinities_like_console_table(make_executor, tmp_path):
    outputs = iter([math.inf, -math.inf, math.nan, 0.25])
    result = make_executor(evaluator=lambda a: next(outputs), max_iterations=4).run()
    path = export_tsv(result, tmp_path / "ng.tsv", "NG")
    rows = [line.split("\t") for line in path.read_text(encoding="utf-8").splitlines()]
    assert rows[0] == ["x", "y"]
    assert [row[1] for row in rows[1:]] == ["+Inf", "-Inf", "NaN", "0.25"]


def test_tsv_with_no_retained_rows_keeps_header(make_executor, tmp_path):
    result = make_executor(evaluator=lambda a: 0.0, max_iterations=3).run()
    path = export_tsv(result, tmp_path / "ok.tsv", "OK")
    assert path.read_text(encoding="utf-8").splitlines() == ["x\ty"]
