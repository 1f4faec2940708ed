from __future__ import annotations

import pandas as pd

from procreport.analysis.aggregate import aggregate
from procreport.analysis.view_model import to_view_model
from procreport.report.figures import render_report
from procreport.report.state import load_report
from procreport.utils.io import safe_filename


def test_render_report_writes_charts_and_tables(csv_path, tmp_path):
    vm = load_report(csv_path).view_model
    out_dir = tmp_path / "outputs"
    written = render_report(vm, out_dir)

    figs = sorted(p.name for p in (out_dir / "figs").glob("*.png"))
    assert figs == [
        "procedure_biopsia.png",
        "procedure_colposcopia.png",
        "procedure_exame.png",
        "procedure_papanicolau.png",
        "procedure_totals.png",
    ]
    assert all(p.exists() for p in written)

    detail = pd.read_csv(out_dir / "tables" / "procedure_detail.csv", dtype={"year": str})
    assert list(detail.columns) == ["procedure", "year", "conteo"]
    assert int(detail["conteo"].sum()) == vm.grand_total
    totals = pd.read_csv(out_dir / "tables" / "procedure_totals.csv")
    assert list(totals.columns) == ["procedure", "value"]


def test_render_report_empty_writes_only_tables(tmp_path):
    vm = to_view_model(aggregate([], ["AÑO", "PROCEDIMENTO"]))
    written = render_report(vm, tmp_path)
    assert [p.name for p in written] == ["procedure_detail.csv", "procedure_totals.csv"]


def test_colliding_names_get_distinct_files(tmp_path):
    rows = [
        {"AÑO": "2022", "PROCEDIMENTO": "Cauterização"},
        {"AÑO": "2023", "PROCEDIMENTO": "Cauterizacao"},
    ]
    vm = to_view_model(aggregate(rows, ["AÑO", "PROCEDIMENTO"]))
    render_report(vm, tmp_path)
    assert len(list((tmp_path / "figs").glob("procedure_cauterizacao*.png"))) == 2


def test_safe_filename():
    assert safe_filename("Biópsia de Colo") == "biopsia_de_colo"
    assert safe_filename("???", fallback="procedure") == "procedure"


def test_suffixed_names_do_not_overwrite_each_other(tmp_path):
    rows = [
        {"AÑO": "2022", "PROCEDIMENTO": "A B"},
        {"AÑO": "2022", "PROCEDIMENTO": "A B 1"},
        {"AÑO": "2022", "PROCEDIMENTO": "A-B"},
    ]
    vm = to_view_model(aggregate(rows, ["AÑO", "PROCEDIMENTO"]))
    written = render_report(vm, tmp_path)
    pngs = [p.name for p in written if p.suffix == ".png"]
    assert len(pngs) == len(set(pngs)) == 4
    assert sorted(p.name for p in (tmp_path / "figs").glob("*.png")) == sorted(pngs)
