from __future__ import annotations

import sys


def test_build_report_prints_totals_and_exports(build_report_module, config_path, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["build_report.py", "--config", str(config_path)])
    assert build_report_module.main() == 0
    out = capsys.readouterr().out
    assert "Total procedures: 6" in out
    assert (tmp_path / "outputs" / "figs" / "procedure_totals.png").exists()
    assert (tmp_path / "outputs" / "tables" / "procedure_detail.csv").exists()


def test_build_report_legacy_without_figures(build_report_module, config_path, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(
        sys, "argv", ["build_report.py", "--config", str(config_path), "--legacy", "--no-figures"]
    )
    assert build_report_module.main() == 0
    assert "Total procedures: 8" in capsys.readouterr().out
    assert not (tmp_path / "outputs").exists()


def test_build_report_error_exit_code(build_report_module, config_path, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(
        sys,
        "argv",
        ["build_report.py", "--config", str(config_path), "--source", str(tmp_path / "none.csv")],
    )
    assert build_report_module.main() == 1
    assert "Error loading the data" in capsys.readouterr().out
