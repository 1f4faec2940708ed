from __future__ import annotations

from pathlib import Path

from procreport.dashboard import app as dashboard_app
from procreport.report.state import ReportStatus


def test_dashboard_resources_load(config_path):
    cfg, session = dashboard_app.load_resources(config_path=config_path)
    assert cfg["data"]["source"].endswith("dados.csv")
    assert session.status is ReportStatus.READY
    assert session.view_model.grand_total > 0


def test_dashboard_resources_report_error(make_config, tmp_path):
    config_path = make_config(tmp_path / "missing.csv")
    _, session = dashboard_app.load_resources(config_path=config_path)
    assert session.status is ReportStatus.ERROR


APP_PATH = Path(dashboard_app.__file__)


def _run_app(tmp_path, monkeypatch):
    from streamlit.testing.v1 import AppTest

    monkeypatch.chdir(tmp_path)
    at = AppTest.from_file(str(APP_PATH), default_timeout=60)
    at.run()
    assert not at.exception
    return at


def test_dashboard_renders_ready_report(config_path, tmp_path, monkeypatch):
    at = _run_app(tmp_path, monkeypatch)
    assert at.metric[0].value == "6"
    assert len(at.dataframe) == 4
    assert not at.error
    assert not at.info


def test_dashboard_renders_error_state(make_config, tmp_path, monkeypatch):
    make_config(tmp_path / "missing.csv")
    at = _run_app(tmp_path, monkeypatch)
    assert at.error[0].value == "Error loading the data:"
    assert not at.metric


def test_dashboard_renders_empty_state(make_config, tmp_path, monkeypatch):
    path = tmp_path / "plain.csv"
    path.write_text("AÑO,PACIENTE\n2022,001\n", encoding="utf-8")
    make_config(path)
    at = _run_app(tmp_path, monkeypatch)
    assert at.info[0].value == "No procedure data found to display."
    assert not at.error
