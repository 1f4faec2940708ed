import sys
from pathlib import Path

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

SAMPLE_CSV = (
    "AÑO,PACIENTE,PROCEDIMENTO 1,PROCEDIMENTO 2\n"
    "2022,001,Biopsia,Papanicolau\n"
    "2022,002,biopsia ,\n"
    "\n"
    "2023,003,Exame, BIOPSIA\n"
    "2024,004,Papanicolau,\n"
    "2025,005,Exame,Colposcopia\n"
)


@pytest.fixture
def example_rows():
    return [
        {"AÑO": "2022", "PROCEDIMENTO": "Biopsia"},
        {"AÑO": "2022", "PROCEDIMENTO": "biopsia"},
        {"AÑO": "2023", "PROCEDIMENTO": "Exame"},
        {"AÑO": "2025", "PROCEDIMENTO": "Exame"},
    ]


@pytest.fixture
def example_headers():
    return ["AÑO", "PROCEDIMENTO"]


@pytest.fixture
def csv_path(tmp_path) -> Path:
    path = tmp_path / "dados.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def make_config(tmp_path):
    def _make(source, **aggregation) -> Path:
        cfg = {
            "paths": {"outputs": str(tmp_path / "outputs")},
            "data": {"source": str(source), "delimiter": ",", "timeout_seconds": 5},
            "aggregation": aggregation,
            "logging": {"level": "WARNING"},
        }
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(cfg, allow_unicode=True), encoding="utf-8")
        return path

    return _make


@pytest.fixture
def config_path(make_config, csv_path) -> Path:
    return make_config(csv_path)


@pytest.fixture(scope="session")
def build_report_module():
    import importlib.util

    script_path = ROOT / "scripts/build_report.py"
    spec = importlib.util.spec_from_file_location("build_report", script_path)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module
