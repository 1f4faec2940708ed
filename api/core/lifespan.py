from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from procreport.config import configure_logging, load_config

from .config import get_config_path
from ..services.report_service import ReportService


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg = load_config(get_config_path())
    configure_logging(cfg)

    report_svc = ReportService.from_config(cfg)
    report_svc.reload()

    app.state.cfg = cfg
    app.state.report_service = report_svc

    yield
