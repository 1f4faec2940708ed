from fastapi import APIRouter, Request

from procreport.report.state import ReportStatus

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    report_svc = getattr(request.app.state, "report_service", None)
    if report_svc is None:
        return {"status": "not_ready", "reason": "report not loaded"}
    if report_svc.status in (ReportStatus.READY, ReportStatus.EMPTY):
        return {"status": "ready", "report": report_svc.status.value}
    reason = report_svc.session.message or report_svc.status.value
    return {"status": "not_ready", "reason": reason}
