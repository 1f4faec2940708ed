from fastapi import APIRouter, Request, Response

from procreport.report.state import ReportSession, ReportStatus

from ..schemas.report import ReportResponse

router = APIRouter(prefix="/api/v1/report", tags=["report"])


def _to_response(session: ReportSession, response: Response) -> ReportResponse:
    if session.status is ReportStatus.ERROR:
        response.status_code = 503
    payload = {"status": session.status.value, "message": session.message}
    if session.view_model is not None:
        vm = session.view_model
        payload.update(
            per_procedure_series=vm.per_procedure_series,
            totals=vm.totals,
            grand_total=vm.grand_total,
        )
    return ReportResponse(**payload)


@router.get("", response_model=ReportResponse)
async def get_report(request: Request, response: Response):
    return _to_response(request.app.state.report_service.session, response)


@router.post("/reload", response_model=ReportResponse)
async def reload_report(request: Request, response: Response):
    session = request.app.state.report_service.reload()
    return _to_response(session, response)
