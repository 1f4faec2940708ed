from fastapi import APIRouter, HTTPException, Request

from procreport.report.state import ReportStatus

from ..schemas.report import (
    ProcedureDetailResponse,
    ProcedureListResponse,
    ProcedureTotal,
    YearPoint,
)

router = APIRouter(prefix="/api/v1/procedures", tags=["procedures"])


def _require_ready(request: Request):
    report_svc = request.app.state.report_service
    if report_svc.status is not ReportStatus.READY:
        raise HTTPException(
            status_code=409,
            detail=f"Report is '{report_svc.status.value}', no procedures available",
        )
    return report_svc


@router.get("", response_model=ProcedureListResponse)
async def list_procedures(request: Request):
    totals = _require_ready(request).list_totals()
    return ProcedureListResponse(
        procedures=[ProcedureTotal(**t) for t in totals],
        count=len(totals),
    )


@router.get("/{name}", response_model=ProcedureDetailResponse)
async def get_procedure(name: str, request: Request):
    detail = _require_ready(request).get_procedure(name)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Procedure '{name}' not found")
    return ProcedureDetailResponse(
        name=detail["name"],
        total=detail["total"],
        series=[YearPoint(**p) for p in detail["series"]],
    )
