from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class YearPoint(BaseModel):
    name: str
    conteo: int


class ProcedureTotal(BaseModel):
    name: str
    value: int


class ReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    message: Optional[str] = None
    per_procedure_series: Dict[str, List[YearPoint]] = Field(
        default_factory=dict, alias="perProcedureSeries"
    )
    totals: List[ProcedureTotal] = Field(default_factory=list)
    grand_total: int = Field(default=0, alias="grandTotal")


class ProcedureListResponse(BaseModel):
    procedures: List[ProcedureTotal]
    count: int


class ProcedureDetailResponse(BaseModel):
    name: str
    total: int
    series: List[YearPoint]
