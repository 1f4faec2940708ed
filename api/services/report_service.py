from __future__ import annotations

from typing import Any, Dict, List, Optional

from procreport.analysis.aggregate import (
    DEFAULT_POLICY,
    AggregationPolicy,
    normalize_name,
    policy_from_config,
)
from procreport.config import DEFAULT_SOURCE
from procreport.data.loader import DEFAULT_TIMEOUT
from procreport.report.state import ReportSession, ReportStatus, load_report


class ReportService:
    def __init__(
        self,
        source: str = DEFAULT_SOURCE,
        policy: AggregationPolicy = DEFAULT_POLICY,
        encoding: Optional[str] = None,
        delimiter: str = ",",
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.source = source
        self.policy = policy
        self.encoding = encoding
        self.delimiter = delimiter
        self.timeout = timeout
        self.session = ReportSession(source=source)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "ReportService":
        data_cfg = cfg.get("data", {}) or {}
        return cls(
            source=str(data_cfg.get("source", DEFAULT_SOURCE)),
            policy=policy_from_config(cfg),
            encoding=data_cfg.get("encoding"),
            delimiter=str(data_cfg.get("delimiter", ",")),
            timeout=float(data_cfg.get("timeout_seconds", DEFAULT_TIMEOUT)),
        )

    def reload(self) -> ReportSession:
        self.session = load_report(
            source=self.source,
            policy=self.policy,
            encoding=self.encoding,
            delimiter=self.delimiter,
            timeout=self.timeout,
        )
        return self.session

    @property
    def status(self) -> ReportStatus:
        return self.session.status

    def list_totals(self) -> List[Dict]:
        if self.session.view_model is None:
            return []
        return list(self.session.view_model.totals)

    def get_procedure(self, name: str) -> Optional[Dict]:
        vm = self.session.view_model
        if vm is None:
            return None
        key = normalize_name(name, self.policy)
        series = vm.per_procedure_series.get(key)
        if series is None:
            return None
        total = next((t["value"] for t in vm.totals if t["name"] == key), 0)
        return {"name": key, "total": total, "series": series}
