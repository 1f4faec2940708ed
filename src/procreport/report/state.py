from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..analysis.aggregate import (
    DEFAULT_POLICY,
    AggregationPolicy,
    AggregationResult,
    aggregate,
    policy_from_config,
)
from ..analysis.view_model import ViewModel, to_view_model
from ..config import DEFAULT_SOURCE
from ..data.loader import DEFAULT_TIMEOUT, load_csv
from ..errors import LoadError, ParseError, ReportStateError

logger = logging.getLogger(__name__)


class ReportStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


@dataclass
class ReportSession:
    """
    One load cycle: starts in LOADING and settles exactly once into
    ERROR, EMPTY or READY. A reload builds a new session.
    """

    source: str
    status: ReportStatus = ReportStatus.LOADING
    message: Optional[str] = None
    result: Optional[AggregationResult] = None
    view_model: Optional[ViewModel] = None

    def _leave_loading(self, target: ReportStatus) -> None:
        if self.status is not ReportStatus.LOADING:
            raise ReportStateError(
                f"Cannot move report from '{self.status.value}' to '{target.value}'."
            )
        self.status = target

    def fail(self, message: str) -> None:
        self._leave_loading(ReportStatus.ERROR)
        self.message = message

    def resolve(self, result: AggregationResult) -> None:
        view_model = to_view_model(result)
        if view_model.is_empty:
            self._leave_loading(ReportStatus.EMPTY)
            self.message = "No procedure data found to display."
        else:
            self._leave_loading(ReportStatus.READY)
        self.result = result
        self.view_model = view_model

    @property
    def settled(self) -> bool:
        return self.status is not ReportStatus.LOADING

    def summary(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status.value,
            "message": self.message,
            "source": self.source,
        }
        if self.view_model is not None:
            payload.update(self.view_model.to_dict())
        return payload


def load_report(
    source: str | os.PathLike = DEFAULT_SOURCE,
    policy: AggregationPolicy = DEFAULT_POLICY,
    encoding: Optional[str] = None,
    delimiter: str = ",",
    timeout: float = DEFAULT_TIMEOUT,
) -> ReportSession:
    session = ReportSession(source=str(source))
    try:
        parsed = load_csv(source, encoding=encoding, delimiter=delimiter, timeout=timeout)
    except (LoadError, ParseError) as exc:
        logger.error("Error loading or parsing CSV %s: %s", source, exc)
        session.fail(str(exc))
        return session

    result = aggregate(parsed.rows, parsed.headers, policy)
    session.resolve(result)
    if result.excluded_occurrences:
        logger.info(
            "Excluded %d procedure occurrences with a year outside the report range",
            result.excluded_occurrences,
        )
    logger.info(
        "Report %s: %d procedures, grand total %d",
        session.status.value,
        len(result.procedures),
        result.grand_total,
    )
    return session


def load_report_from_config(cfg: Dict[str, Any], source: str | os.PathLike | None = None) -> ReportSession:
    data_cfg = cfg.get("data", {}) or {}
    return load_report(
        source=source or data_cfg.get("source", DEFAULT_SOURCE),
        policy=policy_from_config(cfg),
        encoding=data_cfg.get("encoding"),
        delimiter=str(data_cfg.get("delimiter", ",")),
        timeout=float(data_cfg.get("timeout_seconds", DEFAULT_TIMEOUT)),
    )


__all__ = ["ReportStatus", "ReportSession", "load_report", "load_report_from_config"]
