from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from .aggregate import YEAR_DOMAIN, AggregationResult


@dataclass
class ViewModel:
    """
    Render-ready report data.

    per_procedure_series maps a procedure to one {"name": year, "conteo": n}
    point per year of YEAR_DOMAIN; totals holds {"name": procedure, "value": n}
    entries in the same procedure order.
    """

    per_procedure_series: Dict[str, List[Dict]] = field(default_factory=dict)
    totals: List[Dict] = field(default_factory=list)
    grand_total: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.per_procedure_series

    @property
    def procedure_names(self) -> List[str]:
        return list(self.per_procedure_series.keys())

    def to_dict(self) -> Dict:
        return {
            "perProcedureSeries": {
                name: [dict(point) for point in points]
                for name, points in self.per_procedure_series.items()
            },
            "totals": [dict(entry) for entry in self.totals],
            "grandTotal": self.grand_total,
        }

    def series_frame(self) -> pd.DataFrame:
        records = [
            {"procedure": name, "name": point["name"], "conteo": point["conteo"]}
            for name, points in self.per_procedure_series.items()
            for point in points
        ]
        return pd.DataFrame(records, columns=["procedure", "name", "conteo"])

    def totals_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.totals, columns=["name", "value"])


def to_view_model(result: AggregationResult) -> ViewModel:
    names = list(result.procedures.keys())
    if result.order == "name":
        names = sorted(names)

    series: Dict[str, List[Dict]] = {}
    totals: List[Dict] = []
    for name in names:
        counter = result.procedures[name]
        series[name] = [
            {"name": year, "conteo": int(counter.by_year.get(year, 0))}
            for year in YEAR_DOMAIN
        ]
        totals.append({"name": name, "value": int(counter.total)})

    return ViewModel(
        per_procedure_series=series,
        totals=totals,
        grand_total=int(result.grand_total),
    )


__all__ = ["ViewModel", "to_view_model"]
