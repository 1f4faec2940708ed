from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

# ---------------------------------------------------------------------------
# Domain metadata
# ---------------------------------------------------------------------------

YEAR_DOMAIN: Tuple[str, ...] = ("2022", "2023", "2024")
YEAR_COLUMN = "AÑO"
PROCEDURE_MARKER = "PROCEDIM"
LEGACY_PROCEDURE_MARKER = "PROCEDIMENTO"

COLUMN_STRATEGIES = ("multi", "single")
ORDERINGS = ("name", "discovery")


@dataclass(frozen=True)
class AggregationPolicy:
    """
    Rules for discovering and counting procedures.

      - marker: substring a header must contain to be a procedure column
      - column_strategy: "multi" scans every matching column, "single" only the first one
      - normalize_names: trim + upper-case names so "Biopsia" and " BIOPSIA " group together
      - strict_years: drop rows whose year is outside YEAR_DOMAIN from all counts
      - order: "name" sorts procedures ascending, "discovery" keeps first-seen order
      - match_header_case: require the marker with its exact case in the header
    """

    marker: str = PROCEDURE_MARKER
    column_strategy: str = "multi"
    normalize_names: bool = True
    strict_years: bool = True
    order: str = "name"
    year_column: str = YEAR_COLUMN
    match_header_case: bool = False

    def __post_init__(self):
        if self.column_strategy not in COLUMN_STRATEGIES:
            raise ValueError(f"Unknown column strategy '{self.column_strategy}'.")
        if self.order not in ORDERINGS:
            raise ValueError(f"Unknown ordering '{self.order}'.")


DEFAULT_POLICY = AggregationPolicy()
LEGACY_POLICY = AggregationPolicy(
    marker=LEGACY_PROCEDURE_MARKER,
    normalize_names=False,
    strict_years=False,
    order="discovery",
    match_header_case=True,
)


@dataclass
class ProcedureCounter:
    name: str
    total: int = 0
    by_year: Dict[str, int] = field(default_factory=lambda: {y: 0 for y in YEAR_DOMAIN})

    def add(self, year: str) -> None:
        self.by_year[year] = self.by_year.get(year, 0) + 1
        self.total += 1


@dataclass
class AggregationResult:
    procedures: Dict[str, ProcedureCounter]
    grand_total: int
    procedure_columns: List[str]
    year_column: Optional[str]
    order: str = "name"
    rows_seen: int = 0
    excluded_occurrences: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.procedures


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value != value:
        return ""
    return str(value).strip()


def find_procedure_columns(
    headers: Sequence[str], policy: AggregationPolicy = DEFAULT_POLICY
) -> List[str]:
    marker = policy.marker if policy.match_header_case else policy.marker.upper()
    matches: List[str] = []
    for header in headers:
        if header in matches:
            continue
        text = str(header).strip()
        if not policy.match_header_case:
            text = text.upper()
        if marker in text:
            matches.append(header)
    if policy.column_strategy == "single":
        return matches[:1]
    return matches


def find_year_column(
    headers: Sequence[str], year_column: str = YEAR_COLUMN
) -> Optional[str]:
    wanted = year_column.strip().upper()
    for header in headers:
        if str(header).strip().upper() == wanted:
            return header
    for header in headers:
        if wanted in str(header).strip().upper():
            return header
    return None


def normalize_name(value: Any, policy: AggregationPolicy = DEFAULT_POLICY) -> str:
    text = _cell_text(value)
    return text.upper() if policy.normalize_names else text


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def aggregate(
    rows: Sequence[Mapping[str, Any]],
    headers: Sequence[str],
    policy: AggregationPolicy = DEFAULT_POLICY,
) -> AggregationResult:
    proc_cols = find_procedure_columns(headers, policy)
    year_col = find_year_column(headers, policy.year_column)

    # First pass: every procedure name gets a counter, even if all of its
    # occurrences fall outside YEAR_DOMAIN.
    procedures: Dict[str, ProcedureCounter] = {}
    for row in rows:
        for col in proc_cols:
            name = normalize_name(row.get(col), policy)
            if name and name not in procedures:
                procedures[name] = ProcedureCounter(name=name)

    grand_total = 0
    excluded = 0
    for row in rows:
        year = _cell_text(row.get(year_col)) if year_col is not None else ""
        in_domain = year in YEAR_DOMAIN
        for col in proc_cols:
            name = normalize_name(row.get(col), policy)
            if not name:
                continue
            if policy.strict_years and not in_domain:
                excluded += 1
                continue
            procedures[name].add(year)
            grand_total += 1

    return AggregationResult(
        procedures=procedures,
        grand_total=grand_total,
        procedure_columns=proc_cols,
        year_column=year_col,
        order=policy.order,
        rows_seen=len(rows),
        excluded_occurrences=excluded,
    )


def policy_from_config(cfg: Mapping[str, Any]) -> AggregationPolicy:
    agg_cfg = cfg.get("aggregation", {}) or {}
    if agg_cfg.get("preset") == "legacy":
        base = LEGACY_POLICY
    else:
        base = DEFAULT_POLICY
    return AggregationPolicy(
        marker=str(agg_cfg.get("procedure_marker", base.marker)),
        column_strategy=str(agg_cfg.get("column_strategy", base.column_strategy)),
        normalize_names=bool(agg_cfg.get("normalize_names", base.normalize_names)),
        strict_years=bool(agg_cfg.get("strict_years", base.strict_years)),
        order=str(agg_cfg.get("order", base.order)),
        year_column=str(agg_cfg.get("year_column", base.year_column)),
        match_header_case=bool(agg_cfg.get("match_header_case", base.match_header_case)),
    )


__all__ = [
    "YEAR_DOMAIN",
    "YEAR_COLUMN",
    "PROCEDURE_MARKER",
    "AggregationPolicy",
    "DEFAULT_POLICY",
    "LEGACY_POLICY",
    "ProcedureCounter",
    "AggregationResult",
    "aggregate",
    "find_procedure_columns",
    "find_year_column",
    "normalize_name",
    "policy_from_config",
]
