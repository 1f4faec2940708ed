"""Procedure aggregation and view-model shaping."""

from .aggregate import (
    DEFAULT_POLICY,
    LEGACY_POLICY,
    YEAR_DOMAIN,
    AggregationPolicy,
    AggregationResult,
    ProcedureCounter,
    aggregate,
    policy_from_config,
)
from .view_model import ViewModel, to_view_model

__all__ = [
    "AggregationPolicy",
    "AggregationResult",
    "ProcedureCounter",
    "ViewModel",
    "aggregate",
    "to_view_model",
    "policy_from_config",
    "DEFAULT_POLICY",
    "LEGACY_POLICY",
    "YEAR_DOMAIN",
]
