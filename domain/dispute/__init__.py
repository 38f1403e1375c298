"""Dispute domain exports."""
from .entity import (
    ChargebackProtectionLevel,
    Dispute,
    DisputeKind,
    DisputeReason,
    DisputeStatus,
    EvidenceDetail,
)
from .search import DisputeSearch, SearchCriteria, build_criteria

__all__ = [
    "ChargebackProtectionLevel",
    "Dispute",
    "DisputeKind",
    "DisputeReason",
    "DisputeStatus",
    "EvidenceDetail",
    "DisputeSearch",
    "SearchCriteria",
    "build_criteria",
]
