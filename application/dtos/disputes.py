"""
Per-endpoint response schemas for the dispute resource.

Bodies are decoded once here so the gateway works with typed values only.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.dispute.entity import Dispute, EvidenceDetail


def _first(value: Any) -> Any:
    """Counts may arrive as a scalar or as a single-element list."""
    if isinstance(value, list):
        return value[0] if value else 0
    return value


class DisputeResponse(BaseModel):
    dispute: Dispute


class EvidenceResponse(BaseModel):
    evidence: Optional[EvidenceDetail] = None


class DisputePage(BaseModel):
    total_items: int = Field(default=0, alias="totalItems")
    page_size: int = Field(default=0, alias="pageSize")
    dispute: list[Dispute] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("total_items", "page_size", mode="before")
    @classmethod
    def _unwrap_count(cls, v):
        return _first(v)

    @field_validator("dispute", mode="before")
    @classmethod
    def _as_list(cls, v):
        # a page holding one record may carry it unwrapped
        if v is None:
            return []
        if isinstance(v, dict):
            return [v]
        return v


class DisputeSearchResponse(BaseModel):
    disputes: DisputePage = Field(default_factory=DisputePage)
