"""
争议领域实体 - 远端争议资源的反序列化表示
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from domain.common.exceptions import UnexpectedResponseException


class DisputeStatus(str, Enum):
    """争议状态枚举"""
    ACCEPTED = "accepted"
    AUTO_ACCEPTED = "auto_accepted"
    DISPUTED = "disputed"
    EXPIRED = "expired"
    LOST = "lost"
    OPEN = "open"
    UNDER_REVIEW = "under_review"
    WON = "won"


class DisputeKind(str, Enum):
    CHARGEBACK = "chargeback"
    PRE_ARBITRATION = "pre_arbitration"
    RETRIEVAL = "retrieval"


class DisputeReason(str, Enum):
    CANCELLED_RECURRING_TRANSACTION = "cancelled_recurring_transaction"
    CREDIT_NOT_PROCESSED = "credit_not_processed"
    DUPLICATE = "duplicate"
    FRAUD = "fraud"
    GENERAL = "general"
    INVALID_ACCOUNT = "invalid_account"
    NOT_RECOGNIZED = "not_recognized"
    PRODUCT_NOT_RECEIVED = "product_not_received"
    PRODUCT_UNSATISFACTORY = "product_unsatisfactory"
    RETRIEVAL = "retrieval"
    TRANSACTION_AMOUNT_DIFFERS = "transaction_amount_differs"


class ChargebackProtectionLevel(str, Enum):
    EFFORTLESS = "effortless"
    STANDARD = "standard"
    NOT_PROTECTED = "not_protected"


class _Record(BaseModel):
    """Remote records accept snake_case or camelCase keys and keep unknown fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    @classmethod
    def factory(cls, attributes: Mapping[str, Any]):
        """Build a record from a decoded response map."""
        try:
            return cls.model_validate(dict(attributes))
        except (TypeError, ValidationError) as exc:
            raise UnexpectedResponseException(
                f"Cannot decode {cls.__name__} from response",
                details={"record": cls.__name__, "error": str(exc)},
            ) from exc


class EvidenceDetail(_Record):
    id: str
    comment: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    sequence_number: Optional[int] = None
    created_at: Optional[datetime] = None
    sent_to_processor_at: Optional[date] = None


class Dispute(_Record):
    """
    争议记录

    仅声明常用字段，其余字段原样保留在 model_extra 中。
    status/kind/reason 等取值已知时解析为枚举，未知取值保留为字符串。
    """

    id: str
    status: Optional[Union[DisputeStatus, str]] = Field(default=None, union_mode="left_to_right")
    kind: Optional[Union[DisputeKind, str]] = Field(default=None, union_mode="left_to_right")
    reason: Optional[Union[DisputeReason, str]] = Field(default=None, union_mode="left_to_right")
    reason_code: Optional[str] = None
    case_number: Optional[str] = None
    reference_number: Optional[str] = None
    currency_iso_code: Optional[str] = None
    merchant_account_id: Optional[str] = None
    chargeback_protection_level: Optional[Union[ChargebackProtectionLevel, str]] = Field(
        default=None, union_mode="left_to_right"
    )
    amount_disputed: Optional[Decimal] = None
    amount_won: Optional[Decimal] = None
    received_date: Optional[date] = None
    reply_by_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    evidence: list[EvidenceDetail] = Field(default_factory=list)
    transaction: Optional[dict[str, Any]] = None

    @property
    def is_open(self) -> bool:
        return self.status == DisputeStatus.OPEN
