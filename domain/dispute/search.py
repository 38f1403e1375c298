"""
Dispute search criteria.

Each factory on ``DisputeSearch`` returns a fresh search node bound to one
remote field; calling a comparison method on the node records the term::

    criteria = [
        DisputeSearch.status().in_list([DisputeStatus.OPEN, DisputeStatus.DISPUTED]),
        DisputeSearch.amount_disputed().between("100.00", "200.00"),
        DisputeSearch.case_number().contains("CB"),
    ]
    for dispute in gateway.search(criteria):
        ...
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

from domain.common.exceptions import InvalidArgumentException
from domain.dispute.entity import (
    ChargebackProtectionLevel,
    DisputeKind,
    DisputeReason,
    DisputeStatus,
)


def _to_param_value(value: Any) -> Any:
    """Search values go over the wire as JSON scalars."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


class SearchNode:
    def __init__(self, name: str) -> None:
        self.name = name
        self._param: Any = None

    def to_param(self) -> Any:
        return self._param


class EqualityNode(SearchNode):
    def is_(self, value: Any) -> "EqualityNode":
        self._param = {"is": _to_param_value(value)}
        return self

    def is_not(self, value: Any) -> "EqualityNode":
        self._param = {"is_not": _to_param_value(value)}
        return self


class TextNode(EqualityNode):
    def starts_with(self, value: str) -> "TextNode":
        self._param = {"starts_with": value}
        return self

    def ends_with(self, value: str) -> "TextNode":
        self._param = {"ends_with": value}
        return self

    def contains(self, value: str) -> "TextNode":
        self._param = {"contains": value}
        return self


class RangeNode(SearchNode):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self._param = {}

    def greater_than_or_equal_to(self, value: Any) -> "RangeNode":
        self._param["min"] = _to_param_value(value)
        return self

    def less_than_or_equal_to(self, value: Any) -> "RangeNode":
        self._param["max"] = _to_param_value(value)
        return self

    def between(self, minimum: Any, maximum: Any) -> "RangeNode":
        return self.greater_than_or_equal_to(minimum).less_than_or_equal_to(maximum)

    def is_(self, value: Any) -> "RangeNode":
        self._param = {"is": _to_param_value(value)}
        return self


class MultipleValueNode(SearchNode):
    def __init__(self, name: str, allowed_values: Optional[Iterable[Any]] = None) -> None:
        super().__init__(name)
        self.allowed_values = (
            {_to_param_value(v) for v in allowed_values} if allowed_values is not None else None
        )

    def in_list(self, values: Iterable[Any]) -> "MultipleValueNode":
        params = [_to_param_value(v) for v in values]
        if self.allowed_values is not None:
            invalid = [v for v in params if v not in self.allowed_values]
            if invalid:
                raise InvalidArgumentException(
                    f"Invalid argument(s) for {self.name}: {', '.join(map(str, invalid))}",
                    field=self.name,
                    details={"invalid": invalid},
                )
        self._param = params
        return self

    def is_(self, value: Any) -> "MultipleValueNode":
        return self.in_list([value])


class DisputeSearch:
    @staticmethod
    def id() -> TextNode:
        return TextNode("id")

    @staticmethod
    def case_number() -> TextNode:
        return TextNode("case_number")

    @staticmethod
    def reference_number() -> TextNode:
        return TextNode("reference_number")

    @staticmethod
    def reason_code() -> TextNode:
        return TextNode("reason_code")

    @staticmethod
    def merchant_account_id() -> MultipleValueNode:
        return MultipleValueNode("merchant_account_id")

    @staticmethod
    def customer_id() -> TextNode:
        return TextNode("customer_id")

    @staticmethod
    def transaction_id() -> TextNode:
        return TextNode("transaction_id")

    @staticmethod
    def amount_disputed() -> RangeNode:
        return RangeNode("amount_disputed")

    @staticmethod
    def amount_won() -> RangeNode:
        return RangeNode("amount_won")

    @staticmethod
    def received_date() -> RangeNode:
        return RangeNode("received_date")

    @staticmethod
    def reply_by_date() -> RangeNode:
        return RangeNode("reply_by_date")

    @staticmethod
    def effective_date() -> RangeNode:
        return RangeNode("effective_date")

    @staticmethod
    def disbursement_date() -> RangeNode:
        return RangeNode("disbursement_date")

    @staticmethod
    def status() -> MultipleValueNode:
        return MultipleValueNode("status", DisputeStatus)

    @staticmethod
    def kind() -> MultipleValueNode:
        return MultipleValueNode("kind", DisputeKind)

    @staticmethod
    def reason() -> MultipleValueNode:
        return MultipleValueNode("reason", DisputeReason)

    @staticmethod
    def chargeback_protection_level() -> MultipleValueNode:
        return MultipleValueNode("chargeback_protection_level", ChargebackProtectionLevel)


SearchCriteria = Mapping[str, Any]


def build_criteria(query: Union[SearchCriteria, Iterable[SearchNode]]) -> dict[str, Any]:
    """Turn search nodes (or an already built mapping) into the request criteria."""
    if isinstance(query, Mapping):
        return dict(query)
    return {node.name: node.to_param() for node in query}
