"""
Operation outcome DTOs (Pydantic v2) returned by the dispute gateway.

Mutating operations return ``Successful`` or ``ErrorResult``; both carry a
``success`` literal so callers can branch on it without ``isinstance``.
"""
from __future__ import annotations

from typing import Any, Generic, Iterator, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class ValidationErrorDetail(BaseModel):
    attribute: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class ApiErrorResponse(BaseModel):
    """Structured business error carried in the response error envelope.

    Decoding never fails on shape: a missing message becomes "", and
    non-mapping ``errors``/``params`` become {} with the raw value kept in
    ``raw_errors``/``raw_params``.
    """

    message: str = ""
    errors: dict[str, Any] = Field(default_factory=dict)
    params: dict[str, Any] = Field(default_factory=dict)
    raw_errors: Any = None
    raw_params: Any = None

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _lenient_envelope(cls, data):
        if not isinstance(data, dict):
            return {"message": "" if data is None else str(data)}
        data = dict(data)
        message = data.get("message")
        data["message"] = "" if message is None else str(message)
        for key in ("errors", "params"):
            value = data.get(key)
            if value is not None and not isinstance(value, dict):
                data[f"raw_{key}"] = value
                data[key] = {}
            elif value is None:
                data.pop(key, None)
        return data

    def deep_errors(self) -> list[ValidationErrorDetail]:
        """All validation errors at any nesting depth."""
        return list(_walk_errors(self.errors))

    def for_object(self, name: str) -> dict[str, Any]:
        """Nested error node for one object, e.g. ``for_object("dispute")``."""
        node = self.errors.get(name)
        return node if isinstance(node, dict) else {}


def _walk_errors(node: dict[str, Any]) -> Iterator[ValidationErrorDetail]:
    for key, value in node.items():
        if key == "errors" and isinstance(value, list):
            for item in value:
                if isinstance(item, dict):
                    yield ValidationErrorDetail.model_validate(item)
        elif isinstance(value, dict):
            yield from _walk_errors(value)


class Successful(BaseModel, Generic[T]):
    success: Literal[True] = True
    payload: Optional[T] = None


class ErrorResult(BaseModel):
    success: Literal[False] = False
    error: ApiErrorResponse

    @property
    def message(self) -> str:
        return self.error.message


Outcome = Union[Successful[T], ErrorResult]
