"""
Dispute gateway: one remote round trip per call against the dispute resource.

Identifiers are validated before any request is dispatched. A decoded body
carrying the error envelope becomes an ``ErrorResult``; transport errors other
than not-found propagate unchanged.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Union
from urllib.parse import quote

from pydantic import ValidationError

from application.dtos.disputes import DisputeResponse, DisputeSearchResponse, EvidenceResponse
from application.dtos.pagination import PageResult, PaginatedCollection
from application.dtos.results import ApiErrorResponse, ErrorResult, Outcome, Successful
from application.ports.transport import Transport
from core.logging_config import get_logger
from core.settings import MissingPayloadPolicy
from domain.common.exceptions import (
    DisputeNotFoundException,
    DocumentNotFoundException,
    EvidenceNotFoundException,
    InvalidArgumentException,
    UnexpectedResponseException,
)
from domain.dispute.entity import Dispute, EvidenceDetail
from domain.dispute.search import SearchCriteria, SearchNode, build_criteria
from infrastructure.external.api_clients.base import NotFoundError
from shared.codes.dispute_codes import DisputeCode


logger = get_logger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or str(value).strip() == ""


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class DisputeGateway:
    resource: str = "disputes"

    def __init__(
        self,
        transport: Transport,
        *,
        merchant_path: str,
        missing_evidence_policy: MissingPayloadPolicy = MissingPayloadPolicy.EMPTY_SUCCESS,
        error_envelope_key: str = "apiErrorResponse",
    ) -> None:
        self._transport = transport
        self.root = f"{merchant_path.rstrip('/')}/{self.resource}"
        self.missing_evidence_policy = MissingPayloadPolicy(missing_evidence_policy)
        self.error_envelope_key = error_envelope_key

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # State transitions
    def accept(self, dispute_id: str) -> Outcome[None]:
        return self._transition(dispute_id, "accept")

    def finalize(self, dispute_id: str) -> Outcome[None]:
        return self._transition(dispute_id, "finalize")

    def _transition(self, dispute_id: str, action: str) -> Outcome[None]:
        if _is_blank(dispute_id):
            raise DisputeNotFoundException(dispute_id)
        path = f"{self._dispute_path(dispute_id)}/{action}"
        try:
            body = self._transport.put(path)
        except NotFoundError as exc:
            raise DisputeNotFoundException(dispute_id) from exc
        self._log(f"dispute_{action}", dispute_id=dispute_id, error=self._has_error(body))
        return self._error_or(body, Successful())

    # Evidence
    def add_text_evidence(self, dispute_id: str, content: str) -> Outcome[EvidenceDetail]:
        if _is_blank(content):
            raise InvalidArgumentException("content cannot be blank", field="content")
        if _is_blank(dispute_id):
            raise DisputeNotFoundException(dispute_id)
        return self._add_evidence(dispute_id, {"comments": content})

    def add_file_evidence(self, dispute_id: str, document_id: str) -> Outcome[EvidenceDetail]:
        if _is_blank(dispute_id):
            raise DisputeNotFoundException(dispute_id)
        if _is_blank(document_id):
            raise DocumentNotFoundException(document_id)
        return self._add_evidence(dispute_id, {"document_upload_id": document_id})

    def _add_evidence(self, dispute_id: str, payload: dict[str, Any]) -> Outcome[EvidenceDetail]:
        path = f"{self._dispute_path(dispute_id)}/evidence"
        try:
            body = self._transport.post(path, payload)
        except NotFoundError as exc:
            raise DisputeNotFoundException(dispute_id) from exc

        if self._has_error(body):
            self._log("dispute_evidence_add", dispute_id=dispute_id, error=True)
            return self._error_result(body)

        evidence = self._decode(EvidenceResponse, body).evidence
        self._log("dispute_evidence_add", dispute_id=dispute_id, evidence_id=getattr(evidence, "id", None))
        if evidence is None and self.missing_evidence_policy is MissingPayloadPolicy.RAISE:
            raise UnexpectedResponseException(
                "evidence missing from successful response",
                code=DisputeCode.MISSING_PAYLOAD,
                details={"dispute_id": dispute_id},
            )
        return Successful[EvidenceDetail](payload=evidence)

    def remove_evidence(self, dispute_id: str, evidence_id: str) -> Outcome[None]:
        if _is_blank(dispute_id) or _is_blank(evidence_id):
            raise EvidenceNotFoundException(dispute_id, evidence_id)
        path = f"{self._dispute_path(dispute_id)}/evidence/{_segment(str(evidence_id).strip())}"
        try:
            body = self._transport.delete(path)
        except NotFoundError as exc:
            raise EvidenceNotFoundException(dispute_id, evidence_id) from exc
        self._log("dispute_evidence_remove", dispute_id=dispute_id, evidence_id=evidence_id,
                  error=self._has_error(body))
        return self._error_or(body, Successful())

    # Lookup
    def find(self, dispute_id: str) -> Dispute:
        if _is_blank(dispute_id):
            raise DisputeNotFoundException(dispute_id)
        try:
            body = self._transport.get(self._dispute_path(dispute_id))
        except NotFoundError as exc:
            raise DisputeNotFoundException(dispute_id) from exc
        if self._has_error(body):
            self._raise_envelope(body, dispute_id=dispute_id)
        return self._decode(DisputeResponse, body).dispute

    def search(self, query: Union[SearchCriteria, Iterable[SearchNode]]) -> PaginatedCollection[Dispute]:
        """Lazy, restartable result sequence; nothing is fetched until iterated."""
        return PaginatedCollection(self.fetch_disputes, build_criteria(query))

    def fetch_disputes(self, criteria: dict[str, Any], page: int) -> PageResult[Dispute]:
        body = self._transport.post(f"{self.root}/advanced_search?page={int(page)}", {"search": criteria})
        if self._has_error(body):
            # searches have no Outcome to carry the envelope
            self._raise_envelope(body, page=page)
        disputes = self._decode(DisputeSearchResponse, body).disputes
        return PageResult[Dispute](
            items=disputes.dispute,
            total_items=disputes.total_items,
            page_size=disputes.page_size,
        )

    # Helpers
    def _dispute_path(self, dispute_id: str) -> str:
        return f"{self.root}/{_segment(str(dispute_id).strip())}"

    def _has_error(self, body: dict[str, Any]) -> bool:
        return self.error_envelope_key in body

    def _error_result(self, body: dict[str, Any]) -> ErrorResult:
        envelope = body.get(self.error_envelope_key)
        if not isinstance(envelope, dict):
            envelope = {"message": str(envelope or "")}
        return ErrorResult(error=self._decode(ApiErrorResponse, envelope))

    def _raise_envelope(self, body: dict[str, Any], **details) -> None:
        error = self._error_result(body).error
        raise UnexpectedResponseException(
            error.message or f"{self.resource} request failed",
            details={**details, "errors": error.errors},
        )

    def _error_or(self, body: dict[str, Any], success: Successful) -> Outcome:
        if self._has_error(body):
            return self._error_result(body)
        return success

    @staticmethod
    def _decode(schema, body: dict[str, Any]):
        try:
            return schema.model_validate(body)
        except ValidationError as exc:
            raise UnexpectedResponseException(
                f"Cannot decode {schema.__name__}",
                details={"error": str(exc)},
            ) from exc

    def _log(self, event: str, **kwargs) -> None:
        logger.info(event, resource=self.resource, **kwargs)
