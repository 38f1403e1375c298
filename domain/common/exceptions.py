"""领域层业务异常定义，供领域与基础设施使用。

网关在发起任何请求之前完成参数校验，校验失败时直接构造带完整上下文的异常。
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode
from shared.codes.dispute_codes import DisputeCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
        message_key: Optional[str] = None,
        format_params: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        self.message_key = message_key
        self.format_params = format_params
        super().__init__(self.message)


class ResourceNotFoundException(BusinessException):
    """Single error kind for blank identifiers and remote not-found responses."""

    def __init__(self, message: str, *, error_type: str = "ResourceNotFound", details: Optional[dict] = None):
        super().__init__(
            code=BusinessCode.NOT_FOUND,
            message=message,
            error_type=error_type,
            details=details,
            message_key="resource.not_found",
        )


class DisputeNotFoundException(ResourceNotFoundException):
    def __init__(self, dispute_id: Optional[str]):
        super().__init__(
            f'dispute with id "{dispute_id}" not found',
            error_type="DisputeNotFound",
            details={"dispute_id": dispute_id},
        )


class DocumentNotFoundException(ResourceNotFoundException):
    def __init__(self, document_id: Optional[str]):
        super().__init__(
            f'document with id "{document_id}" not found',
            error_type="DocumentNotFound",
            details={"document_id": document_id},
        )


class EvidenceNotFoundException(ResourceNotFoundException):
    def __init__(self, dispute_id: Optional[str], evidence_id: Optional[str]):
        super().__init__(
            f'evidence with id "{evidence_id}" for dispute with id "{dispute_id}" not found',
            error_type="EvidenceNotFound",
            details={"dispute_id": dispute_id, "evidence_id": evidence_id},
        )


class InvalidArgumentException(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="InvalidArgument",
            details=details,
            field=field,
            message_key="validation.argument",
        )


class UnexpectedResponseException(BusinessException):
    def __init__(self, message: str, *, code: int = DisputeCode.UNEXPECTED_RESPONSE, details: Optional[dict] = None):
        super().__init__(
            code=code,
            message=message,
            error_type="UnexpectedResponse",
            details=details,
            message_key="gateway.response.unexpected",
        )
