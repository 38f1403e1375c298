"""
API客户端模块

提供与外部REST API集成的同步客户端实现
"""
from .base import (
    BaseAPIClient,
    APIResponse,
    APIError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    UpgradeRequiredError,
)

__all__ = [
    "BaseAPIClient",
    "APIResponse",
    "APIError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "UpgradeRequiredError",
]
