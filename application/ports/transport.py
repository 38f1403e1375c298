"""
Transport port (application/ports) exposing a replaceable protocol.

The dispute gateway depends on this Protocol; infrastructure implements it
over HTTP. Every verb returns the decoded response body (an empty dict for an
empty body) or raises a transport-level ``APIError``.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Synchronous request/response transport for a resource-oriented API."""

    def get(self, path: str) -> dict[str, Any]: ...

    def post(self, path: str, body: Optional[dict[str, Any]] = None) -> dict[str, Any]: ...

    def put(self, path: str) -> dict[str, Any]: ...

    def delete(self, path: str) -> dict[str, Any]: ...
