"""
HTTP transport for the payment gateway, configured from ``GatewaySettings``.
"""
from __future__ import annotations

from typing import Optional

import httpx

from core.settings import GatewaySettings
from infrastructure.external.api_clients.base import BaseAPIClient


class GatewayHttpClient(BaseAPIClient):
    """BaseAPIClient with gateway auth, API version header and timeouts."""

    def __init__(self, config: GatewaySettings, *, transport: Optional[httpx.BaseTransport] = None):
        config.assert_has_access_token_or_keys()
        timeouts = config.timeouts
        auth = None
        if not config.has_access_token():
            auth = httpx.BasicAuth(config.public_key or "", config.private_key or "")
        super().__init__(
            base_url=config.resolved_base_url(),
            timeout=httpx.Timeout(
                connect=timeouts.connect,
                read=timeouts.read,
                write=timeouts.write,
                timeout=timeouts.total,
            ),
            headers={"X-ApiVersion": config.api_version},
            auth_token=config.access_token if config.has_access_token() else None,
            auth=auth,
            debug=config.debug,
            error_envelope_key=config.disputes.error_envelope_key,
            transport=transport,
        )
