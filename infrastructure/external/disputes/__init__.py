"""
Factory for the dispute gateway.
"""
from __future__ import annotations

from typing import Optional

import httpx

from core.settings import GatewaySettings, gateway_settings
from .gateway import DisputeGateway
from .http_client import GatewayHttpClient


def get_dispute_gateway(
    config: Optional[GatewaySettings] = None,
    *,
    transport: Optional[httpx.BaseTransport] = None,
) -> DisputeGateway:
    cfg = config or gateway_settings
    return DisputeGateway(
        GatewayHttpClient(cfg, transport=transport),
        merchant_path=cfg.merchant_path(),
        missing_evidence_policy=cfg.disputes.missing_evidence_policy,
        error_envelope_key=cfg.disputes.error_envelope_key,
    )


__all__ = ["DisputeGateway", "GatewayHttpClient", "get_dispute_gateway"]
