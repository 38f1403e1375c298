"""
Dispute gateway settings using pydantic-settings v2 with nested env keys.

Values are read from ``BRAINTREE__*`` environment variables or ``.env``,
e.g. ``BRAINTREE__MERCHANT_ID`` or ``BRAINTREE__TIMEOUTS__READ``.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field


ENVIRONMENT_BASE_URLS = {
    "development": "http://localhost:3000",
    "qa": "https://gateway.qa.braintreepayments.com:443",
    "sandbox": "https://api.sandbox.braintreegateway.com:443",
    "production": "https://api.braintreegateway.com:443",
}


class MissingPayloadPolicy(str, Enum):
    """What to do when an evidence call succeeds but carries no evidence record."""
    EMPTY_SUCCESS = "empty_success"  # Successful(payload=None)
    RAISE = "raise"                  # UnexpectedResponseException


class GatewayTimeouts(BaseModel):
    connect: float = 5.0
    read: float = 60.0
    write: float = 60.0
    total: float = 60.0


class DisputeSettings(BaseModel):
    missing_evidence_policy: MissingPayloadPolicy = MissingPayloadPolicy.EMPTY_SUCCESS
    error_envelope_key: str = "apiErrorResponse"


class GatewaySettings(BaseSettings):
    environment: str = "sandbox"
    base_url: Optional[str] = None  # overrides the environment URL when set
    merchant_id: Optional[str] = None
    public_key: Optional[str] = None
    private_key: Optional[str] = None
    access_token: Optional[str] = None
    api_version: str = "6"
    debug: bool = False

    timeouts: GatewayTimeouts = Field(default_factory=GatewayTimeouts)
    disputes: DisputeSettings = Field(default_factory=DisputeSettings)

    model_config = SettingsConfigDict(
        env_prefix="BRAINTREE__",
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    def resolved_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        try:
            return ENVIRONMENT_BASE_URLS[self.environment.lower()]
        except KeyError:
            raise ValueError(f"Unsupported gateway environment: {self.environment}") from None

    def merchant_path(self) -> str:
        if not self.merchant_id:
            raise ValueError("BRAINTREE__MERCHANT_ID 未配置")
        return f"/merchants/{self.merchant_id}"

    def has_access_token(self) -> bool:
        return bool(self.access_token)

    def assert_has_access_token_or_keys(self) -> None:
        """Credentials must be either an access token or a public/private key pair."""
        if self.has_access_token():
            return
        if not self.public_key or not self.private_key:
            raise ValueError(
                "Gateway credentials missing: set BRAINTREE__ACCESS_TOKEN or both "
                "BRAINTREE__PUBLIC_KEY and BRAINTREE__PRIVATE_KEY"
            )


gateway_settings = GatewaySettings()
