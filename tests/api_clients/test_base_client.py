import json

import httpx
import pytest

from core.settings import GatewaySettings
from infrastructure.external.api_clients.base import (
    APIError,
    AuthenticationError,
    BaseAPIClient,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    UpgradeRequiredError,
)
from infrastructure.external.disputes import GatewayHttpClient, get_dispute_gateway


def _client(handler, **kwargs):
    return BaseAPIClient(
        "https://gateway.test/",
        transport=httpx.MockTransport(handler),
        error_envelope_key="apiErrorResponse",
        **kwargs,
    )


def test_get_returns_decoded_body():
    def handler(request):
        assert request.method == "GET"
        assert str(request.url) == "https://gateway.test/merchants/m/disputes/1"
        return httpx.Response(200, json={"dispute": {"id": "1"}})

    with _client(handler) as client:
        assert client.get("/merchants/m/disputes/1") == {"dispute": {"id": "1"}}


def test_post_sends_json_body_and_keeps_query_string():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"ok": True})

    client = _client(handler)
    assert client.post("/search?page=2", {"search": {"id": {"is": "1"}}}) == {"ok": True}
    assert seen["url"] == "https://gateway.test/search?page=2"
    assert seen["body"] == {"search": {"id": {"is": "1"}}}


def test_empty_body_decodes_to_empty_dict():
    client = _client(lambda request: httpx.Response(200))
    assert client.put("/merchants/m/disputes/1/accept") == {}


def test_error_envelope_returned_regardless_of_status():
    body = {"apiErrorResponse": {"message": "Cannot finalize"}}
    client = _client(lambda request: httpx.Response(422, json=body))
    assert client.put("/merchants/m/disputes/1/finalize") == body


@pytest.mark.parametrize(
    "status, error_class",
    [
        (401, AuthenticationError),
        (404, NotFoundError),
        (426, UpgradeRequiredError),
        (429, RateLimitError),
        (503, ServerError),
        (400, APIError),
    ],
)
def test_status_codes_map_to_transport_errors(status, error_class):
    client = _client(lambda request: httpx.Response(status, json={"message": "nope"}))
    with pytest.raises(error_class) as exc_info:
        client.delete("/x")
    assert exc_info.value.status_code == status
    assert exc_info.value.message == "nope"


def test_timeout_becomes_request_timeout_error():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(RequestTimeoutError):
        _client(handler).get("/x")


def test_network_error_becomes_api_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(APIError):
        _client(handler).get("/x")


def test_non_utf8_json_body_is_api_error():
    client = _client(lambda request: httpx.Response(
        200, content=b'{"a": "\xff"}', headers={"content-type": "application/json"}
    ))
    with pytest.raises(APIError) as exc_info:
        client.get("/x")
    assert exc_info.value.message == "Response body is not valid JSON"


def test_non_object_body_is_rejected():
    client = _client(lambda request: httpx.Response(200, json=[1, 2]))
    with pytest.raises(APIError):
        client.get("/x")


def test_gateway_client_uses_basic_auth_and_version_header():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        seen["version"] = request.headers.get("x-apiversion")
        seen["host"] = request.url.host
        seen["path"] = request.url.path
        return httpx.Response(200, json={})

    config = GatewaySettings(environment="sandbox", merchant_id="m", public_key="pub", private_key="priv")
    client = GatewayHttpClient(config, transport=httpx.MockTransport(handler))
    client.get("/merchants/m/disputes/1")
    assert seen["auth"].startswith("Basic ")
    assert seen["version"] == "6"
    assert seen["host"] == "api.sandbox.braintreegateway.com"
    assert seen["path"] == "/merchants/m/disputes/1"


def test_gateway_client_prefers_access_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={})

    config = GatewaySettings(base_url="https://gateway.test", merchant_id="m", access_token="tok")
    GatewayHttpClient(config, transport=httpx.MockTransport(handler)).get("/x")
    assert seen["auth"] == "Bearer tok"


def test_gateway_client_requires_credentials():
    with pytest.raises(ValueError):
        GatewayHttpClient(GatewaySettings(merchant_id="m", public_key=None, private_key=None, access_token=None))


def test_factory_wires_gateway_end_to_end():
    def handler(request):
        assert request.url.path == "/merchants/m/disputes/abc"
        return httpx.Response(200, json={"dispute": {"id": "abc", "status": "won"}})

    config = GatewaySettings(base_url="https://gateway.test", merchant_id="m", access_token="tok")
    with get_dispute_gateway(config, transport=httpx.MockTransport(handler)) as gateway:
        assert gateway.find("abc").status == "won"
