"""Pytest bootstrap configuration.

Ensure gateway environment variables are set before test collection
and module imports that depend on application settings.
"""
import os

os.environ.setdefault("BRAINTREE__MERCHANT_ID", "merchant_1")
os.environ.setdefault("BRAINTREE__PUBLIC_KEY", "public_key")
os.environ.setdefault("BRAINTREE__PRIVATE_KEY", "private_key")

import pytest


class RecordingTransport:
    """Transport double: records every call and replays queued bodies."""

    def __init__(self, responses=None):
        self.calls = []
        self._responses = list(responses or [])
        self.closed = False

    def queue(self, *bodies):
        self._responses.extend(bodies)
        return self

    def _reply(self, method, path, body=None):
        self.calls.append((method, path, body))
        if not self._responses:
            return {}
        reply = self._responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def get(self, path):
        return self._reply("GET", path)

    def post(self, path, body=None):
        return self._reply("POST", path, body)

    def put(self, path):
        return self._reply("PUT", path)

    def delete(self, path):
        return self._reply("DELETE", path)

    def close(self):
        self.closed = True


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def gateway(transport):
    from infrastructure.external.disputes.gateway import DisputeGateway

    return DisputeGateway(transport, merchant_path="/merchants/merchant_1")
