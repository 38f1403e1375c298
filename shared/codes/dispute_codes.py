"""
Dispute specific codes.
"""
from __future__ import annotations

from enum import IntEnum


class DisputeCode(IntEnum):
    # Gateway/response errors (7xxxx)
    UNEXPECTED_RESPONSE = 70000
    MISSING_PAYLOAD = 70001
