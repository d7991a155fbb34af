"""Minting of anonymized request records."""

import hashlib
import json
import secrets
import time
from datetime import datetime, timedelta

from playscribe.common import AnonymizedRequestRecord, AudioPayload, Provider

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_request_id() -> str:
    """
    Returns a fresh provider-facing request id.

    Format is ``req_<base36 epoch ms>_<32 hex chars>``. The random part comes
    from the OS CSPRNG and nothing about the caller goes into it.
    """
    timestamp = _to_base36(int(time.time() * 1000))
    return f"req_{timestamp}_{secrets.token_hex(16)}"


def size_class(size_bytes: int) -> str:
    """Buckets a payload size so the exact byte count is not retained."""
    if size_bytes < 100 * 1024:
        return "small"
    if size_bytes < 1024 * 1024:
        return "medium"
    if size_bytes < 10 * 1024 * 1024:
        return "large"
    return "xlarge"


def hash_request_metadata(payload: AudioPayload) -> str:
    """Non-reversible summary of the payload: sha256 over size class and media type."""
    summary = json.dumps(
        {"sizeClass": size_class(payload.size_bytes), "mediaType": payload.media_type},
        sort_keys=True,
    )
    return hashlib.sha256(summary.encode("utf-8")).hexdigest()[:32]


def mint_request_record(
    user_id: str,
    provider: Provider,
    request_type: str,
    payload: AudioPayload | None,
    retention: timedelta,
    now: datetime,
) -> AnonymizedRequestRecord:
    """Builds the audit record for one outbound provider call."""
    return AnonymizedRequestRecord(
        request_id=generate_request_id(),
        internal_user_id=user_id,
        provider=provider,
        request_type=request_type,
        metadata_hash=hash_request_metadata(payload) if payload is not None else None,
        created_at=now,
        expires_at=now + retention,
    )
