"""Webhook body parsing for Jobber deliveries.

Accepts the flat ``dealId``/``note`` shape used by manual senders as well as
Jobber's own ``data.webHookEvent`` envelope.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Any

from jobbersync.common.exceptions import BadRequestError
from jobbersync.config import settings
from jobbersync.core.card_sync.correlation import deal_id_text
from jobbersync.core.card_sync.schemas import JobberEvent


def _first_present(body: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = body.get(key)
        if value is not None and value != "":
            return value
    return None


def extract_event(body: Any, default_note: str | None = None) -> JobberEvent:
    if not isinstance(body, dict):
        raise BadRequestError("Webhook payload must be a JSON object")

    envelope = body.get("data", {}).get("webHookEvent", {}) if isinstance(body.get("data"), dict) else {}
    if not isinstance(envelope, dict):
        envelope = {}
    topic = envelope.get("topic")

    deal_id = _first_present(body, "dealId", "deal_id")
    if deal_id is None:
        deal_id = _first_present(envelope, "itemId")
    if deal_id is None or isinstance(deal_id, (dict, list, bool)) or not deal_id_text(deal_id).strip():
        raise BadRequestError("Webhook payload is missing a deal id (dealId or deal_id)")

    note = _first_present(body, "note", "content")
    if note is None and topic:
        note = f"{topic} event from Jobber"
    if note is None:
        note = default_note if default_note is not None else settings.DEFAULT_NOTE

    return JobberEvent(deal_id=deal_id_text(deal_id), note=str(note), topic=topic)


def compute_signature(body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def verify_signature(body: bytes, signature: str, secret: str) -> bool:
    # Headers arrive latin-1 decoded; compare bytes so non-ASCII values are a plain mismatch
    return hmac.compare_digest(signature.encode("latin-1", "replace"), compute_signature(body, secret).encode())
