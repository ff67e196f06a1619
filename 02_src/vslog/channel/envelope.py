"""Live event envelope shared by the publish channel, bridge and viewers."""

import json

from ..models import MAX_ID, Event, Kind, Severity

MAX_ENVELOPE_BYTES = 60 * 1024

ENVELOPE_FIELDS = (
    "timestamp",
    "type",
    "severity",
    "activity_uuid",
    "seq_id",
    "parent_uuid",
    "message",
)


def _dump(event: Event, message: str) -> bytes:
    # ids travel as decimal strings, they exceed the JS safe integer range
    return json.dumps(
        {
            "timestamp": event.timestamp,
            "type": event.kind.value,
            "severity": event.severity.value,
            "activity_uuid": str(event.activity_id),
            "seq_id": event.sequence_id,
            "parent_uuid": str(event.parent_id),
            "message": message,
        },
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8", errors="backslashreplace")


def encode_envelope(event: Event, max_bytes: int = MAX_ENVELOPE_BYTES) -> bytes:
    """Serialize an event, truncating the message until the envelope fits."""
    # every character takes at least one byte, so nothing past max_bytes can fit
    message = event.message[:max_bytes]
    payload = _dump(event, message)
    if len(payload) <= max_bytes:
        return payload

    # longest prefix that fits; envelope length grows with the prefix
    lo, hi = 0, len(message)
    payload = _dump(event, "")
    while lo < hi:
        mid = (lo + hi + 1) // 2
        candidate = _dump(event, message[:mid])
        if len(candidate) <= max_bytes:
            lo, payload = mid, candidate
        else:
            hi = mid - 1
    return payload


def _parse_id(value: object, field: str) -> int:
    if not isinstance(value, str) or not value.isdigit():
        raise ValueError(f"Envelope field {field} must be a decimal string")
    parsed = int(value)
    if parsed >= MAX_ID:
        raise ValueError(f"Envelope field {field} exceeds 64 bits")
    return parsed


def decode_envelope(payload: bytes | str) -> Event:
    """Parse an envelope back into an Event, validating its shape."""
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"Envelope is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Envelope must be a JSON object")
    if set(data) != set(ENVELOPE_FIELDS):
        raise ValueError(f"Unexpected envelope fields: {sorted(data)}")

    for field in ("timestamp", "seq_id"):
        if not isinstance(data[field], int) or isinstance(data[field], bool):
            raise ValueError(f"Envelope field {field} must be an integer")
    if not isinstance(data["message"], str):
        raise ValueError("Envelope field message must be a string")

    return Event(
        kind=Kind(data["type"]),
        severity=Severity(data["severity"]),
        timestamp=data["timestamp"],
        activity_id=_parse_id(data["activity_uuid"], "activity_uuid"),
        sequence_id=data["seq_id"],
        parent_id=_parse_id(data["parent_uuid"], "parent_uuid"),
        message=data["message"],
    )
