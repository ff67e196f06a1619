"""Persisted line format of the durable sink.

One line per event, fields in fixed order::

    [WARNING], {MID}, Activity: 42 Seq: 1 Parent: 0 -- disk at 91%

The message is escaped with JSON string rules (without the surrounding
quotes), so a line never contains a raw newline and ``parse_line`` gives back
the message unchanged.
"""

import json
import re
from dataclasses import dataclass

from ..models import Event, Kind, Severity

_LINE_RE = re.compile(
    r"^\[(?P<kind>[A-Z]+)\], \{(?P<severity>[A-Z]+)\}, "
    r"Activity: (?P<activity>\d+) Seq: (?P<seq>\d+) Parent: (?P<parent>\d+) -- "
    r"(?P<message>.*)$"
)


@dataclass(frozen=True)
class PersistedRecord:
    """Fields recovered from one persisted line."""

    kind: Kind
    severity: Severity
    activity_id: int
    sequence_id: int
    parent_id: int
    message: str


# line breaks for str.splitlines() that JSON leaves unescaped
_UNICODE_BREAKS = str.maketrans({"\u0085": "\\u0085", "\u2028": "\\u2028", "\u2029": "\\u2029"})


def escape_message(message: str) -> str:
    """Escape message content so it fits on a single line."""
    return json.dumps(message, ensure_ascii=False)[1:-1].translate(_UNICODE_BREAKS)


def unescape_message(escaped: str) -> str:
    """Invert escape_message."""
    return json.loads(f'"{escaped}"')


def format_line(event: Event) -> str:
    """Render an event as one persisted line, newline included."""
    return (
        f"[{event.kind.value}], {{{event.severity.value}}}, "
        f"Activity: {event.activity_id} Seq: {event.sequence_id} "
        f"Parent: {event.parent_id} -- {escape_message(event.message)}\n"
    )


def parse_line(line: str) -> PersistedRecord:
    """Parse a persisted line back into its fields."""
    match = _LINE_RE.match(line.rstrip("\n"))
    if not match:
        raise ValueError(f"Malformed log line: {line[:80]!r}")

    try:
        return PersistedRecord(
            kind=Kind(match["kind"]),
            severity=Severity(match["severity"]),
            activity_id=int(match["activity"]),
            sequence_id=int(match["seq"]),
            parent_id=int(match["parent"]),
            message=unescape_message(match["message"]),
        )
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed message escaping: {e}") from e
