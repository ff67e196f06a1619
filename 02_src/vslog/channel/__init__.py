"""Publish channel module."""

from .base import IEventSource, IPublishChannel
from .envelope import MAX_ENVELOPE_BYTES, decode_envelope, encode_envelope
from .in_process import InProcessChannel, InProcessSource
from .unix import UnixDatagramChannel, UnixDatagramSource

__all__ = [
    "IEventSource",
    "IPublishChannel",
    "InProcessChannel",
    "InProcessSource",
    "UnixDatagramChannel",
    "UnixDatagramSource",
    "MAX_ENVELOPE_BYTES",
    "decode_envelope",
    "encode_envelope",
]
