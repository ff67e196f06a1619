"""vslog: ordered event recording with durable storage and live fan-out."""

from .app import Application, IApplication
from .bridge import (
    BridgeState,
    FanoutBridge,
    IFanoutBridge,
    ISubscriber,
    ISubscriberRegistry,
    QueueSubscriber,
    SubscriberOverflow,
    SubscriberRegistry,
    WebSocketSubscriber,
)
from .channel import (
    IEventSource,
    IPublishChannel,
    InProcessChannel,
    InProcessSource,
    UnixDatagramChannel,
    UnixDatagramSource,
    decode_envelope,
    encode_envelope,
)
from .config import Settings, load_settings
from .models import Event, Kind, Severity
from .recorder import IRecorder, Recorder
from .storage import FileSink, IDurableSink, PersistedRecord, format_line, parse_line

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    "load_settings",
    # Models
    "Event",
    "Kind",
    "Severity",
    # Recorder
    "IRecorder",
    "Recorder",
    # Durable sink
    "IDurableSink",
    "FileSink",
    "PersistedRecord",
    "format_line",
    "parse_line",
    # Publish channel
    "IPublishChannel",
    "IEventSource",
    "InProcessChannel",
    "InProcessSource",
    "UnixDatagramChannel",
    "UnixDatagramSource",
    "encode_envelope",
    "decode_envelope",
    # Bridge
    "BridgeState",
    "FanoutBridge",
    "IFanoutBridge",
    "ISubscriber",
    "ISubscriberRegistry",
    "QueueSubscriber",
    "SubscriberOverflow",
    "SubscriberRegistry",
    "WebSocketSubscriber",
]
