"""Fan-out bridge module."""

from .bridge import BridgeState, FanoutBridge, IFanoutBridge
from .registry import ISubscriberRegistry, SubscriberRegistry
from .subscribers import ISubscriber, QueueSubscriber, SubscriberOverflow, WebSocketSubscriber

__all__ = [
    "BridgeState",
    "FanoutBridge",
    "IFanoutBridge",
    "ISubscriberRegistry",
    "SubscriberRegistry",
    "ISubscriber",
    "QueueSubscriber",
    "SubscriberOverflow",
    "WebSocketSubscriber",
]
