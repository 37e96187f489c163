"""Event-driven engine: versioned state, pure handlers, asyncio runtime."""

from hintplane.engine.handlers import EventHandler
from hintplane.engine.protocol import decode_message, encode_event, encode_event_json
from hintplane.engine.runtime import Engine
from hintplane.engine.state import EngineState, Transition

__all__ = [
    "Engine",
    "EngineState",
    "EventHandler",
    "Transition",
    "decode_message",
    "encode_event",
    "encode_event_json",
]
