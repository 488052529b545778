from .assembler import (
    AssemblyResult,
    CancellationToken,
    StreamAssembler,
    StreamingAnswer,
    StreamState,
)
from .commands import Command, Turn, classify
from .conversation import Conversation, Message, Role
from .history import Direction, TurnHistory
# client module is imported separately, it pulls in the openai SDK.

__all__ = [
    "AssemblyResult",
    "CancellationToken",
    "StreamAssembler",
    "StreamingAnswer",
    "StreamState",
    "Command",
    "Turn",
    "classify",
    "Conversation",
    "Message",
    "Role",
    "Direction",
    "TurnHistory",
]
