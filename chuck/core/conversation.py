"""Conversation state: transcript, optional directive and temperature."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from .history import TurnHistory

logger = logging.getLogger(__name__)

# Prefixes used when the state is dumped with `??`
TEMPERATURE_PREFIX = "🌡️  "
DIRECTIVE_PREFIX = "⚙️  "

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        """Return the message in the shape the chat completions API expects."""
        return {"role": self.role.value, "content": self.content}


class Conversation:
    """Running exchange with the model.

    The directive lives outside the transcript and is only prepended when the
    outbound message list is built, so the transcript never holds more than
    the user/assistant turns. The turn history is shared with the session and
    survives :meth:`clear`.
    """

    def __init__(self, history: Optional[TurnHistory] = None) -> None:
        self.history = history if history is not None else TurnHistory()
        self.transcript: List[Message] = []
        self.directive: Optional[Message] = None
        self.temperature: Optional[float] = None

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def submit_user(self, text: str) -> List[Dict[str, str]]:
        """Record a question and return the messages to send to the provider."""
        self.transcript.append(Message(Role.USER, text))
        self.history.push(text)
        return self.outbound_messages()

    def complete_assistant(self, text: Optional[str]) -> None:
        if not text:
            return
        self.transcript.append(Message(Role.ASSISTANT, text))

    def outbound_messages(self) -> List[Dict[str, str]]:
        messages = [m.to_dict() for m in self.transcript]
        if self.directive is not None:
            messages.insert(0, self.directive.to_dict())
        return messages

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_directive(self, text: str) -> None:
        if not text:
            self.directive = None
            logger.debug("directive cleared")
            return
        self.history.push(text)
        self.directive = Message(Role.SYSTEM, text)
        logger.debug("directive set (%d chars)", len(text))

    def set_temperature(self, value: Union[float, str]) -> bool:
        """Set the sampling temperature; return False when *value* is unparsable or out of range."""
        try:
            value = float(value)
        except (TypeError, ValueError):
            return False
        if not MIN_TEMPERATURE <= value <= MAX_TEMPERATURE:
            return False
        self.temperature = value
        logger.debug("temperature set to %s", value)
        return True

    def clear(self) -> None:
        # Rebind rather than mutate so no half-cleared state is ever visible.
        self.transcript, self.directive, self.temperature = [], None, None
        logger.debug("conversation cleared")

    def snapshot_state(self) -> List[str]:
        lines: List[str] = []
        if self.temperature is not None:
            lines.append(f"{TEMPERATURE_PREFIX}{self.temperature}")
        if self.directive is not None:
            lines.append(f"{DIRECTIVE_PREFIX}{self.directive.content}")
        lines.extend(m.content for m in self.transcript if m.role is not Role.ASSISTANT)
        return lines
