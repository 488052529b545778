"""Navigable history of the questions and directives entered in a session."""

from __future__ import annotations

from enum import Enum
from typing import List


class Direction(Enum):
    """Which way the Up/Down keys move through the history."""

    OLDER = "older"
    NEWER = "newer"


class TurnHistory:
    """Most-recent-first log of submitted texts with a shared cursor.

    The cursor starts "before start" (``-1``) and is never reset between
    turns, so consecutive navigation calls compose across questions.
    """

    BEFORE_START = -1

    def __init__(self) -> None:
        self._entries: List[str] = []
        self.index = self.BEFORE_START

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def push(self, text: str) -> None:
        self._entries.insert(0, text)

    def navigate(self, direction: Direction) -> str:
        """Move the cursor one step and return the text to prefill the input with."""
        if not self._entries:
            return ""

        if direction is Direction.OLDER:
            self.index = min(self.index + 1, len(self._entries) - 1)
        else:
            self.index = max(self.index - 1, self.BEFORE_START)
            if self.index == self.BEFORE_START:
                return ""
        return self._entries[self.index]
