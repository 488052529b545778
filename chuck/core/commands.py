"""Classification of a line of input into the kind of turn it starts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .conversation import MAX_TEMPERATURE, MIN_TEMPERATURE

DIRECTIVE_TOGGLE = "sys"
HELP_TOKEN = "?"
STATE_TOKEN = "??"
RESET_WORDS = ("ok", "reset", "new")
EXIT_WORDS = ("bye", "exit", "quit", "q")
TEMPERATURE_PREFIX = "@"
TEMPERATURE_WIDTH = 3


class Command(Enum):
    EMPTY = auto()
    DIRECTIVE_TOGGLE = auto()
    HELP = auto()
    DUMP_STATE = auto()
    RESET = auto()
    EXIT = auto()
    SET_DIRECTIVE = auto()
    SET_TEMPERATURE = auto()
    QUESTION = auto()


@dataclass(frozen=True)
class Turn:
    command: Command
    text: str = ""
    temperature: Optional[float] = None


def parse_temperature(line: str) -> Optional[float]:
    """Return the value of an ``@X.X`` token, or None if *line* is not one.

    The token must be the whole line: ``@`` followed by exactly three
    characters that parse as a number within the accepted range.
    """
    if not line.startswith(TEMPERATURE_PREFIX):
        return None
    digits = line[len(TEMPERATURE_PREFIX):]
    if len(digits) != TEMPERATURE_WIDTH:
        return None
    try:
        value = float(digits)
    except ValueError:
        return None
    if not MIN_TEMPERATURE <= value <= MAX_TEMPERATURE:
        return None
    return value


def classify(line: str, directive_mode: bool = False) -> Turn:
    """Decide what *line* means, in the priority order the prompt documents."""
    text = line.strip()
    word = text.lower()

    if word == DIRECTIVE_TOGGLE:
        return Turn(Command.DIRECTIVE_TOGGLE)
    if word == HELP_TOKEN:
        return Turn(Command.HELP)
    if word == STATE_TOKEN:
        return Turn(Command.DUMP_STATE)
    if word in RESET_WORDS:
        return Turn(Command.RESET)
    if word in EXIT_WORDS:
        return Turn(Command.EXIT)
    if directive_mode:
        return Turn(Command.SET_DIRECTIVE, text)

    temperature = parse_temperature(text)
    if temperature is not None:
        return Turn(Command.SET_TEMPERATURE, text, temperature)
    if not text:
        return Turn(Command.EMPTY)
    return Turn(Command.QUESTION, text)
