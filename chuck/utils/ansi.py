"""Colour and styling helpers built on :mod:`rich`."""

import os
from rich.console import Console


console = Console()


class Ansi:
    """Style names used for the prompt labels and status lines."""

    BOLD = "bold"
    DIM = "dim"

    FG_GREEN = "green"
    FG_CYAN = "cyan"
    FG_MAGENTA = "magenta"
    FG_YELLOW = "yellow"
    FG_RED = "red"

    @staticmethod
    def style(text: str, *codes: str) -> str:
        """Return *text* wrapped in rich markup unless ``NO_COLOR`` is set."""
        if os.getenv("NO_COLOR") is not None:
            return text
        style = " ".join(codes)
        return f"[{style}]{text}[/]"


ASSISTANT_LABEL = Ansi.style("chuck", Ansi.FG_GREEN, Ansi.BOLD)
ERROR_LABEL = Ansi.style("error", Ansi.FG_RED, Ansi.BOLD)
NOTICE_LABEL = Ansi.style("notice", Ansi.FG_YELLOW, Ansi.BOLD)

# Prompt prefixes (plain text, they go to prompt_toolkit rather than rich)
QUESTION_PROMPT = "🤖 "
DIRECTIVE_PROMPT = "⚙️  "
