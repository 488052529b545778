"""Spinner shown next to the assistant label while a blocking call runs."""
from __future__ import annotations

from yaspin import yaspin  # type: ignore

from .ansi import console


class Spinner:
    """Display a small spinner after *prefix* until :meth:`stop` is called."""

    def __init__(self, prefix: str = ""):
        self._prefix = prefix
        self._started = False
        # spinner after the text so prefix stays at the start
        self._spinner = yaspin(text="", side="right")

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def start(self) -> None:
        if self._started:
            return
        console.print(self._prefix, end="")
        console.file.flush()
        self._spinner.start()
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self._spinner.stop()
        console.print(f"\r{self._prefix}", end="")
        console.file.flush()
        self._started = False
