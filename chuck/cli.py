"""Terminal chat REPL built on top of OpenAI models.

:class:`ChatCLI` is the session controller: it classifies each input line,
applies commands to the :class:`~chuck.core.Conversation` and streams answers
to questions while watching for Ctrl+C.
"""
from __future__ import annotations

import argparse
import logging
import sys
import threading
from dataclasses import dataclass
from typing import List, Optional

from openai import OpenAI  # type: ignore
from prompt_toolkit import PromptSession
from prompt_toolkit.key_binding import KeyBindings
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .config import LOG_LEVEL_VAR, MissingCredentialError, Settings
from .core import (
    Command,
    Conversation,
    Direction,
    StreamAssembler,
    StreamingAnswer,
    StreamState,
    classify,
)
from .core.client import OpenAIClientWrapper
from .utils import (
    Ansi,
    ASSISTANT_LABEL,
    DIRECTIVE_PROMPT,
    ERROR_LABEL,
    NOTICE_LABEL,
    QUESTION_PROMPT,
    Spinner,
    console,
    init_logger,
    log_exception,
)

logger = logging.getLogger(__name__)

# Seconds between redraws of a streaming answer
REFRESH_INTERVAL = 0.1

BANNER = (
    "Hello, I'm Chuck, your OpenAI assistant. Ask me questions, or type:\n"
    "'bye' to exit\n"
    "'ok' to start a new conversation\n"
    "'sys' to set the system message\n"
    "'?' for help"
)


@dataclass
class Reply:
    """What a turn produced: the text shown and whether the session goes on."""

    text: str = ""
    keep_going: bool = True


# ---------------------------------------------------------------------------
# Helper classes
# ---------------------------------------------------------------------------


class ChatCLI:
    """High-level orchestration class for the interactive REPL."""

    def __init__(
        self,
        model: str,
        client_wrapper: OpenAIClientWrapper,
        *,
        stream: bool = True,
        conversation: Optional[Conversation] = None,
    ):
        self.model = model
        self.client = client_wrapper
        self.stream = stream
        self.conversation = conversation if conversation is not None else Conversation()
        self.directive_mode = False
        self.active_assembler: Optional[StreamAssembler] = None
        self._prompt_session: Optional[PromptSession] = None

    # ---------------- Produced interface ----------------

    def navigate_history(self, direction: Direction) -> str:
        return self.conversation.history.navigate(direction)

    def get_state(self) -> List[str]:
        return self.conversation.snapshot_state()

    def submit(self, line: str) -> Reply:
        """Run one turn for *line* and return what it produced."""
        turn = classify(line, self.directive_mode)
        cmd = turn.command
        logger.debug("turn classified as %s", cmd.name)

        if cmd is Command.EMPTY:
            return Reply()

        if cmd is Command.DIRECTIVE_TOGGLE:
            self.directive_mode = True
            return Reply()

        if cmd is Command.HELP:
            from . import __doc__ as _doc  # lazy import to avoid circularity

            text = _doc or "(no help available)"
            console.print(Text(text))
            return Reply(text)

        if cmd is Command.DUMP_STATE:
            lines = self.get_state()
            for entry in lines:
                console.print(Text(entry))
            return Reply("\n".join(lines))

        if cmd is Command.RESET:
            self.conversation.clear()
            self.directive_mode = False
            return self._notice("conversation cleared")

        if cmd is Command.EXIT:
            console.print("Bye!")
            return Reply("Bye!", keep_going=False)

        if cmd is Command.SET_DIRECTIVE:
            self.directive_mode = False
            self.conversation.set_directive(turn.text)
            return self._notice("directive set" if turn.text else "directive cleared")

        if cmd is Command.SET_TEMPERATURE and turn.temperature is not None:
            if self.conversation.set_temperature(turn.temperature):
                return self._notice(f"temperature set to {turn.temperature}")

        return self._ask(turn.text)

    # ---------------- Questions ---------------

    def _ask(self, question: str) -> Reply:
        messages = self.conversation.submit_user(question)
        if self.stream:
            return self._ask_streaming(messages)
        return self._ask_blocking(messages)

    def _ask_blocking(self, messages) -> Reply:
        try:
            with Spinner(prefix=f"{ASSISTANT_LABEL}> "):
                answer = self.client.complete(
                    self.model, messages, temperature=self.conversation.temperature
                )
        except KeyboardInterrupt:
            logger.info("answer cancelled by user")
            console.print()
            console.print(NOTICE_LABEL, Text("answer interrupted"))
            return Reply()
        except Exception as exc:  # openai.OpenAIError or a malformed response
            log_exception(exc, "completion failed")
            console.print(ERROR_LABEL, Text(str(exc)))
            return Reply(str(exc))

        console.print(Text(answer))
        self.conversation.complete_assistant(answer)
        return Reply(answer)

    def _ask_streaming(self, messages) -> Reply:
        assembler = StreamAssembler(self.client)
        self.active_assembler = assembler
        worker = threading.Thread(
            target=assembler.run,
            args=(self.model, messages, self.conversation.temperature),
            name="chuck-stream",
            daemon=True,
        )

        with Live(
            self._render_partial(StreamingAnswer()),
            console=console,
            auto_refresh=False,
            transient=True,
        ) as live:
            worker.start()
            try:
                while worker.is_alive():
                    live.update(self._render_partial(assembler.snapshot()), refresh=True)
                    worker.join(REFRESH_INTERVAL)
            except KeyboardInterrupt:
                assembler.cancel()
                logger.info("answer cancelled by user")
        self.active_assembler = None

        # No chunk is fed once cancel() returns, so the text is final even if the
        # worker has not finished yet. An answer that completed before Ctrl+C
        # keeps its own state.
        result = assembler.result()
        text, state, error = result.text, result.state, result.error
        if state is StreamState.STREAMING:
            state = StreamState.CANCELLED

        console.print(Text(text))
        if state is StreamState.CANCELLED:
            console.print(NOTICE_LABEL, Text("answer interrupted"))
        elif state is StreamState.FAILED:
            console.print(ERROR_LABEL, Text(str(error)))

        self.conversation.complete_assistant(text)
        return Reply(text)

    @staticmethod
    def _render_partial(answer: StreamingAnswer) -> Text:
        return Text("\n".join(answer.visible_lines()))

    @staticmethod
    def _notice(message: str) -> Reply:
        console.print(NOTICE_LABEL, Text(message))
        return Reply(message)

    # ---------------- Interaction loop ---------------

    def _key_bindings(self) -> KeyBindings:
        bindings = KeyBindings()

        def _prefill(buffer, text: str) -> None:
            buffer.text = text
            buffer.cursor_position = len(text)

        @bindings.add("up")
        def _older(event) -> None:
            _prefill(event.current_buffer, self.navigate_history(Direction.OLDER))

        @bindings.add("down")
        def _newer(event) -> None:
            _prefill(event.current_buffer, self.navigate_history(Direction.NEWER))

        return bindings

    def _read_line(self) -> str:
        if self._prompt_session is None:
            self._prompt_session = PromptSession(key_bindings=self._key_bindings())
        prefix = DIRECTIVE_PROMPT if self.directive_mode else QUESTION_PROMPT
        return self._prompt_session.prompt(prefix)

    def repl(self) -> None:
        """Run the interactive read–eval–print-loop."""
        console.print(Panel.fit(f"Chuck ({self.model})", style="bold magenta"))
        console.print(Ansi.style(BANNER, Ansi.FG_YELLOW))

        while True:
            try:
                line = self._read_line()
            except (EOFError, KeyboardInterrupt):
                console.print("\nBye!")
                break

            if not self.submit(line).keep_going:
                break


# ---------------------------------------------------------------------------
# Entrypoint helpers (keeping it separate simplifies __main__ handling)
# ---------------------------------------------------------------------------

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="chuck",
        description="Interactive terminal chat with an OpenAI model.",
    )
    parser.add_argument("model", help="Model id to use (gpt-4o, gpt-4.1-mini, etc.)")
    parser.add_argument(
        "--no-stream",
        action="store_true",
        help="Wait for each answer in full instead of streaming it",
    )
    parser.add_argument(
        "--log-level",
        help=f"Log level for the log file (default: ${LOG_LEVEL_VAR} or WARNING)",
    )
    return parser.parse_args(argv)


def run_cli(argv: Optional[List[str]] = None) -> None:  # pragma: no cover
    args = _parse_args(argv)

    try:
        settings = Settings.from_env()
    except MissingCredentialError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        sys.exit(1)

    log_path = init_logger(args.log_level or settings.log_level)
    logger.info("session started: model=%s stream=%s log=%s", args.model, not args.no_stream, log_path)

    client = OpenAI(**settings.client_kwargs())  # type: ignore[arg-type]
    wrapper = OpenAIClientWrapper(client)

    ChatCLI(args.model, wrapper, stream=not args.no_stream).repl()


if __name__ == "__main__":  # pragma: no cover
    run_cli()
