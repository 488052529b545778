"""Chuck: chat with an OpenAI model from the terminal.

Type a question and press Enter; the answer is printed as it is generated.
Press Ctrl+C while an answer is streaming to stop it. The part received so
far is kept in the conversation.

Usage
-----
    chuck MODEL [--no-stream] [--log-level LEVEL]

Commands (enter them as a line at the prompt):

    ?                     show this help
    ??                    show the temperature, directive and questions so far
    sys                   the next line becomes the system directive
                          (an empty line removes it)
    @X.X                  set the sampling temperature, 0.0 to 2.0 (e.g. @0.7)
    ok | reset | new      start a new conversation
    bye | exit | quit | q leave

Up and Down recall earlier questions and directives.

Environment variables
---------------------
* OPENAI_API_KEY – your OpenAI API key (required)
* OPENAI_BASE_URL – custom base URL (optional, for self-hosting/proxy)
* CHUCK_LOG_LEVEL – level for the log file (optional, default WARNING)
* NO_COLOR – disable colours
"""
# Re-export useful symbols for convenience
from .core import Conversation, TurnHistory, StreamAssembler
from .core.client import OpenAIClientWrapper
from .cli import ChatCLI, Reply, run_cli

__all__ = [
    "Conversation",
    "TurnHistory",
    "StreamAssembler",
    "OpenAIClientWrapper",
    "ChatCLI",
    "Reply",
    "run_cli",
]
