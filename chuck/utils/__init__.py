from .ansi import (
    Ansi,
    ASSISTANT_LABEL,
    ERROR_LABEL,
    NOTICE_LABEL,
    QUESTION_PROMPT,
    DIRECTIVE_PROMPT,
    console,
)
from .log import init_logger, log_exception
from .spinner import Spinner

__all__ = [
    "Ansi",
    "ASSISTANT_LABEL",
    "ERROR_LABEL",
    "NOTICE_LABEL",
    "QUESTION_PROMPT",
    "DIRECTIVE_PROMPT",
    "console",
    "init_logger",
    "log_exception",
    "Spinner",
]
