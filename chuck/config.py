"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

API_KEY_VAR = "OPENAI_API_KEY"
BASE_URL_VAR = "OPENAI_BASE_URL"
LOG_LEVEL_VAR = "CHUCK_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


class MissingCredentialError(RuntimeError):
    """Raised when no API key is available; the CLI treats it as fatal."""


@dataclass
class Settings:
    api_key: str
    base_url: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        api_key = env.get(API_KEY_VAR, "").strip()
        if not api_key:
            raise MissingCredentialError(f"{API_KEY_VAR} environment variable must be set.")
        return cls(
            api_key=api_key,
            base_url=env.get(BASE_URL_VAR) or None,
            log_level=env.get(LOG_LEVEL_VAR) or DEFAULT_LOG_LEVEL,
        )

    def client_kwargs(self) -> dict:
        kwargs = {"api_key": self.api_key}
        if self.base_url:
            kwargs["base_url"] = self.base_url
        return kwargs
