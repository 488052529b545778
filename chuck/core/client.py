"""OpenAI client wrapper exposing blocking and streaming chat completions."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from openai import OpenAI  # type: ignore

logger = logging.getLogger(__name__)


class OpenAIClientWrapper:
    """Thin wrapper around the OpenAI Python SDK hiding request details."""

    def __init__(self, client: OpenAI):
        self.client = client

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    @staticmethod
    def _request_params(
        model: str,
        messages: List[Dict[str, Any]],
        temperature: Optional[float],
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"model": model, "messages": messages}
        # Leaving the parameter out lets the provider apply its own default.
        if temperature is not None:
            params["temperature"] = temperature
        return params

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def complete(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: Optional[float] = None,
    ) -> str:
        """Return the full answer in one call; an empty string if there is none.

        Errors raised by the SDK (``openai.OpenAIError``) propagate to the caller.
        """
        params = self._request_params(model, messages, temperature)
        logger.debug("chat completion: model=%s messages=%d", model, len(messages))
        completion = self.client.chat.completions.create(**params)  # type: ignore[arg-type]
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    def stream(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: Optional[float] = None,
    ) -> "ChatStream":
        """Open a streamed completion; iterate the result for content fragments."""
        params = self._request_params(model, messages, temperature)
        params["stream"] = True
        logger.debug("streamed completion: model=%s messages=%d", model, len(messages))
        response = self.client.chat.completions.create(**params)  # type: ignore[arg-type]
        return ChatStream(response)


class ChatStream:
    """Content fragments of one streamed completion.

    :meth:`close` releases the HTTP response and may be called from any
    thread, including while another thread is blocked reading the stream.
    """

    def __init__(self, response: Any):
        self._response = response
        self._closed = False

    def __iter__(self) -> Iterator[str]:
        try:
            for chunk in self._response:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                if not delta.content:
                    continue
                yield delta.content
        finally:
            self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._response, "close", None)
        if close is not None:
            close()
