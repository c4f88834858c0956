"""
Chat transport for repair re-prompts.

``OpenRouterChatTransport.send_chat(messages)`` posts an OpenAI-style
chat-completions request and returns the assistant's text. Any failure
raises ``TransportError`` with enough context to diagnose it from logs.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import PipelineConfig
from ..core.log import preview
from .provider import get_provider_settings

logger = logging.getLogger(__name__)

Message = Dict[str, str]


class TransportError(Exception):
    """
    Raised when a chat request fails.

    Attributes:
        http_status: HTTP status code (``None`` if no response arrived).
        response_body: First 2000 characters of the raw response body.
        stage: Which step failed ("http_request", "http_status",
            "response_json_decode", "response_shape").
    """

    def __init__(
        self,
        message: str,
        *,
        http_status: Optional[int] = None,
        response_body: Optional[str] = None,
        stage: str = "",
    ) -> None:
        self.http_status = http_status
        self.response_body = response_body[:2000] if response_body else None
        self.stage = stage

        detail_parts = [message]
        if http_status is not None:
            detail_parts.append(f"HTTP status: {http_status}")
        if self.response_body:
            detail_parts.append(f"Response body: {self.response_body}")
        if stage:
            detail_parts.append(f"Stage: {stage}")
        super().__init__(" | ".join(detail_parts))


class OpenRouterChatTransport:
    """
    Async chat-completions client.

    Args:
        config: Model, sampling and timeout settings.
        client: Optional shared ``httpx.AsyncClient``. When omitted a client
            is opened per request.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or PipelineConfig()
        self._client = client

    def _payload(self, messages: List[Message]) -> Dict[str, Any]:
        return {
            "model": self.config.llm_model,
            "messages": messages,
            "temperature": self.config.llm_temperature,
            "max_tokens": self.config.llm_max_tokens,
        }

    async def send_chat(self, messages: List[Message]) -> str:
        """Send ``messages`` and return the first choice's content."""
        if self._client is not None:
            return await self._post(self._client, messages)
        async with httpx.AsyncClient(timeout=self.config.llm_timeout) as client:
            return await self._post(client, messages)

    async def _post(self, client: httpx.AsyncClient, messages: List[Message]) -> str:
        settings = get_provider_settings()
        logger.debug(f"POST {settings.chat_url} ({len(messages)} messages)")

        try:
            response = await client.post(
                settings.chat_url, json=self._payload(messages), headers=settings.headers
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Chat request timed out after {self.config.llm_timeout}s: {exc}",
                stage="http_request",
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Chat request failed: {exc}", stage="http_request") from exc

        if response.status_code != 200:
            raise TransportError(
                f"Chat endpoint returned non-200 status {response.status_code}",
                http_status=response.status_code,
                response_body=response.text,
                stage="http_status",
            )

        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise TransportError(
                f"Failed to decode chat response as JSON: {exc}",
                http_status=response.status_code,
                response_body=response.text,
                stage="response_json_decode",
            ) from exc

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise TransportError(
                f"Unexpected chat response structure: {exc}",
                http_status=response.status_code,
                response_body=preview(response.text),
                stage="response_shape",
            ) from exc

        if not isinstance(content, str):
            raise TransportError(
                f"Chat response content is {type(content).__name__}, expected str",
                http_status=response.status_code,
                response_body=preview(response.text),
                stage="response_shape",
            )
        return content
