"""Client for the OpenRouter chat-completion endpoint."""

import logging
from typing import Any

import httpx

from .config import Settings, get_settings
from .errors import (
    EmptyResponseError,
    MissingCredentialError,
    RateLimitedError,
    TransportError,
    UnauthorizedError,
)
from .prompts import build_analysis_prompt, build_enhancement_prompt, extract_code_block

logger = logging.getLogger(__name__)


class OpenRouterClient:
    """HTTP client that asks a chat-completion model to review or improve a file.

    Each call makes exactly one POST. Failures are raised as
    ``RemoteAnalysisError`` subclasses; retrying or falling back is up to
    the caller.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            settings: Endpoint settings. Defaults to the process-wide settings.
            transport: Optional httpx transport, mainly for tests.
        """
        self.settings = settings or get_settings()
        self._transport = transport

    def _headers(self, credential: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.site_url,
            "X-Title": self.settings.app_title,
        }

    def _payload(self, prompt: str, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
        }

    async def request_analysis(
        self,
        content: str,
        language_hint: str | None,
        model: str,
        credential: str | None,
    ) -> str:
        """Send the file to the model and return its raw reply text.

        Args:
            content: Decoded source text.
            language_hint: File extension used to label the code block.
            model: OpenRouter model identifier.
            credential: OpenRouter API key.

        Returns:
            The message content of the first choice, unmodified.

        Raises:
            MissingCredentialError: If no API key was given.
            UnauthorizedError: On HTTP 401.
            RateLimitedError: On HTTP 429.
            TransportError: On any other non-2xx status or network failure.
            EmptyResponseError: If a 2xx reply carries no message content.
        """
        logger.info(f"Analyzing code using model: {model}")
        return await self._complete(build_analysis_prompt(content, language_hint), model, credential)

    async def enhance_code(self, content: str, model: str, credential: str | None) -> str:
        """Ask the model for an improved version of the file.

        The reply's first fenced code block is returned; a reply without one
        is returned whole. Raises the same errors as ``request_analysis``.
        """
        logger.info(f"Enhancing code using model: {model}")
        raw_text = await self._complete(build_enhancement_prompt(content), model, credential)
        return extract_code_block(raw_text)

    async def _complete(self, prompt: str, model: str, credential: str | None) -> str:
        if not credential:
            raise MissingCredentialError("OpenRouter API key is not configured")

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.settings.api_url,
                    json=self._payload(prompt, model),
                    headers=self._headers(credential),
                )
        except httpx.HTTPError as e:
            logger.error(f"OpenRouter request failed: {e!r}")
            raise TransportError(f"OpenRouter request failed: {e}") from e

        if not response.is_success:
            self._raise_for_status(response)

        return self._extract_content(response)

    def _raise_for_status(self, response: httpx.Response) -> None:
        try:
            error_data = response.json()
        except ValueError:
            error_data = {}
        logger.error(
            "OpenRouter API error status: %s %s, details: %s",
            response.status_code,
            response.reason_phrase,
            error_data,
        )

        if response.status_code == 401:
            raise UnauthorizedError(
                "OpenRouter API authentication failed. Check if your API key is valid and correctly configured."
            )
        if response.status_code == 429:
            raise RateLimitedError("Rate limit reached for the selected model")

        detail = None
        if isinstance(error_data, dict) and isinstance(error_data.get("error"), dict):
            detail = error_data["error"].get("message")
        raise TransportError(
            f"OpenRouter API error: {detail or response.reason_phrase}",
            status_code=response.status_code,
        )

    def _extract_content(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError as e:
            raise EmptyResponseError("OpenRouter returned a non-JSON body") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Could not extract analysis from OpenRouter response: {data}")
            raise EmptyResponseError("OpenRouter response has no message content") from e

        if not isinstance(content, str) or not content.strip():
            raise EmptyResponseError("OpenRouter response has empty message content")

        return content
