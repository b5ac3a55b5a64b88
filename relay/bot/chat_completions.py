"""
Streaming client for the OpenAI chat completions API.

Each call posts the full conversation with `stream: true` and yields content
tokens as soon as the StreamDecoder extracts them from the response body.
"""

import logging
from typing import AsyncIterator, Callable, List, Optional

import httpx

from relay.bot.exceptions import (
    BackendStatusError,
    BackendTransportError,
    MissingCredentialError,
)
from relay.bot.stream_decoder import StreamDecoder
from relay.config import settings
from relay.config.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LOGGER_NAME
from relay.models.openai_schemas import ChatCompletionRequest, OpenAIMessage

logger = logging.getLogger(LOGGER_NAME)

ApiKeyProvider = Callable[[], Optional[str]]


class ChatCompletionClient:
    """
    Client issuing streaming chat completion requests.

    The client owns an httpx.AsyncClient unless one is passed in; call close()
    (or use it as an async context manager) when the session ends.
    """

    def __init__(
        self,
        api_key_provider: Optional[ApiKeyProvider] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key_provider = api_key_provider
        self.model = model or settings.get_chat_model()
        self.base_url = (base_url or settings.get_openai_base_url()).rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.get_request_timeout()
        )
        logger.info(f"ChatCompletionClient initialized with model: {self.model}")

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def build_request(self, messages: List[OpenAIMessage]) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    async def stream_reply(self, messages: List[OpenAIMessage]) -> AsyncIterator[str]:
        """
        Stream the assistant reply to a conversation.

        Args:
            messages: The full conversation, system turn first

        Yields:
            Content tokens in the order the backend produced them

        Raises:
            MissingCredentialError: If no API key is configured
            BackendStatusError: If the backend answers with a non-2xx status
            BackendTransportError: If the request fails or the stream breaks
        """
        api_key = (self.api_key_provider or settings.get_openai_api_key)()
        if not api_key:
            logger.error("OPENAI_API_KEY not configured")
            raise MissingCredentialError()

        body = self.build_request(messages).model_dump(mode="json")
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"Making OpenAI API call with model {self.model}")
        decoder = StreamDecoder()
        try:
            async with self._http_client.stream(
                "POST", self.completions_url, json=body, headers=headers
            ) as response:
                if not response.is_success:
                    error_body = (await response.aread()).decode("utf-8", errors="replace")
                    logger.error(
                        f"OpenAI API error: {response.status_code} {response.reason_phrase}"
                    )
                    logger.error(f"OpenAI API error body: {error_body}")
                    raise BackendStatusError(response.status_code, error_body)

                logger.debug("Starting to process OpenAI streaming response")
                async for chunk in response.aiter_bytes():
                    for token in decoder.feed(chunk):
                        yield token
                decoder.finish()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"OpenAI request failed: {e}")
            raise BackendTransportError(f"OpenAI request failed: {e.__class__.__name__}") from e

        if decoder.skipped_lines:
            logger.warning(f"Skipped {decoder.skipped_lines} malformed stream records")

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "ChatCompletionClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
