import logging
from abc import ABC, abstractmethod
from contextlib import AsyncExitStack
from typing import (
    Dict, Any, List, AsyncContextManager, AsyncIterable, AsyncIterator, Iterable, Optional
)

from ..streaming import iter_sse_events
from ..title import DEFAULT_TITLE, finalize_title
from ..types import Message, MessageCreateParams

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 1024


class BaseLLMClient(ABC):
    """
    Abstract base class for provider clients.

    Every client exposes the same four operations: `create` (streamed),
    `create_non_streaming`, `generate_title` and `parse_stream`.
    """

    provider_name: str = "base"

    @abstractmethod
    async def create(
        self,
        params: MessageCreateParams,
        model: str,
    ) -> AsyncIterator[Any]:
        """
        Start a streamed completion.

        Args:
            params (MessageCreateParams): Messages, tools and max_tokens.
            model (str): Provider model name.

        Returns:
            AsyncIterator[Any]: The provider stream, suitable for `parse_stream`.
        """
        pass

    @abstractmethod
    async def create_non_streaming(
        self,
        params: MessageCreateParams,
        model: str,
    ) -> Dict[str, Any]:
        """
        Request a single, complete response.

        Args:
            params (MessageCreateParams): Messages, tools and max_tokens.
            model (str): Provider model name.

        Returns:
            Dict[str, Any]: Standardized response with 'provider', 'text',
            'meta', 'raw' and optionally 'tool_calls'.
        """
        pass

    @abstractmethod
    async def _request_title(self, messages: List[Message]) -> Optional[str]:
        """Ask the provider for a title and return its raw text."""
        pass

    async def generate_title(self, messages: List[Message]) -> str:
        """
        Summarize the conversation into a short object title.

        Never raises: failures are logged and replaced by DEFAULT_TITLE.

        Args:
            messages (List[Message]): Conversation history.

        Returns:
            str: A title of at most 60 characters.
        """
        try:
            raw = await self._request_title(messages)
        except Exception:
            logger.exception("Error generating object title (%s)", self.provider_name)
            return DEFAULT_TITLE
        return finalize_title(raw)

    async def parse_stream(
        self,
        stream: AsyncIterable[Any],
    ) -> AsyncIterator[Dict[str, Any]]:
        """
        Normalize a raw SSE stream returned by `create`.

        The stream is closed once parsing ends, including at `[DONE]`, which
        releases the underlying HTTP response.

        Args:
            stream (AsyncIterable): Raw byte chunks.

        Yields:
            Dict[str, Any]: Delta events.
        """
        try:
            async for payload in iter_sse_events(stream):
                for event in self._normalize_event(payload):
                    yield event
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

    async def _open_raw_stream(
        self,
        response_cm: AsyncContextManager[Any],
    ) -> AsyncIterator[bytes]:
        """
        Enter an SDK streaming-response context and expose its body bytes.

        The request is sent here, so SDK errors surface from `create`. The
        response stays open until the returned iterator is exhausted or closed.
        """
        stack = AsyncExitStack()
        response = await stack.enter_async_context(response_cm)
        return self._iter_response_bytes(stack, response)

    @staticmethod
    async def _iter_response_bytes(stack: AsyncExitStack, response: Any) -> AsyncIterator[bytes]:
        async with stack:
            async for chunk in response.iter_bytes():
                yield chunk

    def _normalize_event(self, payload: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
        """Map one parsed provider payload to zero or more delta events."""
        return [payload]

    @staticmethod
    def normalize_usage(
        provider: str,
        *,
        input_tokens: Optional[int],
        output_tokens: Optional[int],
        total_tokens: Optional[int],
    ) -> Dict[str, Any]:
        """
        Normalize token usage information across providers.

        Args:
            provider (str): Name of the provider.
            input_tokens (int, optional): Number of prompt tokens.
            output_tokens (int, optional): Number of generated tokens.
            total_tokens (int, optional): Total token count.

        Returns:
            Dict[str, Any]: Standardized usage dictionary.
        """
        # Calculate total if not provided
        if total_tokens is None and input_tokens is not None and output_tokens is not None:
            total_tokens = input_tokens + output_tokens

        return {
            "provider": provider,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": total_tokens,
        }
