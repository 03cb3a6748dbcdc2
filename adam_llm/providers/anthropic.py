import logging
import time
from typing import Dict, Any, List, AsyncIterator, Optional, Tuple

from anthropic import AsyncAnthropic

from .base import BaseLLMClient, DEFAULT_MAX_TOKENS
from ..title import TITLE_SYSTEM_PROMPT, TITLE_REQUEST
from ..types import Message, MessageCreateParams, ToolCall
from ..utils import message_text

logger = logging.getLogger(__name__)


class AnthropicClient(BaseLLMClient):
    """
    Client for the Anthropic (Claude) Messages API.

    The canonical request shape is Anthropic's own, so messages and tools are
    forwarded as-is; only system messages are lifted into the `system`
    parameter. Stream events already follow the delta shape and pass through
    `parse_stream` unchanged.
    """

    provider_name = "anthropic"

    def __init__(self, api_key: str, title_model: str = "claude-3-haiku-20240307"):
        self.client = AsyncAnthropic(api_key=api_key)
        self.title_model = title_model

    async def create(
        self,
        params: MessageCreateParams,
        model: str,
    ) -> AsyncIterator[bytes]:
        request_kwargs = self._build_request(params, model)
        logger.debug("Streaming Anthropic request (model=%s)", model)
        return await self._open_raw_stream(
            self.client.messages.with_streaming_response.create(**request_kwargs, stream=True)
        )

    async def create_non_streaming(
        self,
        params: MessageCreateParams,
        model: str,
    ) -> Dict[str, Any]:
        request_kwargs = self._build_request(params, model)

        start = time.perf_counter()
        resp = await self.client.messages.create(**request_kwargs, stream=False)
        latency_ms = (time.perf_counter() - start) * 1000.0

        text = "".join(
            block.text for block in resp.content if getattr(block, "type", None) == "text"
        )
        tool_calls = self._parse_tool_calls(resp)

        usage = None
        if resp.usage:
            usage = self.normalize_usage(
                self.provider_name,
                input_tokens=resp.usage.input_tokens,
                output_tokens=resp.usage.output_tokens,
                total_tokens=None,
            )

        result = {
            "provider": self.provider_name,
            "text": text,
            "meta": {
                "model": resp.model,
                "usage": usage,
                "latency_ms": latency_ms,
                "stop_reason": resp.stop_reason,
            },
            "raw": resp,
        }
        if tool_calls:
            result["tool_calls"] = tool_calls

        return result

    async def _request_title(self, messages: List[Message]) -> Optional[str]:
        system_text, converted = self._convert_messages(messages)
        system = TITLE_SYSTEM_PROMPT
        if system_text:
            system = f"{TITLE_SYSTEM_PROMPT}\n\n{system_text}"

        resp = await self.client.messages.create(
            model=self.title_model,
            max_tokens=100,
            system=system,
            messages=[*converted, {"role": "user", "content": TITLE_REQUEST}],
        )

        if resp.content:
            last = resp.content[-1]
            if getattr(last, "type", None) == "text":
                return last.text
        return None

    def _build_request(self, params: MessageCreateParams, model: str) -> Dict[str, Any]:
        system_text, converted = self._convert_messages(params["messages"])
        if params.get("system"):
            system_text = "\n\n".join(filter(None, [params["system"], system_text]))

        request_kwargs = {
            "model": model,
            "messages": converted,
            "max_tokens": params.get("max_tokens", DEFAULT_MAX_TOKENS),
        }
        if system_text:
            request_kwargs["system"] = system_text
        if params.get("tools"):
            request_kwargs["tools"] = params["tools"]
        return request_kwargs

    @staticmethod
    def _convert_messages(
        messages: List[Message],
    ) -> Tuple[Optional[str], List[Dict[str, Any]]]:
        """
        Split system messages out of the conversation.

        The Messages API takes the system prompt as a separate top-level
        parameter, not as a message.

        Returns:
            Tuple containing:
            - system_text: Joined system prompt (or None)
            - converted: user/assistant messages
        """
        system_parts = []
        converted = []
        for msg in messages:
            if msg["role"] == "system":
                system_parts.append(message_text(msg["content"], "\n"))
                continue
            converted.append({"role": msg["role"], "content": msg["content"]})

        system_text = "\n\n".join(system_parts) if system_parts else None
        return system_text, converted

    @staticmethod
    def _parse_tool_calls(response) -> List[ToolCall]:
        tool_calls = []
        for block in response.content:
            if getattr(block, "type", None) == "tool_use":
                tool_calls.append({
                    "id": block.id,
                    "name": block.name,
                    "arguments": block.input,
                })
        return tool_calls
