import json
import logging
import time
from typing import Dict, Any, List, AsyncIterator, Iterable, Optional

from openai import AsyncOpenAI

from .base import BaseLLMClient
from ..exceptions import UnsupportedContentError
from ..streaming import text_delta, input_json_delta
from ..title import TITLE_SYSTEM_PROMPT, TITLE_REQUEST
from ..types import Message, MessageCreateParams, Tool, ToolCall
from ..utils import message_text

logger = logging.getLogger(__name__)


class OpenAICompatibleClient(BaseLLMClient):
    """
    Client for OpenAI-compatible chat completion APIs.

    Only plain string message content is accepted. Tools are translated
    from Anthropic format to OpenAI function declarations.
    """

    provider_name = "openai"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        title_model: str = "gpt-4o-mini",
    ):
        self.client = self._make_client(api_key, base_url)
        self.title_model = title_model

    def _make_client(self, api_key: Optional[str], base_url: Optional[str]):
        return AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def create(
        self,
        params: MessageCreateParams,
        model: str,
    ) -> AsyncIterator[bytes]:
        request_kwargs = self._build_request(params, model)
        logger.debug("Streaming %s request (model=%s)", self.provider_name, model)
        return await self._open_raw_stream(
            self.client.chat.completions.with_streaming_response.create(**request_kwargs, stream=True)
        )

    async def create_non_streaming(
        self,
        params: MessageCreateParams,
        model: str,
    ) -> Dict[str, Any]:
        request_kwargs = self._build_request(params, model)

        start = time.perf_counter()
        resp = await self.client.chat.completions.create(**request_kwargs, stream=False)
        latency_ms = (time.perf_counter() - start) * 1000.0

        choice = resp.choices[0]
        text = choice.message.content or ""
        tool_calls = self._parse_tool_calls(choice)

        usage = None
        if resp.usage:
            usage = self.normalize_usage(
                self.provider_name,
                input_tokens=resp.usage.prompt_tokens,
                output_tokens=resp.usage.completion_tokens,
                total_tokens=resp.usage.total_tokens,
            )

        result = {
            "provider": self.provider_name,
            "text": text,
            "meta": {
                "model": resp.model,
                "usage": usage,
                "latency_ms": latency_ms,
                "finish_reason": choice.finish_reason,
            },
            "raw": resp,
        }
        if tool_calls:
            result["tool_calls"] = tool_calls

        return result

    async def _request_title(self, messages: List[Message]) -> Optional[str]:
        # Images cannot be sent here, so the conversation is reduced to text
        history = [
            {"role": m["role"], "content": message_text(m["content"])}
            for m in messages
        ]
        resp = await self.client.chat.completions.create(
            model=self.title_model,
            messages=[
                {"role": "system", "content": TITLE_SYSTEM_PROMPT},
                *history,
                {"role": "user", "content": TITLE_REQUEST},
            ],
        )
        if not resp.choices:
            return None
        return resp.choices[0].message.content

    def _normalize_event(self, payload: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
        """
        Convert a chat.completion.chunk payload to delta events.

        Text goes to block 0; argument fragments of tool call N go to
        block N + 1. Role-only and usage-only chunks produce nothing.
        """
        if "error" in payload:
            logger.warning("%s stream error: %s", self.provider_name, payload["error"])
            return []

        events = []
        for choice in payload.get("choices") or []:
            delta = choice.get("delta") or {}
            if delta.get("content"):
                events.append(text_delta(delta["content"]))
            for tc in delta.get("tool_calls") or []:
                arguments = (tc.get("function") or {}).get("arguments")
                if arguments:
                    events.append(input_json_delta(arguments, tc.get("index", 0) + 1))
        return events

    def _build_request(self, params: MessageCreateParams, model: str) -> Dict[str, Any]:
        messages = self._convert_messages(params["messages"])
        if params.get("system"):
            messages.insert(0, {"role": "system", "content": params["system"]})

        request_kwargs = {
            "model": model,
            "messages": messages,
        }
        if params.get("max_tokens"):
            request_kwargs["max_tokens"] = params["max_tokens"]
        if params.get("tools"):
            request_kwargs["tools"] = self._convert_tools(params["tools"])
            request_kwargs["tool_choice"] = "auto"
        return request_kwargs

    def _convert_messages(self, messages: List[Message]) -> List[Dict[str, Any]]:
        """
        Convert messages, rejecting anything but string content.

        Raises:
            UnsupportedContentError: If a message carries content blocks.
        """
        converted = []
        for msg in messages:
            if not isinstance(msg["content"], str):
                raise UnsupportedContentError(type(self).__name__)
            converted.append({"role": msg["role"], "content": msg["content"]})
        return converted

    @staticmethod
    def _convert_tools(tools: List[Tool]) -> List[Dict[str, Any]]:
        """
        Convert Anthropic-format tools to OpenAI format.

        OpenAI wraps each declaration in {"type": "function"} and uses
        'parameters' instead of 'input_schema'.
        """
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.get("name", ""),
                    "description": tool.get("description", ""),
                    "parameters": tool.get("input_schema", {"type": "object", "properties": {}}),
                },
            }
            for tool in tools
        ]

    @staticmethod
    def _parse_tool_calls(choice) -> List[ToolCall]:
        """
        Parse tool calls from a response choice.

        Arguments that are not valid JSON are kept under '_raw'.
        """
        tool_calls = []
        if getattr(choice.message, "tool_calls", None):
            for tc in choice.message.tool_calls:
                try:
                    args = json.loads(tc.function.arguments)
                except json.JSONDecodeError:
                    args = {"_raw": tc.function.arguments}
                tool_calls.append({
                    "id": tc.id,
                    "name": tc.function.name,
                    "arguments": args,
                })
        return tool_calls
