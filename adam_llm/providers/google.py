import asyncio
import logging
import time
from typing import Dict, Any, List, AsyncIterable, AsyncIterator, Optional, Tuple

import httpx
from google import genai
from google.genai import types

from .base import BaseLLMClient, DEFAULT_MAX_TOKENS
from ..streaming import text_delta
from ..title import TITLE_SYSTEM_PROMPT, TITLE_REQUEST
from ..types import ContentBlock, Message, MessageCreateParams, Tool
from ..utils import message_text, resolve_image_block

logger = logging.getLogger(__name__)

SAFETY_SETTINGS = [
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        threshold=types.HarmBlockThreshold.BLOCK_ONLY_HIGH,
    ),
]


class GoogleClient(BaseLLMClient):
    """
    Client for Google Gemini (google-genai SDK).

    Image blocks are downloaded and attached as inline data; every fetch of
    a request runs concurrently. Streams are the SDK's native async
    iterators rather than raw SSE.
    """

    provider_name = "google"

    def __init__(self, api_key: str, title_model: str = "gemini-2.0-flash"):
        self.api_key = api_key
        self.title_model = title_model
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        """SDK client, built on first use; genai rejects a missing key at construction."""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def create(
        self,
        params: MessageCreateParams,
        model: str,
    ) -> AsyncIterator[types.GenerateContentResponse]:
        contents, config = await self._build_request(params)
        logger.debug("Streaming Google request (model=%s)", model)
        return await self.client.aio.models.generate_content_stream(
            model=model,
            contents=contents,
            config=config,
        )

    async def create_non_streaming(
        self,
        params: MessageCreateParams,
        model: str,
    ) -> Dict[str, Any]:
        contents, config = await self._build_request(params)

        start = time.perf_counter()
        resp = await self.client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )
        latency_ms = (time.perf_counter() - start) * 1000.0

        try:
            text = resp.text or ""
        except ValueError:
            text = ""

        # Gemini doesn't always provide call IDs
        tool_calls = []
        if resp.candidates and resp.candidates[0].content and resp.candidates[0].content.parts:
            for part in resp.candidates[0].content.parts:
                if part.function_call:
                    fc = part.function_call
                    tool_calls.append({
                        "id": fc.id or f"google_{fc.name}_{len(tool_calls)}",
                        "name": fc.name,
                        "arguments": fc.args or {},
                    })

        usage = None
        if resp.usage_metadata:
            um = resp.usage_metadata
            usage = self.normalize_usage(
                self.provider_name,
                input_tokens=um.prompt_token_count,
                output_tokens=um.candidates_token_count,
                total_tokens=um.total_token_count,
            )

        finish_reason = resp.candidates[0].finish_reason if resp.candidates else None

        result = {
            "provider": self.provider_name,
            "text": text,
            "meta": {
                "model": model,
                "usage": usage,
                "latency_ms": latency_ms,
                "finish_reason": finish_reason,
            },
            "raw": resp,
        }
        if tool_calls:
            result["tool_calls"] = tool_calls

        return result

    async def parse_stream(
        self,
        stream: AsyncIterable[types.GenerateContentResponse],
    ) -> AsyncIterator[Dict[str, Any]]:
        """Turn native Gemini chunks into text delta events."""
        async for chunk in stream:
            if chunk.text:
                yield text_delta(chunk.text)

    async def _request_title(self, messages: List[Message]) -> Optional[str]:
        contents = []
        for msg in messages:
            if msg["role"] == "system":
                continue
            text = message_text(msg["content"])
            if text:
                contents.append(types.Content(
                    role="model" if msg["role"] == "assistant" else "user",
                    parts=[types.Part(text=text)],
                ))
        contents.append(types.Content(role="user", parts=[types.Part(text=TITLE_REQUEST)]))

        resp = await self.client.aio.models.generate_content(
            model=self.title_model,
            contents=contents,
            config=types.GenerateContentConfig(system_instruction=TITLE_SYSTEM_PROMPT),
        )
        return resp.text

    async def _build_request(
        self,
        params: MessageCreateParams,
    ) -> Tuple[List[types.Content], types.GenerateContentConfig]:
        system_instruction, contents = await self._convert_messages(params["messages"])
        if params.get("system"):
            system_instruction = "\n\n".join(filter(None, [params["system"], system_instruction]))

        config_kwargs = {
            "max_output_tokens": params.get("max_tokens", DEFAULT_MAX_TOKENS),
            "safety_settings": SAFETY_SETTINGS,
        }
        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction
        if params.get("tools"):
            config_kwargs["tools"] = self._convert_tools(params["tools"])

        return contents, types.GenerateContentConfig(**config_kwargs)

    async def _convert_messages(
        self,
        messages: List[Message],
    ) -> Tuple[Optional[str], List[types.Content]]:
        """
        Convert messages to Gemini contents.

        System messages become the system instruction. All image downloads
        start at once and are awaited together.
        """
        system_parts = [
            message_text(m["content"], "\n") for m in messages if m["role"] == "system"
        ]
        system_instruction = "\n\n".join(system_parts) if system_parts else None

        async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as http_client:
            contents = await asyncio.gather(*(
                self._convert_message(m, http_client)
                for m in messages
                if m["role"] != "system"
            ))

        return system_instruction, list(contents)

    async def _convert_message(
        self,
        message: Message,
        http_client: httpx.AsyncClient,
    ) -> types.Content:
        # Map roles: "assistant" -> "model"
        role = "model" if message["role"] == "assistant" else "user"
        content = message["content"]

        if isinstance(content, str):
            return types.Content(role=role, parts=[types.Part(text=content)])

        parts = await asyncio.gather(*(
            self._convert_block(block, http_client) for block in content
        ))
        return types.Content(role=role, parts=list(parts))

    @staticmethod
    async def _convert_block(
        block: ContentBlock,
        http_client: httpx.AsyncClient,
    ) -> types.Part:
        if block.get("type") == "image":
            data, mime_type = await resolve_image_block(block, http_client)
            return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))
        if block.get("type") == "text":
            return types.Part(text=block["text"])
        logger.warning("Dropping unsupported content block type %r", block.get("type"))
        return types.Part(text="")

    @staticmethod
    def _convert_tools(tools: List[Tool]) -> List[types.Tool]:
        """
        Convert Anthropic-format tools to one Gemini Tool.
        """
        function_declarations = [
            types.FunctionDeclaration(
                name=tool.get("name", ""),
                description=tool.get("description", ""),
                parameters=tool.get("input_schema"),
            )
            for tool in tools
        ]
        return [types.Tool(function_declarations=function_declarations)]
