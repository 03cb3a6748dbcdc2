"""
Stream normalization shared by every provider client.

Providers speaking Server-Sent Events are read as raw bytes and turned into
parsed JSON payloads here. Provider clients then map those payloads onto the
`content_block_delta` event shape.
"""
import codecs
import json
import logging
from typing import Any, AsyncIterable, AsyncIterator, Dict, Union

from .types import DeltaEvent

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"
DATA_PREFIX = "data: "

# Returned by _parse_line for the end-of-stream sentinel
_DONE = object()


def _parse_line(line: str) -> Any:
    """
    Parse one SSE line.

    Returns the decoded payload, None for lines without a usable payload,
    or _DONE for the end-of-stream sentinel.
    """
    line = line.strip()
    if not line:
        return None
    # SSE comments and event names carry no payload
    if line.startswith(":") or line.startswith("event:"):
        return None

    message = line[len(DATA_PREFIX):] if line.startswith(DATA_PREFIX) else line
    if message == DONE_SENTINEL:
        return _DONE

    try:
        payload = json.loads(message)
    except json.JSONDecodeError as e:
        logger.warning("Error parsing stream chunk %r: %s", message[:200], e)
        return None

    if not isinstance(payload, dict):
        logger.warning("Error parsing stream chunk %r: not a JSON object", message[:200])
        return None
    return payload


async def iter_sse_events(
    chunks: AsyncIterable[Union[bytes, str]],
) -> AsyncIterator[Dict[str, Any]]:
    """
    Turn a raw SSE byte stream into parsed JSON payloads.

    Chunks are decoded incrementally and split on newlines; a line cut across
    two chunks is buffered until it is complete. A literal `[DONE]` line ends
    the stream without yielding anything for it. Lines that fail to parse as
    a JSON object are logged and skipped.

    Args:
        chunks (AsyncIterable[bytes | str]): Raw stream chunks.

    Yields:
        Dict[str, Any]: One parsed payload per `data:` line.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""

    async for chunk in chunks:
        if isinstance(chunk, (bytes, bytearray)):
            chunk = decoder.decode(chunk)
        buffer += chunk
        *lines, buffer = buffer.split("\n")
        for line in lines:
            parsed = _parse_line(line)
            if parsed is _DONE:
                return
            if parsed is not None:
                yield parsed

    # Trailing line without a newline
    buffer += decoder.decode(b"", final=True)
    parsed = _parse_line(buffer)
    if parsed is not None and parsed is not _DONE:
        yield parsed


def text_delta(text: str, index: int = 0) -> DeltaEvent:
    """Build a normalized text delta event."""
    return {
        "type": "content_block_delta",
        "index": index,
        "delta": {"type": "text_delta", "text": text},
    }


def input_json_delta(partial_json: str, index: int = 0) -> DeltaEvent:
    """Build a normalized tool-input delta event."""
    return {
        "type": "content_block_delta",
        "index": index,
        "delta": {"type": "input_json_delta", "partial_json": partial_json},
    }
