import base64
from pathlib import Path
from typing import Union, List, Optional, Dict, Any, Literal, Tuple

import httpx

from .types import (
    Message, ContentBlock, MessageContent, TextBlock, ImageBlock, Tool
)

# =============================================================================
# Image Helpers
# =============================================================================

def encode_image_file(image_path: Union[str, Path]) -> Tuple[str, str]:
    """
    Encode a local image file to base64 for LLM usage.

    Reads the file from the given path, determines its MIME type based on extension,
    and returns a tuple of the base64-encoded data and the MIME type.

    Args:
        image_path (Union[str, Path]): Path to the image file.

    Returns:
        Tuple[str, str]: A tuple containing:
            - b64_data (str): The base64-encoded string of the image content.
            - mime_type (str): The MIME type (e.g., 'image/png').

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(image_path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {image_path}")

    # Map file extensions to MIME types
    mime_types = {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".png": "image/png",
        ".gif": "image/gif",
        ".webp": "image/webp",
    }
    mime_type = mime_types.get(path.suffix.lower(), "image/jpeg")

    with open(path, "rb") as f:
        b64_data = base64.b64encode(f.read()).decode("utf-8")

    return b64_data, mime_type


async def fetch_image(
    url: str,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Tuple[bytes, str]:
    """
    Download an image from a URL.

    Args:
        url (str): The publicly accessible URL of the image.
        http_client (httpx.AsyncClient, optional): Client to reuse. A
            short-lived client is opened when omitted.

    Returns:
        Tuple[bytes, str]: (image_bytes, mime_type). The MIME type comes from
        the Content-Type header with parameters stripped.

    Raises:
        httpx.HTTPError: If the download fails (timeout, 404, etc.).
    """
    if http_client is None:
        async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
            return await fetch_image(url, client)

    response = await http_client.get(url)
    response.raise_for_status()

    content_type = response.headers.get("content-type", "image/jpeg")
    mime_type = content_type.split(";")[0].strip()

    return response.content, mime_type


async def resolve_image_block(
    block: ImageBlock,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Tuple[bytes, str]:
    """
    Resolve an image block (URL or base64 source) to raw bytes.

    Args:
        block (ImageBlock): The image content block.
        http_client (httpx.AsyncClient, optional): Client used for URL fetches.

    Returns:
        Tuple[bytes, str]: (image_bytes, mime_type).

    Raises:
        ValueError: If the source type is not recognised.
    """
    source = block["source"]
    if source["type"] == "base64":
        return base64.b64decode(source["data"]), source["media_type"]
    if source["type"] == "url":
        return await fetch_image(source["url"], http_client)
    raise ValueError(f"Unsupported image source type: {source['type']}")


def create_image_block(
    source: str,
    *,
    mime_type: Optional[str] = None,
) -> ImageBlock:
    """
    Create an image content block.

    Args:
        source (str): Can be:
            - A remote URL (e.g., "https://example.com/image.jpg")
            - A local file path (e.g., "/path/to/image.png")
            - Raw base64 data (requires `mime_type` kwarg)
        mime_type (str, optional): Required if `source` is raw base64 data.

    Returns:
        ImageBlock: A URL-sourced or base64-sourced image block.

    Raises:
        ValueError: If the source type cannot be determined.
    """
    if source.startswith(("http://", "https://")):
        return {"type": "image", "source": {"type": "url", "url": source}}

    if mime_type:
        data = source
    elif len(source) < 260 and Path(source).exists():
        data, mime_type = encode_image_file(source)
    else:
        raise ValueError(
            f"Cannot determine image source type for: {source[:50]}... "
            "Provide mime_type for raw base64 data."
        )

    return {
        "type": "image",
        "source": {"type": "base64", "media_type": mime_type, "data": data},
    }


def create_text_block(text: str) -> TextBlock:
    """Create a text content block."""
    return {"type": "text", "text": text}


def create_message(
    role: Literal["system", "user", "assistant"],
    content: Union[str, List[Union[str, ContentBlock]]],
) -> Message:
    """
    Create a Message.

    String elements inside a list are normalized to text blocks.
    """
    if isinstance(content, str):
        return {"role": role, "content": content}

    normalized: List[ContentBlock] = []
    for item in content:
        if isinstance(item, str):
            normalized.append(create_text_block(item))
        else:
            normalized.append(item)

    return {"role": role, "content": normalized}


def message_text(content: MessageContent, separator: str = " ") -> str:
    """
    Flatten message content to plain text.

    Non-text blocks are dropped.
    """
    if isinstance(content, str):
        return content
    return separator.join(
        block["text"] for block in content if block.get("type") == "text"
    )


# =============================================================================
# Tool Helpers
# =============================================================================

def create_tool(
    name: str,
    description: str,
    parameters: Dict[str, Any],
    required: Optional[List[str]] = None,
) -> Tool:
    """
    Create a tool declaration.

    Args:
        name (str): The name of the tool.
        description (str): What the tool does.
        parameters (Dict): JSON Schema properties for the tool input.
        required (List[str], optional): Required property names.

    Returns:
        Tool: The declaration in Anthropic format.
    """
    return {
        "name": name,
        "description": description,
        "input_schema": {
            "type": "object",
            "properties": parameters,
            "required": required or [],
        },
    }
