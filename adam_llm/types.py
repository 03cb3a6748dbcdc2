from typing import Literal, List, Dict, Any, Union, TypedDict

# =============================================================================
# Type Definitions
# =============================================================================

# Model identifiers selectable in the front-end
ModelId = Literal["anthropic-fast", "anthropic-quality", "grok", "google", "llama"]

# Provider names reported in standardized responses
Provider = Literal["anthropic", "grok", "google", "llama"]


class TextBlock(TypedDict):
    """
    Text content block for multimodal messages.
    """
    type: Literal["text"]
    text: str


class URLImageSource(TypedDict):
    """
    Image referenced by a public URL.
    """
    type: Literal["url"]
    url: str


class Base64ImageSource(TypedDict):
    """
    Image embedded as base64 data.
    """
    type: Literal["base64"]
    media_type: str
    data: str


class ImageBlock(TypedDict):
    """
    Image content block for multimodal messages.
    """
    type: Literal["image"]
    source: Union[URLImageSource, Base64ImageSource]


# Content can be a simple string or an ordered list of blocks (text + images)
ContentBlock = Union[TextBlock, ImageBlock]
MessageContent = Union[str, List[ContentBlock]]


class Message(TypedDict):
    """
    Chat message.

    Roles:
    - "system": System prompt / instructions
    - "user": User message
    - "assistant": Model response
    """
    role: Literal["system", "user", "assistant"]
    content: MessageContent


# =============================================================================
# Tool Calling Type Definitions
# =============================================================================

class InputSchema(TypedDict, total=False):
    """
    JSON Schema for tool input.
    """
    type: Literal["object"]
    properties: Dict[str, Any]
    required: List[str]


class Tool(TypedDict, total=False):
    """
    Tool declaration (Anthropic format, translated per provider).
    """
    name: str
    description: str
    input_schema: InputSchema


class ToolCall(TypedDict, total=False):
    """
    Tool call from an LLM response.
    """
    id: str
    name: str
    arguments: Dict[str, Any]  # Parsed JSON arguments


# =============================================================================
# Request / Stream Types
# =============================================================================

class MessageCreateParams(TypedDict, total=False):
    """
    Canonical request accepted by every client.
    """
    messages: List[Message]
    max_tokens: int
    system: str
    tools: List[Tool]


class TextDelta(TypedDict):
    type: Literal["text_delta"]
    text: str


class InputJSONDelta(TypedDict):
    type: Literal["input_json_delta"]
    partial_json: str


class DeltaEvent(TypedDict):
    """
    One normalized unit of streamed output.
    """
    type: Literal["content_block_delta"]
    index: int
    delta: Union[TextDelta, InputJSONDelta]
