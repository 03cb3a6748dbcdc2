from .client import get_llm_client
from .catalog import PARAMETRIC_MODELS, DEFAULT_PROVIDER_MODELS, ModelConfig, get_model_config
from .config import Settings, configure_logging
from .exceptions import (
    LLMClientError, UnsupportedModelError, UnsupportedContentError, ProviderConfigurationError
)
from .providers import (
    BaseLLMClient, AnthropicClient, GrokClient, GoogleClient, LlamaClient
)
from .title import DEFAULT_TITLE, MAX_TITLE_LENGTH
from .types import (
    Message, MessageCreateParams, Tool, ToolCall, ContentBlock, TextBlock,
    ImageBlock, DeltaEvent, ModelId,
)
from .rich_printer import RichDeltaPrinter

__all__ = [
    "get_llm_client",
    "PARAMETRIC_MODELS",
    "DEFAULT_PROVIDER_MODELS",
    "ModelConfig",
    "get_model_config",
    "Settings",
    "configure_logging",
    "LLMClientError",
    "UnsupportedModelError",
    "UnsupportedContentError",
    "ProviderConfigurationError",
    "BaseLLMClient",
    "AnthropicClient",
    "GrokClient",
    "GoogleClient",
    "LlamaClient",
    "DEFAULT_TITLE",
    "MAX_TITLE_LENGTH",
    "Message",
    "MessageCreateParams",
    "Tool",
    "ToolCall",
    "ContentBlock",
    "TextBlock",
    "ImageBlock",
    "DeltaEvent",
    "ModelId",
    "RichDeltaPrinter",
]
