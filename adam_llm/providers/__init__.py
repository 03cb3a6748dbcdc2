from .base import BaseLLMClient
from .openai import OpenAICompatibleClient
from .anthropic import AnthropicClient
from .grok import GrokClient
from .google import GoogleClient
from .llama import LlamaClient

__all__ = [
    "BaseLLMClient",
    "OpenAICompatibleClient",
    "AnthropicClient",
    "GrokClient",
    "GoogleClient",
    "LlamaClient",
]
