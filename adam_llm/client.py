import logging
from typing import Optional

from .config import Settings
from .exceptions import UnsupportedModelError
from .providers.base import BaseLLMClient
from .providers.anthropic import AnthropicClient
from .providers.grok import GrokClient
from .providers.google import GoogleClient
from .providers.llama import LlamaClient

logger = logging.getLogger(__name__)


def get_llm_client(model: str, settings: Optional[Settings] = None) -> BaseLLMClient:
    """
    Build the client that serves a model identifier.

    Credentials come from `settings`, or from the environment (and `.env`)
    when no settings are given. Missing credentials are passed on as empty
    strings; the provider rejects the call when it is made.

    Args:
        model (str): One of 'anthropic-fast', 'anthropic-quality', 'grok',
                     'google' or 'llama'.
        settings (Settings, optional): Explicit configuration.

    Returns:
        BaseLLMClient: A client exposing create, create_non_streaming,
        generate_title and parse_stream.

    Raises:
        UnsupportedModelError: If the identifier is not known.

    Example:
        >>> client = get_llm_client("anthropic-fast")
        >>> title = await client.generate_title(messages)
    """
    if settings is None:
        settings = Settings.from_env()

    match model:
        case "anthropic-fast" | "anthropic-quality":
            client = AnthropicClient(
                settings.anthropic_api_key,
                title_model=settings.title_model_anthropic,
            )
        case "grok":
            client = GrokClient(
                settings.grok_api_key,
                title_model=settings.title_model_grok,
            )
        case "google":
            client = GoogleClient(
                settings.google_api_key,
                title_model=settings.title_model_google,
            )
        case "llama":
            client = LlamaClient(
                settings.llama_api_url,
                api_key=settings.llama_api_key,
                title_model=settings.title_model_llama,
            )
        case _:
            raise UnsupportedModelError(model)

    logger.info("Created %s client for model id %r", client.provider_name, model)
    return client
