from typing import Any, Dict, List, Optional

from .openai import OpenAICompatibleClient
from ..exceptions import ProviderConfigurationError
from ..types import Message, MessageCreateParams

# The OpenAI SDK refuses to build a client without a key; local servers ignore it
PLACEHOLDER_API_KEY = "sk-no-key-required"


class LlamaClient(OpenAICompatibleClient):
    """
    Client for a local Llama server exposing the OpenAI-compatible API.
    """

    provider_name = "llama"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        title_model: str = "llama3",
    ):
        """
        Initialize LlamaClient.

        An empty `base_url` is kept as-is rather than left to the SDK default
        (api.openai.com); requests then fail with ProviderConfigurationError.

        Args:
            base_url: Server URL (LLAMA_API_URL), e.g. "http://localhost:8080/v1".
            api_key: Optional key if the server enforces one.
            title_model: Model name used for title generation.
        """
        self.base_url = base_url
        super().__init__(
            api_key=api_key or PLACEHOLDER_API_KEY,
            base_url=base_url,
            title_model=title_model,
        )

    def _require_base_url(self) -> None:
        if not self.base_url:
            raise ProviderConfigurationError(type(self).__name__, "LLAMA_API_URL")

    def _build_request(self, params: MessageCreateParams, model: str) -> Dict[str, Any]:
        self._require_base_url()
        return super()._build_request(params, model)

    async def _request_title(self, messages: List[Message]) -> Optional[str]:
        self._require_base_url()
        return await super()._request_title(messages)
