from typing import Optional

from groq import AsyncGroq

from .openai import OpenAICompatibleClient


class GrokClient(OpenAICompatibleClient):
    """
    Client for the Grok model id, served through the Groq API.

    The Groq SDK mirrors OpenAI's chat completion interface, so only the
    underlying SDK client differs.
    """

    provider_name = "grok"

    def __init__(self, api_key: str, title_model: str = "llama3-8b-8192"):
        super().__init__(api_key=api_key, title_model=title_model)

    def _make_client(self, api_key: Optional[str], base_url: Optional[str]):
        return AsyncGroq(api_key=api_key)
