"""Environment configuration for the LLM clients."""

import logging
import os
from typing import Optional, Union

import dotenv
from pydantic import BaseModel
from rich.logging import RichHandler

DEFAULT_TITLE_MODELS = {
    "anthropic": "claude-3-haiku-20240307",
    "grok": "llama3-8b-8192",
    "google": "gemini-2.0-flash",
    "llama": "llama3",
}


class Settings(BaseModel):
    """Credentials and title-model overrides.

    Missing credentials are kept as empty strings; the provider rejects the
    call when it is made.

    Attributes:
        anthropic_api_key: Anthropic API key (ANTHROPIC_API_KEY)
        grok_api_key: Groq API key used by the Grok client (GROK_API_KEY)
        google_api_key: Google AI Studio key (GOOGLE_API_KEY)
        llama_api_url: Base URL of the OpenAI-compatible Llama server (LLAMA_API_URL)
        llama_api_key: Optional key for the Llama server (LLAMA_API_KEY)
        title_model_*: Models used for title generation per provider
    """

    anthropic_api_key: str = ""
    grok_api_key: str = ""
    google_api_key: str = ""
    llama_api_url: str = ""
    llama_api_key: Optional[str] = None

    title_model_anthropic: str = DEFAULT_TITLE_MODELS["anthropic"]
    title_model_grok: str = DEFAULT_TITLE_MODELS["grok"]
    title_model_google: str = DEFAULT_TITLE_MODELS["google"]
    title_model_llama: str = DEFAULT_TITLE_MODELS["llama"]

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from the process environment.

        A `.env` file is loaded first (without overriding variables that are
        already set).

        Args:
            dotenv_path: Explicit path to a .env file. Defaults to searching
                         upwards from the working directory.

        Returns:
            Settings: Populated settings.
        """
        dotenv.load_dotenv(dotenv_path)
        return cls(
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
            grok_api_key=os.getenv("GROK_API_KEY", ""),
            google_api_key=os.getenv("GOOGLE_API_KEY", ""),
            llama_api_url=os.getenv("LLAMA_API_URL", ""),
            llama_api_key=os.getenv("LLAMA_API_KEY") or None,
            title_model_anthropic=os.getenv(
                "ADAM_TITLE_MODEL_ANTHROPIC", DEFAULT_TITLE_MODELS["anthropic"]
            ),
            title_model_grok=os.getenv("ADAM_TITLE_MODEL_GROK", DEFAULT_TITLE_MODELS["grok"]),
            title_model_google=os.getenv("ADAM_TITLE_MODEL_GOOGLE", DEFAULT_TITLE_MODELS["google"]),
            title_model_llama=os.getenv("ADAM_TITLE_MODEL_LLAMA", DEFAULT_TITLE_MODELS["llama"]),
        )


def configure_logging(level: Union[int, str, None] = None) -> None:
    """
    Install a rich log handler on the root logger.

    Meant for scripts and demos; the library never calls this on import.

    Args:
        level: Log level. Defaults to ADAM_LOG_LEVEL or INFO.
    """
    if level is None:
        level = os.getenv("ADAM_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
