"""Static catalog of the models shown in the front-end selector."""
from typing import Dict, List, Optional, TypedDict

from .types import ModelId


class ModelConfig(TypedDict):
    id: ModelId
    name: str
    description: str


PARAMETRIC_MODELS: List[ModelConfig] = [
    {
        "id": "anthropic-fast",
        "name": "Adam",
        "description": "Fast responses, optimized for iterative part design",
    },
    {
        "id": "anthropic-quality",
        "name": "Adam Pro",
        "description": "Enhanced capabilities takes longer to think",
    },
    {
        "id": "grok",
        "name": "Grok",
        "description": "Language model from xAI",
    },
    {
        "id": "google",
        "name": "Google",
        "description": "Language model from Google",
    },
    {
        "id": "llama",
        "name": "Llama",
        "description": "Language model from Meta",
    },
]

# Vendor model names used when a caller has no preference
DEFAULT_PROVIDER_MODELS: Dict[str, str] = {
    "anthropic-fast": "claude-3-5-haiku-latest",
    "anthropic-quality": "claude-sonnet-4-20250514",
    "grok": "llama-3.3-70b-versatile",
    "google": "gemini-2.0-flash",
    "llama": "llama3",
}


def get_model_config(model_id: str) -> Optional[ModelConfig]:
    """Look up a catalog entry by id."""
    for config in PARAMETRIC_MODELS:
        if config["id"] == model_id:
            return config
    return None
