"""Prompt text and post-processing shared by the title generators."""
from typing import Optional

DEFAULT_TITLE = "Adam Object"
MAX_TITLE_LENGTH = 60

TITLE_SYSTEM_PROMPT = """You are a helpful assistant that generates concise, descriptive titles for 3D objects based on a user's description, conversation context, and any reference images. Your titles should be:
1. Brief (under 27 characters)
2. Descriptive of the object
3. Clear and professional
4. Without any special formatting or punctuation at the beginning or end
5. Consider the entire conversation context, not just the latest message
6. When images are provided, incorporate visual elements you can see into the title"""

TITLE_REQUEST = (
    "Generate a concise title for the 3D object that will be generated "
    "based on the previous messages."
)


def finalize_title(raw: Optional[str]) -> str:
    """
    Clean a model-produced title.

    Strips whitespace and truncates to MAX_TITLE_LENGTH characters, ending
    with an ellipsis when cut. Empty results fall back to DEFAULT_TITLE.
    """
    title = (raw or "").strip()
    if not title:
        return DEFAULT_TITLE
    if len(title) > MAX_TITLE_LENGTH:
        title = title[: MAX_TITLE_LENGTH - 3] + "..."
    return title
