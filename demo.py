"""
Demo: stream a completion and generate an object title for one model id.

Usage:
    python demo.py [model-id] [image-url]

Model ids: anthropic-fast, anthropic-quality, grok, google, llama.
An image URL is only sent to providers that accept images.
"""
import asyncio
import sys
from typing import List, Optional

from rich.console import Console

from adam_llm import (
    DEFAULT_PROVIDER_MODELS,
    Message,
    RichDeltaPrinter,
    configure_logging,
    get_llm_client,
    get_model_config,
)
from adam_llm.utils import create_image_block, create_message

console = Console()


async def main(model_id: str, image_url: Optional[str] = None):
    configure_logging()
    client = get_llm_client(model_id)
    config = get_model_config(model_id)
    console.print(f"[bold cyan]=== {config['name']} ({config['description']}) ===")

    content: List = ["Design a simple desk organizer with three pen slots."]
    if image_url and model_id not in ("grok", "llama"):
        content.append(create_image_block(image_url))

    messages: List[Message] = [create_message("user", content if len(content) > 1 else content[0])]

    stream = await client.create(
        {"messages": messages, "max_tokens": 500},
        DEFAULT_PROVIDER_MODELS[model_id],
    )

    printer = RichDeltaPrinter(title=config["name"], console=console)
    await printer.print_stream(client.parse_stream(stream))

    printer.print_title(await client.generate_title(messages))


if __name__ == "__main__":
    model_arg = sys.argv[1] if len(sys.argv) > 1 else "anthropic-fast"
    image_arg = sys.argv[2] if len(sys.argv) > 2 else None
    asyncio.run(main(model_arg, image_arg))
