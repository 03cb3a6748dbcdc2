"""
Rich printer for displaying normalized delta streams.
"""
from typing import Dict, Any, AsyncIterator, Optional

from rich.console import Console
from rich.live import Live
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text


class RichDeltaPrinter:
    """
    Live terminal display for `parse_stream` output.

    Text deltas are accumulated and rendered as Markdown; other events
    (tool input fragments, Anthropic lifecycle events) are counted but not
    shown.

    Attributes:
        title: Title for the display panel
        code_theme: Theme for code blocks
        refresh_rate: Refresh rate for Live display
        border_style: Border style while streaming
    """

    def __init__(
        self,
        title: str = "Streaming Response",
        code_theme: str = "monokai",
        refresh_rate: int = 30,
        border_style: str = "blue",
        console: Optional[Console] = None,
    ):
        self.title = title
        self.code_theme = code_theme
        self.refresh_rate = refresh_rate
        self.border_style = border_style
        self.console = console or Console()
        self._full_text = ""
        self._tool_input = ""
        self._event_count = 0

    async def print_stream(
        self,
        event_stream: AsyncIterator[Dict[str, Any]],
    ) -> str:
        """
        Display delta events as they arrive.

        Args:
            event_stream: Normalized events from a client's `parse_stream`.

        Returns:
            The full assembled text.
        """
        self._full_text = ""
        self._tool_input = ""
        self._event_count = 0

        with Live(
            self._render(is_final=False),
            refresh_per_second=self.refresh_rate,
            console=self.console,
        ) as live:
            async for event in event_stream:
                self._event_count += 1
                if event.get("type") != "content_block_delta":
                    continue
                delta = event.get("delta", {})
                if delta.get("type") == "text_delta":
                    self._full_text += delta.get("text", "")
                    live.update(self._render(is_final=False))
                elif delta.get("type") == "input_json_delta":
                    self._tool_input += delta.get("partial_json", "")
            live.update(self._render(is_final=True))

        return self._full_text

    def print_title(self, title: str) -> None:
        """Print a generated object title."""
        self.console.print(f"[bold magenta]Title:[/bold magenta] {title}")

    def _render(self, is_final: bool) -> Panel:
        if not self._full_text.strip():
            content = Text("(waiting for response...)", style="dim italic")
        else:
            content = Markdown(self._full_text, code_theme=self.code_theme)

        title = "[bold]Final Response[/bold]" if is_final else f"[bold]{self.title}[/bold]"
        return Panel(
            content,
            title=title,
            border_style="green" if is_final else self.border_style,
            padding=(1, 2),
        )

    def get_full_text(self) -> str:
        """Get the full assembled text."""
        return self._full_text

    def get_tool_input(self) -> str:
        """Get the concatenated tool input JSON fragments."""
        return self._tool_input

    def get_event_count(self) -> int:
        """Get the number of events consumed by the last stream."""
        return self._event_count
