import io

import pytest
from rich.console import Console

from adam_llm.rich_printer import RichDeltaPrinter
from adam_llm.streaming import text_delta, input_json_delta


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=80)


class TestRichDeltaPrinter:

    @pytest.mark.asyncio
    async def test_accumulates_text_deltas(self, console, aiter_of):
        printer = RichDeltaPrinter(console=console)
        events = [
            {"type": "message_start", "message": {"id": "msg_1"}},
            text_delta("# Desk "),
            input_json_delta('{"slots": 3}', index=1),
            text_delta("Organizer"),
            {"type": "message_stop"},
        ]

        text = await printer.print_stream(aiter_of(events))

        assert text == "# Desk Organizer"
        assert printer.get_full_text() == text
        assert printer.get_tool_input() == '{"slots": 3}'
        assert printer.get_event_count() == 5
        assert "Desk Organizer" in console.file.getvalue()

    def test_print_title(self, console):
        RichDeltaPrinter(console=console).print_title("Pipe Bracket")
        assert "Pipe Bracket" in console.file.getvalue()
