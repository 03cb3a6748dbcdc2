import logging

import pytest

from adam_llm.streaming import iter_sse_events, text_delta, input_json_delta


async def collect(aiter):
    return [item async for item in aiter]


class TestIterSSEEvents:

    @pytest.mark.asyncio
    async def test_parses_data_lines(self, aiter_of):
        chunks = [b'data: {"a": 1}\n', b'data: {"b": 2}\n']
        events = await collect(iter_sse_events(aiter_of(chunks)))
        assert events == [{"a": 1}, {"b": 2}]

    @pytest.mark.asyncio
    async def test_done_closes_stream_without_event(self, aiter_of):
        chunks = [b'data: {"a": 1}\n', b"data: [DONE]\n", b'data: {"b": 2}\n']
        events = await collect(iter_sse_events(aiter_of(chunks)))
        assert events == [{"a": 1}]

    @pytest.mark.asyncio
    async def test_done_in_middle_of_chunk(self, aiter_of):
        chunks = [b'data: {"a": 1}\n\ndata: [DONE]\n\ndata: {"b": 2}\n\n']
        events = await collect(iter_sse_events(aiter_of(chunks)))
        assert events == [{"a": 1}]

    @pytest.mark.asyncio
    async def test_malformed_line_is_skipped_and_logged(self, aiter_of, caplog):
        chunks = [b'data: {"a": 1}\ndata: {not json\ndata: {"b": 2}\n']
        with caplog.at_level(logging.WARNING, logger="adam_llm.streaming"):
            events = await collect(iter_sse_events(aiter_of(chunks)))

        assert events == [{"a": 1}, {"b": 2}]
        assert any("Error parsing stream chunk" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("line", [b"data: 42\n", b'data: "x"\n', b"data: [1, 2]\n", b"data: null\n"])
    async def test_non_object_payload_is_skipped_and_logged(self, aiter_of, caplog, line):
        chunks = [b'data: {"a": 1}\n', line, b'data: {"b": 2}\n']
        with caplog.at_level(logging.WARNING, logger="adam_llm.streaming"):
            events = await collect(iter_sse_events(aiter_of(chunks)))

        assert events == [{"a": 1}, {"b": 2}]
        assert any("not a JSON object" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_line_split_across_chunks(self, aiter_of):
        chunks = [b'data: {"te', b'xt": "hel', b'lo"}\n']
        events = await collect(iter_sse_events(aiter_of(chunks)))
        assert events == [{"text": "hello"}]

    @pytest.mark.asyncio
    async def test_multibyte_character_split_across_chunks(self, aiter_of):
        raw = 'data: {"text": "café"}\n'.encode("utf-8")
        cut = raw.index(b"\xc3") + 1
        events = await collect(iter_sse_events(aiter_of([raw[:cut], raw[cut:]])))
        assert events == [{"text": "café"}]

    @pytest.mark.asyncio
    async def test_event_and_comment_lines_ignored(self, aiter_of, caplog):
        chunks = [
            b": keep-alive\n",
            b"event: content_block_delta\n",
            b'data: {"type": "content_block_delta"}\n\n',
        ]
        with caplog.at_level(logging.WARNING, logger="adam_llm.streaming"):
            events = await collect(iter_sse_events(aiter_of(chunks)))

        assert events == [{"type": "content_block_delta"}]
        assert not caplog.records

    @pytest.mark.asyncio
    async def test_trailing_line_without_newline(self, aiter_of):
        chunks = [b'data: {"a": 1}\ndata: {"b": 2}']
        events = await collect(iter_sse_events(aiter_of(chunks)))
        assert events == [{"a": 1}, {"b": 2}]

    @pytest.mark.asyncio
    async def test_unprefixed_json_lines(self, aiter_of):
        chunks = ['{"a": 1}\n', '{"b": 2}\n']
        events = await collect(iter_sse_events(aiter_of(chunks)))
        assert events == [{"a": 1}, {"b": 2}]


def test_text_delta_shape():
    assert text_delta("hi") == {
        "type": "content_block_delta",
        "index": 0,
        "delta": {"type": "text_delta", "text": "hi"},
    }


def test_input_json_delta_shape():
    event = input_json_delta('{"w": ', index=2)
    assert event["index"] == 2
    assert event["delta"] == {"type": "input_json_delta", "partial_json": '{"w": '}
