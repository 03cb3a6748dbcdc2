import httpx
import pytest
from unittest.mock import patch, mock_open

from adam_llm.utils import (
    create_image_block, create_message, create_text_block, create_tool,
    encode_image_file, fetch_image, message_text, resolve_image_block,
)


class TestUtils:

    def test_create_text_block(self):
        assert create_text_block("Hello") == {"type": "text", "text": "Hello"}

    def test_create_image_block_from_url(self):
        block = create_image_block("https://example.com/img.jpg")
        assert block == {"type": "image", "source": {"type": "url", "url": "https://example.com/img.jpg"}}

    def test_create_image_block_from_base64(self):
        block = create_image_block("SGVsbG8=", mime_type="image/png")
        assert block["source"] == {"type": "base64", "media_type": "image/png", "data": "SGVsbG8="}

    def test_create_image_block_unknown_source(self):
        with pytest.raises(ValueError, match="Cannot determine image source type"):
            create_image_block("definitely-not-a-file.png")

    def test_create_message_text(self):
        assert create_message("user", "Hello world") == {"role": "user", "content": "Hello world"}

    def test_create_message_multimodal(self):
        msg = create_message("user", [
            "Look at this",
            create_image_block("https://example.com/cat.jpg"),
        ])
        assert msg["role"] == "user"
        assert len(msg["content"]) == 2
        assert msg["content"][0] == {"type": "text", "text": "Look at this"}

    @patch("pathlib.Path.exists")
    @patch("builtins.open", new_callable=mock_open, read_data=b"image data")
    def test_encode_image_file(self, mock_file, mock_exists):
        mock_exists.return_value = True

        b64_data, mime_type = encode_image_file("test.jpg")

        assert mime_type == "image/jpeg"
        # "image data" in base64 is "aW1hZ2UgZGF0YQ=="
        assert b64_data == "aW1hZ2UgZGF0YQ=="

    def test_message_text(self):
        assert message_text("plain") == "plain"
        assert message_text([
            {"type": "text", "text": "a"},
            {"type": "image", "source": {"type": "url", "url": "https://example.com/x.png"}},
            {"type": "text", "text": "b"},
        ]) == "a b"

    def test_create_tool(self):
        tool = create_tool(
            name="build_model",
            description="Build a model",
            parameters={"width": {"type": "number"}},
            required=["width"],
        )
        assert tool["name"] == "build_model"
        assert tool["input_schema"]["type"] == "object"
        assert tool["input_schema"]["required"] == ["width"]


class TestImageFetching:

    @pytest.mark.asyncio
    async def test_fetch_image_strips_content_type_params(self):
        def handler(request):
            return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png; charset=binary"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            data, mime_type = await fetch_image("https://example.com/a.png", http_client)

        assert data == b"\x89PNG"
        assert mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_fetch_image_raises_on_error_status(self):
        def handler(request):
            return httpx.Response(404)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            with pytest.raises(httpx.HTTPStatusError):
                await fetch_image("https://example.com/missing.png", http_client)

    @pytest.mark.asyncio
    async def test_resolve_base64_block(self):
        data, mime_type = await resolve_image_block({
            "type": "image",
            "source": {"type": "base64", "media_type": "image/webp", "data": "aGk="},
        })
        assert data == b"hi"
        assert mime_type == "image/webp"
