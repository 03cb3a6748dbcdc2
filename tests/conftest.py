import pytest

from adam_llm.config import Settings


class FakeStreamingResponse:
    """Stands in for an SDK streaming response context manager."""

    def __init__(self, chunks):
        self.chunks = chunks
        self.entered = False
        self.exited = False

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, *exc_info):
        self.exited = True
        return False

    async def iter_bytes(self):
        for chunk in self.chunks:
            yield chunk


async def _aiter(items):
    for item in items:
        yield item


@pytest.fixture
def mock_env(monkeypatch):
    """Mock environment variables for credentials."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test-anthropic")
    monkeypatch.setenv("GROK_API_KEY", "gsk-test-grok")
    monkeypatch.setenv("GOOGLE_API_KEY", "AIza-test-google")
    monkeypatch.setenv("LLAMA_API_URL", "http://localhost:8080/v1")


@pytest.fixture
def settings():
    return Settings(
        anthropic_api_key="sk-test-anthropic",
        grok_api_key="gsk-test-grok",
        google_api_key="AIza-test-google",
        llama_api_url="http://localhost:8080/v1",
    )


@pytest.fixture
def aiter_of():
    """Build an async iterator over a list."""
    return _aiter


@pytest.fixture
def streaming_response():
    return FakeStreamingResponse


@pytest.fixture
def text_messages():
    return [
        {"role": "user", "content": "I need a bracket for a 20mm pipe"},
        {"role": "assistant", "content": "Should it be wall mounted?"},
        {"role": "user", "content": "Yes, with two screw holes"},
    ]


@pytest.fixture
def multimodal_messages():
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": "Make something like this"},
                {"type": "image", "source": {"type": "url", "url": "https://example.com/vase.png"}},
            ],
        },
    ]
