"""Custom exceptions for the LLM client layer."""


class LLMClientError(Exception):
    """Base exception for LLM client errors."""

    pass


class UnsupportedModelError(LLMClientError, ValueError):
    """Raised when a model identifier has no client."""

    def __init__(self, model: str):
        self.model = model
        super().__init__(f"Unsupported model: {model}")


class UnsupportedContentError(LLMClientError, ValueError):
    """Raised when a provider is given content it cannot accept."""

    def __init__(self, client_name: str, kind: str = "multimodal"):
        self.client_name = client_name
        self.kind = kind
        super().__init__(f"{client_name} does not support {kind} content.")


class ProviderConfigurationError(LLMClientError):
    """Raised when a provider is called without the settings it needs."""

    def __init__(self, client_name: str, setting: str):
        self.client_name = client_name
        self.setting = setting
        super().__init__(f"{client_name} requires {setting} to be set.")
