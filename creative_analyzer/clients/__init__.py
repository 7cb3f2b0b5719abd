"""API clients for external services."""

from .gemini import ConfigurationError, GeminiClient, RemoteRejection

__all__ = ["ConfigurationError", "GeminiClient", "RemoteRejection"]
