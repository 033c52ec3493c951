from __future__ import annotations

from .openai_client import ChatCompletionsClient


class DeepSeekClient(ChatCompletionsClient):
    """DeepSeek exposes the OpenAI chat-completions wire format unchanged."""
