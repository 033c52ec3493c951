from __future__ import annotations

from typing import Any

from .base import HttpProviderClient
from .types import ChatMessage


class ChatCompletionsClient(HttpProviderClient):
    """Client for OpenAI-compatible `/chat/completions` endpoints (bearer auth)."""

    ENVELOPE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "required": ["choices"],
        "properties": {
            "choices": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "required": ["message"],
                    "properties": {
                        "message": {
                            "type": "object",
                            "required": ["content"],
                            "properties": {"content": {"type": "string"}},
                        }
                    },
                },
            }
        },
    }

    def _endpoint(self) -> str:
        return f"{self._cfg.base_url.rstrip('/')}/chat/completions"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._cfg.api_key}",
        }

    def _messages(self, prompt: str) -> list[ChatMessage]:
        return [
            ChatMessage(role="system", content=self._system_prompt),
            ChatMessage(role="user", content=prompt),
        ]

    def _build_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._cfg.model,
            "messages": [
                {"role": m.role, "content": m.content} for m in self._messages(prompt)
            ],
            "temperature": self._cfg.temperature,
            "max_tokens": self._cfg.max_output_tokens,
        }

    def _extract_text(self, data: dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"]


class OpenAIClient(ChatCompletionsClient):
    pass
