from __future__ import annotations

from typing import Any

from .base import HttpProviderClient
from .errors import ProviderResponseMalformed


class GeminiClient(HttpProviderClient):
    """Google Generative Language `generateContent` client.

    Auth is a `key` query parameter rather than a bearer header, and the
    completion text is split across `candidates[0].content.parts[].text`.
    """

    ENVELOPE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "required": ["candidates"],
        "properties": {
            "candidates": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "required": ["content"],
                    "properties": {
                        "content": {
                            "type": "object",
                            "required": ["parts"],
                            "properties": {
                                "parts": {
                                    "type": "array",
                                    "minItems": 1,
                                    "items": {
                                        "type": "object",
                                        "properties": {"text": {"type": "string"}},
                                    },
                                }
                            },
                        }
                    },
                },
            }
        },
    }

    def _endpoint(self) -> str:
        base = self._cfg.base_url.rstrip("/")
        return f"{base}/models/{self._cfg.model}:generateContent"

    def _params(self) -> dict[str, str]:
        return {"key": self._cfg.api_key}

    def _build_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [
                {"parts": [{"text": self._system_prompt}, {"text": prompt}]}
            ],
            "generationConfig": {
                "temperature": self._cfg.temperature,
                "maxOutputTokens": self._cfg.max_output_tokens,
            },
        }

    def _extract_text(self, data: dict[str, Any]) -> str:
        parts = data["candidates"][0]["content"]["parts"]
        text = "".join(p.get("text", "") for p in parts)
        if not text.strip():
            raise ProviderResponseMalformed(
                self.provider.value, "First candidate has no text parts"
            )
        return text
