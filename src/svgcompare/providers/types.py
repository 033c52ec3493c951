from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

Role = Literal["system", "user", "assistant"]


class ProviderId(str, Enum):
    """Closed set of supported text-generation services.

    Members compare and hash like their string value, so result sets keyed by
    ``ProviderId`` can also be indexed with ``"openai"`` etc.
    """

    DEEPSEEK = "deepseek"
    GEMINI = "gemini"
    OPENAI = "openai"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.value


_DISPLAY_NAMES = {
    ProviderId.DEEPSEEK: "Deepseek Chat",
    ProviderId.GEMINI: "Gemini 2.0 Flash",
    ProviderId.OPENAI: "GPT-4o",
}


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class ProviderConfig:
    provider: ProviderId
    base_url: str
    model: str
    api_key_env: str
    api_key: str = ""
    timeout_s: float = 60.0
    temperature: float = 0.7
    max_output_tokens: int = 2048


@dataclass(frozen=True)
class ProviderOutcome:
    """What happened to one provider during a single orchestrated call."""

    provider: ProviderId
    markup: str
    error: str | None = None
    elapsed_s: float = 0.0

    @property
    def ok(self) -> bool:
        return bool(self.markup)
