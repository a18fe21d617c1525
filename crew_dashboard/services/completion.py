from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypedDict

import structlog
from openai import OpenAI

from crew_dashboard.config import get_settings
from crew_dashboard.observability.llm import instrument_completion_call


FALLBACK_MODEL = "llama-3.3-70b"


class ChatMessage(TypedDict):
    role: Literal["system", "user", "assistant"]
    content: str


@dataclass(frozen=True)
class ModelConfig:
    temperature: float
    top_p: float
    max_tokens: int


MODEL_CONFIGS: dict[str, ModelConfig] = {
    "llama-3.3-70b": ModelConfig(temperature=0.2, top_p=1.0, max_tokens=8192),
    "llama-4-scout-17b-16e-instruct": ModelConfig(temperature=0.2, top_p=1.0, max_tokens=8192),
    "llama-4-maverick-17b-128e-instruct": ModelConfig(temperature=0.6, top_p=0.9, max_tokens=8192),
}


class CompletionError(RuntimeError):
    """The remote completion API call failed."""


class CompletionClient:
    """Chat completions against Cerebras' OpenAI-compatible endpoint."""

    def __init__(self, sdk_client: Any | None = None) -> None:
        if sdk_client is None:
            settings = get_settings()
            sdk_client = OpenAI(api_key=settings.cerebras_api_key, base_url=settings.cerebras_base_url)
        self._client = sdk_client

    def create_completion(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float = 0.2,
        max_tokens: int = 8192,
        top_p: float = 1.0,
    ) -> Any:
        try:
            return instrument_completion_call(
                operation="chat.completions.create",
                model=model,
                fn=lambda: self._client.chat.completions.create(
                    messages=messages,
                    model=model,
                    stream=False,
                    max_completion_tokens=max_tokens,
                    temperature=temperature,
                    top_p=top_p,
                ),
            )
        except Exception as exc:
            structlog.get_logger("completion").error("cerebras_api_error", model=model, error=str(exc))
            raise CompletionError("Failed to create completion with Cerebras API") from exc

    @staticmethod
    def get_model_config(model: str) -> ModelConfig:
        return MODEL_CONFIGS.get(model, MODEL_CONFIGS[FALLBACK_MODEL])


def extract_text(completion: Any) -> str | None:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


_completion_client: CompletionClient | None = None


def set_completion_client(client: CompletionClient | None) -> None:
    global _completion_client
    _completion_client = client


def get_completion_client() -> CompletionClient:
    global _completion_client
    if _completion_client is None:
        _completion_client = CompletionClient()
    return _completion_client
