from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Protocol

log = logging.getLogger(__name__)

Message = dict[str, str]


class CompletionError(RuntimeError):
    """Raised when the completion API cannot produce a response."""


def parse_json_text(text: str) -> Any:
    """
    Strict parse → extract {...} → parse.

    The fallback covers models that wrap the JSON object in commentary or
    markdown fences. If neither attempt parses, the JSONDecodeError propagates.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # first '{' through last '}'
        m = re.search(r"\{.*\}", text, re.DOTALL)
        if not m:
            raise
    return json.loads(m.group(0))


class CompletionLLM(Protocol):
    def complete(self, messages: list[Message]) -> Optional[str]:
        ...


@dataclass
class LLMConfig:
    provider: str
    model: str
    temperature: float = 0.5
    max_tokens: int = 200
    timeout_seconds: float = 30.0
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None


class OpenAILLM:
    def __init__(self, api_key: Optional[str], model: str, temperature: float, max_tokens: int, timeout: float):
        from openai import OpenAI

        self.client = None
        if api_key:
            # one attempt per item, no client-side retries
            self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        else:
            log.warning("OPENAI_API_KEY is missing; every analysis will fail until it is set")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def complete(self, messages: list[Message]) -> Optional[str]:
        from openai import OpenAIError

        if self.client is None:
            raise CompletionError("OPENAI_API_KEY is missing. Add it to .env")

        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            raise CompletionError(f"OpenAI request failed: {type(e).__name__}: {e}") from e

        if not resp.choices:
            return None
        return resp.choices[0].message.content


class GeminiLLM:
    def __init__(self, api_key: Optional[str], model: str, temperature: float, max_tokens: int, timeout: float):
        from google import genai
        from google.genai import types

        self._types = types
        self.client = None
        if api_key:
            self.client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(timeout * 1000)),
            )
        else:
            log.warning("GEMINI_API_KEY is missing; every analysis will fail until it is set")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def complete(self, messages: list[Message]) -> Optional[str]:
        if self.client is None:
            raise CompletionError("GEMINI_API_KEY is missing. Add it to .env")

        system = "\n".join(m["content"] for m in messages if m["role"] == "system")
        user = "\n".join(m["content"] for m in messages if m["role"] != "system")

        try:
            resp = self.client.models.generate_content(
                model=self.model,
                contents=user,
                config=self._types.GenerateContentConfig(
                    system_instruction=[system],
                    response_mime_type="application/json",
                    temperature=self.temperature,
                    max_output_tokens=self.max_tokens,
                ),
            )
        except Exception as e:
            raise CompletionError(f"Gemini request failed: {type(e).__name__}: {e}") from e

        return resp.text


def build_llm(cfg: LLMConfig) -> CompletionLLM:
    provider = (cfg.provider or "").lower().strip()

    if provider == "openai":
        return OpenAILLM(
            api_key=cfg.openai_api_key,
            model=cfg.model,
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
            timeout=cfg.timeout_seconds,
        )

    if provider == "gemini":
        return GeminiLLM(
            api_key=cfg.gemini_api_key,
            model=cfg.model,
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
            timeout=cfg.timeout_seconds,
        )

    raise ValueError(f"Unsupported llm provider: {cfg.provider}. Use provider: openai or gemini")
