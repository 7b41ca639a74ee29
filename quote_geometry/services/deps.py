from __future__ import annotations

import logging
from functools import lru_cache

from quote_geometry.core.settings import get_settings
from quote_geometry.services.analyzer import QuoteAnalyzer
from quote_geometry.services.llm_client import LLMConfig, build_llm

log = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_analyzer() -> QuoteAnalyzer:
    settings = get_settings()

    llm_cfg = LLMConfig(
        provider=settings.llm_provider,
        model=settings.llm_model,
        temperature=float(settings.llm_temperature),
        max_tokens=int(settings.llm_max_tokens),
        timeout_seconds=float(settings.llm_timeout_seconds),
        openai_api_key=settings.OPENAI_API_KEY,
        gemini_api_key=settings.GEMINI_API_KEY,
    )
    log.info("Using %s model %s", llm_cfg.provider, llm_cfg.model)
    return QuoteAnalyzer(build_llm(llm_cfg))
