from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from quote_geometry.schemas.analysis import (
    AnalysisFailure,
    AnalysisResult,
    AnalysisSuccess,
    QuoteAnalysis,
)
from quote_geometry.services.llm_client import CompletionError, CompletionLLM, Message, parse_json_text

log = logging.getLogger(__name__)

# Fixed batch cap per request; not configurable.
MAX_QUOTES = 2

FAILURE_MESSAGE = "Failed to analyze quote"

SYSTEM_PROMPT = (
    "You are an assistant that analyzes famous quotes. "
    "For each quote you will produce a JSON object with the following keys: "
    '"sentiment", "intensity", "complexity", "agency" (all numbers between 0 and 1), '
    'and "themes" (an array of exactly three concise one-word themes). '
    "Output only valid JSON. Do not include any explanatory text."
)

USER_TEMPLATE = 'Analyze the following quote and return the JSON object. Quote: "{quote}"'


def build_messages(quote: Any) -> List[Message]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_TEMPLATE.format(quote=quote)},
    ]


class QuoteAnalyzer:
    """
    Runs one completion per quote and turns the reply into a QuoteAnalysis.

    Never raises: API failures, empty replies, unparsable JSON and replies that
    don't match the schema are logged and reported as None.
    """

    def __init__(self, llm: CompletionLLM):
        self.llm = llm

    def analyze(self, quote: Any) -> Optional[QuoteAnalysis]:
        try:
            content = self.llm.complete(build_messages(quote))
            if not content:
                raise CompletionError("Empty response from completion API")

            parsed = parse_json_text(content)
            return QuoteAnalysis.model_validate(parsed)
        except Exception as e:
            # detail stays in the log, callers only see FAILURE_MESSAGE
            log.warning("Error analyzing quote: %s: %s", type(e).__name__, e)
            return None

    def analyze_many(self, quotes: Sequence[Any]) -> List[AnalysisResult]:
        results: List[AnalysisResult] = []
        for quote in list(quotes)[:MAX_QUOTES]:
            analysis = self.analyze(quote)
            if analysis is not None:
                results.append(AnalysisSuccess(quote=quote, analysis=analysis))
            else:
                results.append(AnalysisFailure(quote=quote, error=FAILURE_MESSAGE))
        return results
