from pydantic import BaseModel, Field
from typing import Any, Union

class QuoteAnalysis(BaseModel):
    sentiment: float = Field(ge=0.0, le=1.0, strict=True)
    intensity: float = Field(ge=0.0, le=1.0, strict=True)
    complexity: float = Field(ge=0.0, le=1.0, strict=True)
    agency: float = Field(ge=0.0, le=1.0, strict=True)
    themes: list[str] = Field(min_length=3, max_length=3)

class AnalysisSuccess(BaseModel):
    quote: Any
    analysis: QuoteAnalysis

class AnalysisFailure(BaseModel):
    quote: Any
    error: str

AnalysisResult = Union[AnalysisSuccess, AnalysisFailure]

class AnalyzeResponse(BaseModel):
    results: list[AnalysisResult]

class ErrorResponse(BaseModel):
    error: str
