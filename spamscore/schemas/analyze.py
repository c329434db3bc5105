"""
API Schemas — Request and Response Models

Pydantic models for the SpamScore API.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from spamscore.config import settings

# Input cap: analysis cost grows with text length x rule count
MAX_TEXT_LENGTH = settings.MAX_TEXT_LENGTH


# ============================================================
# REQUESTS
# ============================================================

class AnalyzeRequest(BaseModel):
    """POST /analyze request body. Missing fields are treated as empty text."""
    subject: str = Field("", max_length=MAX_TEXT_LENGTH,
                         description="Email subject line.")
    body: str = Field("", max_length=MAX_TEXT_LENGTH,
                      description="Email body text.")

    model_config = {"json_schema_extra": {"examples": [
        {"subject": "CONGRATULATIONS! You Won $1,000,000!!!",
         "body": "Dear Winner, click here now to claim your prize!"},
    ]}}


class AnalyzeBatchRequest(BaseModel):
    """POST /analyze/batch request body."""
    items: list[AnalyzeRequest] = Field(..., min_length=1, max_length=100)


class ScoreRequest(BaseModel):
    """POST /score request body."""
    text: str = Field(..., max_length=MAX_TEXT_LENGTH,
                      description="Text to score.")
    is_subject_line: bool = Field(False, description="Apply the subject multiplier.")


# ============================================================
# RESPONSES
# ============================================================

class SpanResponse(BaseModel):
    start: int
    end: int


class MatchResponse(BaseModel):
    text: str
    weight: float
    tier: str
    span: SpanResponse
    rule: str


class AnalysisResponse(BaseModel):
    """POST /score response body."""
    total_score: float
    matches: list[MatchResponse]
    tier: str
    should_flag: bool


class EmailReportResponse(BaseModel):
    """POST /analyze response body."""
    subject_result: AnalysisResponse
    body_result: AnalysisResponse
    combined_score: float
    overall_tier: str
    should_flag: bool
    all_matches: list[MatchResponse]
    triggers: dict[str, dict] = Field(
        default_factory=dict,
        description="Per distinct matched text: tier, highest weight, count.",
    )


class AnalyzeBatchResponse(BaseModel):
    """POST /analyze/batch response body."""
    results: list[EmailReportResponse]
    total: int


class RuleResponse(BaseModel):
    kind: str
    group: str
    match: str
    weight: float
    label: str


class RulesResponse(BaseModel):
    """GET /rules response body."""
    version: str
    phrase_rules: int
    pattern_rules: int
    total_rules: int
    rules: list[RuleResponse]


class HealthResponse(BaseModel):
    status: str
    version: str
    total_rules: int
    config: dict[str, float]
