"""
SpamScore — Weighted Spam Scoring Engine for Email Text

Deterministic, rule-based, no network calls. Scores a subject and body
against a static table of phrase and pattern rules and reports a severity
tier plus the spans that triggered it.

Public API:
  - analyze_email:  Subject + body -> EmailReport
  - score_text:     One text (subject or body) -> AnalysisResult
  - find_matches:   Raw rule occurrences, deduplicated by span
  - EmailAnalyzer:  Bound config + rule table (email_analyzer is the default)
  - ScoringConfig:  Thresholds and subject multiplier
  - RuleTable:      Phrase and pattern rules (DEFAULT_RULES)

Usage:
    from spamscore import analyze_email
    report = analyze_email("You won!", "Click here to claim your prize.")
    print(report.overall_tier, report.combined_score)
"""

__version__ = "1.0.0"

from spamscore.config import ScoringConfig, DEFAULT_CONFIG, settings
from spamscore.severity import Severity, match_severity, aggregate_severity
from spamscore.rules import (
    PhraseRule,
    PatternRule,
    RuleTable,
    DEFAULT_RULES,
    build_highlight_pattern,
)
from spamscore.matcher import Match, Span, find_matches
from spamscore.scorer import AnalysisResult, score_text
from spamscore.analyzer import (
    EmailAnalyzer,
    EmailReport,
    email_analyzer,
    analyze_email,
    trigger_summary,
    find_trigger_phrases,
    count_words,
)

__all__ = [
    "ScoringConfig",
    "DEFAULT_CONFIG",
    "settings",
    "Severity",
    "match_severity",
    "aggregate_severity",
    "PhraseRule",
    "PatternRule",
    "RuleTable",
    "DEFAULT_RULES",
    "build_highlight_pattern",
    "Match",
    "Span",
    "find_matches",
    "AnalysisResult",
    "score_text",
    "EmailAnalyzer",
    "EmailReport",
    "email_analyzer",
    "analyze_email",
    "trigger_summary",
    "find_trigger_phrases",
    "count_words",
]
