"""
Spam Score Calculator

Turns raw matches into an AnalysisResult for one piece of text.

Scoring:
  - Empty / whitespace-only text scores 0 without running the matcher.
  - Subject lines multiply every match weight by config.subject_multiplier.
  - Match tier comes from the rule weight, so a mild rule stays mild even
    when the subject multiplier pushes its weight past 1.0 or 2.0.
  - total = sum(rule weights) x multiplier
  - tier  = aggregate severity of total; should_flag = total >= flag_threshold
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from spamscore.config import DEFAULT_CONFIG, ScoringConfig
from spamscore.matcher import Match, find_matches
from spamscore.rules import DEFAULT_RULES, RuleTable
from spamscore.severity import Severity, aggregate_severity


@dataclass(frozen=True)
class AnalysisResult:
    """
    Result of scoring one text in one context (subject or body).

    total_score is sum(rule weights) x multiplier. Each match carries its
    already-scaled weight, so summing matches[i].weight can differ from
    total_score in the last float digits when the multiplier is not 1.0.
    """
    total_score: float
    matches: tuple[Match, ...]     # Ascending by span.start
    tier: Severity
    should_flag: bool

    def to_dict(self) -> dict:
        return {
            "total_score": self.total_score,
            "matches": [m.to_dict() for m in self.matches],
            "tier": self.tier.value,
            "should_flag": self.should_flag,
        }


EMPTY_RESULT = AnalysisResult(
    total_score=0.0, matches=(), tier=Severity.MILD, should_flag=False,
)


def score_text(
    text: str,
    is_subject_line: bool = False,
    config: ScoringConfig = DEFAULT_CONFIG,
    rules: RuleTable = DEFAULT_RULES,
) -> AnalysisResult:
    """
    Score a single piece of text.

    Args:
        text: The text to score.
        is_subject_line: Apply the subject multiplier.
        config: Thresholds and multiplier.
        rules: Rule table to match against.

    Returns:
        AnalysisResult with matches ordered by span start.
    """
    if not text or not text.strip():
        return EMPTY_RESULT

    raw = find_matches(text, rules)
    multiplier = config.subject_multiplier if is_subject_line else 1.0

    # Sum before multiplying so subject/body totals differ by exactly the multiplier
    total = sum(m.weight for m in raw) * multiplier
    matches = tuple(replace(m, weight=m.weight * multiplier) for m in raw)

    return AnalysisResult(
        total_score=total,
        matches=matches,
        tier=aggregate_severity(total, config),
        should_flag=total >= config.flag_threshold,
    )
