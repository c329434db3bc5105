"""
Email Analyzer — subject + body in one report.

The subject is scored as a subject line (multiplier applied), the body as
plain text. Totals add up; matches are concatenated subject-first, since
spans are local to each text.

Usage:
    from spamscore.analyzer import email_analyzer
    report = email_analyzer.analyze("You won!", "Claim your prize now.")
    report.overall_tier, report.combined_score
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, Optional

from spamscore.config import DEFAULT_CONFIG, ScoringConfig
from spamscore.logging import get_logger
from spamscore.matcher import Match
from spamscore.rules import DEFAULT_RULES, RuleTable
from spamscore.scorer import AnalysisResult, score_text
from spamscore.severity import Severity, aggregate_severity

logger = get_logger("analyzer")


@dataclass(frozen=True)
class EmailReport:
    """Combined verdict for one email."""
    subject_result: AnalysisResult
    body_result: AnalysisResult
    combined_score: float
    overall_tier: Severity
    should_flag: bool
    all_matches: tuple[Match, ...]   # Subject matches, then body matches

    def to_dict(self) -> dict:
        return {
            "subject_result": self.subject_result.to_dict(),
            "body_result": self.body_result.to_dict(),
            "combined_score": self.combined_score,
            "overall_tier": self.overall_tier.value,
            "should_flag": self.should_flag,
            "all_matches": [m.to_dict() for m in self.all_matches],
        }


class EmailAnalyzer:
    """
    Scores emails against a fixed rule table and configuration.

    Holds no mutable state, so one instance can serve any number of
    concurrent callers. Build a separate instance to try alternate
    thresholds or an alternate rule table.
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        rules: Optional[RuleTable] = None,
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.rules = rules if rules is not None else DEFAULT_RULES

    def score(self, text: Optional[str], is_subject_line: bool = False) -> AnalysisResult:
        """Score a single text. None is treated as empty."""
        return score_text(text or "", is_subject_line, self.config, self.rules)

    def analyze(self, subject: Optional[str], body: Optional[str]) -> EmailReport:
        """Score subject and body and combine them into one report."""
        start = time.perf_counter()

        subject_result = self.score(subject, is_subject_line=True)
        body_result = self.score(body, is_subject_line=False)
        combined = subject_result.total_score + body_result.total_score

        report = EmailReport(
            subject_result=subject_result,
            body_result=body_result,
            combined_score=combined,
            overall_tier=aggregate_severity(combined, self.config),
            should_flag=combined >= self.config.flag_threshold,
            all_matches=subject_result.matches + body_result.matches,
        )

        logger.debug(
            "Email analyzed",
            extra={
                "combined_score": round(combined, 2),
                "tier": report.overall_tier.value,
                "matches_count": len(report.all_matches),
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return report

    def get_rules(self) -> list[dict]:
        """Return the active rule table as plain dicts."""
        return self.rules.describe()


# ============================================================
# SINGLETON: default config and rule table, never mutated
# ============================================================

email_analyzer = EmailAnalyzer()


def analyze_email(
    subject: Optional[str],
    body: Optional[str],
    config: ScoringConfig = DEFAULT_CONFIG,
    rules: RuleTable = DEFAULT_RULES,
) -> EmailReport:
    """Functional entry point; equivalent to EmailAnalyzer(config, rules).analyze()."""
    return EmailAnalyzer(config, rules).analyze(subject, body)


# ============================================================
# PRESENTATION HELPERS
# ============================================================

def trigger_summary(matches: Iterable[Match]) -> dict[str, dict]:
    """
    Group matches by lower-cased text.

    Each entry keeps the highest weight seen for that text and the tier
    of the match that carried it, plus an occurrence count.
    """
    summary: dict[str, dict] = {}
    for m in matches:
        key = m.text.lower()
        entry = summary.get(key)
        if entry is None:
            summary[key] = {"tier": m.tier.value, "weight": m.weight, "count": 1}
            continue
        entry["count"] += 1
        if m.weight > entry["weight"]:
            entry["weight"] = m.weight
            entry["tier"] = m.tier.value
    return summary


def find_trigger_phrases(
    text: str,
    config: ScoringConfig = DEFAULT_CONFIG,
    rules: RuleTable = DEFAULT_RULES,
) -> list[str]:
    """Distinct lower-cased matched texts, in order of first appearance."""
    result = score_text(text, config=config, rules=rules)
    return list(dict.fromkeys(m.text.lower() for m in result.matches))


def count_words(text: str) -> int:
    """Whitespace-delimited word count."""
    return len(text.split())
