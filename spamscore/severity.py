"""
Severity tiers and the two classification rules.

  match severity      intrinsic weight of the rule that fired
  aggregate severity  total score against the configured thresholds
"""

from __future__ import annotations

from enum import Enum

from spamscore.config import DEFAULT_CONFIG, ScoringConfig

# Per-match cut-offs. Applied to the rule weight, never the multiplied weight.
MATCH_CRITICAL_WEIGHT = 2.0
MATCH_WARNING_WEIGHT = 1.0


class Severity(str, Enum):
    MILD = "mild"
    WARNING = "warning"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value


def match_severity(weight: float) -> Severity:
    """Classify a single rule weight."""
    if weight >= MATCH_CRITICAL_WEIGHT:
        return Severity.CRITICAL
    if weight >= MATCH_WARNING_WEIGHT:
        return Severity.WARNING
    return Severity.MILD


def aggregate_severity(score: float, config: ScoringConfig = DEFAULT_CONFIG) -> Severity:
    """Classify a total (or combined) score."""
    if score >= config.critical_threshold:
        return Severity.CRITICAL
    if score >= config.warning_threshold:
        return Severity.WARNING
    return Severity.MILD
