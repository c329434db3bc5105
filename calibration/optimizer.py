"""
Threshold Optimizer — Warning Threshold Calibration

Takes benchmark results and recommends a warning threshold that best
separates spam from ham on the corpus.

The optimizer does NOT auto-apply changes. It produces a recommendation
that a human reviews before setting SPAMSCORE_WARNING_THRESHOLD.

Method:
  - Candidates are the observed unrounded scores that fall between the
    flag and critical thresholds, plus the current warning threshold.
  - An email counts as predicted spam when its score reaches the
    candidate (the warning tier starts there).
  - The candidate with the best F1 wins; ties go to the lower threshold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from spamscore.config import DEFAULT_CONFIG, ScoringConfig
from calibration.benchmark import BenchmarkResult


@dataclass
class ThresholdCandidate:
    """Metrics for one candidate warning threshold."""
    threshold: float
    true_positives: int
    false_positives: int
    false_negatives: int
    precision: float
    recall: float
    f1: float


@dataclass
class ThresholdRecommendation:
    """Full optimization output."""
    current_threshold: float
    recommended_threshold: float
    current_f1: float
    recommended_f1: float
    candidates: list[ThresholdCandidate]
    summary: str


def _evaluate(threshold: float, pairs: list[tuple[float, bool]]) -> ThresholdCandidate:
    tp = sum(1 for score, is_spam in pairs if is_spam and score >= threshold)
    fp = sum(1 for score, is_spam in pairs if not is_spam and score >= threshold)
    fn = sum(1 for score, is_spam in pairs if is_spam and score < threshold)

    precision = tp / (tp + fp) if (tp + fp) > 0 else 0.0
    recall = tp / (tp + fn) if (tp + fn) > 0 else 0.0
    f1 = 2 * precision * recall / (precision + recall) if (precision + recall) > 0 else 0.0

    return ThresholdCandidate(
        threshold=threshold,
        true_positives=tp,
        false_positives=fp,
        false_negatives=fn,
        precision=round(precision, 4),
        recall=round(recall, 4),
        f1=round(f1, 4),
    )


def recommend_thresholds(
    result: BenchmarkResult,
    config: Optional[ScoringConfig] = None,
) -> ThresholdRecommendation:
    """
    Sweep warning thresholds over the observed scores.

    Args:
        result: Output of run_benchmark.
        config: The configuration the benchmark ran with.

    Returns:
        ThresholdRecommendation. Candidates are sorted by threshold.
    """
    config = config if config is not None else DEFAULT_CONFIG
    pairs = [(p["raw_score"], p["label"] == "spam") for p in result.score_pairs]

    thresholds = {config.warning_threshold}
    for score, _ in pairs:
        if config.flag_threshold <= score <= config.critical_threshold:
            thresholds.add(score)

    candidates = [_evaluate(t, pairs) for t in sorted(thresholds)]
    current = next(c for c in candidates if c.threshold == config.warning_threshold)

    # Ascending sweep with strict improvement keeps the lowest threshold on ties
    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate.f1 > best.f1:
            best = candidate

    if best.threshold == current.threshold:
        summary = (
            f"Current warning threshold {current.threshold} is already optimal "
            f"on this corpus (F1 {current.f1:.1%}). No change recommended."
        )
    else:
        summary = (
            f"Moving the warning threshold from {current.threshold} to "
            f"{best.threshold} gives F1 {best.f1:.1%} (currently {current.f1:.1%}), "
            f"with {best.false_positives} false alarms and {best.false_negatives} misses."
        )

    return ThresholdRecommendation(
        current_threshold=current.threshold,
        recommended_threshold=best.threshold,
        current_f1=current.f1,
        recommended_f1=best.f1,
        candidates=candidates,
        summary=summary,
    )


def format_optimization_report(report: ThresholdRecommendation) -> str:
    """Format the threshold recommendation for human review."""
    lines = [
        "=" * 60,
        "SPAMSCORE THRESHOLD OPTIMIZATION REPORT",
        "=" * 60,
        "",
        report.summary,
        "",
        "--- CANDIDATES ---",
        f"{'Threshold':>10} {'Prec':>6} {'Recall':>6} {'F1':>6} {'TP':>4} {'FP':>4} {'FN':>4}",
        "-" * 48,
    ]

    for c in report.candidates:
        marker = " *" if c.threshold == report.recommended_threshold else ""
        lines.append(
            f"{c.threshold:>10.2f} {c.precision:>5.0%} {c.recall:>6.0%} "
            f"{c.f1:>5.0%} {c.true_positives:>4} {c.false_positives:>4} "
            f"{c.false_negatives:>4}{marker}"
        )

    lines.extend(["", "=" * 60])
    return "\n".join(lines)
