"""
Benchmark Runner — Spam/Ham Precision, Recall, F1

Runs the calibration corpus through the analyzer and compares its
verdict against human labels. Produces:

  1. Confusion matrix (an email counts as predicted spam when its
     overall tier is warning or critical)
  2. Precision, recall, F1 and accuracy
  3. Score separation between spam and ham averages
  4. Tier agreement with the reviewer's expected severity
  5. Specific misses and false alarms for manual review
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from spamscore.analyzer import EmailAnalyzer
from spamscore.config import DEFAULT_CONFIG, ScoringConfig
from spamscore.logging import get_logger
from spamscore.severity import Severity
from calibration.corpus_parser import parse_all_corpora

logger = get_logger("calibration")


@dataclass
class BenchmarkResult:
    """Full benchmark output."""
    total_samples: int
    spam_samples: int
    ham_samples: int
    # Confusion matrix
    true_positives: int          # Spam flagged as spam
    false_positives: int         # Ham flagged as spam
    false_negatives: int         # Spam passed as ham
    true_negatives: int          # Ham passed as ham
    # Overall detection
    accuracy: float
    precision: float
    recall: float
    f1: float
    # Score analysis
    avg_score_spam: float
    avg_score_ham: float
    score_separation: float      # spam avg - ham avg
    tier_agreement: float        # Share of samples whose tier matches the human severity
    # Detailed results for review
    misses: list[dict]           # Spam the engine let through
    false_alarms: list[dict]     # Ham the engine flagged
    # Scoring data
    score_pairs: list[dict]      # (sample, engine score, human label)


def _ratio(num: int, denom: int) -> float:
    return num / denom if denom > 0 else 0.0


def _preview(subject: str, body: str) -> str:
    text = f"{subject} | {body}" if subject else body
    return text.replace("\n", " ")[:200]


def run_benchmark(
    corpus_dir: str | Path = "calibration/corpus",
    config: Optional[ScoringConfig] = None,
) -> BenchmarkResult:
    """
    Run the full calibration benchmark.

    1. Parse all corpus files
    2. Run each sample through the analyzer
    3. Compare the engine's tier against human labels
    4. Compute metrics

    Args:
        corpus_dir: Path to directory containing corpus .txt files.
        config: Thresholds to evaluate. Defaults to DEFAULT_CONFIG.

    Returns:
        BenchmarkResult with full metrics.
    """
    samples = parse_all_corpora(corpus_dir)

    if not samples:
        raise ValueError(f"No samples found in {corpus_dir}")

    analyzer = EmailAnalyzer(config=config if config is not None else DEFAULT_CONFIG)

    tp = fp = fn = tn = 0
    tier_hits = 0
    spam_scores = []
    ham_scores = []
    misses = []
    false_alarms = []
    score_pairs = []

    for sample in samples:
        report = analyzer.analyze(sample.subject, sample.body)
        tier = report.overall_tier
        predicted_spam = tier is not Severity.MILD

        sample.engine_result = {
            "combined_score": report.combined_score,
            "tier": tier.value,
            "should_flag": report.should_flag,
            "matches": [m.text for m in report.all_matches],
        }

        if tier.value == sample.severity:
            tier_hits += 1

        score_pairs.append({
            "text": _preview(sample.subject, sample.body)[:100],
            "source": sample.source,
            "combined_score": round(report.combined_score, 2),
            "raw_score": report.combined_score,   # Unrounded, for threshold sweeps
            "tier": tier.value,
            "label": sample.label,
            "human_severity": sample.severity,
        })

        detail = {
            "text": _preview(sample.subject, sample.body),
            "source": sample.source,
            "notes": sample.notes,
            "combined_score": round(report.combined_score, 2),
            "tier": tier.value,
            "matches": sample.engine_result["matches"],
        }

        if sample.is_spam:
            spam_scores.append(report.combined_score)
            if predicted_spam:
                tp += 1
            else:
                fn += 1
                misses.append(detail)
        else:
            ham_scores.append(report.combined_score)
            if predicted_spam:
                fp += 1
                false_alarms.append(detail)
            else:
                tn += 1

    precision = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)
    f1 = 2 * precision * recall / (precision + recall) if (precision + recall) > 0 else 0.0

    avg_spam = sum(spam_scores) / len(spam_scores) if spam_scores else 0.0
    avg_ham = sum(ham_scores) / len(ham_scores) if ham_scores else 0.0

    logger.debug(
        f"Benchmark complete: {len(samples)} samples, F1 {f1:.2f}",
        extra={"items": len(samples)},
    )

    return BenchmarkResult(
        total_samples=len(samples),
        spam_samples=len(spam_scores),
        ham_samples=len(ham_scores),
        true_positives=tp,
        false_positives=fp,
        false_negatives=fn,
        true_negatives=tn,
        accuracy=round(_ratio(tp + tn, len(samples)), 4),
        precision=round(precision, 4),
        recall=round(recall, 4),
        f1=round(f1, 4),
        avg_score_spam=round(avg_spam, 2),
        avg_score_ham=round(avg_ham, 2),
        score_separation=round(avg_spam - avg_ham, 2),
        tier_agreement=round(_ratio(tier_hits, len(samples)), 4),
        misses=misses,
        false_alarms=false_alarms,
        score_pairs=score_pairs,
    )


def format_report(result: BenchmarkResult) -> str:
    """Format benchmark results as a human-readable report."""
    lines = [
        "=" * 60,
        "SPAMSCORE CALIBRATION REPORT",
        "=" * 60,
        "",
        f"Samples: {result.total_samples} "
        f"({result.spam_samples} spam, {result.ham_samples} ham)",
        "",
        "--- CONFUSION MATRIX ---",
        f"{'':<14} {'pred spam':>10} {'pred ham':>10}",
        f"{'actual spam':<14} {result.true_positives:>10} {result.false_negatives:>10}",
        f"{'actual ham':<14} {result.false_positives:>10} {result.true_negatives:>10}",
        "",
        "--- OVERALL METRICS ---",
        f"Accuracy:  {result.accuracy:.1%}",
        f"Precision: {result.precision:.1%}",
        f"Recall:    {result.recall:.1%}",
        f"F1 Score:  {result.f1:.1%}",
        f"Tier agreement: {result.tier_agreement:.1%}",
        "",
        "--- SCORE ANALYSIS ---",
        f"Avg score (spam): {result.avg_score_spam}",
        f"Avg score (ham):  {result.avg_score_ham}",
        f"Separation gap:   {result.score_separation}",
    ]

    if result.misses:
        lines.extend([
            "",
            "--- MISSES (Spam the engine let through) ---",
        ])
        for miss in result.misses[:10]:
            lines.append(f"  [{miss['combined_score']}] {miss['text'][:80]}")
            if miss.get("notes"):
                lines.append(f"    Notes: {miss['notes']}")

    if result.false_alarms:
        lines.extend([
            "",
            "--- FALSE ALARMS (Engine flagged ham) ---",
        ])
        for alarm in result.false_alarms[:10]:
            lines.append(f"  [{alarm['combined_score']}] {alarm['text'][:80]}")
            lines.append(f"    Matched: {', '.join(alarm['matches'][:8])}")

    lines.extend(["", "=" * 60])
    return "\n".join(lines)


def report_to_dict(result: BenchmarkResult) -> dict:
    """Machine-readable form of a benchmark result."""
    return {
        "total_samples": result.total_samples,
        "spam_samples": result.spam_samples,
        "ham_samples": result.ham_samples,
        "confusion": {
            "tp": result.true_positives,
            "fp": result.false_positives,
            "fn": result.false_negatives,
            "tn": result.true_negatives,
        },
        "overall": {
            "accuracy": result.accuracy,
            "precision": result.precision,
            "recall": result.recall,
            "f1": result.f1,
            "tier_agreement": result.tier_agreement,
        },
        "scores": {
            "avg_spam": result.avg_score_spam,
            "avg_ham": result.avg_score_ham,
            "separation": result.score_separation,
        },
        "misses": result.misses,
        "false_alarms": result.false_alarms,
        "score_pairs": result.score_pairs,
    }


def save_report(result: BenchmarkResult, output_dir: str | Path = "calibration/reports"):
    """Save benchmark results as both human-readable report and JSON."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    report_path = output_dir / "calibration_report.txt"
    report_path.write_text(format_report(result), encoding="utf-8")

    json_path = output_dir / "calibration_report.json"
    json_path.write_text(json.dumps(report_to_dict(result), indent=2), encoding="utf-8")

    return report_path, json_path
