"""
Tests for the calibration framework.

Tests cover:
  - Corpus parser (format parsing, edge cases)
  - Benchmark runner (metric calculation, report generation)
  - Threshold optimizer (sweep and tie-breaking)
  - Calibration CLI
"""

import json
import textwrap
from pathlib import Path

import pytest

from calibration.corpus_parser import (
    CalibrationSample,
    parse_corpus,
    parse_all_corpora,
    _parse_block,
)
from calibration.benchmark import (
    run_benchmark,
    format_report,
    save_report,
    BenchmarkResult,
)
from calibration.optimizer import recommend_thresholds, format_optimization_report
from spamscore.config import ScoringConfig

# Absolute path to the seed corpus (works regardless of CWD)
REPO_ROOT = Path(__file__).resolve().parent.parent
SEED_CORPUS = REPO_ROOT / "calibration" / "corpus"


def _write_corpus(tmp_path, content, name="test.txt"):
    corpus = tmp_path / name
    corpus.write_text(textwrap.dedent(content), encoding="utf-8")
    return corpus


# One of each confusion-matrix cell:
#   spam scored critical (TP), spam scored 0 (FN),
#   ham scored 0.5 (TN), ham scored critical (FP)
MIXED_CORPUS = """\
    ---
    label: spam
    subject: lottery
    source: tp

    ---
    label: spam
    source: fn
    notes: slips through

    hello there

    ---
    label: ham
    source: tn

    prize

    ---
    label: ham
    subject: lottery
    source: fp

    ---
"""


# ============================================================
# Corpus Parser Tests
# ============================================================

class TestCorpusParser:

    def test_parse_single_sample(self, tmp_path):
        corpus = _write_corpus(tmp_path, """\
            ---
            label: spam
            subject: You Won
            severity: critical
            source: test trap
            notes: test note

            Claim your prize today.

            ---
        """)
        samples = parse_corpus(corpus)
        assert len(samples) == 1
        s = samples[0]
        assert s.label == "spam"
        assert s.subject == "You Won"
        assert s.severity == "critical"
        assert s.source == "test trap"
        assert s.notes == "test note"
        assert s.body == "Claim your prize today."
        assert s.is_spam

    def test_defaults(self, tmp_path):
        corpus = _write_corpus(tmp_path, """\
            ---
            Just a plain note.
            ---
        """)
        s = parse_corpus(corpus)[0]
        assert s.label == "ham"
        assert s.severity == "mild"
        assert s.subject == ""
        assert s.source == "unknown"
        assert not s.is_spam

    def test_spam_defaults_to_critical(self, tmp_path):
        corpus = _write_corpus(tmp_path, """\
            ---
            label: spam

            Buy things.
            ---
        """)
        assert parse_corpus(corpus)[0].severity == "critical"

    def test_multiline_body(self, tmp_path):
        corpus = _write_corpus(tmp_path, """\
            ---
            label: ham

            Hi team,

            See you Tuesday.
            ---
        """)
        assert parse_corpus(corpus)[0].body == "Hi team,\n\nSee you Tuesday."

    def test_subject_only_sample(self, tmp_path):
        corpus = _write_corpus(tmp_path, """\
            ---
            label: spam
            subject: lottery
            ---
        """)
        s = parse_corpus(corpus)[0]
        assert s.subject == "lottery"
        assert s.body == ""

    def test_comment_only_block_skipped(self, tmp_path):
        corpus = _write_corpus(tmp_path, """\
            # header comment
            # another
            ---
            label: ham

            Real sample.
            ---
        """)
        assert len(parse_corpus(corpus)) == 1

    def test_multiple_samples(self, tmp_path):
        corpus = _write_corpus(tmp_path, MIXED_CORPUS)
        samples = parse_corpus(corpus)
        assert [s.source for s in samples] == ["tp", "fn", "tn", "fp"]

    def test_invalid_label(self):
        with pytest.raises(ValueError, match="label"):
            _parse_block("label: maybe\n\nsome text")

    def test_invalid_severity(self):
        with pytest.raises(ValueError, match="severity"):
            _parse_block("label: spam\nseverity: extreme\n\nsome text")

    def test_empty_block(self):
        assert _parse_block("label: ham\nsource: x") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_corpus(tmp_path / "nope.txt")

    def test_parse_all_corpora(self, tmp_path):
        _write_corpus(tmp_path, "---\nlabel: ham\n\nfirst\n---\n", name="a.txt")
        _write_corpus(tmp_path, "---\nlabel: spam\n\nsecond\n---\n", name="b.txt")
        (tmp_path / "ignored.md").write_text("not a corpus", encoding="utf-8")
        samples = parse_all_corpora(tmp_path)
        assert [s.body for s in samples] == ["first", "second"]

    def test_seed_corpus_parses(self):
        samples = parse_all_corpora(SEED_CORPUS)
        assert any(s.is_spam for s in samples)
        assert any(not s.is_spam for s in samples)
        assert all(isinstance(s, CalibrationSample) for s in samples)


# ============================================================
# Benchmark Tests
# ============================================================

class TestBenchmark:

    @pytest.fixture
    def mixed(self, tmp_path):
        _write_corpus(tmp_path, MIXED_CORPUS)
        return run_benchmark(corpus_dir=tmp_path)

    def test_confusion_matrix(self, mixed):
        assert (mixed.true_positives, mixed.false_negatives,
                mixed.false_positives, mixed.true_negatives) == (1, 1, 1, 1)

    def test_metrics(self, mixed):
        assert mixed.total_samples == 4
        assert mixed.spam_samples == 2
        assert mixed.ham_samples == 2
        assert mixed.precision == 0.5
        assert mixed.recall == 0.5
        assert mixed.f1 == 0.5
        assert mixed.accuracy == 0.5

    def test_scores(self, mixed):
        assert mixed.avg_score_spam == 3.0
        assert mixed.avg_score_ham == 3.25
        assert mixed.score_separation == -0.25

    def test_tier_agreement(self, mixed):
        assert mixed.tier_agreement == 0.5

    def test_review_lists(self, mixed):
        assert [m["source"] for m in mixed.misses] == ["fn"]
        assert [a["source"] for a in mixed.false_alarms] == ["fp"]
        assert mixed.false_alarms[0]["matches"] == ["lottery"]

    def test_custom_config(self, tmp_path):
        _write_corpus(tmp_path, MIXED_CORPUS)
        config = ScoringConfig(warning_threshold=7.0, critical_threshold=9.0)
        result = run_benchmark(corpus_dir=tmp_path, config=config)
        assert result.true_positives == 0
        assert result.false_positives == 0

    def test_empty_corpus_raises(self, tmp_path):
        with pytest.raises(ValueError):
            run_benchmark(corpus_dir=tmp_path)

    def test_seed_corpus_separates_spam_from_ham(self):
        result = run_benchmark(corpus_dir=SEED_CORPUS)
        assert result.recall == 1.0
        assert result.f1 >= 0.9
        assert result.score_separation > 0

    def test_format_report(self, mixed):
        report = format_report(mixed)
        assert "SPAMSCORE CALIBRATION REPORT" in report
        assert "MISSES" in report
        assert "FALSE ALARMS" in report

    def test_save_report(self, mixed, tmp_path):
        out = tmp_path / "reports"
        report_path, json_path = save_report(mixed, out)
        assert report_path.exists()
        data = json.loads(json_path.read_text(encoding="utf-8"))
        assert data["confusion"] == {"tp": 1, "fp": 1, "fn": 1, "tn": 1}
        assert data["overall"]["f1"] == 0.5
        assert len(data["score_pairs"]) == 4

    def test_score_pairs_keep_raw_score(self, mixed):
        for pair in mixed.score_pairs:
            assert pair["combined_score"] == round(pair["raw_score"], 2)


# ============================================================
# Optimizer Tests
# ============================================================

def _result(pairs):
    """Minimal BenchmarkResult carrying only the score pairs the optimizer reads."""
    return BenchmarkResult(
        total_samples=len(pairs), spam_samples=0, ham_samples=0,
        true_positives=0, false_positives=0, false_negatives=0, true_negatives=0,
        accuracy=0.0, precision=0.0, recall=0.0, f1=0.0,
        avg_score_spam=0.0, avg_score_ham=0.0, score_separation=0.0, tier_agreement=0.0,
        misses=[], false_alarms=[],
        score_pairs=[{"combined_score": round(s, 2), "raw_score": s, "label": label}
                     for s, label in pairs],
    )


class TestOptimizer:

    def test_recommends_lower_threshold(self):
        result = _result([(0.5, "spam"), (0.0, "ham"), (6.0, "spam")])
        rec = recommend_thresholds(result)
        assert rec.current_threshold == 3.0
        assert rec.recommended_threshold == 0.5
        assert rec.recommended_f1 == 1.0
        assert rec.current_f1 == pytest.approx(0.6667)

    def test_tie_keeps_lowest_threshold(self):
        result = _result([(6.0, "spam"), (0.0, "spam"), (0.5, "ham"), (6.0, "ham")])
        rec = recommend_thresholds(result)
        # 3.0 and 6.0 both give F1 0.5; 0.5 gives less
        assert rec.recommended_threshold == 3.0
        assert "No change" in rec.summary

    def test_candidates_within_flag_and_critical(self):
        result = _result([(0.2, "ham"), (4.0, "spam"), (9.0, "spam")])
        rec = recommend_thresholds(result)
        thresholds = [c.threshold for c in rec.candidates]
        assert thresholds == [3.0, 4.0]

    def test_uses_given_config(self):
        config = ScoringConfig(warning_threshold=2.0, critical_threshold=4.0)
        rec = recommend_thresholds(_result([(3.0, "spam"), (1.0, "ham")]), config)
        assert rec.current_threshold == 2.0

    def test_sweeps_unrounded_scores(self):
        # 2.996 would display as 3.0 but falls short of the 3.0 threshold
        rec = recommend_thresholds(_result([(2.996, "spam"), (0.0, "ham")]))
        assert rec.current_f1 == 0.0
        assert rec.recommended_threshold == 2.996
        assert rec.recommended_f1 == 1.0

    def test_format(self):
        rec = recommend_thresholds(_result([(0.5, "spam"), (0.0, "ham"), (6.0, "spam")]))
        text = format_optimization_report(rec)
        assert "THRESHOLD OPTIMIZATION REPORT" in text
        assert "0.50" in text


# ============================================================
# CLI Tests
# ============================================================

class TestCalibrationCLI:

    def test_seed_corpus_passes(self, tmp_path, capsys):
        from run_calibration import main

        code = main(["--corpus-dir", str(SEED_CORPUS), "--output-dir", str(tmp_path), "--optimize"])
        assert code == 0
        out = capsys.readouterr().out
        assert "SPAMSCORE CALIBRATION REPORT" in out
        assert (tmp_path / "calibration_report.json").exists()

    def test_failing_corpus_exit_code(self, tmp_path):
        from run_calibration import main

        corpus = tmp_path / "corpus"
        corpus.mkdir()
        _write_corpus(corpus, """\
            ---
            label: spam

            hello there
            ---
            label: ham

            see you tuesday
            ---
        """)
        code = main(["--corpus-dir", str(corpus), "--output-dir", str(tmp_path / "out")])
        assert code == 2

    def test_missing_corpus_dir(self, tmp_path):
        from run_calibration import main
        assert main(["--corpus-dir", str(tmp_path / "missing")]) == 1

    def test_json_output(self, tmp_path, capsys):
        from run_calibration import main

        main(["--corpus-dir", str(SEED_CORPUS), "--output-dir", str(tmp_path), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["total_samples"] > 0

    def test_json_output_stays_clean_with_debug_logging(self, tmp_path, capsys, monkeypatch):
        import logging
        from run_calibration import main

        monkeypatch.setenv("SPAMSCORE_LOG_LEVEL", "DEBUG")
        try:
            main(["--corpus-dir", str(SEED_CORPUS), "--output-dir", str(tmp_path), "--json"])
            captured = capsys.readouterr()
        finally:
            root = logging.getLogger("spamscore")
            root.handlers.clear()
            root.setLevel(logging.NOTSET)
        assert json.loads(captured.out)["total_samples"] > 0
        assert "Benchmark" in captured.err
