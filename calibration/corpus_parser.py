"""
Corpus Parser — Reads Labeled Calibration Emails

Parses the simple text format used for calibration corpus files.
Each sample is an email body preceded by metadata headers,
separated by '---' delimiters.

Format:
    ---
    label: spam
    subject: You Won $1,000,000!!!
    severity: critical
    source: spam trap, 2024-03
    notes: Classic lottery scam

    The email body goes here. It can span
    multiple lines.

    ---

label is spam or ham (default ham). severity is the tier a reviewer
expects for the whole email: mild, warning or critical.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

VALID_LABELS = ("spam", "ham")
VALID_SEVERITIES = ("mild", "warning", "critical")

_HEADER = re.compile(r"^(label|subject|severity|source|notes)\s*:\s*(.*)$", re.IGNORECASE)


@dataclass
class CalibrationSample:
    """A single labeled email from the calibration corpus."""
    subject: str
    body: str
    label: str                  # spam | ham
    severity: str               # Expected overall tier
    source: str                 # Where the email came from
    notes: str                  # Annotator notes

    # Populated after engine evaluation
    engine_result: Optional[dict] = None

    @property
    def is_spam(self) -> bool:
        return self.label == "spam"


def parse_corpus(filepath: str | Path) -> list[CalibrationSample]:
    """
    Parse a calibration corpus file into a list of samples.

    Args:
        filepath: Path to the corpus text file.

    Returns:
        List of CalibrationSample objects.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Corpus file not found: {filepath}")

    content = filepath.read_text(encoding="utf-8")

    # Split on lines that are just ---, including at start and end of file
    blocks = re.split(r"(?:^|\n)\s*---\s*(?:\n|$)", content)

    samples = []
    for block in blocks:
        block = block.strip()
        if not block:
            continue

        sample = _parse_block(block)
        if sample:
            samples.append(sample)

    return samples


def _parse_block(block: str) -> Optional[CalibrationSample]:
    """Parse a single sample block. Blocks with neither subject nor body are skipped."""
    metadata = {}
    body_lines = []
    in_body = False

    for line in block.split("\n"):
        stripped = line.strip()
        if not in_body:
            if stripped.startswith("#"):
                continue  # Comments only in the header area
            match = _HEADER.match(stripped)
            if match:
                metadata[match.group(1).lower()] = match.group(2).strip()
            elif stripped:
                # First non-header, non-empty line starts the body
                in_body = True
                body_lines.append(line)
        else:
            body_lines.append(line)

    body = "\n".join(body_lines).strip()
    subject = metadata.get("subject", "")
    if not body and not subject:
        return None

    label = metadata.get("label", "ham").lower()
    if label not in VALID_LABELS:
        raise ValueError(f"Invalid label {label!r}; expected one of {VALID_LABELS}")

    severity = metadata.get("severity", "critical" if label == "spam" else "mild").lower()
    if severity not in VALID_SEVERITIES:
        raise ValueError(
            f"Invalid severity {severity!r}; expected one of {VALID_SEVERITIES}"
        )

    return CalibrationSample(
        subject=subject,
        body=body,
        label=label,
        severity=severity,
        source=metadata.get("source", "unknown"),
        notes=metadata.get("notes", ""),
    )


def parse_all_corpora(corpus_dir: str | Path) -> list[CalibrationSample]:
    """Parse all .txt corpus files in a directory."""
    corpus_dir = Path(corpus_dir)
    samples = []
    for filepath in sorted(corpus_dir.glob("*.txt")):
        samples.extend(parse_corpus(filepath))
    return samples
