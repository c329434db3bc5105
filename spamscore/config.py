"""
SpamScore Configuration

Two layers:
  - ScoringConfig: the one value that tunes sensitivity (thresholds +
    subject multiplier). Passed explicitly into the scorer and analyzer.
  - Settings: process settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class ScoringConfig:
    """Thresholds and multiplier used to turn match weights into a verdict."""

    flag_threshold: float = 0.5       # Minimum score worth surfacing at all
    warning_threshold: float = 3.0    # Overall "warning" tier
    critical_threshold: float = 6.0   # Overall "critical" tier
    subject_multiplier: float = 1.5   # Applied only to subject lines

    def __post_init__(self):
        for name in ("flag_threshold", "warning_threshold", "critical_threshold"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if not (self.flag_threshold <= self.warning_threshold <= self.critical_threshold):
            raise ValueError(
                "Thresholds must satisfy flag <= warning <= critical, got "
                f"{self.flag_threshold} / {self.warning_threshold} / {self.critical_threshold}"
            )
        if self.subject_multiplier <= 1:
            raise ValueError(
                f"subject_multiplier must be greater than 1, got {self.subject_multiplier}"
            )

    def to_dict(self) -> dict:
        return {
            "flag_threshold": self.flag_threshold,
            "warning_threshold": self.warning_threshold,
            "critical_threshold": self.critical_threshold,
            "subject_multiplier": self.subject_multiplier,
        }


DEFAULT_CONFIG = ScoringConfig()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    VERSION: str = "1.0.0"

    # --- Scoring ---
    FLAG_THRESHOLD: float = float(
        os.getenv("SPAMSCORE_FLAG_THRESHOLD", str(DEFAULT_CONFIG.flag_threshold))
    )
    WARNING_THRESHOLD: float = float(
        os.getenv("SPAMSCORE_WARNING_THRESHOLD", str(DEFAULT_CONFIG.warning_threshold))
    )
    CRITICAL_THRESHOLD: float = float(
        os.getenv("SPAMSCORE_CRITICAL_THRESHOLD", str(DEFAULT_CONFIG.critical_threshold))
    )
    SUBJECT_MULTIPLIER: float = float(
        os.getenv("SPAMSCORE_SUBJECT_MULTIPLIER", str(DEFAULT_CONFIG.subject_multiplier))
    )

    # --- Input cap (worst case cost is text length x rule count) ---
    MAX_TEXT_LENGTH: int = int(os.getenv("SPAMSCORE_MAX_TEXT_LENGTH", "50000"))

    # --- Server ---
    HOST: str = os.getenv("SPAMSCORE_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("SPAMSCORE_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("SPAMSCORE_CORS_ORIGINS", "*")

    def scoring_config(self) -> ScoringConfig:
        """Build the validated scoring config these settings describe."""
        return ScoringConfig(
            flag_threshold=self.FLAG_THRESHOLD,
            warning_threshold=self.WARNING_THRESHOLD,
            critical_threshold=self.CRITICAL_THRESHOLD,
            subject_multiplier=self.SUBJECT_MULTIPLIER,
        )


settings = Settings()
