"""
Application Configuration
=========================
Engine configuration: simulated stage timing, estimate model constants and
upload limits.
"""

from dataclasses import dataclass, field
from decimal import Decimal


def _default_stage_durations() -> dict[str, float]:
    return {
        "uploading": 1.0,
        "chunking": 2.0,
        "synthesizing": 8.0,
        "merging": 2.0,
        "packaging": 1.0,
        "completed": 0.0,
    }


@dataclass
class AppConfig:
    """
    Application configuration.

    Attributes:
        time_scale: Multiplier applied to every stage duration
        sub_intervals: Progress updates published per stage
        stage_durations: Nominal seconds per stage
        nominal_duration_seconds: Duration reported for a finished audiobook
        minutes_per_page: Narration minutes per page for estimates
        cost_per_page: Price per page for estimates
        text_chars_per_page: Characters per page for pasted text
        max_files: Max files accepted per upload batch
        max_file_bytes: Max size of a single uploaded file
        skip_seconds: Seek step for the player skip controls
    """

    # Simulation
    time_scale: float = 1.0
    sub_intervals: int = 5
    stage_durations: dict[str, float] = field(default_factory=_default_stage_durations)
    nominal_duration_seconds: float = 1800.0

    # Estimate
    minutes_per_page: int = 2
    cost_per_page: Decimal = Decimal("0.05")
    text_chars_per_page: int = 2000

    # Intake
    max_files: int = 10
    max_file_bytes: int = 20 * 1024 * 1024

    # Playback
    skip_seconds: float = 10.0

    def __post_init__(self):
        """Normalize and validate values."""
        if not isinstance(self.cost_per_page, Decimal):
            self.cost_per_page = Decimal(str(self.cost_per_page))
        if self.sub_intervals < 1:
            raise ValueError(f"sub_intervals must be >= 1, got {self.sub_intervals}")
        if self.time_scale < 0:
            raise ValueError(f"time_scale must be >= 0, got {self.time_scale}")

    def stage_duration(self, stage: str) -> float:
        """Scaled duration for a stage in seconds."""
        return self.stage_durations.get(stage, 0.0) * self.time_scale

    @classmethod
    def from_dict(cls, config_dict: dict) -> "AppConfig":
        """
        Create config from dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            AppConfig instance
        """
        processed = dict(config_dict)
        if "stage_durations" in processed:
            durations = _default_stage_durations()
            durations.update({k: float(v) for k, v in processed["stage_durations"].items()})
            processed["stage_durations"] = durations
        if processed.get("cost_per_page") is not None:
            processed["cost_per_page"] = Decimal(str(processed["cost_per_page"]))
        return cls(**processed)

    def to_dict(self) -> dict:
        """
        Convert config to dictionary.

        Returns:
            Configuration dictionary
        """
        return {
            "time_scale": self.time_scale,
            "sub_intervals": self.sub_intervals,
            "stage_durations": dict(self.stage_durations),
            "nominal_duration_seconds": self.nominal_duration_seconds,
            "minutes_per_page": self.minutes_per_page,
            "cost_per_page": str(self.cost_per_page),
            "text_chars_per_page": self.text_chars_per_page,
            "max_files": self.max_files,
            "max_file_bytes": self.max_file_bytes,
            "skip_seconds": self.skip_seconds,
        }
