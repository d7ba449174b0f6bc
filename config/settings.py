"""
Synthesis Settings
==================
Voice, output and advanced settings read by the estimator and by any
future synthesis backend. Updated in place by partial updates.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Literal

from studio.errors import SettingsError


SAMPLE_RATES = (22050, 44100, 48000)
BITRATES = (64, 128, 192, 320)
OUTPUT_FORMATS = ("mp3", "m4b")
MODEL_TIERS = ("standard", "neural", "premium")


@dataclass
class VoiceSettings:
    """Voice selection and delivery."""
    language: str = "en-US"
    voice_id: str = "aria"
    emotion: int = 30  # 0-100, calm to energetic
    rate: float = 1.0
    pitch: int = 0

    def check(self) -> None:
        _check_range("voice", "emotion", self.emotion, 0, 100)
        _check_range("voice", "rate", self.rate, 0.5, 2.0)
        _check_range("voice", "pitch", self.pitch, -20, 20)


@dataclass
class OutputSettings:
    """Container and encoding options."""
    format: Literal["mp3", "m4b"] = "mp3"
    sample_rate: int = 44100
    bitrate: int = 128
    chapter_detection: bool = True
    normalize_audio: bool = True
    background_music: bool = False
    bg_music_volume: int = 20

    def check(self) -> None:
        _check_choice("output", "format", self.format, OUTPUT_FORMATS)
        _check_choice("output", "sample_rate", self.sample_rate, SAMPLE_RATES)
        _check_choice("output", "bitrate", self.bitrate, BITRATES)
        _check_range("output", "bg_music_volume", self.bg_music_volume, 0, 50)


@dataclass
class AdvancedSettings:
    """Model tier, raw SSML and pronunciation overrides."""
    model: Literal["standard", "neural", "premium"] = "neural"
    ssml: str = ""
    pronunciation_dict: dict[str, str] = field(default_factory=dict)

    def check(self) -> None:
        _check_choice("advanced", "model", self.model, MODEL_TIERS)


def _check_range(group: str, name: str, value, low, high) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SettingsError(group, name, details=f"expected a number, got {value!r}")
    if not low <= value <= high:
        raise SettingsError(group, name, details=f"{value} not in [{low}, {high}]")


def _check_choice(group: str, name: str, value, choices) -> None:
    if value not in choices:
        raise SettingsError(group, name, details=f"{value!r} not one of {list(choices)}")


@dataclass
class Settings:
    """Process-wide synthesis settings."""

    voice: VoiceSettings = field(default_factory=VoiceSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    advanced: AdvancedSettings = field(default_factory=AdvancedSettings)

    def update(self, group: str, **changes) -> None:
        """
        Apply a partial update to one settings group.

        The candidate is validated before anything is written, so a rejected
        update leaves the current values untouched.

        Raises:
            SettingsError: unknown field or out-of-range value
        """
        current = getattr(self, group)
        known = {f.name for f in fields(current)}
        for name in changes:
            if name not in known:
                raise SettingsError(group, name, details="no such field", unknown=True)

        candidate = replace(current, **changes)
        candidate.check()
        for name, value in changes.items():
            setattr(current, name, value)

    def copy(self) -> "Settings":
        return Settings(
            voice=replace(self.voice),
            output=replace(self.output),
            advanced=replace(
                self.advanced,
                pronunciation_dict=dict(self.advanced.pronunciation_dict),
            ),
        )
