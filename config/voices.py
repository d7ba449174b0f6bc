"""
Voice Configuration
===================
Voice presets and narration languages offered by the studio.
"""

from dataclasses import dataclass
from typing import Literal


@dataclass
class Voice:
    """Voice preset configuration."""
    id: str
    name: str
    gender: Literal["male", "female"]
    accent: Literal["US", "UK", "AU"]
    preview: str


@dataclass
class Language:
    """Narration language."""
    code: str
    name: str


VOICES = {
    "aria": Voice(id="aria", name="Aria", gender="female", accent="US", preview="/voices/aria.mp3"),
    "roger": Voice(id="roger", name="Roger", gender="male", accent="UK", preview="/voices/roger.mp3"),
    "sarah": Voice(id="sarah", name="Sarah", gender="female", accent="US", preview="/voices/sarah.mp3"),
    "callum": Voice(id="callum", name="Callum", gender="male", accent="UK", preview="/voices/callum.mp3"),
    "charlotte": Voice(
        id="charlotte",
        name="Charlotte",
        gender="female",
        accent="AU",
        preview="/voices/charlotte.mp3"
    ),
}

LANGUAGES = [
    Language("en-US", "English (US)"),
    Language("en-GB", "English (UK)"),
    Language("en-AU", "English (AU)"),
    Language("es-ES", "Spanish"),
    Language("fr-FR", "French"),
    Language("de-DE", "German"),
    Language("it-IT", "Italian"),
    Language("pt-BR", "Portuguese"),
    Language("ja-JP", "Japanese"),
    Language("zh-CN", "Chinese"),
]

# Default voice
DEFAULT_VOICE = "aria"
DEFAULT_LANGUAGE = "en-US"


def get_voice(voice_id: str) -> Voice:
    """Get a voice by ID."""
    return VOICES.get(voice_id, VOICES[DEFAULT_VOICE])


def list_voices() -> list[str]:
    """List all available voice IDs."""
    return list(VOICES.keys())


def get_voice_choices() -> list[tuple[str, str]]:
    """
    Get voice choices for UI dropdowns.

    Returns:
        List of (display_name, voice_id) tuples
    """
    choices = []
    for voice in VOICES.values():
        display = f"{voice.name} ({voice.accent} {voice.gender.title()})"
        choices.append((display, voice.id))
    return sorted(choices)


# Rate configuration
DEFAULT_RATE = 1.0
MIN_RATE = 0.5
MAX_RATE = 2.0
