"""
Configuration Module
====================
Synthesis settings and voice/language catalogues.
"""

from .settings import Settings, VoiceSettings, OutputSettings, AdvancedSettings
from .voices import VOICES, LANGUAGES, DEFAULT_VOICE

__all__ = [
    "Settings",
    "VoiceSettings",
    "OutputSettings",
    "AdvancedSettings",
    "VOICES",
    "LANGUAGES",
    "DEFAULT_VOICE",
]
