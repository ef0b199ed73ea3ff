"""Canonical RIFF/WAVE header module for wavhdr."""

from .WavHeader import WavHeader, AudioFormat
from .WavReader import WavReader
from .WavWriter import WavWriter
from .config import CompatProfile, DEFAULT_PROFILE
from .errors import (
    WavError,
    TruncatedInputError,
    InvalidMagicError,
    InvalidHeaderError,
)

__all__ = [
    "WavHeader",
    "AudioFormat",
    "WavReader",
    "WavWriter",
    "CompatProfile",
    "DEFAULT_PROFILE",
    "WavError",
    "TruncatedInputError",
    "InvalidMagicError",
    "InvalidHeaderError",
]
