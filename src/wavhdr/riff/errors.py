class WavError(ValueError):
    """Base class for malformed or unusable WAV header data."""


class TruncatedInputError(WavError):
    """Fewer bytes were available than the record needs."""


class InvalidMagicError(WavError):
    """A RIFF/WAVE/fmt tag did not match its expected ASCII value."""


class InvalidHeaderError(WavError):
    """Header fields are out of range or cannot be used for arithmetic."""
