"""
Acceptance rules for the WAV compatibility check.
Environment variables can override the defaults via CompatProfile.from_env().
"""

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .WavHeader import WavHeader


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class CompatProfile:
    """
    Which headers the pipeline accepts as input.

    The defaults describe 16 kHz, 16-bit linear PCM in mono or stereo.
    The data tag check only looks at bytes 0 and 3 ('d' ... 'a') unless
    strict_data_tag is set, in which case the tag must be exactly b"data".
    """

    audio_format: int = 1
    channels: tuple[int, ...] = (1, 2)
    sample_rate: int = 16000
    bits_per_sample: int = 16
    strict_data_tag: bool = False

    def accepts(self, header: "WavHeader") -> bool:
        tag = header.subchunk2_id
        if self.strict_data_tag:
            tag_ok = tag == b"data"
        else:
            tag_ok = len(tag) == 4 and tag[0] == ord("d") and tag[3] == ord("a")

        return (
            header.audio_format == self.audio_format
            and header.num_channels in self.channels
            and header.sample_rate == self.sample_rate
            and header.bits_per_sample == self.bits_per_sample
            and tag_ok
        )

    @classmethod
    def from_env(cls) -> "CompatProfile":
        """Create a profile from WAV_COMPAT_* environment variables."""
        channels = os.getenv("WAV_COMPAT_CHANNELS")
        return cls(
            audio_format=int(os.getenv("WAV_COMPAT_AUDIO_FORMAT", "1")),
            channels=(
                tuple(int(c) for c in channels.split(",") if c.strip())
                if channels
                else (1, 2)
            ),
            sample_rate=int(os.getenv("WAV_COMPAT_SAMPLE_RATE", "16000")),
            bits_per_sample=int(os.getenv("WAV_COMPAT_BITS_PER_SAMPLE", "16")),
            strict_data_tag=_env_bool("WAV_COMPAT_STRICT_DATA_TAG", False),
        )


DEFAULT_PROFILE = CompatProfile()
