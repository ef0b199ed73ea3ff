from dataclasses import dataclass, replace
from enum import IntEnum
from typing import ClassVar
import struct

from .config import DEFAULT_PROFILE, CompatProfile
from .errors import InvalidHeaderError, InvalidMagicError, TruncatedInputError


class AudioFormat(IntEnum):
    PCM = 1
    MULAW = 6
    ALAW = 7
    IBM_MULAW = 257
    IBM_ALAW = 258
    ADPCM = 259


@dataclass(slots=True, frozen=True)
class WavHeader:
    """
    Canonical PCM WAVE file header (44 bytes total).

    Binary format:
    ┌────────┬───────────┬────────┬────────┬──────────┬────────┬──────────┐
    │ 'RIFF' │ ChunkSize │ 'WAVE' │ 'fmt ' │ Sub1Size │ Format │ Channels │
    │ 4B     │ u32       │ 4B     │ 4B     │ u32      │ u16    │ u16      │
    ├────────┴───┬───────┴────┬───┴────────┴──┬───────┴──────┬─┴──────────┤
    │ SampleRate │ ByteRate   │ BlockAlign    │ BitsPerSample│ 'data'     │
    │ u32        │ u32        │ u16           │ u16          │ 4B         │
    ├────────────┼────────────┴───────────────┴──────────────┴────────────┤
    │ Sub2Size   │ raw sample payload follows (Sub2Size bytes)            │
    │ u32        │                                                        │
    └────────────┴────────────────────────────────────────────────────────┘
    Byte order: All integers use little-endian encoding, no padding.
    """

    SIZE: ClassVar[int] = 44
    FORMAT: ClassVar[struct.Struct] = struct.Struct("<4sI4s4sIHHIIHH4sI")
    # Bytes of the RIFF chunk that precede the payload, minus the first 8
    CHUNK_OVERHEAD: ClassVar[int] = 36

    riff: bytes = b"RIFF"
    chunk_size: int = CHUNK_OVERHEAD
    wave: bytes = b"WAVE"
    fmt: bytes = b"fmt "
    subchunk1_size: int = 16
    audio_format: int = AudioFormat.PCM
    num_channels: int = 1
    sample_rate: int = 16000
    byte_rate: int = 32000
    block_align: int = 2
    bits_per_sample: int = 16
    subchunk2_id: bytes = b"data"
    subchunk2_size: int = 0

    @classmethod
    def for_pcm(
        cls,
        sample_rate: int,
        channels: int,
        bits_per_sample: int,
        data_size: int = 0,
    ) -> "WavHeader":
        """Build a canonical PCM header, deriving byte rate and block align."""
        block_align = channels * (bits_per_sample // 8)
        return cls(
            chunk_size=cls.CHUNK_OVERHEAD + data_size,
            audio_format=AudioFormat.PCM,
            num_channels=channels,
            sample_rate=sample_rate,
            byte_rate=sample_rate * block_align,
            block_align=block_align,
            bits_per_sample=bits_per_sample,
            subchunk2_size=data_size,
        )

    def to_bytes(self) -> bytes:
        for name in ("riff", "wave", "fmt", "subchunk2_id"):
            tag = getattr(self, name)
            if len(tag) != 4:
                raise InvalidHeaderError(
                    f"Invalid {name} tag: expected 4 bytes, got {len(tag)}"
                )

        try:
            return self.FORMAT.pack(
                self.riff,
                self.chunk_size,
                self.wave,
                self.fmt,
                self.subchunk1_size,
                self.audio_format,
                self.num_channels,
                self.sample_rate,
                self.byte_rate,
                self.block_align,
                self.bits_per_sample,
                self.subchunk2_id,
                self.subchunk2_size,
            )
        except struct.error as e:
            raise InvalidHeaderError(f"Header field out of range: {e}") from e

    @classmethod
    def from_bytes(cls, data: bytes) -> "WavHeader":
        """
        Deserialize a header from the first 44 bytes of data.

        Trailing bytes are ignored, so a whole file image may be passed.
        The data sub-chunk tag is not checked here, see is_compatible().

        Raises:
            TruncatedInputError: If fewer than 44 bytes are given
            InvalidMagicError: If the RIFF, WAVE or fmt tags are wrong
        """
        if len(data) < cls.SIZE:
            raise TruncatedInputError(
                f"Truncated WAV header: expected {cls.SIZE} bytes, got {len(data)}"
            )

        fields = cls.FORMAT.unpack_from(data)
        header = cls(*fields)

        for name, expected in (("riff", b"RIFF"), ("wave", b"WAVE"), ("fmt", b"fmt ")):
            actual = getattr(header, name)
            if actual != expected:
                raise InvalidMagicError(
                    f"Invalid WAV file: expected {expected!r}, got {actual!r}"
                )

        return header

    @property
    def frame_size(self) -> int:
        """Bytes per sample frame: whole bytes per sample times channel count."""
        return (self.bits_per_sample // 8) * self.num_channels

    def is_compatible(self, profile: CompatProfile = DEFAULT_PROFILE) -> bool:
        return profile.accepts(self)

    def wav_length(self) -> int:
        """Declared payload length in bytes, as stored in the header."""
        return self.subchunk2_size

    def sample_count(self) -> int:
        """
        Number of sample frames in the payload.

        Raises:
            InvalidHeaderError: If bits_per_sample < 8 or num_channels == 0
        """
        frame_size = self.frame_size
        if frame_size == 0:
            raise InvalidHeaderError(
                f"Cannot compute sample count: bits_per_sample={self.bits_per_sample}, "
                f"num_channels={self.num_channels}"
            )
        return self.wav_length() // frame_size

    def with_sample_count(self, samples: int) -> "WavHeader":
        """Return a copy whose size fields describe `samples` frames."""
        frame_size = self.frame_size
        if frame_size == 0:
            raise InvalidHeaderError(
                f"Cannot size payload: bits_per_sample={self.bits_per_sample}, "
                f"num_channels={self.num_channels}"
            )

        data_size = samples * frame_size
        if samples < 0 or self.CHUNK_OVERHEAD + data_size > 0xFFFFFFFF:
            raise InvalidHeaderError(
                f"Sample count {samples} does not fit a 32-bit WAV header"
            )

        return replace(
            self,
            chunk_size=self.CHUNK_OVERHEAD + data_size,
            subchunk2_size=data_size,
        )

    def describe(self) -> str:
        try:
            n_samples = str(self.sample_count())
        except InvalidHeaderError:
            n_samples = "?"

        return (
            f"RIFF={self.riff.decode('ascii', errors='replace')},"
            f"WAVE={self.wave.decode('ascii', errors='replace')},"
            f"Format={int(self.audio_format)},Channels={self.num_channels},"
            f"BPS={self.bits_per_sample},Rate={self.sample_rate},"
            f"#Samples={n_samples}"
        )
