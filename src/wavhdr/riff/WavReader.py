from typing import BinaryIO, Iterator
import logging
import struct

from wavhdr.riff.WavHeader import WavHeader
from wavhdr.riff.errors import InvalidHeaderError, TruncatedInputError

logger = logging.getLogger(__name__)


class WavReader:
    """
    Reads the header and sample payload of a canonical WAVE stream.

    The payload is assumed to start right after the 44-byte header and is
    never read past the declared Subchunk2Size.

    Usage:
        with open("speech.wav", "rb") as f:
            reader = WavReader(f)
            if reader.is_compatible():
                for chunk in reader:
                    process(chunk)
    """

    CHUNK_FRAMES: int = 1024

    def __init__(self, fd: BinaryIO) -> None:
        self._fd = fd
        self.header = self._read_header()
        self._remaining = self.header.wav_length()

    def _read_header(self) -> WavHeader:
        data = self._fd.read(WavHeader.SIZE)

        if len(data) < WavHeader.SIZE:
            raise TruncatedInputError(
                f"Truncated WAV file: expected {WavHeader.SIZE} bytes, got {len(data)}"
            )

        header = WavHeader.from_bytes(data)
        logger.debug("WAV info: %s", header.describe())
        return header

    @property
    def remaining(self) -> int:
        """Declared payload bytes not yet read."""
        return self._remaining

    def is_compatible(self) -> bool:
        return self.header.is_compatible()

    def read(self, n_bytes: int) -> bytes:
        """Read up to n_bytes of raw payload."""
        n = min(n_bytes, self._remaining)
        if n <= 0:
            return b""

        data = self._fd.read(n)
        self._remaining -= len(data)

        if len(data) < n:
            logger.warning(
                "WAV payload ended early: %d of %d declared bytes missing",
                self._remaining,
                self.header.wav_length(),
            )
            self._remaining = 0

        return data

    def read_frames(self, n_frames: int) -> bytes:
        """
        Read up to n_frames whole sample frames.

        A trailing partial frame at the end of the payload is dropped.
        """
        frame_size = self.header.frame_size
        if frame_size == 0:
            raise InvalidHeaderError(
                f"Cannot read frames: bits_per_sample={self.header.bits_per_sample}, "
                f"num_channels={self.header.num_channels}"
            )

        data = self.read(n_frames * frame_size)
        partial = len(data) % frame_size
        if partial:
            logger.warning(
                "Dropped %d trailing bytes of a partial %d-byte WAV frame",
                partial,
                frame_size,
            )
        return data[: len(data) - partial]

    def read_samples(self, n: int) -> list[int]:
        """Read up to n signed 16-bit samples (interleaved across channels)."""
        if self.header.bits_per_sample != 16:
            raise InvalidHeaderError(
                f"Expected 16-bit samples, got bits_per_sample={self.header.bits_per_sample}"
            )

        data = self.read(n * 2)
        count = len(data) // 2
        return list(struct.unpack(f"<{count}h", data[: count * 2]))

    def __iter__(self) -> Iterator[bytes]:
        """Yield frame-aligned payload chunks until the payload is exhausted."""
        while True:
            chunk = self.read_frames(self.CHUNK_FRAMES)
            if not chunk:
                return
            yield chunk
