from dataclasses import replace
from typing import BinaryIO, Iterable
import logging
import struct

from wavhdr.riff.WavHeader import WavHeader
from wavhdr.riff.errors import InvalidHeaderError

logger = logging.getLogger(__name__)


class WavWriter:
    """
    Writes a canonical WAVE stream: header first, then raw sample frames.

    On a seekable stream the size fields are rewritten on close to match the
    frames actually written. A non-seekable stream gets maximum sizes up front,
    the same open-ended header used for live streaming.
    """

    # Open-ended sizes for streams that cannot be patched afterwards
    STREAMING_CHUNK_SIZE: int = 0xFFFFFFFF
    STREAMING_DATA_SIZE: int = 0xFFFFFFFF - WavHeader.CHUNK_OVERHEAD

    def __init__(self, fd: BinaryIO, header: WavHeader) -> None:
        if header.frame_size == 0:
            raise InvalidHeaderError(
                f"Cannot write frames: bits_per_sample={header.bits_per_sample}, "
                f"num_channels={header.num_channels}"
            )

        self._fd = fd
        self._seekable = fd.seekable()
        self._start = fd.tell() if self._seekable else 0
        self._frames = 0
        self._closed = False

        if not self._seekable:
            header = replace(
                header,
                chunk_size=self.STREAMING_CHUNK_SIZE,
                subchunk2_size=self.STREAMING_DATA_SIZE,
            )
        self.header = header

        self._fd.write(header.to_bytes())

    @property
    def frames_written(self) -> int:
        return self._frames

    def write_frames(self, data: bytes) -> None:
        """Append raw payload bytes; must be a whole number of frames."""
        frame_size = self.header.frame_size
        if len(data) % frame_size:
            raise InvalidHeaderError(
                f"Partial frame: {len(data)} bytes is not a multiple of {frame_size}"
            )

        self._fd.write(data)
        self._frames += len(data) // frame_size

    def write_samples(self, samples: Iterable[int]) -> None:
        """Append signed 16-bit samples, interleaved across channels."""
        if self.header.bits_per_sample != 16:
            raise InvalidHeaderError(
                f"Expected 16-bit samples, got bits_per_sample={self.header.bits_per_sample}"
            )

        values = list(samples)
        try:
            data = struct.pack(f"<{len(values)}h", *values)
        except struct.error as e:
            raise InvalidHeaderError(f"Sample out of 16-bit range: {e}") from e

        self.write_frames(data)

    def close(self) -> None:
        """Rewrite the header with the final sizes and flush."""
        if self._closed:
            return

        if self._seekable:
            header = self.header.with_sample_count(self._frames)
            end = self._fd.tell()
            self._fd.seek(self._start)
            self._fd.write(header.to_bytes())
            self._fd.seek(end)
            self.header = header
            logger.debug("Patched WAV header: %s", header.describe())
        else:
            logger.warning(
                "Stream is not seekable, WAV header left open-ended (%d frames written)",
                self._frames,
            )

        self._fd.flush()
        self._closed = True

    def __enter__(self) -> "WavWriter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
