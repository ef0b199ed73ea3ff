"""Tests for reading WAV headers and payloads from streams."""

import io
import logging
import struct

import pytest
from wavhdr.riff import (
    InvalidHeaderError,
    InvalidMagicError,
    TruncatedInputError,
    WavHeader,
    WavReader,
)


def wav_stream(samples: list[int], channels: int = 1, declared: int | None = None):
    payload = struct.pack(f"<{len(samples)}h", *samples)
    size = len(payload) if declared is None else declared
    header = WavHeader.for_pcm(16000, channels, 16, data_size=size)
    return io.BytesIO(header.to_bytes() + payload)


class TestWavReaderValid:
    """Tests for valid WavReader cases."""

    def test_reads_header(self):
        """Test the header is decoded on construction."""
        reader = WavReader(wav_stream([1, 2, 3, 4], channels=2))

        assert reader.header.num_channels == 2
        assert reader.header.sample_count() == 2
        assert reader.remaining == 8
        assert reader.is_compatible()

    def test_read_samples(self):
        """Test signed 16-bit samples are decoded little-endian."""
        reader = WavReader(wav_stream([0, -1, 32767, -32768]))

        assert reader.read_samples(3) == [0, -1, 32767]
        assert reader.read_samples(3) == [-32768]
        assert reader.read_samples(3) == []

    def test_read_stops_at_declared_length(self):
        """Test trailing bytes after the payload are not returned."""
        stream = wav_stream([1, 2, 3], declared=4)
        reader = WavReader(stream)

        assert reader.read(100) == struct.pack("<2h", 1, 2)
        assert reader.read(100) == b""

    def test_iterates_frame_aligned_chunks(self):
        """Test iteration yields whole frames until the payload ends."""
        reader = WavReader(wav_stream(list(range(10)), channels=2))
        reader.CHUNK_FRAMES = 2

        chunks = list(reader)

        assert [len(c) for c in chunks] == [8, 8, 4]
        assert b"".join(chunks) == struct.pack("<10h", *range(10))

    def test_short_payload_logs_warning(self, caplog):
        """Test a payload shorter than declared is reported."""
        reader = WavReader(wav_stream([1, 2], declared=100))

        with caplog.at_level(logging.WARNING):
            data = reader.read(100)

        assert len(data) == 4
        assert reader.remaining == 0
        assert "ended early" in caplog.text

    def test_partial_trailing_frame_logs_warning(self, caplog):
        """Test a misaligned payload drops and reports its last partial frame."""
        reader = WavReader(wav_stream([1, 2, 3], channels=2))

        with caplog.at_level(logging.WARNING):
            data = reader.read_frames(10)

        assert data == struct.pack("<2h", 1, 2)
        assert reader.remaining == 0
        assert "Dropped 2 trailing bytes" in caplog.text


class TestWavReaderInvalid:
    """Tests for invalid WavReader cases."""

    def test_truncated_header(self):
        """Test a stream shorter than the header is rejected."""
        with pytest.raises(TruncatedInputError, match="Truncated WAV file"):
            WavReader(io.BytesIO(b"RIFF\x00\x00"))

    def test_invalid_magic(self):
        """Test a non-WAVE RIFF stream is rejected."""
        data = bytearray(WavHeader().to_bytes())
        data[8:12] = b"AVI "

        with pytest.raises(InvalidMagicError):
            WavReader(io.BytesIO(bytes(data)))

    def test_read_samples_requires_16_bit(self):
        """Test sample decoding is limited to 16-bit payloads."""
        header = WavHeader.for_pcm(16000, 1, 8, data_size=4)
        reader = WavReader(io.BytesIO(header.to_bytes() + b"\x00" * 4))

        with pytest.raises(InvalidHeaderError, match="Expected 16-bit"):
            reader.read_samples(4)

    def test_read_frames_degenerate_header(self):
        """Test frame reads on a zero-channel header."""
        header = WavHeader(num_channels=0, subchunk2_size=4)
        reader = WavReader(io.BytesIO(header.to_bytes() + b"\x00" * 4))

        with pytest.raises(InvalidHeaderError, match="Cannot read frames"):
            reader.read_frames(1)
