"""
RIFF/WAVE reader for integer PCM files

Only the `fmt ` and `data` chunks are interpreted; every other chunk is
skipped using its declared length. All fields are little-endian regardless
of the host byte order.
"""

import logging
import struct
from collections import namedtuple
from dataclasses import dataclass

from .errors import (
    InvalidContainer,
    MisalignedSampleData,
    SampleLimitExceeded,
    TruncatedFile,
    UnsupportedFormat,
)

logger = logging.getLogger(__name__)

WAVE_FORMAT_PCM = 1
SUPPORTED_BITS = (8, 16, 32)

CHUNK_HEADER_SIZE = 8
RIFF_HEADER_SIZE = 12
FMT_MIN_SIZE = 16

# struct codes per sample width; 8-bit PCM is unsigned, wider PCM is signed
SAMPLE_CODES = {1: 'B', 2: 'h', 4: 'i'}

Chunk = namedtuple('Chunk', ['tag', 'size', 'offset'])


@dataclass(frozen=True)
class WavFormat:
    channel_count: int
    bits_per_sample: int
    sample_rate: int
    audio_format_tag: int = WAVE_FORMAT_PCM

    @property
    def sample_width(self) -> int:
        return self.bits_per_sample // 8

    @property
    def frame_width(self) -> int:
        return self.channel_count * self.sample_width

    def describe(self) -> str:
        return (f"Sample rate: {self.sample_rate} Hz, Channels: {self.channel_count}, "
                f"Bits per sample: {self.bits_per_sample}")


@dataclass(frozen=True)
class SampleBuffer:
    """Raw payload of the data chunk"""

    data: bytes
    sample_width: int

    @property
    def sample_count(self) -> int:
        return len(self.data) // self.sample_width

    def frame_count(self, channel_count: int) -> int:
        return self.sample_count // channel_count

    def values(self):
        """Decode the samples: unsigned for 8-bit, signed for 16/32-bit"""
        code = SAMPLE_CODES[self.sample_width]
        return struct.unpack(f'<{self.sample_count}{code}', self.data)


def iter_chunks(data: bytes, start: int = RIFF_HEADER_SIZE):
    """Yield a Chunk for every subchunk from `start` to the end of `data`

    Payloads of odd length are followed by a pad byte that is not counted
    in the chunk size. A tail too short to hold a chunk header ends the walk.
    """
    offset = start
    end = len(data)
    while offset + CHUNK_HEADER_SIZE <= end:
        tag = data[offset:offset + 4]
        size = struct.unpack('<I', data[offset + 4:offset + 8])[0]
        payload = offset + CHUNK_HEADER_SIZE
        if payload + size > end:
            raise TruncatedFile(
                f"Chunk {tag!r} declares {size} bytes but only {end - payload} remain")
        yield Chunk(tag, size, payload)
        offset = payload + size + (size & 1)


def parse_fmt(payload: bytes) -> WavFormat:
    """Parse and validate a `fmt ` chunk payload"""
    if len(payload) < FMT_MIN_SIZE:
        raise TruncatedFile(f"fmt chunk is {len(payload)} bytes, expected at least {FMT_MIN_SIZE}")

    audio_format = struct.unpack('<H', payload[0:2])[0]
    num_channels = struct.unpack('<H', payload[2:4])[0]
    sample_rate = struct.unpack('<I', payload[4:8])[0]
    bits_per_sample = struct.unpack('<H', payload[14:16])[0]

    if audio_format != WAVE_FORMAT_PCM:
        raise UnsupportedFormat(
            f"Only integer PCM audio is supported (format tag {audio_format:#06x})")
    if bits_per_sample not in SUPPORTED_BITS:
        raise UnsupportedFormat(
            f"Only 8, 16 or 32-bit PCM is supported, got {bits_per_sample}-bit")
    if num_channels == 0:
        raise UnsupportedFormat("fmt chunk declares zero channels")

    return WavFormat(
        channel_count=num_channels,
        bits_per_sample=bits_per_sample,
        sample_rate=sample_rate,
        audio_format_tag=audio_format,
    )


def parse(data: bytes):
    """Parse a complete WAV file held in memory

    Returns a (WavFormat, SampleBuffer) pair.
    """
    if len(data) < RIFF_HEADER_SIZE or data[:4] != b'RIFF' or data[8:12] != b'WAVE':
        raise InvalidContainer("Not a valid WAV file (missing RIFF/WAVE header)")

    fmt = None
    payload = None
    for chunk in iter_chunks(data):
        body = data[chunk.offset:chunk.offset + chunk.size]
        if chunk.tag == b'fmt ' and fmt is None:
            fmt = parse_fmt(body)
        elif chunk.tag == b'data' and payload is None:
            payload = body
        else:
            logger.debug("Skipping chunk %r (%d bytes)", chunk.tag, chunk.size)
        if fmt is not None and payload is not None:
            break

    if fmt is None:
        raise TruncatedFile("No fmt chunk found")
    if payload is None:
        raise TruncatedFile("No data chunk found")

    if len(payload) % fmt.frame_width:
        raise MisalignedSampleData(
            f"Data size {len(payload)} is not a multiple of the "
            f"{fmt.frame_width}-byte sample frame")

    return fmt, SampleBuffer(payload, fmt.sample_width)


def read(path):
    """Read and parse the WAV file at `path`"""
    with open(path, 'rb') as f:
        data = f.read()
    return parse(data)


def check_sample_limit(samples: SampleBuffer, max_samples):
    """Raise SampleLimitExceeded when the buffer holds more than `max_samples`"""
    if max_samples is not None and samples.sample_count > max_samples:
        raise SampleLimitExceeded(
            f"Too many samples ({samples.sample_count}), maximum is {max_samples}")
