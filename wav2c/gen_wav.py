"""
Generate simple sine wave WAV files for testing

Usage: wav2c-gen-wav output.wav [-c channels] [-b bits] [-s rate] [-p pitch] [-d seconds] [-F int|float]
"""

import argparse
import math
import os
import struct

WAVE_FORMAT_PCM = 1
WAVE_FORMAT_IEEE_FLOAT = 3

AMPLITUDES = {8: 127, 16: 32_767, 32: 2_147_483_647}


def chunk(tag: bytes, payload: bytes) -> bytes:
    """Encode one RIFF subchunk, padded to an even length"""
    pad = b'\x00' if len(payload) % 2 else b''
    return tag + struct.pack('<I', len(payload)) + payload + pad


def fmt_chunk(channels, bits_per_sample, sample_rate, format_tag=WAVE_FORMAT_PCM) -> bytes:
    block_align = channels * bits_per_sample // 8
    payload = struct.pack('<HHIIHH', format_tag, channels, sample_rate,
                          sample_rate * block_align, block_align, bits_per_sample)
    return chunk(b'fmt ', payload)


def build_wav(data: bytes, channels=1, bits_per_sample=16, sample_rate=44100,
              format_tag=WAVE_FORMAT_PCM, extra_chunks=(), include_data=True) -> bytes:
    """Assemble a complete WAV file around `data`

    `extra_chunks` are already-encoded subchunks placed between fmt and data.
    """
    body = fmt_chunk(channels, bits_per_sample, sample_rate, format_tag)
    body += b''.join(extra_chunks)
    if include_data:
        body += chunk(b'data', data)
    return b'RIFF' + struct.pack('<I', 4 + len(body)) + b'WAVE' + body


def pack_samples(values, bits_per_sample) -> bytes:
    """Pack sample values as stored in a WAV: 8-bit unsigned, wider signed"""
    code = {8: 'B', 16: 'h', 32: 'i'}[bits_per_sample]
    return struct.pack(f'<{len(values)}{code}', *values)


def sine_frames(channels, bits_per_sample, sample_rate, pitch=440.0, duration=1.0,
                sample_format='int') -> bytes:
    """Interleaved sine wave frames, the same value on every channel"""
    count = int(sample_rate * duration)
    if sample_format == 'float':
        if bits_per_sample != 32:
            raise ValueError("Float samples must be 32-bit")
        values = [math.sin(2 * math.pi * pitch * t / sample_rate) for t in range(count)]
        return struct.pack(f'<{count * channels}f', *(v for v in values for _ in range(channels)))

    amplitude = AMPLITUDES[bits_per_sample]
    values = []
    for t in range(count):
        value = int(amplitude * math.sin(2 * math.pi * pitch * t / sample_rate))
        if bits_per_sample == 8:
            value += 128
        values.extend([value] * channels)
    return pack_samples(values, bits_per_sample)


def generate_wav(path, channels=1, bits_per_sample=16, sample_rate=44100, pitch=440.0,
                 duration=1.0, sample_format='int'):
    frames = sine_frames(channels, bits_per_sample, sample_rate, pitch, duration, sample_format)
    format_tag = WAVE_FORMAT_IEEE_FLOAT if sample_format == 'float' else WAVE_FORMAT_PCM
    wav = build_wav(frames, channels, bits_per_sample, sample_rate, format_tag)

    os.makedirs(os.path.dirname(os.fspath(path)) or ".", exist_ok=True)
    with open(path, 'wb') as f:
        f.write(wav)
    return path


# Golden fixture set: pitch is an eighth of the sample rate, so every
# sample lands on a multiple of pi/4
FIXTURES = {
    'mono_8bit.wav': dict(channels=1, bits_per_sample=8, sample_rate=8000,
                          pitch=1000.0, duration=0.002),
    'stereo_16bit.wav': dict(channels=2, bits_per_sample=16, sample_rate=8000,
                             pitch=1000.0, duration=0.001),
    'mono_32bit.wav': dict(channels=1, bits_per_sample=32, sample_rate=8000,
                           pitch=1000.0, duration=0.001),
    'stereo_8bit_low.wav': dict(channels=2, bits_per_sample=8, sample_rate=4000,
                                pitch=500.0, duration=0.002),
    'mono_32bit_float.wav': dict(channels=1, bits_per_sample=32, sample_rate=8000,
                                 pitch=1000.0, duration=0.001, sample_format='float'),
}


def generate_fixtures(output_dir):
    """Write every FIXTURES entry into `output_dir` and return the paths"""
    paths = []
    for name, params in FIXTURES.items():
        paths.append(generate_wav(os.path.join(output_dir, name), **params))
    return paths


def main(argv=None):
    ap = argparse.ArgumentParser(description="Generate a deterministic sine WAV")
    ap.add_argument("output", help="Path to the output WAV file")
    ap.add_argument("-s", "--sample-rate", type=int, default=44100)
    ap.add_argument("-c", "--channels", type=int, default=1)
    ap.add_argument("-b", "--bits-per-sample", type=int, choices=sorted(AMPLITUDES), default=16)
    ap.add_argument("-p", "--pitch", type=float, default=440.0, help="Pitch in Hz")
    ap.add_argument("-d", "--duration", type=float, default=1.0, help="Duration in seconds")
    ap.add_argument("-F", "--sample-format", choices=["int", "float"], default="int")
    args = ap.parse_args(argv)

    if args.sample_format == "float" and args.bits_per_sample != 32:
        ap.error("float samples must be 32-bit (-b 32)")

    path = generate_wav(args.output, args.channels, args.bits_per_sample, args.sample_rate,
                        args.pitch, args.duration, args.sample_format)
    print(f"wrote: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
