import re

import pytest

from wav2c import __version__
from wav2c.carray import emit
from wav2c.config import ArrayFormat, EmitConfig, TypeNames
from wav2c.errors import EmptySampleSet, SampleLimitExceeded
from wav2c.gen_wav import build_wav, pack_samples
from wav2c.wavfile import SampleBuffer, WavFormat, parse


def array_values(source):
    body = source[source.index("{") + 1:source.rindex("}")]
    return [int(v) for v in body.split(",")]


def hex_payload(source):
    literal = "".join(re.findall(r'"((?:\\x[0-9a-f]{2})*)"', source))
    return bytes.fromhex(literal.replace("\\x", ""))


def pcm(values, channels=1, bits=16, rate=44100):
    return parse(build_wav(pack_samples(values, bits), channels, bits, rate))


def config(**kwargs):
    kwargs.setdefault("array_name", "sound")
    kwargs.setdefault("emit_comment", False)
    return EmitConfig(**kwargs)


def test_decimal_16bit():
    fmt, samples = pcm([0, 1000, -1000, 32767])
    source, header = emit(fmt, samples, config())

    assert header is None
    assert source == (
        "#include <stddef.h>\n"
        "#include <stdint.h>\n"
        "\n"
        "const size_t SOUND_SAMPLE_NO = 4;\n"
        "\n"
        "const int16_t sound[4] = {\n"
        "       0,   1000,  -1000,  32767\n"
        "};\n"
    )


@pytest.mark.parametrize("bits, values", [
    (8, [0, 1, 127, 128, 200, 255] * 5),
    (16, [-32768, -1, 0, 1, 32767] * 7),
    (32, [-2147483648, -65536, 0, 65536, 2147483647] * 3),
])
def test_decimal_values_match_samples(bits, values):
    fmt, samples = pcm(values, bits=bits)
    source, _ = emit(fmt, samples, config())

    assert array_values(source) == values
    assert f"sound[{len(values)}]" in source
    assert f"SOUND_SAMPLE_NO = {len(values)};" in source


def test_decimal_wraps_lines():
    fmt, samples = pcm(list(range(25)))
    source, _ = emit(fmt, samples, config())
    rows = source.split("{\n")[1].split("\n};")[0].split("\n")
    assert len(rows) == 3
    assert rows[0].endswith(",")
    assert not rows[-1].endswith(",")
    assert array_values(source) == list(range(25))


def test_base16_preserves_bytes():
    values = [0, 1000, -1000, 32767, -32768, 1, -1, 256, 4660]
    fmt, samples = pcm(values, channels=1, bits=16)
    source, _ = emit(fmt, samples, config(format=ArrayFormat.BASE16))

    assert hex_payload(source) == samples.data
    assert "const int16_t *const sound = (const int16_t *)\n" in source
    assert source.endswith('";\n')


def test_base16_32bit_stereo():
    values = [1, -1, 0x12345678, -0x12345678, 0, 2147483647]
    fmt, samples = pcm(values, channels=2, bits=32)
    source, _ = emit(fmt, samples, config(format=ArrayFormat.BASE16))

    assert hex_payload(source) == samples.data
    assert "SOUND_SAMPLE_NO = 6;" in source
    # 24 bytes -> a full line of 16 and a line of 8
    assert source.count('    "') == 2


def test_8bit_scenario_one_second():
    data = bytes(i % 256 for i in range(44100))
    fmt, samples = parse(build_wav(data, 1, 8, 44100))
    source, _ = emit(fmt, samples, config(array_name="tone"))

    assert "const size_t TONE_SAMPLE_NO = 44100;\n" in source
    assert "const uint8_t tone[44100] = {\n" in source
    assert array_values(source) == list(data)


def test_header_separation():
    fmt, samples = pcm([1, 2, 3], bits=8)
    source, header = emit(fmt, samples, config(emit_header=True))

    assert header == (
        "#ifndef _SOUND_H\n"
        "#define _SOUND_H\n"
        "\n"
        "#include <stddef.h>\n"
        "#include <stdint.h>\n"
        "\n"
        "extern const size_t SOUND_SAMPLE_NO;\n"
        "extern const uint8_t sound[];\n"
        "\n"
        "#endif // _SOUND_H\n"
    )
    assert "{" not in header
    assert "const uint8_t sound[3] = {" in source
    assert "extern" not in source


def test_header_base16():
    fmt, samples = pcm([1, 2], bits=16)
    _, header = emit(fmt, samples, config(emit_header=True, format=ArrayFormat.BASE16))
    assert header.splitlines()[-4:] == [
        "extern const size_t SOUND_SAMPLE_NO;",
        "extern const int16_t *const sound;",
        "",
        "#endif // _SOUND_H",
    ]


def test_prefix_replaces_includes():
    fmt, samples = pcm([1])
    source, header = emit(fmt, samples, config(prefix_text='#include "board.h"',
                                               emit_header=True))
    assert "#include <stdint.h>" not in source
    assert source.startswith('#include "board.h"\n\nconst size_t')
    assert header.startswith('#ifndef _SOUND_H\n#define _SOUND_H\n\n#include "board.h"\n\n')


def test_header_guard_follows_array_name():
    fmt, samples = pcm([1])
    _, header = emit(fmt, samples, config(array_name="kick_2", emit_header=True,
                                          emit_comment=True, source_name="kick 2.wav"))
    lines = header.splitlines()
    assert lines[4:6] == ["#ifndef _KICK_2_H", "#define _KICK_2_H"]
    assert lines[-1] == "#endif // _KICK_2_H"


def test_custom_type_names():
    names = TypeNames(int8="u8", int16="i16", int32="i32", size="usize_t")
    for bits, elem in ((8, "u8"), (16, "i16"), (32, "i32")):
        fmt, samples = pcm([1, 2], bits=bits)
        source, header = emit(fmt, samples, config(type_names=names, emit_header=True))
        assert "const usize_t SOUND_SAMPLE_NO = 2;" in source
        assert f"const {elem} sound[2] = {{" in source
        assert f"extern const {elem} sound[];" in header


def test_notice_comment():
    fmt, samples = pcm([1, 2], rate=22050)
    source, header = emit(fmt, samples, config(emit_comment=True, source_name="kick.wav",
                                               emit_header=True))
    lines = source.splitlines()
    assert lines[0] == f"// Auto-generated by wav2c v{__version__} from kick.wav"
    assert lines[1] == "// Sample rate: 22050 Hz, Channels: 1, Bits per sample: 16"
    assert lines[2] == "// Samples: 2"
    assert lines[3] == ""
    assert header.startswith(lines[0] + "\n")


def test_prefix_with_and_without_notice():
    fmt, samples = pcm([1])
    source, _ = emit(fmt, samples, config(prefix_text="#include <stdint.h>\n"))
    assert source.startswith("#include <stdint.h>\n\nconst size_t")

    source, _ = emit(fmt, samples, config(prefix_text="/* hi */", emit_comment=True))
    assert source.startswith("// Auto-generated")
    assert "\n\n/* hi */\n\nconst size_t" in source


def test_deterministic():
    fmt, samples = pcm(list(range(-50, 50)))
    cfg = config(emit_comment=True, emit_header=True, prefix_text="/* x */", source_name="a.wav")
    assert emit(fmt, samples, cfg) == emit(fmt, samples, cfg)


def test_empty_sample_set():
    fmt = WavFormat(channel_count=1, bits_per_sample=16, sample_rate=44100)
    with pytest.raises(EmptySampleSet):
        emit(fmt, SampleBuffer(b"", 2), config())


def test_max_samples_boundary():
    fmt = WavFormat(channel_count=1, bits_per_sample=8, sample_rate=8000)
    source, _ = emit(fmt, SampleBuffer(bytes(100), 1), config(max_samples=100))
    assert "SOUND_SAMPLE_NO = 100;" in source
    with pytest.raises(SampleLimitExceeded):
        emit(fmt, SampleBuffer(bytes(101), 1), config(max_samples=100))


def test_no_limit():
    fmt = WavFormat(channel_count=1, bits_per_sample=8, sample_rate=8000)
    source, _ = emit(fmt, SampleBuffer(bytes(300_000), 1), config(max_samples=None))
    assert "SOUND_SAMPLE_NO = 300000;" in source
