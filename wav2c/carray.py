"""
Render PCM sample data as C source

Two renderings are supported:
  base10 - a `const T name[N] = { ... };` array of decimal literals
  base16 - the raw little-endian bytes as one escaped string literal,
           cast to a pointer to the sample type
"""

import logging

from . import __version__
from .config import BYTES_PER_LINE, SAMPLES_PER_LINE, ArrayFormat, EmitConfig
from .errors import EmptySampleSet
from .wavfile import SampleBuffer, WavFormat, check_sample_limit

logger = logging.getLogger(__name__)

# Column width that fits the widest literal of each bit depth
VALUE_WIDTHS = {8: 3, 16: 6, 32: 11}

INCLUDES = "#include <stddef.h>\n#include <stdint.h>\n\n"


def notice_comment(fmt: WavFormat, samples: SampleBuffer, config: EmitConfig) -> str:
    source = f" from {config.source_name}" if config.source_name else ""
    return (f"// Auto-generated by wav2c v{__version__}{source}\n"
            f"// {fmt.describe()}\n"
            f"// Samples: {samples.sample_count}\n\n")


def prefix_block(config) -> str:
    """User prefix text, or the standard includes when there is none"""
    if config.prefix_text:
        return config.prefix_text.rstrip('\n') + "\n\n"
    return INCLUDES


def guard_name(config) -> str:
    return f"_{config.array_name.upper()}_H"


def decimal_lines(fmt: WavFormat, samples: SampleBuffer):
    values = samples.values()
    width = VALUE_WIDTHS[fmt.bits_per_sample]
    for i in range(0, len(values), SAMPLES_PER_LINE):
        chunk = values[i:i + SAMPLES_PER_LINE]
        yield "  " + ", ".join(f"{v:{width}d}" for v in chunk)


def hex_lines(data: bytes):
    for i in range(0, len(data), BYTES_PER_LINE):
        chunk = data[i:i + BYTES_PER_LINE]
        yield '    "' + ''.join(f"\\x{b:02x}" for b in chunk) + '"'


def render_definitions(fmt, samples, config) -> str:
    types = config.type_names
    elem = types.for_bits(fmt.bits_per_sample)
    count = samples.sample_count

    out = [f"const {types.size} {config.count_name} = {count};\n\n"]
    if config.format is ArrayFormat.BASE16:
        out.append(f"const {elem} *const {config.array_name} = (const {elem} *)\n")
        out.append("\n".join(hex_lines(samples.data)))
        out.append(";\n")
    else:
        out.append(f"const {elem} {config.array_name}[{count}] = {{\n")
        out.append(",\n".join(decimal_lines(fmt, samples)))
        out.append("\n};\n")
    return "".join(out)


def render_declarations(fmt, config) -> str:
    types = config.type_names
    elem = types.for_bits(fmt.bits_per_sample)
    if config.format is ArrayFormat.BASE16:
        array = f"extern const {elem} *const {config.array_name};\n"
    else:
        array = f"extern const {elem} {config.array_name}[];\n"
    return f"extern const {types.size} {config.count_name};\n" + array


def emit(fmt: WavFormat, samples: SampleBuffer, config: EmitConfig):
    """Render `samples` according to `config`

    Returns (source_text, header_text); header_text is None unless
    config.emit_header is set.
    """
    check_sample_limit(samples, config.max_samples)
    if samples.sample_count == 0:
        raise EmptySampleSet("Data chunk holds no samples")

    logger.debug("Rendering %d samples as %s into %s",
                 samples.sample_count, config.format.value, config.array_name)

    notice = notice_comment(fmt, samples, config) if config.emit_comment else ""
    prefix = prefix_block(config)

    source = notice + prefix + render_definitions(fmt, samples, config)
    header = None
    if config.emit_header:
        guard = guard_name(config)
        header = (f"{notice}#ifndef {guard}\n#define {guard}\n\n{prefix}"
                  f"{render_declarations(fmt, config)}\n#endif // {guard}\n")
    return source, header
