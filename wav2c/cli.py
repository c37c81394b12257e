"""
Command line front end

Usage: wav2c input.wav [-o output.c] [--header] [-a array_name] [-f base16]

Example:
  wav2c kick.wav -o audio_kick.c --header -a kick
"""

import argparse
import logging
import os
import sys
import tempfile
from dataclasses import replace
from pathlib import Path

from . import __version__, wavfile
from .carray import emit
from .config import (
    MAX_SAMPLES,
    ArrayFormat,
    EmitConfig,
    sanitize_array_name,
    type_names_from_env,
)
from .errors import OutputConflict, OutputExists, Wav2CError

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def array_format(value: str) -> ArrayFormat:
    try:
        return ArrayFormat.from_name(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid format {value!r} (choose from base10, base16)") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wav2c",
        description="Convert a PCM WAV file into a C array for embedded playback.",
    )
    parser.add_argument("input", type=Path, help="Path to the input .wav file")
    parser.add_argument("-a", "--array-name",
                        help="Name of the array (default: input file name without extension)")
    parser.add_argument("-o", "--output", type=Path,
                        help="Path to the output source file (default: stdout)")
    parser.add_argument("--header", action="store_true",
                        help="Also write a header with extern declarations")
    parser.add_argument("--header-output", type=Path,
                        help="Path of the header (default: output path with a .h suffix)")
    parser.add_argument("-f", "--format", type=array_format, default=ArrayFormat.DECIMAL,
                        metavar="{base10,base16}", help="Number format for the output array")
    parser.add_argument("-m", "--max-samples", type=non_negative_int, default=MAX_SAMPLES,
                        help="Max samples to sanity check the array size (default: %(default)s)")
    parser.add_argument("-n", "--no-comment", action="store_true",
                        help="Do not include a comment with the file information")
    prefix = parser.add_mutually_exclusive_group()
    prefix.add_argument("-p", "--prefix", help="Text to write before the array")
    prefix.add_argument("-P", "--prefix-file", type=Path,
                        help="File whose contents are written before the array")
    parser.add_argument("--force", action="store_true", help="Overwrite existing output files")

    types = parser.add_argument_group(
        "type names", "Override the C type names (also WAV2C_INT8_TYPE, WAV2C_INT16_TYPE, "
                      "WAV2C_INT32_TYPE and WAV2C_SIZE_TYPE)")
    types.add_argument("--int8-type", help="Element type for 8-bit samples")
    types.add_argument("--int16-type", help="Element type for 16-bit samples")
    types.add_argument("--int32-type", help="Element type for 32-bit samples")
    types.add_argument("--size-type", help="Type of the sample count constant")

    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Enable verbose output (repeat for more)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv=None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.header and args.output is None and args.header_output is None:
        parser.error("--header needs --output or --header-output")
    if args.array_name is not None and not sanitize_array_name(args.array_name):
        parser.error("--array-name must not be empty")
    header = header_path(args)
    if (header is not None and args.output is not None
            and header.resolve() == args.output.resolve()):
        parser.error(f"header and source output are the same file: {header}")
    return args


def setup_logging(verbose: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s",
                        stream=sys.stderr, force=True)


def header_path(args):
    if not args.header:
        return None
    if args.header_output is not None:
        return args.header_output
    return args.output.with_suffix(".h")


def build_config(args, prefix_text=None) -> EmitConfig:
    """Resolve defaults, environment and flags into one EmitConfig"""
    array_name = sanitize_array_name(args.array_name or args.input.stem.lower()) or "samples"

    type_names = type_names_from_env()
    overrides = {
        role: value for role, value in (
            ("int8", args.int8_type),
            ("int16", args.int16_type),
            ("int32", args.int32_type),
            ("size", args.size_type),
        ) if value
    }
    type_names = replace(type_names, **overrides)

    return EmitConfig(
        array_name=array_name,
        type_names=type_names,
        emit_header=args.header,
        emit_comment=not args.no_comment,
        prefix_text=prefix_text,
        format=args.format,
        max_samples=args.max_samples,
        source_name=args.input.name,
    )


def check_targets(paths) -> None:
    seen = set()
    for path in paths:
        resolved = path.resolve()
        if resolved in seen:
            raise OutputConflict(f"Output written twice: {path}")
        seen.add(resolved)
        if path.is_dir():
            raise OutputConflict(f"Output path is a directory: {path}")


def write_outputs(files) -> None:
    """Write every (path, text) pair, or none of them

    Each text goes to a temporary file beside its target and is moved into
    place only after all of them were written. If moving one of them fails,
    the targets already replaced get their previous contents back.
    """
    staged = []
    replaced = []
    try:
        for path, text in files:
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            staged.append((tmp, path))
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        for tmp, path in staged:
            previous = path.read_bytes() if path.exists() else None
            os.replace(tmp, path)
            replaced.append((path, previous))
    except OSError:
        for path, previous in reversed(replaced):
            logger.debug("Restoring %s", path)
            if previous is None:
                path.unlink()
            else:
                path.write_bytes(previous)
        raise
    finally:
        for tmp, _ in staged:
            if os.path.exists(tmp):
                os.remove(tmp)


def convert(args) -> None:
    """Convert args.input and write the requested outputs"""
    output = args.output
    header = header_path(args)

    if not args.force:
        for path in (output, header):
            if path is not None and path.exists():
                raise OutputExists(path)
    check_targets(path for path in (output, header) if path is not None)

    prefix_text = args.prefix
    if args.prefix_file is not None:
        try:
            prefix_text = args.prefix_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise Wav2CError(f"Prefix file {args.prefix_file} is not valid UTF-8: {e}") from e

    config = build_config(args, prefix_text)

    logger.info("Converting %s -> %s", args.input, output or "<stdout>")
    logger.info("Array name: %s", config.array_name)

    fmt, samples = wavfile.read(args.input)

    logger.info("Sample rate: %d Hz", fmt.sample_rate)
    logger.info("Channels: %d", fmt.channel_count)
    logger.info("Bits per sample: %d", fmt.bits_per_sample)
    logger.info("Data size: %d bytes", len(samples.data))
    logger.info("Num samples: %d", samples.sample_count)

    source_text, header_text = emit(fmt, samples, config)

    files = []
    if output is not None:
        files.append((output, source_text))
    if header is not None:
        files.append((header, header_text))
    write_outputs(files)

    if output is None:
        sys.stdout.write(source_text)
    for path, _ in files:
        logger.info("Created %s", path)
    logger.info("Array: %s[%d] (%.1f KB)", config.array_name, samples.sample_count,
                len(samples.data) / 1024)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        convert(args)
    except (Wav2CError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
