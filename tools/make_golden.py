#!/usr/bin/env python3
"""
Regenerate the golden outputs used by the test suite

Usage: python3 tools/make_golden.py [golden_directory]

Every integer fixture is converted three ways (base10, base16, and base10
with a prefix for mono_8bit), always with --no-comment --header so the
output does not depend on the package version.
"""

import os
import sys
import tempfile

from wav2c import cli
from wav2c.gen_wav import generate_fixtures

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
GOLDEN_DIR = os.path.join(ROOT, "tests", "golden")

COMMON_ARGS = ["--no-comment", "--header", "--force"]
PREFIX = "/* john was here */"


def golden_variants(wav_path):
    """Yield (output filename, extra args) for one fixture"""
    base = os.path.splitext(os.path.basename(wav_path))[0]
    if base.endswith("_float"):
        return
    yield f"{base}.c", []
    yield f"{base}_base16.c", ["--format", "base16"]
    if base == "mono_8bit":
        yield f"{base}_prefix.c", ["--prefix", PREFIX]


def make_golden(golden_dir):
    os.makedirs(golden_dir, exist_ok=True)

    with tempfile.TemporaryDirectory() as fixture_dir:
        wav_files = generate_fixtures(fixture_dir)
        print(f"Generated {len(wav_files)} fixtures")
        print("=" * 60)

        failed = 0
        for wav_path in sorted(wav_files):
            for filename, extra in golden_variants(wav_path):
                output_path = os.path.join(golden_dir, filename)
                argv = [str(wav_path), "--output", output_path, *COMMON_ARGS, *extra]
                if cli.main(argv) != 0:
                    print(f"  ERROR: {filename}")
                    failed += 1
                else:
                    print(f"  {filename}")

    print("=" * 60)
    print(f"Golden directory: {golden_dir}")
    return failed


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else GOLDEN_DIR
    sys.exit(1 if make_golden(target) else 0)
