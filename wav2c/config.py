"""Emitter configuration: defaults, type name overrides and array naming"""

import enum
import os
import re
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

# 220,000 samples of 16-bit 44.1 kHz audio is about 5 seconds / 440 KB
MAX_SAMPLES = 220_000
SAMPLES_PER_LINE = 12
BYTES_PER_LINE = 16

ENV_TYPE_VARS = {
    'int8': 'WAV2C_INT8_TYPE',
    'int16': 'WAV2C_INT16_TYPE',
    'int32': 'WAV2C_INT32_TYPE',
    'size': 'WAV2C_SIZE_TYPE',
}


class ArrayFormat(enum.Enum):
    DECIMAL = 'base10'
    BASE16 = 'base16'

    @classmethod
    def from_name(cls, name: str) -> 'ArrayFormat':
        name = name.lower()
        if name == 'decimal':
            return cls.DECIMAL
        return cls(name)


@dataclass(frozen=True)
class TypeNames:
    """C type names used for 8/16/32-bit samples and for the sample count"""

    int8: str = 'uint8_t'
    int16: str = 'int16_t'
    int32: str = 'int32_t'
    size: str = 'size_t'

    def for_bits(self, bits_per_sample: int) -> str:
        return {8: self.int8, 16: self.int16, 32: self.int32}[bits_per_sample]


DEFAULT_TYPE_NAMES = TypeNames()


def type_names_from_env(environ: Optional[Mapping[str, str]] = None,
                        base: TypeNames = DEFAULT_TYPE_NAMES) -> TypeNames:
    """Apply WAV2C_*_TYPE overrides from `environ` (default os.environ)"""
    if environ is None:
        environ = os.environ
    overrides = {}
    for role, var in ENV_TYPE_VARS.items():
        value = environ.get(var, '').strip()
        if value:
            overrides[role] = value
    return replace(base, **overrides)


def sanitize_array_name(name: str) -> str:
    """Turn a file stem or user string into a C identifier"""
    name = re.sub(r'[^0-9A-Za-z_]', '_', name.strip())
    if name and name[0].isdigit():
        name = f"_{name}"
    return name


@dataclass(frozen=True)
class EmitConfig:
    array_name: str
    type_names: TypeNames = field(default_factory=TypeNames)
    emit_header: bool = False
    emit_comment: bool = True
    prefix_text: Optional[str] = None
    format: ArrayFormat = ArrayFormat.DECIMAL
    max_samples: Optional[int] = MAX_SAMPLES
    source_name: Optional[str] = None

    def __post_init__(self):
        if self.max_samples is not None and self.max_samples < 0:
            raise ValueError(f"max_samples must be >= 0, got {self.max_samples}")
        if not self.array_name:
            raise ValueError("array_name must not be empty")

    @property
    def count_name(self) -> str:
        return f"{self.array_name.upper()}_SAMPLE_NO"
