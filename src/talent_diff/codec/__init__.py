"""codec subpackage: export-string decoding.

Re-exports:
- decode_alphabet_string / BitCursor: the bit-level reader
- parse_talent_string: header and per-node selection decoding
- SPEC_NAMES / CLASS_NAMES: static lookup tables
"""

from talent_diff.codec.bitstream import ALPHABET, BitCursor, decode_alphabet_string
from talent_diff.codec.parser import HEADER_BYTES, hex_dump, parse_talent_string
from talent_diff.codec.specs import (
    CLASS_NAMES,
    SPEC_CLASS_IDS,
    SPEC_NAMES,
    class_name_for_spec,
    spec_name,
)

__all__ = [
    "ALPHABET",
    "CLASS_NAMES",
    "HEADER_BYTES",
    "SPEC_CLASS_IDS",
    "SPEC_NAMES",
    "BitCursor",
    "class_name_for_spec",
    "decode_alphabet_string",
    "hex_dump",
    "parse_talent_string",
    "spec_name",
]
