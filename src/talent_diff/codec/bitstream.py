"""Base64-alphabet unpacking and a little-endian bit cursor.

Export strings use the standard base64 symbols ``A-Za-z0-9+/`` but are NOT
standard base64: the 6-bit groups are packed low-order-first, so the first
symbol becomes the low bits of the first byte.  ``base64.b64decode`` would
produce a different buffer and must not be used here.

``BitCursor`` reads from the resulting buffer one bit at a time, least
significant bit of each byte first.  Reads past the end of the buffer yield
zero bits instead of failing.  Deployed export strings rely on this (the tail
of the node section is frequently cut short), so the cursor only *counts*
underrun bits and leaves the decision to the caller.
"""

from __future__ import annotations

import logging

from talent_diff.errors import InvalidCharacterError

__all__ = ["ALPHABET", "BitCursor", "decode_alphabet_string"]

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

# Module-level reverse lookup (immutable after import)
_SYMBOL_VALUES: dict[str, int] = {symbol: value for value, symbol in enumerate(ALPHABET)}

_MAX_READ_BITS = 32


def decode_alphabet_string(text: str) -> bytes:
    """Unpack an export string into its byte buffer.

    Args:
        text: The export string.  Any whitespace, anywhere, is ignored.

    Returns:
        ``floor(symbols * 6 / 8)`` bytes.  Bits left over after the last whole
        byte are discarded.

    Raises:
        InvalidCharacterError: If a non-whitespace symbol is outside the alphabet.
    """
    symbols = "".join(text.split())
    output_length = len(symbols) * 6 // 8
    output = bytearray()

    bit_buffer = 0
    bits_in_buffer = 0
    for position, symbol in enumerate(symbols):
        value = _SYMBOL_VALUES.get(symbol)
        if value is None:
            raise InvalidCharacterError(symbol, position)

        bit_buffer |= value << bits_in_buffer
        bits_in_buffer += 6

        while bits_in_buffer >= 8 and len(output) < output_length:
            output.append(bit_buffer & 0xFF)
            bit_buffer >>= 8
            bits_in_buffer -= 8

    logger.debug("Decoded %d symbols into %d bytes", len(symbols), len(output))
    return bytes(output)


class BitCursor:
    """Sequential little-endian bit reader over an immutable byte buffer.

    Example::

        cursor = BitCursor(bytes([0b0000_0101]))
        cursor.read_bits(3)   # 5
        cursor.read_bit()     # False
        cursor.bits_remaining # 4
    """

    __slots__ = ("_data", "_position", "_underrun_bits")

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0
        self._underrun_bits = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def position(self) -> int:
        """Number of bits consumed so far."""
        return self._position

    @property
    def bits_remaining(self) -> int:
        """Number of unread bits left in the buffer (never negative)."""
        return len(self._data) * 8 - self._position

    @property
    def underrun_bits(self) -> int:
        """Bits requested after the buffer was exhausted (read back as zero)."""
        return self._underrun_bits

    @property
    def underrun(self) -> bool:
        """True once any read has run past the end of the buffer."""
        return self._underrun_bits > 0

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_bits(self, count: int) -> int:
        """Read ``count`` bits; the first bit read is the least significant.

        Missing bits past the end of the buffer read as zero.

        Args:
            count: Number of bits, 1 to 32 inclusive.

        Returns:
            The assembled unsigned integer.

        Raises:
            ValueError: If ``count`` is outside [1, 32].
        """
        if not 1 <= count <= _MAX_READ_BITS:
            msg = f"count must be in [1, {_MAX_READ_BITS}], got {count}"
            raise ValueError(msg)

        result = 0
        for i in range(count):
            byte_index, bit_index = divmod(self._position, 8)
            if byte_index >= len(self._data):
                self._underrun_bits += count - i
                break
            bit = (self._data[byte_index] >> bit_index) & 1
            result |= bit << i
            self._position += 1
        return result

    def read_bit(self) -> bool:
        """Read a single bit as a flag."""
        return self.read_bits(1) != 0
