"""Bit-level readers and writers used by the convolutional codec."""

from __future__ import annotations

from collections.abc import Iterable


def popcount(x: int) -> int:
    """Return the number of set bits in the non-negative integer ``x``."""
    if x < 0:
        raise ValueError("popcount is defined for non-negative integers only")
    return bin(x).count("1")


def reverse_byte(b: int) -> int:
    """Return the byte ``b`` with its bit order reversed."""
    if not 0 <= b <= 0xFF:
        raise ValueError(f"not a byte: {b}")
    return int(f"{b:08b}"[::-1], 2)


_REVERSE_TABLE = bytes(reverse_byte(i) for i in range(256))


class BitWriter:
    """Packs bits into bytes, most significant bit of each byte first.

    Only completed bytes are part of the output; a partial byte is held back
    until it is completed or :meth:`flush_byte` is called.
    """

    def __init__(self) -> None:
        self._bytes = bytearray()
        self._current = 0
        self._current_len = 0

    def reset(self) -> None:
        """Discard everything written so far."""
        self._bytes.clear()
        self._current = 0
        self._current_len = 0

    def write(self, val: int, n: int) -> None:
        """Write the low ``n`` bits of ``val``, least significant bit first."""
        for _ in range(n):
            self.write_1(val)
            val >>= 1

    def write_1(self, val: int) -> None:
        """Write the lowest bit of ``val``."""
        self._current |= val & 1
        self._current_len += 1
        if self._current_len == 8:
            self._bytes.append(self._current)
            self._current = 0
            self._current_len = 0
        else:
            self._current = (self._current << 1) & 0xFF

    def write_bitlist(self, bits: Iterable[int]) -> None:
        """Write a sequence of bits in the order given."""
        for bit in bits:
            self.write_1(bit)

    def write_bitlist_reversed(self, bits: Iterable[int]) -> None:
        """Write a sequence of bits, last element first."""
        for bit in reversed(list(bits)):
            self.write_1(bit)

    def flush_byte(self) -> None:
        """Emit the pending partial byte, if any, shifted towards the top bits."""
        if self._current_len:
            self._bytes.append((self._current << (8 - self._current_len)) & 0xFF)
            self._current = 0
            self._current_len = 0

    def getvalue(self) -> bytes:
        """Return the completed bytes."""
        return bytes(self._bytes)

    def __len__(self) -> int:
        return len(self._bytes)


class BitReader:
    """Reads groups of bits from a byte string, most significant bit first."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read(self, n: int) -> int:
        """Read ``n`` bits (1 to 8); the first bit read becomes bit 0 of the result."""
        if not 1 <= n <= 8:
            raise ValueError(f"can read between 1 and 8 bits at a time, not {n}")
        end = self._pos + n
        if end > 8 * len(self._data):
            raise EOFError("not enough bits left to read")
        chunk = int.from_bytes(self._data[self._pos >> 3 : (end + 7) >> 3], "big")
        span = ((end + 7) >> 3) - (self._pos >> 3)
        value = (chunk >> (8 * span - (end - (self._pos & ~7)))) & ((1 << n) - 1)
        self._pos = end
        return _REVERSE_TABLE[value] >> (8 - n)