"""A Viterbi decoder interface in the style of the classic streaming API."""

from __future__ import annotations

from collections.abc import Sequence

from correctfec.bits import popcount
from correctfec.convolutional import ConvolutionalCode

V27POLYA = 0o155
V27POLYB = 0o117

V29POLYA = 0o657
V29POLYB = 0o435

V39POLYA = 0o755
V39POLYB = 0o633
V39POLYC = 0o447

V615POLYA = 0o42631
V615POLYB = 0o47245
V615POLYC = 0o56507
V615POLYD = 0o73363
V615POLYE = 0o77267
V615POLYF = 0o64537


def parity(x: int) -> int:
    """Parity (0 or 1) of the low 32 bits of ``x``."""
    return popcount(x & 0xFFFFFFFF) & 1


class Viterbi:
    """Buffered Viterbi decoder: feed soft blocks, then read decoded bytes back."""

    def __init__(
        self, num_decoded_bits: int, rate: int, order: int, poly: Sequence[int]
    ) -> None:
        if num_decoded_bits < 0:
            raise ValueError("number of decoded bits must be non-negative")
        self.rate = rate
        self.order = order
        self.code = ConvolutionalCode(rate, order, poly)
        self._buf = bytearray((num_decoded_bits + 7) // 8)
        self._read_pos = 0
        self._write_pos = 0

    def init(self) -> None:
        """Discard buffered output and start afresh."""
        self._read_pos = 0
        self._write_pos = 0

    def update_blk(self, encoded_soft: Sequence[int], num_encoded_groups: int) -> None:
        """Decode ``num_encoded_groups`` groups of ``rate`` soft symbols into the buffer."""
        n_write_bits = num_encoded_groups - (self.order - 1)
        if n_write_bits < 0:
            raise ValueError(
                f"need at least {self.order - 1} encoded groups, got {num_encoded_groups}"
            )
        rem_bits = 8 * (len(self._buf) - self._write_pos)
        if n_write_bits > rem_bits:
            reduction = n_write_bits - rem_bits
            num_encoded_groups -= reduction
            n_write_bits -= reduction
        decoded = self.code.decode_soft(encoded_soft, num_encoded_groups * self.rate)
        n_bytes = n_write_bits // 8
        chunk = decoded[:n_bytes]
        self._buf[self._write_pos : self._write_pos + len(chunk)] = chunk
        self._write_pos += n_bytes

    def chainback(self, num_decoded_bits: int) -> bytes:
        """Return up to ``num_decoded_bits`` decoded bits (as whole bytes) not yet read."""
        rem_bits = 8 * (self._write_pos - self._read_pos)
        num_decoded_bits = max(0, min(num_decoded_bits, rem_bits))
        n_bytes = (num_decoded_bits + 7) // 8
        out = bytes(self._buf[self._read_pos : self._read_pos + n_bytes])
        self._read_pos += n_bytes
        return out


def create_viterbi27(num_decoded_bits: int) -> Viterbi:
    """Rate 1/2, constraint length 7 decoder."""
    return Viterbi(num_decoded_bits, 2, 7, (V27POLYA, V27POLYB))


def create_viterbi29(num_decoded_bits: int) -> Viterbi:
    """Rate 1/2, constraint length 9 decoder."""
    return Viterbi(num_decoded_bits, 2, 9, (V29POLYA, V29POLYB))


def create_viterbi39(num_decoded_bits: int) -> Viterbi:
    """Rate 1/3, constraint length 9 decoder."""
    return Viterbi(num_decoded_bits, 3, 9, (V39POLYA, V39POLYB, V39POLYC))


def create_viterbi615(num_decoded_bits: int) -> Viterbi:
    """Rate 1/6, constraint length 15 decoder."""
    return Viterbi(
        num_decoded_bits,
        6,
        15,
        (V615POLYA, V615POLYB, V615POLYC, V615POLYD, V615POLYE, V615POLYF),
    )