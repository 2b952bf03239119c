"""Convolutional encoder and decoder for rate 1/n codes."""

from __future__ import annotations

from collections.abc import Sequence

from correctfec.bits import BitReader, BitWriter
from correctfec.lookup import fill_table
from correctfec.viterbi import ConvolutionalError, ViterbiDecoder

# Standard polynomials, indexed by inverse rate and constraint length (order).
CONV_R12_6_POLYNOMIAL = (0o73, 0o61)
CONV_R12_7_POLYNOMIAL = (0o161, 0o127)
CONV_R12_8_POLYNOMIAL = (0o225, 0o373)
CONV_R12_9_POLYNOMIAL = (0o767, 0o545)
CONV_R13_6_POLYNOMIAL = (0o53, 0o75, 0o47)
CONV_R13_7_POLYNOMIAL = (0o137, 0o153, 0o121)
CONV_R13_8_POLYNOMIAL = (0o333, 0o257, 0o351)
CONV_R13_9_POLYNOMIAL = (0o417, 0o627, 0o675)

_MAX_ORDER = 32


class ConvolutionalCode:
    """Encoder/decoder for a convolutional code of inverse rate ``rate``.

    ``poly`` holds ``rate`` generator polynomials of up to 16 bits each.
    """

    def __init__(self, rate: int, order: int, poly: Sequence[int]) -> None:
        if order > _MAX_ORDER:
            raise ConvolutionalError(f"order must be at most {_MAX_ORDER}")
        if order < 1:
            raise ConvolutionalError("order must be positive")
        if rate < 2:
            raise ConvolutionalError("rate must be 2 or greater")
        polys = tuple(poly)
        if len(polys) != rate:
            raise ConvolutionalError(f"expected {rate} polynomials, got {len(polys)}")
        if any(not 0 <= p <= 0xFFFF for p in polys):
            raise ConvolutionalError("polynomials must be 16-bit values")
        self.rate = rate
        self.order = order
        self.poly = polys
        self.table = fill_table(rate, order, polys)
        self._decoder: ViterbiDecoder | None = None

    @property
    def decoder(self) -> ViterbiDecoder:
        """The Viterbi decoder, built on first use."""
        if self._decoder is None:
            self._decoder = ViterbiDecoder(self.rate, self.order, self.table)
        return self._decoder

    def encode_len(self, msg_len: int) -> int:
        """Number of encoded *bits* for a message of ``msg_len`` bytes."""
        if msg_len < 0:
            raise ValueError("message length must be non-negative")
        return self.rate * (8 * msg_len + self.order + 1)

    def encode(self, msg: bytes) -> bytes:
        """Encode ``msg``; the last byte is zero-padded.

        The number of meaningful bits is :meth:`encode_len` of ``len(msg)``.
        """
        data = bytes(msg)
        shiftmask = (1 << self.order) - 1
        table = self.table
        writer = BitWriter()
        reader = BitReader(data)
        register = 0
        for _ in range(8 * len(data)):
            register = ((register << 1) | reader.read(1)) & shiftmask
            writer.write(table[register], self.rate)
        # Flush the register by shifting in zeros.
        for _ in range(self.order + 1):
            register = (register << 1) & shiftmask
            writer.write(table[register], self.rate)
        writer.flush_byte()
        return writer.getvalue()

    def decode(self, encoded: bytes, num_encoded_bits: int) -> bytes:
        """Decode ``num_encoded_bits`` hard bits; the result may contain errors."""
        return self.decoder.decode(encoded, num_encoded_bits)

    def decode_soft(self, encoded: Sequence[int], num_encoded_bits: int) -> bytes:
        """Decode soft symbols (0 for bit 0, 255 for bit 1, 128 for erasure)."""
        return self.decoder.decode_soft(encoded, num_encoded_bits)