"""Viterbi decoding of convolutional codes from hard bits or soft symbols."""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence

from correctfec.bits import BitReader, BitWriter
from correctfec.buffers import ErrorBuffer, HistoryBuffer
from correctfec.lookup import PairLookup
from correctfec.metric import (
    DISTANCE_MAX,
    SOFT_MAX,
    hamming_distance,
    soft_distance_linear,
    soft_distance_quadratic,
)

_MAX_ORDER = 32


class ConvolutionalError(ValueError):
    """Raised for invalid convolutional code parameters or encoded input."""


class SoftMeasurement(enum.Enum):
    """How soft symbols are compared with hard code words."""

    LINEAR = "linear"
    QUADRATIC = "quadratic"


class ViterbiDecoder:
    """Maximum-likelihood decoder for a rate 1/``rate`` code of constraint ``order``.

    ``table`` gives the output bits for each of the ``2 ** order`` shift-register
    states, as built by :func:`correctfec.lookup.fill_table`.
    """

    def __init__(self, rate: int, order: int, table: Sequence[int]) -> None:
        if rate < 2:
            raise ConvolutionalError("rate must be 2 or greater")
        if not 2 <= order <= _MAX_ORDER:
            raise ConvolutionalError(f"order must be between 2 and {_MAX_ORDER}")
        table = list(table)
        if len(table) != 1 << order:
            raise ConvolutionalError(
                f"table must have {1 << order} entries, got {len(table)}"
            )
        self.rate = rate
        self.order = order
        self.table = table
        self.num_states = 1 << order
        self.soft_measurement = SoftMeasurement.LINEAR

        renormalize_interval = DISTANCE_MAX // (rate * SOFT_MAX)
        self.pair_lookup = PairLookup(rate, order, table)
        self.history_buffer = HistoryBuffer(
            5 * order,
            15 * order,
            renormalize_interval,
            self.num_states // 2,
            1 << (order - 1),
        )
        self.errors = ErrorBuffer(self.num_states)

    def decode(self, encoded: bytes, num_encoded_bits: int) -> bytes:
        """Decode ``num_encoded_bits`` hard bits packed most significant bit first."""
        self._check_bit_count(num_encoded_bits)
        data = bytes(encoded)
        needed = (num_encoded_bits + 7) // 8
        if len(data) < needed:
            raise ConvolutionalError(
                f"{num_encoded_bits} bits need {needed} bytes, got {len(data)}"
            )
        sets = num_encoded_bits // self.rate
        reader = BitReader(data)
        received = [self._read_symbol(reader) for _ in range(sets)]
        outputs = range(1 << self.rate)

        def distances_at(i: int) -> list[int]:
            out = received[i]
            return [hamming_distance(j, out) for j in outputs]

        return self._run(sets, distances_at)

    def decode_soft(self, encoded: Sequence[int], num_encoded_bits: int) -> bytes:
        """Decode soft symbols where 0 means bit 0, 255 bit 1 and 128 an erasure."""
        self._check_bit_count(num_encoded_bits)
        soft = list(encoded)
        if len(soft) < num_encoded_bits:
            raise ConvolutionalError(
                f"expected {num_encoded_bits} soft symbols, got {len(soft)}"
            )
        sets = num_encoded_bits // self.rate
        rate = self.rate
        metric = (
            soft_distance_linear
            if self.soft_measurement is SoftMeasurement.LINEAR
            else soft_distance_quadratic
        )
        outputs = range(1 << rate)

        def distances_at(i: int) -> list[int]:
            symbols = soft[i * rate : (i + 1) * rate]
            return [metric(j, symbols) for j in outputs]

        return self._run(sets, distances_at)

    def _check_bit_count(self, num_encoded_bits: int) -> None:
        if num_encoded_bits < 0:
            raise ConvolutionalError("number of encoded bits must be non-negative")
        if num_encoded_bits % self.rate:
            raise ConvolutionalError(
                "encoded length of message must be a multiple of rate"
            )

    def _read_symbol(self, reader: BitReader) -> int:
        return sum(reader.read(1) << k for k in range(self.rate))

    def _run(self, sets: int, distances_at: Callable[[int], list[int]]) -> bytes:
        writer = BitWriter()
        self.errors.reset()
        self.history_buffer.reset()
        self._warmup(sets, distances_at)
        self._inner(sets, distances_at, writer)
        self._tail(sets, distances_at, writer)
        self.history_buffer.flush(writer)
        return writer.getvalue()

    def _warmup(self, sets: int, distances_at: Callable[[int], list[int]]) -> None:
        # Fill the register from the all-zero state; no decisions are made yet.
        table = self.table
        for i in range(min(self.order - 1, sets)):
            distances = distances_at(i)
            read_errors = self.errors.read_errors
            write_errors = self.errors.write_errors
            for j in range(1 << (i + 1)):
                write_errors[j] = (distances[table[j]] + read_errors[j >> 1]) & DISTANCE_MAX
            self.errors.swap()

    def _inner(
        self, sets: int, distances_at: Callable[[int], list[int]], writer: BitWriter
    ) -> None:
        highbit = 1 << (self.order - 1)
        highbase = highbit >> 1
        lookup = self.pair_lookup
        keys = lookup.keys
        packed = lookup.distances
        history_buffer = self.history_buffer
        for i in range(self.order - 1, sets - self.order + 1):
            lookup.fill_distance(distances_at(i))
            read_errors = self.errors.read_errors
            write_errors = self.errors.write_errors
            history = history_buffer.get_slice()
            # States 2*base and 2*base + 1 share their two possible predecessors.
            for base in range(highbase):
                low_concat = packed[keys[base]]
                high_concat = packed[keys[highbase + base]]
                low_past = read_errors[base]
                high_past = read_errors[highbase + base]
                for bit, shift in ((0, 0), (1, 16)):
                    low_error = (((low_concat >> shift) & 0xFFFF) + low_past) & DISTANCE_MAX
                    high_error = (((high_concat >> shift) & 0xFFFF) + high_past) & DISTANCE_MAX
                    successor = 2 * base + bit
                    if low_error <= high_error:
                        write_errors[successor] = low_error
                        history[successor] = 0
                    else:
                        write_errors[successor] = high_error
                        history[successor] = 1
            history_buffer.process(write_errors, writer)
            self.errors.swap()

    def _tail(
        self, sets: int, distances_at: Callable[[int], list[int]], writer: BitWriter
    ) -> None:
        # Only zeros are shifted in now, so successors with set low bits are skipped.
        order = self.order
        highbit = 1 << (order - 1)
        highbase = highbit >> 1
        table = self.table
        history_buffer = self.history_buffer
        for i in range(max(sets - order + 1, 0), sets):
            distances = distances_at(i)
            read_errors = self.errors.read_errors
            write_errors = self.errors.write_errors
            history = history_buffer.get_slice()
            skip = 1 << (order - (sets - i))
            for low in range(0, highbit, skip):
                base = low >> 1
                low_error = (distances[table[low]] + read_errors[base]) & DISTANCE_MAX
                high_error = (
                    distances[table[low + highbit]] + read_errors[highbase + base]
                ) & DISTANCE_MAX
                if low_error < high_error:
                    write_errors[low] = low_error
                    history[low] = 0
                else:
                    write_errors[low] = high_error
                    history[low] = 1
            history_buffer.process_skip(write_errors, writer, skip)
            self.errors.swap()