"""Output tables for convolutional shift-register states."""

from __future__ import annotations

from collections.abc import Sequence

from correctfec.bits import popcount


def fill_table(rate: int, order: int, poly: Sequence[int]) -> list[int]:
    """Output bits for every shift-register state.

    Entry ``i`` concatenates the parity of ``i & poly[j]`` for each polynomial;
    the first polynomial gives the least significant bit.
    """
    if len(poly) < rate:
        raise ValueError(f"expected {rate} polynomials, got {len(poly)}")
    polys = list(poly[:rate])
    return [
        sum((popcount(state & p) & 1) << j for j, p in enumerate(polys))
        for state in range(1 << order)
    ]


class PairLookup:
    """Deduplicated outputs of state pairs (2i, 2i+1) with their packed distances.

    ``keys[i]`` indexes ``outputs`` and ``distances`` for the pair starting at
    state ``2 * i``. Entry 0 of ``outputs`` and ``distances`` is unused.
    """

    def __init__(self, rate: int, order: int, table: Sequence[int]) -> None:
        self.output_width = rate
        self.output_mask = (1 << rate) - 1
        self.outputs: list[int] = [0]
        self.keys: list[int] = []
        index_of: dict[int, int] = {}
        for i in range(1 << (order - 1)):
            out = (table[2 * i + 1] << rate) | table[2 * i]
            key = index_of.get(out)
            if key is None:
                key = len(self.outputs)
                index_of[out] = key
                self.outputs.append(out)
            self.keys.append(key)
        self.distances: list[int] = [0] * len(self.outputs)

    @property
    def outputs_len(self) -> int:
        return len(self.outputs)

    def fill_distance(self, distances: Sequence[int]) -> None:
        """Pack the distances of each output pair: high half for the odd state."""
        for i, concat_out in enumerate(self.outputs[1:], start=1):
            i_0 = concat_out & self.output_mask
            i_1 = concat_out >> self.output_width
            self.distances[i] = (distances[i_1] << 16) | distances[i_0]