"""Path-metric and path-history buffers for the Viterbi decoder."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence

from correctfec.bits import BitWriter
from correctfec.metric import DISTANCE_MAX


class ErrorBuffer:
    """Double buffer of accumulated path errors, one entry per register state.

    ``read_errors`` holds the errors of the previous time slice and
    ``write_errors`` receives those of the current one.
    """

    def __init__(self, num_states: int) -> None:
        if num_states <= 0:
            raise ValueError("num_states must be positive")
        self.num_states = num_states
        self.errors: tuple[list[int], list[int]] = ([0] * num_states, [0] * num_states)
        self.index = 0
        self.read_errors: list[int] = self.errors[0]
        self.write_errors: list[int] = self.errors[1]

    def reset(self) -> None:
        """Zero both buffers and restore the initial read/write assignment."""
        for errors in self.errors:
            errors[:] = [0] * self.num_states
        self.index = 0
        self.read_errors = self.errors[0]
        self.write_errors = self.errors[1]

    def swap(self) -> None:
        """Advance to the next time slice."""
        self.read_errors = self.errors[self.index]
        self.index = (self.index + 1) % 2
        self.write_errors = self.errors[self.index]


class HistoryBuffer:
    """Ring buffer of per-state survivor decisions.

    Each slice holds one decision per register state (1 when the predecessor
    with the high bit set won). Once the buffer is full, a traceback from the
    best state emits every decision older than ``min_traceback_length``.
    """

    def __init__(
        self,
        min_traceback_length: int,
        traceback_group_length: int,
        renormalize_interval: int,
        num_states: int,
        highbit: int,
    ) -> None:
        if num_states <= 0:
            raise ValueError("num_states must be positive")
        if min_traceback_length < 0 or traceback_group_length < 0:
            raise ValueError("traceback lengths must be non-negative")
        self.min_traceback_length = min_traceback_length
        self.traceback_group_length = traceback_group_length
        self.cap = min_traceback_length + traceback_group_length
        if self.cap <= 0:
            raise ValueError("history buffer capacity must be positive")
        self.num_states = num_states
        self.highbit = highbit
        self.history = [bytearray(num_states) for _ in range(self.cap)]
        self.index = 0
        self.length = 0
        self.renormalize_interval = renormalize_interval
        self.renormalize_counter = 0

    def __len__(self) -> int:
        return self.length

    def reset(self) -> None:
        """Forget all stored history."""
        self.length = 0
        self.index = 0

    def get_slice(self) -> bytearray:
        """The slice that the current time step writes its decisions into."""
        return self.history[self.index]

    def search(self, distances: Sequence[int], search_every: int) -> int:
        """State with the least error among every ``search_every``-th state."""
        best_path = 0
        least_error = DISTANCE_MAX
        for state in range(0, self.num_states, search_every):
            if distances[state] < least_error:
                least_error = distances[state]
                best_path = state
        return best_path

    def renormalize(self, distances: MutableSequence[int], min_register: int) -> None:
        """Subtract the error of ``min_register`` from every state's error."""
        min_distance = distances[min_register]
        for state in range(self.num_states):
            distances[state] = (distances[state] - min_distance) & DISTANCE_MAX

    def traceback(
        self, bestpath: int, min_traceback_length: int, output: BitWriter
    ) -> None:
        """Walk back from ``bestpath``; emit the bits older than the minimum depth."""
        highbit = self.highbit
        cap = self.cap
        index = self.index
        for _ in range(min_traceback_length):
            index = cap - 1 if index == 0 else index - 1
            if self.history[index][bestpath]:
                bestpath |= highbit
            bestpath >>= 1

        fetched: list[int] = []
        for _ in range(min_traceback_length, self.length):
            index = cap - 1 if index == 0 else index - 1
            pathbit = highbit if self.history[index][bestpath] else 0
            bestpath = (bestpath | pathbit) >> 1
            fetched.append(1 if pathbit else 0)

        output.write_bitlist_reversed(fetched)
        self.length -= len(fetched)

    def process_skip(
        self, distances: MutableSequence[int], output: BitWriter, skip: int
    ) -> None:
        """Commit the current slice, renormalizing and tracing back when due."""
        self.index += 1
        if self.index == self.cap:
            self.index = 0
        self.renormalize_counter += 1
        self.length += 1

        if self.renormalize_counter == self.renormalize_interval:
            self.renormalize_counter = 0
            bestpath = self.search(distances, skip)
            self.renormalize(distances, bestpath)
            if self.length == self.cap:
                self.traceback(bestpath, self.min_traceback_length, output)
        elif self.length == self.cap:
            bestpath = self.search(distances, skip)
            self.traceback(bestpath, self.min_traceback_length, output)

    def process(self, distances: MutableSequence[int], output: BitWriter) -> None:
        """Commit the current slice, considering every state."""
        self.process_skip(distances, output, 1)

    def flush(self, output: BitWriter) -> None:
        """Emit all remaining history, tracing back from state 0."""
        self.traceback(0, 0, output)