import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from correctfec.bits import BitReader, BitWriter
from correctfec.lookup import fill_table
from correctfec.viterbi import ConvolutionalError, SoftMeasurement, ViterbiDecoder

R12_K7 = (2, 7, (0o161, 0o127))
R12_K6 = (2, 6, (0o73, 0o61))
R13_K9 = (3, 9, (0o417, 0o627, 0o675))


def _encode(msg, rate, order, poly):
    table = fill_table(rate, order, poly)
    writer = BitWriter()
    mask = (1 << order) - 1
    reg = 0
    reader = BitReader(msg)
    for _ in range(8 * len(msg)):
        reg = ((reg << 1) | reader.read(1)) & mask
        writer.write(table[reg], rate)
    for _ in range(order + 1):
        reg = (reg << 1) & mask
        writer.write(table[reg], rate)
    writer.flush_byte()
    return writer.getvalue(), rate * (8 * len(msg) + order + 1), table


def _flip(data, positions):
    out = bytearray(data)
    for pos in positions:
        out[pos // 8] ^= 0x80 >> (pos % 8)
    return bytes(out)


def _to_soft(data, nbits):
    return [255 if (data[k // 8] >> (7 - k % 8)) & 1 else 0 for k in range(nbits)]


@pytest.mark.parametrize("code", [R12_K7, R12_K6, R13_K9])
def test_hard_round_trip(code):
    rate, order, poly = code
    msg = b"Hello, world!"
    encoded, nbits, table = _encode(msg, rate, order, poly)
    decoder = ViterbiDecoder(rate, order, table)
    assert decoder.decode(encoded, nbits) == msg


def test_hard_decode_corrects_scattered_errors():
    rate, order, poly = R12_K7
    msg = b"convolutional codes"
    encoded, nbits, table = _encode(msg, rate, order, poly)
    corrupted = _flip(encoded, [10, 70, 150, 230])
    assert corrupted != encoded
    assert ViterbiDecoder(rate, order, table).decode(corrupted, nbits) == msg


def test_long_message_uses_traceback_and_renormalization():
    rate, order, poly = R12_K7
    rng = random.Random(1234)
    msg = bytes(rng.randrange(256) for _ in range(120))
    encoded, nbits, table = _encode(msg, rate, order, poly)
    corrupted = _flip(encoded, range(5, nbits, 97))
    assert ViterbiDecoder(rate, order, table).decode(corrupted, nbits) == msg


def test_soft_round_trip_with_erasures():
    rate, order, poly = R12_K7
    msg = b"soft symbols"
    encoded, nbits, table = _encode(msg, rate, order, poly)
    soft = _to_soft(encoded, nbits)
    for k in range(3, nbits, 41):
        soft[k] = 128
    decoder = ViterbiDecoder(rate, order, table)
    assert decoder.soft_measurement is SoftMeasurement.LINEAR
    assert decoder.decode_soft(soft, nbits) == msg


def test_decoder_is_reusable():
    rate, order, poly = R12_K7
    first, nbits1, table = _encode(b"first message", rate, order, poly)
    second, nbits2, _ = _encode(b"second", rate, order, poly)
    decoder = ViterbiDecoder(rate, order, table)
    assert decoder.decode(first, nbits1) == b"first message"
    assert decoder.decode(second, nbits2) == b"second"
    assert decoder.decode(first, nbits1) == b"first message"


def test_empty_inputs_decode_to_nothing():
    rate, order, poly = R12_K7
    encoded, nbits, table = _encode(b"", rate, order, poly)
    decoder = ViterbiDecoder(rate, order, table)
    assert decoder.decode(encoded, nbits) == b""
    assert decoder.decode(b"", 0) == b""
    assert decoder.decode_soft([], 0) == b""


def test_bit_count_must_be_multiple_of_rate():
    rate, order, poly = R12_K7
    encoded, nbits, table = _encode(b"abc", rate, order, poly)
    decoder = ViterbiDecoder(rate, order, table)
    with pytest.raises(ConvolutionalError):
        decoder.decode(encoded, nbits - 1)
    with pytest.raises(ConvolutionalError):
        decoder.decode_soft(_to_soft(encoded, nbits), nbits - 1)


def test_too_short_input_is_rejected():
    rate, order, poly = R12_K7
    encoded, nbits, table = _encode(b"abc", rate, order, poly)
    decoder = ViterbiDecoder(rate, order, table)
    with pytest.raises(ConvolutionalError):
        decoder.decode(encoded[:-2], nbits)
    with pytest.raises(ConvolutionalError):
        decoder.decode_soft(_to_soft(encoded, nbits)[:-4], nbits)


def test_invalid_parameters():
    table = fill_table(2, 7, (0o161, 0o127))
    with pytest.raises(ConvolutionalError):
        ViterbiDecoder(1, 7, table)
    with pytest.raises(ConvolutionalError):
        ViterbiDecoder(2, 6, table)
    assert issubclass(ConvolutionalError, ValueError)


@settings(max_examples=20, deadline=None)
@given(st.binary(min_size=0, max_size=12))
def test_round_trip_property(msg):
    rate, order, poly = R12_K6
    encoded, nbits, table = _encode(msg, rate, order, poly)
    decoder = ViterbiDecoder(rate, order, table)
    assert decoder.decode(encoded, nbits) == msg
    assert decoder.decode_soft(_to_soft(encoded, nbits), nbits) == msg