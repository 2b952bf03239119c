import pytest
from hypothesis import given
from hypothesis import strategies as st

from correctfec.convolutional import ConvolutionalCode
from correctfec.fec_shim import (
    V27POLYA,
    V27POLYB,
    V39POLYA,
    V39POLYB,
    V39POLYC,
    create_viterbi27,
    create_viterbi39,
    parity,
)


def _to_soft(encoded, num_bits):
    return [255 if (encoded[i // 8] >> (7 - i % 8)) & 1 else 0 for i in range(num_bits)]


@given(st.integers(0, 2**32 - 1), st.integers(0, 2**32 - 1))
def test_parity_is_xor_homomorphic(x, y):
    assert parity(x ^ y) == parity(x) ^ parity(y)


@given(st.integers(0, 31))
def test_parity_of_single_bit_is_one(k):
    assert parity(1 << k) == 1


def test_parity_ignores_bits_above_32():
    assert parity(1 << 40) == parity(0)


def _soft_stream(rate, order, poly, msg):
    code = ConvolutionalCode(rate, order, poly)
    groups = 8 * len(msg) + order - 1
    soft = _to_soft(code.encode(msg), groups * rate)
    return soft, groups


def test_viterbi27_decodes_stream():
    msg = b"streamed data!"
    soft, groups = _soft_stream(2, 7, (V27POLYA, V27POLYB), msg)
    vit = create_viterbi27(8 * len(msg))
    vit.init()
    vit.update_blk(soft, groups)
    assert vit.chainback(8 * len(msg)) == msg


def test_viterbi39_decodes_stream():
    msg = b"\x12\x34\x56\x78"
    soft, groups = _soft_stream(3, 9, (V39POLYA, V39POLYB, V39POLYC), msg)
    vit = create_viterbi39(8 * len(msg))
    vit.update_blk(soft, groups)
    assert vit.chainback(8 * len(msg)) == msg


def test_chainback_limited_to_available_output():
    msg = b"abcd"
    soft, groups = _soft_stream(2, 7, (V27POLYA, V27POLYB), msg)
    vit = create_viterbi27(8 * len(msg))
    vit.update_blk(soft, groups)
    assert vit.chainback(16) == msg[:2]
    assert vit.chainback(1000) == msg[2:]
    assert vit.chainback(8) == b""


def test_update_blk_never_overflows_buffer():
    msg = b"longer message"
    soft, groups = _soft_stream(2, 7, (V27POLYA, V27POLYB), msg)
    vit = create_viterbi27(32)
    vit.update_blk(soft, groups)
    out = vit.chainback(8 * len(msg))
    assert len(out) == 4
    assert out == msg[:4]


def test_init_discards_buffered_output():
    msg = b"wxyz"
    soft, groups = _soft_stream(2, 7, (V27POLYA, V27POLYB), msg)
    vit = create_viterbi27(8 * len(msg))
    vit.update_blk(soft, groups)
    vit.init()
    assert vit.chainback(8 * len(msg)) == b""


def test_update_blk_rejects_too_few_groups():
    vit = create_viterbi27(16)
    with pytest.raises(ValueError):
        vit.update_blk([0] * 8, 4)