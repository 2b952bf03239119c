# correctfec

Forward error correction in pure Python, with no runtime dependencies:

- **Convolutional codes** of rate 1/N (N ≥ 2) with a Viterbi decoder for hard bits
  and for soft 8-bit symbols (`correctfec.convolutional`, `correctfec.viterbi`).
- **Streaming-style Viterbi decoders** for four common codes
  (`correctfec.fec_shim`).
- **GF(2^8) arithmetic** built from a primitive polynomial using log/exp tables
  (`correctfec.field`).

## Convolutional coding

```python
from correctfec.convolutional import ConvolutionalCode

# rate 1/2, constraint length 7, polynomials 0161 and 0127
code = ConvolutionalCode(2, 7, [0o161, 0o127])

message = b"hello, world"
encoded = code.encode(message)
num_bits = code.encode_len(len(message))   # length of the encoding in bits

# flip a bit to simulate channel noise
corrupted = bytearray(encoded)
corrupted[3] ^= 0x10

decoded = code.decode(bytes(corrupted), num_bits)
assert decoded[: len(message)] == message
```

`encode_len(msg_len)` returns `rate * (8 * msg_len + order + 1)`, a length in **bits**;
`encode` returns that many bits rounded up to whole bytes, with the last byte
zero-padded. The encoder flushes its shift register with zeros at the end of every
message.

`ConvolutionalCode` raises `ConvolutionalError` (a `ValueError`) when the rate is
below 2, the order is outside 1..32, the number of polynomials differs from the rate,
or a polynomial does not fit in 16 bits. The decoder itself needs an order of at
least 2. Decoding raises `ConvolutionalError` when the number of encoded bits is not
a multiple of the rate or the input is too short for it. The decoder cannot tell
whether too many bits were corrupted: it always returns a message, so check
integrity with a checksum of your own.

Some reference polynomials are available as constants, e.g.
`CONV_R12_7_POLYNOMIAL` or `CONV_R13_9_POLYNOMIAL` (rate 1/2 and 1/3, orders 6 to 9).

### Soft decisions

`decode_soft` takes one value per encoded bit: `0` for a confident 0, `255` for a
confident 1, and `128` for an erased symbol.

```python
from correctfec.bits import BitReader

reader = BitReader(encoded)
soft = bytes(255 if reader.read(1) else 0 for _ in range(num_bits))
decoded = code.decode_soft(soft, num_bits)
```

Soft symbols are compared with the absolute-difference metric by default. The
decoder built by a code (`code.decoder`, a `ViterbiDecoder`) can be switched to the
squared-distance metric:

```python
from correctfec.viterbi import SoftMeasurement

code.decoder.soft_measurement = SoftMeasurement.QUADRATIC
```

## Streaming-style decoders

`correctfec.fec_shim` offers decoders with fixed codes and the polynomials
traditionally used for them:

| factory              | rate | order |
|----------------------|------|-------|
| `create_viterbi27`   | 1/2  | 7     |
| `create_viterbi29`   | 1/2  | 9     |
| `create_viterbi39`   | 1/3  | 9     |
| `create_viterbi615`  | 1/6  | 15    |

Each returns a `Viterbi` object holding a buffer of `num_decoded_bits` bits:

```python
from correctfec.fec_shim import create_viterbi27

vit = create_viterbi27(num_decoded_bits)
vit.init()                                    # reset the buffer
vit.update_blk(soft_symbols, num_encoded_groups)
data = vit.chainback(num_decoded_bits)        # bytes not yet read
```

`update_blk` decodes `num_encoded_groups` groups of `rate` soft symbols and stores
`num_encoded_groups - (order - 1)` bits, in whole bytes, never writing past the end
of the buffer; it raises `ValueError` if fewer than `order - 1` groups are given.
`chainback` returns at most as many bytes as have been stored and not yet read.
The module also provides `parity(x)`, the parity of the low 32 bits of `x`, and the
polynomial constants `V27POLYA`, `V27POLYB`, `V29POLYA`, ….

## Galois field arithmetic

```python
from correctfec.field import GaloisField, PRIMITIVE_POLYNOMIAL_8_4_3_2_0

gf = GaloisField(PRIMITIVE_POLYNOMIAL_8_4_3_2_0)   # x^8 + x^4 + x^3 + x^2 + 1
product = gf.mul(0x53, 0xCA)
assert gf.div(product, 0xCA) == 0x53
assert gf.add(7, 7) == 0
```

`GaloisField` offers `add`, `sub`, `sum`, `mul`, `div` (division by zero yields 0),
`pow` (negative powers allowed), and the logarithm-domain operations `mul_log`,
`div_log` and `mul_log_element`. Its `exp` table has 512 entries and `log` has 256.
Arguments outside 0..255 raise `ValueError`. `PRIMITIVE_POLYNOMIALS` lists the
sixteen degree-8 primitive polynomials provided; `PRIMITIVE_POLYNOMIAL_CCSDS` is
`0x187`.

## Lower-level pieces

The decoder's building blocks can be used on their own:

- `correctfec.bits`: `BitWriter`, `BitReader`, `popcount`, `reverse_byte`
- `correctfec.metric`: `hamming_distance`, `soft_distance_linear`,
  `soft_distance_quadratic`
- `correctfec.lookup`: `fill_table`, `PairLookup`
- `correctfec.buffers`: `ErrorBuffer`, `HistoryBuffer`
- `correctfec.viterbi`: `ViterbiDecoder`, `SoftMeasurement`, `ConvolutionalError`

## What it does not do

- There is no Reed-Solomon encoder or decoder: only the GF(2^8) field arithmetic
  such a code is built on.
- There are no vectorised decoders; everything runs in plain Python and is slow for
  large blocks or high constraint lengths.
- There is no command-line tool; the package is a library.

## Tests

The test suite uses pytest and hypothesis, available through the `test` extra.