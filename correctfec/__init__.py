"""Forward error correction: convolutional codes with Viterbi decoding, and GF(2^8) arithmetic."""

__version__ = "0.1.0"

__all__ = [
    "bits",
    "buffers",
    "convolutional",
    "fec_shim",
    "field",
    "lookup",
    "metric",
    "viterbi",
]