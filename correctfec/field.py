"""Arithmetic in GF(2^8) using exponent and logarithm tables."""

from __future__ import annotations

# Primitive polynomials of degree 8, named by the powers of x they contain.
PRIMITIVE_POLYNOMIAL_8_4_3_2_0 = 0x11D
PRIMITIVE_POLYNOMIAL_8_5_3_1_0 = 0x12B
PRIMITIVE_POLYNOMIAL_8_5_3_2_0 = 0x12D
PRIMITIVE_POLYNOMIAL_8_6_3_2_0 = 0x14D
PRIMITIVE_POLYNOMIAL_8_6_4_3_2_1_0 = 0x15F
PRIMITIVE_POLYNOMIAL_8_6_5_1_0 = 0x163
PRIMITIVE_POLYNOMIAL_8_6_5_2_0 = 0x165
PRIMITIVE_POLYNOMIAL_8_6_5_3_0 = 0x169
PRIMITIVE_POLYNOMIAL_8_6_5_4_0 = 0x171
PRIMITIVE_POLYNOMIAL_8_7_2_1_0 = 0x187
PRIMITIVE_POLYNOMIAL_8_7_3_2_0 = 0x18D
PRIMITIVE_POLYNOMIAL_8_7_5_3_0 = 0x1A9
PRIMITIVE_POLYNOMIAL_8_7_6_1_0 = 0x1C3
PRIMITIVE_POLYNOMIAL_8_7_6_3_2_1_0 = 0x1CF
PRIMITIVE_POLYNOMIAL_8_7_6_5_2_1_0 = 0x1E7
PRIMITIVE_POLYNOMIAL_8_7_6_5_4_2_0 = 0x1F5
PRIMITIVE_POLYNOMIAL_CCSDS = 0x187

PRIMITIVE_POLYNOMIALS = (
    PRIMITIVE_POLYNOMIAL_8_4_3_2_0,
    PRIMITIVE_POLYNOMIAL_8_5_3_1_0,
    PRIMITIVE_POLYNOMIAL_8_5_3_2_0,
    PRIMITIVE_POLYNOMIAL_8_6_3_2_0,
    PRIMITIVE_POLYNOMIAL_8_6_4_3_2_1_0,
    PRIMITIVE_POLYNOMIAL_8_6_5_1_0,
    PRIMITIVE_POLYNOMIAL_8_6_5_2_0,
    PRIMITIVE_POLYNOMIAL_8_6_5_3_0,
    PRIMITIVE_POLYNOMIAL_8_6_5_4_0,
    PRIMITIVE_POLYNOMIAL_8_7_2_1_0,
    PRIMITIVE_POLYNOMIAL_8_7_3_2_0,
    PRIMITIVE_POLYNOMIAL_8_7_5_3_0,
    PRIMITIVE_POLYNOMIAL_8_7_6_1_0,
    PRIMITIVE_POLYNOMIAL_8_7_6_3_2_1_0,
    PRIMITIVE_POLYNOMIAL_8_7_6_5_2_1_0,
    PRIMITIVE_POLYNOMIAL_8_7_6_5_4_2_0,
)


def _check_byte(value: int, what: str) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{what} must be in 0..255, got {value}")
    return value


class GaloisField:
    """GF(2^8) defined by a degree-8 primitive polynomial.

    ``exp`` holds 512 entries so that sums of two logarithms index it
    directly; ``log`` maps each field element to its logarithm
    (``log[0]`` is meaningless and holds 0, ``log[1]`` holds 255).
    """

    def __init__(self, primitive_poly: int) -> None:
        if not 0x100 <= primitive_poly <= 0x1FF:
            raise ValueError(
                f"primitive polynomial must have degree 8, got {primitive_poly:#x}"
            )
        self.primitive_poly = primitive_poly
        exp = bytearray(512)
        log = bytearray(256)
        element = 1
        exp[0] = element
        for i in range(1, 512):
            element <<= 1
            if element > 0xFF:
                element ^= primitive_poly
            exp[i] = element
            if i < 256:
                log[element] = i
        self.exp = bytes(exp)
        self.log = bytes(log)

    def add(self, l: int, r: int) -> int:
        """Sum of two elements (bitwise xor)."""
        return _check_byte(l, "element") ^ _check_byte(r, "element")

    def sub(self, l: int, r: int) -> int:
        """Difference of two elements, identical to their sum."""
        return self.add(l, r)

    def sum(self, elem: int, n: int) -> int:
        """``elem`` added to itself ``n`` times."""
        _check_byte(elem, "element")
        return elem if n % 2 else 0

    def mul(self, l: int, r: int) -> int:
        """Product of two elements."""
        _check_byte(l, "element")
        _check_byte(r, "element")
        if l == 0 or r == 0:
            return 0
        return self.exp[self.log[l] + self.log[r]]

    def div(self, l: int, r: int) -> int:
        """Quotient ``l / r``; division by zero yields 0."""
        _check_byte(l, "element")
        _check_byte(r, "element")
        if l == 0 or r == 0:
            return 0
        return self.exp[255 + self.log[l] - self.log[r]]

    def mul_log(self, l: int, r: int) -> int:
        """Logarithm of the product of the elements with logarithms ``l`` and ``r``."""
        res = _check_byte(l, "logarithm") + _check_byte(r, "logarithm")
        return res - 255 if res > 255 else res

    def div_log(self, l: int, r: int) -> int:
        """Logarithm of the quotient of the elements with logarithms ``l`` and ``r``."""
        res = 255 + _check_byte(l, "logarithm") - _check_byte(r, "logarithm")
        return res - 255 if res > 255 else res

    def mul_log_element(self, l: int, r: int) -> int:
        """Element whose logarithm is ``l + r``."""
        return self.exp[_check_byte(l, "logarithm") + _check_byte(r, "logarithm")]

    def pow(self, elem: int, power: int) -> int:
        """``elem`` raised to the integer ``power`` (which may be negative)."""
        _check_byte(elem, "element")
        return self.exp[(self.log[elem] * power) % 255]