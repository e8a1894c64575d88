"""
GF(2^8) Field Arithmetic
Exact arithmetic over the 256-element binary extension field.

Each element holds exactly one secret byte, and the field has 255 non-zero
points, so up to 255 shares get distinct x-coordinates. Elements are
polynomials over GF(2) reduced modulo x^8 + x^4 + x^3 + x + 1 (0x11B, the
AES polynomial). Addition and subtraction are both XOR. Multiplication goes
through log/exp tables over the generator 3.

The GF newtype keeps field elements apart from bytes and plain ints:
GF(3) + 3 is a TypeError, not a silent integer sum.
"""

from dataclasses import dataclass
from typing import Sequence

from sharing.errors import DivisionByZero


FIELD_SIZE = 256
REDUCTION_POLYNOMIAL = 0x11B

# The multiplicative group has order 255
_ORDER = FIELD_SIZE - 1


def _build_tables() -> tuple[list[int], list[int]]:
    exp = [0] * (2 * _ORDER)
    log = [0] * FIELD_SIZE
    x = 1
    for i in range(_ORDER):
        exp[i] = x
        log[x] = i
        # x * 3 == x * 2 + x
        doubled = x << 1
        if doubled & 0x100:
            doubled ^= REDUCTION_POLYNOMIAL
        x = doubled ^ x
    # Second copy lets mul index log[a] + log[b] without a modulo
    for i in range(_ORDER, 2 * _ORDER):
        exp[i] = exp[i - _ORDER]
    return exp, log


_EXP, _LOG = _build_tables()


def _mul(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return _EXP[_LOG[a] + _LOG[b]]


def _inv(a: int) -> int:
    if a == 0:
        raise DivisionByZero("Zero has no multiplicative inverse in GF(256)")
    return _EXP[_ORDER - _LOG[a]]


@dataclass(frozen=True)
class GF:
    """An element of GF(2^8)."""
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"GF value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value < FIELD_SIZE:
            raise ValueError(f"GF value must be in [0, {FIELD_SIZE}), got {self.value}")

    @classmethod
    def from_byte(cls, byte: int) -> "GF":
        """Encode one secret byte as a field element."""
        return cls(byte)

    def __int__(self) -> int:
        return self.value

    def __bool__(self) -> bool:
        return self.value != 0

    def __repr__(self) -> str:
        return f"GF({self.value:#04x})"

    def __add__(self, other: "GF") -> "GF":
        if not isinstance(other, GF):
            return NotImplemented
        return GF(self.value ^ other.value)

    # In characteristic 2 every element is its own additive inverse
    __sub__ = __add__

    def __neg__(self) -> "GF":
        return self

    def __mul__(self, other: "GF") -> "GF":
        if not isinstance(other, GF):
            return NotImplemented
        return GF(_mul(self.value, other.value))

    def __truediv__(self, other: "GF") -> "GF":
        if not isinstance(other, GF):
            return NotImplemented
        return GF(_mul(self.value, _inv(other.value)))

    def __pow__(self, exponent: int) -> "GF":
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            return self.inverse() ** -exponent
        if exponent == 0:
            return GF(1)
        if self.value == 0:
            return GF(0)
        return GF(_EXP[(_LOG[self.value] * exponent) % _ORDER])

    def inverse(self) -> "GF":
        """Multiplicative inverse. Raises DivisionByZero for zero."""
        return GF(_inv(self.value))


def add(a: GF, b: GF) -> GF:
    return a + b


def sub(a: GF, b: GF) -> GF:
    return a - b


def mul(a: GF, b: GF) -> GF:
    return a * b


def div(a: GF, b: GF) -> GF:
    return a / b


def inv(a: GF) -> GF:
    return a.inverse()


def elements(data: bytes) -> list[GF]:
    """Encode a byte string as field elements, one per byte."""
    return [GF(b) for b in data]


def to_bytes(values: Sequence[GF]) -> bytes:
    """Decode field elements back into bytes."""
    return bytes(v.value for v in values)


def linear_combination(coefficients: Sequence[GF], rows: Sequence[bytes]) -> bytes:
    """
    Column-wise sum of rows scaled by field coefficients.

    Position i of the result is sum_k coefficients[k] * rows[k][i], computed
    in GF(256). All rows must be the same length. Reconstructors use this to
    apply one precomputed set of interpolation weights to every byte
    position.

    Args:
        coefficients: One field element per row.
        rows: Byte strings of equal length.

    Returns:
        The combined row as bytes.
    """
    if len(coefficients) != len(rows):
        raise ValueError(f"Got {len(coefficients)} coefficients for {len(rows)} rows")
    if not rows:
        return b""

    width = len(rows[0])
    result = bytearray(width)
    for coeff, row in zip(coefficients, rows):
        if len(row) != width:
            raise ValueError("Rows must all have the same length")
        c = coeff.value
        if c == 0:
            continue
        log_c = _LOG[c]
        for i, y in enumerate(row):
            if y:
                result[i] ^= _EXP[log_c + _LOG[y]]
    return bytes(result)


def horner(coefficients: Sequence[int], x: int) -> int:
    """Evaluate a polynomial given as raw byte coefficients, ascending order."""
    if x == 0:
        return coefficients[0] if coefficients else 0
    log_x = _LOG[x]
    result = 0
    for c in reversed(coefficients):
        if result:
            result = _EXP[_LOG[result] + log_x]
        result ^= c
    return result


def _scaling_table(c: int) -> bytes:
    return bytes(_mul(v, c) for v in range(FIELD_SIZE))


def _xor(a: bytes, b: bytes) -> bytes:
    return (int.from_bytes(a, "big") ^ int.from_bytes(b, "big")).to_bytes(len(a), "big")


def horner_rows(rows: Sequence[bytes], x: GF) -> bytes:
    """
    Evaluate many polynomials at one point.

    rows[j][i] is coefficient j of polynomial i, so byte i of the result is
    polynomial i evaluated at x. Each Horner step scales a whole row with
    one bytes.translate through the multiply-by-x table.

    Args:
        rows: Coefficient rows of equal length, constant terms first.
        x: The evaluation point.

    Returns:
        One evaluation per polynomial, as bytes.
    """
    if not rows:
        raise ValueError("Need at least one coefficient row")
    width = len(rows[0])
    table = _scaling_table(x.value)
    result = bytes(width)
    for row in reversed(rows):
        if len(row) != width:
            raise ValueError("Rows must all have the same length")
        result = _xor(result.translate(table), row)
    return result
