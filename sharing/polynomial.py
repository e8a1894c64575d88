"""
Polynomials over GF(256)
Construction, Horner evaluation and Lagrange interpolation at zero.

A sharing polynomial lives only inside one share() call. Its constant term
is a secret byte and the remaining coefficients are uniformly random.
Leaking those coefficients leaks the secret, so sharers never return or
store a Polynomial.
"""

from typing import Sequence

from sharing.errors import DuplicateXCoordinate, InvalidShares
from sharing.gf256 import GF, horner


class Polynomial:
    """
    An immutable polynomial with GF(256) coefficients.

    Args:
        coefficients: Coefficients in ascending order; index 0 is the
            constant term.
    """

    __slots__ = ("_coefficients",)

    def __init__(self, coefficients: Sequence[GF]):
        if not coefficients:
            raise ValueError("A polynomial needs at least one coefficient")
        for c in coefficients:
            if not isinstance(c, GF):
                raise TypeError(f"Coefficients must be GF elements, got {type(c).__name__}")
        self._coefficients = tuple(coefficients)

    @classmethod
    def random(cls, constant: GF, degree: int, rng) -> "Polynomial":
        """
        Build a polynomial with a fixed constant term and random higher terms.

        Args:
            constant: Coefficient 0 (the secret byte).
            degree: Number of random coefficients to draw (threshold - 1).
            rng: Source with a randbytes(n) method. Must be
                cryptographically secure for real secrets.
        """
        if degree < 0:
            raise ValueError("Degree cannot be negative")
        randoms = rng.randbytes(degree) if degree else b""
        return cls([constant, *(GF(b) for b in randoms)])

    @property
    def coefficients(self) -> tuple[GF, ...]:
        return self._coefficients

    @property
    def degree(self) -> int:
        return len(self._coefficients) - 1

    def evaluate(self, x: GF) -> GF:
        """Evaluate at x with Horner's method."""
        if not isinstance(x, GF):
            raise TypeError(f"Evaluation point must be a GF element, got {type(x).__name__}")
        return GF(horner([c.value for c in self._coefficients], x.value))

    __call__ = evaluate

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self):
        return hash(self._coefficients)

    def __repr__(self) -> str:
        # Coefficients stay out of reprs so they never end up in logs
        return f"Polynomial(degree={self.degree})"


def random_coefficient_rows(constants: bytes, degree: int, rng) -> list[bytes]:
    """
    One random polynomial per constant byte, laid out column-wise.

    Row j holds coefficient j of every polynomial, so row 0 is `constants`
    and column i is the polynomial for byte i. Polynomial i draws its
    `degree` random coefficients as one contiguous run of the rng output.

    Args:
        constants: The constant terms (secret bytes).
        degree: Random coefficients per polynomial (threshold - 1).
        rng: Source with a randbytes(n) method.

    Returns:
        degree + 1 rows of len(constants) bytes, for gf256.horner_rows.
    """
    if degree < 0:
        raise ValueError("Degree cannot be negative")
    constants = bytes(constants)
    randoms = rng.randbytes(degree * len(constants)) if degree else b""
    return [constants] + [randoms[j::degree] for j in range(degree)]


def check_x_coordinates(xs: Sequence[GF]) -> None:
    """Reject zero or repeated evaluation points before any division."""
    seen = set()
    for x in xs:
        if x.value == 0:
            raise InvalidShares("x-coordinate 0 is reserved for the secret")
        if x in seen:
            raise DuplicateXCoordinate(x.value)
        seen.add(x)


def lagrange_coefficients_at_zero(xs: Sequence[GF]) -> list[GF]:
    """
    Lagrange basis polynomials evaluated at x = 0.

    For points x_0..x_{k-1}, returns l_k(0) = prod_{j != k} (0 - x_j) / (x_k - x_j).
    The weights depend only on the x-coordinates, so one call serves every
    byte position of a reconstruction.

    Raises:
        DuplicateXCoordinate: If two points coincide.
        InvalidShares: If a point is zero.
    """
    check_x_coordinates(xs)

    weights = []
    for k, xk in enumerate(xs):
        numerator = GF(1)
        denominator = GF(1)
        for j, xj in enumerate(xs):
            if j == k:
                continue
            numerator = numerator * (GF(0) - xj)
            denominator = denominator * (xk - xj)
        weights.append(numerator / denominator)
    return weights


def interpolate_at_zero(points: Sequence[tuple[GF, GF]]) -> GF:
    """Recover f(0) from (x, y) samples of a polynomial."""
    if not points:
        raise InvalidShares("Need at least one point to interpolate")
    xs = [x for x, _ in points]
    weights = lagrange_coefficients_at_zero(xs)
    result = GF(0)
    for weight, (_, y) in zip(weights, points):
        result = result + weight * y
    return result
