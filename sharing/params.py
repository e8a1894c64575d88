"""
Sharing Parameters
The (N, T) pair every sharer is built around, validated once at construction.
"""

from dataclasses import dataclass

from sharing.errors import InvalidParameters
from sharing.gf256 import FIELD_SIZE, GF


# Every non-zero field element can serve as an x-coordinate
MAX_SHARES = FIELD_SIZE - 1

# 3-of-5 is a common custody setup
DEFAULT_THRESHOLD = 3
DEFAULT_SHARES = 5


@dataclass(frozen=True)
class SharingParameters:
    """
    Total share count and reconstruction threshold.

    Invariant: 1 <= threshold <= total <= MAX_SHARES.
    """
    total: int = DEFAULT_SHARES
    threshold: int = DEFAULT_THRESHOLD

    def __post_init__(self):
        for name in ("total", "threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameters(f"{name} must be an integer, got {value!r}")
        if self.threshold < 1:
            raise InvalidParameters("Threshold must be at least 1")
        if self.threshold > self.total:
            raise InvalidParameters(
                f"Threshold ({self.threshold}) cannot exceed number of shares ({self.total})"
            )
        if self.total > MAX_SHARES:
            raise InvalidParameters(
                f"At most {MAX_SHARES} shares fit in GF({FIELD_SIZE}), got {self.total}"
            )

    @property
    def x_coordinates(self) -> list[GF]:
        """Canonical evaluation points 1..N."""
        return [GF(x) for x in range(1, self.total + 1)]
