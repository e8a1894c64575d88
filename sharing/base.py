"""
Base class for all sharing schemes.
Every scheme splits bytes into shares and puts them back together.
"""

import secrets
from abc import ABC, abstractmethod

from sharing.params import SharingParameters


# Any object with randbytes(n) works as a randomness source:
# secrets.SystemRandom for real secrets, random.Random(seed) in tests.
DEFAULT_RNG = secrets.SystemRandom()


class Sharing(ABC):
    """
    Abstract base class for threshold sharing schemes.

    Args:
        n: Total number of shares to produce.
        k: How many of them are needed to reconstruct.
    """

    def __init__(self, n: int, k: int):
        self.params = SharingParameters(total=n, threshold=k)

    @property
    def total(self) -> int:
        return self.params.total

    @property
    def threshold(self) -> int:
        return self.params.threshold

    @abstractmethod
    def share(self, data: bytes) -> list:
        """
        Split data into `total` shares.

        Raises:
            EmptySecret: If data is empty.
        """

    @abstractmethod
    def reconstruct(self, shares: list) -> bytes:
        """
        Recover the data from at least `threshold` shares.

        Raises:
            InvalidShares: Or one of its subclasses, for malformed input.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.total}, k={self.threshold})"
