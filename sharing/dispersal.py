"""
Rabin Information Dispersal
Split data into N fragments of size len/K where any K rebuild it.

Every K consecutive data bytes become the coefficients of one polynomial,
which is evaluated at x = 1..N. Any K fragments give K equations in K
unknowns per chunk, and one inverted Vandermonde matrix solves all of them.

Dispersal is about space, not secrecy: every fragment leaks information
about the data. Encrypt first (see sharing.krawczyk) if the data is secret.
"""

import logging
from typing import Sequence

from sharing.base import Sharing
from sharing.errors import EmptySecret, MismatchedShareLength
from sharing.gf256 import GF, horner_rows, linear_combination
from sharing.share import DispersalShare, check_shares

logger = logging.getLogger(__name__)


def fragment_size(length: int, k: int) -> int:
    """Bytes per fragment when dispersing `length` bytes with threshold k."""
    return -(-length // k)


def vandermonde(xs: Sequence[GF]) -> list[list[GF]]:
    """Square matrix with rows [1, x, x^2, ..., x^(k-1)]."""
    return [[x ** j for j in range(len(xs))] for x in xs]


def invert(matrix: list[list[GF]]) -> list[list[GF]]:
    """
    Invert a square matrix over GF(256) with Gauss-Jordan elimination.

    Raises:
        DivisionByZero: If the matrix is singular.
    """
    size = len(matrix)
    work = [list(row) for row in matrix]
    result = [[GF(1) if i == j else GF(0) for j in range(size)] for i in range(size)]

    for col in range(size):
        pivot = next((r for r in range(col, size) if work[r][col]), col)
        if pivot != col:
            work[col], work[pivot] = work[pivot], work[col]
            result[col], result[pivot] = result[pivot], result[col]

        # A zero pivot here means the matrix is singular
        scale = work[col][col].inverse()
        work[col] = [v * scale for v in work[col]]
        result[col] = [v * scale for v in result[col]]

        for row in range(size):
            if row == col:
                continue
            factor = work[row][col]
            if not factor:
                continue
            work[row] = [a - factor * b for a, b in zip(work[row], work[col])]
            result[row] = [a - factor * b for a, b in zip(result[row], result[col])]

    return result


class RabinInformationDispersal(Sharing):
    """
    K-of-N information dispersal over GF(256).

    Args:
        n: Number of fragments (1..255).
        k: Fragments needed to rebuild (1..n).

    Raises:
        InvalidParameters: If k < 1, k > n or n > 255.
    """

    def share(self, data: bytes) -> list[DispersalShare]:
        """
        Disperse data into `total` fragments of ceil(len(data) / k) bytes.

        The final chunk is implicitly zero-padded; each fragment records the
        original length so reconstruct() can drop the padding.

        Raises:
            EmptySecret: If data is empty.
        """
        data = bytes(data)
        if not data:
            raise EmptySecret("Cannot disperse empty data")

        k = self.threshold
        size = fragment_size(len(data), k)
        padded = data + bytes(size * k - len(data))
        # Row j holds coefficient j of every chunk
        rows = [padded[j::k] for j in range(k)]

        shares = [
            DispersalShare(
                x=int(x),
                threshold=k,
                length=len(data),
                body=horner_rows(rows, x),
            )
            for x in self.params.x_coordinates
        ]

        logger.debug(
            "Dispersed %d bytes into %d fragments of %d bytes (threshold %d)",
            len(data), self.total, size, k,
        )
        return shares

    def reconstruct(self, shares: list[DispersalShare]) -> bytes:
        """
        Rebuild the data from K or more fragments.

        Raises:
            InsufficientShares: Fewer than K fragments.
            MismatchedShareLength: Fragments disagree on length or size.
            DuplicateXCoordinate: Two fragments at the same x.
        """
        k = self.threshold
        shares = check_shares(shares, k)
        length = shares[0].length
        expected = fragment_size(length, k)
        if len(shares[0].body) != expected:
            raise MismatchedShareLength(
                f"Fragments of {length} bytes with threshold {k} must hold "
                f"{expected} bytes, got {len(shares[0].body)}"
            )

        chosen = sorted(shares, key=lambda s: s.x)[:k]
        xs = [GF(s.x) for s in chosen]
        decoder = invert(vandermonde(xs))

        bodies = [s.body for s in chosen]
        # Row j holds coefficient j of every chunk
        rows = [linear_combination(decoder[j], bodies) for j in range(k)]

        data = bytearray(expected * k)
        for j, row in enumerate(rows):
            data[j::k] = row

        logger.debug("Rebuilt %d bytes from %d fragments", length, len(chosen))
        return bytes(data[:length])
