"""
Shamir's Secret Sharing
Split a byte secret into N shares where any T can reconstruct it.

Each secret byte gets its own random polynomial of degree T-1 over
GF(256), with the byte as the constant term. Share k holds that
polynomial's value at x = k for every byte position. Any T shares pin down
every polynomial and therefore f(0), the secret. Any T-1 shares are
consistent with every possible secret byte, so they reveal nothing
regardless of computing power.

That guarantee depends on the randomness source. A predictable source
gives predictable coefficients, and the secret falls out of a single
share. Pass secrets.SystemRandom (the default) or another CSPRNG for
anything real.
"""

import logging

from sharing.base import DEFAULT_RNG, Sharing
from sharing.errors import EmptySecret, InvalidShares, SharingError
from sharing.gf256 import GF, horner_rows, linear_combination
from sharing.params import MAX_SHARES
from sharing.polynomial import lagrange_coefficients_at_zero, random_coefficient_rows
from sharing.share import Share, check_shares

logger = logging.getLogger(__name__)


class ShamirSecretSharing(Sharing):
    """
    T-of-N Shamir secret sharing over GF(256).

    The sharer tracks its threshold. reconstruct() rejects fewer than T
    shares instead of returning an unguaranteed value.

    Args:
        n: Total shares to generate (1..255).
        k: Threshold (1..n).
        rng: Randomness source with randbytes(n). Defaults to
            secrets.SystemRandom. Give each thread its own source unless
            the source documents its own thread safety.

    Raises:
        InvalidParameters: If k < 1, k > n or n > 255.
    """

    def __init__(self, n: int, k: int, rng=None):
        super().__init__(n, k)
        self.rng = rng if rng is not None else DEFAULT_RNG

    def share(self, secret: bytes) -> list[Share]:
        """
        Split a secret into `total` shares.

        Args:
            secret: Non-empty secret bytes.

        Returns:
            One Share per x-coordinate 1..N.

        Raises:
            EmptySecret: If the secret is empty.
        """
        secret = bytes(secret)
        if not secret:
            raise EmptySecret("Cannot share an empty secret")

        xs = self.params.x_coordinates
        # Column i is the polynomial for secret byte i
        rows = random_coefficient_rows(secret, self.threshold - 1, self.rng)
        bodies = [horner_rows(rows, x) for x in xs]
        del rows

        logger.debug(
            "Split %d-byte secret into %d shares (threshold %d)",
            len(secret), self.total, self.threshold,
        )
        return [
            Share(x=int(x), body=body, threshold=self.threshold)
            for x, body in zip(xs, bodies)
        ]

    def reconstruct(self, shares: list[Share]) -> bytes:
        """
        Reconstruct the secret from T or more shares via Lagrange interpolation.

        All supplied shares are validated. The T with the lowest
        x-coordinates are interpolated at x = 0. Lagrange weights depend
        only on the x-coordinates, so they are computed once and applied to
        every byte position.

        Raises:
            InsufficientShares: Fewer than T shares.
            MismatchedShareLength: Shares of different lengths.
            DuplicateXCoordinate: Two shares at the same x.
            InvalidShares: Shares made for a different threshold.
        """
        shares = check_shares(shares, self.threshold)
        # Sorting makes the chosen subset independent of caller order
        chosen = sorted(shares, key=lambda s: s.x)[:self.threshold]

        weights = lagrange_coefficients_at_zero([GF(s.x) for s in chosen])
        secret = linear_combination(weights, [s.body for s in chosen])

        logger.debug(
            "Reconstructed %d-byte secret from %d of %d supplied shares",
            len(secret), len(chosen), len(shares),
        )
        return secret


def split(secret: bytes, threshold: int, num_shares: int, rng=None) -> list[Share]:
    """
    Split a secret into shares using Shamir's Secret Sharing.

    Args:
        secret: The secret bytes to split (any non-zero length).
        threshold: Minimum shares needed to reconstruct (T).
        num_shares: Total shares to generate (N).
        rng: Optional randomness source, see ShamirSecretSharing.

    Returns:
        List of N Share objects. Any T can reconstruct the secret.
    """
    return ShamirSecretSharing(num_shares, threshold, rng).share(secret)


def combine(shares: list[Share]) -> bytes:
    """
    Reconstruct a secret from shares, reading the threshold from the shares.

    Raises:
        InvalidShares: If no shares are given.
        InsufficientShares: If fewer shares than their threshold.
    """
    shares = list(shares)
    if not shares:
        raise InvalidShares("No shares given")
    threshold = shares[0].threshold
    # n only bounds share generation, which combine never does
    return ShamirSecretSharing(MAX_SHARES, threshold).reconstruct(shares)


def verify_shares(shares: list[Share], secret: bytes) -> bool:
    """Verify that a set of shares correctly reconstructs the secret."""
    try:
        return combine(shares) == secret
    except SharingError:
        return False
