"""
Krawczyk Secret Sharing ("secret sharing made short")
Computational secret sharing whose shares are about len/K bytes, not len.

Flow for sharing:
1. Draw a fresh AES-256 key and GCM nonce from the randomness source
2. Encrypt the secret with AES-256-GCM
3. Disperse the ciphertext with Rabin IDA (small, non-secret fragments)
4. Shamir-share the 44 bytes of key material (secret, full-size shares)

Flow for reconstruction is the reverse. GCM authenticates the result, so a
wrong or tampered share set fails loudly instead of returning garbage.

Security is computational (it rests on AES), unlike plain Shamir.
"""

import logging

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from sharing.base import DEFAULT_RNG, Sharing
from sharing.dispersal import RabinInformationDispersal
from sharing.errors import EmptySecret, IntegrityError, MismatchedShareLength
from sharing.shamir import ShamirSecretSharing
from sharing.share import KrawczykShare, check_shares

logger = logging.getLogger(__name__)


KEY_SIZE = 32    # AES-256
NONCE_SIZE = 12  # AES-256-GCM standard
KEY_MATERIAL_SIZE = KEY_SIZE + NONCE_SIZE


def encrypt_data(data: bytes, key_material: bytes) -> bytes:
    """Encrypt data with AES-256-GCM under key || nonce."""
    aesgcm = AESGCM(key_material[:KEY_SIZE])
    return aesgcm.encrypt(key_material[KEY_SIZE:], data, None)


def decrypt_data(ciphertext: bytes, key_material: bytes) -> bytes:
    """Decrypt AES-256-GCM encrypted data."""
    aesgcm = AESGCM(key_material[:KEY_SIZE])
    return aesgcm.decrypt(key_material[KEY_SIZE:], ciphertext, None)


class KrawczykSecretSharing(Sharing):
    """
    T-of-N Krawczyk secret sharing.

    Args:
        n: Total shares (1..255).
        k: Threshold (1..n).
        rng: Randomness source with randbytes(n), used for both the key
            material and the Shamir coefficients. Must be a CSPRNG for real
            secrets.

    Raises:
        InvalidParameters: If k < 1, k > n or n > 255.
    """

    def __init__(self, n: int, k: int, rng=None):
        super().__init__(n, k)
        self.rng = rng if rng is not None else DEFAULT_RNG
        self._shamir = ShamirSecretSharing(n, k, self.rng)
        self._dispersal = RabinInformationDispersal(n, k)

    def share(self, secret: bytes) -> list[KrawczykShare]:
        """
        Encrypt, disperse and share a secret.

        Raises:
            EmptySecret: If the secret is empty.
        """
        secret = bytes(secret)
        if not secret:
            raise EmptySecret("Cannot share an empty secret")

        key_material = self.rng.randbytes(KEY_MATERIAL_SIZE)
        ciphertext = encrypt_data(secret, key_material)

        fragments = self._dispersal.share(ciphertext)
        key_shares = self._shamir.share(key_material)

        logger.debug(
            "Krawczyk-shared %d-byte secret into %d shares (threshold %d)",
            len(secret), self.total, self.threshold,
        )
        return [
            KrawczykShare(
                x=fragment.x,
                threshold=self.threshold,
                length=fragment.length,
                key=key_share.body,
                body=fragment.body,
            )
            for fragment, key_share in zip(fragments, key_shares)
        ]

    def reconstruct(self, shares: list[KrawczykShare]) -> bytes:
        """
        Recover the key, rebuild the ciphertext, and decrypt.

        Raises:
            InsufficientShares, MismatchedShareLength, DuplicateXCoordinate:
                For malformed input.
            IntegrityError: If the shares do not decrypt to an authentic
                secret.
        """
        shares = check_shares(shares, self.threshold)
        if len(shares[0].key) != KEY_MATERIAL_SIZE:
            raise MismatchedShareLength(
                f"Key shares must be {KEY_MATERIAL_SIZE} bytes, got {len(shares[0].key)}"
            )

        key_material = self._shamir.reconstruct([s.key_share() for s in shares])
        ciphertext = self._dispersal.reconstruct([s.body_share() for s in shares])

        try:
            secret = decrypt_data(ciphertext, key_material)
        except InvalidTag:
            raise IntegrityError(
                "Shares do not decrypt to an authentic secret "
                "(wrong, mixed or tampered shares)"
            ) from None

        logger.debug("Reconstructed %d-byte secret from %d shares", len(secret), len(shares))
        return secret
