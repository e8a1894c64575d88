"""
Sharing — Threshold Secret Sharing
Split a secret into N shares so that any T of them rebuild it exactly.

Sharing provides three schemes over GF(2^8):
1. Shamir — information-theoretic: T-1 shares reveal nothing
2. Rabin IDA — space-efficient dispersal, no secrecy
3. Krawczyk — AES-256-GCM + IDA + Shamir: short shares, computational secrecy

Usage:
    from sharing import ShamirSecretSharing
    sharer = ShamirSecretSharing(5, 3)
    shares = sharer.share(b"my secret")
    assert sharer.reconstruct(shares[1:4]) == b"my secret"
"""

from sharing.errors import (
    SharingError,
    InvalidParameters,
    EmptySecret,
    InvalidShares,
    InsufficientShares,
    MismatchedShareLength,
    DuplicateXCoordinate,
    DivisionByZero,
    IntegrityError,
    MalformedShare,
)
from sharing.gf256 import GF
from sharing.params import SharingParameters, MAX_SHARES
from sharing.share import Share, DispersalShare, KrawczykShare
from sharing.base import Sharing
from sharing.shamir import ShamirSecretSharing, split, combine, verify_shares
from sharing.dispersal import RabinInformationDispersal
from sharing.krawczyk import KrawczykSecretSharing

__version__ = "0.1.0"
__all__ = [
    "GF",
    "Sharing",
    "SharingParameters",
    "MAX_SHARES",
    "Share",
    "DispersalShare",
    "KrawczykShare",
    "ShamirSecretSharing",
    "RabinInformationDispersal",
    "KrawczykSecretSharing",
    "split",
    "combine",
    "verify_shares",
    "SharingError",
    "InvalidParameters",
    "EmptySecret",
    "InvalidShares",
    "InsufficientShares",
    "MismatchedShareLength",
    "DuplicateXCoordinate",
    "DivisionByZero",
    "IntegrityError",
    "MalformedShare",
]
