"""
Sharing — Basic Usage Example

Splits a recovery key 3-of-5, rebuilds it from different subsets, and
shows what happens with too few or inconsistent shares.
"""

import logging
import os
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sharing import (
    InsufficientShares,
    IntegrityError,
    KrawczykSecretSharing,
    ShamirSecretSharing,
    Share,
)


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 50)
    print("  Sharing — 3-of-5 Secret Custody")
    print("=" * 50)

    recovery_key = os.urandom(32)
    sharer = ShamirSecretSharing(5, 3)
    shares = sharer.share(recovery_key)

    # Hand each custodian a portable string
    print("\nShares:")
    portable = [s.to_hex() for s in shares]
    for line in portable:
        print(f"  {line[:40]}...")

    # Any three custodians can restore the key
    restored = sharer.reconstruct([Share.from_hex(h) for h in portable[2:]])
    print(f"\nRestored from shares 3-5: {'OK' if restored == recovery_key else 'MISMATCH'}")

    # Two are not enough
    try:
        sharer.reconstruct(shares[:2])
    except InsufficientShares as e:
        print(f"Two shares rejected: {e}")

    # Large payloads: Krawczyk keeps shares short
    document = os.urandom(4096)
    krawczyk = KrawczykSecretSharing(5, 3)
    k_shares = krawczyk.share(document)
    size = len(k_shares[0].to_bytes())
    print(f"\nKrawczyk: {len(document)}-byte document -> {size}-byte shares")
    print(f"Restored: {'OK' if krawczyk.reconstruct(k_shares[:3]) == document else 'MISMATCH'}")

    other = krawczyk.share(os.urandom(4096))
    try:
        krawczyk.reconstruct([k_shares[0], other[1], k_shares[2]])
    except IntegrityError:
        print("Mixed shares rejected: authentication failed")


if __name__ == "__main__":
    main()
