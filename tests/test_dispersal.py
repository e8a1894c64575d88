"""
Tests for Rabin information dispersal and Krawczyk secret sharing.
"""

import itertools
import os
import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from sharing import (
    DispersalShare,
    DivisionByZero,
    DuplicateXCoordinate,
    EmptySecret,
    InsufficientShares,
    IntegrityError,
    InvalidParameters,
    KrawczykSecretSharing,
    KrawczykShare,
    MismatchedShareLength,
    RabinInformationDispersal,
)
from sharing.dispersal import fragment_size, invert, vandermonde
from sharing.gf256 import GF
from sharing.krawczyk import KEY_MATERIAL_SIZE


def _identity(size):
    return [[GF(1) if i == j else GF(0) for j in range(size)] for i in range(size)]


def _matmul(a, b):
    size = len(a)
    result = []
    for i in range(size):
        row = []
        for j in range(size):
            total = GF(0)
            for k in range(size):
                total = total + a[i][k] * b[k][j]
            row.append(total)
        result.append(row)
    return result


def test_vandermonde_inverse():
    """Test decoder matrix inversion over GF(256)."""
    xs = [GF(x) for x in (1, 5, 9, 200)]
    matrix = vandermonde(xs)
    assert _matmul(matrix, invert(matrix)) == _identity(4)
    assert _matmul(invert(matrix), matrix) == _identity(4)


def test_invert_needs_row_swap():
    matrix = [[GF(0), GF(1)], [GF(1), GF(0)]]
    assert _matmul(matrix, invert(matrix)) == _identity(2)


def test_invert_singular():
    with pytest.raises(DivisionByZero):
        invert([[GF(1), GF(1)], [GF(1), GF(1)]])


def test_dispersal_round_trip():
    """Test that ANY K fragments rebuild the data."""
    print("Testing dispersal (any K fragments)...", end=" ")
    data = os.urandom(10)
    ida = RabinInformationDispersal(5, 3)
    fragments = ida.share(data)

    assert len(fragments) == 5
    for f in fragments:
        assert len(f.body) == fragment_size(10, 3) == 4
        assert f.length == 10

    for size in (3, 4, 5):
        for combo in itertools.combinations(fragments, size):
            assert ida.reconstruct(list(combo)) == data
    print("PASS")


def test_dispersal_sizes():
    for length in (1, 2, 3, 7, 64, 255):
        data = os.urandom(length)
        ida = RabinInformationDispersal(7, 4)
        fragments = ida.share(data)
        assert all(len(f.body) == -(-length // 4) for f in fragments)
        assert ida.reconstruct(fragments[3:]) == data


def test_dispersal_threshold_one_copies_data():
    ida = RabinInformationDispersal(3, 1)
    fragments = ida.share(b"plain")
    assert all(f.body == b"plain" for f in fragments)
    assert ida.reconstruct([fragments[2]]) == b"plain"


def test_dispersal_errors():
    ida = RabinInformationDispersal(5, 3)
    fragments = ida.share(b"0123456789")

    with pytest.raises(EmptySecret):
        ida.share(b"")
    with pytest.raises(InsufficientShares):
        ida.reconstruct(fragments[:2])
    with pytest.raises(DuplicateXCoordinate):
        ida.reconstruct([fragments[0], fragments[0], fragments[1]])
    with pytest.raises(InvalidParameters):
        RabinInformationDispersal(2, 3)

    truncated = [
        DispersalShare(x=f.x, threshold=3, length=f.length, body=f.body[:3])
        for f in fragments[:3]
    ]
    with pytest.raises(MismatchedShareLength):
        ida.reconstruct(truncated)

    mixed = [fragments[0], fragments[1], DispersalShare(x=3, threshold=3, length=11, body=fragments[2].body)]
    with pytest.raises(MismatchedShareLength):
        ida.reconstruct(mixed)


def test_dispersal_serialization():
    fragments = RabinInformationDispersal(4, 2).share(b"dispersed payload")
    for f in fragments:
        assert DispersalShare.from_bytes(f.to_bytes()) == f
        assert DispersalShare.from_hex(f.to_hex()) == f


def test_krawczyk_round_trip():
    """Test Krawczyk sharing with every K-subset."""
    print("Testing Krawczyk (any K shares)...", end=" ")
    secret = os.urandom(1000)
    sharer = KrawczykSecretSharing(5, 3)
    shares = sharer.share(secret)

    assert len(shares) == 5
    ciphertext_len = len(secret) + 16  # GCM tag
    for s in shares:
        assert s.length == ciphertext_len
        assert len(s.key) == KEY_MATERIAL_SIZE
        assert len(s.body) == fragment_size(ciphertext_len, 3)

    for combo in itertools.combinations(shares, 3):
        assert sharer.reconstruct(list(combo)) == secret
    assert sharer.reconstruct(shares) == secret
    print("PASS")


def test_krawczyk_shares_are_short():
    secret = os.urandom(3000)
    shares = KrawczykSecretSharing(10, 5).share(secret)
    assert all(len(s.body) + len(s.key) < len(secret) // 2 for s in shares)


def test_krawczyk_deterministic_with_seeded_source():
    secret = b"seeded"
    a = KrawczykSecretSharing(4, 2, random.Random(3)).share(secret)
    b = KrawczykSecretSharing(4, 2, random.Random(3)).share(secret)
    assert a == b


def test_krawczyk_tampering_detected():
    sharer = KrawczykSecretSharing(5, 3)
    shares = sharer.share(b"transfer 100 to alice")

    victim = shares[1]
    flipped = bytes([victim.body[0] ^ 0x01]) + victim.body[1:]
    tampered = KrawczykShare(
        x=victim.x,
        threshold=victim.threshold,
        length=victim.length,
        key=victim.key,
        body=flipped,
    )
    with pytest.raises(IntegrityError):
        sharer.reconstruct([shares[0], tampered, shares[2]])


def test_krawczyk_mixed_sharings_detected():
    sharer = KrawczykSecretSharing(5, 3)
    first = sharer.share(b"same length A")
    second = sharer.share(b"same length B")
    with pytest.raises(IntegrityError):
        sharer.reconstruct([first[0], second[1], first[2]])


def test_krawczyk_errors():
    sharer = KrawczykSecretSharing(5, 3)
    shares = sharer.share(b"secret")

    with pytest.raises(EmptySecret):
        sharer.share(b"")
    with pytest.raises(InsufficientShares):
        sharer.reconstruct(shares[:2])
    with pytest.raises(DuplicateXCoordinate):
        sharer.reconstruct([shares[0], shares[0], shares[1]])

    short_keys = [
        KrawczykShare(x=s.x, threshold=3, length=s.length, key=s.key[:10], body=s.body)
        for s in shares[:3]
    ]
    with pytest.raises(MismatchedShareLength):
        sharer.reconstruct(short_keys)


def test_krawczyk_serialization():
    sharer = KrawczykSecretSharing(5, 3)
    secret = os.urandom(77)
    shares = sharer.share(secret)

    restored = [KrawczykShare.from_bytes(s.to_bytes()) for s in shares[2:]]
    assert restored == shares[2:]
    assert sharer.reconstruct(restored) == secret

    restored = [KrawczykShare.from_hex(s.to_hex()) for s in shares[:3]]
    assert sharer.reconstruct(restored) == secret


def main():
    print("=" * 50)
    print("  Dispersal + Krawczyk Tests")
    print("=" * 50)
    print()

    tests = [
        test_vandermonde_inverse,
        test_dispersal_round_trip,
        test_dispersal_sizes,
        test_krawczyk_round_trip,
        test_krawczyk_tampering_detected,
        test_krawczyk_serialization,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL {test.__name__}: {e}")
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
