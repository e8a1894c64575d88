"""
Shares
Immutable share records, their flat byte/hex forms, and the input checks
every reconstructor runs before touching field arithmetic.

A share carries no reference to the polynomial or to its sibling shares.
Each one is a self-contained value owned by whoever receives it.
"""

from dataclasses import dataclass
from typing import Iterable

from sharing.errors import (
    DuplicateXCoordinate,
    InsufficientShares,
    InvalidShares,
    MalformedShare,
    MismatchedShareLength,
)
from sharing.params import MAX_SHARES


LENGTH_FIELD_SIZE = 4  # bytes used for the original data length


def _check_int(value, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedShare(f"{what} must be an int, got {type(value).__name__}")


def _check_header(x: int, threshold: int, body: bytes) -> None:
    _check_int(x, "x-coordinate")
    _check_int(threshold, "Threshold")
    if not isinstance(body, bytes):
        raise MalformedShare(f"Share body must be bytes, got {type(body).__name__}")
    if not body:
        raise MalformedShare("Share body is empty")
    if not 1 <= x <= MAX_SHARES:
        raise MalformedShare(f"x-coordinate must be in [1, {MAX_SHARES}], got {x}")
    if not 1 <= threshold <= MAX_SHARES:
        raise MalformedShare(f"Threshold must be in [1, {MAX_SHARES}], got {threshold}")


def _parse_int(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise MalformedShare(f"Invalid {what}: {text!r}") from None


def _parse_hex(text: str, what: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise MalformedShare(f"Invalid hex in {what}") from None


@dataclass(frozen=True)
class Share:
    """A single Shamir share of a byte secret."""
    x: int          # The x-coordinate (1..255, never 0)
    body: bytes     # One y-value per secret byte
    threshold: int  # T, the number of shares needed to reconstruct

    def __post_init__(self):
        if isinstance(self.body, bytearray):
            object.__setattr__(self, "body", bytes(self.body))
        _check_header(self.x, self.threshold, self.body)

    @property
    def shape(self) -> int:
        return len(self.body)

    def to_bytes(self) -> bytes:
        """Flat layout: threshold byte, x byte, then the y-sequence."""
        return bytes([self.threshold, self.x]) + self.body

    @classmethod
    def from_bytes(cls, data: bytes) -> "Share":
        if len(data) < 3:
            raise MalformedShare(f"Share needs at least 3 bytes, got {len(data)}")
        return cls(x=data[1], body=bytes(data[2:]), threshold=data[0])

    def to_hex(self) -> str:
        """Serialize to a portable hex string."""
        return f"{self.x}:{self.threshold}:{self.body.hex()}"

    @classmethod
    def from_hex(cls, hex_str: str) -> "Share":
        """Deserialize from hex string."""
        parts = hex_str.strip().split(":")
        if len(parts) != 3:
            raise MalformedShare(f"Expected 3 fields, got {len(parts)}")
        return cls(
            x=_parse_int(parts[0], "x-coordinate"),
            threshold=_parse_int(parts[1], "threshold"),
            body=_parse_hex(parts[2], "share body"),
        )


@dataclass(frozen=True)
class DispersalShare:
    """
    A fragment from Rabin information dispersal.

    The body holds ceil(length / threshold) bytes; length is the size of
    the dispersed data, needed to drop the zero padding of the last chunk.
    """
    x: int
    threshold: int
    length: int
    body: bytes

    def __post_init__(self):
        if isinstance(self.body, bytearray):
            object.__setattr__(self, "body", bytes(self.body))
        _check_header(self.x, self.threshold, self.body)
        _check_int(self.length, "Data length")
        if self.length < 1:
            raise MalformedShare(f"Data length must be positive, got {self.length}")

    @property
    def shape(self) -> tuple[int, int]:
        return (self.length, len(self.body))

    def to_bytes(self) -> bytes:
        return (
            bytes([self.threshold, self.x])
            + self.length.to_bytes(LENGTH_FIELD_SIZE, "big")
            + self.body
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "DispersalShare":
        header = 2 + LENGTH_FIELD_SIZE
        if len(data) <= header:
            raise MalformedShare(f"Dispersal share needs more than {header} bytes")
        return cls(
            x=data[1],
            threshold=data[0],
            length=int.from_bytes(data[2:header], "big"),
            body=bytes(data[header:]),
        )

    def to_hex(self) -> str:
        return f"{self.x}:{self.threshold}:{self.length}:{self.body.hex()}"

    @classmethod
    def from_hex(cls, hex_str: str) -> "DispersalShare":
        parts = hex_str.strip().split(":")
        if len(parts) != 4:
            raise MalformedShare(f"Expected 4 fields, got {len(parts)}")
        return cls(
            x=_parse_int(parts[0], "x-coordinate"),
            threshold=_parse_int(parts[1], "threshold"),
            length=_parse_int(parts[2], "length"),
            body=_parse_hex(parts[3], "share body"),
        )


@dataclass(frozen=True)
class KrawczykShare:
    """
    One share of a Krawczyk sharing.

    key is a Shamir share of the AES key and nonce, body is a dispersal
    fragment of the ciphertext, and length is the ciphertext size.
    """
    x: int
    threshold: int
    length: int
    key: bytes
    body: bytes

    def __post_init__(self):
        for name in ("key", "body"):
            if isinstance(getattr(self, name), bytearray):
                object.__setattr__(self, name, bytes(getattr(self, name)))
        _check_header(self.x, self.threshold, self.body)
        if not isinstance(self.key, bytes) or not self.key:
            raise MalformedShare("Key share must be non-empty bytes")
        _check_int(self.length, "Ciphertext length")
        if self.length < 1:
            raise MalformedShare(f"Ciphertext length must be positive, got {self.length}")

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.length, len(self.key), len(self.body))

    def key_share(self) -> Share:
        return Share(x=self.x, body=self.key, threshold=self.threshold)

    def body_share(self) -> DispersalShare:
        return DispersalShare(
            x=self.x, threshold=self.threshold, length=self.length, body=self.body
        )

    def to_bytes(self) -> bytes:
        """Layout: threshold, x, key length, data length (4 bytes), key, body."""
        return (
            bytes([self.threshold, self.x, len(self.key)])
            + self.length.to_bytes(LENGTH_FIELD_SIZE, "big")
            + self.key
            + self.body
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "KrawczykShare":
        header = 3 + LENGTH_FIELD_SIZE
        if len(data) < header:
            raise MalformedShare(f"Krawczyk share needs at least {header} bytes")
        key_len = data[2]
        return cls(
            x=data[1],
            threshold=data[0],
            length=int.from_bytes(data[3:header], "big"),
            key=bytes(data[header:header + key_len]),
            body=bytes(data[header + key_len:]),
        )

    def to_hex(self) -> str:
        return f"{self.x}:{self.threshold}:{self.length}:{self.key.hex()}:{self.body.hex()}"

    @classmethod
    def from_hex(cls, hex_str: str) -> "KrawczykShare":
        parts = hex_str.strip().split(":")
        if len(parts) != 5:
            raise MalformedShare(f"Expected 5 fields, got {len(parts)}")
        return cls(
            x=_parse_int(parts[0], "x-coordinate"),
            threshold=_parse_int(parts[1], "threshold"),
            length=_parse_int(parts[2], "length"),
            key=_parse_hex(parts[3], "key share"),
            body=_parse_hex(parts[4], "share body"),
        )


def check_shares(shares: Iterable, threshold: int) -> list:
    """
    Validate reconstruction input before any arithmetic runs.

    Checks, in order: at least one share, every share made for this
    threshold, equal shapes, distinct x-coordinates, and at least
    `threshold` shares.

    Args:
        shares: Share, DispersalShare or KrawczykShare objects.
        threshold: The T the reconstructor was built with.

    Returns:
        The shares as a list.

    Raises:
        InsufficientShares, MismatchedShareLength, DuplicateXCoordinate,
        InvalidShares.
    """
    shares = list(shares)
    if not shares:
        raise InsufficientShares(0, threshold)

    for share in shares:
        if share.threshold != threshold:
            raise InvalidShares(
                f"Share {share.x} was made with threshold {share.threshold}, "
                f"expected {threshold}"
            )

    shape = shares[0].shape
    for share in shares[1:]:
        if share.shape != shape:
            raise MismatchedShareLength(
                f"Share {share.x} has shape {share.shape}, expected {shape}"
            )

    seen = set()
    for share in shares:
        if share.x in seen:
            raise DuplicateXCoordinate(share.x)
        seen.add(share.x)

    if len(shares) < threshold:
        raise InsufficientShares(len(shares), threshold)

    return shares
