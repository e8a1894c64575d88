"""
Sharing Errors
Every failure the library reports is a SharingError.

SharingError subclasses ValueError, so callers that already guard
share/reconstruct calls with `except ValueError` keep working.
"""


class SharingError(ValueError):
    """Base class for all secret sharing errors."""


class InvalidParameters(SharingError):
    """Bad (n, t) pair: t < 1, t > n, or more shares than the field has points."""


class EmptySecret(SharingError):
    """There is nothing to share."""


class InvalidShares(SharingError):
    """The shares handed to a reconstructor are malformed or inconsistent."""


class InsufficientShares(InvalidShares):
    """Fewer shares than the threshold."""

    def __init__(self, got: int, needed: int):
        noun = "share" if needed == 1 else "shares"
        super().__init__(f"Need at least {needed} {noun}, got {got}")
        self.got = got
        self.needed = needed


class MismatchedShareLength(InvalidShares):
    """Shares carry y-sequences of different lengths."""


class DuplicateXCoordinate(InvalidShares):
    """Two shares were evaluated at the same point."""

    def __init__(self, x: int):
        super().__init__(f"Duplicate x-coordinate {x} in shares")
        self.x = x


class DivisionByZero(SharingError, ZeroDivisionError):
    """
    Field element zero has no inverse.

    Reconstructors validate their input before interpolating, so seeing
    this from the public API means a validation check is missing.
    """


class IntegrityError(SharingError):
    """Authenticated decryption of a reconstructed payload failed."""


class MalformedShare(SharingError):
    """A serialized share could not be parsed."""
