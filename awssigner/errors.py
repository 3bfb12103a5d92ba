"""
Error types and signing results.

Signing either fully succeeds or the request must not be sent. A body that
cannot be read is reported as a SigningFailure value rather than raised, so
callers decide when to surface it (usually with ``unwrap()``).
"""

from dataclasses import dataclass
from typing import Dict, Union


class SigningError(Exception):
    """Base class for every error raised by awssigner."""


class UnsupportedAlgorithmError(SigningError):
    """HMAC-SHA256 is not available in this runtime."""


class InvalidKeyError(SigningError):
    """A keyed-hash step was given a key that is not a byte string."""


class BodyReadError(SigningError):
    """The request body could not be materialized for hashing."""


class ConfigurationError(SigningError):
    """A signing identity could not be built from configuration."""


@dataclass(frozen=True)
class Signed:
    """Header values produced by a successful signing call."""

    authorization: str
    amz_date: str

    @property
    def ok(self) -> bool:
        return True

    def headers(self) -> Dict[str, str]:
        return {'Authorization': self.authorization, 'X-Amz-Date': self.amz_date}

    def unwrap(self) -> 'Signed':
        return self


@dataclass(frozen=True)
class SigningFailure:
    """A signing call that could not complete; the request must not be sent."""

    error: BodyReadError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Signed:
        raise self.error


SigningResult = Union[Signed, SigningFailure]
