"""
HMAC-SHA256 primitives: signing key derivation and the final signature.
"""

import hashlib
import hmac
from datetime import date, datetime, timezone
from typing import Union

from .errors import InvalidKeyError, UnsupportedAlgorithmError

DATE_FORMAT = '%Y%m%d'
TERMINATOR = 'aws4_request'


def _check_algorithm() -> None:
    # fail at import rather than on the first request
    try:
        hmac.new(b'anykey', b'', hashlib.sha256).digest()
    except (AttributeError, ValueError) as e:
        raise UnsupportedAlgorithmError('HMAC-SHA256 is not available') from e


_check_algorithm()


def hmac_sha256(key: bytes, msg: str) -> bytes:
    if not isinstance(key, (bytes, bytearray)):
        raise InvalidKeyError(f"HMAC key must be bytes, got {type(key).__name__}")
    return hmac.new(key, msg.encode('utf-8'), hashlib.sha256).digest()


def format_date(value: Union[str, date, datetime]) -> str:
    """Return the ``yyyyMMdd`` stamp for a date, a datetime (in UTC) or an already formatted string."""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(DATE_FORMAT)
    return value.strftime(DATE_FORMAT)


def derive_signing_key(
        secret_key: str,
        date_stamp: Union[str, date, datetime],
        region: str,
        service: str
) -> bytes:
    """
    Derive the 32-byte key scoped to (date, region, service).

    See: https://docs.aws.amazon.com/general/latest/gr/signature-v4-examples.html
    """
    k_date = hmac_sha256(('AWS4' + secret_key).encode('utf-8'), format_date(date_stamp))
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, TERMINATOR)


def compute_signature(signing_key: bytes, string_to_sign: str) -> str:
    return hmac_sha256(signing_key, string_to_sign).hex()
