"""
AWS Signature Version 4 signing entry point.

Builds the string-to-sign from a canonical request, signs it with the derived
key and formats the Authorization header.

See: https://docs.aws.amazon.com/general/latest/gr/sigv4_signing.html
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .canonical import CanonicalRequest, make_canonical_request
from .config import SigningIdentity
from .errors import BodyReadError, Signed, SigningFailure, SigningResult
from .keys import TERMINATOR, compute_signature, derive_signing_key, format_date
from .request import RequestView

logger = logging.getLogger(__name__)

ALGORITHM = 'AWS4-HMAC-SHA256'
TIMESTAMP_FORMAT = '%Y%m%dT%H%M%SZ'

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(timestamp: datetime) -> datetime:
    """Convert to UTC; a naive timestamp is taken to already be UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def format_timestamp(timestamp: datetime) -> str:
    return to_utc(timestamp).strftime(TIMESTAMP_FORMAT)


def credential_scope(date_stamp: str, region: str, service: str) -> str:
    return '/'.join((date_stamp, region, service, TERMINATOR))


def string_to_sign(amz_date: str, scope: str, request_hash: str) -> str:
    return '\n'.join((ALGORITHM, amz_date, scope, request_hash))


def authorization_header(access_key: str, scope: str, signed_headers: str, signature: str) -> str:
    return (
        f"{ALGORITHM} Credential={access_key}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )


class SigV4Signer:
    """
    Signs requests for one identity.

    The signer holds no mutable state, so one instance can be shared across
    threads. Time comes from ``clock``, read once per ``sign`` call.
    """

    def __init__(self, identity: SigningIdentity, clock: Optional[Clock] = None) -> None:
        self.identity = identity
        self.clock = clock or utc_now

    def _scope(self, timestamp: datetime) -> str:
        return credential_scope(format_date(timestamp), self.identity.region, self.identity.service)

    def canonical_request(self, request: RequestView, timestamp: datetime) -> CanonicalRequest:
        return make_canonical_request(request, format_timestamp(timestamp))

    def string_to_sign(self, request: RequestView, timestamp: datetime) -> str:
        timestamp = to_utc(timestamp)
        canonical = self.canonical_request(request, timestamp)
        return string_to_sign(format_timestamp(timestamp), self._scope(timestamp), canonical.hexdigest())

    def authorization_header(self, request: RequestView, timestamp: datetime) -> str:
        timestamp = to_utc(timestamp)
        amz_date = format_timestamp(timestamp)
        scope = self._scope(timestamp)

        canonical = make_canonical_request(request, amz_date)
        logger.debug('CanonicalRequest:\n%s', canonical.canonical_request)
        sts = string_to_sign(amz_date, scope, canonical.hexdigest())
        logger.debug('StringToSign:\n%s', sts)

        signing_key = derive_signing_key(
            self.identity.secret_key,
            timestamp,
            self.identity.region,
            self.identity.service,
        )
        signature = compute_signature(signing_key, sts)
        logger.debug('Signature:\n%s', signature)

        return authorization_header(self.identity.access_key, scope, canonical.signed_headers_str, signature)

    def sign(self, request: RequestView) -> SigningResult:
        """
        Sign ``request`` and return the Authorization and X-Amz-Date values to attach.

        A body that cannot be read yields a SigningFailure instead of raising.
        """
        timestamp = to_utc(self.clock())
        try:
            authorization = self.authorization_header(request, timestamp)
        except OSError as e:
            logger.warning('Could not read body of %s request: %s', request.method, e)
            error = BodyReadError(f"failed to read request body: {e}")
            error.__cause__ = e
            return SigningFailure(error)
        return Signed(authorization=authorization, amz_date=format_timestamp(timestamp))


def sign(identity: SigningIdentity, clock: Optional[Clock], request: RequestView) -> SigningResult:
    return SigV4Signer(identity, clock).sign(request)
