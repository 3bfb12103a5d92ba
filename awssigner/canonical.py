"""
Canonical request construction.

See: https://docs.aws.amazon.com/general/latest/gr/sigv4-create-canonical-request.html
"""

import hashlib
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote

from .request import Body, HeaderPairs, QueryPairs, RequestView

EMPTY_PAYLOAD_HASH = 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'

AMZ_DATE_HEADER = 'x-amz-date'

# never part of the signature, even when a previous attempt left them behind
_EXCLUDED_HEADERS = frozenset({AMZ_DATE_HEADER, 'authorization'})

_REDUNDANT_SLASHES = re.compile(r'/+')

_READ_CHUNK = 1024 * 1024


@dataclass(frozen=True)
class CanonicalRequest:
    canonical_request: str
    # lowercased names in the order they were signed
    signed_headers: Tuple[str, ...]

    @property
    def signed_headers_str(self) -> str:
        return ';'.join(self.signed_headers)

    def hexdigest(self) -> str:
        return hashlib.sha256(self.canonical_request.encode('utf-8')).hexdigest()


def percent_encode(value: str) -> str:
    """
    Do not encode the unreserved characters of RFC 3986 (A-Z, a-z, 0-9, '-', '_', '.', '~').

    Everything else is encoded per UTF-8 byte as %XY with uppercase hex, so a
    space becomes %20 (never '+').
    """
    return quote(value, safe='-_.~')


def canonical_query_string(query: QueryPairs) -> str:
    # values must already be decoded, so escapes come out with canonical casing
    pairs = sorted(
        (percent_encode(name), percent_encode(value or ''))
        for name, value in query
    )
    return '&'.join(f"{name}={value}" for name, value in pairs)


def _trimall(value: str) -> str:
    return ' '.join(value.split())


def canonical_headers(headers: HeaderPairs, amz_date: str) -> Tuple[str, Tuple[str, ...]]:
    """
    Lowercase, trim and sort headers, replacing any x-amz-date with ``amz_date``.

    Returns the newline-joined ``name:value`` block (no trailing newline) and
    the signed header names in the same order.
    """
    grouped: Dict[str, List[str]] = {}
    for name, value in headers:
        lname = name.lower().strip()
        if lname in _EXCLUDED_HEADERS:
            continue
        grouped.setdefault(lname, []).append(_trimall(value))
    grouped[AMZ_DATE_HEADER] = [amz_date]

    names = tuple(sorted(grouped))
    block = '\n'.join(f"{name}:{','.join(grouped[name])}" for name in names)
    return block, names


def canonical_path(path: Optional[str]) -> str:
    if not path or not path.strip():
        return '/'
    return _REDUNDANT_SLASHES.sub('/', path)


def _hash_stream(body) -> str:
    position = body.tell()
    digest = hashlib.sha256()
    for chunk in iter(lambda: body.read(_READ_CHUNK), b''):
        digest.update(chunk)
    body.seek(position)
    return digest.hexdigest()


def payload_hash(body: Body) -> str:
    """
    Hex SHA-256 of the exact body bytes, or EMPTY_PAYLOAD_HASH when there is no body.

    A file-like body is hashed from its current position and rewound
    afterwards. Read errors propagate as OSError.
    """
    if body is None:
        return EMPTY_PAYLOAD_HASH
    if isinstance(body, (bytes, bytearray, memoryview)):
        return hashlib.sha256(body).hexdigest()
    return _hash_stream(body)


def make_canonical_request(request: RequestView, amz_date: str) -> CanonicalRequest:
    headers_block, signed = canonical_headers(request.headers, amz_date)

    # CanonicalRequest =
    #   HTTPRequestMethod + '\n' +
    #   CanonicalURI + '\n' +
    #   CanonicalQueryString + '\n' +
    #   CanonicalHeaders + '\n' + '\n' +
    #   SignedHeaders + '\n' +
    #   HexEncode(Hash(RequestPayload))
    parts: Iterable[str] = (
        request.method,
        canonical_path(request.path),
        canonical_query_string(request.query),
        headers_block + '\n',
        ';'.join(signed),
        payload_hash(request.body),
    )
    return CanonicalRequest('\n'.join(parts), signed)
