"""
Read-only view of the request being signed, and its projection from a URL.
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, unquote_plus, urlsplit

Headers = Union[Mapping[str, Any], Iterable[Tuple[str, str]]]
HeaderPairs = Tuple[Tuple[str, str], ...]
QueryPairs = Tuple[Tuple[str, str], ...]
Body = Union[bytes, bytearray, memoryview, BinaryIO, None]

DEFAULT_PORTS = {'http': 80, 'https': 443}

# http.client writes bytes header values as-is and encodes str values as latin-1
_HEADER_ENCODING = 'latin-1'

# characters allowed verbatim in an encoded path, '%' keeps existing escapes intact
_PATH_SAFE = "/!$&'()*+,;=:@%~"


def _header_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode(_HEADER_ENCODING)
    return str(value)


def _header_pairs(headers: Optional[Headers]) -> HeaderPairs:
    if not headers:
        return ()
    items = headers.items() if isinstance(headers, Mapping) else headers
    pairs: List[Tuple[str, str]] = []
    for name, value in items:
        name = _header_text(name)
        if isinstance(value, (list, tuple)):
            pairs.extend((name, _header_text(v)) for v in value)
        else:
            pairs.append((name, _header_text(value)))
    return tuple(pairs)


def parse_query(query: str) -> QueryPairs:
    """Split a raw query string into decoded (name, value) pairs, keeping blank values and order."""
    pairs = []
    for piece in query.split('&'):
        if not piece:
            continue
        name, _, value = piece.partition('=')
        pairs.append((unquote_plus(name), unquote_plus(value)))
    return tuple(pairs)


def remove_dot_segments(path: str) -> str:
    """
    Remove '.' and '..' segments per RFC 3986 section 5.2.4.

    Consecutive slashes are left alone.
    """
    output: List[str] = []
    for segment in path.split('/'):
        if segment == '.':
            continue
        elif segment != '..':
            output.append(segment)
        elif output:
            output.pop()
    if path.startswith('/') and (not output or output[0]):
        output.insert(0, '')
    if output and path.endswith(('/.', '/..')):
        output.append('')
    return '/'.join(output)


def host_from_url(scheme: str, hostname: Optional[str], port: Optional[int]) -> str:
    host = hostname or ''
    if ':' in host:
        # IPv6 literal
        host = f"[{host}]"
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    return host


@dataclass(frozen=True)
class RequestView:
    method: str
    path: str = ''
    query: QueryPairs = ()
    headers: HeaderPairs = ()
    body: Body = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'method', self.method.upper())
        object.__setattr__(self, 'query', tuple((n, v) for n, v in self.query))
        object.__setattr__(self, 'headers', _header_pairs(self.headers))
        if isinstance(self.body, str):
            object.__setattr__(self, 'body', self.body.encode('utf-8'))

    def header(self, name: str) -> Optional[str]:
        """First value of a header, matched case-insensitively."""
        lname = name.lower()
        for key, value in self.headers:
            if key.lower() == lname:
                return value
        return None

    @classmethod
    def from_url(
            cls,
            method: str,
            url: str,
            headers: Optional[Headers] = None,
            body: Union[Body, str] = None,
            add_host: bool = True
    ) -> 'RequestView':
        """
        Project an absolute URL into a request view, the way an HTTP client parses it.

        The path is percent-encoded and has its dot segments resolved, the
        query is decoded into pairs, and a Host header is derived from the
        URL unless one is already present.
        """
        parts = urlsplit(url)
        path = remove_dot_segments(quote(parts.path, safe=_PATH_SAFE))
        header_pairs = _header_pairs(headers)
        if add_host and not any(name.lower() == 'host' for name, _ in header_pairs):
            host = host_from_url(parts.scheme, parts.hostname, parts.port)
            header_pairs = (('Host', host),) + header_pairs
        return cls(
            method=method,
            path=path,
            query=parse_query(parts.query),
            headers=header_pairs,
            body=body,
        )
