"""
SigV4 authentication hook for the requests library.

Usage::

    import requests
    from awssigner import AwsSigV4Auth, SigningIdentity

    auth = AwsSigV4Auth(SigningIdentity.from_env('execute-api'))
    requests.get('https://abc123.execute-api.us-east-1.amazonaws.com/prod/items', auth=auth)
"""

import logging
from typing import Optional

import requests.auth

from .config import SigningIdentity
from .errors import BodyReadError
from .request import RequestView
from .sigv4 import Clock, SigV4Signer

logger = logging.getLogger(__name__)

__all__ = ['AwsSigV4Auth']


class AwsSigV4Auth(requests.auth.AuthBase):
    def __init__(self, identity: SigningIdentity, clock: Optional[Clock] = None) -> None:
        """
        Use this with the auth argument of the requests methods, or assign it
        to a session's auth property.

        :param identity: Access key, secret, region and service to sign for.
        :param clock: Returns the signing time; defaults to the current UTC time.
        """
        self.signer = SigV4Signer(identity, clock)

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        if not isinstance(request.method, str) or not isinstance(request.url, str):
            raise TypeError('request must be prepared with a method and URL before signing')

        # a retried request still carries the previous signature
        for name in ('Authorization', 'X-Amz-Date'):
            request.headers.pop(name, None)

        body = request.body
        if body is not None and not isinstance(body, (bytes, str)) and not hasattr(body, 'read'):
            raise BodyReadError(f"cannot sign a streaming body of type {type(body).__name__}")

        view = RequestView.from_url(request.method, request.url, request.headers, body)

        signed = self.signer.sign(view).unwrap()
        logger.debug('Signed %s %s', request.method, request.url)
        request.headers.update(signed.headers())
        return request
