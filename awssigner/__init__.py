"""
AWS Signature Version 4 - Standalone Implementation

This package computes SigV4 Authorization headers for outbound HTTP requests
without depending on botocore, and plugs into requests as an auth hook.
"""

from .config import Service, SigningIdentity
from .errors import (
    BodyReadError,
    ConfigurationError,
    InvalidKeyError,
    Signed,
    SigningError,
    SigningFailure,
    SigningResult,
    UnsupportedAlgorithmError,
)
from .request import Headers, RequestView
from .sigv4 import SigV4Signer, sign
from .requests_auth import AwsSigV4Auth

__version__ = "0.1.0"
__all__ = [
    "AwsSigV4Auth",
    "BodyReadError",
    "ConfigurationError",
    "Headers",
    "InvalidKeyError",
    "RequestView",
    "Service",
    "SigV4Signer",
    "Signed",
    "SigningError",
    "SigningFailure",
    "SigningIdentity",
    "SigningResult",
    "UnsupportedAlgorithmError",
    "sign",
]
