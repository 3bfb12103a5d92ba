"""
Signing identity: who signs, and for which region and service.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Union

from .errors import ConfigurationError


class Service(str, Enum):
    """Commonly signed AWS services. Any service name string is also accepted."""

    S3 = 's3'
    DYNAMODB = 'dynamodb'
    LAMBDA = 'lambda'
    STS = 'sts'
    IAM = 'iam'
    EC2 = 'ec2'
    EXECUTE_API = 'execute-api'
    ES = 'es'
    SQS = 'sqs'
    SNS = 'sns'


@dataclass(frozen=True)
class SigningIdentity:
    access_key: str
    secret_key: str = field(repr=False)
    region: str
    service: Union[str, Service]

    def __post_init__(self) -> None:
        # store the plain name so it formats the same everywhere
        if isinstance(self.service, Service):
            object.__setattr__(self, 'service', self.service.value)

    @classmethod
    def from_env(
            cls,
            service: Union[str, Service],
            environ: Optional[Mapping[str, str]] = None
    ) -> 'SigningIdentity':
        """
        Build an identity from the standard AWS environment variables.

        ``AWS_REGION`` wins over ``AWS_DEFAULT_REGION``. Raises
        ConfigurationError naming the first variable that is missing or empty.
        """
        env = os.environ if environ is None else environ

        def required(*names: str) -> str:
            for name in names:
                value = env.get(name, '').strip()
                if value:
                    return value
            raise ConfigurationError(f"environment variable {names[0]} is not set")

        return cls(
            access_key=required('AWS_ACCESS_KEY_ID'),
            secret_key=required('AWS_SECRET_ACCESS_KEY'),
            region=required('AWS_REGION', 'AWS_DEFAULT_REGION'),
            service=service,
        )
