"""
OVH API Client Library

A Python client library that signs requests to the OVH API and
handles the consumer key handshake.

Example usage:
    from ovh_client import OvhClient, CredentialRequest, AccessRule

    client = OvhClient("ovh-eu", "app-key", "app-secret")
    grant = client.request_consumer_key(CredentialRequest(
        access_rules=[AccessRule(method="GET", path="/me")]
    ))
    print(grant.validation_url)
"""

from .client import OvhClient
from .exceptions import (
    OvhClientError,
    ConfigurationError,
    TransportError,
    RemoteUnavailableError,
    MalformedResponseError,
    ApiError
)
from .models import (
    AccessRule,
    CredentialRequest,
    CredentialGrant
)
from .signature import sign
from .constants import (
    ENDPOINTS,
    DEFAULT_CONFIG,
    HEADER_APPLICATION,
    HEADER_CONSUMER,
    HEADER_TIMESTAMP,
    HEADER_SIGNATURE
)

__version__ = "1.0.0"
__all__ = [
    "OvhClient",
    "OvhClientError",
    "ConfigurationError",
    "TransportError",
    "RemoteUnavailableError",
    "MalformedResponseError",
    "ApiError",
    "AccessRule",
    "CredentialRequest",
    "CredentialGrant",
    "sign",
    "ENDPOINTS",
    "DEFAULT_CONFIG",
    "HEADER_APPLICATION",
    "HEADER_CONSUMER",
    "HEADER_TIMESTAMP",
    "HEADER_SIGNATURE"
]
