"""
Request signature for the OVH API.

The signature is the SHA1 of the "+"-joined tuple
``secret+consumer_key+METHOD+url+body+timestamp``, hex encoded and
prefixed with ``$1$``. The server recomputes it byte for byte.
"""

import hashlib

from .constants import SIGNATURE_VERSION


def sign(secret: str, consumer_key: str, method: str, url: str,
         body: bytes, timestamp: int) -> str:
    """
    Compute the X-Ovh-Signature header value.

    Args:
        secret: Application secret
        consumer_key: Consumer key, empty before authorization
        method: HTTP method
        url: Full URL exactly as dispatched, query string included
        body: Exact request body bytes, empty if none
        timestamp: Timestamp sent in X-Ovh-Timestamp

    Returns:
        Signature string, e.g. "$1$" followed by 40 hex chars
    """
    message = b"+".join([
        secret.encode('utf-8'),
        consumer_key.encode('utf-8'),
        method.upper().encode('utf-8'),
        url.encode('utf-8'),
        body,
        str(timestamp).encode('utf-8'),
    ])
    return SIGNATURE_VERSION + hashlib.sha1(message).hexdigest()
