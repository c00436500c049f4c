"""
Constants for the OVH API client library.
Values are fixed by the remote service's authentication protocol.
"""

from types import MappingProxyType

# HTTP Headers
HEADER_APPLICATION = "X-Ovh-Application"
HEADER_CONSUMER = "X-Ovh-Consumer"
HEADER_TIMESTAMP = "X-Ovh-Timestamp"
HEADER_SIGNATURE = "X-Ovh-Signature"
CONTENT_TYPE_JSON = "application/json"

# Prefix of every request signature (SHA1 scheme)
SIGNATURE_VERSION = "$1$"

# Region name -> API base URL
ENDPOINTS = MappingProxyType({
    "ovh-eu": "https://api.ovh.com/1.0",
    "ovh-ca": "https://ca.api.ovh.com/1.0",
    "runabove": "https://api.runabove.com/1.0",
})
DEFAULT_ENDPOINT = "ovh-eu"

# Authentication routes
TIME_PATH = "/auth/time"
CREDENTIAL_PATH = "/auth/credential"

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,  # HTTP timeout in seconds
}

# Status codes treated as success: [200, 300)
SUCCESS_STATUS = range(200, 300)

# Environment variables read by OvhClient.from_env()
ENV_ENDPOINT = "OVH_ENDPOINT"
ENV_APPLICATION_KEY = "OVH_APPLICATION_KEY"
ENV_APPLICATION_SECRET = "OVH_APPLICATION_SECRET"
ENV_CONSUMER_KEY = "OVH_CONSUMER_KEY"
