"""
Signed-request client for the OVH API.

This module keeps the authenticated session state (application
credentials, consumer key, clock offset with the API) and dispatches
signed calls, classifying every answer as a result, an ApiError, a
MalformedResponseError or a TransportError.
"""

import json
import logging
import os
import re
import time
from typing import Any, Dict, Mapping, Optional, Type, TypeVar
from urllib.parse import urlencode

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError
from requests.utils import requote_uri

from .constants import (
    CONTENT_TYPE_JSON,
    CREDENTIAL_PATH,
    DEFAULT_CONFIG,
    DEFAULT_ENDPOINT,
    ENDPOINTS,
    ENV_APPLICATION_KEY,
    ENV_APPLICATION_SECRET,
    ENV_CONSUMER_KEY,
    ENV_ENDPOINT,
    HEADER_APPLICATION,
    HEADER_CONSUMER,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
    SUCCESS_STATUS,
    TIME_PATH,
)
from .exceptions import (
    ApiError,
    ConfigurationError,
    MalformedResponseError,
    RemoteUnavailableError,
    TransportError,
)
from .models import CredentialGrant, CredentialRequest, ErrorBody
from .signature import sign

T = TypeVar("T")

# Plain ASCII decimal, as sent by GET /auth/time
_DECIMAL = re.compile(r"-?[0-9]+")

logger = logging.getLogger(__name__)


class OvhClient:
    """
    Client for making signed requests to the OVH API.

    Creating a client synchronizes with the API clock; every signed call
    is stamped with the local time corrected by that offset.
    """

    def __init__(self, endpoint: str, application_key: str, application_secret: str,
                 consumer_key: str = "", endpoints: Mapping[str, str] = ENDPOINTS, **config):
        """
        Initialize the client and synchronize with the API clock.

        Args:
            endpoint: Region name, a key of ``endpoints`` (e.g. "ovh-eu")
            application_key: Application key given at application registration
            application_secret: Application secret, never sent over the wire
            consumer_key: Already validated consumer key, if any
            endpoints: Region name -> base URL table
            **config: Configuration options (timeout)

        Raises:
            ConfigurationError: If the region or a setting is invalid
            TransportError: If the time endpoint cannot be reached
            RemoteUnavailableError: If the time endpoint answers an error
            MalformedResponseError: If the time endpoint answers garbage
        """
        if endpoint not in endpoints:
            raise ConfigurationError(f"Invalid endpoint {endpoint}")

        self._endpoint = endpoint
        self._base_url = endpoints[endpoint].rstrip('/')
        self._application_key = application_key
        self._application_secret = application_secret
        self._consumer_key = consumer_key or ""
        self._time_delta = 0

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config()

        self.session = requests.Session()
        try:
            self.sync_time()
        except Exception:
            self.session.close()
            raise

    @classmethod
    def from_env(cls, **config) -> "OvhClient":
        """
        Create a client from OVH_ENDPOINT, OVH_APPLICATION_KEY,
        OVH_APPLICATION_SECRET and OVH_CONSUMER_KEY.
        """
        application_key = os.getenv(ENV_APPLICATION_KEY, "")
        application_secret = os.getenv(ENV_APPLICATION_SECRET, "")
        if not application_key or not application_secret:
            raise ConfigurationError(
                f"Missing env vars: {ENV_APPLICATION_KEY} and/or {ENV_APPLICATION_SECRET}"
            )
        return cls(
            os.getenv(ENV_ENDPOINT, DEFAULT_ENDPOINT),
            application_key,
            application_secret,
            os.getenv(ENV_CONSUMER_KEY, ""),
            **config
        )

    def _validate_config(self):
        """Validate client configuration."""
        if not self._application_key:
            raise ConfigurationError("application_key cannot be empty")

        if not self._application_secret:
            raise ConfigurationError("application_secret cannot be empty")

        if self.config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def application_key(self) -> str:
        return self._application_key

    @property
    def application_secret(self) -> str:
        return self._application_secret

    @property
    def consumer_key(self) -> str:
        """Current consumer key; empty until one is given or requested."""
        return self._consumer_key

    @property
    def time_delta(self) -> int:
        """Seconds to add to the local clock to get the API time."""
        return self._time_delta

    def _send(self, method: str, url: str, headers: Dict[str, str], body: bytes) -> requests.Response:
        """Perform one HTTP round trip, mapping transport failures."""
        try:
            return self.session.request(
                method,
                url,
                headers=headers,
                data=body or None,
                timeout=self.config['timeout']
            )
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}") from e

    # Clock

    def time(self) -> int:
        """
        Get the API time, in seconds since epoch, from GET /auth/time.

        Raises:
            TransportError: If the request fails
            RemoteUnavailableError: On a non-success status
            MalformedResponseError: If the body is not an integer
        """
        response = self._send('GET', self._base_url + TIME_PATH, {}, b"")

        if response.status_code not in SUCCESS_STATUS:
            raise RemoteUnavailableError(response.status_code)

        text = response.text.strip()
        if not _DECIMAL.fullmatch(text):
            raise MalformedResponseError(
                f"Invalid API time {response.text!r}", response.status_code
            )
        return int(text)

    def sync_time(self) -> int:
        """Refresh the offset between the local clock and the API clock."""
        local_time = int(time.time())
        api_time = self.time()
        self._time_delta = api_time - local_time
        logger.debug("Clock offset with %s: %d s", self._endpoint, self._time_delta)
        return self._time_delta

    def ping(self):
        """Check that the API is up. Raises on failure."""
        self.time()

    # Consumer key

    def request_consumer_key(self, credential_request: CredentialRequest) -> CredentialGrant:
        """
        Ask the API for a new consumer key scoped by the given access rules.

        The returned key is stored on the client right away but stays
        unusable until the user opens ``validation_url`` and logs in.

        Raises:
            ApiError: If the API refuses the request
            MalformedResponseError: If a response body cannot be parsed
            TransportError: If the request fails
        """
        body = credential_request.model_dump_json(by_alias=True).encode('utf-8')
        headers = {
            'Content-Type': CONTENT_TYPE_JSON,
            HEADER_APPLICATION: self._application_key,
        }

        response = self._send('POST', self._base_url + CREDENTIAL_PATH, headers, body)
        if response.status_code not in SUCCESS_STATUS:
            raise self._api_error(response)

        grant = self._decode(response, CredentialGrant)
        self._consumer_key = grant.consumer_key
        logger.debug("Consumer key issued, state %s", grant.state)
        return grant

    # Signed calls

    def _prepare_request_body(self, body: Any) -> bytes:
        """Serialize the request body; no body gives zero bytes."""
        if body is None:
            return b""
        if isinstance(body, BaseModel):
            return body.model_dump_json(by_alias=True).encode('utf-8')
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode('utf-8')
        return json.dumps(body, separators=(',', ':')).encode('utf-8')

    def _build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build the full URL, quoted the way requests will send it."""
        url = self._base_url + path
        if params:
            url += ('&' if '?' in url else '?') + urlencode(params)
        return requote_uri(url)

    def _decode(self, response: requests.Response, response_model: Type[T]) -> T:
        """Validate the response body against the given type."""
        try:
            return TypeAdapter(response_model).validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Cannot decode response as {getattr(response_model, '__name__', response_model)}: {e}",
                response.status_code
            ) from e

    def _api_error(self, response: requests.Response) -> ApiError:
        """Build an ApiError from a non-2xx response; the code is the HTTP status."""
        error = self._decode(response, ErrorBody)
        return ApiError(response.status_code, error.message, error.tracer)

    def call(self, path: str, method: str, body: Any = None,
             response_model: Optional[Type[T]] = None,
             params: Optional[Mapping[str, Any]] = None) -> Optional[T]:
        """
        Make a signed call to the API.

        Args:
            path: Route relative to the base URL (e.g. "/me")
            method: HTTP method
            body: Request payload; a pydantic model, bytes, str or any
                JSON-serializable value. None sends no body.
            response_model: Type to decode a success body into
            params: Query string parameters

        Returns:
            The decoded body, or None when no response_model is given or
            the body is empty

        Raises:
            ApiError: On a non-2xx status
            MalformedResponseError: If a response body cannot be parsed
            TransportError: If the request fails
        """
        method = method.upper()
        url = self._build_url(path, params)
        data = self._prepare_request_body(body)
        timestamp = int(time.time()) + self._time_delta

        headers = {
            'Content-Type': CONTENT_TYPE_JSON,
            HEADER_APPLICATION: self._application_key,
            HEADER_CONSUMER: self._consumer_key,
            HEADER_TIMESTAMP: str(timestamp),
            HEADER_SIGNATURE: sign(
                self._application_secret, self._consumer_key, method, url, data, timestamp
            ),
        }

        logger.debug("Calling %s %s", method, url)
        response = self._send(method, url, headers, data)

        if response.status_code not in SUCCESS_STATUS:
            raise self._api_error(response)

        if response_model is None or not response.content:
            return None
        return self._decode(response, response_model)

    def get(self, path: str, response_model: Optional[Type[T]] = None, **kwargs) -> Optional[T]:
        """Make signed GET request."""
        return self.call(path, 'GET', response_model=response_model, **kwargs)

    def post(self, path: str, body: Any = None, response_model: Optional[Type[T]] = None, **kwargs) -> Optional[T]:
        """Make signed POST request."""
        return self.call(path, 'POST', body, response_model, **kwargs)

    def put(self, path: str, body: Any = None, response_model: Optional[Type[T]] = None, **kwargs) -> Optional[T]:
        """Make signed PUT request."""
        return self.call(path, 'PUT', body, response_model, **kwargs)

    def delete(self, path: str, response_model: Optional[Type[T]] = None, **kwargs) -> Optional[T]:
        """Make signed DELETE request."""
        return self.call(path, 'DELETE', response_model=response_model, **kwargs)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
