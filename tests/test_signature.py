"""
Unit tests for request signing.
"""

import hashlib

import pytest

from ovh_client import sign

SECRET = "test-app-secret"
CONSUMER_KEY = "test-consumer-key"
URL = "https://api.ovh.com/1.0/me"
TIMESTAMP = 1457018875


def expected_signature(secret, consumer_key, method, url, body, timestamp):
    message = f"{secret}+{consumer_key}+{method}+{url}+".encode('utf-8') + body + f"+{timestamp}".encode('utf-8')
    return "$1$" + hashlib.sha1(message).hexdigest()


class TestSign:
    """Test signature computation."""

    def test_sign_format(self):
        """Test signature is a version-tagged lowercase SHA1 hex digest."""
        signature = sign(SECRET, CONSUMER_KEY, "GET", URL, b"", TIMESTAMP)

        assert signature.startswith("$1$")
        digest = signature[3:]
        assert len(digest) == 40  # SHA1 hex = 40 chars
        assert digest == digest.lower()
        int(digest, 16)  # Should not raise

    def test_sign_matches_server_computation(self):
        """Test signature is SHA1 of the "+"-joined fields."""
        body = b'{"description":"test"}'
        signature = sign(SECRET, CONSUMER_KEY, "POST", URL, body, TIMESTAMP)

        assert signature == expected_signature(SECRET, CONSUMER_KEY, "POST", URL, body, TIMESTAMP)

    def test_sign_deterministic(self):
        """Test same inputs always give the same signature."""
        args = (SECRET, CONSUMER_KEY, "PUT", URL, b'{"a":1}', TIMESTAMP)

        assert sign(*args) == sign(*args)

    @pytest.mark.parametrize("index,value", [
        (0, "other-secret"),
        (1, "other-consumer-key"),
        (2, "DELETE"),
        (3, URL + "?x=1"),
        (4, b'{"a":2}'),
        (5, TIMESTAMP + 1),
    ])
    def test_sign_sensitive_to_each_input(self, index, value):
        """Test changing any single input changes the signature."""
        args = [SECRET, CONSUMER_KEY, "PUT", URL, b'{"a":1}', TIMESTAMP]
        original = sign(*args)

        args[index] = value
        assert sign(*args) != original

    def test_sign_empty_consumer_key(self):
        """Test empty consumer key keeps its (empty) slot in the join."""
        signature = sign(SECRET, "", "GET", URL, b"", TIMESTAMP)

        message = f"{SECRET}++GET+{URL}++{TIMESTAMP}".encode('utf-8')
        assert signature == "$1$" + hashlib.sha1(message).hexdigest()

    def test_sign_uppercases_method(self):
        """Test method name is signed in upper case."""
        assert sign(SECRET, CONSUMER_KEY, "get", URL, b"", TIMESTAMP) == \
            sign(SECRET, CONSUMER_KEY, "GET", URL, b"", TIMESTAMP)

    def test_sign_raw_body_bytes(self):
        """Test body is signed byte for byte, non-ASCII included."""
        body = '{"name":"café"}'.encode('utf-8')
        signature = sign(SECRET, CONSUMER_KEY, "POST", URL, body, TIMESTAMP)

        assert signature == expected_signature(SECRET, CONSUMER_KEY, "POST", URL, body, TIMESTAMP)

    def test_sign_zero_timestamp(self):
        """Test timestamp is rendered in plain decimal form."""
        signature = sign(SECRET, CONSUMER_KEY, "GET", URL, b"", 0)

        message = f"{SECRET}+{CONSUMER_KEY}+GET+{URL}++0".encode('utf-8')
        assert signature == "$1$" + hashlib.sha1(message).hexdigest()
