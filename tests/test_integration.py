"""
Integration tests against the live OVH API.

Skipped unless OVH_APPLICATION_KEY and OVH_APPLICATION_SECRET are set.
Signed calls additionally need a validated OVH_CONSUMER_KEY.
"""

import os
import time

import pytest

from ovh_client import (
    AccessRule,
    ApiError,
    CredentialRequest,
    OvhClient,
)

pytestmark = pytest.mark.skipif(
    not (os.getenv("OVH_APPLICATION_KEY") and os.getenv("OVH_APPLICATION_SECRET")),
    reason="OVH application credentials not configured"
)


class TestIntegration:
    """Integration tests with the OVH API."""

    @pytest.fixture
    def client(self):
        """Create client from environment."""
        with OvhClient.from_env() as client:
            yield client

    def test_time_close_to_local_clock(self, client):
        """Test API time and offset are consistent."""
        api_time = client.time()

        assert abs(api_time - (int(time.time()) + client.time_delta)) <= 2

    def test_ping(self, client):
        """Test API liveness probe."""
        client.ping()

    def test_request_consumer_key(self):
        """Test a new consumer key is issued pending validation."""
        with OvhClient(
            os.getenv("OVH_ENDPOINT", "ovh-eu"),
            os.environ["OVH_APPLICATION_KEY"],
            os.environ["OVH_APPLICATION_SECRET"],
        ) as client:
            grant = client.request_consumer_key(CredentialRequest(
                access_rules=[AccessRule(method="GET", path="/me")]
            ))

            assert grant.state == "pendingValidation"
            assert grant.validation_url.startswith("https://")
            assert client.consumer_key == grant.consumer_key

    @pytest.mark.skipif(not os.getenv("OVH_CONSUMER_KEY"), reason="no validated consumer key")
    def test_signed_call(self, client):
        """Test a signed GET /me is accepted."""
        me = client.get("/me", response_model=dict)

        assert "nichandle" in me

    def test_unvalidated_consumer_key_rejected(self):
        """Test a signed call with a pending consumer key is refused."""
        with OvhClient(
            os.getenv("OVH_ENDPOINT", "ovh-eu"),
            os.environ["OVH_APPLICATION_KEY"],
            os.environ["OVH_APPLICATION_SECRET"],
        ) as client:
            client.request_consumer_key(CredentialRequest(
                access_rules=[AccessRule(method="GET", path="/me")]
            ))

            with pytest.raises(ApiError) as exc_info:
                client.get("/me")

            assert exc_info.value.code in (401, 403)
