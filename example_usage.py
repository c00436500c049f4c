#!/usr/bin/env python3
"""
Basic usage examples for the OVH API client library.

This script demonstrates the consumer key handshake and a signed call
against the OVH API. Credentials are read from the environment:
OVH_ENDPOINT, OVH_APPLICATION_KEY, OVH_APPLICATION_SECRET and,
optionally, OVH_CONSUMER_KEY.
"""

import sys

from pydantic import BaseModel

from ovh_client import (
    AccessRule,
    ApiError,
    CredentialRequest,
    OvhClient,
    OvhClientError,
)


class Me(BaseModel):
    nichandle: str
    firstname: str = ""
    name: str = ""


def main():
    """Run basic usage examples."""

    print("=== OVH Python Client Basic Usage Examples ===\n")

    # Create client (synchronizes with the API clock)
    print("1. Creating client...")
    try:
        client = OvhClient.from_env()
    except OvhClientError as e:
        print(f"   ✗ Could not create client: {e}")
        return 1
    print(f"   Client created for: {client.base_url}")
    print(f"   Clock offset: {client.time_delta} s\n")

    with client:
        # Example 1: Liveness probe
        print("2. Pinging API...")
        client.ping()
        print("   ✓ API is up\n")

        # Example 2: Consumer key handshake
        if not client.consumer_key:
            print("3. Requesting a consumer key...")
            grant = client.request_consumer_key(CredentialRequest(
                access_rules=[AccessRule(method="GET", path="/me")]
            ))
            print(f"   Consumer key: {grant.consumer_key} ({grant.state})")
            print(f"   Validate it at: {grant.validation_url}")
            input("   Press Enter once validated...")
            print()

        # Example 3: Signed GET request
        print("4. Calling GET /me...")
        try:
            me = client.get("/me", response_model=Me)
            print(f"   ✓ Hello {me.firstname} {me.name} ({me.nichandle})")
        except ApiError as e:
            print(f"   ✗ {e} (tracer: {e.tracer})")
        print()

    print("=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
