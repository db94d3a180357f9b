"""Shared fixtures for integration tests.

Live listing tests run only with RUN_PAGEWALK_NETWORK_TESTS=1 and need an
endpoint and token from the environment. Local server tests always run.
"""

import os

import pytest


@pytest.fixture
def live_listing() -> tuple[str, str]:
    """URL and access token of a real listing, from the environment."""
    url = os.environ.get("PAGEWALK_TEST_LISTING_URL")
    token = os.environ.get("PAGEWALK_TEST_ACCESS_TOKEN")
    if not url or not token:
        pytest.skip("Set PAGEWALK_TEST_LISTING_URL and PAGEWALK_TEST_ACCESS_TOKEN")
    return url, token
