"""Pytest fixtures for BillingDesk tests."""

import pytest
from fastapi.testclient import TestClient

from billingdesk.main import create_app


@pytest.fixture(scope="function")
def client():
    """API client over a fresh app instance (no persistence, nothing to reset)."""
    with TestClient(create_app()) as c:
        yield c
