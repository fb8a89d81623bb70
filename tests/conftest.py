"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from underwriting.main import app
from underwriting.calculations.assumptions import Assumptions


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def default_assumptions():
    """The reference deal."""
    return Assumptions()


@pytest.fixture
def step_up_assumptions():
    """Reference deal with 10% revenue step-ups every 5 years."""
    return Assumptions(growth_mode="StepUp", step_up_pct=10.0, step_up_frequency_years=5)
