"""
Pytest configuration for the storefront services
"""

import os

# Selects the "testing" block of shared/configs/logging.yml
os.environ.setdefault("ENVIRONMENT", "testing")


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )
