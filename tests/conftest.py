"""
Pytest configuration.

Registers the integration marker/option and provides an in-memory mail
transport wired into the app through dependency overrides.
"""

import pytest
from mybiz_mailer.api.deps import get_mail_transport
from mybiz_mailer.api.main import app
from mybiz_mailer.services.mail_transport import InMemoryMailTransport


def pytest_addoption(parser):
    """Add custom command-line options"""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against a real SMTP account"
    )


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test requiring a real SMTP account"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is specified"""
    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="need --run-integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture
def transport():
    """In-memory transport injected in place of SMTP for the duration of a test"""
    mail = InMemoryMailTransport()
    app.dependency_overrides[get_mail_transport] = lambda: mail
    yield mail
    app.dependency_overrides.pop(get_mail_transport, None)
