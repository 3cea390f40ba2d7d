"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from libvault.core.models import TransportResponse


if TYPE_CHECKING:
    from libvault.core.ports import ProgressCallback


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, ports, and services")
    config.addinivalue_line("markers", "transport: Transport adapters (http, s3, filesystem)")
    config.addinivalue_line("markers", "cache: Verified cache adapter")
    config.addinivalue_line("markers", "progress: Rich progress integration")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


class FakeTransport:
    """In-memory TransportPort recording every requested URL.

    URLs without a registered body answer 404.
    """

    def __init__(self, responses: dict[str, TransportResponse] | None = None) -> None:
        self.responses: dict[str, TransportResponse] = dict(responses or {})
        self.requests: list[str] = []

    def serve(self, url: str, body: bytes, status: int = 200) -> None:
        self.responses[url] = TransportResponse(status=status, body=body)

    def get(
        self, url: str, progress: ProgressCallback | None = None
    ) -> TransportResponse:
        self.requests.append(url)
        response = self.responses.get(url, TransportResponse(status=404))
        if progress and response.ok:
            progress(len(response.body), len(response.body))
        return response


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Reusable fake transport adapter for testing.

    Implements TransportPort without any network I/O; register bodies with
    serve() and inspect requests afterwards.
    """
    return FakeTransport()
