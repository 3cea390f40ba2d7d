"""Unit tests for HttpTransport adapter."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from libvault.adapters.transport import HttpTransport
from libvault.core.exceptions import TransportError


URL = "https://libraries.example/org/ow2/asm/asm/9.2/asm-9.2.jar"


def fake_session(status: int = 200, chunks: list[bytes] | None = None, headers=None):
    """Build a requests.Session mock returning one streamed response."""
    response = MagicMock()
    response.status_code = status
    response.headers = headers if headers is not None else {}
    response.iter_content.return_value = iter(chunks or [])
    response.__enter__.return_value = response
    session = MagicMock(spec=requests.Session)
    session.get.return_value = response
    return session


@pytest.mark.transport
@pytest.mark.tra("Adapter.HttpTransport")
@pytest.mark.tier(1)
class TestHttpTransport:
    """Tests for HTTP downloads through requests."""

    def test_returns_body_for_200(self) -> None:
        """A 200 response body is assembled from streamed chunks."""
        session = fake_session(chunks=[b"ab", b"cd"])

        response = HttpTransport(session=session).get(URL)

        assert response.status == 200
        assert response.body == b"abcd"
        session.get.assert_called_once_with(URL, stream=True, timeout=None)

    def test_timeout_is_forwarded(self) -> None:
        """The configured timeout reaches requests."""
        session = fake_session()

        HttpTransport(session=session, timeout=5.0).get(URL)

        session.get.assert_called_once_with(URL, stream=True, timeout=5.0)

    @pytest.mark.parametrize("status", [404, 500, 304])
    def test_non_200_is_returned_without_body(self, status: int) -> None:
        """Other statuses are returned, not raised, and the body is not read."""
        session = fake_session(status=status, chunks=[b"error page"])

        response = HttpTransport(session=session).get(URL)

        assert response.status == status
        assert response.body == b""
        session.get.return_value.iter_content.assert_not_called()

    def test_progress_uses_content_length(self) -> None:
        """Progress totals come from Content-Length."""
        session = fake_session(chunks=[b"ab", b"cd"], headers={"Content-Length": "4"})
        calls: list[tuple[int, int]] = []

        HttpTransport(session=session).get(URL, progress=lambda n, t: calls.append((n, t)))

        assert calls == [(2, 4), (4, 4)]

    def test_progress_without_content_length(self) -> None:
        """Unknown length reports a total of 0."""
        session = fake_session(chunks=[b"abc"])
        calls: list[tuple[int, int]] = []

        HttpTransport(session=session).get(URL, progress=lambda n, t: calls.append((n, t)))

        assert calls == [(3, 0)]

    def test_connection_error_raises_transport_error(self) -> None:
        """requests exceptions are wrapped in TransportError."""
        session = MagicMock(spec=requests.Session)
        error = requests.ConnectionError("refused")
        session.get.side_effect = error

        with pytest.raises(TransportError) as exc_info:
            HttpTransport(session=session).get(URL)

        assert exc_info.value.url == URL
        assert exc_info.value.cause is error
        assert exc_info.value.__cause__ is error

    def test_broken_stream_raises_transport_error(self) -> None:
        """Errors while streaming the body are wrapped too."""
        session = fake_session()
        session.get.return_value.iter_content.side_effect = requests.exceptions.ChunkedEncodingError(
            "broken"
        )

        with pytest.raises(TransportError):
            HttpTransport(session=session).get(URL)

    def test_creates_default_session(self) -> None:
        """Without a session, a requests.Session is created."""
        transport = HttpTransport()

        assert isinstance(transport._session, requests.Session)
