"""
Tests for the remote document relay.

Upstream responses are real requests.Response objects backed by an
in-memory body; no network access is made.
"""

import io
import pytest
import requests
from requests.structures import CaseInsensitiveDict
from unittest.mock import MagicMock

from bookshelf.core.config_loader import get_config
from bookshelf.core.exceptions import RelayError
from bookshelf.relay.document_relay import DocumentRelay, RelayResponse


PDF_URL = "https://books.example.com/aranyak.pdf"
PDF_BODY = b"%PDF-1.4 fake book body"


def make_response(status_code: int = 200, body: bytes = PDF_BODY, headers: dict = None,
                  reason: str = "OK") -> requests.Response:
    """Build a streamed requests.Response without a network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = PDF_URL
    response.raw = io.BytesIO(body)
    response.headers = CaseInsensitiveDict(headers or {})
    return response


@pytest.fixture
def session() -> MagicMock:
    """A session whose get() is controlled by each test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def relay(temp_config, reset_config_singleton, session) -> DocumentRelay:
    """Create a relay using the temp config and the mock session."""
    get_config(temp_config)
    return DocumentRelay(session=session)


class TestFetch:
    """Tests for DocumentRelay.fetch."""

    def test_streams_body(self, relay: DocumentRelay, session: MagicMock):
        """Test that the upstream body is passed through unchanged."""
        session.get.return_value = make_response(headers={"Content-Type": "application/pdf"})

        with relay.fetch(PDF_URL) as response:
            assert isinstance(response, RelayResponse)
            assert response.status_code == 200
            body = response.read()

        assert body == PDF_BODY

    def test_body_in_chunks(self, relay: DocumentRelay, session: MagicMock):
        """Test that iter_content yields chunks of the configured size."""
        session.get.return_value = make_response(body=b"abcdefghij")

        chunks = list(relay.fetch(PDF_URL).iter_content())

        assert chunks == [b"abcd", b"efgh", b"ij"]

    def test_request_options(self, relay: DocumentRelay, session: MagicMock):
        """Test that the request is streamed with the configured timeout and SSL policy."""
        session.get.return_value = make_response()

        relay.fetch(PDF_URL)

        session.get.assert_called_once_with(PDF_URL, stream=True, timeout=5, verify=False)

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_missing_url(self, relay: DocumentRelay, session: MagicMock, url):
        """Test that a missing URL is a 400 without any request."""
        with pytest.raises(RelayError) as exc_info:
            relay.fetch(url)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Missing URL parameter"
        session.get.assert_not_called()

    def test_upstream_error_status(self, relay: DocumentRelay, session: MagicMock):
        """Test that an upstream 404 is reported with its status and reason."""
        session.get.return_value = make_response(status_code=404, reason="Not Found")

        with pytest.raises(RelayError) as exc_info:
            relay.fetch(PDF_URL)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Failed to fetch external resource: Not Found"
        assert exc_info.value.url == PDF_URL

    def test_connection_failure(self, relay: DocumentRelay, session: MagicMock):
        """Test that a failed request becomes a 500."""
        session.get.side_effect = requests.exceptions.ConnectionError("connection refused")

        with pytest.raises(RelayError) as exc_info:
            relay.fetch(PDF_URL)

        assert exc_info.value.status_code == 500
        assert "connection refused" in exc_info.value.message

    def test_timeout(self, relay: DocumentRelay, session: MagicMock):
        """Test that a timeout also becomes a 500."""
        session.get.side_effect = requests.exceptions.Timeout()

        with pytest.raises(RelayError) as exc_info:
            relay.fetch(PDF_URL)

        assert exc_info.value.status_code == 500


class TestHeaders:
    """Tests for the headers sent back to the caller."""

    def test_cors_header_forced(self, relay: DocumentRelay, session: MagicMock):
        """Test that any origin may read the document."""
        session.get.return_value = make_response(headers={
            "Content-Type": "application/pdf",
            "Access-Control-Allow-Origin": "https://only.example.com",
        })

        headers = relay.fetch(PDF_URL).headers

        assert headers["Access-Control-Allow-Origin"] == "*"
        assert list(headers).count("Access-Control-Allow-Origin") == 1

    def test_upstream_content_type_kept(self, relay: DocumentRelay, session: MagicMock):
        """Test that the upstream content type is forwarded."""
        session.get.return_value = make_response(headers={"content-type": "application/epub+zip"})

        response = relay.fetch(PDF_URL)

        assert response.content_type == "application/epub+zip"

    def test_default_content_type(self, relay: DocumentRelay, session: MagicMock):
        """Test that a missing content type defaults to PDF."""
        session.get.return_value = make_response(headers={})

        assert relay.fetch(PDF_URL).content_type == "application/pdf"

    def test_hop_by_hop_headers_dropped(self, relay: DocumentRelay, session: MagicMock):
        """Test that connection-level headers are not forwarded."""
        session.get.return_value = make_response(headers={
            "Connection": "keep-alive",
            "Transfer-Encoding": "chunked",
            "Content-Length": str(len(PDF_BODY)),
            "Last-Modified": "Tue, 01 Oct 2024 10:00:00 GMT",
        })

        headers = relay.fetch(PDF_URL).headers

        assert "Connection" not in headers
        assert "Transfer-Encoding" not in headers
        assert headers["Content-Length"] == str(len(PDF_BODY))
        assert headers["Last-Modified"] == "Tue, 01 Oct 2024 10:00:00 GMT"

    def test_encoded_length_dropped(self, relay: DocumentRelay, session: MagicMock):
        """Test that encoding and its length are dropped for decoded bodies."""
        session.get.return_value = make_response(headers={
            "Content-Encoding": "gzip",
            "Content-Length": "10",
        })

        headers = relay.fetch(PDF_URL).headers

        assert "Content-Encoding" not in headers
        assert "Content-Length" not in headers
