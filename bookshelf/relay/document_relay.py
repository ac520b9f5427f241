"""
Remote document relay.

Streams a file (usually a book PDF) from a remote URL to the caller so
that the reader can display documents hosted on servers without CORS
headers or with broken certificates. The content is passed through
untouched; only the response headers are adjusted.
"""

from typing import Dict, Iterator, Optional

import requests

from ..core import get_config, get_logger, RelayError

logger = get_logger(__name__)


# Not forwarded: they describe the upstream connection, not the document
HOP_BY_HOP_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
})


class RelayResponse:
    """
    A streamed upstream response.

    Attributes:
        url: The remote URL.
        status_code: Upstream HTTP status.
        headers: Headers to send to the caller.
    """

    def __init__(self, url: str, response: requests.Response, headers: Dict[str, str], chunk_size: int):
        self.url = url
        self.status_code = response.status_code
        self.headers = headers
        self._response = response
        self._chunk_size = chunk_size

    @property
    def content_type(self) -> str:
        return self.headers.get("Content-Type", "")

    def iter_content(self) -> Iterator[bytes]:
        """Yield the body in chunks as it arrives."""
        for chunk in self._response.iter_content(chunk_size=self._chunk_size):
            if chunk:
                yield chunk

    def read(self) -> bytes:
        """Read the whole body and close the upstream connection."""
        try:
            return b"".join(self.iter_content())
        finally:
            self.close()

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> "RelayResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class DocumentRelay:
    """
    Fetches remote documents and relays them as a stream.

    Certificate verification follows relay.verify_ssl (off by default,
    since many book hosts serve expired or self-signed certificates).
    """

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize the relay with configuration.

        Args:
            session: HTTP session to use. Defaults to a new requests.Session.
        """
        config = get_config()
        self.timeout = config.relay.timeout_seconds
        self.verify_ssl = config.relay.verify_ssl
        self.chunk_size = config.relay.chunk_size
        self.default_content_type = config.relay.default_content_type
        self.session = session or requests.Session()

    def fetch(self, url: Optional[str]) -> RelayResponse:
        """
        Open a streamed request to a remote document.

        Args:
            url: Absolute http(s) URL of the document.

        Returns:
            RelayResponse; the caller must consume or close it.

        Raises:
            RelayError: 400 if url is missing, the upstream status if it
                is not a success, 500 if the request itself fails.
        """
        if not url or not url.strip():
            raise RelayError("Missing URL parameter", url=url, status_code=400)

        url = url.strip()

        try:
            response = self.session.get(
                url,
                stream=True,
                timeout=self.timeout,
                verify=self.verify_ssl
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Relay error for {url}: {e}")
            raise RelayError(str(e) or "Internal Server Error", url=url, status_code=500) from e

        if not response.ok:
            response.close()
            logger.warning(f"Upstream returned {response.status_code} for {url}")
            raise RelayError(
                f"Failed to fetch external resource: {response.reason}",
                url=url,
                status_code=response.status_code
            )

        headers = self._build_headers(response)

        logger.debug(f"Relaying {url} ({headers.get('Content-Type')})")

        return RelayResponse(url, response, headers, self.chunk_size)

    def _build_headers(self, response: requests.Response) -> Dict[str, str]:
        """Copy upstream headers, then force CORS and a content type."""
        # requests decodes gzip/deflate bodies, so the encoding no longer applies
        decoded = "content-encoding" in response.headers

        headers = {}
        for name, value in response.headers.items():
            lowered = name.lower()
            if lowered in HOP_BY_HOP_HEADERS or lowered == "content-encoding":
                continue
            if decoded and lowered == "content-length":
                continue
            headers[name] = value

        content_type = response.headers.get("content-type") or self.default_content_type
        for name in [name for name in headers if name.lower() in ("content-type", "access-control-allow-origin")]:
            del headers[name]

        headers["Access-Control-Allow-Origin"] = "*"
        headers["Content-Type"] = content_type

        return headers
