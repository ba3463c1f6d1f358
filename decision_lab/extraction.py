# decision_lab/extraction.py
"""Turn uploaded files and URLs into plain scenario text.

PDFs are read with pypdf, HTML pages are flattened with BeautifulSoup, and
URL fetches are restricted to http(s) hosts that resolve to public addresses.
"""
import io
import ipaddress
import logging
import re
import socket
from typing import Optional
from urllib.parse import urlsplit

import httpx
import pypdf
from bs4 import BeautifulSoup
from pypdf.errors import PdfReadError

from decision_lab.config import Settings

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

BLOCKED_HOSTNAMES = {"localhost", "metadata", "metadata.google.internal"}
BLOCKED_SUFFIXES = (".local", ".internal", ".localhost")

BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
}


class ContentExtractionError(Exception):
    """The file or URL could not be turned into usable text."""


def resolve_host(hostname: str) -> set:
    """Every address the system resolver maps ``hostname`` to.

    Goes through getaddrinfo like the HTTP client does, so shorthand IPv4
    forms such as ``2130706433`` or ``127.1`` come back as the real address.
    """
    try:
        infos = socket.getaddrinfo(hostname, None)
    except (socket.gaierror, UnicodeError) as e:
        raise ContentExtractionError("Could not resolve the URL's host") from e

    addresses = set()
    for info in infos:
        address = ipaddress.ip_address(info[4][0].split("%", 1)[0])
        if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
            address = address.ipv4_mapped
        addresses.add(address)
    return addresses


def is_internal_address(address) -> bool:
    return (
        address.is_loopback
        or address.is_private
        or address.is_link_local
        or address.is_unspecified
        or address.is_reserved
    )


def validate_external_url(url: str) -> None:
    """Reject anything but http(s) URLs whose host resolves only to public addresses."""
    try:
        parts = urlsplit(url)
        hostname = (parts.hostname or "").lower()
    except ValueError as e:
        raise ContentExtractionError("Invalid URL format") from e

    if parts.scheme not in ("http", "https"):
        raise ContentExtractionError("Only HTTP and HTTPS URLs are allowed")
    if not hostname:
        raise ContentExtractionError("Invalid URL format")

    if hostname in BLOCKED_HOSTNAMES or hostname.endswith(BLOCKED_SUFFIXES):
        raise ContentExtractionError("Cannot fetch from internal hostnames")

    if any(is_internal_address(address) for address in resolve_host(hostname)):
        raise ContentExtractionError("Cannot fetch from internal network addresses")


def pdf_to_text(data: bytes) -> str:
    try:
        reader = pypdf.PdfReader(io.BytesIO(data))
        text = ""
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text += page_text + "\n"
    except PdfReadError as e:
        raise ContentExtractionError("Could not read the PDF file") from e
    return text


def html_to_text(html: str) -> str:
    """Visible text of an HTML page, scripts and styles removed."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(separator=" ", strip=True)
    return re.sub(r"\s+", " ", text).strip()


class ContentExtractor:
    """Extract scenario text from uploads or public web pages."""

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None):
        self.settings = settings
        self.client = client or httpx.Client(
            timeout=settings.fetch_timeout_seconds,
            follow_redirects=True,
            headers=BROWSER_HEADERS,
        )
        # Redirect targets go through the same host check as the requested URL.
        self.client.event_hooks = {
            "request": [self._guard_request],
            "response": self.client.event_hooks.get("response", []),
        }

    @staticmethod
    def _guard_request(request: httpx.Request) -> None:
        validate_external_url(str(request.url))

    def from_upload(self, data: bytes, content_type: Optional[str]) -> str:
        if len(data) > self.settings.max_upload_bytes:
            limit_mb = self.settings.max_upload_bytes // (1024 * 1024)
            raise ContentExtractionError(f"File too large. Maximum size is {limit_mb}MB.")

        if content_type == PDF_CONTENT_TYPE:
            text = pdf_to_text(data)
        else:
            text = data.decode("utf-8", errors="replace")
        return self._finish(text)

    def from_url(self, url: str) -> str:
        validate_external_url(url)
        try:
            response = self.client.get(url)
        except httpx.HTTPError as e:
            logger.error("URL fetch error for %s: %s", url, e)
            raise ContentExtractionError(
                "Failed to fetch content from URL. The site may be blocking automated "
                "requests, or the URL may be invalid."
            ) from e

        if response.is_error:
            logger.error("URL fetch failed with status %s for %s", response.status_code, url)
            raise ContentExtractionError(
                f"Website returned error {response.status_code}. "
                "The site may be blocking automated requests."
            )

        if PDF_CONTENT_TYPE in response.headers.get("content-type", ""):
            text = pdf_to_text(response.content)
        else:
            text = html_to_text(response.text)
        return self._finish(text)

    def _finish(self, text: str) -> str:
        text = text[: self.settings.max_extracted_chars]
        if len(text.strip()) < self.settings.min_extracted_chars:
            raise ContentExtractionError(
                "Could not extract enough text from the provided source. "
                "Please try a different file or URL."
            )
        return text

    def close(self) -> None:
        self.client.close()
