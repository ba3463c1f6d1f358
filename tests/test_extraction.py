"""Tests for file and URL content extraction."""
import io
import socket

import httpx
import pypdf
import pytest

from decision_lab.config import Settings
from decision_lab.extraction import (
    ContentExtractionError,
    ContentExtractor,
    html_to_text,
    validate_external_url,
)

ARTICLE = "<p>" + "Rivian is weighing an in-house battery plant against supplier contracts. " * 3 + "</p>"

# Names the tests use, pinned so nothing reaches a real DNS server.
# Numeric hosts still go through the real getaddrinfo, which parses them locally.
KNOWN_HOSTS = {
    "example.com": "93.184.216.34",
    "news.example.org": "93.184.216.35",
    "intranet.example.com": "10.0.0.8",
    "rebind.example.com": "127.0.0.1",
}


@pytest.fixture(autouse=True)
def fake_dns(monkeypatch):
    real_getaddrinfo = socket.getaddrinfo

    def getaddrinfo(host, port, *args, **kwargs):
        if host == "nowhere.example.com":
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        return real_getaddrinfo(KNOWN_HOSTS.get(host, host), port, *args, **kwargs)

    monkeypatch.setattr(socket, "getaddrinfo", getaddrinfo)


@pytest.fixture
def settings():
    return Settings(_env_file=None, ai_provider="none")


def extractor_for(settings, handler) -> ContentExtractor:
    client = httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
    return ContentExtractor(settings, client=client)


class TestUrlValidation:

    @pytest.mark.parametrize("url", [
        "https://example.com/case-study",
        "http://news.example.org/article?id=3",
        "https://93.184.216.34/page",
    ])
    def test_public_urls_pass(self, url):
        validate_external_url(url)

    @pytest.mark.parametrize("url", [
        "ftp://example.com/file",
        "file:///etc/passwd",
        "http://localhost:8000",
        "http://127.0.0.1/",
        "http://[::1]/",
        "http://10.1.2.3/",
        "http://172.20.0.5/",
        "http://192.168.1.1/",
        "http://169.254.169.254/latest/meta-data",
        "http://0.0.0.0/",
        "http://printer.local/",
        "http://service.internal/",
        "http://metadata.google.internal/",
        "http://metadata/",
        "http://2130706433/",
        "http://0x7f000001/",
        "http://127.1/",
        "http://0177.0.0.1/",
        "http://[::ffff:127.0.0.1]/",
        "http://intranet.example.com/wiki",
        "http://rebind.example.com/",
        "not a url",
    ])
    def test_internal_or_malformed_urls_rejected(self, url):
        with pytest.raises(ContentExtractionError):
            validate_external_url(url)

    def test_unresolvable_host_rejected(self):
        with pytest.raises(ContentExtractionError, match="resolve"):
            validate_external_url("https://nowhere.example.com/case")


class TestHtmlToText:

    def test_scripts_and_styles_removed(self):
        html = (
            "<html><head><style>p {color: red}</style><script>track()</script></head>"
            "<body><h1>Title</h1><p>Body &amp; more</p><noscript>enable js</noscript></body></html>"
        )
        assert html_to_text(html) == "Title Body & more"


class TestUploads:

    def test_text_upload(self, settings):
        extractor = ContentExtractor(settings)
        text = extractor.from_upload(b"x" * 150, "text/plain")
        assert text == "x" * 150

    def test_upload_too_large(self, settings):
        settings.max_upload_bytes = 1024
        extractor = ContentExtractor(settings)
        with pytest.raises(ContentExtractionError, match="File too large"):
            extractor.from_upload(b"x" * 2048, "text/plain")

    def test_text_is_truncated(self, settings):
        extractor = ContentExtractor(settings)
        text = extractor.from_upload(b"y" * 60_000, "text/plain")
        assert len(text) == 50_000

    def test_too_little_text(self, settings):
        extractor = ContentExtractor(settings)
        with pytest.raises(ContentExtractionError, match="enough text"):
            extractor.from_upload(b"short", "text/plain")

    def test_blank_pdf_has_no_text(self, settings):
        writer = pypdf.PdfWriter()
        writer.add_blank_page(width=72, height=72)
        buffer = io.BytesIO()
        writer.write(buffer)

        extractor = ContentExtractor(settings)
        with pytest.raises(ContentExtractionError, match="enough text"):
            extractor.from_upload(buffer.getvalue(), "application/pdf")

    def test_corrupt_pdf(self, settings):
        extractor = ContentExtractor(settings)
        with pytest.raises(ContentExtractionError):
            extractor.from_upload(b"this is not a pdf at all", "application/pdf")


class TestUrlFetch:

    def test_html_page(self, settings):
        def handler(request):
            return httpx.Response(200, html=ARTICLE)

        text = extractor_for(settings, handler).from_url("https://example.com/rivian")

        assert text.startswith("Rivian is weighing")
        assert "<p>" not in text

    def test_error_status(self, settings):
        extractor = extractor_for(settings, lambda request: httpx.Response(403))

        with pytest.raises(ContentExtractionError, match="Website returned error 403"):
            extractor.from_url("https://example.com/blocked")

    def test_network_failure(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ContentExtractionError, match="Failed to fetch"):
            extractor_for(settings, handler).from_url("https://example.com/down")

    def test_redirect_to_internal_host_blocked(self, settings):
        def handler(request):
            if request.url.host == "example.com":
                return httpx.Response(302, headers={"location": "http://169.254.169.254/latest"})
            return httpx.Response(200, html=ARTICLE)

        with pytest.raises(ContentExtractionError, match="internal network"):
            extractor_for(settings, handler).from_url("https://example.com/redirect")

    def test_internal_url_never_fetched(self, settings):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, html=ARTICLE)

        with pytest.raises(ContentExtractionError):
            extractor_for(settings, handler).from_url("http://localhost/admin")
        assert calls == []

    @pytest.mark.parametrize("url", [
        "http://2130706433:8765/secret.html",
        "http://127.1:8765/secret.html",
    ])
    def test_shorthand_loopback_never_fetched(self, settings, url):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, html=ARTICLE)

        with pytest.raises(ContentExtractionError, match="internal network"):
            extractor_for(settings, handler).from_url(url)
        assert calls == []

    def test_redirect_to_name_resolving_inside_blocked(self, settings):
        def handler(request):
            if request.url.host == "example.com":
                return httpx.Response(302, headers={"location": "http://intranet.example.com/wiki"})
            return httpx.Response(200, html=ARTICLE)

        with pytest.raises(ContentExtractionError, match="internal network"):
            extractor_for(settings, handler).from_url("https://example.com/redirect")
