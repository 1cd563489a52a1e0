import httpx
import pytest
from unittest.mock import MagicMock, patch

from savelink_bot.errors import BotFailure, FailureKind
from savelink_bot.retrieval.extract import ContentExtractor, parse_metadata
from savelink_bot.retrieval.fetch import Fetcher

TEST_PAGE = "<html><head><title>Test Page</title></head><body><p>Test content</p></body></html>"


def _respond_with(mock_httpx, text="", status_code=200, reason="OK", chunks=None):
    instance = mock_httpx.return_value.__enter__.return_value
    resp = instance.stream.return_value.__enter__.return_value
    resp.status_code = status_code
    resp.reason_phrase = reason
    resp.is_success = 200 <= status_code < 300
    resp.encoding = "utf-8"
    resp.iter_bytes.return_value = iter(chunks if chunks is not None else [text.encode("utf-8")])
    return instance


def test_fetch_url_success(mock_httpx):
    """
    WHY: Ensure we can download HTML content from a URL via HTTP GET.
    HOW: Mock `httpx.Client` to stream a 200 OK response with known HTML body.
    EXPECTED: The exact HTML string, fetched once with the 10s timeout.
    """
    instance = _respond_with(mock_httpx, text=TEST_PAGE)

    content = Fetcher().fetch_url("http://example.com")

    assert content == TEST_PAGE
    instance.stream.assert_called_once_with("GET", "http://example.com")
    assert mock_httpx.call_args.kwargs["timeout"] == 10.0


def test_fetch_url_non_success_status(mock_httpx):
    """
    WHY: A 404 page has nothing worth filing.
    HOW: Mock a 404 response.
    EXPECTED: EXTRACTION failure carrying status code and reason.
    """
    _respond_with(mock_httpx, status_code=404, reason="Not Found")

    with pytest.raises(BotFailure) as exc_info:
        Fetcher().fetch_url("https://example.com/missing")

    assert exc_info.value.kind is FailureKind.EXTRACTION
    assert exc_info.value.message == "HTTP 404: Not Found"


def test_fetch_url_timeout(mock_httpx):
    """
    WHY: Slow sites must not hold a request forever.
    HOW: Make the GET raise httpx.ReadTimeout.
    EXPECTED: EXTRACTION failure with the timeout as cause, and the client context is exited.
    """
    timeout = httpx.ReadTimeout("timed out")
    instance = mock_httpx.return_value.__enter__.return_value
    instance.stream.side_effect = timeout

    with pytest.raises(BotFailure) as exc_info:
        Fetcher(timeout=10.0).fetch_url("https://slow.example.com")

    assert exc_info.value.kind is FailureKind.EXTRACTION
    assert exc_info.value.message == "Request timed out after 10 seconds"
    assert exc_info.value.cause is timeout
    mock_httpx.return_value.__exit__.assert_called_once()


def test_fetch_url_slow_body_hits_deadline(mock_httpx):
    """
    WHY: A server trickling bytes never trips a per-read timeout, yet the whole fetch must stop at 10s.
    HOW: Stream three chunks while the clock reads 0s, 1s, then 12s.
    EXPECTED: EXTRACTION timeout after the second chunk; the stream and client are both closed.
    """
    instance = _respond_with(mock_httpx, chunks=[b"<html>", b"<body>", b"</body>"])

    with patch("savelink_bot.retrieval.fetch.time") as mock_time:
        mock_time.monotonic.side_effect = [0.0, 1.0, 12.0]
        with pytest.raises(BotFailure) as exc_info:
            Fetcher(timeout=10.0).fetch_url("https://trickle.example.com")

    assert exc_info.value.kind is FailureKind.EXTRACTION
    assert exc_info.value.message == "Request timed out after 10 seconds"
    instance.stream.return_value.__exit__.assert_called_once()
    mock_httpx.return_value.__exit__.assert_called_once()


def test_fetch_url_network_error(mock_httpx):
    instance = mock_httpx.return_value.__enter__.return_value
    instance.stream.side_effect = httpx.ConnectError("Network error")

    with pytest.raises(BotFailure) as exc_info:
        Fetcher().fetch_url("https://example.com")

    assert exc_info.value.kind is FailureKind.EXTRACTION
    assert "Network error" in exc_info.value.message


def test_extract_test_page(mock_httpx):
    """
    WHY: The basic page shape: a <title> and one paragraph.
    HOW: Run the extractor over the sample page.
    EXPECTED: Title from <title>, description from the first paragraph, URL verbatim.
    """
    _respond_with(mock_httpx, text=TEST_PAGE)

    result = ContentExtractor().extract("https://example.com")

    assert result.title == "Test Page"
    assert result.description == "Test content"
    assert result.source_url == "https://example.com"


@pytest.mark.parametrize("url", ["not-a-url", "ftp://example.com", ""])
def test_invalid_url_never_fetches(url):
    """
    WHY: Malformed input must never reach the network layer.
    HOW: Give the extractor a fetcher mock and a bad URL.
    EXPECTED: VALIDATION "Invalid URL format" and zero fetch calls.
    """
    fetcher = MagicMock()
    with pytest.raises(BotFailure) as exc_info:
        ContentExtractor(fetcher).extract(url)

    assert exc_info.value.kind is FailureKind.VALIDATION
    assert exc_info.value.message == "Invalid URL format"
    fetcher.fetch_url.assert_not_called()


def test_title_fallback_chain():
    """
    WHY: Many pages lack a <title>; social meta tags and headings are good substitutes.
    HOW: Parse pages that each miss the earlier sources.
    EXPECTED: og:title, then twitter:title, then <h1>, then "Untitled".
    """
    og = '<html><head><meta property="og:title" content="OG Title"><meta name="twitter:title" content="TW"></head></html>'
    tw = '<html><head><meta name="twitter:title" content="TW Title"></head><body><h1>Heading</h1></body></html>'
    h1 = "<html><body><h1> Heading </h1><h1>Second</h1></body></html>"
    empty = "<html><head><title>   </title></head><body></body></html>"

    assert parse_metadata(og, "https://a.com").title == "OG Title"
    assert parse_metadata(tw, "https://a.com").title == "TW Title"
    assert parse_metadata(h1, "https://a.com").title == "Heading"
    assert parse_metadata(empty, "https://a.com").title == "Untitled"


def test_description_fallback_chain():
    meta = '<html><head><meta name="description" content="Meta desc"><meta property="og:description" content="OG"></head><body><p>Para</p></body></html>'
    og = '<html><head><meta property="og:description" content="OG desc"></head><body><p>Para</p></body></html>'
    tw = '<html><head><meta name="twitter:description" content="TW desc"></head></html>'
    none = "<html><body><div>no paragraphs</div></body></html>"

    assert parse_metadata(meta, "https://a.com").description == "Meta desc"
    assert parse_metadata(og, "https://a.com").description == "OG desc"
    assert parse_metadata(tw, "https://a.com").description == "TW desc"
    assert parse_metadata(none, "https://a.com").description == "No description available"


def test_meta_content_used_as_published():
    """
    WHY: Meta tags are authored metadata; only a missing or empty one should fall back.
    HOW: Parse a page with an empty og:title and a padded twitter:title.
    EXPECTED: The empty tag is skipped, the padded one is used unchanged.
    """
    html = '<html><head><meta property="og:title" content=""><meta name="twitter:title" content=" Padded "></head></html>'
    assert parse_metadata(html, "https://a.com").title == " Padded "


def test_truncation():
    """
    WHY: GitHub titles and our issue bodies need bounded metadata.
    HOW: Parse a page with a 1000-char title and description.
    EXPECTED: Title cut to 200 chars, description to 500.
    """
    html = f'<html><head><title>{"T" * 1000}</title><meta name="description" content="{"D" * 1000}"></head></html>'
    result = parse_metadata(html, "https://a.com")
    assert result.title == "T" * 200
    assert result.description == "D" * 500


def test_parse_error_is_extraction_failure(monkeypatch):
    """
    WHY: Parser bugs should reach the user as a fetch failure, not a crash.
    HOW: Make parse_metadata raise.
    EXPECTED: EXTRACTION failure preserving the original error.
    """
    boom = RuntimeError("parser exploded")

    def explode(html, url):
        raise boom

    monkeypatch.setattr("savelink_bot.retrieval.extract.parse_metadata", explode)
    fetcher = MagicMock()
    fetcher.fetch_url.return_value = "<html></html>"

    with pytest.raises(BotFailure) as exc_info:
        ContentExtractor(fetcher).extract("https://example.com")

    assert exc_info.value.kind is FailureKind.EXTRACTION
    assert exc_info.value.cause is boom
