"""Tests for the page fetcher."""
import httpx
import pytest

from summarizer.core.result import Err, ErrorKind, Ok
from summarizer.services.fetcher import PageFetcher, validate_absolute_url


def test_fetch_returns_body_and_status(fetcher_for, site_requests):
    result = fetcher_for(body="<p>hi</p>").fetch("https://example.com/page")

    assert isinstance(result, Ok)
    assert result.value.status_code == 200
    assert result.value.text == "<p>hi</p>"
    assert len(site_requests) == 1
    assert site_requests[0].method == "GET"
    assert site_requests[0].headers["user-agent"] == "Mozilla/5.0 (compatible; UrlSummarizerBot/1.0)"


def test_non_2xx_status_is_a_fetch_error(fetcher_for):
    result = fetcher_for(body="gone", status=404).fetch("https://example.com/missing")

    assert isinstance(result, Err)
    assert result.kind is ErrorKind.FETCH
    assert result.status_code == 500
    assert result.message == "Failed to scrape URL content"
    assert result.details == "HTTP 404: Not Found"


def test_network_error_is_a_fetch_error(fetcher_for):
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    result = fetcher_for(handler=refuse).fetch("https://unreachable.test/")

    assert isinstance(result, Err)
    assert result.kind is ErrorKind.FETCH
    assert "Connection refused" in result.details


@pytest.mark.parametrize("url", ["", "example.com", "/relative/path", "ftp://example.com/file", "http://"])
def test_invalid_url_fails_before_any_request(fetcher_for, site_requests, url):
    result = fetcher_for().fetch(url)

    assert isinstance(result, Err)
    assert result.kind is ErrorKind.FETCH
    assert result.details.startswith("Invalid URL")
    assert site_requests == []


def test_redirects_are_followed(fetcher_for):
    def handler(request):
        if request.url.path == "/old":
            return httpx.Response(301, headers={"location": "https://example.com/new"})
        return httpx.Response(200, text="<p>moved here</p>")

    result = fetcher_for(handler=handler).fetch("https://example.com/old")

    assert isinstance(result, Ok)
    assert result.value.text == "<p>moved here</p>"


def test_validate_absolute_url_accepts_http_and_https():
    assert validate_absolute_url("http://example.com") is None
    assert validate_absolute_url("https://example.com/a?b=c") is None


def test_default_client_is_created_when_none_given():
    fetcher = PageFetcher("TestBot/1.0")
    try:
        assert fetcher.client.follow_redirects is True
    finally:
        fetcher.close()
