"""Tests for the httpx-backed FlickrClient."""

import httpx
import pytest
from tenacity import wait_none

from flickr_photos.client import FlickrClient, FlickrStatus
from flickr_photos.exceptions import FlickrAuthError

BASE = "https://api.flickr.test/services/rest/"


def make_client(handler, **kwargs) -> FlickrClient:
    kwargs.setdefault("oauth_token", "")
    kwargs.setdefault("oauth_token_secret", "")
    return FlickrClient(
        api_key="key",
        api_secret="secret",
        base_url=BASE,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.fixture(autouse=True)
def no_env_tokens(monkeypatch):
    monkeypatch.setattr("flickr_photos.client.FLICKR_OAUTH_TOKEN", "")
    monkeypatch.setattr("flickr_photos.client.FLICKR_OAUTH_TOKEN_SECRET", "")


def test_requires_api_key(monkeypatch):
    monkeypatch.setattr("flickr_photos.client.FLICKR_API_KEY", "")
    with pytest.raises(ValueError):
        FlickrClient()


def test_read_call_is_get_with_json_params():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"photo": {"id": "42"}, "stat": "ok"})

    data = make_client(handler).request("flickr.photos.getInfo", {"photo_id": 42})
    assert data == {"photo": {"id": "42"}, "stat": "ok"}
    request = seen[0]
    assert request.method == "GET"
    assert dict(request.url.params) == {
        "photo_id": "42",
        "method": "flickr.photos.getInfo",
        "api_key": "key",
        "format": "json",
        "nojsoncallback": "1",
    }
    assert "authorization" not in request.headers


def test_fail_envelope_is_returned():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"stat": "fail", "code": 1, "message": "Photo not found"})

    data = make_client(handler).request("flickr.photos.getInfo", {"photo_id": "1"})
    assert data["stat"] == "fail"


def test_http_error_propagates():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="oops")

    with pytest.raises(httpx.HTTPStatusError):
        make_client(handler).request("flickr.photos.getInfo", {"photo_id": "1"})


def test_write_call_without_token_raises_before_sending():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"stat": "ok"})

    with pytest.raises(FlickrAuthError):
        make_client(handler).request("flickr.photos.setTags", {"photo_id": "1"}, True)
    assert seen == []


def test_write_call_is_signed_post():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"stat": "ok"})

    client = make_client(handler, oauth_token="token", oauth_token_secret="token-secret")
    assert client.can_write
    data = client.request("flickr.photos.setTags", {"photo_id": "1", "tags": "a b"}, True)
    assert data == {"stat": "ok"}
    request = seen[0]
    assert request.method == "POST"
    assert request.headers["authorization"].startswith("OAuth ")
    assert 'oauth_token="token"' in request.headers["authorization"]
    body = dict(httpx.QueryParams(request.content.decode()))
    assert body["method"] == "flickr.photos.setTags"
    assert body["tags"] == "a b"


def test_timeouts_are_retried(monkeypatch):
    monkeypatch.setattr(FlickrClient._send.retry, "wait", wait_none())
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) < 3:
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, json={"stat": "ok"})

    assert make_client(handler).request("flickr.photos.getRecent") == {"stat": "ok"}
    assert len(attempts) == 3


def test_timeouts_give_up_after_three_attempts(monkeypatch):
    monkeypatch.setattr(FlickrClient._send.retry, "wait", wait_none())
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(httpx.ReadTimeout):
        make_client(handler).request("flickr.photos.getRecent")
    assert len(attempts) == 3


def test_status_from_envelope():
    assert FlickrStatus.from_envelope({"stat": "ok"}) == FlickrStatus(ok=True)
    assert FlickrStatus.from_envelope(
        {"stat": "fail", "code": "99", "message": "Insufficient permissions"}
    ) == FlickrStatus(ok=False, code=99, message="Insufficient permissions")
    assert FlickrStatus.from_envelope({}) == FlickrStatus(ok=False)
    assert FlickrStatus.from_envelope(None) == FlickrStatus(ok=False)
