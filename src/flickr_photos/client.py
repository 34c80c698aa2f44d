"""Flickr REST API client."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import httpx
from authlib.integrations.httpx_client import OAuth1Auth
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from flickr_photos.config import (
    FLICKR_API_BASE,
    FLICKR_API_KEY,
    FLICKR_API_SECRET,
    FLICKR_OAUTH_TOKEN,
    FLICKR_OAUTH_TOKEN_SECRET,
    FLICKR_TIMEOUT,
)
from flickr_photos.exceptions import FlickrAuthError

logger = logging.getLogger(__name__)


class RequestDispatcher(Protocol):
    """Sends one Flickr API method call and returns the decoded reply envelope."""

    def request(
        self,
        method: str,
        params: Mapping[str, str | int] | None = None,
        requires_auth: bool = False,
    ) -> dict: ...


@dataclass(frozen=True)
class FlickrStatus:
    """Status part of a reply envelope."""

    ok: bool
    code: int | None = None
    message: str | None = None

    @classmethod
    def from_envelope(cls, envelope: Mapping | None) -> "FlickrStatus":
        """Read ``stat``/``code``/``message`` from a decoded reply.

        A missing, empty or non-mapping envelope counts as not ok.
        """
        if not isinstance(envelope, Mapping) or not envelope:
            return cls(ok=False)
        code = envelope.get("code")
        return cls(
            ok=envelope.get("stat") == "ok",
            code=int(code) if code is not None else None,
            message=envelope.get("message"),
        )


class FlickrClient:
    """Client for Flickr REST API.

    Read calls are plain GET requests carrying the API key. Write calls are
    POSTed and signed with OAuth 1.0a using the configured access token.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        oauth_token: str | None = None,
        oauth_token_secret: str | None = None,
        timeout: int | None = None,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or FLICKR_API_KEY
        if not self.api_key:
            raise ValueError("Flickr API key is required. Set FLICKR_API_KEY in .env file.")
        self.api_secret = api_secret or FLICKR_API_SECRET
        self.oauth_token = oauth_token or FLICKR_OAUTH_TOKEN
        self.oauth_token_secret = oauth_token_secret or FLICKR_OAUTH_TOKEN_SECRET
        self.timeout = timeout or FLICKR_TIMEOUT
        self.base_url = base_url or FLICKR_API_BASE
        self._transport = transport

    @property
    def can_write(self) -> bool:
        """Whether OAuth credentials for write calls are available."""
        return bool(self.oauth_token and self.oauth_token_secret)

    def _oauth(self) -> OAuth1Auth:
        return OAuth1Auth(
            client_id=self.api_key,
            client_secret=self.api_secret,
            token=self.oauth_token,
            token_secret=self.oauth_token_secret,
        )

    def request(
        self,
        method: str,
        params: Mapping[str, str | int] | None = None,
        requires_auth: bool = False,
    ) -> dict:
        """Make a Flickr API call and return the parsed JSON envelope.

        Envelopes with ``stat`` other than ``ok`` are returned, not raised;
        HTTP errors raise ``httpx.HTTPStatusError``.
        """
        if requires_auth and not self.can_write:
            raise FlickrAuthError(
                f"{method} requires FLICKR_OAUTH_TOKEN and FLICKR_OAUTH_TOKEN_SECRET"
            )
        payload = {key: str(value) for key, value in (params or {}).items()}
        payload.update(
            {
                "method": method,
                "api_key": self.api_key,
                "format": "json",
                "nojsoncallback": "1",
            }
        )
        data = self._send(payload, requires_auth)
        status = FlickrStatus.from_envelope(data)
        if not status.ok:
            logger.warning("%s failed: code=%s message=%s", method, status.code, status.message)
        return data

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, max=10),
        retry=retry_if_exception_type(httpx.TimeoutException),
        reraise=True,
    )
    def _send(self, payload: dict[str, str], signed: bool) -> dict:
        logger.debug("%s %s", "POST" if signed else "GET", payload["method"])
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            if signed:
                resp = client.post(self.base_url, data=payload, auth=self._oauth())
            else:
                resp = client.get(self.base_url, params=payload)
            resp.raise_for_status()
        return resp.json()


def unwrap(envelope: object, key: str):
    """Return ``envelope[key]``, or None when the reply has no such entry."""
    if not isinstance(envelope, Mapping):
        return None
    return envelope.get(key)
