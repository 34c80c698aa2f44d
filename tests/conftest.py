"""Shared test fixtures."""

import pytest


class FakeDispatcher:
    """Records every request and answers with canned envelopes."""

    def __init__(self, responses: dict[str, dict] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, dict, bool]] = []

    def request(self, method, params=None, requires_auth=False) -> dict:
        self.calls.append((method, dict(params or {}), requires_auth))
        return self.responses.get(method, {"stat": "ok"})

    @property
    def last_params(self) -> dict:
        return self.calls[-1][1]


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    """Fake dispatcher that replies ``{"stat": "ok"}`` unless told otherwise."""
    return FakeDispatcher()


def make_size(label: str, width: int, height: int) -> dict:
    """Helper to create a getSizes size record."""
    return {
        "label": label,
        "width": width,
        "height": height,
        "source": f"https://live.staticflickr.com/65535/12345_abc_{label.lower()}.jpg",
        "url": f"https://www.flickr.com/photos/someone/12345/sizes/{label.lower()}/",
        "media": "photo",
    }


SIZES_ENVELOPE = {
    "sizes": {
        "canblog": 0,
        "canprint": 0,
        "candownload": 1,
        "size": [
            make_size("Square", 75, 75),
            make_size("Small", 240, 180),
            make_size("Medium", 500, 375),
            make_size("Large", 1024, 768),
        ],
    },
    "stat": "ok",
}
