"""flickr.photosets.* methods."""

import time
from collections.abc import Sequence

from flickr_photos.client import RequestDispatcher, unwrap


def _join(values: Sequence[str | int] | str | None) -> str | None:
    if values is None or isinstance(values, str):
        return values
    return ",".join(str(value) for value in values)


class PhotosetsApi:
    """Photoset methods of the Flickr API."""

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self.dispatcher = dispatcher

    def get_list(
        self,
        user_id: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        primary_photo_extras: Sequence[str] | str | None = None,
        photo_ids: Sequence[str | int] | str | None = None,
    ) -> dict | None:
        """Return one page of a user's photosets.

        When ``photo_ids`` is given, every photoset carries a
        ``has_requested_photos`` list naming which of those photos it holds.
        """
        args = {
            "user_id": user_id,
            "page": page,
            "per_page": per_page,
            "primary_photo_extras": _join(primary_photo_extras),
            "photo_ids": _join(photo_ids),
        }
        envelope = self.dispatcher.request(
            "flickr.photosets.getList",
            {key: value for key, value in args.items() if value is not None},
        )
        return unwrap(envelope, "photosets")

    def list_all(self, user_id: str, pause: float = 0.1) -> list[dict]:
        """List all photosets for a user, across all pages."""
        photosets: list[dict] = []
        page = 1
        while True:
            listing = self.get_list(user_id=user_id, page=page, per_page=500)
            if listing is None:
                break
            photosets.extend(listing.get("photoset", []))
            if page >= int(listing.get("pages", 1)):
                break
            page += 1
            time.sleep(pause)
        return photosets
