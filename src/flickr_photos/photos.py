"""flickr.photos.* methods."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from flickr_photos.client import FlickrStatus, RequestDispatcher, unwrap
from flickr_photos.exceptions import InvalidArgument
from flickr_photos.photosets import PhotosetsApi

# Size suffixes for static photo URLs, see https://www.flickr.com/services/api/misc.urls.html
SIZE_SMALL_SQUARE = "s"  # 75x75
SIZE_LARGE_SQUARE = "q"  # 150x150
SIZE_THUMBNAIL = "t"  # 100 on longest side
SIZE_SMALL_240 = "m"
SIZE_SMALL_320 = "n"
SIZE_MEDIUM_500 = "-"  # no suffix in the URL
SIZE_MEDIUM_640 = "z"
SIZE_MEDIUM_800 = "c"
SIZE_LARGE_1024 = "b"
SIZE_LARGE_1600 = "h"
SIZE_LARGE_2048 = "k"
SIZE_ORIGINAL = "o"

# date_taken_granularity values accepted by flickr.photos.setDates
GRANULARITY_SECOND = 0
GRANULARITY_MONTH = 4
GRANULARITY_YEAR = 6
GRANULARITY_CIRCA = 8

ORIGINAL_LABEL = "Original"

DATE_TAKEN_FORMAT = "%Y-%m-%d %H:%M:%S"

PhotoId = str | int
TagSet = Sequence[str] | str


def encode_tags(tags: TagSet) -> str:
    """Encode tags as the space-separated string Flickr expects.

    A string is assumed to be encoded already and is returned unchanged.
    Double quotes cannot appear in a tag, so they are removed; tags that
    contain a space are then wrapped in double quotes.
    """
    if isinstance(tags, str):
        return tags
    encoded = []
    for tag in tags:
        clean = tag.replace('"', "")
        encoded.append(f'"{clean}"' if " " in clean else clean)
    return " ".join(encoded)


def select_largest_size(sizes: Iterable[Mapping] | None) -> Mapping | None:
    """Pick the best rendition out of a ``sizes.size`` listing.

    The "Original" rendition always wins. Otherwise the largest
    width * height wins, the first one listed on ties.
    """
    largest = None
    largest_area = -1
    for size in sizes or ():
        if size.get("label") == ORIGINAL_LABEL:
            return size
        area = int(size["width"]) * int(size["height"])
        if area > largest_area:
            largest, largest_area = size, area
    return largest


def build_photo_url(photo: Mapping, size: str = SIZE_LARGE_1024) -> str:
    """Build the static Flickr photo URL for a photo record.

    Size suffixes: s=75sq, q=150sq, t=100, m=240, n=320, -=500, z=640,
    c=800, b=1024, h=1600, k=2048, o=original
    """
    base = f"https://live.staticflickr.com/{photo['server']}/{photo['id']}"
    if size == SIZE_ORIGINAL and "originalsecret" in photo:
        return f"{base}_{photo['originalsecret']}_o.{photo.get('originalformat', 'jpg')}"
    if size == SIZE_MEDIUM_500:
        return f"{base}_{photo['secret']}.jpg"
    return f"{base}_{photo['secret']}_{size}.jpg"


def _compact(params: Mapping[str, object]) -> dict:
    """Drop parameters that were not supplied."""
    return {key: value for key, value in params.items() if value is not None}


class PhotosApi:
    """Photo methods of the Flickr API on top of a request dispatcher."""

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self.dispatcher = dispatcher

    def _write(self, method: str, params: Mapping[str, str | int]) -> bool:
        """Send a write call; only an ``ok`` reply counts as success."""
        envelope = self.dispatcher.request(method, params, requires_auth=True)
        return FlickrStatus.from_envelope(envelope).ok

    def add_tags(self, photo_id: PhotoId, tags: TagSet) -> bool:
        """Add tags to a photo.

        Args:
            photo_id: The photo to add tags to.
            tags: A list of tags (no quoting needed), or an already encoded
                space-separated string.

        Returns:
            True if Flickr accepted the tags.
        """
        return self._write(
            "flickr.photos.addTags",
            {"photo_id": photo_id, "tags": encode_tags(tags)},
        )

    def get_info(self, photo_id: PhotoId, secret: str | None = None) -> dict | None:
        """Get information about a photo.

        Passing the photo's secret skips the permission check, which lets
        individual photos be shared by id and secret.
        """
        envelope = self.dispatcher.request(
            "flickr.photos.getInfo",
            _compact({"photo_id": photo_id, "secret": secret}),
        )
        return unwrap(envelope, "photo")

    def get_sets(
        self, photo_ids: Sequence[PhotoId], user_id: str | None = None
    ) -> list[dict] | None:
        """Get the photosets that contain any of the given photos.

        Args:
            photo_ids: Photos to look for.
            user_id: Owner of the photos, defaults to the calling user.

        Returns:
            Matching photosets in listing order, or None if the listing
            could not be fetched.
        """
        listing = PhotosetsApi(self.dispatcher).get_list(user_id=user_id, photo_ids=photo_ids)
        if not isinstance(listing, Mapping) or "photoset" not in listing:
            return None
        wanted = {str(photo_id) for photo_id in photo_ids}
        return [
            photoset
            for photoset in listing["photoset"]
            if wanted.intersection(str(p) for p in photoset.get("has_requested_photos") or ())
        ]

    def get_sizes(self, photo_id: PhotoId) -> dict | None:
        """Return the available sizes for a photo."""
        envelope = self.dispatcher.request("flickr.photos.getSizes", {"photo_id": photo_id})
        return unwrap(envelope, "sizes")

    def get_largest_size(self, photo_id: PhotoId) -> Mapping | None:
        """Return the size record of the largest available rendition."""
        sizes = self.get_sizes(photo_id)
        if not sizes or not isinstance(sizes, Mapping):
            return None
        return select_largest_size(sizes.get("size"))

    def get_recent(
        self,
        extras: Sequence[str] | str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[dict] | None:
        """List the latest public photos uploaded to Flickr.

        Args:
            extras: Extra fields to fetch for each photo, as a list or a
                comma-separated string (e.g. ``["date_taken", "url_o"]``).
            per_page: Photos per page, 100 by default and at most 500.
            page: Page of results to return, 1 by default.
        """
        if extras is not None and not isinstance(extras, str):
            extras = ",".join(extras)
        envelope = self.dispatcher.request(
            "flickr.photos.getRecent",
            _compact({"extras": extras or None, "per_page": per_page, "page": page}),
        )
        photos = unwrap(envelope, "photos")
        if not isinstance(photos, Mapping):
            return None
        return photos.get("photo")

    def search(self, criteria: Mapping[str, str | int]) -> dict | None:
        """Search photos; ``criteria`` holds flickr.photos.search arguments as-is."""
        envelope = self.dispatcher.request("flickr.photos.search", dict(criteria))
        return unwrap(envelope, "photos")

    def set_dates(
        self,
        photo_id: PhotoId,
        date_taken: datetime | None = None,
        date_taken_granularity: int | None = None,
        date_posted: datetime | None = None,
    ) -> bool:
        """Set one or both of the dates for a photo.

        ``date_taken`` is sent as written, without any timezone conversion.
        ``date_taken_granularity`` is one of the ``GRANULARITY_*`` values.
        ``date_posted`` is sent as a Unix timestamp.
        """
        params: dict[str, str | int] = {"photo_id": photo_id}
        if date_taken is not None:
            params["date_taken"] = date_taken.strftime(DATE_TAKEN_FORMAT)
        if date_taken_granularity is not None:
            params["date_taken_granularity"] = date_taken_granularity
        if date_posted is not None:
            params["date_posted"] = int(date_posted.timestamp())
        return self._write("flickr.photos.setDates", params)

    def set_meta(
        self,
        photo_id: PhotoId,
        title: str | None = None,
        description: str | None = None,
    ) -> bool:
        """Set the title and/or description of a photo.

        Raises:
            InvalidArgument: If neither title nor description is given.
        """
        if not title and not description:
            raise InvalidArgument("title or description must be set")
        params: dict[str, str | int] = {"photo_id": photo_id}
        if title:
            params["title"] = title
        if description:
            params["description"] = description
        return self._write("flickr.photos.setMeta", params)

    def set_tags(self, photo_id: PhotoId, tags: TagSet) -> bool:
        """Replace all tags of a photo."""
        return self._write(
            "flickr.photos.setTags",
            {"photo_id": photo_id, "tags": encode_tags(tags)},
        )
