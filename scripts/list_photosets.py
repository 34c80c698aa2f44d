"""List every photoset of a Flickr user, with photo counts."""

import sys

from flickr_photos.client import FlickrClient
from flickr_photos.config import FLICKR_USER_ID
from flickr_photos.photosets import PhotosetsApi


def main() -> None:
    user_id = sys.argv[1] if len(sys.argv) > 1 else FLICKR_USER_ID
    if not user_id:
        print("Error: pass a user id or set FLICKR_USER_ID in .env")
        return

    print("Fetching photoset list...")
    photosets = PhotosetsApi(FlickrClient()).list_all(user_id)
    print(f"Found {len(photosets)} photosets\n")

    for photoset in photosets:
        title = photoset.get("title", {}).get("_content", "")
        print(f"  {photoset['id']}  {int(photoset.get('photos', 0)):>5} photos  {title}")


if __name__ == "__main__":
    main()
