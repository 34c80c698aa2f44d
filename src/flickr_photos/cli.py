"""Command line access to the Flickr photo methods."""

import argparse
import logging
import sys
from datetime import datetime

import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Flickr photo tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log API calls")
    subparsers = parser.add_subparsers(dest="command")

    info_parser = subparsers.add_parser("info", help="Show information about a photo")
    info_parser.add_argument("photo_id")
    info_parser.add_argument("--secret", help="Photo secret (skips permission checks)")

    sizes_parser = subparsers.add_parser("sizes", help="List available sizes of a photo")
    sizes_parser.add_argument("photo_id")

    largest_parser = subparsers.add_parser("largest", help="Show the largest size of a photo")
    largest_parser.add_argument("photo_id")

    recent_parser = subparsers.add_parser("recent", help="List recently uploaded public photos")
    recent_parser.add_argument("--extras", help="Comma-separated extra fields")
    recent_parser.add_argument("--per-page", type=int, help="Photos per page (max 500)")
    recent_parser.add_argument("--page", type=int, help="Page number")

    search_parser = subparsers.add_parser("search", help="Search photos")
    search_parser.add_argument("--text", help="Free text search")
    search_parser.add_argument("--tags", help="Comma-separated tags")
    search_parser.add_argument("--user-id", help="Only photos of this user")
    search_parser.add_argument("--per-page", type=int, help="Photos per page (max 500)")
    search_parser.add_argument("--page", type=int, help="Page number")

    sets_parser = subparsers.add_parser("sets", help="List the photosets containing photos")
    sets_parser.add_argument("photo_ids", nargs="+")
    sets_parser.add_argument("--user-id", help="Owner of the photos (or set FLICKR_USER_ID)")

    add_tags_parser = subparsers.add_parser("add-tags", help="Add tags to a photo")
    add_tags_parser.add_argument("photo_id")
    add_tags_parser.add_argument("tags", nargs="+", help="Tags; quote tags containing spaces")

    set_tags_parser = subparsers.add_parser("set-tags", help="Replace all tags of a photo")
    set_tags_parser.add_argument("photo_id")
    set_tags_parser.add_argument("tags", nargs="*", help="Tags; none clears all tags")

    meta_parser = subparsers.add_parser("set-meta", help="Set title and/or description")
    meta_parser.add_argument("photo_id")
    meta_parser.add_argument("--title")
    meta_parser.add_argument("--description")

    dates_parser = subparsers.add_parser("set-dates", help="Set taken and/or posted dates")
    dates_parser.add_argument("photo_id")
    dates_parser.add_argument(
        "--taken", type=datetime.fromisoformat, help="Date taken, e.g. 2024-05-01T10:30:00"
    )
    dates_parser.add_argument(
        "--granularity", type=int, choices=[0, 4, 6, 8], help="Date taken granularity"
    )
    dates_parser.add_argument("--posted", type=datetime.fromisoformat, help="Date posted")

    dl_parser = subparsers.add_parser("download", help="Download the largest size of photos")
    dl_parser.add_argument("photo_ids", nargs="+")
    dl_parser.add_argument("--dest", help="Target directory (default: data/flickr)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    from flickr_photos.client import FlickrClient
    from flickr_photos.exceptions import FlickrError
    from flickr_photos.photos import PhotosApi

    try:
        api = PhotosApi(FlickrClient())
        return _COMMANDS[args.command](api, args)
    except (FlickrError, ValueError, httpx.HTTPError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1


def _cmd_info(api, args: argparse.Namespace) -> int:
    photo = api.get_info(args.photo_id, secret=args.secret)
    if photo is None:
        return _not_found(args.photo_id)
    table = Table(show_header=False)
    table.add_row("id", str(photo.get("id")))
    table.add_row("title", _content(photo.get("title")))
    table.add_row("description", _content(photo.get("description")))
    table.add_row("owner", str((photo.get("owner") or {}).get("username", "")))
    table.add_row("taken", str((photo.get("dates") or {}).get("taken", "")))
    tags = (photo.get("tags") or {}).get("tag", [])
    table.add_row("tags", " ".join(tag.get("raw", "") for tag in tags))
    console.print(table)
    return 0


def _cmd_sizes(api, args: argparse.Namespace) -> int:
    sizes = api.get_sizes(args.photo_id)
    if sizes is None:
        return _not_found(args.photo_id)
    table = Table("label", "width", "height", "source")
    for size in sizes.get("size", []):
        table.add_row(size["label"], str(size["width"]), str(size["height"]), size.get("source", ""))
    console.print(table)
    return 0


def _cmd_largest(api, args: argparse.Namespace) -> int:
    size = api.get_largest_size(args.photo_id)
    if size is None:
        return _not_found(args.photo_id)
    console.print(f"{size['label']}  {size['width']}x{size['height']}  {size.get('source', '')}")
    return 0


def _cmd_recent(api, args: argparse.Namespace) -> int:
    photos = api.get_recent(extras=args.extras, per_page=args.per_page, page=args.page)
    if photos is None:
        console.print("No photos returned.")
        return 1
    _print_photos(photos)
    return 0


def _cmd_search(api, args: argparse.Namespace) -> int:
    criteria = {
        "text": args.text,
        "tags": args.tags,
        "user_id": args.user_id,
        "per_page": args.per_page,
        "page": args.page,
    }
    result = api.search({k: v for k, v in criteria.items() if v is not None})
    if result is None:
        console.print("No photos returned.")
        return 1
    _print_photos(result.get("photo", []))
    console.print(f"page {result.get('page')}/{result.get('pages')}, {result.get('total')} total")
    return 0


def _cmd_sets(api, args: argparse.Namespace) -> int:
    from flickr_photos.config import FLICKR_USER_ID

    photosets = api.get_sets(args.photo_ids, user_id=args.user_id or FLICKR_USER_ID or None)
    if photosets is None:
        console.print("Could not list photosets.")
        return 1
    for photoset in photosets:
        console.print(f"  {photoset['id']}  {_content(photoset.get('title'))}")
    return 0


def _cmd_add_tags(api, args: argparse.Namespace) -> int:
    return _report(api.add_tags(args.photo_id, args.tags), "Tags added.")


def _cmd_set_tags(api, args: argparse.Namespace) -> int:
    return _report(api.set_tags(args.photo_id, args.tags), "Tags replaced.")


def _cmd_set_meta(api, args: argparse.Namespace) -> int:
    ok = api.set_meta(args.photo_id, title=args.title, description=args.description)
    return _report(ok, "Metadata updated.")


def _cmd_set_dates(api, args: argparse.Namespace) -> int:
    ok = api.set_dates(
        args.photo_id,
        date_taken=args.taken,
        date_taken_granularity=args.granularity,
        date_posted=args.posted,
    )
    return _report(ok, "Dates updated.")


def _cmd_download(api, args: argparse.Namespace) -> int:
    from pathlib import Path

    from flickr_photos.config import DOWNLOAD_DIR
    from flickr_photos.downloader import download_photos

    dest = Path(args.dest) if args.dest else DOWNLOAD_DIR
    paths = download_photos(api, args.photo_ids, dest)
    for path in paths:
        console.print(f"  {path}")
    console.print(f"Downloaded {len(paths)} of {len(args.photo_ids)} photos.")
    return 0 if len(paths) == len(args.photo_ids) else 1


def _print_photos(photos: list[dict]) -> None:
    table = Table("id", "owner", "title")
    for photo in photos:
        table.add_row(str(photo.get("id")), str(photo.get("owner", "")), str(photo.get("title", "")))
    console.print(table)


def _content(value) -> str:
    """Flickr wraps most text fields as {"_content": ...}."""
    if isinstance(value, dict):
        return str(value.get("_content", ""))
    return "" if value is None else str(value)


def _not_found(photo_id: str) -> int:
    console.print(f"Photo {photo_id} not found.")
    return 1


def _report(ok: bool, message: str) -> int:
    if ok:
        console.print(message)
        return 0
    console.print("[red]Flickr rejected the change.[/red]")
    return 1


_COMMANDS = {
    "info": _cmd_info,
    "sizes": _cmd_sizes,
    "largest": _cmd_largest,
    "recent": _cmd_recent,
    "search": _cmd_search,
    "sets": _cmd_sets,
    "add-tags": _cmd_add_tags,
    "set-tags": _cmd_set_tags,
    "set-meta": _cmd_set_meta,
    "set-dates": _cmd_set_dates,
    "download": _cmd_download,
}


if __name__ == "__main__":
    sys.exit(main())
