"""Download the largest rendition of Flickr photos."""

import logging
from collections.abc import Sequence
from pathlib import Path
from urllib.parse import urlparse

import httpx
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from flickr_photos.photos import PhotoId, PhotosApi

logger = logging.getLogger(__name__)


def download_photos(
    api: PhotosApi,
    photo_ids: Sequence[PhotoId],
    dest_dir: Path,
) -> list[Path]:
    """Download the largest size of each photo into ``dest_dir``.

    Photos without a usable size, or whose download fails, are skipped.

    Returns:
        Paths of the files now present for the requested photos.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    paths: list[Path] = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
    ) as progress:
        task = progress.add_task("Downloading", total=len(photo_ids))

        with httpx.Client(timeout=120, follow_redirects=True) as http_client:
            for photo_id in photo_ids:
                path = download_largest(api, photo_id, dest_dir, http_client)
                if path is not None:
                    paths.append(path)
                progress.advance(task)

    return paths


def download_largest(
    api: PhotosApi,
    photo_id: PhotoId,
    dest_dir: Path,
    http_client: httpx.Client | None = None,
) -> Path | None:
    """Download the largest available size of a single photo.

    Returns:
        The local file path, or None if the photo has no size to download
        or the download failed. Timeouts are retried before giving up.
    """
    size = api.get_largest_size(photo_id)
    if size is None or not size.get("source"):
        logger.info("No downloadable size for photo %s", photo_id)
        return None

    url = size["source"]
    local_path = dest_dir / f"{photo_id}{_extension(url)}"
    if local_path.exists():
        return local_path

    try:
        if http_client is None:
            with httpx.Client(timeout=120, follow_redirects=True) as client:
                content = _fetch(client, url)
        else:
            content = _fetch(http_client, url)
    except httpx.TimeoutException as e:
        logger.warning("Download of %s timed out: %s", url, e)
        return None
    if content is None:
        return None

    dest_dir.mkdir(parents=True, exist_ok=True)
    local_path.write_bytes(content)
    logger.debug("Saved %s (%s, %d bytes)", local_path, size.get("label"), len(content))
    return local_path


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, max=10),
    retry=retry_if_exception_type(httpx.TimeoutException),
    reraise=True,
)
def _fetch(client: httpx.Client, url: str) -> bytes | None:
    try:
        resp = client.get(url)
        resp.raise_for_status()
    except httpx.TimeoutException:
        raise
    except httpx.HTTPError as e:
        logger.warning("Download of %s failed: %s", url, e)
        return None
    return resp.content


def _extension(url: str) -> str:
    """File extension of the image URL, ``.jpg`` when it has none."""
    suffix = Path(urlparse(url).path).suffix
    return suffix.lower() if suffix else ".jpg"
