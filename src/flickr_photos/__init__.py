"""Thin bindings to the photo methods of the Flickr API."""

from flickr_photos.client import FlickrClient, FlickrStatus, RequestDispatcher
from flickr_photos.exceptions import FlickrAuthError, FlickrError, InvalidArgument
from flickr_photos.photos import PhotosApi, build_photo_url, encode_tags, select_largest_size
from flickr_photos.photosets import PhotosetsApi

__all__ = [
    "FlickrAuthError",
    "FlickrClient",
    "FlickrError",
    "FlickrStatus",
    "InvalidArgument",
    "PhotosApi",
    "PhotosetsApi",
    "RequestDispatcher",
    "build_photo_url",
    "encode_tags",
    "select_largest_size",
]
