"""Exceptions raised by flickr_photos."""


class FlickrError(Exception):
    """Base class for errors raised by this package."""


class InvalidArgument(FlickrError, ValueError):
    """An operation was called with arguments it cannot send."""


class FlickrAuthError(FlickrError):
    """A write call was attempted without OAuth credentials."""
