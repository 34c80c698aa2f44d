"""Project-wide configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("FLICKR_PHOTOS_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")

# Flickr API
FLICKR_API_KEY = os.environ.get("FLICKR_API_KEY", "")
FLICKR_API_SECRET = os.environ.get("FLICKR_API_SECRET", "")
FLICKR_API_BASE = os.environ.get("FLICKR_API_BASE", "https://api.flickr.com/services/rest/")
FLICKR_USER_ID = os.environ.get("FLICKR_USER_ID", "")
FLICKR_TIMEOUT = int(os.environ.get("FLICKR_TIMEOUT", "30"))

# OAuth 1.0a access token, needed for write calls only
FLICKR_OAUTH_TOKEN = os.environ.get("FLICKR_OAUTH_TOKEN", "")
FLICKR_OAUTH_TOKEN_SECRET = os.environ.get("FLICKR_OAUTH_TOKEN_SECRET", "")

# Downloads
DOWNLOAD_DIR = PROJECT_ROOT / "data" / "flickr"
