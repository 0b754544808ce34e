# -*- coding: utf-8 -*-

import os
from collections import OrderedDict
from typing import Dict, List

# ------------------------------------------------------------
# 1) DATA PATHS (ENV overridable)
# ------------------------------------------------------------

DEFAULT_DATA_JSON_PATH = "data/data.json"
DEFAULT_VIDEOS_JSON_PATH = "data/videos.json"

# Either a local file path or an http(s) URL
DATA_JSON_PATH = os.getenv("DATA_JSON_PATH", DEFAULT_DATA_JSON_PATH)
VIDEOS_JSON_PATH = os.getenv("VIDEOS_JSON_PATH", DEFAULT_VIDEOS_JSON_PATH)

ASSETS_BASE = os.getenv("ASSETS_BASE", "assets/images").rstrip("/")
# Directory the asset paths are relative to when served by the app
ASSETS_ROOT = os.getenv("ASSETS_ROOT", ".")
# Cache images publicly for a week by default
MEDIA_MAX_AGE_SECONDS = int(os.getenv("MEDIA_MAX_AGE_SECONDS", str(7 * 24 * 3600)))

# ------------------------------------------------------------
# 2) CATALOG BEHAVIOUR
# ------------------------------------------------------------

FEATURED_COUNT = int(os.getenv("FEATURED_COUNT", "6"))
VIDEO_LIMIT = int(os.getenv("VIDEO_LIMIT", "3"))
SEARCH_DEBOUNCE_SECONDS = float(os.getenv("SEARCH_DEBOUNCE_SECONDS", "0.3"))

# Sentinel used by the universe and series facets
ALL = "all"

# Iterated in this order when picking featured characters
PRIORITY_SERIES: Dict[str, List[str]] = OrderedDict(
    [
        ("DC", ["Batman Series", "Superman Series", "Justice League Series"]),
        ("Marvel", ["Avengers Series"]),
        ("Anime", ["Naruto Series", "One Piece Series", "Demon Slayer Series"]),
    ]
)

# Default ratings are drawn from [RATING_MIN, RATING_MAX)
RATING_MIN = 8.0
RATING_MAX = 10.0

# ------------------------------------------------------------
# 3) HTTP (remote documents)
# ------------------------------------------------------------

DEFAULT_USER_AGENT = os.getenv(
    "USER_AGENT",
    "herohub catalog loader (+https://github.com/herohub) - single fetch per load",
)

HTTP_CONNECT_TIMEOUT = float(os.getenv("HTTP_CONNECT_TIMEOUT", "5"))
HTTP_READ_TIMEOUT = float(os.getenv("HTTP_READ_TIMEOUT", "20"))
# 1 = no automatic retry; failed loads are terminal for the view
HTTP_MAX_RETRIES = int(os.getenv("HTTP_MAX_RETRIES", "1"))

# ------------------------------------------------------------
# 4) SERVER
# ------------------------------------------------------------

PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
