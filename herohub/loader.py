# -*- coding: utf-8 -*-

"""
Loading of the two source documents.

Each location is either a local file path or an http(s) URL. A load is one
fetch-then-parse; there is no streaming and no partial result. The character
catalog and the video list are cached once per process.
"""

import json
import logging
import os
import time
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import requests

from . import config
from .errors import LoadError, MediaUnavailable
from .models import Catalog, Video
from .normalizer import normalize

logger = logging.getLogger(__name__)

RETRY_STATUSES = (429, 502, 503)


def is_remote(location: str) -> bool:
    return urlsplit(location or "").scheme in ("http", "https")


class DocumentClient:
    def __init__(self, max_retries: int = config.HTTP_MAX_RETRIES, sleep_s: float = 0.5, session=None) -> None:
        self.max_retries = max(1, max_retries)
        self.sleep_s = sleep_s
        self.s = session or requests.Session()
        self.s.headers.update(
            {
                "User-Agent": config.DEFAULT_USER_AGENT,
                "Accept": "application/json,*/*;q=0.8",
            }
        )

    def _backoff(self, attempt: int) -> None:
        if attempt < self.max_retries and self.sleep_s > 0:
            time.sleep(min(8.0, self.sleep_s * (2 ** (attempt - 1))))

    def get_json(self, url: str) -> Any:
        last_err: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                r = self.s.get(url, timeout=(config.HTTP_CONNECT_TIMEOUT, config.HTTP_READ_TIMEOUT))
                if r.status_code in RETRY_STATUSES:
                    last_err = RuntimeError(f"HTTP {r.status_code}")
                    self._backoff(attempt)
                    continue
                r.raise_for_status()
                return r.json()
            except (requests.RequestException, ValueError) as e:
                last_err = e
                logger.warning("fetch %s failed (attempt %d/%d): %s", url, attempt, self.max_retries, e)
                self._backoff(attempt)
        raise LoadError(f"could not fetch {url}: {last_err}") from last_err


def _load_json_file(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_document(location: str, client: Optional[DocumentClient] = None) -> Any:
    """Fetch and parse one JSON document. Raises LoadError."""
    if is_remote(location):
        return (client or DocumentClient()).get_json(location)
    if not os.path.exists(location):
        raise LoadError(f"document not found: {location}")
    try:
        return _load_json_file(location)
    except (OSError, ValueError) as e:
        raise LoadError(f"could not read {location}: {e}") from e


# ------------------------------------------------------------
# Characters
# ------------------------------------------------------------

def load_catalog(location: Optional[str] = None, client: Optional[DocumentClient] = None) -> Catalog:
    """Raises LoadError (transport) or StructuralError (shape)."""
    location = location or config.DATA_JSON_PATH
    document = read_document(location, client)
    catalog = normalize(document)
    logger.info("loaded %d characters from %s", len(catalog), location)
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """
    Load once per process and keep in memory.
    A failed load is not cached; the next caller tries again.
    """
    return load_catalog(config.DATA_JSON_PATH)


# ------------------------------------------------------------
# Videos
# ------------------------------------------------------------

def parse_videos(document: Any) -> List[Video]:
    if not isinstance(document, dict) or not isinstance(document.get("videos"), list):
        raise MediaUnavailable("video document must be an object with a 'videos' list")
    out: List[Video] = []
    for raw in document["videos"]:
        if not isinstance(raw, dict):
            continue
        v = Video.from_dict(raw)
        # entries without ids cannot be matched or deduplicated
        if not v.character_id or not v.youtube_id:
            continue
        out.append(v)
    return out


def load_videos(location: Optional[str] = None, client: Optional[DocumentClient] = None) -> List[Video]:
    location = location or config.VIDEOS_JSON_PATH
    try:
        document = read_document(location, client)
    except LoadError as e:
        raise MediaUnavailable(str(e)) from e
    videos = parse_videos(document)
    logger.info("loaded %d videos from %s", len(videos), location)
    return videos


@lru_cache(maxsize=1)
def get_videos() -> Tuple[Video, ...]:
    return tuple(load_videos(config.VIDEOS_JSON_PATH))


def reset_cache() -> None:
    """Drop cached documents so the next access rebuilds the index."""
    get_catalog.cache_clear()
    get_videos.cache_clear()


def summarize(catalog: Catalog) -> Dict[str, Any]:
    return {
        "characters": len(catalog),
        "series": len(catalog.series_names),
        "dropped_references": len(catalog.dropped_references),
    }
