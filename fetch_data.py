#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HeroHub – Data Downloader
- Fetches data.json (Worlds -> series -> characters) and videos.json from a base URL
- Validates the character document by normalizing it (a malformed document is never written)
- Writes both files atomically into a local data directory used by the service

Usage:
  python fetch_data.py --base-url https://example.org/herohub/data
  python fetch_data.py --base-url https://example.org/herohub/data --out data --skip-videos

Output:
  <out>/
    data.json
    videos.json
"""

import argparse
import json
import logging
import os
from typing import Any, Dict

from herohub import config
from herohub.errors import LoadError, MediaUnavailable, StructuralError
from herohub.loader import DocumentClient, parse_videos, summarize
from herohub.normalizer import normalize

DATA_FILE = "data.json"
VIDEOS_FILE = "videos.json"


def ensure_dir(p: str) -> None:
    os.makedirs(p, exist_ok=True)


def save_json(path: str, data: Dict[str, Any]) -> None:
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--base-url", default=os.getenv("DATA_BASE_URL", ""), help="URL of the remote data directory")
    ap.add_argument("--out", default="data", help="Output directory")
    ap.add_argument("--skip-videos", action="store_true", help="Only fetch the character document")
    ap.add_argument("--retries", type=int, default=config.HTTP_MAX_RETRIES, help="Attempts per document")
    ap.add_argument("--sleep", type=float, default=0.5, help="Base backoff between attempts (seconds)")
    args = ap.parse_args(argv)

    if not args.base_url:
        ap.error("--base-url (or DATA_BASE_URL) is required")

    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))

    base = args.base_url.rstrip("/")
    ensure_dir(args.out)
    client = DocumentClient(max_retries=args.retries, sleep_s=args.sleep)

    # 1) characters (required)
    data_url = f"{base}/{DATA_FILE}"
    print(f"[FETCH] {data_url}")
    try:
        document = client.get_json(data_url)
        catalog = normalize(document)
    except (LoadError, StructuralError) as e:
        print(f"[ERROR] {DATA_FILE} not usable: {e}")
        return 1

    data_path = os.path.join(args.out, DATA_FILE)
    save_json(data_path, document)
    stats = summarize(catalog)
    print(
        f"[OK] Wrote: {data_path} (characters={stats['characters']}, series={stats['series']}, "
        f"dropped_references={stats['dropped_references']})"
    )

    # 2) videos (optional; the catalog works without them)
    if not args.skip_videos:
        videos_url = f"{base}/{VIDEOS_FILE}"
        print(f"[FETCH] {videos_url}")
        try:
            videos_doc = client.get_json(videos_url)
            videos = parse_videos(videos_doc)
        except (LoadError, MediaUnavailable) as e:
            print(f"[WARN] {VIDEOS_FILE} skipped: {e}")
        else:
            videos_path = os.path.join(args.out, VIDEOS_FILE)
            save_json(videos_path, videos_doc)
            print(f"[OK] Wrote: {videos_path} (videos={len(videos)})")

    print(f"[DONE] {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
