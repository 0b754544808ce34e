# -*- coding: utf-8 -*-

"""
Best-effort image path resolution for logos and gallery images.

Both resolvers are total: they never raise and always return a path. When an
`exists` predicate is given, candidates are probed in order and the first hit
wins; otherwise the first candidate is returned as-is and the browser's
on-error swap to the placeholder takes care of missing files.
"""

import os
import re
from typing import Callable, List, Optional
from urllib.parse import quote

from . import config

ExistsFn = Callable[[str], bool]

LOGO_PLACEHOLDER = "https://via.placeholder.com/300x400/1a1a2e/ffffff?text={}"
GALLERY_PLACEHOLDER = "https://via.placeholder.com/600x800/1a1a2e/ffffff?text={}"

UNIVERSE_LOGOS = {
    "Marvel": "marvel_logo.jpeg",
    "DC": "dc_logo.jpeg",
}
DEFAULT_UNIVERSE_LOGO = "anime_logo.jpeg"

WS_RE = re.compile(r"\s+")


def _probe(candidates: List[str], exists: Optional[ExistsFn]) -> Optional[str]:
    if exists is None:
        return candidates[0] if candidates else None
    for c in candidates:
        try:
            if exists(c):
                return c
        except (OSError, ValueError):
            continue
    return None


def safe_realpath(base_dir: str, rel_path: str) -> Optional[str]:
    """
    Prevent path traversal: only allow paths within base_dir.
    """
    base_real = os.path.realpath(base_dir)
    candidate = os.path.realpath(os.path.join(base_real, rel_path))
    if not candidate.startswith(base_real + os.sep) and candidate != base_real:
        return None
    return candidate


def local_asset_path(path: str) -> Optional[str]:
    """
    Absolute file for an asset path like "assets/images/logos/x.jpeg", or None.
    Only files below ASSETS_BASE inside ASSETS_ROOT qualify.
    """
    prefix = config.ASSETS_BASE + "/"
    path = (path or "").lstrip("/")
    if "://" in path or not path.startswith(prefix):
        return None
    real = safe_realpath(os.path.join(config.ASSETS_ROOT, config.ASSETS_BASE), path[len(prefix):])
    if not real or not os.path.isfile(real):
        return None
    return real


def placeholder_for(text: str, template: str = LOGO_PLACEHOLDER) -> str:
    return template.format(quote((text or "").strip() or "?"))


def logo_candidates(name: Optional[str], cid: Optional[str], universe: Optional[str]) -> List[str]:
    base = f"{config.ASSETS_BASE}/logos"
    char_name = WS_RE.sub("_", (name or "").strip().lower()) or "default"
    cid = cid or ""
    out = [f"{base}/{char_name}_logo.jpeg"]
    if cid:
        out.append(f"{base}/{cid.replace('-', '_')}_logo.jpeg")
        out.append(f"{base}/{cid}_logo.jpeg")
    out.append(f"{base}/{UNIVERSE_LOGOS.get(universe or '', DEFAULT_UNIVERSE_LOGO)}")
    # dedupe, keep order
    seen = set()
    return [c for c in out if not (c in seen or seen.add(c))]


def resolve_logo(
    name: Optional[str],
    cid: Optional[str] = None,
    universe: Optional[str] = None,
    logo: Optional[str] = None,
    exists: Optional[ExistsFn] = None,
) -> str:
    # A logo carrying a path is already resolved
    if isinstance(logo, str) and "/" in logo:
        return logo
    candidates = logo_candidates(name, cid, universe)
    if isinstance(logo, str) and logo.strip():
        candidates.insert(0, f"{config.ASSETS_BASE}/logos/{logo.strip()}")
    hit = _probe(candidates, exists)
    return hit or placeholder_for((name or cid or "?").strip()[:1], LOGO_PLACEHOLDER)


def resolve_gallery_image(filename: Optional[str], cid: Optional[str] = None, exists: Optional[ExistsFn] = None) -> str:
    fn = (filename or "").strip()
    if not fn:
        return placeholder_for("Gallery", GALLERY_PLACEHOLDER)
    if "/" in fn:
        return fn
    candidates = [
        f"{config.ASSETS_BASE}/characters/{fn}",
        f"{config.ASSETS_BASE}/gallery/{fn}",
        fn,
    ]
    hit = _probe(candidates, exists)
    return hit or placeholder_for(fn.split(".")[0], GALLERY_PLACEHOLDER)


def detail_image(character, exists: Optional[ExistsFn] = None) -> str:
    """Main detail image: first gallery entry, else the logo."""
    if character.gallery:
        return resolve_gallery_image(character.gallery[0], character.id, exists=exists)
    return resolve_logo(character.name, character.id, character.universe, character.logo, exists=exists)
