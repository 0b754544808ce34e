# -*- coding: utf-8 -*-

import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

from flask import Flask, Response, jsonify, render_template_string, request, send_file
from flask_cors import CORS

from . import config
from .assets import detail_image, local_asset_path, resolve_gallery_image
from .errors import LoadError, MediaUnavailable, StructuralError
from .loader import get_catalog, get_videos
from .models import Catalog, ResolvedCharacter
from .navigation import NavigationState
from .query import SORT_KEYS, QueryParams, results_label, series_options, star_breakdown, universe_options
from .selection import direct_videos, recommend_videos, select_featured
from .state import BrowseState, OpenDeepLink, dispatch, initial_state

logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# 0) META
# ------------------------------------------------------------

SERVICE_META = {
    "page_title": "HeroHub – Characters",
    "page_h1": "HeroHub",
    "page_subtitle": "Characters across Marvel, DC and Anime, with series appearances and videos.",
}

LOAD_FAILED_MSG = "Error loading characters. Please try again later."
VIDEOS_UNAVAILABLE_MSG = "Unable to load videos at this time."
NO_VIDEOS_MSG = "No videos available for this character."

# ------------------------------------------------------------
# 1) VALIDATION
# ------------------------------------------------------------

ID_RE = re.compile(r"^[A-Za-z0-9_.\-]{1,80}$")
MAX_TERM_LEN = 120


class BadRequest(ValueError):
    pass


def _query_params() -> QueryParams:
    args = request.args
    term = (args.get("q") or "")[:MAX_TERM_LEN]
    sort_by = (args.get("sort") or "").strip().lower() or None
    if sort_by == "default":
        sort_by = None
    if sort_by is not None and sort_by not in SORT_KEYS:
        raise BadRequest("invalid sort")
    return QueryParams(
        search_term=term,
        universe=args.get("universe") or config.ALL,
        series=args.get("series") or config.ALL,
        sort_by=sort_by,
    )


def _int_arg(name: str, default: int, lo: int, hi: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequest(f"invalid {name}") from None
    return max(lo, min(hi, value))


# ------------------------------------------------------------
# 2) PAYLOADS
# ------------------------------------------------------------

def _stars(ch: ResolvedCharacter) -> Dict[str, Any]:
    full, half, empty = star_breakdown(ch.rating)
    return {"full": full, "half": half, "empty": empty}


def character_summary(ch: ResolvedCharacter) -> Dict[str, Any]:
    return {
        "id": ch.id,
        "name": ch.name,
        "universe": ch.universe,
        "rating": ch.rating,
        "stars": _stars(ch),
        "logo": ch.logo,
        "primary_series": ch.primary_series,
        "seriesNames": list(ch.series_names),
        "alias": ch.alias[0] if ch.alias else (ch.title[0] if ch.title else ""),
    }


def character_detail(ch: ResolvedCharacter) -> Dict[str, Any]:
    out = ch.to_dict()
    out["primary_series"] = ch.primary_series
    out["stars"] = _stars(ch)
    out["image"] = detail_image(ch)
    out["gallery_urls"] = [resolve_gallery_image(fn, ch.id) for fn in ch.gallery]
    return out


def navigation_payload(nav: NavigationState) -> Optional[Dict[str, Any]]:
    if not nav.is_open:
        return None
    prev_ch = nav.advance(-1).current() if nav.can_go_previous() else None
    next_ch = nav.advance(1).current() if nav.can_go_next() else None
    return {
        "index": nav.index,
        "total": len(nav.items),
        "previous_id": prev_ch.id if prev_ch else None,
        "next_id": next_ch.id if next_ch else None,
    }


def _browse_state(catalog: Catalog, params: QueryParams) -> BrowseState:
    """Filtered results plus the detail view opened by `?character=`, if any."""
    state = initial_state(catalog, params)
    deep_link = request.args.get("character")
    if deep_link:
        state = dispatch(state, catalog, OpenDeepLink(deep_link))
    return state


def _error(msg: str, status: int):
    return jsonify({"ok": False, "error": msg}), status


# ------------------------------------------------------------
# 3) FLASK APP
# ------------------------------------------------------------

app = Flask(__name__)
CORS(app)


@app.errorhandler(BadRequest)
def _bad_request(e: BadRequest):
    return _error(str(e), 400)


@app.errorhandler(LoadError)
@app.errorhandler(StructuralError)
def _dataset_unavailable(e: Exception):
    # no partial catalog, no stack traces in responses
    logger.error("dataset not available: %s", e)
    return _error("dataset not available", 500)


@app.get("/api/characters")
def api_characters():
    state = _browse_state(get_catalog(), _query_params())
    results = state.results

    detail = None
    if state.detail is not None:
        detail = {"character": character_detail(state.detail), "navigation": navigation_payload(state.nav)}

    return jsonify(
        {
            "ok": True,
            "count": len(results),
            "label": results_label(results),
            "characters": [character_summary(ch) for ch in results],
            "detail": detail,
        }
    )


@app.get("/api/characters/<cid>")
def api_character(cid: str):
    if not ID_RE.match(cid or ""):
        return _error("invalid id", 400)
    params = _query_params()
    catalog = get_catalog()
    ch = catalog.get(cid)
    if not ch:
        return _error("not found", 404)
    # position within the filtered list; absent -> no stepping
    nav = dispatch(initial_state(catalog, params), catalog, OpenDeepLink(cid)).nav
    return jsonify({"ok": True, "character": character_detail(ch), "navigation": navigation_payload(nav)})


@app.get("/api/characters/<cid>/videos")
def api_character_videos(cid: str):
    if not ID_RE.match(cid or ""):
        return _error("invalid id", 400)
    limit = _int_arg("limit", config.VIDEO_LIMIT, 1, 12)
    catalog = get_catalog()
    try:
        videos = get_videos()
    except MediaUnavailable as e:
        logger.warning("videos unavailable: %s", e)
        return jsonify({"ok": True, "available": False, "message": VIDEOS_UNAVAILABLE_MSG, "videos": []})

    direct = bool(direct_videos(cid, videos, limit))
    picked = recommend_videos(cid, catalog, videos, limit=limit)
    return jsonify(
        {
            "ok": True,
            "available": True,
            "direct": direct,
            "message": None if picked else NO_VIDEOS_MSG,
            "videos": [v.to_dict() for v in picked],
        }
    )


@app.get("/api/featured")
def api_featured():
    count = _int_arg("count", config.FEATURED_COUNT, 1, 24)
    featured = select_featured(get_catalog(), config.PRIORITY_SERIES, target_count=count)
    return jsonify({"ok": True, "count": len(featured), "characters": [character_summary(ch) for ch in featured]})


@app.get("/api/facets")
def api_facets():
    catalog = get_catalog()
    return jsonify(
        {
            "ok": True,
            "universes": universe_options(catalog),
            "series": series_options(catalog),
            "sort": ["default"] + list(SORT_KEYS),
        }
    )


# ------------------------------------------------------------
# 4) HTML PAGE
# ------------------------------------------------------------

TEMPLATE = r"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{{ meta.page_title }}</title>
  <style>
  :root{ --bg:#0b0f19; --card:#111a2e; --text:#e6eaf2; --muted:#a8b3cf; --border:rgba(255,255,255,.10); }
  body{ margin:0; background:var(--bg); color:var(--text); font-family:ui-sans-serif,system-ui,sans-serif; }
  main{ max-width:1100px; margin:0 auto; padding:24px; }
  form{ display:flex; gap:8px; flex-wrap:wrap; margin:16px 0; }
  .grid{ display:grid; grid-template-columns:repeat(auto-fill,minmax(200px,1fr)); gap:16px; }
  .card{ background:var(--card); border:1px solid var(--border); border-radius:14px; padding:12px; }
  .card img{ width:100%; border-radius:10px; }
  .muted{ color:var(--muted); }
  .error{ border:1px solid #f87171; padding:16px; border-radius:12px; }
  a{ color:#8bd4ff; }
  </style>
</head>
<body>
<main>
  <h1>{{ meta.page_h1 }}</h1>
  <p class="muted">{{ meta.page_subtitle }}</p>

  {% if error %}
    <div class="error" role="alert">{{ error }}</div>
  {% else %}
    <form method="get" action="/" id="browse">
      <input type="search" name="q" id="q" value="{{ params.search_term }}" placeholder="Search characters, aliases, abilities" />
      <select name="universe">
        {% for u in universes %}<option value="{{ u }}" {% if u == params.universe %}selected{% endif %}>{{ "All Universes" if u == "all" else u }}</option>{% endfor %}
      </select>
      <select name="series">
        {% for s in series %}<option value="{{ s }}" {% if s == params.series %}selected{% endif %}>{{ "All Series" if s == "all" else s }}</option>{% endfor %}
      </select>
      <select name="sort">
        {% for k in sort_keys %}<option value="{{ k }}" {% if k == (params.sort_by or "default") %}selected{% endif %}>{{ k|capitalize }}</option>{% endfor %}
      </select>
      <button type="submit">Search</button>
    </form>

    {% if detail %}
      <section class="card">
        <h2>{{ detail.name }}</h2>
        <img src="{{ detail_img }}" alt="{{ detail.name }}" style="max-width:320px" />
        <p>{{ detail.alias|join(" • ") }}</p>
        <p>{{ detail.rating }}/10 · {{ detail.universe }} Universe</p>
        <p><strong>Appears in:</strong> {{ detail.series_names|join(", ") }}</p>
        <p>
          {% if nav.previous_id %}<a href="?{{ qs }}&character={{ nav.previous_id }}">&larr; Previous</a>{% endif %}
          {% if nav.next_id %}<a href="?{{ qs }}&character={{ nav.next_id }}">Next &rarr;</a>{% endif %}
        </p>
      </section>
    {% endif %}

    {% if featured %}
      <h2>Featured</h2>
      <div class="grid">
        {% for ch in featured %}
          <a class="card" href="?character={{ ch.id }}"><strong>{{ ch.name }}</strong><br/><span class="muted">{{ ch.primary_series }} · {{ ch.rating }}/10</span></a>
        {% endfor %}
      </div>
    {% endif %}

    <h2>{{ label }}</h2>
    <div class="grid">
      {% for ch in characters %}
        <a class="card" href="?{{ qs }}&character={{ ch.id }}">
          <img src="{{ ch.logo }}" alt="{{ ch.name }}" loading="lazy" />
          <strong>{{ ch.name }}</strong><br/>
          <span class="muted">{{ ch.universe }} · {{ ch.primary_series }}{% if ch.series_names|length > 1 %} +{{ ch.series_names|length - 1 }} more{% endif %}</span>
        </a>
      {% else %}
        <p class="muted">No characters found.</p>
      {% endfor %}
    </div>
    <script>
    (function(){
      // submit once typing pauses; each keystroke restarts the wait
      const form = document.getElementById("browse");
      const input = document.getElementById("q");
      let timer = null;
      input.addEventListener("input", function(){
        clearTimeout(timer);
        timer = setTimeout(function(){ form.submit(); }, {{ debounce_ms }});
      });
    })();
    </script>
  {% endif %}
</main>
</body>
</html>
"""


def _page_query_string(params: QueryParams) -> str:
    pairs: List[Tuple[str, str]] = [("q", params.search_term), ("universe", params.universe), ("series", params.series)]
    if params.sort_by:
        pairs.append(("sort", params.sort_by))
    return urlencode(pairs)


def _render_page(catalog: Optional[Catalog], params: QueryParams, error: Optional[str] = None) -> str:
    ctx: Dict[str, Any] = {"meta": SERVICE_META, "error": error, "params": params}
    if catalog is not None and not error:
        state = _browse_state(catalog, params)
        results = list(state.results)
        current = state.detail
        ctx.update(
            universes=universe_options(catalog),
            series=series_options(catalog),
            sort_keys=["default"] + list(SORT_KEYS),
            characters=results,
            label=results_label(results),
            featured=select_featured(catalog, config.PRIORITY_SERIES, config.FEATURED_COUNT)
            if params == QueryParams()
            else [],
            detail=current,
            detail_img=detail_image(current) if current else None,
            nav=navigation_payload(state.nav) or {},
            debounce_ms=int(config.SEARCH_DEBOUNCE_SECONDS * 1000),
            qs=_page_query_string(params),
        )
    return render_template_string(TEMPLATE, **ctx)


@app.get("/")
def index() -> str:
    try:
        params = _query_params()
    except BadRequest:
        params = QueryParams()
    try:
        catalog = get_catalog()
    except (LoadError, StructuralError) as e:
        logger.error("dataset not available: %s", e)
        return _render_page(None, params, error=LOAD_FAILED_MSG)
    return _render_page(catalog, params)


@app.get("/assets/<path:relpath>")
def assets_file(relpath: str):
    real = local_asset_path("assets/" + (relpath or "").lstrip("/"))
    if not real:
        return _error("not found", 404)

    resp: Response = send_file(real)
    resp.headers["Cache-Control"] = f"public, max-age={config.MEDIA_MAX_AGE_SECONDS}, immutable"
    return resp
