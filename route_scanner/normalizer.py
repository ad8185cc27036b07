"""
Path normalizer: framework file paths and route literals to canonical URLs.

Canonical URLs start with "/", never contain "//", never end with "/" (except
root), use ":name" for a dynamic segment and "*" for a catch-all.
"""

import re

SCRIPT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".mjs")

_FILE_MARKER_RE = re.compile(r"(?:^|/)(?:page|route)\.(?:js|jsx|ts|tsx|mjs)$")
_ROUTE_GROUP_RE = re.compile(r"\([^)]*\)")
# [[...slug]] must be handled before [...slug], and both before [id]
_OPTIONAL_CATCH_ALL_RE = re.compile(r"\[\[\.\.\.(\w+)\]\]")
_CATCH_ALL_RE = re.compile(r"\[\.\.\.(\w+)\]")
_DYNAMIC_SEGMENT_RE = re.compile(r"\[(\w+)\]")
_REPEATED_SLASH_RE = re.compile(r"/+")

_SCRIPT_EXT_RE = re.compile(r"\.(?:js|jsx|ts|tsx|mjs)$")
_TRAILING_INDEX_RE = re.compile(r"(?:^|/)index$")


def normalize_route(path: str) -> str:
    """Map a framework path or route literal to its canonical URL.

    The order of the steps matters: route groups and trailing slashes are
    removed before file markers, and catch-alls are converted before plain
    brackets.
    """
    url = (path or "").strip().replace("\\", "/")
    url = _ROUTE_GROUP_RE.sub("", url).rstrip("/")
    # Stripping one marker can expose another, e.g. a/page.tsx/page.tsx
    while _FILE_MARKER_RE.search(url):
        url = _FILE_MARKER_RE.sub("", url).rstrip("/")
    url = _OPTIONAL_CATCH_ALL_RE.sub("*", url)
    url = _CATCH_ALL_RE.sub("*", url)
    url = _DYNAMIC_SEGMENT_RE.sub(r":\1", url)
    url = _REPEATED_SLASH_RE.sub("/", "/" + url)
    if len(url) > 1 and url.endswith("/"):
        url = url[:-1]
    return url or "/"


def app_router_file_to_url(relative_path: str) -> str:
    """``(shop)/products/[id]/page.tsx`` -> ``/products/:id``"""
    return normalize_route(relative_path)


def pages_router_file_to_url(relative_path: str) -> str:
    """``blog/[slug].tsx`` -> ``/blog/:slug``; ``index.tsx`` -> ``/``"""
    url = relative_path.replace("\\", "/")
    url = _SCRIPT_EXT_RE.sub("", url)
    url = _TRAILING_INDEX_RE.sub("", url)
    return normalize_route(url)


def static_file_to_url(relative_path: str) -> str:
    """``docs/index.html`` -> ``/docs``"""
    url = relative_path.replace("\\", "/")
    url = re.sub(r"\.html?$", "", url)
    url = _TRAILING_INDEX_RE.sub("", url)
    return normalize_route(url)


def remix_file_to_url(relative_path: str) -> str:
    """Convert a Remix flat-route file name to a URL.

    Dots separate segments, ``$id`` is a param, a bare ``$`` is a splat,
    ``_layout`` segments are pathless and ``_index`` is the index route.
    """
    name = relative_path.replace("\\", "/")
    name = _SCRIPT_EXT_RE.sub("", name)
    name = re.sub(r"/route$", "", name)

    segments = []
    for raw in re.split(r"[./]", name):
        if not raw or raw.startswith("_"):
            continue
        segment = raw.rstrip("_")
        if segment == "$":
            segment = "*"
        elif segment.startswith("$"):
            segment = ":" + segment[1:]
        segments.append(segment)
    return normalize_route("/".join(segments))


def title_for_url(url: str) -> str:
    """Human label for a route, e.g. ``/users/:id`` -> ``Users Id Page``."""
    if url == "/":
        return "Home Page"
    words = []
    for segment in url.split("/"):
        if not segment:
            continue
        if segment == "*":
            words.append("Wildcard")
            continue
        segment = segment.lstrip(":")
        words.append(segment[:1].upper() + segment[1:])
    return " ".join(words) + " Page"
