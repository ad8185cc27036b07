"""Express adapter: app/router/server.METHOD(path, ...) registrations and mounts."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Set, Tuple

from ..base import DiscoveryMethod, FrameworkName, PatternDef, RawRoute, RouteKind
from ..normalizer import normalize_route
from .base import AdapterKind, BaseAdapter, extract_with_patterns, is_test_file

EXPRESS_EXTENSIONS = (".js", ".ts", ".mjs", ".cjs")

ROUTE_PATTERNS: List[PatternDef] = [
    # app.get('/path', handler) on the usual receiver names
    PatternDef(
        regex=r'\b(?:app|server|router|express)\s*\.\s*(get|post|put|patch|delete|use|all)\s*\(\s*["\'`]([^"\'`]+)["\'`]\s*,',
        label="Handler registration",
        method_group=1,
        route_group=2,
    ),
    # usersRouter.post('/path', handler) on any receiver, absolute paths only
    PatternDef(
        regex=r'\b(\w+)\s*\.\s*(get|post|put|patch|delete|use|all)\s*\(\s*["\'`](/[^"\'`]*)["\'`]\s*,',
        label="Named router registration",
        method_group=2,
        route_group=3,
    ),
    # router.route('/path').get(...)
    PatternDef(
        regex=r'\.route\s*\(\s*["\'`]([^"\'`]+)["\'`]\s*\)\s*\.\s*(get|post|put|patch|delete|all)\b',
        label="Chained route",
        method_group=2,
        route_group=1,
    ),
]

_MOUNT_RE = re.compile(r'\b(?:app|server|router)\s*\.\s*use\s*\(\s*["\'`]([^"\'`]+)["\'`]\s*,\s*(\w+)\s*[,)]')
_ROUTER_METHOD_RE = re.compile(
    r'\b(\w+)\s*\.\s*(get|post|put|delete|patch|all)\s*\(\s*["\'`]([^"\'`]+)["\'`]',
    re.IGNORECASE,
)


def normalize_express_path(route_path: str) -> Optional[str]:
    """Canonical URL for an Express path literal, or None if it is not one."""
    if not route_path or any(c.isspace() for c in route_path):
        return None
    # Template literals with interpolation have no static path
    if "${" in route_path:
        return None
    url = route_path.replace("^", "")
    url = re.sub(r"\$.*$", "", url)
    return normalize_route(url)


def is_endpoint_like(url: str) -> bool:
    """Whether a use() mount path looks like it serves requests itself."""
    if url == "/api" or url.startswith("/api/"):
        return True
    return len([s for s in url.split("/") if s]) > 1


def extract_express_routes(content: str) -> List[Tuple[str, str]]:
    """(METHOD, canonical URL) pairs registered in one source file.

    ``use`` mounts are downgraded to GET and kept only when endpoint-like.
    """
    routes: List[Tuple[str, str]] = []
    for method, path, _ in extract_with_patterns(content, ROUTE_PATTERNS):
        url = normalize_express_path(path)
        if url is None:
            continue
        if method == "USE":
            if not is_endpoint_like(url):
                continue
            method = "GET"
        if (method, url) not in routes:
            routes.append((method, url))
    return routes


def extract_mounted_routes(content: str) -> List[Tuple[str, str, str, str]]:
    """(METHOD, joined URL, prefix, sub-path URL) for routers mounted in the same file."""
    mounts: Dict[str, str] = {}
    for m in _MOUNT_RE.finditer(content):
        mounts[m.group(2)] = m.group(1)

    results = []
    for m in _ROUTER_METHOD_RE.finditer(content):
        var = m.group(1)
        if var not in mounts:
            continue
        prefix = mounts[var]
        url = normalize_express_path(prefix.rstrip("/") + "/" + m.group(3).lstrip("/"))
        sub_url = normalize_express_path(m.group(3))
        if url is not None and sub_url is not None:
            results.append((m.group(2).upper(), url, prefix, sub_url))
    return results


class ExpressAdapter(BaseAdapter):
    """Code-pattern discovery for Express servers."""

    @property
    def kind(self) -> AdapterKind:
        return AdapterKind.EXPRESS

    def detect(self) -> Optional[Dict[str, Any]]:
        if self.framework.name != FrameworkName.EXPRESS and not self.project.has_dependency("express"):
            return None
        return {
            "name": "express",
            "version": self.project.dependencies.get("express"),
            "main_file": self.project.main or "index.js",
        }

    def discover_routes(self) -> List[RawRoute]:
        routes: List[RawRoute] = []
        found: Set[str] = set()

        for fp, rel in self.iter_files(self.project.root, EXPRESS_EXTENSIONS, exclude=is_test_file):
            content = self.try_read_source(fp)
            if content is None:
                continue

            mounted = extract_mounted_routes(content)
            # A mounted router's own registrations only exist under its prefix
            unprefixed = {(method, sub_url) for method, _, _, sub_url in mounted}

            for method, url in extract_express_routes(content):
                key = f"{method}:{url}"
                if key in found or (method, url) in unprefixed:
                    continue
                found.add(key)
                routes.append(self.make_route(url, fp, method=method))

            for method, url, _prefix, _sub_url in mounted:
                key = f"{method}:{url}"
                if key in found:
                    continue
                found.add(key)
                routes.append(self.make_route(
                    url, fp, method=method,
                    discovery_method=DiscoveryMethod.MOUNT,
                    kind=RouteKind.MOUNT,
                ))
        return routes
