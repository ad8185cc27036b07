"""React adapter: React Router / Reach Router route declarations under src/."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Set

from ..base import DiscoveryMethod, FrameworkName, PatternDef, RawRoute
from ..normalizer import normalize_route
from .base import AdapterKind, BaseAdapter, extract_with_patterns, is_test_file

ROUTE_PATTERNS: List[PatternDef] = [
    # <Route path="/users/:id" element={<User />} />
    PatternDef(
        regex=r'<Route\b[^>]*?\bpath\s*=\s*\{?\s*["\'`]([^"\'`]+)["\'`]',
        label="Route element",
        route_group=1,
    ),
    # { path: "/users", element: <Users /> }
    PatternDef(
        regex=r'\{\s*path\s*:\s*["\'`]([^"\'`]+)["\'`]',
        label="Route object",
        route_group=1,
    ),
    # createBrowserRouter([... path: "settings" ...]) with path not first in the object
    PatternDef(
        regex=r'\bpath\s*:\s*["\'`]([^"\'`]+)["\'`]',
        label="Route config",
        route_group=1,
    ),
]


def _looks_like_route(path: str) -> bool:
    # path: "./dist" in a config file is a filesystem path, not a route
    return not (path.startswith(".") or "://" in path or any(c.isspace() for c in path))


def extract_react_routes(content: str) -> List[str]:
    """Route path literals declared in a React source file, in pattern priority order."""
    paths: List[str] = []
    for _, path, _ in extract_with_patterns(content, ROUTE_PATTERNS):
        if _looks_like_route(path) and path not in paths:
            paths.append(path)
    return paths


def extract_component_name(content: str, route_path: str) -> Optional[str]:
    """Best-effort name of the component rendered for route_path."""
    quoted = r'["\'`]%s["\'`]' % re.escape(route_path)
    patterns = [
        r'path\s*=\s*\{?\s*%s[^>]*?component\s*=\s*\{\s*(\w+)' % quoted,
        r'path\s*=\s*\{?\s*%s[^>]*?element\s*=\s*\{\s*<\s*(\w+)' % quoted,
        r'path\s*:\s*%s\s*,\s*(?:element|Component|component)\s*:\s*<?\s*(\w+)' % quoted,
    ]
    for pattern in patterns:
        match = re.search(pattern, content, re.IGNORECASE)
        if match:
            return match.group(1)
    return None


class ReactAdapter(BaseAdapter):
    """Code-pattern discovery for React apps using a client-side router."""

    ROUTER_PACKAGES = {"react-router-dom": "react-router-dom", "@reach/router": "reach-router"}

    @property
    def kind(self) -> AdapterKind:
        return AdapterKind.REACT

    @property
    def router_type(self) -> Optional[str]:
        flagged = self.framework.flag("router_type")
        if flagged:
            return flagged
        for package, router_type in self.ROUTER_PACKAGES.items():
            if self.project.has_dependency(package):
                return router_type
        return None

    def detect(self) -> Optional[Dict[str, Any]]:
        react_names = (FrameworkName.REACT, FrameworkName.REACT_ROUTER)
        if self.framework.name not in react_names and not self.project.has_dependency("react"):
            return None
        deps = self.project.dependencies
        return {
            "name": "react",
            "version": deps.get("react"),
            "router_type": self.router_type,
            "router_version": deps.get("react-router-dom") or deps.get("@reach/router"),
        }

    def discover_routes(self) -> List[RawRoute]:
        # Without a router there is nothing declarative to find
        if not self.router_type:
            return []

        routes: List[RawRoute] = []
        found: Set[str] = set()
        src_dir = self.project.path("src")

        for fp, rel in self.iter_files(src_dir, exclude=is_test_file):
            content = self.try_read_source(fp)
            if content is None:
                continue
            for path in extract_react_routes(content):
                url = normalize_route(path)
                key = f"GET:{url}"
                if key in found:
                    continue
                found.add(key)
                routes.append(self.make_route(
                    url, fp,
                    discovery_method=DiscoveryMethod.CODE_PATTERN,
                    component=extract_component_name(content, path),
                ))
        return routes
