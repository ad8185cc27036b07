"""Generic fallback adapter: static HTML files and pages/ components anywhere in the tree."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Set

from ..base import DiscoveryMethod, FrameworkName, RawRoute, RouteKind
from ..normalizer import SCRIPT_EXTENSIONS, pages_router_file_to_url, static_file_to_url
from .base import AdapterKind, BaseAdapter, is_test_file

API_DIRECTORIES = ("api", "pages/api", "app/api", "src/api", "routes/api")
COMPONENT_EXTENSIONS = SCRIPT_EXTENSIONS + (".vue",)

_PAGES_SEGMENT_RE = re.compile(r"(?:^|/)pages/")


def _not_a_page_component(relative_path: str) -> bool:
    return is_test_file(relative_path) or not _PAGES_SEGMENT_RE.search(relative_path)


class GenericAdapter(BaseAdapter):
    """Used for every framework without a dedicated adapter."""

    @property
    def kind(self) -> AdapterKind:
        return AdapterKind.GENERIC

    def has_api_directory(self) -> bool:
        return any(self.project.exists(*d.split("/")) for d in API_DIRECTORIES)

    def detect(self) -> Optional[Dict[str, Any]]:
        # An unknown project has nothing conventional to look at
        if self.framework.name == FrameworkName.UNKNOWN:
            return None
        return {
            "name": self.framework.name.value,
            "has_api_directory": self.has_api_directory(),
        }

    def discover_routes(self) -> List[RawRoute]:
        routes: List[RawRoute] = []
        seen: Set[str] = set()

        def add(route: RawRoute) -> None:
            key = f"{route.method}:{route.url}"
            if key not in seen:
                seen.add(key)
                routes.append(route)

        root = self.project.root
        for fp, rel in self.iter_files(root, (".html", ".htm")):
            add(self.make_route(static_file_to_url(rel), fp, discovery_method=DiscoveryMethod.STATIC_FILE))

        for fp, rel in self.iter_files(root, COMPONENT_EXTENSIONS, exclude=_not_a_page_component):
            page_path = _PAGES_SEGMENT_RE.split(rel)[-1]
            page_path = re.sub(r"\.vue$", "", page_path)
            kind = RouteKind.API if page_path.startswith("api/") else RouteKind.PAGE
            add(self.make_route(
                pages_router_file_to_url(page_path), fp,
                discovery_method=DiscoveryMethod.FILE_CONVENTION,
                kind=kind,
            ))

        if self.has_api_directory():
            add(self.make_route("/api/health", discovery_method=DiscoveryMethod.INFERRED, kind=RouteKind.API))

        return routes
