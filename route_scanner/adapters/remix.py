"""Remix adapter (including Shopify Remix apps): flat file routes under app/routes."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from ..base import DiscoveryMethod, FrameworkName, RawRoute, RouteKind
from ..normalizer import remix_file_to_url
from .base import AdapterKind, BaseAdapter, is_test_file

_LOADER_RE = re.compile(r"export\s+(?:async\s+)?(?:function|const|let)\s+loader\b")
_ACTION_RE = re.compile(r"export\s+(?:async\s+)?(?:function|const|let)\s+action\b")
_DEFAULT_EXPORT_RE = re.compile(r"export\s+default\b")

REMIX_PACKAGES = ("@remix-run/react", "@remix-run/node", "@shopify/shopify-app-remix")


def route_methods(content: Optional[str]) -> List[str]:
    """GET for a loader or UI, POST for an action."""
    if not content:
        return ["GET"]
    methods = []
    if _LOADER_RE.search(content) or _DEFAULT_EXPORT_RE.search(content):
        methods.append("GET")
    if _ACTION_RE.search(content):
        methods.append("POST")
    return methods or ["GET"]


def _is_route_module(relative_path: str) -> bool:
    # Flat files are routes; inside a folder only route.* is
    if "/" not in relative_path:
        return True
    return relative_path.rsplit("/", 1)[-1].split(".", 1)[0] == "route"


class RemixAdapter(BaseAdapter):
    """File-convention discovery for Remix route modules."""

    @property
    def kind(self) -> AdapterKind:
        return AdapterKind.REMIX

    def detect(self) -> Optional[Dict[str, Any]]:
        if self.framework.name != FrameworkName.REMIX and not any(
                self.project.has_dependency(p) for p in REMIX_PACKAGES):
            return None
        return {
            "name": "remix",
            "has_routes_dir": self.project.path("app", "routes").is_dir(),
            "is_shopify": any(dep.startswith("@shopify/") for dep in self.project.dependencies),
        }

    def discover_routes(self) -> List[RawRoute]:
        routes: List[RawRoute] = []
        routes_dir = self.project.path("app", "routes")

        for fp, rel in self.iter_files(routes_dir, exclude=is_test_file):
            if not _is_route_module(rel):
                continue
            url = remix_file_to_url(rel)
            content = self.try_read_source(fp)

            # No default export means a resource route: it serves data, not UI
            is_resource = content is not None and not _DEFAULT_EXPORT_RE.search(content)
            kind = RouteKind.API if (is_resource or "webhooks" in rel) else RouteKind.PAGE

            for method in route_methods(content):
                routes.append(self.make_route(
                    url, fp, method=method,
                    discovery_method=DiscoveryMethod.FILE_CONVENTION,
                    kind=kind,
                ))
        return routes
