"""Next.js adapter: App Router (app/**/page|route) and Pages Router (pages/**)."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..base import DiscoveryMethod, FrameworkName, RawRoute, RouteKind
from ..normalizer import app_router_file_to_url, pages_router_file_to_url
from .base import AdapterKind, BaseAdapter, is_test_file

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

# Route handlers: export async function POST() / export const GET = ... / export { h as GET }
_HANDLER_FUNCTION_RE = re.compile(r"export\s+(?:async\s+)?function\s+(%s)\b" % "|".join(HTTP_METHODS))
_HANDLER_CONST_RE = re.compile(r"export\s+(?:const|let|var)\s+(%s)\s*=" % "|".join(HTTP_METHODS))
_HANDLER_REEXPORT_RE = re.compile(r"export\s*\{([^}]*)\}")

_PAGES_RESERVED = {"_app", "_document", "_error", "404", "500", "_middleware", "middleware"}
_APP_PAGE_RE = re.compile(r"(?:^|/)page\.(?:js|jsx|ts|tsx|mjs)$")
_APP_ROUTE_RE = re.compile(r"(?:^|/)route\.(?:js|jsx|ts|tsx|mjs)$")


def extract_route_handler_methods(content: str) -> List[str]:
    """HTTP methods exported by an App Router route.ts, in source order."""
    found = []
    hits = [(m.start(), m.group(1)) for m in _HANDLER_FUNCTION_RE.finditer(content)]
    hits += [(m.start(), m.group(1)) for m in _HANDLER_CONST_RE.finditer(content)]
    for m in _HANDLER_REEXPORT_RE.finditer(content):
        offset = m.start(1)
        for entry in m.group(1).split(","):
            exported = entry.split(" as ")[-1].strip()
            if exported in HTTP_METHODS:
                hits.append((offset, exported))
            offset += len(entry) + 1

    for _, method in sorted(hits):
        if method not in found:
            found.append(method)
    return found


def _is_private(relative_path: str) -> bool:
    # _folders are private in the App Router and never routable
    return any(part.startswith("_") for part in relative_path.split("/")[:-1])


def _is_reserved_page(relative_path: str) -> bool:
    stem = relative_path.rsplit("/", 1)[-1].split(".", 1)[0]
    return stem in _PAGES_RESERVED or is_test_file(relative_path)


class NextjsAdapter(BaseAdapter):
    """File-convention discovery for Next.js projects."""

    @property
    def kind(self) -> AdapterKind:
        return AdapterKind.NEXTJS

    def _router_dir(self, name: str) -> Optional[Path]:
        for candidate in (self.project.path(name), self.project.path("src", name)):
            if candidate.is_dir():
                return candidate
        return None

    def detect(self) -> Optional[Dict[str, Any]]:
        if self.framework.name != FrameworkName.NEXTJS and not self.project.has_dependency("next"):
            return None
        app_dir = self._router_dir("app")
        pages_dir = self._router_dir("pages")
        return {
            "name": "nextjs",
            "version": self.project.dependencies.get("next"),
            "has_app_router": app_dir is not None,
            "has_pages_router": pages_dir is not None,
            "app_dir": str(app_dir) if app_dir else None,
            "pages_dir": str(pages_dir) if pages_dir else None,
        }

    def discover_routes(self) -> List[RawRoute]:
        routes: List[RawRoute] = []
        app_dir = self._router_dir("app")
        if app_dir is not None:
            routes.extend(self.scan_app_router(app_dir))
        pages_dir = self._router_dir("pages")
        if pages_dir is not None:
            routes.extend(self.scan_pages_router(pages_dir))
        return routes

    def scan_app_router(self, app_dir: Path) -> List[RawRoute]:
        pages: List[RawRoute] = []
        handlers: List[RawRoute] = []

        for fp, rel in self.iter_files(app_dir, exclude=_is_private):
            if _APP_PAGE_RE.search(rel):
                url = app_router_file_to_url(rel)
                kind = RouteKind.API if "/api/" in "/" + rel else RouteKind.PAGE
                pages.append(self.make_route(url, fp, discovery_method=DiscoveryMethod.FILE_CONVENTION, kind=kind))
            elif _APP_ROUTE_RE.search(rel):
                url = app_router_file_to_url(rel)
                content = self.try_read_source(fp)
                methods = extract_route_handler_methods(content) if content else []
                for method in methods or ["GET"]:
                    handlers.append(self.make_route(
                        url, fp, method=method,
                        discovery_method=DiscoveryMethod.FILE_CONVENTION,
                        kind=RouteKind.API,
                    ))

        return pages + handlers

    def scan_pages_router(self, pages_dir: Path) -> List[RawRoute]:
        routes: List[RawRoute] = []
        for fp, rel in self.iter_files(pages_dir, exclude=_is_reserved_page):
            url = pages_router_file_to_url(rel)
            kind = RouteKind.API if rel.startswith("api/") else RouteKind.PAGE
            routes.append(self.make_route(url, fp, discovery_method=DiscoveryMethod.FILE_CONVENTION, kind=kind))
        return routes
