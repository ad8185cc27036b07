"""
Framework detector.

Picks exactly one framework for a project from its manifest dependencies,
checked against a fixed priority table so that projects declaring several
overlapping frameworks resolve the same way every time. Without a usable
manifest it falls back to directory-presence heuristics.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from .base import Framework, FrameworkName, ProjectDescriptor

logger = logging.getLogger("route_scanner.detector")


class FrameworkRule(NamedTuple):
    """One row of the priority table."""
    name: FrameworkName
    packages: Tuple[str, ...]
    require_all: bool = False
    script_hint: Optional[str] = None


FRAMEWORK_PRIORITY: List[FrameworkRule] = [
    FrameworkRule(FrameworkName.NEXTJS, ("next",)),
    FrameworkRule(FrameworkName.REMIX, ("@shopify/shopify-app-remix", "@remix-run/react", "@remix-run/node")),
    FrameworkRule(FrameworkName.REACT_ROUTER, ("react-router-dom", "@reach/router")),
    FrameworkRule(FrameworkName.VUE_ROUTER, ("vue-router",)),
    FrameworkRule(FrameworkName.EXPRESS, ("express",)),
    FrameworkRule(FrameworkName.NUXT, ("nuxt", "@nuxt/core", "@nuxt/kit")),
    FrameworkRule(FrameworkName.VITE_REACT, ("vite", "react"), require_all=True),
    FrameworkRule(FrameworkName.CREATE_REACT_APP, ("react-scripts",), script_hint="react-scripts"),
    FrameworkRule(FrameworkName.REACT, ("react",)),
    FrameworkRule(FrameworkName.VUE, ("vue",)),
]

STATIC_SITE_MARKERS = ("index.html", "public", "src")


class FrameworkDetector:
    """Selects the framework for a ProjectDescriptor. Never raises."""

    def __init__(self, project: ProjectDescriptor):
        self.project = project
        self._flag_builders: Dict[FrameworkName, Callable[[], Dict[str, Any]]] = {
            FrameworkName.NEXTJS: self._nextjs_flags,
            FrameworkName.REMIX: self._remix_flags,
            FrameworkName.REACT_ROUTER: self._react_router_flags,
            FrameworkName.EXPRESS: self._express_flags,
            FrameworkName.VITE_REACT: self._vite_react_flags,
        }

    def detect(self) -> Framework:
        if not self.project.has_manifest:
            logger.debug("No manifest in %s, checking for static files", self.project.root)
            return self.detect_static()

        try:
            for rule in FRAMEWORK_PRIORITY:
                version = self._match(rule)
                if version is None:
                    continue
                builder = self._flag_builders.get(rule.name)
                flags = builder() if builder else {}
                return Framework(name=rule.name, version=version or None, flags=flags)
        except OSError as e:
            logger.warning("Framework detection failed for %s: %s", self.project.root, e)
            return Framework.unknown()

        logger.debug("No known framework dependency in %s", self.project.root)
        return self.detect_static()

    def detect_static(self) -> Framework:
        """Directory-presence fallback used when the manifest says nothing."""
        if any(self.project.exists(marker) for marker in STATIC_SITE_MARKERS):
            return Framework(name=FrameworkName.STATIC_SITE, flags={"has_static_files": True})
        return Framework.unknown()

    def _match(self, rule: FrameworkRule) -> Optional[str]:
        """Return the matched version ("" when matched without one), or None."""
        deps = self.project.dependencies
        present = [pkg for pkg in rule.packages if pkg in deps]

        if rule.require_all:
            if len(present) == len(rule.packages):
                return deps[rule.packages[0]]
            return None
        if present:
            return deps[present[0]]
        if rule.script_hint:
            start = self.project.scripts.get("start", "")
            if rule.script_hint in start:
                return self.project.dependencies.get("react", "")
        return None

    # -------------------------------------------------------------------------
    # Structural flags
    # -------------------------------------------------------------------------

    def _nextjs_flags(self) -> Dict[str, Any]:
        return {
            "has_app_router": self.project.exists("app") or self.project.exists("src", "app"),
            "has_pages_router": self.project.exists("pages") or self.project.exists("src", "pages"),
        }

    def _remix_flags(self) -> Dict[str, Any]:
        return {
            "has_routes_dir": self.project.exists("app", "routes"),
            "is_shopify": any(dep.startswith("@shopify/") for dep in self.project.dependencies),
        }

    def _react_router_flags(self) -> Dict[str, Any]:
        router_type = "react-router-dom" if self.project.has_dependency("react-router-dom") else "reach-router"
        return {"router_type": router_type}

    def _express_flags(self) -> Dict[str, Any]:
        return {"main_file": self.project.main or "index.js"}

    def _vite_react_flags(self) -> Dict[str, Any]:
        return {"react_version": self.project.dependencies.get("react")}


def detect_framework(project: ProjectDescriptor) -> Framework:
    return FrameworkDetector(project).detect()
