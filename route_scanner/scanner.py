"""
Scanner orchestrator.

Runs Detector -> Adapter -> Classifier for one project, de-duplicates the
result, injects placeholder routes when discovery finds nothing, and infers
the base and login URLs the generated tests should use.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .adapters import AdapterKind, BaseAdapter, adapter_for
from .base import (
    Bucket,
    DiscoveryMethod,
    Framework,
    ProjectDescriptor,
    RawRoute,
    RouteKind,
    RouteSet,
)
from .classifier import RouteClassifier
from .config import ScannerConfig
from .detector import FrameworkDetector
from .inference import infer_base_url, infer_login_url
from .normalizer import normalize_route, title_for_url

logger = logging.getLogger("route_scanner.scanner")


def _default_route(url: str, method: str = "GET", kind: RouteKind = RouteKind.PAGE) -> RawRoute:
    return RawRoute(
        url=url,
        method=method,
        discovery_method=DiscoveryMethod.DEFAULT,
        kind=kind,
        title=title_for_url(url),
    )


# 3 public, 3 protected, 2 api once classified
DEFAULT_ROUTES: List[RawRoute] = [
    _default_route("/"),
    _default_route("/about"),
    _default_route("/contact"),
    _default_route("/dashboard"),
    _default_route("/profile"),
    _default_route("/settings"),
    _default_route("/api/users", kind=RouteKind.API),
    _default_route("/api/products", kind=RouteKind.API),
]


# =============================================================================
# OBSERVERS
# =============================================================================

class ScanObserver:
    """Receives scan checkpoints. Subclass and override what you need."""

    def framework_detected(self, project: ProjectDescriptor, framework: Framework) -> None:
        pass

    def adapter_selected(self, adapter: BaseAdapter, capabilities: Optional[Dict[str, Any]]) -> None:
        pass

    def routes_discovered(self, adapter: BaseAdapter, routes: List[RawRoute]) -> None:
        pass

    def defaults_injected(self, routes: List[RawRoute]) -> None:
        pass

    def scan_completed(self, result: "ScanResult") -> None:
        pass


class LoggingScanObserver(ScanObserver):
    """Writes checkpoints to the route_scanner logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def framework_detected(self, project, framework):
        version = f" {framework.version}" if framework.version else ""
        self.log.info(f"Detected framework {framework.name.value}{version} in {project.root}")

    def adapter_selected(self, adapter, capabilities):
        if capabilities is None:
            self.log.info(f"{adapter.kind.value} adapter found nothing to scan")
        else:
            self.log.debug(f"{adapter.kind.value} adapter capabilities: {capabilities}")

    def routes_discovered(self, adapter, routes):
        self.log.info(f"{adapter.kind.value} adapter discovered {len(routes)} routes "
                      f"({adapter.stats['files_scanned']} files read, "
                      f"{adapter.stats['files_errored']} unreadable)")

    def defaults_injected(self, routes):
        self.log.warning(f"No routes discovered, using {len(routes)} default routes")

    def scan_completed(self, result):
        counts = result.routes.counts()
        self.log.info(f"Found {counts['public']} public, {counts['protected']} protected, "
                      f"{counts['api']} API routes")


# =============================================================================
# RESULT
# =============================================================================

@dataclass
class ScanResult:
    """Everything a scan produces. ``to_dict`` is the downstream contract."""
    framework: Framework
    routes: RouteSet
    config: Dict[str, Any]
    adapter: AdapterKind
    discovered_count: int = 0
    defaults_injected: bool = False
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "framework": self.framework.to_dict(),
            "routes": self.routes.to_dict(),
            "config": self.config,
            "scan": {
                "adapter": self.adapter.value,
                "discoveredCount": self.discovered_count,
                "defaultsInjected": self.defaults_injected,
                "warnings": self.warnings,
                "stats": self.stats,
            },
        }


# =============================================================================
# SCANNER ORCHESTRATOR
# =============================================================================

class ProjectScanner:
    """
    Scans one project directory for routes.

    Each instance owns all of its state, so separate scanners never interfere.
    The scan never raises for project content: unreadable files, a broken
    manifest or an unrecognised framework all degrade to documented defaults.
    """

    def __init__(self, project_path: Optional[str] = None, config: Optional[ScannerConfig] = None,
                 observer: Optional[ScanObserver] = None):
        self.project_path = Path(project_path or os.getcwd())
        self.config = config or ScannerConfig()
        self.observer = observer or LoggingScanObserver()

    def scan(self) -> ScanResult:
        started = time.time()
        project = ProjectDescriptor.load(self.project_path)
        warnings = list(project.warnings)

        framework = FrameworkDetector(project).detect()
        self.observer.framework_detected(project, framework)

        adapter = adapter_for(project, framework, self.config)
        raw_routes = self._discover(adapter, warnings)

        defaults_injected = False
        if not raw_routes and self.config.inject_defaults:
            raw_routes = list(DEFAULT_ROUTES)
            defaults_injected = True
            self.observer.defaults_injected(raw_routes)

        classifier = RouteClassifier(framework)
        login_url = self.config.login_url or infer_login_url(
            r for r in raw_routes if classifier.bucket_for(r) != Bucket.API
        )

        routes = RouteSet()
        added = 0
        for raw in raw_routes:
            if routes.add(classifier.classify(raw, login_url)):
                added += 1

        result = ScanResult(
            framework=framework,
            routes=routes,
            config=self._build_config(project, framework, login_url),
            adapter=adapter.kind,
            discovered_count=0 if defaults_injected else added,
            defaults_injected=defaults_injected,
            warnings=warnings,
            stats=dict(adapter.stats, duration_seconds=round(time.time() - started, 3)),
        )
        self.observer.scan_completed(result)
        return result

    def _discover(self, adapter: BaseAdapter, warnings: List[str]) -> List[RawRoute]:
        capabilities = adapter.detect()
        self.observer.adapter_selected(adapter, capabilities)
        if capabilities is None:
            return []

        try:
            found = adapter.discover_routes()
        except OSError as e:
            message = f"Route discovery aborted in {self.project_path}: {e}"
            logger.warning(message)
            warnings.append(message)
            found = []

        routes = [dataclasses.replace(r, url=normalize_route(r.url)) for r in found]
        self.observer.routes_discovered(adapter, routes)
        return routes

    def _build_config(self, project: ProjectDescriptor, framework: Framework, login_url: str) -> Dict[str, Any]:
        return {
            "baseURL": self.config.base_url or infer_base_url(project.scripts),
            "loginURL": login_url,
            "framework": framework.to_dict(),
            "timeout": self.config.timeout_ms,
            "projectPath": str(self.project_path),
        }


def scan_project(project_path: Optional[str] = None, config: Optional[ScannerConfig] = None,
                 observer: Optional[ScanObserver] = None) -> ScanResult:
    """Convenience wrapper: ``ProjectScanner(...).scan()``."""
    return ProjectScanner(project_path, config, observer).scan()
