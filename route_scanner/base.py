"""
Shared data models for the route scanner.

Adapters, the classifier and the orchestrator all import from this module.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple

from .errors import ManifestMissing

logger = logging.getLogger("route_scanner.base")

MANIFEST_NAME = "package.json"


# =============================================================================
# ENUMS
# =============================================================================

class FrameworkName(Enum):
    NEXTJS = "nextjs"
    REMIX = "remix"
    REACT_ROUTER = "react-router"
    VUE_ROUTER = "vue-router"
    EXPRESS = "express"
    NUXT = "nuxt"
    VITE_REACT = "vite-react"
    CREATE_REACT_APP = "create-react-app"
    REACT = "react"
    VUE = "vue"
    STATIC_SITE = "static-site"
    UNKNOWN = "unknown"


class Bucket(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    API = "api"


class RouteKind(Enum):
    """Adapter-side hint about what kind of file or call produced a route."""
    PAGE = "page"
    API = "api"
    MOUNT = "mount"


class DiscoveryMethod(Enum):
    FILE_CONVENTION = "file-convention"
    CODE_PATTERN = "code-pattern"
    MOUNT = "mount"
    STATIC_FILE = "static-file"
    INFERRED = "inferred"
    DEFAULT = "default"


# =============================================================================
# DATA STRUCTURES
# =============================================================================

class PatternDef(NamedTuple):
    """Definition of a route-registration pattern."""
    regex: str
    label: str
    method_group: Optional[int] = None   # Regex group for HTTP method
    route_group: Optional[int] = None    # Regex group for route path
    default_method: str = "GET"


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass
class ProjectDescriptor:
    """What the scanner knows about a project before looking at any source."""
    root: Path
    has_manifest: bool = False
    dependencies: Dict[str, str] = field(default_factory=dict)
    scripts: Dict[str, str] = field(default_factory=dict)
    main: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def load(cls, root: Any) -> "ProjectDescriptor":
        """Build a descriptor from ``<root>/package.json``, degrading if it is unusable."""
        root = Path(root)
        try:
            manifest = load_manifest(root)
        except ManifestMissing as e:
            descriptor = cls(root=root)
            if e.reason:
                descriptor.warnings.append(str(e))
                logger.warning(str(e))
            else:
                logger.debug(str(e))
            return descriptor

        dependencies: Dict[str, str] = {}
        for section in ("dependencies", "devDependencies"):
            entries = manifest.get(section)
            if isinstance(entries, dict):
                dependencies.update({str(k): str(v) for k, v in entries.items()})

        scripts = manifest.get("scripts")
        scripts = {str(k): str(v) for k, v in scripts.items()} if isinstance(scripts, dict) else {}
        main = manifest.get("main") if isinstance(manifest.get("main"), str) else None

        return cls(
            root=root,
            has_manifest=True,
            dependencies=dependencies,
            scripts=scripts,
            main=main,
        )

    def has_dependency(self, name: str) -> bool:
        return name in self.dependencies

    def path(self, *parts: str) -> Path:
        return self.root.joinpath(*parts)

    def exists(self, *parts: str) -> bool:
        try:
            return self.path(*parts).exists()
        except OSError:
            return False


def load_manifest(root: Path) -> Dict[str, Any]:
    """Read and parse package.json. Raises ManifestMissing when it cannot."""
    manifest_path = root / MANIFEST_NAME
    if not manifest_path.is_file():
        raise ManifestMissing(str(manifest_path))
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise ManifestMissing(str(manifest_path), reason=str(e)) from e
    if not isinstance(data, dict):
        raise ManifestMissing(str(manifest_path), reason="top-level value is not an object")
    return data


@dataclass(frozen=True)
class Framework:
    """The framework chosen for a scan, with structural flags."""
    name: FrameworkName
    version: Optional[str] = None
    flags: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def unknown(cls) -> "Framework":
        return cls(name=FrameworkName.UNKNOWN)

    def flag(self, key: str, default: Any = None) -> Any:
        return self.flags.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name.value, "version": self.version}
        data.update({_camel(k): v for k, v in self.flags.items()})
        return data


@dataclass(frozen=True)
class RawRoute:
    """A route as an adapter found it, before classification."""
    url: str
    method: str = "GET"
    source_file: Optional[str] = None
    discovery_method: DiscoveryMethod = DiscoveryMethod.CODE_PATTERN
    kind: RouteKind = RouteKind.PAGE
    title: Optional[str] = None
    component: Optional[str] = None
    framework: Optional[str] = None


@dataclass(frozen=True)
class ClassifiedRoute:
    """A route with its trust bucket and auth expectation."""
    url: str
    method: str
    bucket: Bucket
    requires_auth: bool
    title: str
    source_file: Optional[str] = None
    discovery_method: DiscoveryMethod = DiscoveryMethod.CODE_PATTERN
    framework: Optional[str] = None
    component: Optional[str] = None
    expected_status: Optional[int] = None
    expected_redirect: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.method, self.url)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "url": self.url,
            "title": self.title,
            "method": self.method,
            "file": self.source_file,
            "framework": self.framework,
            "discoveryMethod": self.discovery_method.value,
            "requiresAuth": self.requires_auth,
        }
        if self.component:
            data["component"] = self.component
        if self.expected_redirect is not None:
            data["expectedRedirect"] = self.expected_redirect
        else:
            data["expectedStatus"] = self.expected_status
        return data


@dataclass
class RouteSet:
    """Three buckets of classified routes, de-duplicated on (method, url)."""
    public: List[ClassifiedRoute] = field(default_factory=list)
    protected: List[ClassifiedRoute] = field(default_factory=list)
    api: List[ClassifiedRoute] = field(default_factory=list)

    def bucket(self, bucket: Bucket) -> List[ClassifiedRoute]:
        return getattr(self, bucket.value)

    def add(self, route: ClassifiedRoute) -> bool:
        """Append a route to its bucket. Returns False if an equal key is already there."""
        target = self.bucket(route.bucket)
        if any(existing.key == route.key for existing in target):
            return False
        target.append(route)
        return True

    def __iter__(self) -> Iterator[ClassifiedRoute]:
        yield from self.public
        yield from self.protected
        yield from self.api

    def __len__(self) -> int:
        return len(self.public) + len(self.protected) + len(self.api)

    def counts(self) -> Dict[str, int]:
        return {b.value: len(self.bucket(b)) for b in Bucket}

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {b.value: [r.to_dict() for r in self.bucket(b)] for b in Bucket}
