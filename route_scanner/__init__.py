"""
Route scanner package.

Static route discovery and trust classification for web-application source
trees (Next.js, Remix, React Router, Express, and a generic fallback).
"""

__version__ = "1.0.0"

from .base import (
    Bucket,
    ClassifiedRoute,
    DiscoveryMethod,
    Framework,
    FrameworkName,
    PatternDef,
    ProjectDescriptor,
    RawRoute,
    RouteKind,
    RouteSet,
)
from .classifier import RouteClassifier, classify_route
from .config import ScannerConfig
from .detector import FrameworkDetector, detect_framework
from .errors import ConfigError, FileReadError, ManifestMissing, ScanError
from .inference import infer_base_url, infer_login_url
from .normalizer import normalize_route
from .scanner import (
    DEFAULT_ROUTES,
    LoggingScanObserver,
    ProjectScanner,
    ScanObserver,
    ScanResult,
    scan_project,
)

__all__ = [
    # Data models
    "Bucket",
    "ClassifiedRoute",
    "DiscoveryMethod",
    "Framework",
    "FrameworkName",
    "PatternDef",
    "ProjectDescriptor",
    "RawRoute",
    "RouteKind",
    "RouteSet",
    # Components
    "FrameworkDetector",
    "RouteClassifier",
    "ProjectScanner",
    "ScanObserver",
    "LoggingScanObserver",
    "ScanResult",
    "ScannerConfig",
    "DEFAULT_ROUTES",
    # Functions
    "normalize_route",
    "detect_framework",
    "classify_route",
    "infer_login_url",
    "infer_base_url",
    "scan_project",
    # Errors
    "ScanError",
    "ManifestMissing",
    "FileReadError",
    "ConfigError",
]
