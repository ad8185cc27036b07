"""
BaseAdapter and shared helpers for the framework adapters.

An adapter answers two questions for one framework: does this project look
like it uses me (``detect``), and which routes can I find (``discover_routes``).
"""

from __future__ import annotations

import logging
import os
import re
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..base import DiscoveryMethod, Framework, PatternDef, ProjectDescriptor, RawRoute, RouteKind
from ..config import ScannerConfig
from ..errors import FileReadError
from ..normalizer import SCRIPT_EXTENSIONS, title_for_url

logger = logging.getLogger("route_scanner.adapters")

_TEST_FILE_RE = re.compile(r"\.(?:test|spec)\.[^/]+$")


class AdapterKind(Enum):
    NEXTJS = "nextjs"
    REMIX = "remix"
    REACT = "react"
    EXPRESS = "express"
    GENERIC = "generic"


def is_test_file(relative_path: str) -> bool:
    return bool(_TEST_FILE_RE.search(relative_path))


def extract_with_patterns(content: str, patterns: Iterable[PatternDef]) -> List[Tuple[str, str, PatternDef]]:
    """Run patterns in priority order, returning (METHOD, path, pattern) hits."""
    results = []
    for pattern_def in patterns:
        try:
            for match in re.finditer(pattern_def.regex, content, re.MULTILINE | re.IGNORECASE):
                groups = match.groups()

                method = pattern_def.default_method
                if pattern_def.method_group is not None and len(groups) >= pattern_def.method_group:
                    method = groups[pattern_def.method_group - 1] or method

                route = None
                if pattern_def.route_group is not None and len(groups) >= pattern_def.route_group:
                    route = groups[pattern_def.route_group - 1]
                if not route:
                    continue

                results.append((method.upper(), route, pattern_def))
        except re.error:
            continue
    return results


class BaseAdapter(ABC):
    """
    Abstract base class for all framework adapters.

    Files are visited one at a time in sorted order so discovery order is
    stable between runs.
    """

    def __init__(self, project: ProjectDescriptor, framework: Framework,
                 config: Optional[ScannerConfig] = None):
        self.project = project
        self.framework = framework
        self.config = config or ScannerConfig()
        self.stats = {"files_scanned": 0, "files_skipped": 0, "files_errored": 0}

    @property
    @abstractmethod
    def kind(self) -> AdapterKind:
        """Which member of the adapter family this is."""

    @abstractmethod
    def detect(self) -> Optional[Dict[str, Any]]:
        """Return the capabilities found in the project, or None if not applicable."""

    @abstractmethod
    def discover_routes(self) -> List[RawRoute]:
        """Return raw routes in discovery order."""

    # -------------------------------------------------------------------------
    # File access
    # -------------------------------------------------------------------------

    def iter_files(self, base_dir: Path, extensions: Iterable[str] = SCRIPT_EXTENSIONS,
                   exclude: Optional[Callable[[str], bool]] = None) -> Iterator[Tuple[Path, str]]:
        """Yield (path, posix path relative to base_dir) for matching files."""
        if not base_dir.is_dir():
            return
        wanted: Set[str] = {ext.lower() for ext in extensions}
        ignore_dirs = self.config.ignore_dirs

        for root, dirs, files in os.walk(base_dir):
            dirs[:] = sorted(d for d in dirs if d not in ignore_dirs)
            for name in sorted(files):
                fp = Path(root) / name
                if fp.suffix.lower() not in wanted:
                    continue
                rel = fp.relative_to(base_dir).as_posix()
                if exclude and exclude(rel):
                    self.stats["files_skipped"] += 1
                    continue
                yield fp, rel

    def read_source(self, path: Path) -> str:
        """Read a file as UTF-8 text. Raises FileReadError for anything unusable."""
        try:
            size_mb = path.stat().st_size / (1024 * 1024)
            if size_mb > self.config.max_file_size_mb:
                raise FileReadError(str(path), f"{size_mb:.1f}MB exceeds {self.config.max_file_size_mb}MB")
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise FileReadError(str(path), str(e)) from e

        if b"\x00" in data:
            raise FileReadError(str(path), "binary content")
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileReadError(str(path), f"not UTF-8: {e}") from e

    def try_read_source(self, path: Path) -> Optional[str]:
        """read_source, but a failure just means this file contributes nothing."""
        try:
            content = self.read_source(path)
        except FileReadError as e:
            logger.debug(str(e))
            self.stats["files_errored"] += 1
            return None
        self.stats["files_scanned"] += 1
        return content

    def source_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.project.root).as_posix()
        except ValueError:
            return str(path)

    # -------------------------------------------------------------------------
    # Route construction
    # -------------------------------------------------------------------------

    def make_route(self, url: str, path: Optional[Path] = None, method: str = "GET",
                   discovery_method: DiscoveryMethod = DiscoveryMethod.CODE_PATTERN,
                   kind: RouteKind = RouteKind.PAGE, component: Optional[str] = None) -> RawRoute:
        return RawRoute(
            url=url,
            method=method.upper(),
            source_file=self.source_path(path) if path is not None else None,
            discovery_method=discovery_method,
            kind=kind,
            title=title_for_url(url),
            component=component,
            framework=self.framework.name.value,
        )
