"""
Login and base URL inference.

Both are pure functions of data the scan has already collected; nothing here
touches the network or the filesystem.
"""

import re
from typing import Dict, Iterable, Optional

from .base import RawRoute
from .classifier import DEFAULT_LOGIN_URL

DEFAULT_BASE_URL = "http://localhost:3000"

LOGIN_MARKERS = ("login", "signin", "auth", "authenticate")

# Checked in this order; 3000 wins over 8080 if a script mentions both
KNOWN_PORTS = ("3000", "8080", "5173")

_EXPLICIT_PORT_RE = re.compile(r"(?:--port[=\s]+|-p\s+|\bPORT=)(\d{2,5})\b")


def infer_login_url(routes: Iterable[RawRoute]) -> str:
    """First route in discovery order that looks like a login page."""
    for route in routes:
        if any(marker in route.url for marker in LOGIN_MARKERS):
            return route.url
    return DEFAULT_LOGIN_URL


def dev_script(scripts: Dict[str, str]) -> Optional[str]:
    return scripts.get("dev") or scripts.get("start")


def infer_base_url(scripts: Dict[str, str]) -> str:
    """``http://localhost:<port>`` from the dev (or start) script."""
    script = dev_script(scripts)
    if not script:
        return DEFAULT_BASE_URL

    explicit = _EXPLICIT_PORT_RE.search(script)
    if explicit:
        return f"http://localhost:{explicit.group(1)}"

    for port in KNOWN_PORTS:
        if port in script:
            return f"http://localhost:{port}"
    return DEFAULT_BASE_URL
