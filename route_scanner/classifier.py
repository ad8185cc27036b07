"""
Route classifier.

Sorts raw routes into public / protected / api buckets with substring and
prefix heuristics. The rules are tried in a fixed order and the first one
that fires wins, so a path like /api/admin is always "api", never
"protected". False positives are expected; this is triage, not proof.
"""

import re
from typing import Tuple

from .base import Bucket, ClassifiedRoute, Framework, FrameworkName, RawRoute, RouteKind
from .normalizer import title_for_url

DEFAULT_LOGIN_URL = "/login"

API_KEYWORD_PATTERNS = [
    r"/api/",
    r"/v\d+(?:/|$)",
    r"/graphql",
    r"/webhook",
    r"/rest/",
    r"/service/",
    r"/data/",
]

PUBLIC_API_PATTERNS = [
    r"^/(?:api/)?(?:v\d+/)?(?:health|healthz|status|ping|public)(?:/|$)",
]

PROTECTED_KEYWORDS: Tuple[str, ...] = (
    "dashboard", "admin", "profile", "settings", "account",
    "user", "management", "private", "secure", "auth",
)

# Embedded Shopify apps live under /app and need a session everywhere there
SHOPIFY_PROTECTED_PREFIXES: Tuple[str, ...] = ("/app", "/billing", "/subscription", "/install")


def _has_prefix(url: str, prefix: str) -> bool:
    return url == prefix or url.startswith(prefix + "/")


class RouteClassifier:
    """Pure mapping from (RawRoute, Framework) to ClassifiedRoute."""

    def __init__(self, framework: Framework):
        self.framework = framework
        self.protected_prefixes: Tuple[str, ...] = ()
        if framework.name == FrameworkName.REMIX:
            self.protected_prefixes = SHOPIFY_PROTECTED_PREFIXES

    def is_api(self, route: RawRoute) -> bool:
        if route.kind == RouteKind.API:
            return True
        if _has_prefix(route.url, "/api"):
            return True
        if route.method != "GET":
            return True
        return any(re.search(p, route.url, re.IGNORECASE) for p in API_KEYWORD_PATTERNS)

    def is_public_api(self, url: str) -> bool:
        return any(re.search(p, url, re.IGNORECASE) for p in PUBLIC_API_PATTERNS)

    def is_protected(self, url: str) -> bool:
        lowered = url.lower()
        if any(keyword in lowered for keyword in PROTECTED_KEYWORDS):
            return True
        return any(_has_prefix(lowered, prefix) for prefix in self.protected_prefixes)

    def bucket_for(self, route: RawRoute) -> Bucket:
        if self.is_api(route):
            return Bucket.API
        if self.is_protected(route.url):
            return Bucket.PROTECTED
        return Bucket.PUBLIC

    def classify(self, route: RawRoute, login_url: str = DEFAULT_LOGIN_URL) -> ClassifiedRoute:
        bucket = self.bucket_for(route)
        common = dict(
            url=route.url,
            method=route.method,
            bucket=bucket,
            title=route.title or title_for_url(route.url),
            source_file=route.source_file,
            discovery_method=route.discovery_method,
            framework=route.framework,
            component=route.component,
        )

        if bucket == Bucket.API:
            requires_auth = not self.is_public_api(route.url)
            return ClassifiedRoute(
                requires_auth=requires_auth,
                expected_status=401 if requires_auth else 200,
                **common,
            )
        if bucket == Bucket.PROTECTED:
            return ClassifiedRoute(requires_auth=True, expected_redirect=login_url, **common)
        return ClassifiedRoute(requires_auth=False, expected_status=200, **common)


def classify_route(route: RawRoute, framework: Framework, login_url: str = DEFAULT_LOGIN_URL) -> ClassifiedRoute:
    return RouteClassifier(framework).classify(route, login_url)
