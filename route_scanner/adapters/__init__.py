"""
Framework adapters.

The adapter family is closed: each AdapterKind maps to exactly one class, and
every FrameworkName maps to one AdapterKind. Frameworks without a dedicated
adapter use the generic fallback.
"""

from typing import Dict, Optional, Type

from ..base import Framework, FrameworkName, ProjectDescriptor
from ..config import ScannerConfig
from .base import AdapterKind, BaseAdapter, extract_with_patterns, is_test_file
from .express import ExpressAdapter, extract_express_routes
from .generic import GenericAdapter
from .nextjs import NextjsAdapter, extract_route_handler_methods
from .react import ReactAdapter, extract_react_routes
from .remix import RemixAdapter

ADAPTERS: Dict[AdapterKind, Type[BaseAdapter]] = {
    AdapterKind.NEXTJS: NextjsAdapter,
    AdapterKind.REMIX: RemixAdapter,
    AdapterKind.REACT: ReactAdapter,
    AdapterKind.EXPRESS: ExpressAdapter,
    AdapterKind.GENERIC: GenericAdapter,
}

FRAMEWORK_ADAPTERS: Dict[FrameworkName, AdapterKind] = {
    FrameworkName.NEXTJS: AdapterKind.NEXTJS,
    FrameworkName.REMIX: AdapterKind.REMIX,
    FrameworkName.REACT: AdapterKind.REACT,
    FrameworkName.REACT_ROUTER: AdapterKind.REACT,
    FrameworkName.EXPRESS: AdapterKind.EXPRESS,
}


def adapter_kind_for(framework: Framework) -> AdapterKind:
    return FRAMEWORK_ADAPTERS.get(framework.name, AdapterKind.GENERIC)


def adapter_for(project: ProjectDescriptor, framework: Framework,
                config: Optional[ScannerConfig] = None) -> BaseAdapter:
    """Instantiate the adapter responsible for framework."""
    return ADAPTERS[adapter_kind_for(framework)](project, framework, config)


__all__ = [
    "AdapterKind",
    "BaseAdapter",
    "ADAPTERS",
    "FRAMEWORK_ADAPTERS",
    "adapter_for",
    "adapter_kind_for",
    "extract_with_patterns",
    "is_test_file",
    # Adapters
    "NextjsAdapter",
    "RemixAdapter",
    "ReactAdapter",
    "ExpressAdapter",
    "GenericAdapter",
    # Per-framework extractors
    "extract_express_routes",
    "extract_react_routes",
    "extract_route_handler_methods",
]
