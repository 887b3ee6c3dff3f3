"""
streamtitle_core package: episode titles from browser windows

Usage:
    from streamtitle_core import (
        BrowserTitleResolver,
        StreamProviderParserFactory,
    )

    factory = StreamProviderParserFactory()
    factory.load_prototypes()
    resolver = BrowserTitleResolver(tree_builder, read_window_title, factory)
    title = resolver.resolve_title(hwnd, "WebKit")
"""
from .config import Config, config
from .accessibility import AccessibilityTreeBuilder, AccessibleChild, Role, find_accessible_child
from .browser_engine import BrowserEngine, EngineUiHint, ENGINE_UI_HINTS, should_descend, traversal_policy
from .exceptions import StreamTitleError, ConfigurationError, NetworkError, SnapshotError
from .html_fetch import fetch_page_source
from .stream_provider import ParseSourceType, ParsingSource, ParsingElement, StreamProviderParser
from .provider_factory import StreamProviderParserFactory
from .snapshot import SnapshotTreeBuilder, load_snapshot
from .title_resolver import BrowserTitleResolver

__all__ = [
    # Core
    "Config",
    "config",
    "BrowserTitleResolver",
    "StreamProviderParserFactory",
    "StreamProviderParser",
    "ParseSourceType",
    "ParsingSource",
    "ParsingElement",
    "fetch_page_source",
    # Accessibility
    "AccessibilityTreeBuilder",
    "AccessibleChild",
    "Role",
    "find_accessible_child",
    "BrowserEngine",
    "EngineUiHint",
    "ENGINE_UI_HINTS",
    "should_descend",
    "traversal_policy",
    "SnapshotTreeBuilder",
    "load_snapshot",
    # Errors
    "StreamTitleError",
    "ConfigurationError",
    "NetworkError",
    "SnapshotError",
]
