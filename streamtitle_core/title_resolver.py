"""
Browser Title Resolver - find the title of the episode watched in a browser

Called periodically by the tracker with the handle of a browser window. Each
call walks the window's accessibility tree, reads the address bar and lets
the matching stream provider turn (url, window title) into an episode title.

An empty string means "no title this cycle"; it is the normal answer between
successful resolutions, never an error.
"""

from typing import Any, Callable, List, Optional

from .accessibility import (
    AccessibilityTreeBuilder,
    AccessibleChild,
    Role,
    find_accessible_child,
)
from .browser_engine import ENGINE_UI_HINTS, BrowserEngine, traversal_policy
from .diagnostics import get_logger
from .provider_factory import StreamProviderParserFactory

logger = get_logger(__name__)

# Tab strip of Internet Explorer
TRIDENT_TAB_ROW = "Tab Row"


def find_tab_container(engine: BrowserEngine, children: List[AccessibleChild]) -> Optional[AccessibleChild]:
    """Node whose children are the browser tabs."""
    if engine in (BrowserEngine.WEBKIT, BrowserEngine.GECKO):
        return find_accessible_child(children, "", Role.PAGETABLIST)
    if engine is BrowserEngine.TRIDENT:
        return find_accessible_child(children, TRIDENT_TAB_ROW, 0)
    if engine is BrowserEngine.PRESTO:
        return find_accessible_child(children, "", Role.CLIENT)
    return None


def find_address_bar(engine: BrowserEngine, children: List[AccessibleChild]) -> Optional[AccessibleChild]:
    """Node whose value is the URL of the active tab."""
    if engine is BrowserEngine.PRESTO:
        return _find_presto_address_bar(children)

    for hint in ENGINE_UI_HINTS.get(engine, ()):
        child = find_accessible_child(children, hint.name, hint.role)
        if child is not None:
            return child
    return None


def _find_presto_address_bar(children: List[AccessibleChild]) -> Optional[AccessibleChild]:
    # client -> first child's toolbar -> combo box -> text
    client = find_accessible_child(children, "", Role.CLIENT)
    if client is None or not client.children:
        return None
    toolbar = find_accessible_child(client.children[0].children, "", Role.TOOLBAR)
    if toolbar is None or not toolbar.children:
        return None
    combo_box = find_accessible_child(toolbar.children, "", Role.COMBOBOX)
    if combo_box is None or not combo_box.children:
        return None
    return find_accessible_child(combo_box.children, "", Role.TEXT)


class BrowserTitleResolver:
    """
    Resolves the episode title shown in a browser window.

    Args:
        tree_builder: Builds the accessibility tree of a window
        window_title_reader: Returns the title text of a window
        provider_factory: Loaded stream provider catalog

    Attributes:
        current_title: Last resolved title; may also be set by the caller
        last_window_title: Window title seen by the previous call
    """

    def __init__(
        self,
        tree_builder: AccessibilityTreeBuilder,
        window_title_reader: Callable[[Any], str],
        provider_factory: StreamProviderParserFactory,
    ):
        self.tree_builder = tree_builder
        self.window_title_reader = window_title_reader
        self.provider_factory = provider_factory
        self.current_title = ""
        self.last_window_title: Optional[str] = None

    def reset(self):
        """Forget the memoized window title and resolved title"""
        self.current_title = ""
        self.last_window_title = None

    def resolve_title(self, window_handle: Any, engine_name: str, episode_tracked: bool = False) -> str:
        """
        Resolve the episode title of a browser window.

        Args:
            window_handle: Handle passed through to the collaborators
            engine_name: Engine declared by the player ("WebKit", "Gecko", ...)
            episode_tracked: Whether an episode is currently being tracked;
                if so only checks that its tab is still open

        Returns:
            Episode title, or "" if none could be resolved
        """
        window_title = self.window_title_reader(window_handle) or ""
        if window_title == self.last_window_title:
            return self.current_title
        self.last_window_title = window_title

        engine = BrowserEngine.from_name(engine_name)
        if engine is BrowserEngine.UNKNOWN:
            logger.debug(f"Unsupported browser engine: {engine_name!r}")
            self.current_title = ""
            return ""

        self.current_title = self._resolve_from_tree(window_handle, engine, window_title, episode_tracked)
        return self.current_title

    def _resolve_from_tree(
        self,
        window_handle: Any,
        engine: BrowserEngine,
        window_title: str,
        episode_tracked: bool,
    ) -> str:
        tree = self.tree_builder.build_tree(window_handle, traversal_policy(engine))
        if tree is None:
            logger.debug("No accessibility tree for window")
            return ""

        try:
            if episode_tracked:
                return self._check_open_tabs(engine, tree.children)

            address_bar = find_address_bar(engine, tree.children)
            if address_bar is None:
                logger.debug(f"Address bar not found ({engine.value})")
                return ""
            return self.title_from_stream_provider(address_bar.value, window_title)
        finally:
            self.tree_builder.release(tree)

    def _check_open_tabs(self, engine: BrowserEngine, children: List[AccessibleChild]) -> str:
        tabs = find_tab_container(engine, children)
        if tabs is not None:
            for tab in tabs.children:
                if self.current_title in tab.name:
                    # Tab is still open, just not active
                    return self.current_title
        logger.debug(f"Tab of {self.current_title!r} was closed")
        return ""

    def title_from_stream_provider(self, url: str, title: str) -> str:
        """Episode title of the first provider supporting the URL."""
        if not url or not title:
            return ""

        parser = self.provider_factory.create_stream_provider_parser(url, title)
        if parser is None:
            logger.debug(f"No stream provider for {url}")
            return ""
        return parser.parse_title()
