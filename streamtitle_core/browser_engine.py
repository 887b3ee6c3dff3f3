"""
Browser engine classification and per-engine accessibility knowledge.

Each engine exposes its address bar and tab strip differently:
- which roles are worth descending into while building the tree
- which (name, role) pairs identify the address bar
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Tuple

from .accessibility import AccessibleChild, Role


class BrowserEngine(Enum):
    """Rendering/UI engine family of a browser"""
    UNKNOWN = "unknown"
    WEBKIT = "webkit"       # Google Chrome and other Chromium based browsers
    GECKO = "gecko"         # Mozilla Firefox
    TRIDENT = "trident"     # Internet Explorer
    PRESTO = "presto"       # Opera (older versions)

    @classmethod
    def from_name(cls, engine_name: str) -> "BrowserEngine":
        """Map a player-declared engine name (e.g. "WebKit") to an engine."""
        return _ENGINE_NAMES.get(engine_name or "", cls.UNKNOWN)


_ENGINE_NAMES = {
    "WebKit": BrowserEngine.WEBKIT,
    "Gecko": BrowserEngine.GECKO,
    "Trident": BrowserEngine.TRIDENT,
    "Presto": BrowserEngine.PRESTO,
}


@dataclass(frozen=True)
class EngineUiHint:
    """Known label of an address bar element"""
    name: str
    role: int


ENGINE_UI_HINTS: Mapping[BrowserEngine, Tuple[EngineUiHint, ...]] = MappingProxyType({
    BrowserEngine.WEBKIT: (
        EngineUiHint("Address and search bar", Role.TEXT),
        EngineUiHint("Address and search bar", Role.GROUPING),
        EngineUiHint("Address", Role.GROUPING),
        EngineUiHint("Location", Role.GROUPING),
        EngineUiHint("Address field", Role.TEXT),
    ),
    BrowserEngine.GECKO: (
        EngineUiHint("Search or enter address", Role.TEXT),
        EngineUiHint("Go to a Website", Role.TEXT),
        EngineUiHint("Go to a Web Site", Role.TEXT),
    ),
    BrowserEngine.TRIDENT: (
        EngineUiHint("Address and search using Bing", Role.TEXT),
        EngineUiHint("Address and search using Google", Role.TEXT),
    ),
})


_WEBKIT_ALLOWED = frozenset({
    Role.CLIENT,
    Role.GROUPING,
    Role.PAGETABLIST,
    Role.TEXT,
    Role.TOOLBAR,
    Role.WINDOW,
})

_GECKO_ALLOWED = frozenset({
    Role.APPLICATION,
    Role.COMBOBOX,
    Role.PAGETABLIST,
    Role.TOOLBAR,
})

_TRIDENT_DENIED = frozenset({Role.PANE, Role.SCROLLBAR})

_PRESTO_DENIED = frozenset({Role.DOCUMENT, Role.PANE})


def should_descend(engine: BrowserEngine, role: int) -> bool:
    """
    Whether the tree builder should walk into the children of a node.

    Keeps the tree small by skipping rendered page content, where no
    browser chrome labels live.
    """
    if engine is BrowserEngine.WEBKIT:
        return role in _WEBKIT_ALLOWED
    if engine is BrowserEngine.GECKO:
        # Document roles are rejected along with everything else
        return role in _GECKO_ALLOWED
    if engine is BrowserEngine.TRIDENT:
        return role not in _TRIDENT_DENIED
    if engine is BrowserEngine.PRESTO:
        return role not in _PRESTO_DENIED
    return False


def traversal_policy(engine: BrowserEngine) -> Callable[[AccessibleChild], bool]:
    """Admission callback for a tree builder, bound to one engine."""
    def admit(child: AccessibleChild) -> bool:
        return should_descend(engine, child.role)
    return admit
