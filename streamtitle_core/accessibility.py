"""
Accessibility tree model and node search.

The tree itself is produced by an external builder (MSAA on Windows, or a
snapshot file, see snapshot.py). This module only reads it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, Iterable, List, Optional


class Role(IntEnum):
    """MSAA ROLE_SYSTEM_* values"""
    TITLEBAR = 0x01
    MENUBAR = 0x02
    SCROLLBAR = 0x03
    GRIP = 0x04
    SOUND = 0x05
    CURSOR = 0x06
    CARET = 0x07
    ALERT = 0x08
    WINDOW = 0x09
    CLIENT = 0x0A
    MENUPOPUP = 0x0B
    MENUITEM = 0x0C
    TOOLTIP = 0x0D
    APPLICATION = 0x0E
    DOCUMENT = 0x0F
    PANE = 0x10
    CHART = 0x11
    DIALOG = 0x12
    BORDER = 0x13
    GROUPING = 0x14
    SEPARATOR = 0x15
    TOOLBAR = 0x16
    STATUSBAR = 0x17
    TABLE = 0x18
    COLUMNHEADER = 0x19
    ROWHEADER = 0x1A
    COLUMN = 0x1B
    ROW = 0x1C
    CELL = 0x1D
    LINK = 0x1E
    HELPBALLOON = 0x1F
    CHARACTER = 0x20
    LIST = 0x21
    LISTITEM = 0x22
    OUTLINE = 0x23
    OUTLINEITEM = 0x24
    PAGETAB = 0x25
    PROPERTYPAGE = 0x26
    INDICATOR = 0x27
    GRAPHIC = 0x28
    STATICTEXT = 0x29
    TEXT = 0x2A
    PUSHBUTTON = 0x2B
    CHECKBUTTON = 0x2C
    RADIOBUTTON = 0x2D
    COMBOBOX = 0x2E
    DROPLIST = 0x2F
    PROGRESSBAR = 0x30
    DIAL = 0x31
    HOTKEYFIELD = 0x32
    SLIDER = 0x33
    SPINBUTTON = 0x34
    DIAGRAM = 0x35
    ANIMATION = 0x36
    EQUATION = 0x37
    BUTTONDROPDOWN = 0x38
    BUTTONMENU = 0x39
    BUTTONDROPDOWNGRID = 0x3A
    WHITESPACE = 0x3B
    PAGETABLIST = 0x3C
    CLOCK = 0x3D


def parse_role(value: Any) -> int:
    """Accept a raw integer or a role name such as ``"pagetablist"``."""
    if value is None or value == "":
        return 0
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    key = text.upper().replace("-", "").replace("_", "")
    if key.startswith("ROLESYSTEM"):
        key = key[len("ROLESYSTEM"):]
    try:
        return int(Role[key])
    except KeyError:
        raise ValueError(f"Unknown accessibility role: {value!r}")


@dataclass
class AccessibleChild:
    """One node of an accessibility tree."""
    name: str = ""
    role: int = 0
    value: str = ""
    children: List["AccessibleChild"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], with_children: bool = True) -> "AccessibleChild":
        """
        Build a node (and its subtree) from plain dict data.

        Raises:
            ValueError: If a node is not a mapping or has an unknown role
        """
        if not isinstance(data, dict):
            raise ValueError(f"Accessibility node must be a mapping, got {type(data).__name__}")
        children = data.get("children") or []
        if not isinstance(children, list):
            raise ValueError(f"'children' must be a list, got {type(children).__name__}")
        return cls(
            name=_text(data.get("name")),
            role=parse_role(data.get("role")),
            value=_text(data.get("value")),
            children=[cls.from_dict(child) for child in children] if with_children else [],
        )


def _text(value: Any) -> str:
    # YAML turns names like 2024 into ints
    return "" if value is None else str(value)


def find_accessible_child(
    children: Iterable[AccessibleChild],
    name: str = "",
    role: int = 0,
) -> Optional[AccessibleChild]:
    """
    Pre-order depth-first search for a node by name and role.

    Args:
        children: Nodes to search (usually the children of a tree root)
        name: Name to match case-insensitively; empty matches any name
        role: Role to match; 0 matches any role

    Returns:
        The first matching node, or None
    """
    wanted = name.lower()
    for child in children:
        if (not name or child.name.lower() == wanted) and (not role or child.role == role):
            return child
        if child.children:
            found = find_accessible_child(child.children, name, role)
            if found is not None:
                return found
    return None


class AccessibilityTreeBuilder(ABC):
    """
    Builds the accessibility tree of a window.

    Implementations list every child of a node but only descend into the
    children for which admit(child) is True.
    """

    @abstractmethod
    def build_tree(
        self,
        window_handle: Any,
        admit: Callable[[AccessibleChild], bool],
    ) -> Optional[AccessibleChild]:
        """Return the root node of the window, or None if unavailable"""
        pass

    def release(self, tree: AccessibleChild):
        """Free native resources held by a tree"""
        pass
