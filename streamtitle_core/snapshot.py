"""
Accessibility snapshots - recorded browser windows for offline resolution

A snapshot is a YAML (or JSON) file holding the window title and the full
accessibility tree of a browser window:
```yaml
title: "Crunchyroll - Watch Shirobako - Chrome"
tree:
  role: window
  children:
    - role: toolbar
      children:
        - name: Address and search bar
          role: text
          value: https://www.crunchyroll.com/shirobako/episode-5-123456
```

SnapshotTreeBuilder serves snapshots the way a native tree builder serves
live windows, so the resolver can be exercised without a desktop session.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from .accessibility import AccessibilityTreeBuilder, AccessibleChild
from .exceptions import SnapshotError


def load_snapshot(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a snapshot file.

    Raises:
        SnapshotError: If the file is unreadable or has no tree
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("tree"), dict):
        raise SnapshotError(f"Snapshot {path} has no 'tree' mapping")
    try:
        AccessibleChild.from_dict(data["tree"])
    except ValueError as e:
        raise SnapshotError(f"Invalid snapshot {path}: {e}") from e
    return data


class SnapshotTreeBuilder(AccessibilityTreeBuilder):
    """
    Tree builder over recorded snapshots, keyed by window handle.

    Usage:
        builder = SnapshotTreeBuilder.from_files(["chrome.yaml"])
        resolver = BrowserTitleResolver(builder, builder.window_title, factory)
        resolver.resolve_title("chrome.yaml", "WebKit")
    """

    def __init__(self, snapshots: Optional[Dict[Any, Dict[str, Any]]] = None):
        self.snapshots: Dict[Any, Dict[str, Any]] = dict(snapshots or {})

    @classmethod
    def from_files(cls, paths: List[Union[str, Path]]) -> "SnapshotTreeBuilder":
        """Builder whose window handles are the given paths."""
        return cls({str(path): load_snapshot(path) for path in paths})

    def window_title(self, window_handle: Any) -> str:
        snapshot = self.snapshots.get(window_handle)
        if snapshot is None:
            return ""
        return snapshot.get("title") or ""

    def build_tree(
        self,
        window_handle: Any,
        admit: Callable[[AccessibleChild], bool],
    ) -> Optional[AccessibleChild]:
        snapshot = self.snapshots.get(window_handle)
        if snapshot is None:
            return None
        root_data = snapshot["tree"]
        root = self._make_node(root_data)
        root.children = self._build_children(root_data, admit)
        return root

    def _build_children(
        self,
        data: Dict[str, Any],
        admit: Callable[[AccessibleChild], bool],
    ) -> List[AccessibleChild]:
        children = []
        for child_data in data.get("children") or []:
            child = self._make_node(child_data)
            if admit(child):
                child.children = self._build_children(child_data, admit)
            children.append(child)
        return children

    @staticmethod
    def _make_node(data: Dict[str, Any]) -> AccessibleChild:
        return AccessibleChild.from_dict(data, with_children=False)
