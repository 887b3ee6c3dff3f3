"""Tests for engine classification and traversal policy."""

import pytest

from conftest import node
from streamtitle_core.accessibility import Role
from streamtitle_core.browser_engine import (
    ENGINE_UI_HINTS,
    BrowserEngine,
    should_descend,
    traversal_policy,
)


class TestBrowserEngine:
    """Test engine name mapping."""

    @pytest.mark.parametrize("name,engine", [
        ("WebKit", BrowserEngine.WEBKIT),
        ("Gecko", BrowserEngine.GECKO),
        ("Trident", BrowserEngine.TRIDENT),
        ("Presto", BrowserEngine.PRESTO),
    ])
    def test_known_names(self, name, engine):
        """Player engine names map to engines."""
        assert BrowserEngine.from_name(name) is engine

    @pytest.mark.parametrize("name", ["Blink", "", None, "webkit"])
    def test_unknown_names(self, name):
        """Anything else maps to UNKNOWN."""
        assert BrowserEngine.from_name(name) is BrowserEngine.UNKNOWN


class TestShouldDescend:
    """Test per-engine traversal admission."""

    def test_unknown_never_descends(self):
        """UNKNOWN admits no role."""
        assert not any(should_descend(BrowserEngine.UNKNOWN, role) for role in Role)

    def test_webkit_allow_list(self):
        """WebKit descends only into browser chrome roles."""
        allowed = {role for role in Role if should_descend(BrowserEngine.WEBKIT, role)}
        assert allowed == {Role.CLIENT, Role.GROUPING, Role.PAGETABLIST, Role.TEXT, Role.TOOLBAR, Role.WINDOW}

    def test_gecko_allow_list(self):
        """Gecko descends only into its allow list, never documents."""
        allowed = {role for role in Role if should_descend(BrowserEngine.GECKO, role)}
        assert allowed == {Role.APPLICATION, Role.COMBOBOX, Role.PAGETABLIST, Role.TOOLBAR}
        assert not should_descend(BrowserEngine.GECKO, Role.DOCUMENT)

    def test_trident_deny_list(self):
        """Trident skips panes and scrollbars only."""
        denied = {role for role in Role if not should_descend(BrowserEngine.TRIDENT, role)}
        assert denied == {Role.PANE, Role.SCROLLBAR}

    def test_presto_deny_list(self):
        """Presto skips documents and panes only."""
        denied = {role for role in Role if not should_descend(BrowserEngine.PRESTO, role)}
        assert denied == {Role.DOCUMENT, Role.PANE}

    def test_accepts_raw_integers(self):
        """Raw MSAA integers work like Role members."""
        assert should_descend(BrowserEngine.WEBKIT, 0x3C)
        assert not should_descend(BrowserEngine.WEBKIT, 0x0F)

    def test_deterministic(self):
        """Same inputs give the same answer."""
        for engine in BrowserEngine:
            for role in Role:
                assert should_descend(engine, role) == should_descend(engine, role)

    def test_traversal_policy(self):
        """Policy callback applies the engine rules to a node."""
        admit = traversal_policy(BrowserEngine.PRESTO)
        assert admit(node(role=Role.TOOLBAR))
        assert not admit(node(role=Role.DOCUMENT))


class TestEngineUiHints:
    """Test the address bar label table."""

    def test_engines_with_hints(self):
        """Presto has no label hints."""
        assert set(ENGINE_UI_HINTS) == {BrowserEngine.WEBKIT, BrowserEngine.GECKO, BrowserEngine.TRIDENT}

    def test_declared_order(self):
        """Hints keep their declaration order."""
        names = [hint.name for hint in ENGINE_UI_HINTS[BrowserEngine.GECKO]]
        assert names == ["Search or enter address", "Go to a Website", "Go to a Web Site"]

    def test_read_only(self):
        """Hint table cannot be modified."""
        with pytest.raises(TypeError):
            ENGINE_UI_HINTS[BrowserEngine.PRESTO] = ()
