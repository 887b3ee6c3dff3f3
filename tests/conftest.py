"""
Shared fixtures: recorded browser trees and a provider catalog
"""

import pytest

from streamtitle_core.accessibility import AccessibleChild, Role


def node(name="", role=0, value="", children=None):
    return AccessibleChild(name=name, role=int(role), value=value, children=list(children or []))


PROVIDERS_YAML = """
media_providers:
  - name: Crunchyroll
    enabled: true
    url: 'crunchyroll\\.com/.+episode-[0-9]+'
    title:
      source: window_title
      pattern: 'Crunchyroll - Watch (.+?) Episode [0-9]+'
    episode_number:
      source: url
      pattern: 'episode-([0-9]+)'
  - name: Example Video
    enabled: false
    url: 'example\\.com/watch'
    title:
      source: html_source
      pattern: '<h1 class="title">([^<]+)</h1>'
"""


@pytest.fixture
def providers_file(tmp_path):
    path = tmp_path / "media_providers.yaml"
    path.write_text(PROVIDERS_YAML, encoding="utf-8")
    return path


@pytest.fixture
def webkit_tree():
    """Chrome window: tab strip plus omnibox, page content pruned."""
    return node(role=Role.WINDOW, children=[
        node(role=Role.CLIENT, children=[
            node(name="Tabs", role=Role.PAGETABLIST, children=[
                node(name="Crunchyroll - Watch Shirobako Episode 5", role=Role.PAGETAB),
                node(name="New Tab", role=Role.PAGETAB),
            ]),
            node(name="main", role=Role.TOOLBAR, children=[
                node(name="Back", role=Role.PUSHBUTTON),
                node(
                    name="Address and search bar",
                    role=Role.TEXT,
                    value="https://www.crunchyroll.com/shirobako/episode-5-678141",
                ),
            ]),
        ]),
    ])


@pytest.fixture
def presto_tree():
    """Old Opera window: client -> first child -> toolbar -> combo box -> text."""
    return node(role=Role.WINDOW, children=[
        node(role=Role.CLIENT, children=[
            node(name="Page", role=Role.GROUPING, children=[
                node(name="Navigation", role=Role.TOOLBAR, children=[
                    node(name="Address", role=Role.COMBOBOX, children=[
                        node(role=Role.TEXT, value="http://www.crunchyroll.com/shirobako/episode-7-678145"),
                    ]),
                ]),
            ]),
            node(name="Crunchyroll - Watch Shirobako Episode 7", role=Role.PAGETAB),
        ]),
    ])
