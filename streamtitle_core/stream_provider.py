"""
Stream provider parsers

A provider describes how to recognise a streaming site by its URL and how to
pull the episode title (and optionally the episode number) out of one of
three sources:

    window_title - title of the browser window/tab
    url          - address of the page
    html_source  - HTML of the page, downloaded on demand

Providers loaded from configuration are templates. They are never evaluated
against a live page directly; create_new_instance() hands out an independent
copy bound to one (url, title) pair.
"""

import copy
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .diagnostics import get_logger
from .exceptions import NetworkError
from .html_fetch import fetch_page_source

logger = get_logger(__name__)

# Separator used when appending the episode number to a title
EPISODE_SEPARATOR = " Episode "


class ParseSourceType(Enum):
    """Which string a parsing rule reads from"""
    INVALID = "invalid"
    WINDOW_TITLE = "window_title"
    URL = "url"
    HTML_SOURCE = "html_source"

    @classmethod
    def from_string(cls, text: Optional[str]) -> "ParseSourceType":
        """Unknown tags map to INVALID."""
        try:
            return cls((text or "").strip().lower())
        except ValueError:
            return cls.INVALID

    def to_string(self) -> str:
        return self.value


def first_match(text: Optional[str], pattern: str) -> str:
    """
    Search text for pattern.

    Returns the first capture group, the whole match when the pattern has
    no groups, or "" when nothing matched.
    """
    if not text:
        return ""
    try:
        match = re.search(pattern, text)
    except re.error as e:
        logger.debug(f"Invalid pattern {pattern!r}: {e}")
        return ""
    if not match:
        return ""
    if match.re.groups:
        return match.group(1) or ""
    return match.group(0)


@dataclass
class ParsingSource:
    """Strings a single resolution parses from. None means unset."""
    url: Optional[str] = None
    title: Optional[str] = None


class ParsingElement:
    """A pattern bound to one source string of a ParsingSource."""

    def __init__(
        self,
        parsing_source: ParsingSource,
        pattern: Optional[str] = None,
        source_type: ParseSourceType = ParseSourceType.INVALID,
        fetch: Optional[Callable[[str], str]] = None,
    ):
        self.parsing_source = parsing_source
        self.pattern = pattern
        self.source_type = source_type
        self._fetch = fetch

    def is_valid(self) -> bool:
        return self.source_type is not ParseSourceType.INVALID and self.pattern is not None

    def bind(self, parsing_source: ParsingSource) -> "ParsingElement":
        """Copy of this rule reading from another source."""
        return ParsingElement(parsing_source, self.pattern, self.source_type, self._fetch)

    def __call__(self) -> str:
        if not self.is_valid():
            return ""

        if self.source_type is ParseSourceType.WINDOW_TITLE:
            return first_match(self.parsing_source.title, self.pattern)
        if self.source_type is ParseSourceType.URL:
            return first_match(self.parsing_source.url, self.pattern)
        if self.source_type is ParseSourceType.HTML_SOURCE:
            return self._parse_html_source()
        return ""

    def _parse_html_source(self) -> str:
        url = self.parsing_source.url
        if not url:
            return ""
        fetch = self._fetch or fetch_page_source
        try:
            html = fetch(url)
        except NetworkError as e:
            logger.warning(f"Could not read page source of {url}: {e}")
            return ""
        return first_match(html, self.pattern)

    def __repr__(self) -> str:
        return f"ParsingElement(pattern={self.pattern!r}, source_type={self.source_type.value})"


class StreamProviderParser:
    """
    Title parser of one streaming provider.

    Example:
        parser = StreamProviderParser(
            display_name="Crunchyroll",
            url_pattern=r"crunchyroll\\.com/",
            enabled=True,
        )
        parser.set_title_parsing(r"Crunchyroll - Watch (.+)", ParseSourceType.WINDOW_TITLE)
        instance = parser.create_new_instance(url, window_title)
        instance.parse_title()
    """

    def __init__(
        self,
        display_name: str = "",
        url_pattern: Optional[str] = None,
        enabled: bool = False,
        fetch: Optional[Callable[[str], str]] = None,
    ):
        self._display_name = display_name
        self._url_pattern = url_pattern
        self._enabled = enabled
        self._fetch = fetch
        self._parsing_source = ParsingSource()
        self._title_parsing = ParsingElement(self._parsing_source, fetch=fetch)
        self._episode_number_parsing = ParsingElement(self._parsing_source, fetch=fetch)

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def url_pattern(self) -> Optional[str]:
        return self._url_pattern

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def title_parsing(self) -> ParsingElement:
        return self._title_parsing

    @property
    def episode_number_parsing(self) -> ParsingElement:
        return self._episode_number_parsing

    @property
    def parsing_source(self) -> ParsingSource:
        return self._parsing_source

    def set_display_name(self, display_name: str):
        self._display_name = display_name

    def set_url_pattern(self, pattern: Optional[str]):
        self._url_pattern = pattern

    def set_enabled(self, enabled: bool):
        self._enabled = bool(enabled)

    def set_title_parsing(self, pattern: str, source_type: ParseSourceType):
        self._title_parsing.pattern = pattern
        self._title_parsing.source_type = source_type

    def set_episode_number_parsing(self, pattern: str, source_type: ParseSourceType):
        self._episode_number_parsing.pattern = pattern
        self._episode_number_parsing.source_type = source_type

    def supports_url(self, url: str) -> bool:
        """Whether the URL belongs to this provider."""
        if self._url_pattern is None or not url:
            return False
        try:
            return re.search(self._url_pattern, url) is not None
        except re.error as e:
            logger.debug(f"Invalid URL pattern of {self._display_name!r}: {e}")
            return False

    def parse_title(self) -> str:
        title = self._title_parsing()
        number = self._episode_number_parsing()
        if number:
            title += EPISODE_SEPARATOR + number
        return title

    def create_new_instance(self, url: str, title: str) -> "StreamProviderParser":
        """Independent copy bound to its own (url, title) source."""
        instance = copy.copy(self)
        instance._parsing_source = ParsingSource(url=url, title=title)
        instance._title_parsing = self._title_parsing.bind(instance._parsing_source)
        instance._episode_number_parsing = self._episode_number_parsing.bind(instance._parsing_source)
        return instance

    def __repr__(self) -> str:
        return (
            f"StreamProviderParser(display_name={self._display_name!r}, "
            f"url_pattern={self._url_pattern!r}, enabled={self._enabled})"
        )
