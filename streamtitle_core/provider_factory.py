"""
Provider Factory - load provider templates and hand out parser instances

Providers are declared in a YAML file:
```yaml
media_providers:
  # Crunchyroll
  - name: Crunchyroll
    enabled: true
    url: 'crunchyroll.+(episode-[0-9]+)?.*(movie)?-[0-9]+'
    title:
      source: window_title
      pattern: 'Crunchyroll - Watch (.+?)( - Movie - Movie)?$'
    episode_number:
      source: url
      pattern: 'episode-([0-9]+)'
```

name           := Human readable name of the provider, used for listings.
enabled        := Whether the provider is active (see match_disabled).
url            := Pattern deciding whether a URL is supported.
title          := Pattern with capture group for the episode title.
episode_number := Pattern with capture group for the episode number.
source         := window_title, url or html_source.

Declaration order is matching priority: the first provider whose url
pattern matches wins.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from .config import config
from .diagnostics import get_logger
from .exceptions import ConfigurationError
from .stream_provider import ParseSourceType, StreamProviderParser

logger = get_logger(__name__)


def _parse_enabled(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ["1", "true", "yes", "on"]
    return bool(value)


def _parse_rule(record: Dict[str, Any], key: str) -> Optional[Tuple[str, ParseSourceType]]:
    rule = record.get(key)
    if rule is None:
        return None
    if not isinstance(rule, dict) or not isinstance(rule.get("pattern"), str):
        raise ConfigurationError(f"Provider {record.get('name')!r}: '{key}' needs a pattern")
    source_type = ParseSourceType.from_string(rule.get("source"))
    if source_type is ParseSourceType.INVALID:
        logger.warning(
            f"Provider {record.get('name')!r}: unknown source {rule.get('source')!r} for '{key}', rule disabled"
        )
    return rule["pattern"], source_type


def parse_provider(
    record: Dict[str, Any],
    fetch: Optional[Callable[[str], str]] = None,
) -> StreamProviderParser:
    """
    Build a provider template from one configuration record.

    Raises:
        ConfigurationError: If the record is malformed
    """
    if not isinstance(record, dict):
        raise ConfigurationError(f"Provider record must be a mapping, got {type(record).__name__}")
    name = record.get("name")
    url_pattern = record.get("url")
    if not isinstance(name, str) or not name:
        raise ConfigurationError("Provider record without a name")
    if not isinstance(url_pattern, str) or not url_pattern:
        raise ConfigurationError(f"Provider {name!r} has no url pattern")

    prototype = StreamProviderParser(
        display_name=name,
        url_pattern=url_pattern,
        enabled=_parse_enabled(record.get("enabled", False)),
        fetch=fetch,
    )

    title = _parse_rule(record, "title")
    if title:
        prototype.set_title_parsing(*title)

    episode_number = _parse_rule(record, "episode_number")
    if episode_number:
        prototype.set_episode_number_parsing(*episode_number)

    return prototype


class StreamProviderParserFactory:
    """
    Owns the provider templates and creates per-request parser instances.

    Args:
        match_disabled: Let disabled providers match URLs too
            (defaults to config.match_disabled_providers)
        fetch: Page source fetcher for html_source rules
    """

    def __init__(
        self,
        match_disabled: Optional[bool] = None,
        fetch: Optional[Callable[[str], str]] = None,
    ):
        self.match_disabled = config.match_disabled_providers if match_disabled is None else match_disabled
        self._fetch = fetch
        self._prototypes: List[StreamProviderParser] = []

    @property
    def prototypes(self) -> Tuple[StreamProviderParser, ...]:
        return tuple(self._prototypes)

    def add_prototype(self, prototype: StreamProviderParser):
        self._prototypes.append(prototype)

    def load_prototypes(self, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Load provider templates from a YAML file, replacing the current ones.

        The load is all-or-nothing: on any error the catalog is left empty.

        Returns:
            True on success
        """
        path = Path(path) if path else config.providers_file
        self._prototypes = []
        try:
            prototypes = self._read_prototypes(path)
        except (OSError, yaml.YAMLError, ConfigurationError) as e:
            logger.error(f"Failed to load providers from {path}: {e}")
            return False

        self._prototypes = prototypes
        logger.info(f"Loaded {len(prototypes)} stream providers from {path}")
        return True

    def _read_prototypes(self, path: Path) -> List[StreamProviderParser]:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)

        if not isinstance(document, dict):
            raise ConfigurationError("Expected a mapping with a 'media_providers' list")
        records = document.get("media_providers")
        if records is None:
            records = []
        if not isinstance(records, list):
            raise ConfigurationError("'media_providers' must be a list")

        return [parse_provider(record, fetch=self._fetch) for record in records]

    def create_stream_provider_parser(self, url: str, title: str) -> Optional[StreamProviderParser]:
        """
        Parser instance of the first provider supporting the URL.

        Returns:
            A new instance owned by the caller, or None if no provider matches
        """
        for prototype in self._prototypes:
            if not prototype.enabled and not self.match_disabled:
                continue
            if prototype.supports_url(url):
                logger.debug(f"Provider {prototype.display_name!r} matches {url}")
                return prototype.create_new_instance(url, title)
        return None
