"""
Page source fetching for html_source rules
"""

import re
from typing import Optional

import requests

from .config import config
from .diagnostics import get_logger
from .exceptions import NetworkError

logger = get_logger(__name__)

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def fetch_page_source(url: str, timeout: Optional[float] = None) -> str:
    """
    Download the HTML source of a page.

    Args:
        url: Page URL
        timeout: Seconds before giving up (defaults to config.fetch_timeout)

    Returns:
        Decoded response body

    Raises:
        NetworkError: On any transport failure or non-2xx status
    """
    timeout = config.fetch_timeout if timeout is None else timeout
    headers = {"User-Agent": config.user_agent}

    if not _SCHEME.match(url):
        # Address bars commonly hide the scheme
        url = f"http://{url}"

    logger.debug(f"GET {url} (timeout={timeout}s)")
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"Page fetch failed: {e}") from e

    return response.text
