"""
streamtitle exceptions
"""


class StreamTitleError(Exception):
    """Base exception for streamtitle"""
    pass


class ConfigurationError(StreamTitleError):
    """Provider catalog could not be read or is malformed"""
    pass


class NetworkError(StreamTitleError):
    """Page fetch failed (timeout, connection refused, bad status, etc.)"""
    pass


class SnapshotError(StreamTitleError):
    """Accessibility snapshot file could not be read"""
    pass
