"""
xmltvguide.errors - Error taxonomy

Every fatal condition of a run is raised as one of these exceptions and
reported by main() with a non-zero exit status.
"""

from typing import Optional


class XmltvGuideError(Exception):
    """Base class for all xmltvguide errors"""


class ConfigError(XmltvGuideError):
    """Invalid or missing configuration (no URL, bad channel map, ...)"""


class MalformedInputError(XmltvGuideError):
    """A feed payload is not valid JSON"""

    def __init__(self, index: int, message: str):
        self.index = index
        super().__init__(f"Payload #{index} is not valid JSON: {message}")


class UnsupportedFormatError(XmltvGuideError):
    """No registered parser accepts a payload"""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"No suitable parser found for payload #{index}")


class NetworkError(XmltvGuideError):
    """Fetch or reachability-probe failure"""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class PersistenceError(XmltvGuideError):
    """The XMLTV output could not be written"""
