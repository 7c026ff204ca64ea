"""
xmltvguide - JSON EPG feeds to XMLTV

Detects the schema of each JSON guide feed, extracts channels and programmes,
and merges everything into one XMLTV document.
"""

__version__ = "1.0.0"
__license__ = "GPL-3.0"

from .builder import GuideBuilder
from .channelmap import ChannelMap
from .downloader import FakeDownloader, FeedDownloader
from .errors import (
    ConfigError,
    MalformedInputError,
    NetworkError,
    PersistenceError,
    UnsupportedFormatError,
    XmltvGuideError,
)
from .models import Channel, Document, Programme
from .parser import (
    ChannelEventsParser,
    ContentStreamsParser,
    GuideParser,
    ProgramSchedulesParser,
    create_default_parsers,
)
from .utils import TimeUtils
from .xmltv import XmltvGenerator

__all__ = [
    "GuideBuilder",
    "ChannelMap",
    "FakeDownloader",
    "FeedDownloader",
    "ConfigError",
    "MalformedInputError",
    "NetworkError",
    "PersistenceError",
    "UnsupportedFormatError",
    "XmltvGuideError",
    "Channel",
    "Document",
    "Programme",
    "ChannelEventsParser",
    "ContentStreamsParser",
    "GuideParser",
    "ProgramSchedulesParser",
    "create_default_parsers",
    "TimeUtils",
    "XmltvGenerator",
]
