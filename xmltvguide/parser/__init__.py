"""
xmltvguide.parser - Vendor guide parsers

One parser per known JSON schema. create_default_parsers() returns them in
the fixed order the builder tries them.
"""

from typing import List, Optional

from .base import GuideParser
from .channel_events import ChannelEventsParser
from .content_streams import ContentStreamsParser
from .program_schedules import ProgramSchedulesParser, UrlValidator


def create_default_parsers(url_validator: Optional[UrlValidator] = None,
                           max_workers: int = 4) -> List[GuideParser]:
    """
    Build the parser registry

    Args:
        url_validator: Reachability check used for channel logo lookup
        max_workers: Parallel logo probes per payload
    """
    return [
        ChannelEventsParser(),
        ProgramSchedulesParser(url_validator=url_validator, max_workers=max_workers),
        ContentStreamsParser(),
    ]


__all__ = [
    "GuideParser",             # Parser interface
    "ChannelEventsParser",     # channels[].events[]
    "ProgramSchedulesParser",  # data.items[].programSchedules[]
    "ContentStreamsParser",    # items[].content.streams[]
    "create_default_parsers",
]
