"""
xmltvguide.models - In-memory TV guide model

Channels and programmes are collected into a Document in insertion order.
Channel ids are unique within a Document: the first channel added wins.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set


@dataclass(frozen=True)
class Channel:
    """A channel element"""
    id: str
    display_name: str
    icon_url: Optional[str] = None


@dataclass(frozen=True)
class Programme:
    """A scheduled broadcast; start/stop are canonical XMLTV UTC timestamps"""
    channel_id: str
    start: str
    stop: str
    title: str
    description: Optional[str] = None


@dataclass
class Document:
    """Output aggregate: channels followed by programmes"""
    channels: List[Channel] = field(default_factory=list)
    programmes: List[Programme] = field(default_factory=list)
    _channel_ids: Set[str] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self):
        # Honour uniqueness for channels handed to the constructor
        initial = self.channels
        self.channels = []
        for channel in initial:
            self.add_channel(channel)

    def has_channel(self, channel_id: str) -> bool:
        return channel_id in self._channel_ids

    def add_channel(self, channel: Channel) -> bool:
        """Add a channel unless its id is already present. Returns True if added."""
        if channel.id in self._channel_ids:
            return False
        self._channel_ids.add(channel.id)
        self.channels.append(channel)
        return True

    def add_programme(self, programme: Programme):
        self.programmes.append(programme)

    @property
    def channel_count(self) -> int:
        return len(self.channels)

    @property
    def programme_count(self) -> int:
        return len(self.programmes)
