"""
Parser for "channel events" guide data

Schema: a top-level "channels" array; every channel carries callSign,
channelId, channelNo, an optional thumbnail and an "events" array whose
entries hold startTime/endTime (Unix seconds) and a nested program object
with title and shortDesc.
"""

import logging
from typing import Any, Dict, List, Optional

from . import keys
from .base import GuideParser
from .. import channelmap
from ..channelmap import ChannelMap
from ..models import Channel, Document, Programme
from ..utils import JsonUtils, TimeUtils


class ChannelEventsParser(GuideParser):
    """Parses channels[] / events[] guide data"""

    name = "channel-events"

    def can_parse(self, payload: Any) -> bool:
        try:
            if not isinstance(payload, dict):
                return False

            channels = payload.get(keys.CHANNELS)
            if not isinstance(channels, list) or not channels:
                return False

            return all(self._looks_like_channel(channel) for channel in channels)
        except Exception as e:
            logging.debug("%s probe failed: %s", self.name, str(e))
            return False

    @staticmethod
    def _looks_like_channel(channel: Any) -> bool:
        return (
            isinstance(channel, dict)
            and channel.get(keys.CALL_SIGN) is not None
            and channel.get(keys.CHANNEL_ID) is not None
            and isinstance(channel.get(keys.EVENTS), list)
            and channel.get(keys.PROGRAM) is None
        )

    def extract(self, document: Document, payload: Any,
                channel_map: Optional[ChannelMap] = None) -> Document:
        for station in self._get_sorted_channels(payload):
            channel_id = JsonUtils.text(station.get(keys.CHANNEL_ID))

            if document.has_channel(channel_id):
                logging.debug("Channel %s already present, skipping", channel_id)
                continue

            channel = self._build_channel(station, channel_id, channel_map)
            if channel is None:
                logging.debug("Channel %s skipped: no call sign", channel_id)
                continue

            document.add_channel(channel)
            self._add_programmes(document, station, channel_id)

        return document

    def _get_sorted_channels(self, payload: Dict) -> List[Dict]:
        """Unique channels (first occurrence per channelId) sorted by call sign"""
        unique: Dict[str, Dict] = {}

        for station in payload.get(keys.CHANNELS) or []:
            if not isinstance(station, dict):
                continue
            channel_id = JsonUtils.text(station.get(keys.CHANNEL_ID))
            if JsonUtils.is_blank(channel_id) or channel_id in unique:
                continue
            unique[channel_id] = station

        return sorted(
            unique.values(),
            key=lambda station: JsonUtils.text(station.get(keys.CALL_SIGN)) or "",
        )

    def _build_channel(self, station: Dict, channel_id: str,
                       channel_map: Optional[ChannelMap]) -> Optional[Channel]:
        call_sign = JsonUtils.text(station.get(keys.CALL_SIGN))
        if JsonUtils.is_blank(call_sign):
            return None

        display_name = channelmap.lookup(channel_map, channel_id)
        if JsonUtils.is_blank(display_name):
            number = JsonUtils.text(station.get(keys.CHANNEL_NO)) or ""
            display_name = f"{number} {call_sign}"

        return Channel(
            id=channel_id,
            display_name=display_name.strip(),
            icon_url=self._icon_url(JsonUtils.text(station.get(keys.THUMBNAIL))),
        )

    @staticmethod
    def _icon_url(thumbnail: Optional[str]) -> Optional[str]:
        """Make the thumbnail an absolute https URL"""
        if JsonUtils.is_blank(thumbnail):
            return None
        if thumbnail.startswith("http"):
            return thumbnail
        return f"https://{thumbnail.lstrip('/')}"

    def _add_programmes(self, document: Document, station: Dict, channel_id: str):
        events = station.get(keys.EVENTS)
        if not isinstance(events, list):
            return

        for event in events:
            if not isinstance(event, dict):
                continue

            programme = self._build_programme(event, channel_id)
            if programme is not None:
                document.add_programme(programme)

    @staticmethod
    def _build_programme(event: Dict, channel_id: str) -> Optional[Programme]:
        start = TimeUtils.normalize_any(event.get(keys.START_TIME))
        stop = TimeUtils.normalize_any(event.get(keys.END_TIME))
        title = JsonUtils.get_text(event, keys.PROGRAM, keys.TITLE)
        desc = JsonUtils.get_text(event, keys.PROGRAM, keys.SHORT_DESC)

        if start is None or stop is None or JsonUtils.is_blank(title):
            logging.debug("Event on channel %s skipped: missing start, stop or title", channel_id)
            return None

        return Programme(
            channel_id=channel_id,
            start=start,
            stop=stop,
            title=title,
            description=None if JsonUtils.is_blank(desc) else desc,
        )
