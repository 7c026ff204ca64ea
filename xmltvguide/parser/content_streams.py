"""
Parser for "content streams" guide data

Schema: a top-level "items" array; each item has content.streams[], and
every stream is one airing with channel, title, start_date, end_date
(general date-time strings) and optional desc and thumbnail. Channels are
registered the first time a stream references them, in encounter order.
"""

import logging
from typing import Any, Dict, Optional

from . import keys
from .base import GuideParser
from .. import channelmap
from ..channelmap import ChannelMap
from ..models import Channel, Document, Programme
from ..utils import JsonUtils, TimeUtils


class ContentStreamsParser(GuideParser):
    """Parses items[].content.streams[] guide data"""

    name = "content-streams"

    REQUIRED_STREAM_KEYS = (keys.CHANNEL, keys.TITLE, keys.START_DATE, keys.END_DATE)

    def can_parse(self, payload: Any) -> bool:
        try:
            if not isinstance(payload, dict):
                return False

            items = payload.get(keys.ITEMS)
            if not isinstance(items, list) or not items or not isinstance(items[0], dict):
                return False

            content = items[0].get(keys.CONTENT)
            if not isinstance(content, dict):
                return False

            streams = content.get(keys.STREAMS)
            if not isinstance(streams, list) or not streams:
                return False

            return all(
                isinstance(stream, dict) and all(key in stream for key in self.REQUIRED_STREAM_KEYS)
                for stream in streams
            )
        except Exception as e:
            logging.debug("%s probe failed: %s", self.name, str(e))
            return False

    def extract(self, document: Document, payload: Any,
                channel_map: Optional[ChannelMap] = None) -> Document:
        items = payload.get(keys.ITEMS) if isinstance(payload, dict) else None
        if not isinstance(items, list):
            return document

        for item in items:
            content = item.get(keys.CONTENT) if isinstance(item, dict) else None
            streams = content.get(keys.STREAMS) if isinstance(content, dict) else None
            if not isinstance(streams, list):
                continue

            for stream in streams:
                if isinstance(stream, dict):
                    self._process_stream(document, stream, channel_map)

        return document

    def _process_stream(self, document: Document, stream: Dict,
                        channel_map: Optional[ChannelMap]):
        channel_id = JsonUtils.text(stream.get(keys.CHANNEL))
        title = JsonUtils.text(stream.get(keys.TITLE))
        desc = JsonUtils.text(stream.get(keys.DESC))
        thumbnail = JsonUtils.text(stream.get(keys.THUMBNAIL))
        start = TimeUtils.normalize_iso_datetime(stream.get(keys.START_DATE))
        stop = TimeUtils.normalize_iso_datetime(stream.get(keys.END_DATE))

        if (JsonUtils.is_blank(channel_id) or JsonUtils.is_blank(title)
                or start is None or stop is None):
            logging.debug("Stream skipped: missing channel, title, start or stop")
            return

        if not document.has_channel(channel_id):
            display_name = channelmap.lookup(channel_map, channel_id) or channel_id
            document.add_channel(Channel(
                id=channel_id,
                display_name=display_name,
                icon_url=None if JsonUtils.is_blank(thumbnail) else thumbnail,
            ))

        document.add_programme(Programme(
            channel_id=channel_id,
            start=start,
            stop=stop,
            title=title,
            description=None if JsonUtils.is_blank(desc) else desc,
        ))
