"""
Parser for "program schedules" guide data

Schema: {"data": {"items": [...]}} where each item holds a channel object
(sourceId, networkName, name, logo) and a "programSchedules" array with
startTime/endTime (Unix seconds) and title.

The feed only flags whether a channel has a logo, so for channels with a
non-empty logo field the icon is looked up in a public logo repository. Whether a candidate logo exists is decided by an
injected url_validator callable, which keeps this parser free of any HTTP
client.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import keys
from .base import GuideParser
from .. import channelmap
from ..channelmap import ChannelMap
from ..models import Channel, Document, Programme
from ..utils import JsonUtils, TimeUtils

# Git repository of TV logos
TV_LOGOS_BASE_URL = (
    "https://raw.githubusercontent.com/tv-logo/tv-logos/refs/heads/main/countries/united-states/"
)

UrlValidator = Callable[[str], bool]


class ProgramSchedulesParser(GuideParser):
    """Parses data.items[] / programSchedules[] guide data"""

    name = "program-schedules"

    def __init__(self, url_validator: Optional[UrlValidator] = None, max_workers: int = 4,
                 logo_base_url: str = TV_LOGOS_BASE_URL):
        self.url_validator = url_validator
        self.max_workers = max(1, max_workers)
        self.logo_base_url = logo_base_url

    def can_parse(self, payload: Any) -> bool:
        try:
            if not isinstance(payload, dict):
                return False

            data = payload.get(keys.DATA)
            if not isinstance(data, dict):
                return False

            items = data.get(keys.ITEMS)
            if not isinstance(items, list) or not items:
                return False

            channel = items[0].get(keys.CHANNEL) if isinstance(items[0], dict) else None
            return (
                isinstance(channel, dict)
                and channel.get(keys.SOURCE_ID) is not None
                and channel.get(keys.NETWORK_NAME) is not None
            )
        except Exception as e:
            logging.debug("%s probe failed: %s", self.name, str(e))
            return False

    def extract(self, document: Document, payload: Any,
                channel_map: Optional[ChannelMap] = None) -> Document:
        data = payload.get(keys.DATA) if isinstance(payload, dict) else None
        items = data.get(keys.ITEMS) if isinstance(data, dict) else None
        if not isinstance(items, list):
            return document

        # PHASE 1: collect channels in emission order
        entries: List[Tuple[Channel, List, Optional[str]]] = []
        for item in self._distinct_and_sorted(items):
            entry = self._build_entry(item, channel_map)
            if entry is not None:
                entries.append(entry)

        # PHASE 2: resolve icons for new channels that advertise a logo
        pending = [(channel, icon_name) for channel, _, icon_name in entries
                   if icon_name is not None and not document.has_channel(channel.id)]
        icons = self._resolve_icons([icon_name for _, icon_name in pending])
        icon_by_id = {channel.id: icon for (channel, _), icon in zip(pending, icons)}

        # PHASE 3: fold into the document
        for channel, schedules, _ in entries:
            if icon_by_id.get(channel.id):
                channel = Channel(channel.id, channel.display_name, icon_by_id[channel.id])

            if not document.add_channel(channel):
                logging.debug("Channel %s already present, keeping existing entry", channel.id)

            for schedule in schedules:
                programme = self._build_programme(schedule, channel.id)
                if programme is not None:
                    document.add_programme(programme)

        return document

    @staticmethod
    def _distinct_and_sorted(items: List) -> List[Dict]:
        """First item per sourceId, sorted by network name"""
        unique: Dict[str, Dict] = {}

        for item in items:
            source_id = JsonUtils.get_text(item, keys.CHANNEL, keys.SOURCE_ID)
            if source_id is None or source_id in unique:
                continue
            unique[source_id] = item

        return sorted(
            unique.values(),
            key=lambda item: JsonUtils.get_text(item, keys.CHANNEL, keys.NETWORK_NAME) or "",
        )

    def _build_entry(self, item: Dict,
                     channel_map: Optional[ChannelMap]) -> Optional[Tuple[Channel, List, Optional[str]]]:
        channel_node = item.get(keys.CHANNEL)
        schedules = item.get(keys.PROGRAM_SCHEDULES)
        if not isinstance(channel_node, dict) or not isinstance(schedules, list):
            return None

        source_id = JsonUtils.text(channel_node.get(keys.SOURCE_ID))
        if JsonUtils.is_blank(source_id):
            return None

        display_name = (
            channelmap.lookup(channel_map, source_id)
            or JsonUtils.text(channel_node.get(keys.NETWORK_NAME))
        )
        if JsonUtils.is_blank(display_name):
            logging.debug("Channel %s skipped: no display name", source_id)
            return None

        icon_name = None
        if not JsonUtils.is_blank(JsonUtils.text(channel_node.get(keys.LOGO))):
            icon_name = (
                JsonUtils.text(channel_node.get(keys.NAME))
                or JsonUtils.text(channel_node.get(keys.NETWORK_NAME))
            )
        return Channel(id=source_id, display_name=display_name), schedules, icon_name

    def build_icon_url(self, network_name: Optional[str]) -> Optional[str]:
        """Candidate logo URL for a network name"""
        if JsonUtils.is_blank(network_name):
            return None
        safe_name = network_name.strip().lower().replace(" ", "-")
        return f"{self.logo_base_url}{safe_name}-us.png"

    def _resolve_icons(self, names: List[Optional[str]]) -> List[Optional[str]]:
        """Probe candidate logo URLs; results keep the order of names"""
        if not names:
            return []

        if self.url_validator is None:
            return [None] * len(names)

        urls = [self.build_icon_url(name) for name in names]
        workers = min(self.max_workers, len(urls))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            reachable = list(executor.map(self._probe, urls))

        found = sum(1 for ok in reachable if ok)
        logging.debug("Channel logos: %d of %d found", found, len(urls))

        return [url if ok else None for url, ok in zip(urls, reachable)]

    def _probe(self, url: Optional[str]) -> bool:
        if url is None:
            return False
        try:
            return bool(self.url_validator(url))
        except Exception as e:
            logging.debug("Logo probe failed for %s: %s", url, str(e))
            return False

    @staticmethod
    def _build_programme(schedule: Any, channel_id: str) -> Optional[Programme]:
        if not isinstance(schedule, dict):
            return None

        start = TimeUtils.normalize_unix_seconds(schedule.get(keys.START_TIME))
        stop = TimeUtils.normalize_unix_seconds(schedule.get(keys.END_TIME))
        title = JsonUtils.text(schedule.get(keys.TITLE))

        if start is None or stop is None or JsonUtils.is_blank(title):
            logging.debug("Schedule on channel %s skipped: missing start, stop or title", channel_id)
            return None

        return Programme(channel_id=channel_id, start=start, stop=stop, title=title)
