"""
xmltvguide.builder - Guide builder

Folds raw JSON payloads into one Document. Payloads are processed in input
order so that a channel registered by an earlier feed is not registered again
by a later one.
"""

import json
import logging
from typing import Any, Iterable, List, Optional, Sequence

from .channelmap import ChannelMap
from .errors import MalformedInputError, UnsupportedFormatError
from .models import Document
from .parser import GuideParser, create_default_parsers


class GuideBuilder:
    """Selects a parser for each payload and accumulates the results"""

    def __init__(self, parsers: Optional[Iterable[GuideParser]] = None):
        if parsers is None:
            parsers = create_default_parsers()
        self.parsers: List[GuideParser] = list(parsers)
        if not self.parsers:
            raise ValueError("At least one guide parser is required")

    def build(self, payloads: Sequence[Optional[str]], channel_map_path: Optional[str] = None,
              channel_map: Optional[ChannelMap] = None) -> Document:
        """
        Build a Document from raw JSON payloads

        Args:
            payloads: Raw JSON texts; empty or whitespace-only entries are skipped
            channel_map_path: Channel map file, loaded once when channel_map is not given
            channel_map: Already loaded channel map

        Returns:
            Document holding all channels and programmes

        Raises:
            ConfigError: channel map cannot be loaded
            MalformedInputError: a payload is not valid JSON
            UnsupportedFormatError: no parser accepts a payload
        """
        if channel_map is None and channel_map_path and str(channel_map_path).strip():
            channel_map = ChannelMap.load(channel_map_path)

        document = Document()

        for index, data in enumerate(payloads):
            if data is None or not data.strip():
                logging.info("Payload #%d is empty, skipping", index)
                continue

            epg = self._parse_json(index, data)
            parser = self.get_parser(index, epg)

            channels_before = document.channel_count
            programmes_before = document.programme_count

            logging.info("Payload #%d: using %s parser", index, parser.name)
            document = parser.extract(document, epg, channel_map)

            logging.info(
                "Payload #%d: %d channels and %d programmes added",
                index,
                document.channel_count - channels_before,
                document.programme_count - programmes_before,
            )

        logging.info(
            "Guide built: %d channels, %d programmes",
            document.channel_count,
            document.programme_count,
        )
        return document

    @staticmethod
    def _parse_json(index: int, data: str) -> Any:
        try:
            return json.loads(data)
        except (json.JSONDecodeError, RecursionError) as e:
            raise MalformedInputError(index, str(e)) from e

    def get_parser(self, index: int, epg: Any) -> GuideParser:
        """First registered parser accepting epg"""
        for parser in self.parsers:
            if parser.can_parse(epg):
                return parser

        raise UnsupportedFormatError(index)
