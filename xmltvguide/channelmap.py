"""
xmltvguide.channelmap - Channel name override table

The channel map is a JSON file of the form
    {"channels": [{"channel": {"name": "...", "channelId": "..."}}, ...]}
translating a feed channel id into a display name.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from .errors import ConfigError
from .utils import JsonUtils

CHANNELS_KEY = "channels"
CHANNEL_KEY = "channel"
NAME_KEY = "name"
CHANNEL_ID_KEY = "channelId"


class ChannelMap:
    """Read-only channel id -> display name mapping"""

    def __init__(self, mapping: Optional[Dict[str, str]] = None):
        self._mapping: Dict[str, str] = dict(mapping or {})

    @classmethod
    def load(cls, path: Union[str, Path, None]) -> "ChannelMap":
        """
        Load the channel map from a JSON file

        Entries without a usable name or channelId are dropped. When the same
        channelId appears more than once the first entry is kept.

        Raises:
            ConfigError: empty path, missing file, invalid JSON, or no channels array
        """
        if path is None or not str(path).strip():
            raise ConfigError("Channel map path cannot be empty")

        map_file = Path(path)
        if not map_file.is_file():
            raise ConfigError(f"The channel map file '{map_file}' does not exist")

        try:
            with open(map_file, "r", encoding="utf-8") as f:
                root = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in channel map '{map_file}': {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read channel map '{map_file}': {e}") from e

        if not isinstance(root, dict):
            raise ConfigError(f"Invalid JSON structure in channel map '{map_file}'")

        entries = root.get(CHANNELS_KEY)
        if not isinstance(entries, list):
            raise ConfigError(f"Missing '{CHANNELS_KEY}' in channel map '{map_file}'")

        mapping: Dict[str, str] = {}
        skipped = 0
        for entry in entries:
            name = JsonUtils.get_text(entry, CHANNEL_KEY, NAME_KEY)
            channel_id = JsonUtils.get_text(entry, CHANNEL_KEY, CHANNEL_ID_KEY)

            if JsonUtils.is_blank(name) or JsonUtils.is_blank(channel_id):
                skipped += 1
                continue

            mapping.setdefault(channel_id.strip(), name.strip())

        logging.info("Channel map loaded from %s: %d entries", map_file, len(mapping))
        if skipped:
            logging.debug("  %d incomplete channel map entries skipped", skipped)

        return cls(mapping)

    def lookup(self, channel_id: Optional[str]) -> Optional[str]:
        """Exact-match lookup of a channel id"""
        if channel_id is None:
            return None
        return self._mapping.get(channel_id)

    def __contains__(self, channel_id) -> bool:
        return channel_id in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)


def lookup(channel_map: Optional[ChannelMap], channel_id: Optional[str]) -> Optional[str]:
    """Display name for channel_id, or None when unmapped or no map was supplied"""
    if channel_map is None:
        return None
    return channel_map.lookup(channel_id)
