"""
Guide parser interface

Each vendor schema is handled by one GuideParser. The builder keeps the
parsers in a list and hands a payload to the first one whose can_parse()
accepts it.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..channelmap import ChannelMap
from ..models import Document


class GuideParser(ABC):
    """Capability interface implemented by every vendor parser"""

    name = "guide"

    @abstractmethod
    def can_parse(self, payload: Any) -> bool:
        """
        Cheap structural probe of a parsed JSON payload

        Must never raise: anything unexpected means the payload is not ours.
        """

    @abstractmethod
    def extract(self, document: Document, payload: Any,
                channel_map: Optional[ChannelMap] = None) -> Document:
        """
        Append channels and programmes found in payload to document

        Args:
            document: Accumulating output document
            payload: Parsed JSON payload previously accepted by can_parse()
            channel_map: Optional channel id -> display name mapping

        Returns:
            The same document
        """

    def __repr__(self):
        return f"<{type(self).__name__}>"
