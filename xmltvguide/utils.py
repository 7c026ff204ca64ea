"""
xmltvguide.utils - Time normalization and general helpers

TimeUtils turns the timestamp representations found in vendor feeds into the
canonical XMLTV form "yyyyMMddHHmmss +0000" (always UTC). JsonUtils reads
loosely-typed JSON values as text and HtmlUtils escapes text for XMLTV output.
"""

import html
import json
import logging
import re
import warnings
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as dateparser

XMLTV_TIME_FORMAT = "%Y%m%d%H%M%S"
XMLTV_UTC_OFFSET = "+0000"


class TimeUtils:
    """Time and date utilities"""

    INTEGER_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")

    @staticmethod
    def conv_time(dt: datetime) -> str:
        """Format an aware datetime as a canonical XMLTV UTC timestamp"""
        return f"{dt.astimezone(timezone.utc).strftime(XMLTV_TIME_FORMAT)} {XMLTV_UTC_OFFSET}"

    @classmethod
    def normalize_unix_seconds(cls, value: Any) -> Optional[str]:
        """
        Convert a count of seconds since the epoch to XMLTV form

        Args:
            value: Base-10 integer, as a string or number

        Returns:
            Canonical timestamp, or None if value is not a valid integer
        """
        text = JsonUtils.text(value)
        if text is None or not cls.INTEGER_PATTERN.match(text):
            return None

        try:
            dt = datetime.fromtimestamp(int(text), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logging.debug("Unix time out of range: %s", text)
            return None

        return cls.conv_time(dt)

    @classmethod
    def normalize_iso_datetime(cls, value: Any) -> Optional[str]:
        """
        Convert a general date-time string (ISO-8601, RFC 2822 style, ...) to XMLTV form

        Values without an explicit offset are taken as UTC. Zone abbreviations
        dateutil does not know (EST, PST, ...) make the value unparseable.

        Args:
            value: Date-time string

        Returns:
            Canonical timestamp, or None if value cannot be parsed
        """
        text = JsonUtils.text(value)
        if text is None or not text.strip():
            return None

        try:
            with warnings.catch_warnings():
                # an unknown zone name would otherwise be dropped silently
                warnings.simplefilter("error", dateparser.UnknownTimezoneWarning)
                dt = dateparser.parse(text)
        except (ValueError, OverflowError, TypeError, dateparser.UnknownTimezoneWarning):
            logging.debug("Unparseable date-time: %s", text)
            return None

        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)

        try:
            return cls.conv_time(dt)
        except (OverflowError, ValueError):
            return None

    @classmethod
    def normalize_any(cls, value: Any) -> Optional[str]:
        """Unix seconds first, then a general date-time string"""
        return cls.normalize_unix_seconds(value) or cls.normalize_iso_datetime(value)


class JsonUtils:
    """Helpers for reading parsed JSON trees"""

    @staticmethod
    def text(value: Any) -> Optional[str]:
        """Render a JSON value as text (None stays None)"""
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)

    @classmethod
    def get_text(cls, node: Any, *path: str) -> Optional[str]:
        """Follow path through nested objects and return the leaf as text"""
        for key in path:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return cls.text(node)

    @staticmethod
    def is_blank(value: Optional[str]) -> bool:
        return value is None or not value.strip()


class HtmlUtils:
    """HTML/XML utilities"""

    INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

    @staticmethod
    def conv_html(data) -> str:
        """Convert data to an XML-safe string, normalizing existing entities first"""
        if data is None:
            return ""

        data = html.unescape(str(data))
        data = HtmlUtils.INVALID_XML_CHARS.sub("", data)

        data = data.replace("&", "&amp;")
        data = data.replace('"', "&quot;")
        data = data.replace("'", "&apos;")
        data = data.replace("<", "&lt;")
        data = data.replace(">", "&gt;")

        return data
