"""
xmltvguide.xmltv - XMLTV generation

Renders a Document as an XMLTV text: every channel element first, then every
programme element, in the order they were accumulated.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Union

from .errors import PersistenceError
from .models import Channel, Document, Programme
from .parser import keys
from .utils import HtmlUtils

ENCODING = "utf-8"


class XmltvGenerator:
    """Generates XMLTV documents"""

    def __init__(self):
        self.station_count = 0
        self.episode_count = 0

    def render(self, document: Document) -> str:
        """Render document to XMLTV text"""
        lines: List[str] = []
        self._print_header(lines)
        self._print_stations(lines, document.channels)
        self._print_episodes(lines, document.programmes)
        self._print_footer(lines)
        return "".join(lines)

    def write(self, document: Document, xmltv_file: Union[str, Path]) -> int:
        """
        Render document and atomically replace xmltv_file with it

        Missing parent directories are created.

        Returns:
            Number of bytes written

        Raises:
            PersistenceError: the file cannot be written
        """
        xmltv_file = Path(xmltv_file)
        tmp_name = None

        try:
            content = self.render(document).encode(ENCODING)
            xmltv_file.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{xmltv_file.name}.", suffix=".tmp", dir=str(xmltv_file.parent)
            )
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.chmod(tmp_name, 0o644)

            os.replace(tmp_name, xmltv_file)
            tmp_name = None
        except (OSError, UnicodeError) as e:
            raise PersistenceError(f"Failed to save XMLTV file {xmltv_file}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)

        logging.info("XMLTV file created: %s (%d bytes)", xmltv_file, len(content))
        return len(content)

    def _print_header(self, lines: List[str]):
        lines.append(f'<?xml version="1.0" encoding="{ENCODING}" standalone="yes"?>\n')
        lines.append(f"<{keys.XML_TV}>\n")

    def _print_footer(self, lines: List[str]):
        lines.append(f"</{keys.XML_TV}>\n")

    def _print_stations(self, lines: List[str], channels: List[Channel]):
        self.station_count = 0

        for channel in channels:
            lines.append(f'\t<{keys.XML_CHANNEL} {keys.XML_ID}="{HtmlUtils.conv_html(channel.id)}">\n')
            lines.append(
                f"\t\t<{keys.XML_DISPLAY_NAME}>{HtmlUtils.conv_html(channel.display_name)}"
                f"</{keys.XML_DISPLAY_NAME}>\n"
            )
            if channel.icon_url:
                lines.append(
                    f'\t\t<{keys.XML_ICON} {keys.XML_SRC}="{HtmlUtils.conv_html(channel.icon_url)}" />\n'
                )
            lines.append(f"\t</{keys.XML_CHANNEL}>\n")
            self.station_count += 1

    def _print_episodes(self, lines: List[str], programmes: List[Programme]):
        self.episode_count = 0
        lang = f'{keys.XML_LANG}="{keys.DEFAULT_LANG}"'

        for programme in programmes:
            lines.append(
                f'\t<{keys.XML_PROGRAMME} {keys.XML_START}="{programme.start}" '
                f'{keys.XML_STOP}="{programme.stop}" '
                f'{keys.XML_CHANNEL}="{HtmlUtils.conv_html(programme.channel_id)}">\n'
            )
            lines.append(
                f"\t\t<{keys.XML_TITLE} {lang}>{HtmlUtils.conv_html(programme.title)}</{keys.XML_TITLE}>\n"
            )
            if programme.description:
                lines.append(
                    f"\t\t<{keys.XML_DESC} {lang}>{HtmlUtils.conv_html(programme.description)}"
                    f"</{keys.XML_DESC}>\n"
                )
            lines.append(f"\t</{keys.XML_PROGRAMME}>\n")
            self.episode_count += 1
