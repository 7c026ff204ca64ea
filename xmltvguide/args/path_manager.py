"""
Path management module for xmltvguide

Default locations for the XMLTV output and the fake-mode sample feed, plus
reading URL list files.
"""

from pathlib import Path
from typing import Dict, List

from ..errors import ConfigError


class PathManager:
    """Manages default paths"""

    @staticmethod
    def get_defaults() -> Dict[str, Path]:
        """
        Get default paths, relative to the current working directory

        Returns:
            Dict containing output_file and fake_data_file
        """
        cwd = Path.cwd()
        return {
            "output_file": cwd / "output" / "guide.xml",
            "fake_data_file": cwd / "testdata" / "tvguide.json",
        }

    @staticmethod
    def read_url_file(url_file: Path) -> List[str]:
        """
        Read one URL per line; blank lines and # comments are ignored

        Raises:
            ConfigError: file missing or unreadable
        """
        url_file = Path(url_file)
        if not url_file.is_file():
            raise ConfigError(f"URL file '{url_file}' does not exist")

        try:
            lines = url_file.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read URL file '{url_file}': {e}") from e

        return [
            line.strip() for line in lines
            if line.strip() and not line.strip().startswith("#")
        ]
