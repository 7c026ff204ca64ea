"""
Argument validation module for xmltvguide

Handles validation of feed URLs, worker counts and timeouts.
"""

from typing import List, Optional, Tuple
from urllib.parse import urlparse


class ArgumentValidator:
    """Validates command-line arguments"""

    MIN_WORKERS = 1
    MAX_WORKERS = 10

    @staticmethod
    def split_urls(values: Optional[List[str]]) -> List[str]:
        """Flatten repeated and comma-separated URL values, dropping empty entries"""
        urls: List[str] = []
        for value in values or []:
            urls.extend(part.strip() for part in value.split(",") if part.strip())
        return urls

    @classmethod
    def validate_urls(cls, urls: List[str], fake: bool = False) -> Tuple[bool, Optional[str]]:
        """
        Validate the feed URL list

        Args:
            urls: Feed URLs (file paths when fake is set)
            fake: Fake data mode

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not urls:
            return False, (
                "A feed URL must be provided with --url, --url-file, "
                "or the EPG_URL / EPG_URL_FILES environment variables"
            )

        if fake:
            return True, None

        for url in urls:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                return False, f"Invalid feed URL: {url} (expected http:// or https://)"

        return True, None

    @classmethod
    def validate_workers(cls, workers: Optional[int]) -> Tuple[bool, Optional[str]]:
        """Workers must be within 1-10"""
        if workers is None:
            return True, None

        if workers < cls.MIN_WORKERS or workers > cls.MAX_WORKERS:
            return False, (
                f"Parameter [--workers] must be {cls.MIN_WORKERS}-{cls.MAX_WORKERS}, got: {workers}"
            )

        return True, None

    @classmethod
    def clamp_workers(cls, workers: int) -> int:
        return max(cls.MIN_WORKERS, min(cls.MAX_WORKERS, workers))

    @staticmethod
    def validate_timeout(timeout: Optional[float]) -> Tuple[bool, Optional[str]]:
        """Timeout must be positive"""
        if timeout is None:
            return True, None

        if timeout <= 0:
            return False, f"Parameter [--timeout] must be greater than 0, got: {timeout}"

        return True, None
