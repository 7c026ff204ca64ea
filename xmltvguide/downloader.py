"""
xmltvguide.downloader - Feed download management

Fetches raw feed payloads over HTTP (or from local files in fake mode).
Several feeds are fetched in parallel, but results are always returned in
the order of the input URL list.
"""

import logging
import random
import threading
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import NetworkError

UNIX_TIME_PLACEHOLDER = "{unixtime}"


class BaseDownloader(ABC):
    """Common surface of all downloaders"""

    def __init__(self, max_workers: int = 4):
        self.max_workers = max(1, max_workers)

    @abstractmethod
    def download(self, url: str) -> str:
        """Fetch one payload; raises NetworkError on failure"""

    def validate_url(self, url: str) -> bool:
        """Whether url is reachable"""
        return False

    @staticmethod
    def set_unix_time(url: str) -> str:
        """Replace the {unixtime} placeholder with the current Unix time"""
        if UNIX_TIME_PLACEHOLDER not in url:
            return url
        return url.replace(UNIX_TIME_PLACEHOLDER, str(int(time.time())))

    def download_all(self, urls: Sequence[str]) -> List[str]:
        """
        Fetch all urls, in parallel when more than one

        Returns:
            Payload texts in the order of urls

        Raises:
            NetworkError: at least one fetch failed (raised once all fetches ended)
        """
        if not urls:
            raise NetworkError("URL list cannot be empty")

        if len(urls) == 1:
            return [self.download(urls[0])]

        workers = min(self.max_workers, len(urls))
        logging.info("Downloading %d feeds with %d workers", len(urls), workers)

        results: Dict[int, str] = {}
        errors: Dict[int, NetworkError] = {}

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_index = {
                executor.submit(self.download, url): index for index, url in enumerate(urls)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except NetworkError as e:
                    errors[index] = e
                except Exception as e:
                    errors[index] = NetworkError(f"Error fetching {urls[index]}: {e}", urls[index])

        if errors:
            for index in sorted(errors):
                logging.error("Feed #%d failed: %s", index, errors[index])
            raise errors[min(errors)]

        return [results[index] for index in range(len(urls))]

    def close(self):
        """Release resources"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class FeedDownloader(BaseDownloader):
    """HTTP downloader with browser-like headers and simple retry"""

    USER_AGENTS = [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.0.0",
    ]

    def __init__(self, timeout: float = 15, max_retries: int = 3, max_workers: int = 4,
                 retry_delay: tuple = (1, 3)):
        super().__init__(max_workers=max_workers)
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.session: Optional[requests.Session] = None
        self.current_ua_index = 0
        self.total_requests = 0
        self.failed_requests = 0
        self._lock = threading.Lock()

        self.init_session()

    def init_session(self):
        """Initialize session with connection reuse"""
        if self.session:
            self.session.close()

        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json, text/html, application/xhtml+xml, application/xml;q=0.9, */*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
            "Connection": "keep-alive",
        })

        # Retries are handled in download()
        adapter = HTTPAdapter(
            pool_connections=self.max_workers,
            pool_maxsize=self.max_workers,
            max_retries=Retry(total=0),
        )
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        logging.debug("HTTP session initialized (%d connections max)", self.max_workers)

    def next_user_agent(self) -> str:
        """Rotate through the User-Agent list"""
        with self._lock:
            self.current_ua_index = (self.current_ua_index + 1) % len(self.USER_AGENTS)
            return self.USER_AGENTS[self.current_ua_index]

    def _count(self, failed: bool = False):
        with self._lock:
            self.total_requests += 1
            if failed:
                self.failed_requests += 1

    @staticmethod
    def _decode(response: requests.Response) -> str:
        """Response text, UTF-8 unless the server declares a charset"""
        content_type = response.headers.get("Content-Type", "")
        if "charset" not in content_type.lower():
            return response.content.decode("utf-8", errors="replace")
        return response.text

    def download(self, url: str) -> str:
        if not url or not url.strip():
            raise NetworkError("URL cannot be empty", url)

        url = self.set_unix_time(url.strip())
        last_error = "no attempt made"

        for attempt in range(self.max_retries):
            logging.debug("  Attempt %d/%d: %s", attempt + 1, self.max_retries,
                          url[:100] + "..." if len(url) > 100 else url)
            try:
                response = self.session.get(
                    url,
                    timeout=self.timeout,
                    headers={"User-Agent": self.next_user_agent()},
                )

                if 200 <= response.status_code < 300:
                    self._count()
                    logging.info("Downloaded %s (%d bytes)", url, len(response.content))
                    return self._decode(response)

                self._count(failed=True)
                last_error = f"HTTP {response.status_code}"
                logging.warning("  HTTP %d received from %s", response.status_code, url)
                if response.status_code in (404, 410):
                    break  # Permanent

            except requests.exceptions.Timeout:
                self._count(failed=True)
                last_error = f"timeout after {self.timeout}s"
                logging.warning("  Timeout (%ss) on attempt %d", self.timeout, attempt + 1)

            except requests.exceptions.RequestException as e:
                self._count(failed=True)
                last_error = str(e)
                logging.warning("  Request error on attempt %d: %s", attempt + 1, str(e))

            if attempt < self.max_retries - 1:
                time.sleep(random.uniform(*self.retry_delay))

        raise NetworkError(f"Failed to fetch data from {url}: {last_error}", url)

    def validate_url(self, url: str) -> bool:
        """
        Reachability check: HEAD, or GET when the server refuses HEAD

        Any request failure counts as unreachable.
        """
        try:
            response = self.session.head(url, timeout=self.timeout, allow_redirects=True)
            if response.status_code in (405, 501):
                response = self.session.get(url, timeout=self.timeout, stream=True)
                response.close()
        except requests.exceptions.RequestException as e:
            logging.debug("URL check failed for %s: %s", url, str(e))
            return False

        return 200 <= response.status_code < 300

    def get_stats(self) -> Dict[str, Any]:
        """Get download statistics"""
        return {
            "total_requests": self.total_requests,
            "failed_requests": self.failed_requests,
        }

    def close(self):
        if self.session:
            self.session.close()
            self.session = None


class FakeDownloader(BaseDownloader):
    """Reads payloads from local files instead of the network"""

    def download(self, url: str) -> str:
        path = Path(url)
        if not path.is_file():
            raise NetworkError(f"The file '{url}' does not exist", url)

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise NetworkError(f"Cannot read {url}: {e}", url) from e

        logging.info("Loaded %s (%d characters)", url, len(content))
        return content
