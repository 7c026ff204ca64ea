#!/usr/bin/env python3
"""
xmltvguide - JSON EPG feeds to XMLTV

Loads the optional channel map, downloads every feed, builds one guide and
writes it as an XMLTV file.
"""

import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional

from .args import ArgumentParser
from .builder import GuideBuilder
from .channelmap import ChannelMap
from .downloader import BaseDownloader, FakeDownloader, FeedDownloader
from .errors import XmltvGuideError
from .parser import create_default_parsers
from .xmltv import XmltvGenerator

# Package version
from . import __version__

LOG_BACKUP_COUNT = 7


def setup_logging(logging_config: dict) -> Optional[logging.Handler]:
    """Configure the root logger; returns the file handler if one was created"""
    if logging_config["level"] == "warning":
        level = logging.WARNING
    elif logging_config["level"] == "debug":
        level = logging.DEBUG
    else:  # default
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console logging goes to stderr
    if not logging_config["quiet"]:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root_logger.addHandler(console_handler)

    file_handler = None
    log_file = logging_config.get("log_file")
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file), when="midnight", backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-8s %(message)s", datefmt="%Y/%m/%d %H:%M:%S"
        ))
        root_logger.addHandler(file_handler)

    return file_handler


def create_downloader(args) -> BaseDownloader:
    """Local file reader in fake mode, HTTP downloader otherwise"""
    if args.fake:
        return FakeDownloader(max_workers=args.workers)
    return FeedDownloader(timeout=args.timeout, max_workers=args.workers)


def run(args) -> int:
    """Run one guide generation; raises XmltvGuideError on fatal problems"""
    start_time = time.time()

    logging.info("Configuration:")
    logging.info("  Feeds: %d (%s)", len(args.urls), "fake data" if args.fake else "HTTP")
    for url in args.urls:
        logging.debug("    %s", url)
    logging.info("  Channel map: %s", args.channelmap or "none")
    logging.info("  Output: %s", args.output)
    logging.info("  Workers: %d", args.workers)

    # Fail on a bad channel map before anything is fetched
    channel_map = ChannelMap.load(args.channelmap) if args.channelmap else None

    with create_downloader(args) as downloader:
        download_start = time.time()
        payloads = downloader.download_all(args.urls)
        download_time = time.time() - download_start

        build_start = time.time()
        parsers = create_default_parsers(
            url_validator=downloader.validate_url, max_workers=args.workers
        )
        document = GuideBuilder(parsers).build(payloads, channel_map=channel_map)
        build_time = time.time() - build_start

        if isinstance(downloader, FeedDownloader):
            stats = downloader.get_stats()
            logging.info("  HTTP requests: %d (%d failed)",
                         stats["total_requests"], stats["failed_requests"])

    xmltv_generator = XmltvGenerator()
    xmltv_generator.write(document, args.output)

    total_time = time.time() - start_time
    logging.info("=" * 60)
    logging.info("PERFORMANCE SUMMARY:")
    logging.info("  Total execution time: %.2f seconds", total_time)
    logging.info("  Download: %.2f seconds", download_time)
    logging.info("  Guide build: %.2f seconds", build_time)
    logging.info(
        "%d Channels and %d Programmes written to %s",
        xmltv_generator.station_count,
        xmltv_generator.episode_count,
        args.output,
    )
    return 0


def main(argv=None) -> int:
    """Main application entry point"""
    arg_parser = ArgumentParser()

    try:
        args = arg_parser.parse_args(argv)
    except XmltvGuideError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(arg_parser.get_logging_config(args))

    logging.info("=" * 60)
    logging.info("xmltvguide session started - Version %s", __version__)
    for warning in args.warnings:
        logging.warning(warning)

    try:
        result = run(args)
        logging.info("xmltvguide session ended successfully")
        logging.info("=" * 60)
        return result

    except XmltvGuideError as e:
        logging.error("%s", str(e))
        logging.info("xmltvguide session ended with error")
        logging.info("=" * 60)
        return 1
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 1
    except Exception as e:
        logging.exception("Critical error: %s", str(e))
        logging.info("xmltvguide session ended with error")
        logging.info("=" * 60)
        return 1


if __name__ == "__main__":
    sys.exit(main())
