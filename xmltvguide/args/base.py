"""
Main argument parser module for xmltvguide

Command-line options take precedence over environment variables, which take
precedence over built-in defaults.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from ..errors import ConfigError
from .path_manager import PathManager
from .validator import ArgumentValidator

EPG_URL_ENV = "EPG_URL"
EPG_URL_FILES_ENV = "EPG_URL_FILES"
CHANNEL_MAP_PATH_ENV = "CHANNEL_MAP_PATH"
OUTPUT_PATH_ENV = "OUTPUT_PATH"
MAX_WORKERS_ENV = "XMLTVGUIDE_MAX_WORKERS"
LOG_FILE_ENV = "XMLTVGUIDE_LOG_FILE"

DEFAULT_WORKERS = 4
DEFAULT_TIMEOUT = 15.0


class ArgumentParser:
    """Command line argument parser for xmltvguide"""

    def __init__(self):
        self.parser = self._create_parser()
        self.validator = ArgumentValidator()
        self.path_manager = PathManager()

    def _create_parser(self):
        """Create the argument parser with all options"""
        parser = argparse.ArgumentParser(
            prog="xmltvguide",
            description="Convert JSON EPG feeds into a single XMLTV guide",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_epilog_text(),
        )

        parser.add_argument(
            "--description", "-d", action="store_true",
            help="Show grabber description and exit"
        )

        parser.add_argument(
            "--version", "-v", action="store_true",
            help="Show version and exit"
        )

        # Sources
        parser.add_argument(
            "--url", action="append", metavar="URL",
            help="Feed URL (repeatable, comma-separated lists accepted)"
        )

        parser.add_argument(
            "--url-file", type=Path, metavar="PATH",
            help="File with one feed URL per line"
        )

        parser.add_argument(
            "--fake", action="store_true",
            help="Read feeds from local files instead of the network (testing)"
        )

        parser.add_argument(
            "--channelmap", type=Path, metavar="PATH",
            help="Channel map JSON file"
        )

        # Output control
        parser.add_argument(
            "--output", "-o", type=Path, metavar="PATH",
            help="XMLTV output file (default: ./output/guide.xml)"
        )

        # Network
        parser.add_argument(
            "--workers", type=int,
            help=f"Parallel downloads and logo checks (1-10, default: {DEFAULT_WORKERS})"
        )

        parser.add_argument(
            "--timeout", type=float,
            help=f"HTTP timeout in seconds (default: {DEFAULT_TIMEOUT:g})"
        )

        # Log level selection
        level_group = parser.add_mutually_exclusive_group()
        level_group.add_argument(
            "--warning", "-w", action="store_true",
            help="Only warnings and errors"
        )

        level_group.add_argument(
            "--debug", action="store_true",
            help="All debug information (very verbose)"
        )

        parser.add_argument(
            "--quiet", "-q", action="store_true",
            help="No console logging"
        )

        parser.add_argument(
            "--log-file", type=Path, metavar="PATH",
            help="Also log to PATH (rotated daily)"
        )

        return parser

    def _get_epilog_text(self):
        """Get the epilog help text"""
        return """
Examples:
  xmltvguide --url "https://example.com/guide?time={unixtime}"
  xmltvguide --url https://a.example/epg.json,https://b.example/epg.json --channelmap ChannelMap.json
  xmltvguide --url-file epg_urls.txt --output /srv/www/guide.xml
  xmltvguide --fake --url ./testdata/tvguide.json --debug

Environment:
  EPG_URL                 Comma-separated feed URLs (used when --url is absent)
  EPG_URL_FILES           URL list file (used when --url-file is absent)
  CHANNEL_MAP_PATH        Channel map JSON file
  OUTPUT_PATH             XMLTV output file
  XMLTVGUIDE_MAX_WORKERS  Parallel workers
  XMLTVGUIDE_LOG_FILE     Log file

URL placeholders:
  {unixtime}              Replaced with the current Unix time at request time
        """

    def parse_args(self, args=None, environ: Optional[Mapping[str, str]] = None):
        """
        Parse command line arguments, apply environment fallbacks and validate

        Raises:
            ConfigError: no usable feed URL or invalid option values
        """
        environ = os.environ if environ is None else environ
        args = self.parser.parse_args(args)

        if self._handle_special_actions(args):
            sys.exit(0)

        args.warnings = []
        self._resolve_sources(args, environ)
        self._resolve_paths(args, environ)
        self._resolve_network(args, environ)

        return args

    def _handle_special_actions(self, args) -> bool:
        """Handle special actions that exit immediately"""
        if args.description:
            print("JSON EPG feeds to XMLTV (xmltvguide)")
            return True

        if args.version:
            from .. import __version__
            print(__version__)
            return True

        return False

    def _resolve_sources(self, args, environ: Mapping[str, str]):
        urls = self.validator.split_urls(args.url)
        if not urls and environ.get(EPG_URL_ENV):
            urls = self.validator.split_urls([environ[EPG_URL_ENV]])

        url_file = args.url_file
        if url_file is None and environ.get(EPG_URL_FILES_ENV):
            url_file = Path(environ[EPG_URL_FILES_ENV])
        if url_file is not None:
            urls.extend(self.path_manager.read_url_file(url_file))

        if args.fake and not urls:
            urls = [str(self.path_manager.get_defaults()["fake_data_file"])]

        valid, error = self.validator.validate_urls(urls, fake=args.fake)
        if not valid:
            raise ConfigError(error)

        args.urls = urls
        del args.url

    def _resolve_paths(self, args, environ: Mapping[str, str]):
        if args.channelmap is None and environ.get(CHANNEL_MAP_PATH_ENV, "").strip():
            args.channelmap = Path(environ[CHANNEL_MAP_PATH_ENV].strip())

        if args.channelmap is None:
            args.warnings.append("No channel map path provided, feed channel names will be used")

        if args.output is None:
            output = environ.get(OUTPUT_PATH_ENV, "").strip()
            args.output = Path(output) if output else self.path_manager.get_defaults()["output_file"]

        if args.log_file is None and environ.get(LOG_FILE_ENV, "").strip():
            args.log_file = Path(environ[LOG_FILE_ENV].strip())

    def _resolve_network(self, args, environ: Mapping[str, str]):
        workers = args.workers
        if workers is None and environ.get(MAX_WORKERS_ENV):
            try:
                workers = int(environ[MAX_WORKERS_ENV])
            except ValueError:
                args.warnings.append(
                    f"Invalid {MAX_WORKERS_ENV}={environ[MAX_WORKERS_ENV]!r}, using {DEFAULT_WORKERS}"
                )
        if workers is None:
            workers = DEFAULT_WORKERS

        valid, error = self.validator.validate_workers(workers)
        if not valid:
            workers = self.validator.clamp_workers(workers)
            args.warnings.append(f"{error}; using {workers}")
        args.workers = workers

        valid, error = self.validator.validate_timeout(args.timeout)
        if not valid:
            raise ConfigError(error)
        if args.timeout is None:
            args.timeout = DEFAULT_TIMEOUT

    def get_logging_config(self, args):
        """Determine logging configuration from arguments"""
        config = {
            "level": "default",
            "quiet": bool(args.quiet),
            "log_file": args.log_file,
        }

        if args.debug:
            config["level"] = "debug"
        elif args.warning:
            config["level"] = "warning"

        return config
