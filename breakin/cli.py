# breakin/cli.py
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

import requests

from .config import load_config
from .detector import BreakinDetector
from .errors import BreakinError
from .log_ingestor import fetch_log_lines, read_capture
from .lookup import load_lookups
from .models import Detection
from .parsers import break_down_url, extract_user
from .reporter import Reporter

logger = logging.getLogger(__name__)


def run(lines: Iterable[str], detector: BreakinDetector, reporter: Reporter) -> Reporter:
    """Classify every line in order, report each one, then the summary."""
    for number, line in enumerate(lines, start=1):
        outcome = detector.classify(line)
        reporter.report(
            Detection(
                line_number=number,
                outcome=outcome,
                user=extract_user(line),
                line=line,
            )
        )
    reporter.summary()
    return reporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breakin-detect",
        description="Flag possible break-in attempts in an sshd log served over HTTP.",
    )
    parser.add_argument("url", help="URL of the log, e.g. http://host/logs/auth.txt")
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--authorized", type=Path, help="Authorized users file")
    parser.add_argument("--banned", type=Path, help="Banned IPs file")
    parser.add_argument("--year", type=int, help="Year assumed for log timestamps")
    parser.add_argument(
        "--capture",
        type=Path,
        help="Read a saved raw HTTP response instead of fetching the URL",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        break_down_url(args.url)
        config = load_config(args.config).override(
            authorized_users_file=args.authorized,
            banned_ips_file=args.banned,
            reference_year=args.year,
        )
        authorized, banned = load_lookups(config)
        detector = BreakinDetector.from_config(config, authorized, banned)

        if args.capture is not None:
            lines = read_capture(args.capture)
        else:
            lines = fetch_log_lines(args.url, timeout=config.request_timeout)

        run(lines, detector, Reporter(sys.stdout))
    except BreakinError as e:
        logger.error("%s", e)
        return 1
    except requests.RequestException as e:
        logger.error("Could not fetch %s: %s", args.url, e)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1

    logger.debug("Outcomes: %s", dict(detector.outcome_counts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
