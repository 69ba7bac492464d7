"""
Command line scanner: runs one orchestration against a running proxy and
prints the days that have free courts.
"""

import argparse
import asyncio
import logging
import signal
import sys
import time

from padel_finder.config import PROXY_URL
from padel_finder.orchestrator.fetcher import DayFetcher
from padel_finder.orchestrator.records import DayState, RunSnapshot
from padel_finder.orchestrator.scheduler import DayOrchestrator
from padel_finder.venues import VENUES, get_venue

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Configures logging to stderr with local time."""
    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s]: %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    formatter.converter = time.localtime
    handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[handler])


def parse_arguments(argv=None):
    venue_help = ", ".join(f"{v.id} ({v.name})" for v in VENUES)
    parser = argparse.ArgumentParser(description="Find days with free padel courts.")
    parser.add_argument("venue_id", help=f"Venue id. Known venues: {venue_help}")
    parser.add_argument("--proxy-url", default=PROXY_URL, help=f"Proxy base URL. Defaults to {PROXY_URL}.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def format_day(record) -> str:
    if record.state is DayState.ERROR:
        return f"{record.date}  failed"
    if record.state is DayState.EMPTY:
        return f"{record.date}  no availability"
    courts = "; ".join(f"{c.court}: {', '.join(c.times)}" for c in record.courts or ())
    return f"{record.date}  {courts}"


def _log_progress(snapshot: RunSnapshot) -> None:
    if snapshot.loading is not None:
        logger.info(
            "Fetching %s (%d/%d days done)",
            snapshot.loading.date, snapshot.progressed_count, len(snapshot.records),
        )


async def scan(venue_id: str, proxy_url: str) -> RunSnapshot:
    fetcher = DayFetcher(proxy_url)
    orchestrator = DayOrchestrator(fetcher)
    orchestrator.add_listener(_log_progress)

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, orchestrator.cancel)
    except NotImplementedError:
        pass

    try:
        orchestrator.start(venue_id)
        await orchestrator.wait()
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except NotImplementedError:
            pass
        await fetcher.close()
    return orchestrator.snapshot()


def main(argv=None):
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    venue = get_venue(args.venue_id)
    if venue is None:
        logger.warning("Unknown venue %s, using the default look-ahead", args.venue_id)

    snapshot = asyncio.run(scan(args.venue_id, args.proxy_url))
    for record in snapshot.records:
        if record.state.is_terminal:
            print(format_day(record))
    print(f"Done: {snapshot.available_count} days have availability.")


if __name__ == "__main__":
    main()
