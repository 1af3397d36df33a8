"""
Command line entry point for trace-filter

Usage:
    trace-filter --file capture.jsonl [filters] [--field NAME[WIDTH] ...]
    trace-filter --live trace.jsonl --provider NAME [--keyword KW] [filters]

Examples:
    trace-filter --file run.jsonl --pid 1234 --event FileIO/Read
    trace-filter --file run.jsonl --filter "FileName=\\.dll$" --field Event --field FileName
    trace-filter --live trace.jsonl --keyword GC --stats --duration 30
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .config import RunConfig
from .exceptions import ConfigurationError, TraceFilterError
from .filtering import FilterEngine
from .logger import get_logger
from .streaming import EventDispatcher, create_processor, create_source
from .streaming.sources import EventSource

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trace-filter",
        description="Filter and display a stream of structured trace events.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source = parser.add_argument_group("source")
    source.add_argument("--file", dest="capture_file", help="recorded capture (JSON lines)")
    source.add_argument("--live", dest="live_file", help="trace file to follow as it grows")
    source.add_argument(
        "--from-beginning",
        action="store_true",
        help="with --live, start at the top of the file instead of its end",
    )
    source.add_argument(
        "--provider", dest="providers", action="append", default=[],
        help="enable a provider by name or GUID (repeatable)",
    )
    source.add_argument(
        "--keyword", dest="keywords", action="append", default=[],
        help="enable events carrying this keyword (repeatable)",
    )

    filters = parser.add_argument_group("filters")
    filters.add_argument("--pid", dest="process_id", type=int, help="only this process id")
    filters.add_argument("--tid", dest="thread_id", type=int, help="only this thread id")
    filters.add_argument(
        "--event", dest="events", action="append", default=[],
        help="only events with this name (repeatable)",
    )
    filters.add_argument(
        "--filter", dest="field_filters", action="append", default=[],
        metavar="FIELD=REGEX",
        help="forward events whose field matches REGEX; filters are OR-ed (repeatable)",
    )
    filters.add_argument(
        "--raw-filter", dest="raw_filter", metavar="REGEX",
        help="forward events whose raw text matches REGEX",
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "--field", dest="display_fields", action="append", default=[],
        metavar="NAME[WIDTH]",
        help="print a table with this column (repeatable)",
    )
    output.add_argument(
        "--stats", dest="stats_only", action="store_true",
        help="only print event counts by name and process",
    )
    output.add_argument(
        "--duration", dest="duration_seconds", type=float, default=0.0,
        help="stop after this many seconds",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        process_id=args.process_id,
        thread_id=args.thread_id,
        events=args.events,
        raw_filter=args.raw_filter,
        field_filters=args.field_filters,
        display_fields=args.display_fields,
        duration_seconds=args.duration_seconds,
        stats_only=args.stats_only,
        capture_file=args.capture_file,
        live_file=args.live_file,
        from_beginning=args.from_beginning,
        providers=args.providers,
        keywords=args.keywords,
    )


def source_from_config(config: RunConfig) -> EventSource:
    if config.is_file_session:
        return create_source("capture", path=config.capture_file)
    return create_source(
        "live",
        path=config.live_file,
        providers=config.providers,
        keywords=config.keywords,
        from_beginning=config.from_beginning,
    )


def bail(message: str) -> int:
    print(f"ERROR: {message}")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    try:
        config.validate()
    except ConfigurationError as e:
        return bail(str(e))

    processor = create_processor(
        stats_only=config.stats_only,
        display_columns=config.display_columns(),
    )
    dispatcher = EventDispatcher(
        source=source_from_config(config),
        engine=FilterEngine(config.filter_spec()),
        processor=processor,
    )

    try:
        asyncio.run(dispatcher.run(duration_seconds=config.duration_seconds))
    except (OSError, ValueError, TraceFilterError) as e:
        logger.error(f"Trace source failed: {e}")
        dispatcher.shutdown("source_error")
        return bail(str(e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
