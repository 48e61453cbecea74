from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from yt_pulse.config import (
    DEFAULT_REGION,
    get_api_key,
    get_gemini_api_key,
    load_setting,
    save_api_key,
    save_setting,
)
from yt_pulse.exceptions import AnalysisError, YtPulseError
from yt_pulse.logging_setup import setup_logging
from yt_pulse.models import ASC, DESC, FILTER_ALL, GRADES, SORT_KEYS, QueryState, SortConfig, TrendAnalysis
from yt_pulse.output.json_out import JsonPrinter
from yt_pulse.output.table import AnalysisPrinter, TablePrinter
from yt_pulse.services.dates import default_date_range, parse_date
from yt_pulse.services.search_service import FetchService
from yt_pulse.services.session import FeedSession
from yt_pulse.services.trend_analysis import TrendAnalyzer
from yt_pulse.youtube_client import YouTubeClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yt-pulse",
        description="Fetch YouTube videos, grade them by views per subscriber, then filter and sort.",
    )
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ERROR.")
    sub = parser.add_subparsers(dest="command", required=True)

    trending = sub.add_parser("trending", help="Most popular videos for a region.")
    trending.add_argument(
        "--region",
        default=None,
        help=f"ISO 3166-1 region code (default: saved setting or {DEFAULT_REGION}).",
    )
    _add_query_args(trending)

    search = sub.add_parser("search", help="Keyword search within a date range.")
    search.add_argument("query", help="Search query string.")
    search.add_argument("--start", type=parse_date, default=None, help="Start date YYYY-MM-DD (default: 30 days ago).")
    search.add_argument("--end", type=parse_date, default=None, help="End date YYYY-MM-DD, inclusive (default: today).")
    _add_query_args(search)

    set_key = sub.add_parser("set-key", help="Save the YouTube API key to the per-user config file.")
    set_key.add_argument("key", help="YouTube Data API v3 key.")

    return parser


def _add_query_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--filter", default="", help="Case-insensitive text matched against title and channel name.")
    p.add_argument("--grade", choices=[FILTER_ALL, *GRADES], default=FILTER_ALL, help="Only show this grade.")
    p.add_argument("--sort", choices=list(SORT_KEYS), default=None, help="Sort key (default: saved setting or publishedAt).")
    p.add_argument("--order", choices=[ASC, DESC], default=None, help="Sort direction (default: saved setting or desc).")
    p.add_argument("--format", choices=["table", "json"], default="table", help="Output format.")
    p.add_argument("--analyze", action="store_true", help="Append an AI trend summary (needs GEMINI_API_KEY).")
    p.add_argument(
        "--save-defaults",
        action="store_true",
        help="Remember the given --sort/--order (and --region for trending) for later runs.",
    )


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "set-key":
            _handle_set_key(args)
        else:
            _handle_fetch(args)
    except YtPulseError as e:
        _fail(e)


def _handle_set_key(args: argparse.Namespace) -> None:
    path = save_api_key(args.key)
    if path is None:
        print("Empty key; nothing saved.", file=sys.stderr)
        sys.exit(1)
    print(f"Saved YOUTUBE_API_KEY to {path}")


def _handle_fetch(args: argparse.Namespace) -> None:
    if args.save_defaults:
        _save_defaults(args)

    yt = YouTubeClient(api_key=get_api_key())
    # fail on a missing Gemini key before spending API quota
    analyzer = TrendAnalyzer(api_key=get_gemini_api_key()) if args.analyze else None
    svc = FetchService(yt=yt)
    session = FeedSession(_query_state(args))

    if args.command == "search":
        q = session.query
        session.run_fetch(lambda: svc.search(args.query, start_date=q.start_date, end_date=q.end_date))
    else:
        region = args.region or load_setting("region", DEFAULT_REGION)
        session.run_fetch(lambda: svc.trending(region_code=region))

    if session.error:
        print(f"Error: {session.error}", file=sys.stderr)
        sys.exit(1)

    visible = session.visible()
    counts = session.grade_counts()

    analysis: Optional[TrendAnalysis] = None
    analysis_error: Optional[AnalysisError] = None
    if analyzer is not None and session.videos:
        try:
            analysis = analyzer.analyze(session.videos)
        except AnalysisError as e:
            analysis_error = e

    if args.format == "json":
        JsonPrinter().print(visible, counts=counts, analysis=analysis)
    else:
        TablePrinter().print(visible, counts=counts)
        if analysis is not None:
            AnalysisPrinter().print(analysis)

    if analysis_error is not None:
        _fail(analysis_error, prefix="Trend analysis failed")


def _query_state(args: argparse.Namespace) -> QueryState:
    start = end = None
    if args.command == "search":
        default_start, default_end = default_date_range()
        start = args.start or default_start
        end = args.end or default_end

    sort = SortConfig(
        key=_saved_choice(args.sort, "sort", SORT_KEYS, "publishedAt"),
        direction=_saved_choice(args.order, "order", (ASC, DESC), DESC),
    )
    return QueryState(
        search=args.filter,
        grade_filter=args.grade,
        sort=sort,
        start_date=start,
        end_date=end,
    )


def _saved_choice(given: Optional[str], setting: str, allowed, default: str) -> str:
    if given:
        return given
    saved = load_setting(setting, default)
    # hand-edited settings file may hold junk
    return saved if saved in allowed else default


def _save_defaults(args: argparse.Namespace) -> None:
    if args.sort:
        save_setting("sort", args.sort)
    if args.order:
        save_setting("order", args.order)
    if getattr(args, "region", None):
        save_setting("region", args.region)


def _fail(e: YtPulseError, prefix: str = "Error") -> None:
    print(f"{prefix}: {e}", file=sys.stderr)
    if e.hint:
        print(e.hint, file=sys.stderr)
    sys.exit(1)
