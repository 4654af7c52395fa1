# =============================================================================
# src/cli/search.py: Command-line search and keyword extraction
# =============================================================================
#
# Runs the same services as the web app without starting a server:
#
#   python -m src.cli keyword jazz --page 2
#   python -m src.cli similar 1234 --mtf 2 --csv
#   python -m src.cli keywords 1234
#   python -m src.cli serve
#
# Results go to stdout as JSON (or CSV with --csv); logs and errors go to
# stderr so the output can be piped.  Any application error exits with 1.
# =============================================================================

"""Standalone CLI for eventlens searches and keyword extraction."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from src.models.event import (
    EXPORT_SIMILARITY_DEFAULTS,
    INTERACTIVE_SIMILARITY_DEFAULTS,
    SimilarityParams,
)
from src.utils.errors import EventLensError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventlens",
        description="Search events and extract keyphrases from the command line.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML configuration file (default: config/config.yaml)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    kw = sub.add_parser("keyword", help="Free-text event search")
    kw.add_argument("text")
    kw.add_argument("--page", type=int, default=1)
    kw.add_argument("--csv", action="store_true", help="Emit CSV rows instead of JSON")

    sim = sub.add_parser("similar", help="Events similar to a reference event")
    sim.add_argument("event_id")
    sim.add_argument("--page", type=int, default=1)
    sim.add_argument("--mtf", type=int, default=None, help="Minimum term frequency")
    sim.add_argument("--xdf", type=int, default=None, help="Maximum document frequency")
    sim.add_argument("--xqt", type=int, default=None, help="Maximum query terms")
    sim.add_argument("--csv", action="store_true", help="Emit CSV rows instead of JSON")

    kws = sub.add_parser("keywords", help="Weighted keyphrases for one event")
    kws.add_argument("event_id")

    sub.add_parser("serve", help="Run the HTTP API under uvicorn")
    return parser


def similarity_params_from_args(args: argparse.Namespace) -> SimilarityParams:
    """Fill unset tuning flags from the defaults of the selected output path."""
    defaults = EXPORT_SIMILARITY_DEFAULTS if args.csv else INTERACTIVE_SIMILARITY_DEFAULTS
    return SimilarityParams(
        min_term_freq=args.mtf if args.mtf is not None else defaults.min_term_freq,
        max_doc_freq=args.xdf if args.xdf is not None else defaults.max_doc_freq,
        max_query_terms=args.xqt if args.xqt is not None else defaults.max_query_terms,
    )


async def _run(args: argparse.Namespace, components: dict[str, Any]) -> str:
    from src.api.schemas import KeywordsResponse, SearchResponse
    from src.services.export_formatter import render_csv

    try:
        if args.command == "keyword":
            outcome = await components["search_service"].search_by_keyword(args.text, args.page)
        elif args.command == "similar":
            outcome = await components["search_service"].search_similar(
                args.event_id, args.page, similarity_params_from_args(args)
            )
        else:
            result = await components["keyword_extractor"].extract_keywords(args.event_id)
            return json.dumps(
                KeywordsResponse.from_result(result).model_dump(), ensure_ascii=False, indent=2
            )
    finally:
        await components["http_client"].aclose()

    if args.csv:
        return render_csv(outcome)
    return json.dumps(SearchResponse.from_outcome(outcome).model_dump(), ensure_ascii=False, indent=2)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    args = _build_parser().parse_args(argv)

    # Deferred so ``--help`` works without a configuration.
    from src.config.loader import load_settings
    from src.main import build_components, serve
    from src.utils.logging import configure_logging

    try:
        settings = load_settings(args.config)
    except EventLensError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.command == "serve":
        serve(settings)
        return 0

    configure_logging(log_level="WARNING")
    _route_logs_to_stderr()

    components = build_components(settings)
    try:
        output = asyncio.run(_run(args, components))
    except EventLensError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(output if output.endswith("\n") or not output else output + "\n")
    return 0


def _route_logs_to_stderr() -> None:
    """Keep stdout clean for results."""
    import logging

    import structlog

    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
