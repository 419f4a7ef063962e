"""Terminal client that reuses the in-process catalog service."""
from __future__ import annotations

import argparse
import shlex
from decimal import Decimal
from pathlib import Path
from time import perf_counter
from typing import Iterable, List

from catalog.domain import Item, SearchQuery, SortField, SortOrder
from catalog.service import build_service

MAX_RESULTS = 100
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CLI client for the item catalog")
    parser.add_argument("query", nargs="?", help="Free-text term. If omitted without filters, starts REPL mode.")
    parser.add_argument("--category")
    parser.add_argument("--subcategory")
    parser.add_argument("--location")
    parser.add_argument("--min-price", type=Decimal)
    parser.add_argument("--max-price", type=Decimal)
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument("--offset", type=int, default=0)
    parser.add_argument("--sort", type=SortField, choices=list(SortField))
    parser.add_argument("--order", type=SortOrder, choices=list(SortOrder))
    parser.add_argument("--autocomplete", metavar="TEXT", help="Print name suggestions for TEXT")
    parser.add_argument("--batch", type=Path, help="File with one argument line per search")
    return parser


def query_from_args(args: argparse.Namespace) -> SearchQuery:
    return SearchQuery(
        q=args.query,
        category=args.category,
        subcategory=args.subcategory,
        location=args.location,
        min_price=args.min_price,
        max_price=args.max_price,
        limit=min(args.limit, MAX_RESULTS),
        offset=args.offset,
        sort=args.sort,
        order=args.order,
    )


def _has_filters(args: argparse.Namespace) -> bool:
    return any(
        value is not None
        for value in (args.category, args.subcategory, args.location, args.min_price, args.max_price, args.sort)
    )


def perform_search(query: SearchQuery) -> None:
    start = perf_counter()
    items = build_service().search_items(query)
    pretty_print_items(query, items, (perf_counter() - start) * 1000)


def pretty_print_items(query: SearchQuery, items: List[Item], eta: float) -> None:
    color = GREEN if eta < 200 else RED
    print(f"Query: {query.q or '*'} | results: {len(items)} | ETA: {color}{eta:.1f} ms{RESET}")
    for idx, item in enumerate(items[:MAX_RESULTS], start=1):
        print(
            f"  {idx:02d}. {item.name} | {item.price} | stock={item.stock} | "
            f"{item.category}/{item.subcategory} | {item.location}"
        )


def perform_autocomplete(text: str) -> None:
    for name in build_service().autocomplete(text):
        print(f"  {name}")


def interactive_shell() -> None:
    print("Interactive catalog search. Type 'exit' to quit.")
    while True:
        try:
            query = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not query:
            continue
        if query.lower() in {"exit", "quit"}:
            return
        perform_search(SearchQuery(q=query, limit=MAX_RESULTS))


def batch_mode(parser: argparse.ArgumentParser, file_path: Path) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            perform_search(query_from_args(parser.parse_args(shlex.split(line))))


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.batch:
        batch_mode(parser, args.batch)
        return 0
    if args.autocomplete:
        perform_autocomplete(args.autocomplete)
        return 0
    if args.query or _has_filters(args):
        perform_search(query_from_args(args))
        return 0
    interactive_shell()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
