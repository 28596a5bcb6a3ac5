"""Identify catalog wines from the command line.

Usage:
    weinblog-match code WEIN-MOS-001
    weinblog-match name riesling --lang de
    weinblog-match url https://shop.example.de/weine/prosecco.html
    weinblog-match text "Chianti Classico DOCG 2020"
"""

import argparse
import logging
import sys
from pathlib import Path

from weinblog.catalog import CatalogError, load_catalog
from weinblog.config import settings
from weinblog.models import LANGUAGES, WineRecord
from weinblog.services import WineMatcher


def _describe(wine: WineRecord, language: str) -> str:
    region = wine.region_for(language)
    country = wine.country_for(language)
    grapes = ", ".join(wine.grapes_for(language))
    return f"[{wine.id}] {wine.display_name(language)} ({region}, {country}) {grapes}"


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Identify a catalog wine by code, name, URL or label text",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=settings.catalog_path,
        help="Catalog JSON file (default: bundled catalog)",
    )
    parser.add_argument(
        "--lang", "-l",
        choices=LANGUAGES,
        default=settings.default_language,
        help="Language for searching and display",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log matching details",
    )

    subparsers = parser.add_subparsers(dest="command", help="Lookup method")
    subparsers.add_parser("code", help="Exact scan code lookup").add_argument("value")
    subparsers.add_parser("name", help="Search by name, region, country or grape").add_argument("value")
    subparsers.add_parser("url", help="Resolve a product page URL").add_argument("value")
    subparsers.add_parser("text", help="Resolve label text").add_argument("value")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(args.catalog)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    matcher = WineMatcher(catalog)

    if args.command == "name":
        wines = matcher.match_by_name(args.value, args.lang)
        if not wines:
            print("No matching wines")
            return 1
        for wine in wines:
            print(_describe(wine, args.lang))
        return 0

    if args.command == "url":
        result = matcher.match_by_url(args.value, args.lang)
        if not result.found:
            print(result.reason_if_not_found)
            return 1
        print(_describe(result.wine, args.lang))
        print(f"  matched by: {result.stage}")
        return 0

    if args.command == "code":
        wine = matcher.match_by_code(args.value)
        missing = f"Scanned code {args.value} not in catalog"
    else:
        wine = matcher.match_label_text(args.value, args.lang)
        missing = "No catalog wine recognized in text"

    if wine is None:
        print(missing)
        return 1
    print(_describe(wine, args.lang))
    return 0


if __name__ == "__main__":
    sys.exit(main())
