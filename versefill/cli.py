#!/usr/bin/env python3
"""versefill CLI - scripture citation expansion from the command line.

Usage:
    versefill detect <text>
    versefill expand <file> [options]
    versefill lookup <reference> [options]
    versefill --version
    versefill --help

Commands:
    detect    List the citations found in a piece of text
    expand    Expand every citation in a file (or stdin) with its verse text
    lookup    Resolve a single reference

Examples:
    # Show citations and their keys
    versefill detect "See John 3:16 and Romans 8:28"

    # Expand a sermon draft using a local verse table
    versefill expand draft.txt --verses kjv.json -o draft_expanded.txt

    # Look up a verse on bolls.life
    versefill lookup "1 Cor 13:4-7" --resolver bolls --translation ESV
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path


def get_version():
    """Get package version."""
    try:
        from versefill import __version__
        return __version__
    except ImportError:
        return "1.0.0"


def load_config(args):
    """Build a Config from the environment, overridden by CLI options."""
    from versefill.config import Config

    config = Config.from_env()
    if args.resolver:
        config.resolver = args.resolver
    if args.verses:
        config.verses_file = args.verses
        if not args.resolver:
            config.resolver = "static"
    if args.api_url:
        config.api_url = args.api_url
    if args.translation:
        config.translation = args.translation
    if args.timeout is not None:
        config.resolution_timeout = args.timeout
    return config


def cmd_detect(args):
    """List citations found in text."""
    from versefill.core.grammar import match, normalize_key

    spans = match(args.text)
    if not spans:
        print("No citations found.")
        return 0

    for span in spans:
        print(f"{span.start:>5}-{span.end:<5} {span.raw_text:<24} {normalize_key(span.raw_text)}")
    return 0


def cmd_expand(args):
    """Expand every citation in a document."""
    from versefill.core.models import CitationStatus
    from versefill.engine import ScriptureField
    from versefill.exceptions import ConfigurationError
    from versefill.providers import LoggingNotifier, build_resolver

    config = load_config(args)
    try:
        resolver = build_resolver(config)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    if args.document == "-":
        document_text = sys.stdin.read()
    else:
        input_path = Path(args.document)
        if not input_path.exists():
            print(f"Error: Document not found: {input_path}")
            return 1
        document_text = input_path.read_text(encoding="utf-8")

    field = ScriptureField(resolver, notifier=LoggingNotifier(), config=config)

    async def run():
        field.on_text_change(document_text)
        await field.drain()

    asyncio.run(run())

    if args.output:
        Path(args.output).write_text(field.text, encoding="utf-8")
    else:
        sys.stdout.write(field.text)
        if not field.text.endswith("\n"):
            sys.stdout.write("\n")

    failed = [c for c in field.citations if c.status == CitationStatus.FAILED]
    resolved = [c for c in field.citations if c.status == CitationStatus.RESOLVED]
    print(f"Expanded {len(resolved)} citation(s), {len(failed)} failed", file=sys.stderr)
    if args.verbose:
        for citation in failed:
            print(f"  - {citation.raw_text}: {citation.error}", file=sys.stderr)
    return 0


def cmd_lookup(args):
    """Resolve a single reference."""
    from versefill.exceptions import VersefillError
    from versefill.providers import build_resolver

    config = load_config(args)
    try:
        resolver = build_resolver(config)
        result = resolver.resolve(args.reference)
    except VersefillError as e:
        print(f"Error: {e}")
        return 1

    print(f'{result.display_reference} ({result.translation or config.translation})')
    print(result.resolved_text)
    return 0


def _add_resolver_options(parser):
    parser.add_argument("--resolver", choices=["static", "lookup_api", "bolls"],
                        help="Resolver backend (or set VERSEFILL_RESOLVER)")
    parser.add_argument("--verses", help="JSON verse table for the static resolver")
    parser.add_argument("--api-url", help="Verse lookup endpoint (or set VERSEFILL_API_URL)")
    parser.add_argument("--translation", help="Bible translation (default: KJV)")
    parser.add_argument("--timeout", type=float, help="Seconds before a lookup fails")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="versefill",
        description="versefill - live scripture citation expansion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  versefill detect "See John 3:16 and Romans 8:28"
  versefill expand draft.txt --verses kjv.json -o draft_expanded.txt
  versefill lookup "1 Cor 13:4-7" --resolver bolls --translation ESV
        """
    )
    parser.add_argument("--version", action="version", version=f"versefill {get_version()}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # detect command
    detect_parser = subparsers.add_parser(
        "detect",
        help="List citations found in text",
        description="Print the offsets, text and normalized key of each citation."
    )
    detect_parser.add_argument("text", help="Text to scan")

    # expand command
    expand_parser = subparsers.add_parser(
        "expand",
        help="Expand citations in a document",
        description="Resolve every citation in a document and splice in its verse text."
    )
    expand_parser.add_argument("document", help="Input text file, or - for stdin")
    expand_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    _add_resolver_options(expand_parser)

    # lookup command
    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Resolve a single reference",
        description="Look up the verse text for one reference."
    )
    lookup_parser.add_argument("reference", help='Reference such as "John 3:16"')
    _add_resolver_options(lookup_parser)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    from versefill.utils.logging import setup_logging
    verbose = getattr(args, "verbose", False)
    setup_logging(level=logging.INFO if verbose else logging.WARNING, stream=sys.stderr)

    # Dispatch to command handler
    commands = {
        "detect": cmd_detect,
        "expand": cmd_expand,
        "lookup": cmd_lookup,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
