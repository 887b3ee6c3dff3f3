"""
streamtitle CLI

Command-line interface for inspecting stream providers and resolving titles
offline.

Usage:
    streamtitle providers
    streamtitle parse <url> <window_title>
    streamtitle resolve <snapshot> --engine WebKit
"""

import argparse
import sys


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Resolve episode titles from browser windows"
    )
    parser.add_argument("-c", "--config", default=None,
                        help="Provider catalog (YAML); defaults to STREAMTITLE_PROVIDERS_FILE")

    # Lets -c follow the subcommand too; SUPPRESS keeps a value given before it
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-c", "--config", default=argparse.SUPPRESS,
                        help="Provider catalog (YAML)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Providers command
    subparsers.add_parser("providers", parents=[common], help="List configured stream providers")

    # Parse command
    parse_parser = subparsers.add_parser("parse", parents=[common], help="Parse a title from a URL and window title")
    parse_parser.add_argument("url", help="Page address")
    parse_parser.add_argument("title", help="Window or tab title")

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", parents=[common], help="Resolve a title from an accessibility snapshot")
    resolve_parser.add_argument("snapshot", help="Snapshot file (YAML or JSON)")
    resolve_parser.add_argument("-e", "--engine", required=True,
                                help="Browser engine (WebKit, Gecko, Trident, Presto)")
    resolve_parser.add_argument("--tracked", action="store_true",
                                help="An episode is already tracked; only check its tab is open")
    resolve_parser.add_argument("--current-title", default="",
                                help="Title of the tracked episode")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Import here to keep --help fast
    from .exceptions import SnapshotError
    from .provider_factory import StreamProviderParserFactory
    from .snapshot import SnapshotTreeBuilder
    from .title_resolver import BrowserTitleResolver

    factory = StreamProviderParserFactory()
    if not factory.load_prototypes(args.config):
        print("❌ Could not load stream providers", file=sys.stderr)
        return 2

    if args.command == "providers":
        for prototype in factory.prototypes:
            mark = "✅" if prototype.enabled else "⛔"
            print(f"{mark} {prototype.display_name}")
            print(f"   url: {prototype.url_pattern}")
        return 0

    elif args.command == "parse":
        parsed = factory.create_stream_provider_parser(args.url, args.title)
        title = parsed.parse_title() if parsed else ""
        if not title:
            print("No title resolved", file=sys.stderr)
            return 1
        print(title)
        return 0

    elif args.command == "resolve":
        try:
            builder = SnapshotTreeBuilder.from_files([args.snapshot])
        except SnapshotError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 2
        resolver = BrowserTitleResolver(builder, builder.window_title, factory)
        resolver.current_title = args.current_title
        title = resolver.resolve_title(args.snapshot, args.engine, args.tracked)
        if not title:
            print("No title resolved", file=sys.stderr)
            return 1
        print(title)
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
