# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides the command-line interface: run a search, normalize
#   a saved payload, and reopen / export stored results.
#
# COMMANDS:
# ---------
# 1. Search the breach API and print the results:
#    python -m leakview.cli search john@example.com
#    python -m leakview.cli search john@example.com --save last --json
#
# 2. Normalize a JSON payload offline (file or "-" for stdin):
#    python -m leakview.cli normalize response.json
#
# 3. Show a stored handoff:
#    python -m leakview.cli show last
#
# 4. Write a stored handoff as a text file:
#    python -m leakview.cli export last --output results.txt
#
# EXIT STATUS:
# ------------
#   0 on success, 1 on search errors, missing handoffs or
#   unreadable input (message on stderr).
#
# ==============================================

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from leakview.client import SearchClient, SearchError, SearchTracker
from leakview.config import AppConfig, get_config
from leakview.normalization import NormalizedSearchResults, normalize_search_results
from leakview.persistence import HandoffStore
from leakview.results import export_filename, format_results_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="leakview",
        description="Query a breach-lookup API and print readable results.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="run a search")
    search.add_argument("query", help="email, username, phone, domain, ...")
    search.add_argument("--limit", type=int, default=None, help="max results (1-10000)")
    search.add_argument("--save", metavar="ID", help="store the results under this handoff id")
    search.add_argument("--email", default=None, help="user email reported to the tracking webhook")
    search.add_argument("--json", action="store_true", help="print normalized JSON instead of text")

    normalize = subparsers.add_parser("normalize", help="normalize a JSON payload")
    normalize.add_argument("file", help="path to a JSON file, or - for stdin")
    normalize.add_argument("--json", action="store_true", help="print normalized JSON instead of text")

    show = subparsers.add_parser("show", help="print a stored handoff")
    show.add_argument("handoff_id")
    show.add_argument("--json", action="store_true", help="print normalized JSON instead of text")

    export = subparsers.add_parser("export", help="write a stored handoff to a text file")
    export.add_argument("handoff_id")
    export.add_argument("--output", default=None, help="output path (default derived from the query)")

    return parser


def main(argv: Optional[List[str]] = None, config: Optional[AppConfig] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = config or get_config()

    try:
        if args.command == "search":
            return _cmd_search(args, config)
        if args.command == "normalize":
            return _cmd_normalize(args, config)
        if args.command == "show":
            return _cmd_show(args, config)
        return _cmd_export(args, config)
    except (SearchError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


def _cmd_search(args: argparse.Namespace, config: AppConfig) -> int:
    store = None
    if args.save is not None:
        # Reject a bad id before the search spends a request
        store = HandoffStore(config.handoff.storage_dir)
        store.path_for(args.save)

    with SearchClient(config.api) as client:
        _, normalized = client.search_normalized(args.query, args.limit)

    with SearchTracker(config.tracking.webhook_url) as tracker:
        tracker.track(args.email, args.query.strip(), normalized.has_meaningful_data)

    if store is not None:
        path = store.save(args.save, args.query.strip(), normalized)
        print(f"✓ Saved results to {path}", file=sys.stderr)

    _print_results(config, args.query.strip(), normalized, args.json)
    return 0


def _cmd_normalize(args: argparse.Namespace, config: AppConfig) -> int:
    try:
        if args.file == "-":
            data = json.load(sys.stdin)
        else:
            with open(args.file, 'r', encoding='utf-8') as f:
                data = json.load(f)
    except (OSError, ValueError) as e:
        print(f"✗ Could not read {args.file}: {e}", file=sys.stderr)
        return 1

    normalized = normalize_search_results(data)
    _print_results(config, Path(args.file).stem if args.file != "-" else "stdin", normalized, args.json)
    return 0


def _cmd_show(args: argparse.Namespace, config: AppConfig) -> int:
    handoff = HandoffStore(config.handoff.storage_dir).load(args.handoff_id)
    if handoff is None:
        print(f"✗ No stored results for {args.handoff_id!r}", file=sys.stderr)
        return 1

    _print_results(config, handoff.query, handoff.normalized, args.json)
    return 0


def _cmd_export(args: argparse.Namespace, config: AppConfig) -> int:
    handoff = HandoffStore(config.handoff.storage_dir).load(args.handoff_id)
    if handoff is None:
        print(f"✗ No stored results for {args.handoff_id!r}", file=sys.stderr)
        return 1

    content = format_results_text(config.export.site_name, handoff.query or "Query", handoff.normalized)
    output = Path(args.output or export_filename(handoff.query))
    output.write_text(content, encoding="utf-8")
    print(f"✓ Wrote {handoff.normalized.record_count} record(s) to {output}")
    return 0


def _print_results(config: AppConfig, query: str, normalized: NormalizedSearchResults, as_json: bool) -> None:
    if as_json:
        print(json.dumps(normalized.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_results_text(config.export.site_name, query or "Query", normalized))


if __name__ == "__main__":
    sys.exit(main())
