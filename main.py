#!/usr/bin/env python3
"""
feed-relay: relay new posts from a feed to Bluesky, with a Slack audit trail.

Usage:
    python main.py run                  # One pass over all sources (for cron)
    python main.py run --dry-run        # Same, but print instead of posting; no cursor writes
    python main.py pending              # Show what the next run would deliver
    python main.py status               # Show stored cursors
    python main.py set-cursor ID VALUE  # Move a source's cursor by hand

Serverless: point the scheduled trigger at `main.handler`.
"""

import argparse
import json
import logging
import os
import sys

from collectors import FetchError, TruthSocialFetcher
from config import Config, load_config
from delivery import BlueskyClient, ConsoleSink, DeliveryError, SlackNotifier
from filters.selector import parse_id
from llm import LLMError, create_provider
from models import SourceResult
from pipeline import Relay, all_ok
from storage import CursorStore, StoreError, create_store
from synthesizer import Enricher

log = logging.getLogger("relay")


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    override = os.environ.get("RELAY_LOG_LEVEL")
    if override:
        level = getattr(logging, override.upper(), level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_relay(config: Config, store: CursorStore, dry_run: bool = False) -> Relay:
    """
    Wire up the collaborators for one process.

    Clients are built here and handed to the Relay. Nothing is kept at
    module level; each run owns its handles.
    """
    if dry_run:
        console = ConsoleSink()
        primary, notifier = console, console
    else:
        primary = BlueskyClient(
            service=config.bluesky_service,
            identifier=config.bluesky_username,
            password=config.bluesky_password,
            timeout=config.request_timeout,
        )
        notifier = SlackNotifier(config.slack_webhook_url, timeout=config.request_timeout)

    return Relay(
        fetcher=TruthSocialFetcher(config),
        store=store,
        enricher=Enricher(create_provider(config)),
        primary=primary,
        notifier=notifier,
        max_post_length=config.max_post_length,
        checkpoint=config.checkpoint_enabled and not dry_run,
    )


def invoke(config: Config, sources: list[str] | None = None, dry_run: bool = False) -> list[SourceResult]:
    """One full pass. StoreError propagates."""
    store = create_store(config)
    try:
        relay = build_relay(config, store, dry_run=dry_run)
        return relay.run(sources or config.sources)
    finally:
        store.close()


def run_once() -> bool:
    """Scheduler entry point. No arguments; True unless a delivery failed."""
    config = load_config()
    try:
        results = invoke(config)
    except (LLMError, DeliveryError) as e:
        log.error(f"Relay not configured: {e}")
        return False
    return all_ok(results)


def handler(event=None, context=None) -> dict:
    """Serverless entry point for a scheduled trigger. The event is ignored."""
    setup_logging()
    config = load_config()
    try:
        results = invoke(config)
    except (LLMError, DeliveryError) as e:
        log.error(f"Relay not configured: {e}")
        return {"statusCode": 500, "body": json.dumps({"error": str(e)})}

    ok = all_ok(results)
    return {
        "statusCode": 200 if ok else 500,
        "body": json.dumps({"ok": ok, "results": [r.to_dict() for r in results]}),
    }


def cmd_run(config: Config, args) -> int:
    """One pass over the sources. Meant for cron."""
    results = invoke(config, sources=args.source, dry_run=args.dry_run)
    for r in results:
        line = f"{r.source_id}: {r.status.value}, cursor {r.cursor_before} -> {r.cursor_after}"
        if r.delivered:
            line += f", delivered {len(r.delivered)}"
        if r.pending:
            line += f", {len(r.pending)} left for next run"
        if r.error:
            line += f" ({r.error})"
        print(line)
    return 0 if all_ok(results) else 1


def cmd_pending(config: Config, args) -> int:
    """Fetch and select without enriching or delivering."""
    store = create_store(config)
    fetcher = TruthSocialFetcher(config)
    try:
        for source_id in args.source or config.sources:
            cursor = store.get(source_id)
            try:
                raw_items = fetcher.fetch(source_id)
            except FetchError as e:
                print(f"{source_id}: fetch failed ({e})")
                continue
            queue = Relay.pending(raw_items, cursor)
            print(f"{source_id}: {len(queue)} new since {cursor}")
            for item in queue:
                print(f"  {item.id}  {item.created_at}  {item.content[:70]}")
    finally:
        store.close()
    return 0


def cmd_status(config: Config, args) -> int:
    """Print the stored cursor for each configured source."""
    store = create_store(config)
    try:
        for source_id in config.sources:
            print(f"{source_id}: {store.get(source_id)}")
    finally:
        store.close()
    return 0


def cmd_set_cursor(config: Config, args) -> int:
    """Operator override. The pipeline itself only ever moves cursors forward."""
    try:
        parse_id(args.value)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    store = create_store(config)
    try:
        previous = store.get(args.source_id)
        store.set(args.source_id, args.value)
    finally:
        store.close()
    print(f"{args.source_id}: {previous} -> {args.value}")
    return 0


def cli():
    parser = argparse.ArgumentParser(
        prog="relay",
        description="Relay new feed posts to Bluesky with Slack notifications",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    run_parser = sub.add_parser("run", parents=[common], help="One pass over all sources (for cron)")
    run_parser.add_argument(
        "--dry-run", action="store_true",
        help="Print posts and notifications instead of sending them. No cursor writes.",
    )
    run_parser.add_argument(
        "--source", action="append", default=None,
        help="Source id to process (repeatable). Defaults to RELAY_SOURCES.",
    )

    pending_parser = sub.add_parser("pending", parents=[common], help="Show what the next run would deliver")
    pending_parser.add_argument("--source", action="append", default=None, help="Source id (repeatable)")

    sub.add_parser("status", parents=[common], help="Show stored cursors")

    set_parser = sub.add_parser("set-cursor", parents=[common], help="Set a source's cursor by hand")
    set_parser.add_argument("source_id", help="Source id")
    set_parser.add_argument("value", help="New cursor (decimal item id, 0 to replay everything)")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.verbose)
    config = load_config()

    try:
        match args.command:
            case "run":
                code = cmd_run(config, args)
            case "pending":
                code = cmd_pending(config, args)
            case "status":
                code = cmd_status(config, args)
            case "set-cursor":
                code = cmd_set_cursor(config, args)
            case _:
                parser.print_help()
                code = 1
    except StoreError as e:
        log.error(f"Cursor store failure: {e}")
        code = 1
    except (LLMError, DeliveryError) as e:
        log.error(f"Relay not configured: {e}")
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    cli()
