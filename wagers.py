#!/usr/bin/env python
"""
Wager Book - Unified CLI for the personal wager ledger
"""
import sys
import argparse
import os
import time
import uuid

from wagerbook.betting import ODDS_CATALOG, Mode, Side
from wagerbook.betting.tracker import match_frame, wagers_frame
from wagerbook.core import ServiceContainer
from wagerbook.core.notifier import AutoConfirmNotifier
from wagerbook.service import WagerBook
from wagerbook.utils.logging import setup_logging
from wagerbook.utils.observability import initialize_observability, get_metrics, Logger, CORRELATION_ID

logger = Logger(__name__)

SIDES = {"A": Side.SIDE_A, "B": Side.SIDE_B}
MODES = {"back": Mode.BACK, "lay": Mode.LAY}


def open_book(args) -> WagerBook:
    """Load the ledger from the configured storage."""
    notifier = AutoConfirmNotifier() if getattr(args, "yes", False) else ServiceContainer.get_notifier()
    return WagerBook(ServiceContainer.get_storage(), notifier, metrics=get_metrics())


def _money(value) -> str:
    return f"{value:+.2f}" if value is not None else "-"


def cmd_odds(args):
    """List the odds catalog."""
    for i, entry in enumerate(ODDS_CATALOG):
        print(f"{i:>2}  {entry.label:>6} => {entry.value}")


def cmd_quote(args):
    """Preview payouts without recording."""
    book = open_book(args)
    quote = book.quote(MODES[args.mode], args.stake, ODDS_CATALOG.index_of(args.odds))
    if quote is None:
        return 1
    win, lose = quote
    print(f"{args.mode} {args.stake} @ {args.odds}: win {win}, lose {lose}")


def cmd_place(args):
    """Record a wager."""
    book = open_book(args)
    wager = book.place(
        args.match,
        SIDES[args.side],
        MODES[args.mode],
        ODDS_CATALOG.index_of(args.odds),
        args.stake,
    )
    if wager is None:
        return 1
    print(
        f"#{wager.id} {wager.match}: {wager.side.value} {wager.mode.value} "
        f"{wager.stake} @ {wager.odds_label} (win {wager.win_amount}, lose {wager.lose_amount})"
    )


def cmd_delete(args):
    book = open_book(args)
    if book.delete(args.id):
        print(f"Deleted #{args.id}")
    else:
        print(f"No wager #{args.id}")


def cmd_delete_match(args):
    book = open_book(args)
    removed = book.delete_match(args.match)
    print(f"Deleted {removed} wagers for '{args.match}'")


def cmd_clear(args):
    """Delete the whole history (asks first unless --yes)."""
    book = open_book(args)
    if book.clear():
        print("History cleared")
    else:
        print("Cancelled")


def cmd_result(args):
    book = open_book(args)
    wager = book.mark_result(args.id, SIDES[args.winner])
    if wager is None:
        return 1
    outcome = "won" if wager.won else "lost"
    print(f"#{wager.id} {wager.match}: {wager.result.value} won, wager {outcome}, net {_money(wager.net)}")


def cmd_match_result(args):
    book = open_book(args)
    updated = book.mark_match_result(args.match, SIDES[args.winner])
    print(f"Resolved {updated} wagers for '{args.match}'")


def cmd_history(args):
    """Print wagers grouped by match, newest first."""
    book = open_book(args)
    summaries = book.summaries()
    if not summaries:
        print("No wagers yet")
        return

    for summary in summaries.values():
        status = f"total {_money(summary.total_net)}" if summary.has_result else "pending"
        print(
            f"{summary.match}  staked {summary.total_stake} over {summary.count} wagers  "
            f"last {summary.latest_placed_at:%Y-%m-%d %H:%M}  [{status}]"
        )
        for w in summary.wagers:
            print(
                f"  #{w.id:<4} {w.side.value} {w.mode.value:<4} {w.odds_label:>5} "
                f"stake {w.stake}  win {w.win_amount}  lose {w.lose_amount}  net {_money(w.net)}"
            )

    if args.table:
        print(wagers_frame(book.wagers()))


def cmd_summary(args):
    """Per-match table and overall performance."""
    book = open_book(args)
    print(match_frame(book.wagers()))
    stats = book.stats()
    print("\n=== PERFORMANCE ===")
    for key, value in stats.items():
        print(f"{key:>14}: {value}")


def main():
    parser = argparse.ArgumentParser(description="Wager Book")
    subparsers = parser.add_subparsers(dest="command", required=True)

    odds = subparsers.add_parser("odds", help="List odds catalog")
    odds.set_defaults(func=cmd_odds)

    quote = subparsers.add_parser("quote", help="Preview win/lose amounts")
    quote.add_argument("mode", choices=list(MODES))
    quote.add_argument("stake")
    quote.add_argument("--odds", choices=ODDS_CATALOG.labels(), default=ODDS_CATALOG.labels()[0])
    quote.set_defaults(func=cmd_quote)

    place = subparsers.add_parser("place", help="Record a wager")
    place.add_argument("match")
    place.add_argument("side", choices=list(SIDES))
    place.add_argument("mode", choices=list(MODES))
    place.add_argument("stake")
    place.add_argument("--odds", choices=ODDS_CATALOG.labels(), default=ODDS_CATALOG.labels()[0])
    place.set_defaults(func=cmd_place)

    delete = subparsers.add_parser("delete", help="Delete one wager")
    delete.add_argument("id", type=int)
    delete.set_defaults(func=cmd_delete)

    delete_match = subparsers.add_parser("delete-match", help="Delete all wagers of a match")
    delete_match.add_argument("match")
    delete_match.set_defaults(func=cmd_delete_match)

    clear = subparsers.add_parser("clear", help="Delete the whole history")
    clear.add_argument("--yes", action="store_true", help="Skip confirmation")
    clear.set_defaults(func=cmd_clear)

    result = subparsers.add_parser("result", help="Resolve one wager")
    result.add_argument("id", type=int)
    result.add_argument("winner", choices=list(SIDES))
    result.set_defaults(func=cmd_result)

    match_result = subparsers.add_parser("match-result", help="Resolve every wager of a match")
    match_result.add_argument("match")
    match_result.add_argument("winner", choices=list(SIDES))
    match_result.set_defaults(func=cmd_match_result)

    history = subparsers.add_parser("history", help="Show wagers grouped by match")
    history.add_argument("--table", action="store_true", help="Also print the flat wager table")
    history.set_defaults(func=cmd_history)

    summary = subparsers.add_parser("summary", help="Per-match totals and performance")
    summary.set_defaults(func=cmd_summary)

    args = parser.parse_args()

    setup_logging(level=os.getenv("LOG_LEVEL", "WARNING"))
    initialize_observability()

    # Initialize correlation ID for this run
    correlation_id = str(uuid.uuid4())
    CORRELATION_ID.set(correlation_id)

    start_time = time.time()
    code = 0

    try:
        code = args.func(args) or 0
    except Exception as e:
        logger.log_error("command_failed", command=args.command, error=str(e), exc_info=True)
        sys.exit(1)
    finally:
        duration = time.time() - start_time
        logger.log_event('command_completed', command=args.command, duration_seconds=duration)

    if code:
        sys.exit(code)

if __name__ == "__main__":
    main()
