"""
Grad School Survival CLI - Command-line interface for the engine.

Usage:
    gradsurvival play [--seed N] [--store-dir DIR] [--session ID]
    gradsurvival simulate [--policy random|cautious] [--games N] [--seed N]
    gradsurvival serve [--host HOST] [--port PORT] [--store-dir DIR]
"""

import argparse
import logging
import os
import random
import sys
from collections import Counter

from .engine_core.errors import SessionNotFound, UnknownAction
from .engine_core.stats import StatKey
from .engine_core.summary import recent_events, stat_level, summarize
from .engine_core.turn_processor import TurnProcessor

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Grad School Survival - survive long enough to graduate",
        prog="gradsurvival",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("GRADSURVIVAL_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $GRADSURVIVAL_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play interactively")
    play_parser.add_argument("--seed", type=int, help="Seed for reproducible events")
    play_parser.add_argument("--store-dir", help="Save games as JSON files here")
    play_parser.add_argument("--session", help="Resume a saved game by id")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Autoplay games with a bot")
    simulate_parser.add_argument("--policy", choices=["random", "cautious"], default="cautious")
    simulate_parser.add_argument("--games", type=int, default=100, help="Number of games")
    simulate_parser.add_argument("--seed", type=int, help="Seed for events and bot")
    simulate_parser.add_argument("--max-turns", type=int, default=1000, help="Turn cap per game")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--store-dir", help="Save games as JSON files here")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _make_manager(args):
    from .session import SessionManager, InMemorySessionStore, JsonFileSessionStore

    store = JsonFileSessionStore(args.store_dir) if args.store_dir else InMemorySessionStore()
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    return SessionManager(store=store, processor=TurnProcessor(rng=rng))


def _print_status(session):
    print(f"\nSemester {session.semester}, day {session.day} (total days: {session.total_days})")
    for stat in StatKey:
        value = session.stats.get(stat)
        level = stat_level(stat, value)
        marker = {"critical": " !!", "warning": " !"}.get(level, "")
        print(f"  {stat.value:<13}{value:>9}{marker}")


def _print_summary(session):
    summary = summarize(session)
    print()
    print("=" * 40)
    print(summary.message or summary.outcome.value)
    print(f"Semesters: {summary.semester}  Days: {summary.total_days}")
    print(f"Coffee: {summary.coffee}  Ramen: {summary.ramen}  All-nighters: {summary.all_nighter}")
    events = recent_events(session)
    if events:
        print("Recent events:")
        for event in events:
            sign = "+" if event.is_positive else "-"
            print(f"  [{sign}] {event.title}")
    print("=" * 40)


def cmd_play(args):
    """Play interactively."""
    manager = _make_manager(args)

    if args.session:
        try:
            session = manager.get_session(args.session)
        except SessionNotFound as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        session = manager.create_session()
    print(f"Game: {session.session_id}")

    actions = list(manager.processor.rules.actions)

    while not session.is_terminal:
        _print_status(session)
        print("\nActions:")
        for i, action in enumerate(actions, start=1):
            effects = ", ".join(f"{k.value} {v:+d}" for k, v in action.effects.items())
            print(f"  {i:>2}. {action.name:<15} {effects}")

        try:
            choice = input("\nChoose an action (number or id, q to quit): ").strip()
        except EOFError:
            choice = "q"
        if choice.lower() in {"q", "quit", "exit"}:
            print(f"Saved. Resume with --session {session.session_id}")
            return

        action_id = choice
        if choice.isdecimal() and 1 <= int(choice) <= len(actions):
            action_id = actions[int(choice) - 1].id

        try:
            result = manager.perform_action(session.session_id, action_id)
        except UnknownAction as e:
            print(f"{e}. Try again.")
            continue

        session = result.session
        if result.event:
            kind = "Good news" if result.event.is_positive else "Bad news"
            print(f"\n*** {kind}: {result.event.title} ***")
            print(f"    {result.event.description}")
        changes = ", ".join(f"{k.value} {v:+d}" for k, v in result.deltas.items())
        print(f"Changes: {changes}")

    _print_summary(session)


def cmd_simulate(args):
    """Autoplay games with a bot policy."""
    from .bots import POLICIES, run_game

    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    processor = TurnProcessor(rng=rng)
    if args.policy == "random":
        policy = POLICIES["random"](seed=args.seed)
    else:
        policy = POLICIES[args.policy]()

    outcomes = Counter()
    reasons = Counter()
    total_turns = 0
    for _ in range(args.games):
        record = run_game(policy, processor, max_turns=args.max_turns)
        outcomes[record.outcome.value] += 1
        if record.session.game_over_reason and not record.session.is_graduated:
            reasons[record.session.game_over_reason.value] += 1
        total_turns += record.turns

    print(f"Policy: {policy.get_name()}  Games: {args.games}")
    for outcome, count in outcomes.most_common():
        print(f"  {outcome:<10}{count:>6}  ({count / args.games:.1%})")
    if reasons:
        print("Loss reasons:")
        for reason, count in reasons.most_common():
            print(f"  {reason:<10}{count:>6}")
    if args.games:
        print(f"Average turns: {total_turns / args.games:.1f}")


def cmd_serve(args):
    """Run the HTTP API under uvicorn."""
    import uvicorn
    from .api.app import create_app, create_service

    app = create_app(service=create_service(args.store_dir))
    logger.info("Serving on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
