"""Main entry point for the bracket voting game."""

import argparse
import random
import sys

from .engine import initialize, random_shuffle, seeded_shuffle
from .models import DEFAULT_ROSTER
from .ui import BracketDisplay
from .utils.autoplay import play_out, random_chooser
from .utils.logging import log
from .utils.terminal import cleanup_terminal


def non_negative_float(value: str) -> float:
    """argparse type for delays and durations"""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value!r} must not be negative")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bracket voting game TUI")
    parser.add_argument("--seed", type=int, help="Seed for a reproducible shuffle")
    parser.add_argument(
        "--pick-delay",
        type=non_negative_float,
        default=0.6,
        help="Seconds to show a pick before the next matchup",
    )
    parser.add_argument(
        "--advance-delay",
        type=non_negative_float,
        default=0.5,
        help="Extra seconds before a new round starts",
    )
    parser.add_argument(
        "--celebration",
        type=non_negative_float,
        default=5.0,
        help="Seconds of confetti on the winner screen",
    )
    parser.add_argument(
        "--no-landing",
        action="store_true",
        help="Skip the landing screen and start the bracket right away",
    )
    parser.add_argument(
        "--auto",
        action="store_true",
        help="Play the bracket out with random picks and print the result",
    )
    return parser


def run_auto(seed: int | None) -> int:
    """Headless run: random picks, every matchup logged"""
    shuffle = seeded_shuffle(seed) if seed is not None else random_shuffle
    rng = random.Random(seed)

    tournament, results = play_out(initialize(DEFAULT_ROSTER, shuffle), random_chooser(rng))
    for result in results:
        log(
            f"   Round {result.round_number}: {result.left.label} vs "
            f"{result.right.label} -> {result.winner.label}"
        )
    if tournament.winner is None:
        log("❌ Bracket finished without a winner")
        return 1
    log(f"🏆 Champion: {tournament.winner.label} ({tournament.winner.image_ref})")
    return 0


def main():
    """Main entry point"""
    args = build_parser().parse_args()

    log("🔍 Command line args:")
    log(f"   Seed: {args.seed}")
    log(f"   Pick delay: {args.pick_delay}")
    log(f"   Advance delay: {args.advance_delay}")
    log(f"   Celebration: {args.celebration}")
    log(f"   Landing: {not args.no_landing}")
    log(f"   Auto: {args.auto}")

    if args.auto:
        log("🤖 Running in AUTO mode with random picks")
        sys.exit(run_auto(args.seed))

    app = BracketDisplay(
        shuffle=seeded_shuffle(args.seed) if args.seed is not None else None,
        pick_delay=args.pick_delay,
        advance_delay=args.advance_delay,
        celebration_duration=args.celebration,
        show_landing=not args.no_landing,
    )

    try:
        log("🏁 Starting Textual app...")
        app.run()
        log("🏁 Textual app finished")
    except KeyboardInterrupt:
        log("\n👋 Bracket game stopped")
    except Exception as e:
        log(f"❌ App crashed: {type(e).__name__}: {e}")
        raise
    finally:
        # Always clean up terminal state regardless of how app exits
        cleanup_terminal()


if __name__ == "__main__":
    main()
