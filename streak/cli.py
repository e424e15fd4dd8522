"""
Streak CLI - Command-line interface for the engine.

Usage:
    streak validate <questions_file>                  Validate a question set
    streak ladder --stake N [--length L]              Print the prize ladder
    streak simulate <questions_file> --stake N --moves a,b,...
                                                      Play a scripted session

Simulation moves are answer texts or one of the tokens
timeout, skip, 5050, cashout (--answers is accepted for --moves). The loop
advances automatically between questions.
"""

import argparse
import sys

from .config import RuleConfig, STREAK_LOG_LEVEL
from .logging_config import configure_logging

MOVE_TOKENS = {"timeout", "skip", "5050", "cashout"}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Streak - Stake-Based Trivia Streak Engine",
        prog="streak",
    )
    parser.add_argument("--log-level", default=STREAK_LOG_LEVEL, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a question set")
    validate_parser.add_argument("questions_file", help="Path to questions JSON file")

    # Ladder command
    ladder_parser = subparsers.add_parser("ladder", help="Print the prize ladder for a stake")
    ladder_parser.add_argument("--stake", type=float, required=True, help="Stake amount")
    ladder_parser.add_argument("--length", type=int, default=None, help="Number of rungs")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a scripted session")
    simulate_parser.add_argument("questions_file", help="Path to questions JSON file")
    simulate_parser.add_argument("--stake", type=float, required=True, help="Stake amount")
    simulate_parser.add_argument("--lives", type=int, default=None, help="Starting lives")
    simulate_parser.add_argument(
        "--moves", "--answers", dest="moves", required=True,
        help="Comma-separated answers or tokens (timeout, skip, 5050, cashout)",
    )
    simulate_parser.add_argument("--seed", type=int, default=None, help="Seed for 50/50")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "validate":
        cmd_validate(args)
    elif args.command == "ladder":
        cmd_ladder(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_validate(args):
    """Validate a question set."""
    from .engine_core.errors import ConfigurationError
    from .supply.validation import load_questions_file, validate_question_set

    try:
        questions = load_questions_file(args.questions_file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.questions_file}")
        sys.exit(1)
    except ConfigurationError as e:
        print("Invalid question payload:")
        for error in e.errors:
            print(f"  - {error}")
        sys.exit(1)

    result = validate_question_set(questions)
    print(f"Questions: {len(questions)}")

    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.errors:
        print("\nErrors:")
        for e in result.errors:
            print(f"  - {e}")
        sys.exit(1)

    print("Valid")


def cmd_ladder(args):
    """Print the prize ladder."""
    from .engine_core.payout import prize_ladder, cashout_amount, failure_payout

    length = args.length or RuleConfig.from_env().max_ladder_length
    running = 0
    print(f"{'Q':>3} {'Prize':>10} {'Balance':>10} {'Cashout':>10} {'If failed':>10}")
    for streak, prize in enumerate(prize_ladder(args.stake, length), start=1):
        running += prize
        print(
            f"{streak:>3} {prize:>10} {running:>10} "
            f"{cashout_amount(args.stake, streak, running):>10} "
            f"{failure_payout(args.stake, streak):>10}"
        )


def cmd_simulate(args):
    """Play a scripted session through the game loop."""
    from .engine_core.errors import ConfigurationError
    from .supply.validation import load_questions_file
    from .session import SessionManager, GameLoop

    rules = RuleConfig.from_env()
    manager = SessionManager(rules=rules)

    try:
        questions = load_questions_file(args.questions_file)
        session = manager.create_session(
            questions, args.stake, lives=args.lives, seed=args.seed
        )
    except FileNotFoundError:
        print(f"Error: File not found: {args.questions_file}")
        sys.exit(1)
    except ConfigurationError as e:
        print("Cannot start session:")
        for error in e.errors:
            print(f"  - {error}")
        sys.exit(1)

    loop = GameLoop(session, manager, advance_delay=0)
    print(f"Session {session.session_id}: {len(questions)} question(s), stake {args.stake}")

    for move in (m.strip() for m in args.moves.split(",")):
        if loop.settlement is not None:
            break
        question = session.engine.current_question
        if question is not None:
            print(f"\nQ{session.state.current_index + 1}: {question.text}")
            print(f"  Options: {' | '.join(session.engine.visible_options)}")

        result = _play_move(loop, move)
        event = result.event
        if event is None:
            continue
        if event.rejected:
            print(f"  {move}: rejected ({event.error_code.value}) {event.error}")
            continue
        for change in event.state_changes:
            print(f"  {change}")

    if loop.settlement is None:
        print("\nSession still in progress after all moves")
        sys.exit(2)

    settlement = loop.settlement
    print(f"\nEnded: {settlement.end_reason.value}")
    print(f"Questions answered: {settlement.questions_answered}")
    print(f"Final payout: {settlement.final_payout}")
    print(f"Net change: {settlement.net_change}")


def _play_move(loop, move):
    if move == "timeout":
        result = loop.tick()
        while result.event is None:
            result = loop.tick()
        return result
    if move == "skip":
        return loop.skip()
    if move == "5050":
        return loop.fifty_fifty()
    if move == "cashout":
        return loop.cashout()
    return loop.answer(move)


if __name__ == "__main__":
    main()
