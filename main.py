"""
Terminal companion for BADSHA-WAZIR-CHOR-SIPAHI.
"""

import argparse
import logging
import sys
from typing import Optional

from wazir.config import load_config
from wazir.core import (
    WazirGameError,
    Outcome,
    RoleType,
    ScoringConfigStore,
    find_player_with_role,
    total_delta,
)
from wazir.session import GameSession, normalize_room_code
from wazir.storage import GameStorage, JsonFileStore

OUTCOME_CHOICES = {
    "correct": Outcome.WAZIR_CORRECT,
    "wrong": Outcome.WAZIR_WRONG,
    Outcome.WAZIR_CORRECT.value: Outcome.WAZIR_CORRECT,
    Outcome.WAZIR_WRONG.value: Outcome.WAZIR_WRONG,
}

PRIVACY_WARNING = (
    "Keep your player number secret. Anyone who enters another player's "
    "number can reveal their role on their device."
)


def _require_session(storage: GameStorage) -> GameSession:
    session = GameSession.resume(storage)
    if session is None:
        raise WazirGameError("No room joined on this device. Run 'join' first.")
    return session


def _print_header(session: GameSession) -> None:
    name = f" ({session.display_name})" if session.display_name else ""
    print(f"Room: {session.room_code} | Round: {session.round_number} | "
          f"Players: {session.num_players} | You: #{session.player_number}{name}")


def _print_scoring(table) -> None:
    for outcome in Outcome:
        print(f"{outcome.label}:")
        for role in RoleType:
            print(f"  • {role.value}: {table[outcome.value][role.value]:+d}")


def cmd_join(args, storage: GameStorage, config) -> int:
    num_players = args.players if args.players is not None else config.default_num_players
    session = GameSession.join(
        storage,
        args.room,
        args.player,
        num_players,
        display_name=args.name,
        max_players=config.max_num_players,
    )
    print(PRIVACY_WARNING)
    _print_header(session)
    return 0


def cmd_role(args, storage: GameStorage, config) -> int:
    session = _require_session(storage)
    _print_header(session)
    role = session.current_role()
    print(f"Your role: {role.value}")
    tip = session.current_tip()
    if tip:
        print(f"Tip: {tip}")
    return 0


def cmd_preview(args, storage: GameStorage, config) -> int:
    session = _require_session(storage)
    outcome = OUTCOME_CHOICES[args.outcome]
    _print_header(session)
    print(f"Outcome: {outcome.label}")
    for line in session.preview_deltas(outcome):
        print(f"  • {line}")
    return 0


def cmd_end_round(args, storage: GameStorage, config) -> int:
    session = _require_session(storage)
    outcome = OUTCOME_CHOICES[args.outcome]
    _print_header(session)
    print(f"Outcome: {outcome.label}")
    for line in session.preview_deltas(outcome):
        print(f"  • {line}")

    if not args.yes:
        answer = input("Apply these points? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("Cancelled. No points applied.")
            return 0

    roles = session.current_roles()
    chor = find_player_with_role(roles, RoleType.CHOR)
    deltas = session.end_round(outcome)
    print(f"CHOR was player {chor}. {total_delta(deltas)} points handed out.")
    print("Points applied locally on this device. Others must also apply to keep scores consistent.")
    print(f"Next round: {session.round_number}")
    return 0


def cmd_skip_round(args, storage: GameStorage, config) -> int:
    session = _require_session(storage)
    session.skip_round()
    print(f"Round skipped. Next round: {session.round_number}")
    return 0


def cmd_scores(args, storage: GameStorage, config) -> int:
    session = _require_session(storage)
    _print_header(session)
    print("\n📊 SCOREBOARD")
    print("-" * 30)
    for player, score in session.standings():
        marker = " (you)" if player == session.player_number else ""
        print(f"  Player {player}{marker}: {score}")
    return 0


def _room_for(args, storage: GameStorage) -> Optional[str]:
    if args.room:
        return normalize_room_code(args.room)
    identity = storage.load_player_identity()
    return identity.room_code if identity else None


def cmd_export(args, storage: GameStorage, config) -> int:
    room_code = _room_for(args, storage)
    if not room_code:
        raise WazirGameError("No room code specified. Join a room first.")
    text = storage.export_scoreboard(room_code)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f"Scoreboard exported to: {args.output}")
    else:
        print(text)
    return 0


def cmd_import(args, storage: GameStorage, config) -> int:
    if args.file == "-":
        text = sys.stdin.read()
    else:
        with open(args.file, 'r', encoding='utf-8') as f:
            text = f.read()

    if not text.strip():
        print("Import failed: please provide scoreboard JSON to import.")
        return 1

    result = storage.import_scoreboard(text)
    if not result.success:
        print(f"Import failed: {result.error}")
        return 1
    print(f"Scoreboard imported for room: {result.room_code}")
    return 0


def cmd_clear(args, storage: GameStorage, config) -> int:
    room_code = _room_for(args, storage)
    if not room_code:
        raise WazirGameError("No room code specified. Join a room first.")
    storage.clear_room_data(room_code)
    print(f"Cleared scoreboard and state for room: {room_code}")
    return 0


def cmd_scoring(args, storage: GameStorage, config) -> int:
    scoring = ScoringConfigStore(storage)
    if args.scoring_action == "set":
        table = scoring.set_value(OUTCOME_CHOICES[args.outcome], RoleType(args.role), args.points)
        print("Scoring configuration saved.")
    elif args.scoring_action == "reset":
        table = scoring.reset_config()
        print("Scoring configuration reset to defaults.")
    else:
        table = scoring.get_config()
    _print_scoring(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reveal your BADSHA-WAZIR-CHOR-SIPAHI role and keep score",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py join GAME123 3 --players 5 --name Asha   # Join room as player 3
  python main.py role                                     # Show your role this round
  python main.py end-round correct                        # WAZIR found the CHOR
  python main.py end-round wrong --yes                    # WAZIR guessed wrong, no prompt
  python main.py export -o scores.json                    # Share scores with another device
  python main.py scoring set wrong CHOR 8                 # Change points
        """
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file (default: use default config)"
    )
    parser.add_argument(
        "--data-dir",
        "-d",
        type=str,
        default=None,
        help="Directory for saved scoreboards and settings. Overrides config file setting."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    join = subparsers.add_parser("join", help="Join a room with your private player number")
    join.add_argument("room", help="Shared room code")
    join.add_argument("player", type=int, help="Your private player number")
    join.add_argument("--players", "-n", type=int, default=None, help="Number of players in the room")
    join.add_argument("--name", type=str, default="", help="Display name (optional)")
    join.set_defaults(func=cmd_join)

    role = subparsers.add_parser("role", help="Show your role for the current round")
    role.set_defaults(func=cmd_role)

    outcome_help = "Round outcome: 'correct' if the WAZIR found the CHOR, otherwise 'wrong'"

    preview = subparsers.add_parser("preview", help="Show the points an outcome would give")
    preview.add_argument("outcome", choices=sorted(OUTCOME_CHOICES), help=outcome_help)
    preview.set_defaults(func=cmd_preview)

    end_round = subparsers.add_parser("end-round", help="Apply points and start the next round")
    end_round.add_argument("outcome", choices=sorted(OUTCOME_CHOICES), help=outcome_help)
    end_round.add_argument("--yes", "-y", action="store_true", help="Apply without asking")
    end_round.set_defaults(func=cmd_end_round)

    skip = subparsers.add_parser("skip-round", help="Start the next round without scoring")
    skip.set_defaults(func=cmd_skip_round)

    scores = subparsers.add_parser("scores", help="Show the scoreboard")
    scores.set_defaults(func=cmd_scores)

    export = subparsers.add_parser("export", help="Export scoreboard and room state as JSON")
    export.add_argument("--room", type=str, default=None, help="Room code (default: joined room)")
    export.add_argument("--output", "-o", type=str, default=None, help="Write to file instead of stdout")
    export.set_defaults(func=cmd_export)

    import_ = subparsers.add_parser("import", help="Import an exported scoreboard")
    import_.add_argument("file", help="File with exported JSON, or '-' for stdin")
    import_.set_defaults(func=cmd_import)

    clear = subparsers.add_parser("clear", help="Delete the scoreboard and state of a room")
    clear.add_argument("--room", type=str, default=None, help="Room code (default: joined room)")
    clear.set_defaults(func=cmd_clear)

    scoring = subparsers.add_parser("scoring", help="Show or change points per role")
    scoring_actions = scoring.add_subparsers(dest="scoring_action")
    scoring_actions.add_parser("show", help="Show the scoring table")
    scoring_set = scoring_actions.add_parser("set", help="Change one value")
    scoring_set.add_argument("outcome", choices=sorted(OUTCOME_CHOICES))
    scoring_set.add_argument("role", choices=[r.value for r in RoleType])
    scoring_set.add_argument("points", help="Points (non-numbers count as 0)")
    scoring_actions.add_parser("reset", help="Restore default points")
    scoring.set_defaults(func=cmd_scoring)

    return parser


def main(argv=None) -> int:
    """Entry point for the companion CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.data_dir is not None:
        config.data_dir = args.data_dir

    logging.basicConfig(level=getattr(logging, str(config.log_level).upper(), logging.WARNING))

    storage = GameStorage(JsonFileStore(config.data_dir))
    try:
        return args.func(args, storage, config)
    except (WazirGameError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
