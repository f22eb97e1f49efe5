import argparse
import logging
from dataclasses import replace

from .console import HotSeatConsole
from .engine import RoundEngine
from .lobby import DEFAULT_CONFIG, build_players, rename_player, reset_config, validate_config
from .models import TableConfig


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poker chip tracker (hot-seat terminal table)")
    parser.add_argument("--players", type=int, default=DEFAULT_CONFIG.players)
    parser.add_argument("--chip-value", type=int, default=DEFAULT_CONFIG.chip_value_cents, help="Chip value in cents")
    parser.add_argument("--sb", type=int, default=DEFAULT_CONFIG.small_blind)
    parser.add_argument("--bb", type=int, default=DEFAULT_CONFIG.big_blind)
    parser.add_argument("--starting-chips", type=int, default=DEFAULT_CONFIG.starting_chips)
    parser.add_argument(
        "--preset",
        action="store_true",
        help="Use the reset preset (4 players, 25c chips, 50/100 blinds, 1000 chips); overrides the other sizes",
    )
    parser.add_argument("--name", action="append", default=[], help="Player name, repeat once per seat in order")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> TableConfig:
    if args.preset:
        return reset_config()
    return validate_config(
        replace(
            DEFAULT_CONFIG,
            players=args.players,
            chip_value_cents=args.chip_value,
            small_blind=args.sb,
            big_blind=args.bb,
            starting_chips=args.starting_chips,
        )
    )


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = build_config(args)
    players = build_players(config)
    for idx, name in enumerate(args.name[: len(players)]):
        rename_player(players, idx, name)

    console = HotSeatConsole(RoundEngine(config, players))
    try:
        console.run()
    except KeyboardInterrupt:
        print("\nSession closed")


if __name__ == "__main__":
    main()
