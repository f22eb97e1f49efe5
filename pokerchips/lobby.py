from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from .models import MAX_PLAYERS, MIN_PLAYERS, Player, TableConfig

# Setup-time helpers: everything here runs before the first hand is dealt.

DEFAULT_CONFIG = TableConfig()
PRESET_CONFIG = TableConfig(players=4, chip_value_cents=25, small_blind=50, big_blind=100, starting_chips=1_000)

MIN_CHIP_VALUE_CENTS = 1
MAX_CHIP_VALUE_CENTS = 100
MIN_STARTING_CHIPS = 100
MAX_STARTING_CHIPS = 100_000


def validate_config(config: TableConfig) -> TableConfig:
    if not MIN_PLAYERS <= config.players <= MAX_PLAYERS:
        raise ValueError("PLAYER_COUNT")
    if not MIN_CHIP_VALUE_CENTS <= config.chip_value_cents <= MAX_CHIP_VALUE_CENTS:
        raise ValueError("CHIP_VALUE")
    if config.small_blind < 0 or config.big_blind < 0:
        raise ValueError("BLIND_AMOUNT")
    if not MIN_STARTING_CHIPS <= config.starting_chips <= MAX_STARTING_CHIPS:
        raise ValueError("STARTING_CHIPS")
    return config


def reset_config() -> TableConfig:
    return replace(PRESET_CONFIG)


def build_players(config: TableConfig, previous: Optional[Sequence[Player]] = None) -> List[Player]:
    """Return ``config.players`` players, each holding ``config.starting_chips``.

    Players already present in ``previous`` keep their id and name; only their
    stack is refilled. New seats are named ``Player N``.
    """
    validate_config(config)
    previous = list(previous or [])
    players: List[Player] = []
    for idx in range(config.players):
        if idx < len(previous):
            existing = previous[idx]
            existing.reset_for_round()
            existing.chips = config.starting_chips
            players.append(existing)
        else:
            players.append(Player(name=f"Player {idx + 1}", chips=config.starting_chips))
    return players


def rename_player(players: Sequence[Player], index: int, name: str) -> Player:
    display = name.strip()
    if not display:
        raise ValueError("NAME_REQUIRED")
    if not 0 <= index < len(players):
        raise IndexError("Seat out of range")
    player = players[index]
    player.name = display
    return player
