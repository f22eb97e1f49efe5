from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

MIN_PLAYERS = 2
MAX_PLAYERS = 10

_PLAYER_IDS = itertools.count(1)


class Stage(str, Enum):
    PRE_FLOP = "PRE_FLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"
    SHOW_CARDS = "SHOW_CARDS"

    @property
    def display_name(self) -> str:
        return _STAGE_NAMES[self]


_STAGE_NAMES = {
    Stage.PRE_FLOP: "Pre-Flop",
    Stage.FLOP: "Flop",
    Stage.TURN: "Turn",
    Stage.RIVER: "River",
    Stage.SHOWDOWN: "Showdown",
    Stage.SHOW_CARDS: "Show Cards",
}


class ActionType(str, Enum):
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    FOLD = "FOLD"
    AWARD = "AWARD"


class ActionError(str, Enum):
    INVALID_AMOUNT = "INVALID_AMOUNT"
    PLAYER_FOLDED = "PLAYER_FOLDED"
    INVALID_WINNER = "INVALID_WINNER"


@dataclass
class TableConfig:
    players: int = 2
    chip_value_cents: int = 10
    small_blind: int = 1
    big_blind: int = 2
    starting_chips: int = 100


@dataclass
class Player:
    name: str
    chips: int
    id: int = field(default_factory=lambda: next(_PLAYER_IDS))
    current_bet: int = 0
    is_folded: bool = False
    is_small_blind: bool = False
    is_big_blind: bool = False

    def reset_for_round(self) -> None:
        self.current_bet = 0
        self.is_folded = False
        self.is_small_blind = False
        self.is_big_blind = False

    def reset_for_stage(self) -> None:
        self.current_bet = 0

    def commit(self, amount: int) -> int:
        """Move up to ``amount`` chips from the stack into the current bet."""
        amount = max(0, min(amount, self.chips))
        self.chips -= amount
        self.current_bet += amount
        return amount


@dataclass
class Table:
    # Per-hand state; players keep their chips across hands.
    players: List[Player]
    pot: int = 0
    current_highest_bet: int = 0
    stage: Stage = Stage.PRE_FLOP
    current_player_index: int = 0
    showdown_bet_count: int = 0
    hand_number: int = 0

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def active_indices(self) -> List[int]:
        return [idx for idx, player in enumerate(self.players) if not player.is_folded]


@dataclass
class ActionResult:
    accepted: bool
    action: Optional[ActionType] = None
    error: Optional[ActionError] = None
    events: List[Dict[str, object]] = field(default_factory=list)

    @classmethod
    def rejected(cls, error: ActionError, action: Optional[ActionType] = None) -> "ActionResult":
        return cls(accepted=False, action=action, error=error)
