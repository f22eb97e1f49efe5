from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence, Union

from .models import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    ActionError,
    ActionResult,
    ActionType,
    Player,
    Stage,
    Table,
    TableConfig,
)
from .money import currency_string

# RoundEngine keeps all table state in memory. No rendering or input parsing
# lives here beyond the raise amount; only chip accounting, betting order and
# stage progression.

LOGGER = logging.getLogger("pokerchips.engine")

SHOW_CARDS_THRESHOLD = 2

_NEXT_STAGE = {
    Stage.PRE_FLOP: Stage.FLOP,
    Stage.FLOP: Stage.TURN,
    Stage.TURN: Stage.RIVER,
    Stage.RIVER: Stage.SHOWDOWN,
    Stage.SHOWDOWN: Stage.SHOWDOWN,
    Stage.SHOW_CARDS: Stage.SHOW_CARDS,
}

_AMOUNT_PATTERN = re.compile(r"\+?[0-9]+")

RaiseInput = Union[int, str, None]


def parse_raise_amount(value: RaiseInput) -> Optional[int]:
    """Return a positive chip amount, or None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        if _AMOUNT_PATTERN.fullmatch(text):
            try:
                amount = int(text)
            except ValueError:
                return None
            return amount if amount > 0 else None
    return None


class RoundEngine:
    """Betting-round state machine for a single table."""

    def __init__(self, config: TableConfig, players: Sequence[Player]) -> None:
        if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
            raise ValueError("PLAYER_COUNT")
        if config.small_blind < 0 or config.big_blind < 0:
            raise ValueError("BLIND_AMOUNT")
        self.config = config
        self.table = Table(players=list(players))

    # Read-only views -------------------------------------------------

    @property
    def players(self) -> List[Player]:
        return self.table.players

    @property
    def pot(self) -> int:
        return self.table.pot

    @property
    def stage(self) -> Stage:
        return self.table.stage

    @property
    def current_highest_bet(self) -> int:
        return self.table.current_highest_bet

    @property
    def current_player_index(self) -> int:
        return self.table.current_player_index

    @property
    def current_player(self) -> Player:
        return self.table.current_player

    def amount_owed(self) -> int:
        return max(self.table.current_highest_bet - self.current_player.current_bet, 0)

    def chips_in_play(self) -> int:
        return self.table.pot + sum(player.chips for player in self.table.players)

    def is_single_survivor(self) -> bool:
        return len(self.table.active_indices()) == 1

    def is_round_complete(self) -> bool:
        bets = {self.table.players[idx].current_bet for idx in self.table.active_indices()}
        return len(bets) <= 1

    # Hand lifecycle --------------------------------------------------

    def start_round(self) -> List[Dict[str, object]]:
        table = self.table
        for player in table.players:
            player.reset_for_round()
        table.pot = 0
        table.current_highest_bet = 0
        table.showdown_bet_count = 0
        table.stage = Stage.PRE_FLOP
        table.hand_number += 1

        # Blinds always sit in seats 0 and 1; there is no button.
        sb_player, bb_player = table.players[0], table.players[1]
        sb_player.is_small_blind = True
        bb_player.is_big_blind = True
        sb_posted = self._commit(sb_player, self.config.small_blind)
        bb_posted = self._commit(bb_player, self.config.big_blind)

        table.current_highest_bet = bb_posted
        table.current_player_index = 0
        LOGGER.info(
            "Hand %d started: %s posts %d, %s posts %d",
            table.hand_number,
            sb_player.name,
            sb_posted,
            bb_player.name,
            bb_posted,
        )
        return [
            {"ev": "ROUND_START", "hand": table.hand_number},
            {"ev": "POST_BLINDS", "sb_seat": 0, "bb_seat": 1, "sb": sb_posted, "bb": bb_posted},
        ]

    def _commit(self, player: Player, amount: int) -> int:
        posted = player.commit(amount)
        self.table.pot += posted
        return posted

    # Action handling -------------------------------------------------

    def call_or_check(self) -> ActionResult:
        table = self.table
        seat_idx = table.current_player_index
        player = table.current_player
        needed = table.current_highest_bet - player.current_bet
        action = ActionType.CHECK if needed <= 0 else ActionType.CALL
        if player.is_folded:
            return self._reject(ActionError.PLAYER_FOLDED, action)

        events: List[Dict[str, object]] = []
        if action == ActionType.CHECK:
            events.append({"ev": "CHECK", "seat": seat_idx})
        else:
            # A short stack calls for whatever it has left.
            paid = self._commit(player, needed)
            events.append({"ev": "CALL", "seat": seat_idx, "amount": paid, "all_in": player.chips == 0})
            events.extend(self._record_showdown_bet(paid))

        events.extend(self._next_player())
        return ActionResult(accepted=True, action=action, events=events)

    def raise_bet(self, amount: RaiseInput) -> ActionResult:
        increment = parse_raise_amount(amount)
        if increment is None:
            return self._reject(ActionError.INVALID_AMOUNT, ActionType.RAISE)
        table = self.table
        seat_idx = table.current_player_index
        player = table.current_player
        if player.is_folded:
            return self._reject(ActionError.PLAYER_FOLDED, ActionType.RAISE)

        new_bet = table.current_highest_bet + increment
        paid = self._commit(player, new_bet - player.current_bet)
        if player.current_bet > table.current_highest_bet:
            table.current_highest_bet = player.current_bet

        events: List[Dict[str, object]] = [
            {
                "ev": "BET",
                "seat": seat_idx,
                "amount": paid,
                "total": player.current_bet,
                "all_in": player.chips == 0,
            }
        ]
        events.extend(self._record_showdown_bet(paid))
        events.extend(self._next_player())
        return ActionResult(accepted=True, action=ActionType.RAISE, events=events)

    def fold(self) -> ActionResult:
        table = self.table
        seat_idx = table.current_player_index
        player = table.current_player
        if player.is_folded:
            return self._reject(ActionError.PLAYER_FOLDED, ActionType.FOLD)

        player.is_folded = True
        events: List[Dict[str, object]] = [{"ev": "FOLD", "seat": seat_idx}]
        events.extend(self._next_player())
        return ActionResult(accepted=True, action=ActionType.FOLD, events=events)

    def award_pot(self, winner_index: int) -> ActionResult:
        players = self.table.players
        if isinstance(winner_index, bool) or not isinstance(winner_index, int):
            return self._reject(ActionError.INVALID_WINNER, ActionType.AWARD)
        if not 0 <= winner_index < len(players):
            return self._reject(ActionError.INVALID_WINNER, ActionType.AWARD)

        events = self._settle(winner_index)
        events.extend(self.start_round())
        return ActionResult(accepted=True, action=ActionType.AWARD, events=events)

    def _reject(self, error: ActionError, action: ActionType) -> ActionResult:
        LOGGER.debug("Rejected %s for seat %d: %s", action.value, self.table.current_player_index, error.value)
        return ActionResult.rejected(error, action)

    # Turn and stage progression --------------------------------------

    def _next_player(self) -> List[Dict[str, object]]:
        if self.is_single_survivor():
            return self._award_to_last_standing()

        table = self.table
        idx = table.current_player_index
        while True:
            idx = (idx + 1) % len(table.players)
            if not table.players[idx].is_folded:
                break
        table.current_player_index = idx

        if self.is_round_complete():
            return self._advance_stage()
        return []

    def _award_to_last_standing(self) -> List[Dict[str, object]]:
        winner_idx = self.table.active_indices()[0]
        events = self._settle(winner_idx)
        events.extend(self.start_round())
        return events

    def _settle(self, winner_idx: int) -> List[Dict[str, object]]:
        table = self.table
        winner = table.players[winner_idx]
        amount = table.pot
        winner.chips += amount
        table.pot = 0
        LOGGER.info("Hand %d: %s wins pot of %d", table.hand_number, winner.name, amount)
        return [{"ev": "POT_AWARD", "seat": winner_idx, "amount": amount}]

    def _advance_stage(self) -> List[Dict[str, object]]:
        table = self.table
        previous = table.stage
        table.stage = _NEXT_STAGE[previous]
        for player in table.players:
            player.reset_for_stage()
        table.current_highest_bet = 0
        if table.stage == Stage.SHOWDOWN:
            table.showdown_bet_count = 0
        LOGGER.info("Hand %d: %s -> %s", table.hand_number, previous.display_name, table.stage.display_name)
        return [{"ev": "STAGE", "from": previous.value, "to": table.stage.value}]

    def _record_showdown_bet(self, amount: int) -> List[Dict[str, object]]:
        table = self.table
        if table.stage != Stage.SHOWDOWN or amount <= 0:
            return []
        table.showdown_bet_count += 1
        if table.showdown_bet_count < SHOW_CARDS_THRESHOLD:
            return []
        table.stage = Stage.SHOW_CARDS
        LOGGER.info("Hand %d: showdown bets matched, cards to be shown", table.hand_number)
        return [{"ev": "SHOW_CARDS", "bets": table.showdown_bet_count}]

    # Display helpers -------------------------------------------------

    def money(self, chips: int) -> str:
        return currency_string(chips, self.config.chip_value_cents)

    def call_label(self) -> str:
        needed = self.table.current_highest_bet - self.current_player.current_bet
        if needed <= 0:
            return "Check"
        return f"Call {needed} ({self.money(needed)})"

    def raise_label(self, text: RaiseInput = None) -> str:
        amount = parse_raise_amount(text)
        if amount is None:
            return "Raise"
        return f"Raise {amount} ({self.money(amount)})"

    def award_label(self) -> str:
        return f"Award Pot of {self.table.pot} ({self.money(self.table.pot)}) to Winner"

    def snapshot(self, raise_text: RaiseInput = None) -> Dict[str, object]:
        table = self.table
        return {
            "hand_number": table.hand_number,
            "stage": table.stage.value,
            "stage_name": table.stage.display_name,
            "pot": table.pot,
            "current_highest_bet": table.current_highest_bet,
            "current_player_index": table.current_player_index,
            "showdown_bet_count": table.showdown_bet_count,
            "amount_owed": self.amount_owed(),
            "players": [
                {
                    "seat": idx,
                    "id": player.id,
                    "name": player.name,
                    "chips": player.chips,
                    "current_bet": player.current_bet,
                    "is_folded": player.is_folded,
                    "is_small_blind": player.is_small_blind,
                    "is_big_blind": player.is_big_blind,
                    "money": self.money(player.chips),
                }
                for idx, player in enumerate(table.players)
            ],
            "labels": {
                "call": self.call_label(),
                "raise": self.raise_label(raise_text),
                "award": self.award_label(),
            },
        }
