from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from .engine import RoundEngine
from .models import ActionResult, Stage

LOGGER = logging.getLogger("pokerchips.console")

# HotSeatConsole is the terminal stand-in for the game screen: it renders the
# table and forwards each typed intent to the engine, nothing more.

HELP_LINES = [
    "  c         → call, or check when nothing is owed",
    "  r <n>     → raise <n> chips over the highest bet",
    "  f         → fold",
    "  w <seat>  → award the pot to <seat> and start the next hand",
    "  h         → show this help",
    "  q         → leave the table",
]


class HotSeatConsole:
    def __init__(
        self,
        engine: RoundEngine,
        input_fn: Optional[Callable[[str], str]] = None,
        print_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.engine = engine
        self.input_fn = input_fn or input
        self.print_fn = print_fn or print
        self.recent_events: Deque[str] = deque(maxlen=6)

    def run(self) -> None:
        self._record(self.engine.start_round())
        while True:
            self.render()
            try:
                line = self.input_fn("Action [c/r <n>/f/w <seat>](h=help): ")
            except EOFError:
                break
            if not self.handle_command(line):
                break
        self.print_fn("Session closed")

    def handle_command(self, line: str) -> bool:
        """Apply one typed command. Returns False when the user quits."""
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return True
        command = parts[0].lower()
        argument = parts[1] if len(parts) > 1 else ""

        if command == "q":
            return False
        if command == "h":
            self.print_fn("Options:")
            for entry in HELP_LINES:
                self.print_fn(entry)
            return True

        result: Optional[ActionResult] = None
        if command == "c":
            result = self.engine.call_or_check()
        elif command == "r":
            result = self.engine.raise_bet(argument)
        elif command == "f":
            result = self.engine.fold()
        elif command == "w":
            seat = self._parse_seat(argument)
            if seat is None:
                self.print_fn("Enter a seat number, e.g. 'w 1'")
                return True
            result = self.engine.award_pot(seat - 1)
        else:
            self.print_fn("Unknown command. Type h for help.")
            return True

        if not result.accepted:
            assert result.error is not None
            self.print_fn(f"Rejected: {result.error.value}")
            return True
        self._record(result.events)
        return True

    def render(self) -> None:
        snapshot = self.engine.snapshot()
        self.print_fn("")
        self.print_fn(f"=== Hand {snapshot['hand_number']} | Stage: {snapshot['stage_name']} ===")
        self.print_fn(f"Pot: {snapshot['pot']} ({self.engine.money(snapshot['pot'])})  Highest Bet: {snapshot['current_highest_bet']}")
        for player in snapshot["players"]:
            marker = ">" if player["seat"] == snapshot["current_player_index"] else " "
            tags = []
            if player["is_small_blind"]:
                tags.append("SB")
            if player["is_big_blind"]:
                tags.append("BB")
            tag_text = f" [{'/'.join(tags)}]" if tags else ""
            if player["is_folded"]:
                status = "Folded"
            else:
                status = f"{player['chips']} chips ({player['money']}) bet {player['current_bet']}"
            self.print_fn(f"{marker} {player['seat'] + 1}. {player['name']}{tag_text}: {status}")
        if self.recent_events:
            self.print_fn("Recent:")
            for entry in self.recent_events:
                self.print_fn(f"  {entry}")
        labels = snapshot["labels"]
        self.print_fn(f"[{labels['call']}] [{labels['raise']} <n>] [Fold] [{labels['award']}]")

    def _parse_seat(self, text: str) -> Optional[int]:
        try:
            return int(text.strip())
        except ValueError:
            return None

    def _record(self, events: List[Dict[str, object]]) -> None:
        for event in events:
            summary = self._describe(event)
            if summary:
                self.recent_events.append(summary)
                LOGGER.debug("event %s", event)

    def _describe(self, event: Dict[str, object]) -> Optional[str]:
        ev = event.get("ev")
        players = self.engine.players

        def name(key: str = "seat") -> str:
            return players[int(event[key])].name  # type: ignore[arg-type]

        if ev == "POST_BLINDS":
            return f"Blinds: {name('sb_seat')} {event['sb']}, {name('bb_seat')} {event['bb']}"
        if ev == "CHECK":
            return f"{name()} checks"
        if ev == "CALL":
            suffix = " (all-in)" if event.get("all_in") else ""
            return f"{name()} calls {event['amount']}{suffix}"
        if ev == "BET":
            suffix = " (all-in)" if event.get("all_in") else ""
            return f"{name()} raises to {event['total']}{suffix}"
        if ev == "FOLD":
            return f"{name()} folds"
        if ev == "STAGE":
            return f"Stage: {Stage(event['to']).display_name}"
        if ev == "SHOW_CARDS":
            return "Show your cards!"
        if ev == "POT_AWARD":
            return f"{name()} wins {event['amount']}"
        return None
