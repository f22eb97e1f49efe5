from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from pokerchips.engine import RoundEngine
from pokerchips.models import ActionResult, Player, Stage, TableConfig


def create_engine(
    *,
    players: int = 4,
    starting_chips: int = 100,
    sb: int = 1,
    bb: int = 2,
    chip_value_cents: int = 10,
    stacks: Optional[Sequence[int]] = None,
    start: bool = True,
) -> RoundEngine:
    """Instantiate an engine with a seated table, blinds posted unless ``start`` is False."""
    if stacks is not None:
        players = len(stacks)
    config = TableConfig(
        players=players,
        chip_value_cents=chip_value_cents,
        small_blind=sb,
        big_blind=bb,
        starting_chips=starting_chips,
    )
    chips = list(stacks) if stacks is not None else [starting_chips] * players
    roster = [Player(name=f"Player{idx}", chips=chips[idx]) for idx in range(players)]
    engine = RoundEngine(config, roster)
    if start:
        engine.start_round()
    return engine


def perform_actions(engine: RoundEngine, actions: Iterable[Tuple[str, object]]) -> List[ActionResult]:
    """Apply a scripted sequence of (action, argument) pairs for whoever is to act."""
    results = []
    for action, argument in actions:
        if action == "call":
            results.append(engine.call_or_check())
        elif action == "raise":
            results.append(engine.raise_bet(argument))  # type: ignore[arg-type]
        elif action == "fold":
            results.append(engine.fold())
        elif action == "award":
            results.append(engine.award_pot(argument))  # type: ignore[arg-type]
        else:
            raise ValueError(f"Unsupported action {action}")
    return results


def drive_to_stage(engine: RoundEngine, stage: Stage, limit: int = 100) -> None:
    """Call/check around the table until ``stage`` is reached."""
    for _ in range(limit):
        if engine.stage == stage:
            return
        engine.call_or_check()
    raise AssertionError(f"stage {stage} not reached, stuck at {engine.stage}")


def event_names(result: ActionResult) -> List[object]:
    return [event["ev"] for event in result.events]
