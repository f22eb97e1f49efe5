"""Chip-only poker table: blinds, bets, pot and stages without cards."""

from .console import HotSeatConsole
from .engine import RoundEngine, parse_raise_amount
from .lobby import DEFAULT_CONFIG, PRESET_CONFIG, build_players, rename_player, reset_config, validate_config
from .models import ActionError, ActionResult, ActionType, Player, Stage, Table, TableConfig
from .money import currency_string

__all__ = [
    "HotSeatConsole",
    "RoundEngine",
    "parse_raise_amount",
    "DEFAULT_CONFIG",
    "PRESET_CONFIG",
    "build_players",
    "rename_player",
    "reset_config",
    "validate_config",
    "ActionError",
    "ActionResult",
    "ActionType",
    "Player",
    "Stage",
    "Table",
    "TableConfig",
    "currency_string",
]
