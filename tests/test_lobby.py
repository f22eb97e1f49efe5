from dataclasses import replace

import pytest

from pokerchips.lobby import (
    DEFAULT_CONFIG,
    PRESET_CONFIG,
    build_players,
    rename_player,
    reset_config,
    validate_config,
)
from pokerchips.models import TableConfig


def test_default_config_builds_two_named_players():
    players = build_players(DEFAULT_CONFIG)
    assert [p.name for p in players] == ["Player 1", "Player 2"]
    assert [p.chips for p in players] == [100, 100]


def test_resizing_keeps_existing_players_and_refills_stacks():
    players = build_players(TableConfig(players=2))
    rename_player(players, 0, "Alice")
    players[1].chips = 7
    original_ids = [p.id for p in players]

    resized = build_players(TableConfig(players=4, starting_chips=500), previous=players)

    assert [p.id for p in resized[:2]] == original_ids
    assert resized[0].name == "Alice"
    assert [p.chips for p in resized] == [500, 500, 500, 500]
    assert [p.name for p in resized[2:]] == ["Player 3", "Player 4"]
    assert len({p.id for p in resized}) == 4


def test_shrinking_drops_trailing_seats():
    players = build_players(TableConfig(players=5))
    resized = build_players(TableConfig(players=3), previous=players)
    assert [p.id for p in resized] == [p.id for p in players[:3]]


def test_rename_requires_a_name():
    players = build_players(DEFAULT_CONFIG)
    with pytest.raises(ValueError, match="NAME_REQUIRED"):
        rename_player(players, 1, "   ")
    assert rename_player(players, 1, "  Bob ").name == "Bob"


def test_reset_config_returns_fresh_preset():
    config = reset_config()
    assert config == PRESET_CONFIG
    assert config is not PRESET_CONFIG
    assert (config.players, config.chip_value_cents, config.small_blind, config.big_blind, config.starting_chips) == (
        4,
        25,
        50,
        100,
        1_000,
    )


@pytest.mark.parametrize(
    "changes, code",
    [
        ({"players": 1}, "PLAYER_COUNT"),
        ({"players": 11}, "PLAYER_COUNT"),
        ({"chip_value_cents": 0}, "CHIP_VALUE"),
        ({"chip_value_cents": 101}, "CHIP_VALUE"),
        ({"small_blind": -1}, "BLIND_AMOUNT"),
        ({"starting_chips": 50}, "STARTING_CHIPS"),
    ],
)
def test_validate_config_rejects_out_of_range_values(changes, code):
    with pytest.raises(ValueError, match=code):
        validate_config(replace(DEFAULT_CONFIG, **changes))
