import json
from collections.abc import Callable
from typing import Any

import pytest


def make_battle(**overrides: Any) -> dict[str, Any]:
    """Build a battle log document shaped like the game server's output."""
    battle: dict[str, Any] = {
        "winner": "Annika",
        "seed": [1, 2, 3, 4],
        "turns": 2,
        "p1": "Annika",
        "p2": "Zarel",
        "p1team": None,
        "p2team": None,
        "score": [1, 0],
        "inputLog": [
            '>start {"formatid":"gen8randombattle","seed":[1,2,3,4]}',
            '>player p1 {"name":"Annika","avatar":"lucas","rating":1500}',
            '>player p2 {"name":"Zarel","avatar":"dawn","rating":1400}',
            ">p1 move 1",
            ">chat Annika: good luck",
            ">p2 switch 3",
        ],
        "log": [
            "|j|☆Annika",
            "|j|☆Zarel",
            "|player|p1|Annika|lucas|1500",
            "|player|p2|Zarel|dawn|1400",
            "|c|☆Annika|glhf",
            "|c:|1605996304|☆Zarel|you too",
            "|inactive|Battle timer is ON: inactive players will automatically lose",
            "|switch|p1a: Annika|Pikachu, L84, M|100/100",
            "|move|p2a: zarel|Thunderbolt|p1a: Annika",
            "|-damage|p1a: Annika|40/100",
            "|-message|annika forfeited.",
            "|win|Annika",
        ],
        "p1rating": {"elo": 1500, "rpr": 1520},
        "p2rating": {"elo": 1400, "rpr": 1410},
        "roomid": "battle-gen8randombattle-1234567",
        "format": "Random Battle",
        "timestamp": "Sat Nov 21 2020 17:05:04 GMT-0500 (Eastern Standard Time)",
    }
    battle.update(overrides)
    return battle


@pytest.fixture()
def battle_factory() -> Callable[..., dict[str, Any]]:
    return make_battle


@pytest.fixture()
def raw_battle() -> str:
    return json.dumps(make_battle())
